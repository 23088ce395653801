"""
apisuite/fixtures.py - Per-scenario resources

Each scenario gets its own authenticated requests Session (own cookies and
headers) wrapped in an APIClient. The session is closed when the scenario
ends, on every exit path.
"""

import logging
import signal
import threading
from contextlib import contextmanager
from typing import Iterator, Optional

import requests  # type: ignore
from behave import fixture

from apisuite.core.api_client import APIClient
from apisuite.core.exceptions import ScenarioTimeoutError
from config.settings import SuiteConfig, get_config

logger = logging.getLogger(__name__)


def create_authenticated_session(token: str) -> requests.Session:
    """Session that sends the bearer token on every request"""
    session = requests.Session()
    session.headers.update(
        {
            "Authorization": f"Bearer {token}",
            "Accept": "application/json",
        }
    )
    return session


@contextmanager
def api_client_context(
    settings: Optional[type[SuiteConfig]] = None,
    base_url: Optional[str] = None,
) -> Iterator[APIClient]:
    """Yield an APIClient on a fresh authenticated session, closing it afterwards"""
    settings = settings or get_config()
    session = create_authenticated_session(settings.AUTH_TOKEN())
    client = APIClient(
        session,
        base_url or settings.BASE_URL(),
        max_retries=settings.MAX_RETRIES(),
        retry_delay=settings.RETRY_DELAY(),
        timeout=settings.REQUEST_TIMEOUT(),
    )
    try:
        yield client
    finally:
        # Release connections and cookies held by this scenario
        session.close()
        logger.debug(f"Closed API session for {client.base_url}")


@fixture
def api_client_fixture(
    context,
    settings: Optional[type[SuiteConfig]] = None,
    base_url: Optional[str] = None,
):
    """Behave fixture: provides context.api_client for one scenario."""
    with api_client_context(settings, base_url=base_url) as client:
        context.api_client = client
        yield client


class ScenarioTimer:
    """
    Wall clock limit for a single scenario

    Uses SIGALRM, so it only arms on platforms that have it and only from the
    main thread. Elsewhere start() is a no-op and returns False.
    """

    def __init__(self, seconds: float, scenario_name: Optional[str] = None):
        self.seconds = seconds
        self.scenario_name = scenario_name
        self.active = False
        self._previous_handler = None

    @staticmethod
    def supported() -> bool:
        return (
            hasattr(signal, "SIGALRM")
            and threading.current_thread() is threading.main_thread()
        )

    def start(self) -> bool:
        if self.seconds <= 0 or not self.supported():
            return False
        self._previous_handler = signal.signal(signal.SIGALRM, self._expire)
        signal.setitimer(signal.ITIMER_REAL, self.seconds)
        self.active = True
        return True

    def cancel(self) -> None:
        if not self.active:
            return
        signal.setitimer(signal.ITIMER_REAL, 0)
        signal.signal(signal.SIGALRM, self._previous_handler or signal.SIG_DFL)
        self.active = False

    def _expire(self, signum, frame):
        self.cancel()
        raise ScenarioTimeoutError(self.seconds, self.scenario_name)
