"""
apisuite/core/exceptions.py - Error types raised by the suite
"""

from typing import Any, Optional


class APISuiteError(Exception):
    """Base class for suite errors"""


class APIRequestError(APISuiteError):
    """A validated request ended with a non-success status"""

    def __init__(
        self,
        method: str,
        endpoint: str,
        status: int,
        response_body: Any = None,
        attempts: int = 1,
    ):
        self.method = method
        self.endpoint = endpoint
        self.status = status
        self.response_body = response_body
        self.attempts = attempts
        super().__init__(f"API request failed: {method} {endpoint} ({status})")


class ClientError(APIRequestError):
    """4xx response. Never retried."""


class ServerError(APIRequestError):
    """5xx response that outlived every retry attempt"""


class ScenarioTimeoutError(APISuiteError):
    """Scenario exceeded the configured wall clock limit"""

    def __init__(self, seconds: float, scenario_name: Optional[str] = None):
        self.seconds = seconds
        self.scenario_name = scenario_name
        target = f"Scenario '{scenario_name}'" if scenario_name else "Scenario"
        super().__init__(f"{target} timed out after {seconds:g}s")


class ConfigError(APISuiteError):
    """Invalid configuration value"""


class ReportError(APISuiteError):
    """HTML report could not be produced"""
