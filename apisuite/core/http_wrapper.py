"""
apisuite/core/http_wrapper.py - Logging, validating and retrying request wrapper

Wraps a requests Session so that every outbound call is:
- logged with method, endpoint, status and request body
- retried with linear backoff on 5xx responses and transport errors
- failed fast on 4xx responses (client errors are not transient)

The *_unvalidated variants skip all of the above and hand the raw response
back, so negative scenarios can assert on arbitrary status codes.
"""

import json
import logging
import time
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional

import requests  # type: ignore

from .exceptions import ClientError, ServerError

logger = logging.getLogger(__name__)

_RULE = "━" * 58


class APIRequestWrapper:
    """Wrapper for requests.Session that logs, validates and retries requests"""

    def __init__(
        self,
        session: requests.Session,
        max_retries: int = 1,
        retry_delay: float = 1.0,
        timeout: Optional[float] = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.session = session
        self.max_retries = max(1, int(max_retries))
        self.retry_delay = retry_delay
        self.timeout = timeout
        self._sleep = sleep
        self.exchanges: List[Dict[str, Any]] = []

    # Validated verbs

    def get(self, url: str) -> requests.Response:
        return self._execute_with_retry("GET", url)

    def post(self, url: str, data: Any = None) -> requests.Response:
        return self._execute_with_retry("POST", url, data)

    def put(self, url: str, data: Any = None) -> requests.Response:
        return self._execute_with_retry("PUT", url, data)

    def patch(self, url: str, data: Any = None) -> requests.Response:
        return self._execute_with_retry("PATCH", url, data)

    def delete(self, url: str) -> requests.Response:
        return self._execute_with_retry("DELETE", url)

    # For negative testing - raw response, no retry, no status check

    def get_unvalidated(self, url: str) -> requests.Response:
        return self._send("GET", url, None, attempt=1)

    def post_unvalidated(self, url: str, data: Any = None) -> requests.Response:
        return self._send("POST", url, data, attempt=1)

    def put_unvalidated(self, url: str, data: Any = None) -> requests.Response:
        return self._send("PUT", url, data, attempt=1)

    def _send(
        self, method: str, url: str, data: Any, attempt: int
    ) -> requests.Response:
        """Issue one request and record it in the exchange trace"""
        record: Dict[str, Any] = {
            "method": method,
            "url": url,
            "attempt": attempt,
            "status": None,
            "request_body": data,
            "response_body": None,
            "error": None,
            "elapsed_ms": None,
            "timestamp": datetime.now().isoformat(),
        }
        self.exchanges.append(record)

        kwargs: Dict[str, Any] = {"timeout": self.timeout}
        if data is not None:
            kwargs["json"] = data

        started = time.monotonic()
        try:
            response = self.session.request(method, url, **kwargs)
        except requests.RequestException as e:
            record["error"] = f"{type(e).__name__}: {e}"
            raise
        finally:
            record["elapsed_ms"] = round((time.monotonic() - started) * 1000, 1)

        record["status"] = response.status_code
        record["response_body"] = _response_body(response)
        return response

    def _execute_with_retry(
        self, method: str, endpoint: str, request_body: Any = None
    ) -> requests.Response:
        for attempt in range(1, self.max_retries + 1):
            try:
                response = self._send(method, endpoint, request_body, attempt)
            except requests.RequestException as e:
                if attempt >= self.max_retries:
                    logger.error(
                        f"❌ All {self.max_retries} attempts failed: {method} {endpoint}"
                    )
                    raise
                logger.warning(
                    f"⚠️  Network error ({type(e).__name__}), "
                    f"retrying ({attempt}/{self.max_retries})..."
                )
                self._backoff(attempt)
                continue

            status = response.status_code
            logger.info(_format_attempt(method, endpoint, status, request_body, attempt))

            if status >= 500:
                if attempt < self.max_retries:
                    logger.warning(
                        f"⚠️  Server error {status}, retrying ({attempt}/{self.max_retries})..."
                    )
                    self._backoff(attempt)
                    continue
                self._log_error(response, method, endpoint, status, request_body)
                raise ServerError(
                    method, endpoint, status, _response_body(response), attempts=attempt
                )

            # Client errors are not transient
            if status >= 400:
                self._log_error(response, method, endpoint, status, request_body)
                raise ClientError(
                    method, endpoint, status, _response_body(response), attempts=attempt
                )

            return response

        raise RuntimeError(f"No attempt made for {method} {endpoint}")

    def _backoff(self, attempt: int) -> None:
        self._sleep(self.retry_delay * attempt)

    def _log_error(
        self,
        response: requests.Response,
        method: str,
        endpoint: str,
        status: int,
        request_body: Any = None,
    ) -> None:
        lines = [
            "",
            _RULE,
            "❌ API REQUEST FAILED",
            _RULE,
            f"Method:   {method}",
            f"Endpoint: {endpoint}",
            f"Status:   {status}",
        ]
        if request_body is not None:
            lines.append(f"Request:  {json.dumps(request_body, indent=2, default=str)}")
        lines.append(
            f"Response: {json.dumps(_response_body(response), indent=2, default=str)}"
        )
        lines.append(_RULE)
        logger.error("\n".join(lines))


def _format_attempt(
    method: str, endpoint: str, status: int, request_body: Any, attempt: int
) -> str:
    message = f"[{method}] {endpoint} → {status}"
    if request_body is not None:
        message += f" | Body: {json.dumps(request_body, default=str)}"
    if attempt > 1:
        message += f" (retry {attempt - 1})"
    return message


def _response_body(response: requests.Response) -> Any:
    """JSON body if the response has one, else the raw text"""
    try:
        return response.json()
    except ValueError:
        return response.text
