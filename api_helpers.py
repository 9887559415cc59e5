import time
from dataclasses import dataclass, field
from typing import Any, Mapping, Optional

import httpx

import settings
from exceptions import AssertionFailure, TransportFailure
from logging_helper import log_status, log_request


@dataclass
class ApiResponse:
    status: int
    body: Any
    headers: Mapping[str, str] = field(default_factory=dict)
    text: str = ""
    url: str = ""

    @classmethod
    def from_httpx(cls, response: httpx.Response) -> "ApiResponse":
        try:
            body = response.json()
        except ValueError:
            # not JSON (empty body, HTML error page...) -> keep the raw text
            body = response.text
        return cls(
            status=response.status_code,
            body=body,
            headers=response.headers,
            text=response.text,
            url=str(response.url),
        )


def build_query(params: Optional[Mapping[str, Any]]) -> dict[str, str]:
    """Drop unset params and stringify the rest (lists become comma separated)."""
    query = {}
    for key, value in (params or {}).items():
        if value is None:
            continue
        if isinstance(value, (list, tuple)):
            value = ",".join(str(v) for v in value)
        query[key] = str(value)
    return query


class ApiSession:
    """
    Synchronous transport for the product API.

    - one httpx.Client per session (connection reuse), closed with close()
    - never raises on non-2xx unless fail_on_status_code=True, so tests can
      assert on error responses directly
    - no retries: a connection error or timeout becomes TransportFailure
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        headers: Optional[Mapping[str, str]] = None,
        transport: Optional[httpx.BaseTransport] = None,
        timeout: float = settings.DEFAULT_TIMEOUT,
    ):
        self.base_url = (base_url or settings.API_URL).rstrip("/")
        self.headers = {**settings.HEADERS, **(headers or {})}
        self.client = httpx.Client(
            base_url=self.base_url,
            headers=self.headers,
            transport=transport,
            timeout=timeout,
        )

    def request(
        self,
        method: str,
        url: str,
        body: Any = None,
        headers: Optional[Mapping[str, str]] = None,
        params: Optional[Mapping[str, Any]] = None,
        fail_on_status_code: bool = False,
        timeout: float = settings.REQUEST_TIMEOUT,
    ) -> ApiResponse:
        kwargs: dict[str, Any] = {
            "headers": dict(headers or {}),
            "params": build_query(params),
            "timeout": timeout,
        }
        if body is not None:
            kwargs["json"] = body

        started = time.perf_counter()
        try:
            raw = self.client.request(method.upper(), url, **kwargs)
        except httpx.TimeoutException as exc:
            log_status("error", f"{method.upper()} {url} timed out after {timeout}s")
            raise TransportFailure(method, url, f"timed out after {timeout}s") from exc
        except httpx.RequestError as exc:
            log_status("error", f"Request error with {method.upper()} {url}: ", str(exc))
            raise TransportFailure(method, url, str(exc)) from exc

        response = ApiResponse.from_httpx(raw)
        log_request(method, response.url, response.status, (time.perf_counter() - started) * 1000)

        if fail_on_status_code and response.status >= 400:
            raise AssertionFailure(
                f"{method.upper()} {url} returned {response.status}. Body: {response.text}"
            )
        return response

    def close(self) -> None:
        self.client.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()


_default_session: Optional[ApiSession] = None


def set_session(session: Optional[ApiSession]) -> None:
    global _default_session
    _default_session = session


def get_session() -> ApiSession:
    global _default_session
    if _default_session is None:
        _default_session = ApiSession()
    return _default_session


def make_request(method, url, body=None, headers=None, params=None, fail_on_status_code=False):
    return get_session().request(
        method,
        url,
        body=body,
        headers=headers,
        params=params,
        fail_on_status_code=fail_on_status_code,
    )
