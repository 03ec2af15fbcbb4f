#!/usr/bin/env python3
"""HTTP client for the mail-events server."""

from __future__ import annotations

import asyncio
import http.client
import json
import webbrowser
from dataclasses import dataclass
from http.cookiejar import CookieJar
from typing import Any, Generic, Optional, Tuple, TypeVar
from urllib.error import HTTPError, URLError
import urllib.request

from log import get_logger
from models import (
    DEFAULT_USER,
    Event,
    UserInfo,
    ValidationError,
    normalize_event_list,
    normalize_user_payload,
)

log = get_logger("api")

EVENTS_PATH = "/api/events"
SYNC_PATH = "/api/events/sync"
USER_PATH = "/api/user"
LOGOUT_PATH = "/logout"
LOGIN_PATH = "/login/google"

T = TypeVar("T")


@dataclass(frozen=True)
class ApiResult(Generic[T]):
    """Outcome of one API call: the value to use plus the failure, if any."""

    value: T
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


class ApiError(RuntimeError):
    """Raised by the transport when a call fails at the HTTP or network level."""

    def __init__(self, message: str, status_code: Optional[int] = None, body: str = "") -> None:
        self.status_code = status_code
        self.body = body
        super().__init__(message)

    @classmethod
    def from_http_error(cls, exc: HTTPError) -> "ApiError":
        try:
            body = exc.read().decode("utf-8", errors="replace") if exc.fp else ""
        except OSError:
            body = ""
        snippet = (body or exc.reason or "Unknown error")
        snippet = str(snippet).strip()
        if len(snippet) > 200:
            snippet = snippet[:200] + "..."
        return cls(f"{exc.code} {snippet}", status_code=exc.code, body=body)


class ApiClient:
    """Thin wrapper around the events server's HTTP surface.

    Every public coroutine is total: transport failures come back as an
    ``ApiResult`` carrying the fallback value and an error description.
    """

    def __init__(
        self,
        base_url: str,
        *,
        session_cookie: Optional[str] = None,
        timeout: float = 10.0,
        opener: Any = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.session_cookie = session_cookie
        self.timeout = timeout
        self.cookies = CookieJar()
        self._opener = opener or urllib.request.build_opener(
            urllib.request.HTTPCookieProcessor(self.cookies)
        )

    def url_for(self, path: str) -> str:
        return f"{self.base_url}{path}"

    def _request(self, method: str, path: str) -> bytes:
        headers = {"Accept": "application/json"}
        if self.session_cookie:
            headers["Cookie"] = self.session_cookie
        req = urllib.request.Request(
            self.url_for(path),
            data=b"" if method == "POST" else None,
            headers=headers,
            method=method,
        )
        try:
            with self._opener.open(req, timeout=self.timeout) as resp:
                return resp.read()
        except HTTPError as exc:
            raise ApiError.from_http_error(exc) from exc
        except URLError as exc:
            raise ApiError(f"Network error calling {path}: {exc.reason}") from exc
        except OSError as exc:
            raise ApiError(f"Network error calling {path}: {exc}") from exc
        except http.client.HTTPException as exc:
            raise ApiError(f"Protocol error calling {path}: {exc!r}") from exc

    def _request_json(self, method: str, path: str) -> Any:
        raw = self._request(method, path)
        try:
            return json.loads(raw.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as exc:
            raise ApiError(f"Invalid JSON from {path}: {exc}") from exc

    def _fetch_events(self) -> Tuple[Event, ...]:
        payload = self._request_json("GET", EVENTS_PATH)
        try:
            return normalize_event_list(payload)
        except ValidationError as exc:
            raise ApiError(f"Unexpected events payload: {exc}") from exc

    def _fetch_user(self) -> UserInfo:
        payload = self._request_json("GET", USER_PATH)
        try:
            return normalize_user_payload(payload)
        except ValidationError as exc:
            raise ApiError(f"Unexpected user payload: {exc}") from exc

    async def list_events(self) -> ApiResult[Tuple[Event, ...]]:
        try:
            events = await asyncio.to_thread(self._fetch_events)
        except ApiError as exc:
            log.warning("Error fetching events: %s", exc)
            return ApiResult((), str(exc))
        log.debug("Fetched %d events", len(events))
        return ApiResult(events)

    async def get_user_info(self) -> ApiResult[UserInfo]:
        try:
            user = await asyncio.to_thread(self._fetch_user)
        except ApiError as exc:
            log.warning("Error fetching user info: %s", exc)
            return ApiResult(DEFAULT_USER, str(exc))
        return ApiResult(user)

    async def trigger_sync(self) -> ApiResult[None]:
        try:
            await asyncio.to_thread(self._request, "POST", SYNC_PATH)
        except ApiError as exc:
            log.warning("Error triggering sync: %s", exc)
            return ApiResult(None, str(exc))
        return ApiResult(None)

    async def logout(self) -> ApiResult[None]:
        try:
            await asyncio.to_thread(self._request, "POST", LOGOUT_PATH)
        except ApiError as exc:
            log.warning("Error logging out: %s", exc)
            return ApiResult(None, str(exc))
        self.cookies.clear()
        return ApiResult(None)

    def initiate_google_login(self) -> None:
        url = self.url_for(LOGIN_PATH)
        log.info("Opening browser login at %s", url)
        webbrowser.open(url)


__all__ = [
    "ApiClient",
    "ApiResult",
    "ApiError",
    "EVENTS_PATH",
    "SYNC_PATH",
    "USER_PATH",
    "LOGOUT_PATH",
    "LOGIN_PATH",
]
