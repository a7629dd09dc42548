import asyncio
import threading
from typing import Any, Awaitable, Callable, Optional

import httpx

from .config import ClientConfig, get_logger, setup_logging
from .core.errors import error_from_response, normalize_error
from .core.utils import (
    build_auth_headers,
    build_default_headers,
    calculate_retry_delay,
    clean_params,
    should_retry_request,
)
from .models import ApiResponse, RequestOptions, RetryPolicy

SleepFunc = Callable[[float], Awaitable[Any]]


class HttpClient:
    """
    Transport client for the Posty5 API.

    Owns the base URL, API key, default timeout and retry policy. Every
    verb method either returns the unwrapped ``result`` of the response
    envelope (None when the server omitted it) or raises a Posty5Error.

    Example:
        >>> async with HttpClient(ClientConfig(api_key="your-key")) as http:
        ...     link = await http.get("/api/short-link/abc123")
    """

    def __init__(
        self,
        config: Optional[ClientConfig] = None,
        *,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        sleep: SleepFunc = asyncio.sleep,
    ):
        self._config = config or ClientConfig()
        self._config_lock = threading.Lock()
        self._sleep = sleep
        self.logger = get_logger("http")

        if self._config.debug:
            setup_logging(self._config.log_level)

        self._client = httpx.AsyncClient(
            base_url=self._config.base_url.rstrip("/"),
            timeout=httpx.Timeout(self._config.timeout),
            headers=build_default_headers(self._config.headers),
            transport=transport,
        )

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def close(self):
        await self._client.aclose()

    @property
    def config(self) -> ClientConfig:
        with self._config_lock:
            return self._config

    def set_api_key(self, api_key: str) -> None:
        """Replace the API key used by calls started after this returns."""
        with self._config_lock:
            self._config = self._config.with_api_key(api_key)

    def clear_auth(self) -> None:
        with self._config_lock:
            self._config = self._config.with_api_key(None)

    async def get(self, path: str, options: Optional[RequestOptions] = None) -> Any:
        response = await self.request("GET", path, options=options)
        return response.result

    async def post(
        self, path: str, json: Any = None, options: Optional[RequestOptions] = None
    ) -> Any:
        response = await self.request("POST", path, json=json, options=options)
        return response.result

    async def put(
        self, path: str, json: Any = None, options: Optional[RequestOptions] = None
    ) -> Any:
        response = await self.request("PUT", path, json=json, options=options)
        return response.result

    async def patch(
        self, path: str, json: Any = None, options: Optional[RequestOptions] = None
    ) -> Any:
        response = await self.request("PATCH", path, json=json, options=options)
        return response.result

    async def delete(self, path: str, options: Optional[RequestOptions] = None) -> Any:
        response = await self.request("DELETE", path, options=options)
        return response.result

    async def request(
        self,
        method: str,
        path: str,
        *,
        json: Any = None,
        options: Optional[RequestOptions] = None,
    ) -> ApiResponse:
        """Send one logical request, retrying transient failures."""
        options = options or RequestOptions()
        config = self.config
        policy = options.retry or RetryPolicy(config.max_retries, config.retry_delay)
        headers = build_auth_headers(config.api_key, options.headers)
        params = clean_params(options.params)
        timeout = (
            options.timeout if options.timeout is not None else httpx.USE_CLIENT_DEFAULT
        )

        if config.debug:
            self.logger.info("Request: %s %s params=%s", method, path, params)

        attempt = 0
        while True:
            try:
                response = await self._client.request(
                    method,
                    path,
                    json=json,
                    params=params or None,
                    headers=headers,
                    timeout=timeout,
                )
            except Exception as e:
                if should_retry_request(attempt, policy.max_retries, exception=e):
                    attempt += 1
                    await self._backoff(attempt, policy, method, path, e)
                    continue
                error = normalize_error(e)
                if config.debug:
                    self.logger.info("Error: %s %s -> %s", method, path, error.message)
                raise error from e

            status_code = response.status_code
            if 200 <= status_code < 300:
                break

            if should_retry_request(attempt, policy.max_retries, status_code=status_code):
                attempt += 1
                await self._backoff(attempt, policy, method, path, status_code)
                continue

            error = error_from_response(response, f"HTTP {status_code}")
            if config.debug:
                self.logger.info(
                    "Error: %s %s -> %s %s", method, path, status_code, error.details
                )
            raise error

        payload = self._decode(response)
        if config.debug:
            self.logger.info("Response: %s %s", status_code, payload)
        return ApiResponse.from_payload(payload, status_code)

    async def _backoff(
        self, attempt: int, policy: RetryPolicy, method: str, path: str, cause: Any
    ) -> None:
        delay = calculate_retry_delay(attempt, policy.base_delay)
        self.logger.debug(
            "Retrying %s %s (%d/%d) in %.2fs after %s",
            method,
            path,
            attempt,
            policy.max_retries,
            delay,
            cause,
        )
        await self._sleep(delay)

    @staticmethod
    def _decode(response: httpx.Response) -> Any:
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError:
            return None
