"""Wrapper de httpx para la CMA de DatoCMS.

Por qué un wrapper:
- Estandariza timeouts, headers JSON:API, reintentos y logging.
- Traduce respuestas no-2xx a `ApiError` para que los recursos sean proxies
  de una sola línea.
- Facilita testeo: se puede inyectar un `httpx.MockTransport`.
"""

from __future__ import annotations

import asyncio
import logging
import random
import time
from typing import Any, Awaitable, Callable, Mapping
from urllib.parse import quote

import httpx

from datocms_cma.core.config import ClientSettings
from datocms_cma.core.domain.models import JobResult
from datocms_cma.core.errors import (
    ApiConnectionError,
    ApiError,
    ApiTimeoutError,
    ConfigurationError,
    JobTimeoutError,
    RateLimitError,
)
from datocms_cma.core.jsonapi import deserialize_resource

logger = logging.getLogger(__name__)

JSONAPI_CONTENT_TYPE = "application/vnd.api+json"
API_VERSION = "3"

# 422 que la API pide reintentar más tarde.
_RETRYABLE_422_CODES = frozenset({"BATCH_DATA_VALIDATION_IN_PROGRESS"})

# Métodos que se pueden reenviar aunque el servidor ya haya recibido la request.
_IDEMPOTENT_METHODS = frozenset({"GET", "HEAD", "OPTIONS", "PUT", "DELETE"})

# Fallos en los que la request nunca salió del cliente.
_NOT_SENT_ERRORS = (httpx.ConnectError, httpx.ConnectTimeout, httpx.PoolTimeout)


def build_async_client(
    settings: ClientSettings | None = None,
    *,
    extra_headers: dict[str, str] | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """Crea un `httpx.AsyncClient` apuntando a la CMA.

    Por qué un builder:
    - Centraliza base_url/timeouts/headers para que todos los recursos se
      comporten igual.
    - El `Authorization` no va aquí: se añade por request porque
      `/public-info` no debe recibir credenciales.
    """

    settings = settings or ClientSettings()
    headers: dict[str, str] = {
        "User-Agent": settings.user_agent,
        "Accept": "application/json",
        "Content-Type": JSONAPI_CONTENT_TYPE,
        "X-Api-Version": API_VERSION,
    }
    if settings.environment:
        headers["X-Environment"] = settings.environment
    if extra_headers:
        headers.update(extra_headers)
    return httpx.AsyncClient(
        base_url=settings.base_url.rstrip("/"),
        timeout=httpx.Timeout(settings.http_timeout_seconds),
        headers=headers,
        transport=transport,
    )


def _retry_after_seconds(response: httpx.Response) -> float | None:
    value = response.headers.get("x-ratelimit-reset") or response.headers.get("retry-after")
    if not value:
        return None
    try:
        return max(0.0, float(value))
    except ValueError:
        return None


def _can_resend(method: str, exc: httpx.TransportError) -> bool:
    """Un POST solo se reenvía si la request no llegó a enviarse."""

    if method.upper() in _IDEMPOTENT_METHODS:
        return True
    return isinstance(exc, _NOT_SENT_ERRORS)


def _decode_body(response: httpx.Response) -> Any:
    if response.status_code == 204 or not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return response.text


class CmaHttpClient:
    """Ejecuta requests contra la CMA con la política de reintentos.

    Reintenta:
    - 429 (espera `X-RateLimit-Reset` si viene, si no backoff exponencial),
    - 503 y errores de transporte (en POST solo si la request no se envió),
    - 422 con `BATCH_DATA_VALIDATION_IN_PROGRESS`.
    """

    def __init__(
        self,
        settings: ClientSettings | None = None,
        *,
        client: httpx.AsyncClient | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    ) -> None:
        self._settings = settings or ClientSettings()
        self._client = client or build_async_client(self._settings, transport=transport)
        self._sleep = sleep

    @property
    def settings(self) -> ClientSettings:
        return self._settings

    async def aclose(self) -> None:
        await self._client.aclose()

    def _auth_headers(self, authenticated: bool) -> dict[str, str]:
        if not authenticated:
            return {}
        if not self._settings.api_token:
            raise ConfigurationError(
                "Missing API token: set DATOCMS_API_TOKEN or pass api_token explicitly."
            )
        return {"Authorization": f"Bearer {self._settings.api_token}"}

    def _backoff(self, attempt: int, retry_after: float | None = None) -> float:
        base = retry_after if retry_after is not None else (1.25 * (2**attempt))
        return base + random.uniform(0.0, 0.35)

    def _retry_delay(self, error: ApiError, response: httpx.Response, attempt: int) -> float | None:
        if error.status_code == 429:
            return self._backoff(attempt, _retry_after_seconds(response))
        if error.status_code == 503:
            return self._backoff(attempt)
        if error.status_code == 422 and error.find_error(_RETRYABLE_422_CODES):
            return self._backoff(attempt)
        return None

    def _build_error(self, method: str, response: httpx.Response) -> ApiError:
        error_cls = RateLimitError if response.status_code == 429 else ApiError
        return error_cls(
            status_code=response.status_code,
            method=method,
            url=str(response.request.url),
            body=_decode_body(response),
            headers=response.headers,
        )

    async def request(
        self,
        method: str,
        path: str,
        *,
        query: Mapping[str, Any] | None = None,
        body: Mapping[str, Any] | None = None,
        authenticated: bool = True,
    ) -> Any:
        headers = self._auth_headers(authenticated)
        params = {k: v for k, v in (query or {}).items() if v is not None}

        attempt = 0
        while True:
            started = time.monotonic()
            try:
                response = await self._client.request(
                    method,
                    path,
                    params=params or None,
                    json=body,
                    headers=headers,
                )
            except httpx.TransportError as exc:
                if attempt >= self._settings.max_retries or not _can_resend(method, exc):
                    if isinstance(exc, httpx.TimeoutException):
                        raise ApiTimeoutError(f"{method} {path}: timed out") from exc
                    raise ApiConnectionError(f"{method} {path}: {exc}") from exc
                delay = self._backoff(attempt)
                logger.warning("%s %s failed (%s), retrying in %.2fs", method, path, exc, delay)
                await self._sleep(delay)
                attempt += 1
                continue

            elapsed = time.monotonic() - started
            logger.debug("%s %s -> %s (%.3fs)", method, path, response.status_code, elapsed)

            if response.is_success:
                return _decode_body(response)

            error = self._build_error(method, response)
            delay = self._retry_delay(error, response, attempt)
            if delay is None or attempt >= self._settings.max_retries:
                raise error

            logger.warning(
                "%s %s -> %s, retrying in %.2fs (attempt %d/%d)",
                method,
                path,
                response.status_code,
                delay,
                attempt + 1,
                self._settings.max_retries,
            )
            await self._sleep(delay)
            attempt += 1

    async def wait_for_job(self, job_id: str) -> Any:
        """Consulta `/job-results/{id}` hasta que el job termina.

        - 404: el job sigue en curso.
        - `status` >= 400 en el resultado: se lanza como `ApiError`.
        """

        path = f"/job-results/{quote(str(job_id), safe='')}"
        interval = self._settings.job_poll_interval_seconds
        timeout = self._settings.job_timeout_seconds
        waited = 0.0

        while True:
            try:
                document = await self.request("GET", path)
            except ApiError as exc:
                if exc.status_code != 404:
                    raise
            else:
                result = JobResult.model_validate(deserialize_resource(document["data"]))
                logger.info("Job %s finished with status %s", job_id, result.status)
                if result.status >= 400:
                    raise ApiError(
                        status_code=result.status,
                        method="GET",
                        url=path,
                        body=result.payload,
                    )
                return result.payload

            if waited >= timeout:
                raise JobTimeoutError(str(job_id), waited)
            logger.info("Job %s still running (%.0fs elapsed)", job_id, waited)
            await self._sleep(interval)
            waited += interval
