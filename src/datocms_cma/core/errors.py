"""Taxonomía de errores del cliente.

Por qué una jerarquía propia:
- Los consumidores capturan `ApiError` sin conocer httpx.
- Los errores JSON:API de DatoCMS (`api_error` con `code` y `details`) se
  exponen ya parseados para poder decidir por código (`INVALID_FIELD`...).
"""

from __future__ import annotations

from typing import Any, Iterable, Mapping

from pydantic import ValidationError

from datocms_cma.core.domain.models import ApiErrorEntity


class DatoCMSError(Exception):
    """Base de todos los errores del cliente."""


class ConfigurationError(DatoCMSError):
    """Falta configuración imprescindible (p.ej. el API token)."""


class ApiTimeoutError(DatoCMSError):
    """La petición superó el timeout (tras los reintentos permitidos)."""


class ApiConnectionError(DatoCMSError):
    """No se pudo hablar con la API (conexión rechazada, DNS, socket cortado...)."""


class JobTimeoutError(DatoCMSError):
    """Un job asíncrono no terminó dentro de `job_timeout_seconds`."""

    def __init__(self, job_id: str, waited_seconds: float) -> None:
        super().__init__(f"Job {job_id} did not complete after {waited_seconds:.0f}s")
        self.job_id = job_id
        self.waited_seconds = waited_seconds


def parse_error_entities(body: object) -> list[ApiErrorEntity]:
    """Convierte un documento de error JSON:API en `ApiErrorEntity`.

    Formato esperado:
        {"data": [{"id": "...", "type": "api_error",
                   "attributes": {"code": "...", "details": {...}}}]}

    Entradas que no encajan se ignoran: el cuerpo crudo sigue disponible en
    `ApiError.body`.
    """

    if not isinstance(body, dict):
        return []
    data = body.get("data")
    if not isinstance(data, list):
        return []

    out: list[ApiErrorEntity] = []
    for item in data:
        if not isinstance(item, dict):
            continue
        attributes = item.get("attributes")
        if not isinstance(attributes, dict):
            continue
        try:
            out.append(
                ApiErrorEntity(
                    id=item.get("id"),
                    type=item.get("type") or "api_error",
                    **attributes,
                )
            )
        except ValidationError:
            continue
    return out


class ApiError(DatoCMSError):
    """Respuesta no-2xx de la CMA (422 validación, 403 permisos, 404...)."""

    def __init__(
        self,
        *,
        status_code: int,
        method: str,
        url: str,
        body: object = None,
        headers: Mapping[str, str] | None = None,
    ) -> None:
        self.status_code = status_code
        self.method = method.upper()
        self.url = url
        self.body = body
        self.headers: dict[str, str] = dict(headers or {})
        self.errors = parse_error_entities(body)
        super().__init__(self._build_message())

    def _build_message(self) -> str:
        msg = f"{self.method} {self.url}: {self.status_code}"
        if self.errors:
            codes = ", ".join(e.code for e in self.errors)
            msg += f" ({codes})"
        return msg

    def find_error(
        self,
        codes: str | Iterable[str],
        details: Mapping[str, Any] | None = None,
    ) -> ApiErrorEntity | None:
        """Devuelve el primer error cuyo `code` coincide y cuyos `details`
        contienen el subconjunto indicado."""

        wanted = {codes} if isinstance(codes, str) else set(codes)
        for error in self.errors:
            if error.code not in wanted:
                continue
            if details and any(error.details.get(k) != v for k, v in details.items()):
                continue
            return error
        return None


class RateLimitError(ApiError):
    """429 persistente tras agotar los reintentos."""
