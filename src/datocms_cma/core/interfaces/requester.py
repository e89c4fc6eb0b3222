"""Contrato del requester HTTP de la CMA.

Por qué Protocol:
- Define un contrato estructural (duck typing) sin herencia rígida.
- Los recursos dependen de esta abstracción, no de httpx: en tests se puede
  sustituir por cualquier objeto con la misma firma.
"""

from __future__ import annotations

from typing import Any, Mapping, Protocol, runtime_checkable


@runtime_checkable
class CmaRequester(Protocol):
    """Contrato mínimo para ejecutar una llamada a la CMA.

    Reglas de diseño:
    - `request` es asíncrono porque siempre hace I/O (HTTP).
    - Devuelve el documento JSON:API crudo (o None para 204).
    - Lanza `ApiError` ante respuestas no-2xx.
    """

    async def request(
        self,
        method: str,
        path: str,
        *,
        query: Mapping[str, Any] | None = None,
        body: Mapping[str, Any] | None = None,
        authenticated: bool = True,
    ) -> Any:
        ...

    async def wait_for_job(self, job_id: str) -> Any:
        """Espera el resultado de un job y devuelve su payload JSON:API."""

        ...
