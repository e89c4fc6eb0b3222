"""Recurso `environments`: ciclo de vida fork/promote/rename/destroy.

Fork y destroy son jobs asíncronos en el servidor (un fork tarda entre 1 y
15 minutos): por defecto esperamos el resultado consultando `/job-results`.
"""

from __future__ import annotations

from typing import Any, Mapping

from datocms_cma.adapters.resources.base import BaseResource, path_id
from datocms_cma.core.domain.models import Environment
from datocms_cma.core.jsonapi import ResourceSchema


class EnvironmentsResource(BaseResource[Environment]):
    schema = ResourceSchema(type="environment")
    model = Environment
    path = "/environments"

    def _member(self, environment_id: str) -> str:
        return f"{self.path}/{path_id(environment_id)}"

    async def raw_list(self) -> Any:
        return await self._requester.request("GET", self.path)

    async def list(self) -> list[Environment]:
        return self._to_models(await self.raw_list())

    async def raw_find(self, environment_id: str) -> Any:
        return await self._requester.request("GET", self._member(environment_id))

    async def find(self, environment_id: str) -> Environment:
        return self._to_model(await self.raw_find(environment_id))

    async def raw_fork(
        self,
        environment_id: str,
        body: Mapping[str, Any],
        query: Mapping[str, Any] | None = None,
    ) -> Any:
        return await self._requester.request(
            "POST",
            f"{self._member(environment_id)}/fork",
            body=body,
            query=query,
        )

    async def fork(
        self,
        environment_id: str,
        new_environment_id: str,
        *,
        immediate_return: bool = False,
        fast: bool = False,
        force: bool = False,
    ) -> Environment:
        """Crea `new_environment_id` como copia de `environment_id`.

        - `immediate_return`: no espera al job; devuelve el entorno en estado
          `creating`.
        - `fast`: fork rápido (bloquea escrituras del origen durante la copia).
        - `force`: con `fast`, fuerza el bloqueo aunque haya editores activos.
        """

        query = {
            "immediate_return": "true" if immediate_return else None,
            "fast": "true" if fast else None,
            "force": "true" if force else None,
        }
        document = await self.raw_fork(
            environment_id,
            self._serialize({"id": new_environment_id}),
            query,
        )
        if not immediate_return:
            document = await self._resolve_job(document)
        return self._to_model(document)

    create = fork

    async def raw_promote(self, environment_id: str) -> Any:
        return await self._requester.request("PUT", f"{self._member(environment_id)}/promote")

    async def promote(self, environment_id: str) -> Environment:
        """Convierte el sandbox en entorno primario."""

        return self._to_model(await self.raw_promote(environment_id))

    async def raw_rename(self, environment_id: str, body: Mapping[str, Any]) -> Any:
        return await self._requester.request(
            "PUT",
            f"{self._member(environment_id)}/rename",
            body=body,
        )

    async def rename(self, environment_id: str, new_environment_id: str) -> Environment:
        document = await self.raw_rename(
            environment_id,
            self._serialize({"id": new_environment_id}),
        )
        return self._to_model(document)

    async def update(self, environment_id: str, body: Mapping[str, Any]) -> Environment:
        """Única actualización posible de un entorno: su id (`{"id": nuevo}`)."""

        if body.get("id") is None:
            raise ValueError("Environment update requires the new id under the 'id' key")
        return await self.rename(environment_id, str(body["id"]))

    async def raw_destroy(self, environment_id: str) -> Any:
        return await self._requester.request("DELETE", self._member(environment_id))

    async def destroy(self, environment_id: str) -> Environment:
        return self._to_model(await self._resolve_job(await self.raw_destroy(environment_id)))
