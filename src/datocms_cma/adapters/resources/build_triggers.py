"""Recurso `build_triggers`: despliegues del frontend y reindexado de búsqueda."""

from __future__ import annotations

from typing import Any

from datocms_cma.adapters.resources.base import CollectionResource
from datocms_cma.core.domain.models import BuildTrigger
from datocms_cma.core.jsonapi import ResourceSchema


class BuildTriggersResource(CollectionResource[BuildTrigger]):
    schema = ResourceSchema(type="build_trigger")
    model = BuildTrigger
    path = "/build-triggers"

    async def raw_trigger(self, build_trigger_id: str) -> Any:
        return await self._requester.request("POST", f"{self._member(build_trigger_id)}/trigger")

    async def trigger(self, build_trigger_id: str) -> None:
        """Lanza un despliegue. La API responde 204 sin cuerpo."""

        await self.raw_trigger(build_trigger_id)

    async def raw_reindex(self, build_trigger_id: str) -> Any:
        return await self._requester.request("POST", f"{self._member(build_trigger_id)}/reindex")

    async def reindex(self, build_trigger_id: str) -> None:
        """Vuelve a rastrear el frontend para la búsqueda del sitio."""

        await self.raw_reindex(build_trigger_id)
