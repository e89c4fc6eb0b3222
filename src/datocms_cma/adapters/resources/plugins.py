"""Recurso `plugins`: extensiones de UI del marketplace o privadas.

Borrar un plugin devuelve al editor por defecto los campos que lo usaban
(comportamiento del servidor).
"""

from __future__ import annotations

from typing import Any

from datocms_cma.adapters.resources.base import CollectionResource
from datocms_cma.core.domain.models import Plugin, SchemaField
from datocms_cma.core.jsonapi import ResourceSchema


class PluginsResource(CollectionResource[Plugin]):
    schema = ResourceSchema(type="plugin")
    model = Plugin
    path = "/plugins"

    async def raw_fields(self, plugin_id: str) -> Any:
        return await self._requester.request("GET", f"{self._member(plugin_id)}/fields")

    async def fields(self, plugin_id: str) -> list[SchemaField]:
        """Campos que usan el plugin como editor o addon."""

        return self._to_models(await self.raw_fields(plugin_id), SchemaField)  # type: ignore[return-value]
