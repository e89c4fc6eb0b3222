"""Recurso `maintenance_mode`: flag singleton que pone el proyecto en solo-lectura."""

from __future__ import annotations

from typing import Any

from datocms_cma.adapters.resources.base import BaseResource
from datocms_cma.core.domain.models import MaintenanceMode
from datocms_cma.core.jsonapi import ResourceSchema


class MaintenanceModeResource(BaseResource[MaintenanceMode]):
    schema = ResourceSchema(type="maintenance_mode")
    model = MaintenanceMode
    path = "/maintenance-mode"

    async def raw_find(self) -> Any:
        return await self._requester.request("GET", self.path)

    async def find(self) -> MaintenanceMode:
        return self._to_model(await self.raw_find())

    async def raw_activate(self, force: bool | None = None) -> Any:
        query = {"force": "true"} if force else None
        return await self._requester.request("PUT", f"{self.path}/activate", query=query)

    async def activate(self, force: bool | None = None) -> MaintenanceMode:
        """Activa el modo mantenimiento.

        Sin `force`, la API responde 422 (`ACTIVE_EDITING_SESSIONS`) si hay
        editores trabajando en ese momento.
        """

        return self._to_model(await self.raw_activate(force))

    async def raw_deactivate(self) -> Any:
        return await self._requester.request("PUT", f"{self.path}/deactivate")

    async def deactivate(self) -> MaintenanceMode:
        return self._to_model(await self.raw_deactivate())
