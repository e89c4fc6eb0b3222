"""Recurso `public_info`: branding público, sin autenticación."""

from __future__ import annotations

from typing import Any

from datocms_cma.adapters.resources.base import BaseResource
from datocms_cma.core.domain.models import PublicInfo
from datocms_cma.core.jsonapi import ResourceSchema


class PublicInfoResource(BaseResource[PublicInfo]):
    schema = ResourceSchema(type="public_info")
    model = PublicInfo
    path = "/public-info"

    async def raw_find(self) -> Any:
        return await self._requester.request("GET", self.path, authenticated=False)

    async def find(self) -> PublicInfo:
        return self._to_model(await self.raw_find())
