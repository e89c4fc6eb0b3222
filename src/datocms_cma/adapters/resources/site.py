"""Recurso `site`: configuración singleton del proyecto."""

from __future__ import annotations

from typing import Any, Mapping

from datocms_cma.adapters.resources.base import SingletonResource
from datocms_cma.core.domain.models import Site
from datocms_cma.core.jsonapi import ResourceSchema


class SiteResource(SingletonResource[Site]):
    """Locales, timezone, SEO global y ajustes SSO.

    `update` puede tardar: si el cambio de locales obliga a migrar contenido,
    la API responde con un job y esperamos su resultado.
    """

    schema = ResourceSchema(type="site", relationships={"sso_default_role": "role"})
    model = Site
    path = "/site"

    async def raw_find(self, query: Mapping[str, Any] | None = None) -> Any:
        return await self._requester.request("GET", self.path, query=query)

    async def find(self, query: Mapping[str, Any] | None = None) -> Site:
        """`query` admite p.ej. `{"include": "item_types"}`."""

        return self._to_model(await self.raw_find(query))
