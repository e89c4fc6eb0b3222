"""Punto de entrada programático: `Client` agrupa todos los recursos.

Uso:
    async with Client(api_token="...") as client:
        site = await client.site.find()
        hooks = await client.webhooks.list()
"""

from __future__ import annotations

from typing import Any

import httpx

from datocms_cma.adapters.http_client import CmaHttpClient
from datocms_cma.adapters.resources import (
    BuildTriggersResource,
    EnvironmentsResource,
    JobResultsResource,
    MaintenanceModeResource,
    MenuItemsResource,
    PluginsResource,
    PublicInfoResource,
    SchemaMenuItemsResource,
    SiteResource,
    WebhooksResource,
    WhiteLabelSettingsResource,
)
from datocms_cma.core.config import ClientSettings


class Client:
    """Cliente async de la Content Management API.

    `settings` se construye desde el entorno (`DATOCMS_*`) si no se pasa;
    los kwargs sobrescriben campos concretos (`api_token`, `environment`...).
    """

    def __init__(
        self,
        settings: ClientSettings | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
        requester: CmaHttpClient | None = None,
        **overrides: Any,
    ) -> None:
        settings = settings or ClientSettings()
        if overrides:
            settings = settings.model_copy(update=overrides)
        self.settings = settings
        self.requester = requester or CmaHttpClient(settings, transport=transport)

        self.site = SiteResource(self.requester)
        self.environments = EnvironmentsResource(self.requester)
        self.maintenance_mode = MaintenanceModeResource(self.requester)
        self.menu_items = MenuItemsResource(self.requester)
        self.schema_menu_items = SchemaMenuItemsResource(self.requester)
        self.plugins = PluginsResource(self.requester)
        self.public_info = PublicInfoResource(self.requester)
        self.webhooks = WebhooksResource(self.requester)
        self.white_label_settings = WhiteLabelSettingsResource(self.requester)
        self.build_triggers = BuildTriggersResource(self.requester)
        self.job_results = JobResultsResource(self.requester)

    async def aclose(self) -> None:
        await self.requester.aclose()

    async def __aenter__(self) -> "Client":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()
