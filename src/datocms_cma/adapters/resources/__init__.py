"""Recursos de la CMA (uno por recurso REST documentado).

Por qué un paquete:
- Agrupa módulos por recurso (site, environments, webhooks...).
- Cada módulo depende de `core.interfaces.requester.CmaRequester`.
"""

from datocms_cma.adapters.resources.build_triggers import BuildTriggersResource
from datocms_cma.adapters.resources.environments import EnvironmentsResource
from datocms_cma.adapters.resources.job_results import JobResultsResource
from datocms_cma.adapters.resources.maintenance_mode import MaintenanceModeResource
from datocms_cma.adapters.resources.menu_items import MenuItemsResource
from datocms_cma.adapters.resources.plugins import PluginsResource
from datocms_cma.adapters.resources.public_info import PublicInfoResource
from datocms_cma.adapters.resources.schema_menu_items import SchemaMenuItemsResource
from datocms_cma.adapters.resources.site import SiteResource
from datocms_cma.adapters.resources.webhooks import WebhooksResource
from datocms_cma.adapters.resources.white_label_settings import WhiteLabelSettingsResource

__all__ = [
	"BuildTriggersResource",
	"EnvironmentsResource",
	"JobResultsResource",
	"MaintenanceModeResource",
	"MenuItemsResource",
	"PluginsResource",
	"PublicInfoResource",
	"SchemaMenuItemsResource",
	"SiteResource",
	"WebhooksResource",
	"WhiteLabelSettingsResource",
]
