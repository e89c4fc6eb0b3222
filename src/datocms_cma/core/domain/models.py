"""Modelos del dominio (Pydantic v2).

Por qué Pydantic en el dominio:
- Nos da validación y documentación autocontenida (Field) sin acoplar
  el Core a librerías de I/O.
- Los campos los dicta el backend de DatoCMS; por eso todos los modelos
  aceptan campos extra y no se pierde nada que la API devuelva.

Nota:
- Estos modelos describen la forma *simple* (aplanada) de un recurso JSON:API:
  `id`, `type`, atributos al primer nivel y relaciones como linkage.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict


class Linkage(BaseModel):
    """Referencia JSON:API a otro recurso (`{"type", "id"}`)."""

    model_config = ConfigDict(extra="allow")

    type: str = Field(..., min_length=1)
    id: str = Field(..., min_length=1)


class Resource(BaseModel):
    """Base de todos los recursos remotos en forma aplanada."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    id: str = Field(..., description="Identificador del recurso en DatoCMS.")
    type: str = Field(..., description="Tipo JSON:API del recurso.")
    meta: dict[str, Any] | None = Field(
        default=None,
        description="Bloque `meta` del recurso, si la API lo envía.",
    )


class Site(Resource):
    """Configuración singleton del proyecto."""

    name: str | None = None
    internal_domain: str | None = None
    domain: str | None = None
    locales: list[str] = Field(default_factory=list)
    timezone: str | None = None
    theme: dict[str, Any] | None = None
    global_seo: dict[str, Any] | None = None
    favicon: Any = None
    no_index: bool | None = None
    require_2fa: bool | None = None
    ip_tracking_enabled: bool | None = None
    sso_default_role: Linkage | None = None


class Environment(Resource):
    """Snapshot de contenido+esquema del proyecto (primario o sandbox)."""

    @property
    def is_primary(self) -> bool:
        return bool((self.meta or {}).get("primary"))

    @property
    def status(self) -> str | None:
        return (self.meta or {}).get("status")


class MaintenanceMode(Resource):
    """Flag singleton que bloquea escrituras en el entorno primario."""

    active: bool = False
    scheduled_deactivation_at: str | None = None


class MenuItem(Resource):
    """Entrada del árbol de navegación del área de contenido."""

    label: str | None = None
    position: int | None = None
    external_url: str | None = None
    open_in_new_tab: bool | None = None
    item_type: Linkage | None = None
    item_type_filter: Linkage | None = None
    parent: Linkage | None = None
    children: list[Linkage] = Field(default_factory=list)


class SchemaMenuItem(Resource):
    """Entrada del árbol de navegación del área de esquema."""

    label: str | None = None
    position: int | None = None
    kind: str | None = None
    item_type: Linkage | None = None
    parent: Linkage | None = None
    children: list[Linkage] = Field(default_factory=list)


class Plugin(Resource):
    """Extensión de UI (marketplace o privada)."""

    name: str | None = None
    description: str | None = None
    url: str | None = None
    parameters: dict[str, Any] = Field(default_factory=dict)
    package_name: str | None = None
    package_version: str | None = None
    permissions: list[str] = Field(default_factory=list)
    plugin_type: str | None = None
    field_types: list[str] | None = None
    parameter_definitions: dict[str, Any] | None = None


class SchemaField(Resource):
    """Campo de un modelo (solo lo devuelve `plugins.fields`)."""

    label: str | None = None
    field_type: str | None = None
    api_key: str | None = None
    appearance: dict[str, Any] | None = None
    item_type: Linkage | None = None


class PublicInfo(Resource):
    """Branding público del proyecto (no requiere autenticación)."""

    name: str | None = None
    theme: dict[str, Any] | None = None
    sso_saml_init_url: str | None = None


class WebhookEvent(BaseModel):
    model_config = ConfigDict(extra="allow")

    entity_type: str = Field(..., min_length=1)
    event_types: list[str] = Field(default_factory=list)
    filters: list[dict[str, Any]] | None = None


class Webhook(Resource):
    """Suscripción a eventos con entrega HTTP."""

    name: str | None = None
    url: str | None = None
    enabled: bool | None = None
    custom_payload: str | None = None
    headers: dict[str, str] = Field(default_factory=dict)
    http_basic_user: str | None = None
    http_basic_password: str | None = None
    events: list[WebhookEvent] = Field(default_factory=list)
    payload_api_version: str | None = None
    nested_items_in_payload: bool | None = None
    auto_retry: bool | None = None


class WhiteLabelSettings(Resource):
    """Overrides de branding (plan Enterprise)."""

    custom_i18n_messages_template_url: str | None = None


class BuildTrigger(Resource):
    """Integración de despliegue (Netlify, Vercel, custom...)."""

    name: str | None = None
    adapter: str | None = None
    adapter_settings: dict[str, Any] = Field(default_factory=dict)
    enabled: bool | None = None
    frontend_url: str | None = None
    autotrigger_on_scheduled_publications: bool | None = None
    indexing_enabled: bool | None = None
    build_status: str | None = None
    last_build_completed_at: str | None = None


class Job(Resource):
    """Job asíncrono encolado por la API (respuesta 202)."""


class JobResult(Resource):
    """Resultado de un job terminado.

    `status` es el código HTTP que habría devuelto la operación síncrona y
    `payload` el documento JSON:API producido.
    """

    status: int = Field(..., ge=100, le=599)
    payload: dict[str, Any] | None = None


class ApiErrorEntity(BaseModel):
    """Error individual de un documento de error JSON:API."""

    model_config = ConfigDict(extra="allow")

    id: str | None = None
    type: str = Field(default="api_error")
    code: str = Field(..., min_length=1)
    details: dict[str, Any] = Field(default_factory=dict)
    doc_url: str | None = None
