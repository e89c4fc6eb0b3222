"""Recurso `webhooks`: suscripciones a eventos con entrega HTTP."""

from __future__ import annotations

from datocms_cma.adapters.resources.base import CollectionResource
from datocms_cma.core.domain.models import Webhook
from datocms_cma.core.jsonapi import ResourceSchema


class WebhooksResource(CollectionResource[Webhook]):
    """`events` es una lista de `{entity_type, event_types, filters}`; los
    reintentos de entrega (`auto_retry`) los hace el servidor."""

    schema = ResourceSchema(type="webhook")
    model = Webhook
    path = "/webhooks"
