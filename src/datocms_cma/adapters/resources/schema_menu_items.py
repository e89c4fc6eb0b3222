"""Recurso `schema_menu_items`: árbol de navegación del área de esquema."""

from __future__ import annotations

from datocms_cma.adapters.resources.base import CollectionResource
from datocms_cma.core.domain.models import SchemaMenuItem
from datocms_cma.core.jsonapi import ResourceSchema


class SchemaMenuItemsResource(CollectionResource[SchemaMenuItem]):
    schema = ResourceSchema(
        type="schema_menu_item",
        relationships={
            "item_type": "item_type",
            "parent": "schema_menu_item",
            "children": "schema_menu_item",
        },
        to_many=frozenset({"children"}),
    )
    model = SchemaMenuItem
    path = "/schema-menu-items"
