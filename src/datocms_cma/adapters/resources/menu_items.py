"""Recurso `menu_items`: árbol de navegación del área de contenido."""

from __future__ import annotations

from datocms_cma.adapters.resources.base import CollectionResource
from datocms_cma.core.domain.models import MenuItem
from datocms_cma.core.jsonapi import ResourceSchema


class MenuItemsResource(CollectionResource[MenuItem]):
    """`parent` y `children` referencian otros `menu_item`; `item_type`
    enlaza el modelo cuyo listado abre la entrada."""

    schema = ResourceSchema(
        type="menu_item",
        relationships={
            "item_type": "item_type",
            "item_type_filter": "item_type_filter",
            "parent": "menu_item",
            "children": "menu_item",
        },
        to_many=frozenset({"children"}),
    )
    model = MenuItem
    path = "/menu-items"
