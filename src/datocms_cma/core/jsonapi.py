"""Conversión entre la forma *simple* y documentos JSON:API.

Por qué en el Core:
- Es una regla pura de formato (sin I/O): los recursos la usan para construir
  cuerpos y aplanar respuestas.
- Mantiene a los adaptadores como proxies de una sola línea.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping

# Claves que nunca viajan como atributos.
_RESERVED_KEYS = frozenset({"id", "type", "meta"})


@dataclass(frozen=True)
class ResourceSchema:
    """Describe cómo (de)serializar un tipo JSON:API.

    `relationships` mapea el nombre de la relación al tipo del recurso
    relacionado; las que figuran en `to_many` son listas de linkages.
    """

    type: str
    relationships: Mapping[str, str] = field(default_factory=dict)
    to_many: frozenset[str] = frozenset()


def _linkage(value: Any, target_type: str) -> dict[str, str]:
    if isinstance(value, Mapping):
        return {"type": str(value.get("type") or target_type), "id": str(value["id"])}
    return {"type": target_type, "id": str(value)}


def serialize_relationship(value: Any, target_type: str, *, many: bool) -> dict[str, Any]:
    """Normaliza un valor de relación a `{"data": ...}`.

    Acepta id desnudo, linkage `{"type", "id"}`, lista de ambos o None.
    """

    if value is None:
        return {"data": [] if many else None}
    if many:
        if not isinstance(value, (list, tuple)):
            value = [value]
        return {"data": [_linkage(v, target_type) for v in value]}
    return {"data": _linkage(value, target_type)}


def serialize_request_body(
    body: Mapping[str, Any] | None,
    schema: ResourceSchema,
    *,
    item_id: str | None = None,
) -> dict[str, Any]:
    """Construye `{"data": {type, id?, attributes, relationships?}}`."""

    body = dict(body or {})
    data: dict[str, Any] = {"type": schema.type}

    resolved_id = item_id if item_id is not None else body.get("id")
    if resolved_id is not None:
        data["id"] = str(resolved_id)

    attributes: dict[str, Any] = {}
    relationships: dict[str, Any] = {}
    for key, value in body.items():
        if key in _RESERVED_KEYS:
            continue
        if key in schema.relationships:
            relationships[key] = serialize_relationship(
                value,
                schema.relationships[key],
                many=key in schema.to_many,
            )
        else:
            attributes[key] = value

    data["attributes"] = attributes
    if relationships:
        data["relationships"] = relationships
    if isinstance(body.get("meta"), Mapping):
        data["meta"] = dict(body["meta"])
    return {"data": data}


def deserialize_resource(entity: Mapping[str, Any]) -> dict[str, Any]:
    """Aplana un recurso JSON:API: atributos y linkages al primer nivel."""

    out: dict[str, Any] = {"id": entity.get("id"), "type": entity.get("type")}
    attributes = entity.get("attributes")
    if isinstance(attributes, Mapping):
        out.update(attributes)
    relationships = entity.get("relationships")
    if isinstance(relationships, Mapping):
        for name, rel in relationships.items():
            out[name] = rel.get("data") if isinstance(rel, Mapping) else None
    if entity.get("meta") is not None:
        out["meta"] = entity["meta"]
    return out


def deserialize_response_body(document: Mapping[str, Any] | None) -> Any:
    """Aplana `document["data"]` (objeto o colección). None si no hay cuerpo."""

    if not document:
        return None
    data = document.get("data")
    if isinstance(data, list):
        return [deserialize_resource(e) for e in data if isinstance(e, Mapping)]
    if isinstance(data, Mapping):
        return deserialize_resource(data)
    return None
