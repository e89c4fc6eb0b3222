"""Bases comunes de los recursos de la CMA.

Cada método *raw* es un proxy de una sola request y devuelve el documento
JSON:API tal cual. El método *simple* homónimo serializa el cuerpo, llama al
raw y valida la respuesta aplanada con el modelo del recurso.
"""

from __future__ import annotations

from typing import Any, ClassVar, Generic, Mapping, TypeVar
from urllib.parse import quote

from datocms_cma.core.domain.models import Resource
from datocms_cma.core.interfaces.requester import CmaRequester
from datocms_cma.core.jsonapi import (
    ResourceSchema,
    deserialize_response_body,
    serialize_request_body,
)

ModelT = TypeVar("ModelT", bound=Resource)


def path_id(value: object) -> str:
    return quote(str(value), safe="")


class BaseResource(Generic[ModelT]):
    """Recurso remoto: conoce su tipo JSON:API y su modelo Pydantic."""

    schema: ClassVar[ResourceSchema]
    model: ClassVar[type[Resource]]

    def __init__(self, requester: CmaRequester) -> None:
        self._requester = requester

    def _serialize(self, body: Mapping[str, Any] | None, *, item_id: str | None = None) -> dict[str, Any]:
        return serialize_request_body(body, self.schema, item_id=item_id)

    def _to_model(self, document: Mapping[str, Any] | None, model: type[Resource] | None = None) -> ModelT:
        flat = deserialize_response_body(document)
        return (model or self.model).model_validate(flat)  # type: ignore[return-value]

    def _to_models(self, document: Mapping[str, Any] | None, model: type[Resource] | None = None) -> list[ModelT]:
        flat = deserialize_response_body(document) or []
        return [(model or self.model).model_validate(e) for e in flat]  # type: ignore[misc]

    async def _resolve_job(self, document: Any) -> Any:
        """Si la API respondió con un `job` (202), espera su resultado."""

        data = document.get("data") if isinstance(document, Mapping) else None
        if isinstance(data, Mapping) and data.get("type") == "job":
            return await self._requester.wait_for_job(str(data["id"]))
        return document


class SingletonResource(BaseResource[ModelT]):
    """Recurso con una única instancia por proyecto (sin id en la ruta)."""

    path: ClassVar[str]

    async def raw_find(self) -> Any:
        return await self._requester.request("GET", self.path)

    async def find(self) -> ModelT:
        return self._to_model(await self.raw_find())

    async def raw_update(self, body: Mapping[str, Any]) -> Any:
        return await self._requester.request("PUT", self.path, body=body)

    async def update(self, body: Mapping[str, Any]) -> ModelT:
        document = await self.raw_update(self._serialize(body))
        return self._to_model(await self._resolve_job(document))


class CollectionResource(BaseResource[ModelT]):
    """Colección con list/find/create/update/destroy sobre `path`."""

    path: ClassVar[str]

    def _member(self, item_id: str) -> str:
        return f"{self.path}/{path_id(item_id)}"

    async def raw_list(self, query: Mapping[str, Any] | None = None) -> Any:
        return await self._requester.request("GET", self.path, query=query)

    async def list(self, query: Mapping[str, Any] | None = None) -> list[ModelT]:
        return self._to_models(await self.raw_list(query))

    async def raw_find(self, item_id: str) -> Any:
        return await self._requester.request("GET", self._member(item_id))

    async def find(self, item_id: str) -> ModelT:
        return self._to_model(await self.raw_find(item_id))

    async def raw_create(self, body: Mapping[str, Any]) -> Any:
        return await self._requester.request("POST", self.path, body=body)

    async def create(self, body: Mapping[str, Any]) -> ModelT:
        document = await self.raw_create(self._serialize(body))
        return self._to_model(await self._resolve_job(document))

    async def raw_update(self, item_id: str, body: Mapping[str, Any]) -> Any:
        return await self._requester.request("PUT", self._member(item_id), body=body)

    async def update(self, item_id: str, body: Mapping[str, Any]) -> ModelT:
        document = await self.raw_update(item_id, self._serialize(body, item_id=item_id))
        return self._to_model(await self._resolve_job(document))

    async def raw_destroy(self, item_id: str) -> Any:
        return await self._requester.request("DELETE", self._member(item_id))

    async def destroy(self, item_id: str) -> ModelT:
        return self._to_model(await self._resolve_job(await self.raw_destroy(item_id)))
