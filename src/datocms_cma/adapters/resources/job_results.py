"""Recurso `job_results`: resultado de un job asíncrono ya terminado."""

from __future__ import annotations

from typing import Any

from datocms_cma.adapters.resources.base import BaseResource, path_id
from datocms_cma.core.domain.models import JobResult
from datocms_cma.core.jsonapi import ResourceSchema


class JobResultsResource(BaseResource[JobResult]):
    schema = ResourceSchema(type="job_result")
    model = JobResult
    path = "/job-results"

    async def raw_find(self, job_id: str) -> Any:
        return await self._requester.request("GET", f"{self.path}/{path_id(job_id)}")

    async def find(self, job_id: str) -> JobResult:
        """404 mientras el job siga en curso."""

        return self._to_model(await self.raw_find(job_id))
