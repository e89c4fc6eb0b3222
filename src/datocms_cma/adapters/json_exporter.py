"""Exportación JSON de recursos.

Por qué JSON:
- Interoperabilidad con scripts y pipelines (backups de webhooks, menús...).
- Formato estable (claves ordenadas) para poder versionarlo y hacer diff.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Iterable

from datocms_cma.core.domain.models import Resource


def dump_resources(resources: Resource | Iterable[Resource]) -> str:
    """Serializa uno o varios recursos a JSON UTF-8 con formato estable."""

    if isinstance(resources, Resource):
        payload: object = resources.model_dump(mode="json")
    else:
        payload = [r.model_dump(mode="json") for r in resources]
    return json.dumps(payload, ensure_ascii=False, indent=2, sort_keys=True) + "\n"


def export_resources_json(*, resources: Resource | Iterable[Resource], output_path: Path) -> Path:
    """Escribe los recursos en `output_path` (crea directorios si faltan)."""

    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(dump_resources(resources), encoding="utf-8")
    return output_path
