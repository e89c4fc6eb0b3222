"""Recurso `white_label_settings` (plan Enterprise)."""

from __future__ import annotations

from datocms_cma.adapters.resources.base import SingletonResource
from datocms_cma.core.domain.models import WhiteLabelSettings
from datocms_cma.core.jsonapi import ResourceSchema


class WhiteLabelSettingsResource(SingletonResource[WhiteLabelSettings]):
    schema = ResourceSchema(type="white_label_settings")
    model = WhiteLabelSettings
    path = "/white-label-settings"
