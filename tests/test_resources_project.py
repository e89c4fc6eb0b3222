from __future__ import annotations

import asyncio

import httpx

from datocms_cma.client import Client
from datocms_cma.core.domain.models import MaintenanceMode, PublicInfo, Site, WhiteLabelSettings


def test_site_find_flattens_attributes(client, fake_api) -> None:
    fake_api.add(
        "GET",
        "/site",
        json={
            "data": {
                "id": "123",
                "type": "site",
                "attributes": {
                    "name": "Blog",
                    "locales": ["en", "it"],
                    "timezone": "Europe/Rome",
                    "global_seo": {"site_name": "Blog"},
                    "sso_settings": {"enabled": False},
                },
                "relationships": {"sso_default_role": {"data": {"type": "role", "id": "9"}}},
            }
        },
    )

    site = asyncio.run(client.site.find())

    assert isinstance(site, Site)
    assert site.locales == ["en", "it"]
    assert site.timezone == "Europe/Rome"
    assert site.sso_default_role is not None and site.sso_default_role.id == "9"
    # campos no modelados se conservan
    assert site.model_dump()["sso_settings"] == {"enabled": False}


def test_site_find_forwards_query(client, fake_api) -> None:
    fake_api.add("GET", "/site", json={"data": {"id": "1", "type": "site", "attributes": {}}})

    asyncio.run(client.site.find({"include": "item_types"}))

    assert fake_api.last.url.params["include"] == "item_types"


def test_site_update_serializes_body(client, fake_api) -> None:
    fake_api.add(
        "PUT",
        "/site",
        json={"data": {"id": "1", "type": "site", "attributes": {"timezone": "UTC"}}},
    )

    site = asyncio.run(client.site.update({"timezone": "UTC", "sso_default_role": "4"}))

    assert site.timezone == "UTC"
    body = fake_api.last_json()
    assert body["data"]["type"] == "site"
    assert body["data"]["attributes"] == {"timezone": "UTC"}
    assert body["data"]["relationships"]["sso_default_role"]["data"] == {"type": "role", "id": "4"}


def test_maintenance_mode_lifecycle(client, fake_api) -> None:
    fake_api.add(
        "GET",
        "/maintenance-mode",
        json={"data": {"id": "m", "type": "maintenance_mode", "attributes": {"active": False}}},
    )
    fake_api.add(
        "PUT",
        "/maintenance-mode/activate",
        json={
            "data": {
                "id": "m",
                "type": "maintenance_mode",
                "attributes": {"active": True, "scheduled_deactivation_at": "2026-10-20T10:00:00Z"},
            }
        },
    )
    fake_api.add(
        "PUT",
        "/maintenance-mode/deactivate",
        json={"data": {"id": "m", "type": "maintenance_mode", "attributes": {"active": False}}},
    )

    current = asyncio.run(client.maintenance_mode.find())
    assert isinstance(current, MaintenanceMode)
    assert current.active is False

    active = asyncio.run(client.maintenance_mode.activate(force=True))
    assert active.active is True
    assert active.scheduled_deactivation_at == "2026-10-20T10:00:00Z"
    assert fake_api.last.url.params["force"] == "true"

    inactive = asyncio.run(client.maintenance_mode.deactivate())
    assert inactive.active is False


def test_maintenance_activate_without_force_sends_no_query(client, fake_api) -> None:
    fake_api.add(
        "PUT",
        "/maintenance-mode/activate",
        json={"data": {"id": "m", "type": "maintenance_mode", "attributes": {"active": True}}},
    )

    asyncio.run(client.maintenance_mode.activate())

    assert "force" not in fake_api.last.url.params


def test_public_info_is_unauthenticated(client, fake_api) -> None:
    fake_api.add(
        "GET",
        "/public-info",
        json={
            "data": {
                "id": "pi",
                "type": "public_info",
                "attributes": {
                    "name": "Blog",
                    "theme": {"primary_color": {"red": 1, "green": 2, "blue": 3, "alpha": 255}},
                    "sso_saml_init_url": None,
                },
            }
        },
    )

    info = asyncio.run(client.public_info.find())

    assert isinstance(info, PublicInfo)
    assert info.theme["primary_color"]["red"] == 1
    assert "Authorization" not in fake_api.last.headers


def test_white_label_settings_update(client, fake_api) -> None:
    url = "https://example.com/messages.json"
    fake_api.add(
        "PUT",
        "/white-label-settings",
        json={
            "data": {
                "id": "wl",
                "type": "white_label_settings",
                "attributes": {"custom_i18n_messages_template_url": url},
            }
        },
    )

    settings = asyncio.run(client.white_label_settings.update({"custom_i18n_messages_template_url": url}))

    assert isinstance(settings, WhiteLabelSettings)
    assert settings.custom_i18n_messages_template_url == url
    assert fake_api.last_json() == {
        "data": {
            "type": "white_label_settings",
            "attributes": {"custom_i18n_messages_template_url": url},
        }
    }


def test_public_info_works_without_api_token(settings, fake_api) -> None:
    client = Client(settings, api_token=None, transport=httpx.MockTransport(fake_api.handler))
    fake_api.add("GET", "/public-info", json={"data": {"id": "pi", "type": "public_info", "attributes": {"name": "Blog"}}})

    info = asyncio.run(client.public_info.find())

    assert info.name == "Blog"
    assert "Authorization" not in fake_api.last.headers
