from __future__ import annotations

from conftest import api_error

from datocms_cma.core.errors import ApiError, parse_error_entities


def test_parse_error_entities_skips_malformed_entries() -> None:
    body = api_error("INVALID_FIELD", {"field": "api_key", "code": "VALIDATION_UNIQUENESS"})
    body["data"].append({"type": "api_error"})
    body["data"].append("garbage")

    errors = parse_error_entities(body)

    assert len(errors) == 1
    assert errors[0].code == "INVALID_FIELD"
    assert errors[0].details["field"] == "api_key"
    assert parse_error_entities("oops") == []


def test_api_error_message_and_find_error() -> None:
    error = ApiError(
        status_code=422,
        method="post",
        url="https://site-api.datocms.com/webhooks",
        body=api_error("INVALID_FIELD", {"field": "url"}),
    )

    assert str(error) == "POST https://site-api.datocms.com/webhooks: 422 (INVALID_FIELD)"
    assert error.find_error("INVALID_FIELD") is not None
    assert error.find_error(["NOT_FOUND", "INVALID_FIELD"], {"field": "url"}) is not None
    assert error.find_error("INVALID_FIELD", {"field": "name"}) is None
    assert error.find_error("NOT_FOUND") is None


def test_api_error_with_non_json_body() -> None:
    error = ApiError(status_code=502, method="GET", url="/site", body="Bad gateway")
    assert error.errors == []
    assert error.body == "Bad gateway"
