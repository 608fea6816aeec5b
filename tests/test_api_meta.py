from __future__ import annotations

import httpx
import pytest

from apps.api.main import app
from core.fields.registry import list_supported_field_types


@pytest.mark.anyio
async def test_meta_returns_supported_field_types_and_request_id() -> None:
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as client:
        response = await client.get("/v1/meta")

    assert response.status_code == 200
    assert response.headers["X-Maskfield-Request-Id"]

    payload = response.json()
    assert payload["version"] == "0.1.0"
    assert payload["package_version"]
    assert payload["supported_field_types"] == list_supported_field_types()
    assert {"phone", "currency", "expDate", "st"}.issubset(set(payload["supported_field_types"]))
    assert payload["parameterized_field_types"] == {
        "dataLength": ["length"],
        "age": ["minimum", "maximum"],
    }
