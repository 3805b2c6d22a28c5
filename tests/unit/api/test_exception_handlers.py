"""Tests for the domain exception → HTTP response mapping."""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from pydantic import BaseModel

from hamusic.api.exception_handlers import register_exception_handlers
from hamusic.domain.exceptions import (
    ConfigurationError,
    DomainException,
    EntityNotFoundException,
    ExternalServiceError,
    InvalidInputError,
    NoVideoError,
    ResolutionFailedError,
)


class Body(BaseModel):
    name: str


@pytest.fixture
def client() -> TestClient:
    app = FastAPI()
    register_exception_handlers(app)

    errors: dict[str, DomainException] = {
        "not-found": EntityNotFoundException("Artist", 5),
        "invalid": InvalidInputError("Invalid YouTube URL: bad"),
        "no-video": NoVideoError(5),
        "unresolved": ResolutionFailedError("video", "abc12345678"),
        "config": ConfigurationError("YouTube API key not set"),
        "upstream": ExternalServiceError("YouTube API error: 403", status_code=403),
    }

    @app.get("/raise/{kind}")
    async def raise_error(kind: str) -> None:
        raise errors[kind]

    @app.post("/body")
    async def with_body(body: Body) -> dict[str, str]:
        return {"name": body.name}

    return TestClient(app)


@pytest.mark.parametrize(
    ("kind", "status_code", "detail"),
    [
        ("not-found", 404, "Artist with id 5 not found"),
        ("invalid", 400, "Invalid YouTube URL: bad"),
        ("no-video", 400, "No video available"),
        ("unresolved", 404, "YouTube video abc12345678 not found"),
        ("config", 500, "YouTube API key not set"),
        ("upstream", 500, "YouTube API error: 403"),
    ],
)
def test_domain_exceptions_map_to_status(
    client: TestClient, kind: str, status_code: int, detail: str
) -> None:
    response = client.get(f"/raise/{kind}")
    assert response.status_code == status_code
    assert response.json() == {"detail": detail}


def test_missing_body_field_is_bad_request(client: TestClient) -> None:
    response = client.post("/body", json={})
    assert response.status_code == 400
    assert response.json()["detail"][0]["loc"] == ["body", "name"]


def test_malformed_json_is_bad_request(client: TestClient) -> None:
    response = client.post(
        "/body", content=b"{not json", headers={"Content-Type": "application/json"}
    )
    assert response.status_code == 400
    assert response.json()["detail"][0]["type"] == "json_invalid"
