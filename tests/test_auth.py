"""Bearer token verification and the 401 envelope."""

import pytest
from httpx import AsyncClient

from stash.api.auth import verify_token
from tests.conftest import USER_ID, make_token


def test_verify_token_returns_subject() -> None:
    assert verify_token(make_token(USER_ID)) == USER_ID


def test_verify_token_rejects_wrong_secret() -> None:
    with pytest.raises(ValueError):
        verify_token(make_token(USER_ID, secret="not-the-secret"))


def test_verify_token_rejects_expired() -> None:
    with pytest.raises(ValueError):
        verify_token(make_token(USER_ID, expires_in=-60))


def test_verify_token_rejects_wrong_audience() -> None:
    with pytest.raises(ValueError):
        verify_token(make_token(USER_ID, audience="anon"))


@pytest.mark.parametrize("path", ["/links", "/snippets", "/resumes"])
async def test_missing_header_returns_401(client: AsyncClient, path: str) -> None:
    response = await client.get(path)
    assert response.status_code == 401
    assert response.json() == {"error": "Unauthorized", "code": "UNAUTHORIZED"}


async def test_non_bearer_scheme_returns_401(client: AsyncClient) -> None:
    response = await client.get("/links", headers={"Authorization": f"Token {make_token(USER_ID)}"})
    assert response.status_code == 401


async def test_garbage_token_returns_401(client: AsyncClient) -> None:
    response = await client.get("/links", headers={"Authorization": "Bearer not.a.jwt"})
    assert response.status_code == 401
    assert response.json()["code"] == "UNAUTHORIZED"


async def test_health_needs_no_auth(client: AsyncClient) -> None:
    response = await client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "healthy"}
