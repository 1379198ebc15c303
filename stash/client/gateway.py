"""
Async client for the Stash resource gateway.

Every call carries ``Authorization: Bearer <token>``. Transport errors,
non-success statuses and malformed payloads all surface as GatewayError so
callers have one thing to catch.
"""

import logging
from typing import Any, TypeVar

import httpx
from pydantic import BaseModel, TypeAdapter, ValidationError

from stash.client.models import LinkRecord, ResumeRecord, SignedUrl, SnippetRecord
from stash.config import settings

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseModel)


class GatewayError(Exception):
    """A gateway call failed."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class UnauthorizedError(GatewayError):
    """The gateway rejected the bearer token."""


class GatewayClient:
    """Thin wrapper over httpx.AsyncClient for the links/snippets/resumes API."""

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._http = httpx.AsyncClient(
            base_url=base_url or settings.api_base_url,
            timeout=timeout if timeout is not None else settings.request_timeout,
            transport=transport,
        )

    async def __aenter__(self) -> "GatewayClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._http.aclose()

    async def _get_json(self, path: str, token: str, params: dict | None = None) -> Any:
        headers = {"Authorization": f"Bearer {token}"}
        try:
            response = await self._http.get(path, headers=headers, params=params)
        except httpx.HTTPError as e:
            raise GatewayError(f"GET {path} failed: {e}") from e

        if response.status_code == 401:
            raise UnauthorizedError(f"GET {path} unauthorized", status_code=401)
        if not response.is_success:
            raise GatewayError(
                f"GET {path} returned {response.status_code}",
                status_code=response.status_code,
            )

        try:
            return response.json()
        except ValueError as e:
            raise GatewayError(f"GET {path} returned invalid JSON") from e

    async def _get_list(
        self, path: str, token: str, model: type[T], params: dict | None = None
    ) -> list[T]:
        payload = await self._get_json(path, token, params=params)
        if not isinstance(payload, dict):
            raise GatewayError(f"GET {path} returned an unexpected payload")
        try:
            return TypeAdapter(list[model]).validate_python(payload.get("data") or [])
        except ValidationError as e:
            raise GatewayError(f"GET {path} returned malformed records: {e}") from e

    async def list_links(self, token: str) -> list[LinkRecord]:
        return await self._get_list("/links", token, LinkRecord)

    async def list_snippets(self, token: str, search: str | None = None) -> list[SnippetRecord]:
        """List snippets; the server filters by title/body when ``search`` is given.

        httpx percent-encodes the query parameter.
        """
        params = {"search": search} if search else None
        return await self._get_list("/snippets", token, SnippetRecord, params=params)

    async def list_resumes(self, token: str) -> list[ResumeRecord]:
        return await self._get_list("/resumes", token, ResumeRecord)

    async def get_resume_url(self, token: str, resume_id: str) -> SignedUrl:
        """Request a newly signed viewing URL for one resume."""
        path = f"/resumes/{resume_id}/url"
        payload = await self._get_json(path, token)
        try:
            return SignedUrl.model_validate(payload)
        except ValidationError as e:
            raise GatewayError(f"GET {path} returned a malformed signed URL") from e
