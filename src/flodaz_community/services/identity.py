"""Identity provider client and display-identity resolution.

Authors of posts and comments live in the external auth provider (Supabase
auth admin API), not in the content store, so every read resolves them
out-of-band:

- ``IdentityClient`` wraps the provider's admin HTTP API.
- ``derive_display_identity`` turns a raw provider record into the public
  name/handle shown to viewers.
- ``IdentityResolver`` batches lookups and never fails its caller; an
  unreachable provider simply leaves every author unresolved.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any

import httpx

from flodaz_community.core.errors import IdentityError
from flodaz_community.core.settings import Settings

logger = logging.getLogger(__name__)

HTTP_OK = 200
HTTP_NOT_FOUND = 404
DEFAULT_ACCOUNT_TYPE = "free"
LIST_PAGE_SIZE = 50


@dataclass(frozen=True)
class DisplayIdentity:
    """Publicly shown subset of an identity-provider user."""

    id: str
    email: str
    full_name: str
    username: str
    account_type: str = DEFAULT_ACCOUNT_TYPE


@dataclass(frozen=True)
class IdentityConfig:
    """Immutable configuration for the identity provider."""

    base_url: str | None
    service_key: str | None
    timeout_seconds: float

    @property
    def enabled(self) -> bool:
        return bool(self.base_url and self.service_key)


def load_identity_config(settings: Settings) -> IdentityConfig:
    """Build the identity configuration from application settings."""
    return IdentityConfig(
        base_url=settings.supabase_url,
        service_key=settings.supabase_service_key,
        timeout_seconds=float(settings.identity_timeout_seconds),
    )


def _metadata(raw: Mapping[str, Any]) -> Mapping[str, Any]:
    meta = raw.get("raw_user_meta_data") or raw.get("user_metadata") or {}
    return meta if isinstance(meta, Mapping) else {}


def derive_display_identity(raw: Mapping[str, Any] | None) -> DisplayIdentity | None:
    """Apply the name/handle fallback chain to a raw provider record.

    Precedence:
        full name: ``full_name`` > ``name`` > email local part
        handle:    ``username`` > first name (if it differs from the email
                   local part) > email local part
        tier:      ``account_type`` > ``"free"``
    """
    if not raw or not isinstance(raw, Mapping):
        return None

    meta = _metadata(raw)
    email = str(raw.get("email") or "")
    local_part = email.split("@", 1)[0]

    full_name = meta.get("full_name") or meta.get("name") or local_part
    tokens = str(full_name).split()
    first_name = tokens[0] if tokens else ""

    if meta.get("username"):
        username = str(meta["username"])
    elif first_name and first_name != local_part:
        username = first_name
    else:
        username = local_part

    return DisplayIdentity(
        id=str(raw.get("id") or ""),
        email=email,
        full_name=str(full_name),
        username=username,
        account_type=str(meta.get("account_type") or DEFAULT_ACCOUNT_TYPE),
    )


class IdentityClient:
    """HTTP client wrapper for the identity provider's admin API."""

    def __init__(
        self,
        config: IdentityConfig,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.config = config
        self._transport = transport
        self._client: httpx.AsyncClient | None = None
        self._client_lock = asyncio.Lock()

    @property
    def enabled(self) -> bool:
        return self.config.enabled

    async def _ensure_client(self) -> httpx.AsyncClient:
        if not self.enabled:
            raise IdentityError("Identity provider is not configured")

        async with self._client_lock:
            if self._client is None:
                self._client = httpx.AsyncClient(
                    base_url=(self.config.base_url or "").rstrip("/"),
                    timeout=httpx.Timeout(self.config.timeout_seconds),
                    headers={
                        "apikey": self.config.service_key or "",
                        "Authorization": f"Bearer {self.config.service_key}",
                    },
                    transport=self._transport,
                )
        return self._client

    async def _get(self, path: str, params: Mapping[str, Any] | None = None) -> httpx.Response:
        client = await self._ensure_client()
        try:
            return await client.get(path, params=params)
        except httpx.HTTPError as exc:
            raise IdentityError(f"Identity request failed: {exc}") from exc

    @staticmethod
    def _json(response: httpx.Response) -> Any:
        try:
            return response.json()
        except ValueError as exc:
            raise IdentityError("Identity provider returned malformed JSON") from exc

    async def list_users(self, user_ids: Iterable[str]) -> list[dict[str, Any]]:
        """Return raw provider records for the given ids.

        The provider is asked to filter by id and the page is sized well past
        the id count; records outside the requested set, or that are not
        objects, are dropped in case the filter is not honoured.
        """
        wanted = {str(user_id) for user_id in user_ids}
        if not wanted:
            return []

        response = await self._get(
            "/auth/v1/admin/users",
            params={
                "filter": f"id.in.({','.join(sorted(wanted))})",
                "page": 1,
                "per_page": max(LIST_PAGE_SIZE, len(wanted)),
            },
        )
        if response.status_code != HTTP_OK:
            raise IdentityError(f"Identity provider responded with {response.status_code}")

        payload = self._json(response)
        users = payload.get("users", []) if isinstance(payload, dict) else payload
        if not isinstance(users, list):
            raise IdentityError("Identity provider returned an unexpected user list")
        return [
            user for user in users if isinstance(user, dict) and str(user.get("id")) in wanted
        ]

    async def get_user(self, user_id: str) -> dict[str, Any] | None:
        """Return one raw provider record, or None when the id is unknown."""
        response = await self._get(f"/auth/v1/admin/users/{user_id}")
        if response.status_code == HTTP_NOT_FOUND:
            return None
        if response.status_code != HTTP_OK:
            raise IdentityError(f"Identity provider responded with {response.status_code}")

        payload = self._json(response)
        if isinstance(payload, dict) and isinstance(payload.get("user"), dict):
            return payload["user"]
        if not isinstance(payload, dict):
            raise IdentityError("Identity provider returned an unexpected user record")
        return payload

    async def close(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None


class IdentityResolver:
    """Resolve creator ids into display identities, tolerating provider failure."""

    def __init__(self, client: IdentityClient) -> None:
        self.client = client

    async def resolve(self, user_ids: Iterable[str | None]) -> dict[str, DisplayIdentity]:
        """Return a mapping for the ids the provider knows about.

        Failures are logged and yield an empty mapping.
        """
        wanted = {str(user_id) for user_id in user_ids if user_id}
        if not wanted:
            return {}

        try:
            records = await self.client.list_users(wanted)
        except IdentityError as exc:
            logger.error("Error fetching user data for %d ids: %s", len(wanted), exc)
            return {}

        resolved: dict[str, DisplayIdentity] = {}
        for record in records:
            identity = derive_display_identity(record)
            if identity is not None:
                resolved[identity.id] = identity
        return resolved

    async def resolve_one(self, user_id: str | None) -> DisplayIdentity | None:
        """Resolve a single id via the provider's get-by-id call."""
        if not user_id:
            return None
        try:
            record = await self.client.get_user(str(user_id))
        except IdentityError as exc:
            logger.error("Error fetching user %s: %s", user_id, exc)
            return None
        return derive_display_identity(record)
