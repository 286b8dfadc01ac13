"""FastAPI dependency injection helpers."""

from __future__ import annotations

import threading
import time
from dataclasses import dataclass
from functools import lru_cache
from typing import Any

from fastapi import Depends, Header

from greencredits.config import settings
from greencredits.services.common import MemoryStore, Store, SupabaseStore
from greencredits.services.user_service import UserService
from greencredits.utils.errors import ForbiddenError, UnauthorizedError
from greencredits.utils.supabase_client import get_service_client, get_supabase_client

ADMIN_ROLE = "admin"

_token_cache: dict[str, tuple[float, Any]] = {}
_cache_lock = threading.Lock()


@dataclass(frozen=True)
class Identity:
    """Caller identity as vouched for by the auth collaborator."""

    id: str
    name: str
    email: str | None = None
    role: str | None = None

    @property
    def is_admin(self) -> bool:
        return self.role == ADMIN_ROLE


def _cache_get(cache: dict[Any, tuple[float, Any]], key: Any) -> Any | None:
    """Return a cache value when present and not expired."""
    now = time.monotonic()
    with _cache_lock:
        entry = cache.get(key)
        if not entry:
            return None
        expires_at, value = entry
        if expires_at <= now:
            cache.pop(key, None)
            return None
        return value


def _cache_set(
    cache: dict[Any, tuple[float, Any]],
    key: Any,
    value: Any,
    ttl_seconds: int,
    max_entries: int,
) -> None:
    """Store a bounded cache value with TTL."""
    if ttl_seconds <= 0:
        return

    with _cache_lock:
        bounded_max_entries = max(1, max_entries)
        if len(cache) >= bounded_max_entries:
            oldest_key = next(iter(cache))
            cache.pop(oldest_key, None)
        cache[key] = (time.monotonic() + ttl_seconds, value)


@lru_cache(maxsize=1)
def get_store() -> Store:
    """Return the process-wide store selected by ``STORAGE_BACKEND``."""
    if settings.storage_backend == "supabase":
        return SupabaseStore(get_service_client())
    return MemoryStore()


def _identity_from_supabase_user(user: Any) -> Identity:
    metadata = getattr(user, "user_metadata", None) or {}
    app_metadata = getattr(user, "app_metadata", None) or {}
    email = getattr(user, "email", None)
    name = metadata.get("name") or metadata.get("full_name") or email or str(user.id)
    return Identity(id=str(user.id), name=name, email=email, role=app_metadata.get("role"))


def _verify_supabase_token(authorization: str | None) -> Identity:
    """Validate a Supabase JWT from the Authorization header.

    Raises:
        UnauthorizedError: 401 if the header is missing, malformed, or
            the token cannot be validated.
    """
    if not authorization or not authorization.startswith("Bearer "):
        raise UnauthorizedError("Missing authorization header")

    token = authorization.split(" ", 1)[1]
    cached_identity = _cache_get(_token_cache, token)
    if cached_identity is not None:
        return cached_identity

    supabase = get_supabase_client()

    try:
        response = supabase.auth.get_user(token)
        if not response or not response.user:
            raise UnauthorizedError("Invalid token")
        identity = _identity_from_supabase_user(response.user)
        _cache_set(
            _token_cache,
            token,
            identity,
            settings.auth_token_cache_ttl_seconds,
            settings.auth_token_cache_max_entries,
        )
        return identity
    except UnauthorizedError:
        raise
    except Exception as exc:
        raise UnauthorizedError("Invalid or expired token") from exc


def get_authenticated_user(
    authorization: str | None = Header(default=None),
    x_user_id: str | None = Header(default=None),
    x_user_name: str | None = Header(default=None),
    x_user_email: str | None = Header(default=None),
    x_user_role: str | None = Header(default=None),
) -> Identity:
    """Resolve the caller identity for the configured ``AUTH_MODE``.

    In ``header`` mode an upstream gateway has already authenticated the
    caller and forwards its identity in ``X-User-*`` headers.
    """
    if settings.auth_mode == "supabase":
        return _verify_supabase_token(authorization)

    if not x_user_id or not x_user_id.strip():
        raise UnauthorizedError("Authentication required")
    user_id = x_user_id.strip()
    email = x_user_email.strip().lower() if x_user_email else None
    name = (x_user_name or "").strip() or user_id
    role = x_user_role.strip().lower() if x_user_role else None
    return Identity(id=user_id, name=name, email=email, role=role)


def get_current_user(
    identity: Identity = Depends(get_authenticated_user),
    store: Store = Depends(get_store),
) -> Identity:
    """Return the authenticated caller after recording their public profile."""
    UserService(store).upsert_user(identity.id, identity.name, identity.email)
    return identity


def get_current_admin(identity: Identity = Depends(get_authenticated_user)) -> Identity:
    """Return the authenticated caller if they hold the municipal admin role."""
    if not identity.is_admin:
        raise ForbiddenError("Admin access required")
    return identity
