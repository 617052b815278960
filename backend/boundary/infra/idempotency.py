"""Stores for replayable create responses keyed by ``Idempotency-Key``."""

from __future__ import annotations

import json
import threading
import time
from dataclasses import dataclass, field
from typing import Any, Protocol, cast

import redis  # type: ignore[import-untyped]
from flask import Flask, current_app


class IdempotencyStore(Protocol):
    def get(self, key: str) -> dict[str, Any] | None: ...
    def put(self, key: str, payload: dict[str, Any], *, ttl: int) -> None: ...


@dataclass(slots=True)
class InMemoryIdempotencyStore:
    """
    Process-local store with lazy expiry.

    Only suitable for a single worker; set ``REDIS_URL`` to share keys
    between gunicorn workers.
    """

    _entries: dict[str, tuple[float, dict[str, Any]]] = field(default_factory=dict)
    _lock: threading.Lock = field(default_factory=threading.Lock)

    def get(self, key: str) -> dict[str, Any] | None:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            expires_at, payload = entry
            if expires_at <= time.monotonic():
                del self._entries[key]
                return None
            return payload

    def put(self, key: str, payload: dict[str, Any], *, ttl: int) -> None:
        with self._lock:
            self._entries[key] = (time.monotonic() + max(1, ttl), payload)


class RedisIdempotencyStore:
    """
    Redis-backed store; payloads are JSON strings under ``idem:<key>`` with a TTL.
    """

    def __init__(self, r: redis.Redis):
        self.r = r

    @staticmethod
    def _k(key: str) -> str:
        return f"idem:{key}"

    def get(self, key: str) -> dict[str, Any] | None:
        raw = self.r.get(self._k(key))
        if raw is None:
            return None
        return cast(dict[str, Any], json.loads(raw))

    def put(self, key: str, payload: dict[str, Any], *, ttl: int) -> None:
        # NX: the first stored response wins if two requests race.
        self.r.set(self._k(key), json.dumps(payload), ex=max(1, ttl), nx=True)


def init_app(app: Flask) -> None:
    """Pick the Redis store when a client is configured, the in-memory one otherwise."""
    client = app.extensions.get("redis_client")
    store: IdempotencyStore
    if client is not None:
        store = RedisIdempotencyStore(client)
    else:
        store = InMemoryIdempotencyStore()
    app.extensions["idempotency_store"] = store


def get_store() -> IdempotencyStore:
    return cast(IdempotencyStore, current_app.extensions["idempotency_store"])
