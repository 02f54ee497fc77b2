"""Application handlers – Lifetime, ResolutionScope, ScopeFactory.

A :class:`ResolutionScope` is opened for exactly one message. Scoped
instances are created at most once per scope and released when the scope
closes, so handlers holding per-message state are never shared between
concurrently processed deliveries.
"""
from __future__ import annotations

import inspect
from collections.abc import AsyncIterator, Callable, Hashable
from contextlib import asynccontextmanager
from enum import Enum
from typing import Any

from labelbus.observability.logging import get_logger

type InstanceFactory = Callable[["ResolutionScope"], Any]

_log = get_logger(__name__)


class Lifetime(str, Enum):
    SINGLETON = "singleton"
    SCOPED = "scoped"
    TRANSIENT = "transient"


class ResolutionScope:
    """Short-lived instance cache owned by one message."""

    def __init__(self, singletons: dict[Hashable, Any]) -> None:
        self._singletons = singletons
        self._scoped: dict[Hashable, Any] = {}
        self._owned: list[Any] = []
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def resolve(self, key: Hashable, factory: InstanceFactory, lifetime: Lifetime = Lifetime.SCOPED) -> Any:
        if self._closed:
            raise RuntimeError("ResolutionScope is closed")
        if lifetime is Lifetime.SINGLETON:
            if key not in self._singletons:
                self._singletons[key] = factory(self)
            return self._singletons[key]
        if lifetime is Lifetime.SCOPED and key in self._scoped:
            return self._scoped[key]
        instance = factory(self)
        self._owned.append(instance)
        if lifetime is Lifetime.SCOPED:
            self._scoped[key] = instance
        return instance

    async def aclose(self, *, raise_errors: bool = True) -> None:
        """Release owned instances in reverse creation order.

        Every instance is released even when an earlier release fails; the
        first failure is re-raised afterwards unless *raise_errors* is false.
        """
        if self._closed:
            return
        self._closed = True
        owned, self._owned = self._owned, []
        self._scoped.clear()
        errors: list[BaseException] = []
        for instance in reversed(owned):
            try:
                await _release(instance)
            except Exception as exc:  # noqa: BLE001 – keep releasing the rest
                _log.warning("scope_release_failed", instance=type(instance).__qualname__, error=str(exc))
                errors.append(exc)
        if errors and raise_errors:
            raise errors[0]


async def _release(instance: Any) -> None:
    closer = getattr(instance, "aclose", None) or getattr(instance, "close", None)
    if closer is None:
        return
    result = closer()
    if inspect.isawaitable(result):
        await result


class ScopeFactory:
    """Create per-message resolution scopes sharing one singleton cache."""

    def __init__(self) -> None:
        self._singletons: dict[Hashable, Any] = {}

    @asynccontextmanager
    async def new_scope(self) -> AsyncIterator[ResolutionScope]:
        scope = ResolutionScope(self._singletons)
        try:
            yield scope
        except BaseException:
            # the body's error wins over release failures
            await scope.aclose(raise_errors=False)
            raise
        await scope.aclose()


__all__ = ["InstanceFactory", "Lifetime", "ResolutionScope", "ScopeFactory"]
