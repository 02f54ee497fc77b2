"""Application handlers – @handles, HandlerRegistry, per-message resolution scopes."""
from labelbus.application.handlers.decorators import handled_type, handles
from labelbus.application.handlers.registry import HandlerRegistration, HandlerRegistry
from labelbus.application.handlers.scope import Lifetime, ResolutionScope, ScopeFactory

__all__ = [
    "HandlerRegistration",
    "HandlerRegistry",
    "Lifetime",
    "ResolutionScope",
    "ScopeFactory",
    "handled_type",
    "handles",
]
