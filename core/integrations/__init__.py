"""Integration kinds and their builders."""

from .eventbridge import build_eventbridge_integration, build_eventbridge_policy
from .registry import IntegrationKind, IntegrationRegistry, default_registry

__all__ = [
    "IntegrationKind",
    "IntegrationRegistry",
    "build_eventbridge_integration",
    "build_eventbridge_policy",
    "default_registry",
]
