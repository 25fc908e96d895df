"""Registry of supported integration kinds keyed by their config block."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, Mapping, Optional

from pydantic import BaseModel

from core.integrations import eventbridge
from core.models import AmbiguousIntegrationError, EventBridgeOptions

ExtensionBuilder = Callable[[str, Any], Dict[str, Any]]
PolicyBuilder = Callable[[Any], list]


@dataclass(frozen=True, slots=True)
class IntegrationKind:
    """One integration variant and the builders it contributes."""

    key: str
    name: str
    options_model: type[BaseModel]
    build_extension: ExtensionBuilder
    build_policies: PolicyBuilder


@dataclass(slots=True)
class IntegrationRegistry:
    """Ordered registry of integration kinds.

    Resolution looks for registered keys among the top-level fields of the
    integration configuration, in registration order.
    """

    kinds: Optional[Dict[str, IntegrationKind]] = None

    def __post_init__(self) -> None:
        if self.kinds is None:
            self.kinds = {}
            self._register_defaults()

    def register(self, kind: IntegrationKind) -> None:
        if kind.key in self.kinds:
            raise ValueError(f"Integration kind '{kind.key}' is already registered")
        self.kinds[kind.key] = kind

    def keys(self) -> list[str]:
        return list(self.kinds)

    def get(self, key: str) -> IntegrationKind:
        return self.kinds[key]

    def resolve(self, config: Mapping[str, Any]) -> Optional[IntegrationKind]:
        matches = [key for key in self.kinds if key in config]
        if not matches:
            return None
        if len(matches) > 1:
            raise AmbiguousIntegrationError(matches)
        return self.kinds[matches[0]]

    def describe(self) -> str:
        return f"[{','.join(self.kinds)}]"

    # ------------------------------------------------------------------
    def _register_defaults(self) -> None:
        self.register(
            IntegrationKind(
                key="eventBridge",
                name="EventBridge",
                options_model=EventBridgeOptions,
                build_extension=eventbridge.extension_from_options,
                build_policies=eventbridge.policies_from_options,
            )
        )


def default_registry() -> IntegrationRegistry:
    return IntegrationRegistry()


__all__ = ["IntegrationKind", "IntegrationRegistry", "default_registry"]
