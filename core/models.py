"""Data models shared across the synthesizer."""

from __future__ import annotations

from typing import Any, Mapping, TypeVar

from pydantic import BaseModel, Field, ValidationError, computed_field

ModelT = TypeVar("ModelT", bound=BaseModel)


class ConfigurationError(ValueError):
    """Raised when the integration configuration is missing or malformed."""


class AmbiguousIntegrationError(ConfigurationError):
    """Raised when more than one integration variant block is configured."""

    def __init__(self, keys: list[str]) -> None:
        super().__init__(
            f"Ambiguous integration configuration, found more than one of [{','.join(keys)}]"
        )
        self.keys = keys


class ResourceConflictError(RuntimeError):
    """Raised when a merge would replace resources already in the template."""

    def __init__(self, names: list[str]) -> None:
        super().__init__(f"Template already defines resources: {', '.join(names)}")
        self.names = names


class EventBridgeOptions(BaseModel):
    """Options of the EventBridge variant block."""

    source_name: str = Field(..., min_length=1, alias="sourceName", description="Event source name")
    bus_name: str = Field(..., min_length=1, alias="busName", description="Target event bus name")

    model_config = {"populate_by_name": True}


class IntegrationConfig(BaseModel):
    """Fields shared by every integration kind.

    The variant block (``eventBridge`` and friends) is validated separately by
    the options model of the resolved kind.
    """

    prefix: str = Field(
        ...,
        pattern=r"^[A-Za-z0-9]+$",
        description="Naming root for every generated logical resource name",
    )
    domain: str = Field(..., min_length=1, description="Custom domain name")
    path: str = Field(..., min_length=1, description="API mapping key on the custom domain")
    title: str = Field(..., min_length=1, description="OpenAPI document title")


class ResourceFragment(BaseModel):
    """A CloudFormation resource declaration."""

    type: str = Field(..., alias="Type")
    properties: dict[str, Any] = Field(default_factory=dict, alias="Properties")

    model_config = {"populate_by_name": True}

    def as_template(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True)


class SynthesisResult(BaseModel):
    """Fragments produced for one integration, keyed by logical name."""

    kind: str
    stage: str
    resources: dict[str, dict[str, Any]] = Field(default_factory=dict)

    @computed_field
    @property
    def logical_names(self) -> list[str]:
        return list(self.resources)


def validate_model(model: type[ModelT], data: Any, location: str = "") -> ModelT:
    """Validate ``data`` against ``model`` raising :class:`ConfigurationError`."""
    if not isinstance(data, Mapping):
        where = f"'{location}'" if location else "integration configuration"
        raise ConfigurationError(f"{where} must be a mapping")
    try:
        return model.model_validate(dict(data))
    except ValidationError as exc:
        raise ConfigurationError(_describe_errors(exc, location)) from exc


def _describe_errors(exc: ValidationError, location: str) -> str:
    problems: list[str] = []
    for error in exc.errors():
        parts = [location] if location else []
        parts.extend(str(part) for part in error["loc"])
        field_name = ".".join(parts)
        if error["type"] == "missing":
            problems.append(f"missing required field '{field_name}'")
        else:
            problems.append(f"invalid field '{field_name}': {error['msg']}")
    return "; ".join(problems)


__all__ = [
    "AmbiguousIntegrationError",
    "ConfigurationError",
    "EventBridgeOptions",
    "IntegrationConfig",
    "ResourceConflictError",
    "ResourceFragment",
    "SynthesisResult",
    "validate_model",
]
