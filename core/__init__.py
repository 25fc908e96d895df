"""Core domain models and builders for the API Gateway integration synthesizer."""

from .models import (
    AmbiguousIntegrationError,
    ConfigurationError,
    EventBridgeOptions,
    IntegrationConfig,
    ResourceConflictError,
    ResourceFragment,
    SynthesisResult,
)
from .plugin import ApiGatewayIntegrationPlugin
from .synthesizer import TemplateSynthesizer

__all__ = [
    "AmbiguousIntegrationError",
    "ApiGatewayIntegrationPlugin",
    "ConfigurationError",
    "EventBridgeOptions",
    "IntegrationConfig",
    "ResourceConflictError",
    "ResourceFragment",
    "SynthesisResult",
    "TemplateSynthesizer",
]
