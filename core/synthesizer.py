"""Synthesize CloudFormation resources for an API Gateway integration."""

from __future__ import annotations

import logging
from typing import Any, Mapping, MutableMapping, Optional, Tuple

from pydantic import BaseModel

from core.constants import API_MAPPING_SUFFIX, API_SUFFIX, ROLE_SUFFIX, STAGE_SUFFIX
from core.integrations.registry import IntegrationKind, IntegrationRegistry
from core.intrinsics import logical_name
from core.models import (
    ConfigurationError,
    IntegrationConfig,
    ResourceConflictError,
    SynthesisResult,
    validate_model,
)
from core.resources import build_api, build_api_mapping, build_role, build_stage

LOG = logging.getLogger(__name__)


class TemplateSynthesizer:
    """Resolve the requested integration kind and build its resources."""

    def __init__(self, registry: IntegrationRegistry | None = None) -> None:
        self.registry = registry or IntegrationRegistry()

    def resolve(self, config: Mapping[str, Any]) -> Optional[IntegrationKind]:
        if not isinstance(config, Mapping):
            raise ConfigurationError("integration configuration must be a mapping")
        return self.registry.resolve(config)

    def validate(self, config: Mapping[str, Any], kind: IntegrationKind) -> Tuple[IntegrationConfig, BaseModel]:
        """Validate the shared fields and the variant block in one pass."""
        problems: list[str] = []
        common = options = None
        try:
            common = validate_model(IntegrationConfig, config)
        except ConfigurationError as exc:
            problems.append(str(exc))
        try:
            options = validate_model(kind.options_model, config.get(kind.key), location=kind.key)
        except ConfigurationError as exc:
            problems.append(str(exc))
        if problems:
            raise ConfigurationError("; ".join(problems))
        return common, options  # type: ignore[return-value]

    def synthesize(self, config: Mapping[str, Any], stage_name: str) -> Optional[SynthesisResult]:
        kind = self.resolve(config)
        if kind is None:
            LOG.warning("No integration type recognised, expecting one of %s", self.registry.describe())
            return None
        if not stage_name:
            raise ConfigurationError("missing required field 'stage'")

        common, options = self.validate(config, kind)
        prefix = common.prefix
        policies = kind.build_policies(options)
        extension = kind.build_extension(prefix, options)

        resources = {
            logical_name(prefix, API_MAPPING_SUFFIX): build_api_mapping(prefix, common.domain, common.path),
            logical_name(prefix, API_SUFFIX): build_api(common.title, extension),
            logical_name(prefix, STAGE_SUFFIX): build_stage(prefix, stage_name),
            logical_name(prefix, ROLE_SUFFIX): build_role(policies),
        }
        LOG.debug("Synthesized %s integration resources: %s", kind.name, ", ".join(resources))
        return SynthesisResult(kind=kind.key, stage=stage_name, resources=resources)

    @staticmethod
    def merge_resources(
        template: MutableMapping[str, Any],
        resources: Mapping[str, dict[str, Any]],
        *,
        overwrite: bool = True,
    ) -> list[str]:
        """Write ``resources`` into ``template['Resources']``.

        Returns the logical names that replaced an existing resource. With
        ``overwrite`` disabled nothing is written when any name is taken.
        """
        target = template.get("Resources") or {}
        if not isinstance(target, MutableMapping):
            raise ConfigurationError("template Resources must be a mapping")
        template["Resources"] = target
        replaced = [name for name in resources if name in target]
        if replaced and not overwrite:
            raise ResourceConflictError(replaced)
        for name in replaced:
            LOG.debug("Replacing existing resource %s", name)
        target.update(resources)
        LOG.info("Wrote %d resources to template", len(resources))
        return replaced


__all__ = ["TemplateSynthesizer"]
