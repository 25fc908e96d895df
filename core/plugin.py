"""Packaging hook adapter for a Serverless-style host framework."""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Mapping, MutableMapping, Optional

from core.constants import DEFAULT_STAGE, PACKAGE_HOOK
from core.models import SynthesisResult
from core.synthesizer import TemplateSynthesizer

LOG = logging.getLogger(__name__)

Hook = Callable[[], Any]


class ApiGatewayIntegrationPlugin:
    """Adds the integration resources to the compiled template when packaging.

    ``service`` is the host's service mapping: the integration block is read
    from ``custom.integrations`` and the compiled template from
    ``provider.compiledCloudFormationTemplate``.
    """

    def __init__(
        self,
        service: MutableMapping[str, Any],
        options: Optional[Mapping[str, Any]] = None,
        synthesizer: TemplateSynthesizer | None = None,
    ) -> None:
        self.service = service
        self.options = dict(options or {})
        self.synthesizer = synthesizer or TemplateSynthesizer()
        custom = service.get("custom")
        integrations = custom.get("integrations") if isinstance(custom, Mapping) else None
        self.config: Optional[Mapping[str, Any]] = integrations or None
        self.hooks: Dict[str, Hook] = {}

        if not self.config:
            return

        self.hooks = {PACKAGE_HOOK: self.do_package}

    @property
    def provider(self) -> MutableMapping[str, Any]:
        return self.service.setdefault("provider", {})

    @property
    def stage(self) -> str:
        return self.options.get("stage") or self.provider.get("stage") or DEFAULT_STAGE

    @property
    def template(self) -> MutableMapping[str, Any]:
        return self.provider.setdefault("compiledCloudFormationTemplate", {"Resources": {}})

    def do_package(self) -> Optional[SynthesisResult]:
        if not self.config:
            return None
        result = self.synthesizer.synthesize(self.config, self.stage)
        if result is None:
            return None
        overwrite = self.options.get("allowOverwrite", True)
        self.synthesizer.merge_resources(self.template, result.resources, overwrite=overwrite)
        return result

    def run_hook(self, name: str) -> Any:
        hook = self.hooks.get(name)
        if hook is None:
            LOG.debug("No handler registered for %s", name)
            return None
        return hook()


__all__ = ["ApiGatewayIntegrationPlugin"]
