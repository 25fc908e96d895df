"""Command line interface for synthesizing API Gateway integrations."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Any, Mapping

from cli import config, output
from core.models import ConfigurationError, ResourceConflictError
from core.plugin import ApiGatewayIntegrationPlugin
from core.synthesizer import TemplateSynthesizer


class CLIError(Exception):
    def __init__(self, message: str, exit_code: int = 2) -> None:
        super().__init__(message)
        self.exit_code = exit_code


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="apigwint", description="API Gateway integration synthesizer")
    parser.add_argument("--config", type=Path, default=Path("apigwint.yml"), help="Path to CLI configuration file")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    subparsers = parser.add_subparsers(dest="command", required=True)

    # kinds ------------------------------------------------------------------
    kinds_cmd = subparsers.add_parser("kinds", help="List supported integration kinds")
    kinds_cmd.add_argument("--format", choices=output.FORMATS, help="Output format override")

    # validate ---------------------------------------------------------------
    validate_cmd = subparsers.add_parser("validate", help="Validate the integration configuration")
    validate_cmd.add_argument("--service", type=Path, required=True, help="Service file holding custom.integrations")
    validate_cmd.add_argument("--format", choices=output.FORMATS, help="Output format override")

    # synth ------------------------------------------------------------------
    synth_cmd = subparsers.add_parser("synth", help="Print the synthesized resources")
    synth_cmd.add_argument("--service", type=Path, required=True)
    synth_cmd.add_argument("--stage")
    synth_cmd.add_argument("--output", type=Path)
    synth_cmd.add_argument("--format", choices=output.FORMATS, help="Output format override")

    # package ----------------------------------------------------------------
    package_cmd = subparsers.add_parser("package", help="Merge the resources into a compiled template")
    package_cmd.add_argument("--service", type=Path, required=True)
    package_cmd.add_argument("--template", type=Path, help="Compiled template to merge into")
    package_cmd.add_argument("--stage")
    package_cmd.add_argument("--no-overwrite", action="store_true", help="Fail instead of replacing existing resources")
    package_cmd.add_argument("--output", type=Path)
    package_cmd.add_argument("--format", choices=output.FORMATS, help="Output format override")

    return parser


def app(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        try:
            settings = config.load_settings(args.config)
        except ValueError as exc:
            raise CLIError(f"Invalid settings in {args.config}: {exc}") from exc
        _configure_logging("DEBUG" if args.verbose else settings.log_level)
        allow_overwrite = False if getattr(args, "no_overwrite", False) else None
        merged = settings.merge_cli(
            format_override=getattr(args, "format", None),
            stage_override=getattr(args, "stage", None),
            allow_overwrite=allow_overwrite,
        )

        if args.command == "kinds":
            return _cmd_kinds(args, merged)
        if args.command == "validate":
            return _cmd_validate(args, merged)
        if args.command == "synth":
            return _cmd_synth(args, merged)
        if args.command == "package":
            return _cmd_package(args, merged)
    except CLIError as exc:
        print(exc, file=sys.stderr)
        return exc.exit_code
    except ConfigurationError as exc:
        print(f"Invalid configuration: {exc}", file=sys.stderr)
        return 2
    except ResourceConflictError as exc:
        print(exc, file=sys.stderr)
        return 3
    except Exception as exc:  # pragma: no cover - unexpected errors bubble up
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    return 0


# ---------------------------------------------------------------------------
# Command implementations


def _cmd_kinds(args: argparse.Namespace, settings: config.Settings) -> int:
    registry = TemplateSynthesizer().registry
    rows = [
        {"key": kind.key, "name": kind.name, "options": ", ".join(_option_names(kind.options_model))}
        for kind in registry.kinds.values()
    ]
    output.emit(rows, settings.default_format)
    return 0


def _cmd_validate(args: argparse.Namespace, settings: config.Settings) -> int:
    integrations = _integrations_block(_load_service(args.service))
    synthesizer = TemplateSynthesizer()
    kind = synthesizer.resolve(integrations)
    if kind is None:
        raise CLIError(f"No integration type recognised, expecting one of {synthesizer.registry.describe()}")
    common, options = synthesizer.validate(integrations, kind)
    payload = {
        "valid": True,
        "kind": kind.key,
        "prefix": common.prefix,
        "options": options.model_dump(by_alias=True),
    }
    output.emit(payload, settings.default_format)
    return 0


def _cmd_synth(args: argparse.Namespace, settings: config.Settings) -> int:
    service = _load_service(args.service)
    integrations = _integrations_block(service)
    stage = args.stage or _provider(service).get("stage") or settings.default_stage
    result = TemplateSynthesizer().synthesize(integrations, stage)
    resources = result.resources if result else {}
    output.emit(resources, settings.default_format, output_path=args.output)
    return 0


def _cmd_package(args: argparse.Namespace, settings: config.Settings) -> int:
    service = _load_service(args.service)
    _integrations_block(service)
    template = output.load_document(args.template) if args.template else {}
    if not isinstance(template, dict):
        raise CLIError(f"{args.template} must contain a template mapping")
    if not template.get("Resources"):
        template["Resources"] = {}
    _provider(service)["compiledCloudFormationTemplate"] = template

    options: dict[str, Any] = {"allowOverwrite": settings.allow_overwrite}
    if args.stage:
        options["stage"] = args.stage
    elif not _provider(service).get("stage"):
        options["stage"] = settings.default_stage

    plugin = ApiGatewayIntegrationPlugin(service, options)
    plugin.run_hook("package:compileEvents")
    output.emit(plugin.template, settings.default_format, output_path=args.output)
    return 0


# ---------------------------------------------------------------------------
# Helpers


def _configure_logging(level: str) -> None:
    logging.basicConfig(level=level, stream=sys.stderr, format="%(levelname)s %(name)s: %(message)s")


def _load_service(path: Path) -> dict[str, Any]:
    if not path.exists():
        raise CLIError(f"Service file not found: {path}")
    data = output.load_document(path)
    if not isinstance(data, dict):
        raise CLIError(f"{path} must contain a mapping")
    return data


def _provider(service: dict[str, Any]) -> dict[str, Any]:
    provider = service.get("provider")
    if not isinstance(provider, dict):
        provider = service["provider"] = {}
    return provider


def _integrations_block(service: Mapping[str, Any]) -> Mapping[str, Any]:
    custom = service.get("custom") or {}
    integrations = custom.get("integrations") if isinstance(custom, Mapping) else None
    if not integrations:
        raise CLIError("Service file has no custom.integrations block")
    return integrations


def _option_names(model: Any) -> list[str]:
    return [info.alias or name for name, info in model.model_fields.items()]


def main() -> None:
    raise SystemExit(app())


if __name__ == "__main__":
    main()
