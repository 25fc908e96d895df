"""Output helpers for the apigwint CLI."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel

FORMATS = ("json", "yaml", "table")


class TemplateLoader(yaml.SafeLoader):
    """Safe loader that expands CloudFormation short-form intrinsic tags."""


def _construct_intrinsic(loader: TemplateLoader, suffix: str, node: yaml.Node) -> dict[str, Any]:
    if isinstance(node, yaml.ScalarNode):
        value: Any = loader.construct_scalar(node)
    elif isinstance(node, yaml.SequenceNode):
        value = loader.construct_sequence(node, deep=True)
    else:
        value = loader.construct_mapping(node, deep=True)

    if suffix in {"Ref", "Condition"}:
        return {suffix: value}
    # !GetAtt Resource.Attribute is the scalar form of [Resource, Attribute]
    if suffix == "GetAtt" and isinstance(value, str):
        value = value.split(".", 1)
    return {f"Fn::{suffix}": value}


TemplateLoader.add_multi_constructor("!", _construct_intrinsic)


def _default_serializer(value: Any) -> Any:
    if isinstance(value, BaseModel):
        return value.model_dump(by_alias=True)
    if isinstance(value, set):
        return sorted(value)
    if isinstance(value, Path):
        return str(value)
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def render(data: Any, fmt: str) -> str:
    if fmt == "json":
        return json.dumps(data, indent=2, default=_default_serializer)
    if fmt == "yaml":
        plain = json.loads(json.dumps(data, default=_default_serializer))
        return yaml.safe_dump(plain, sort_keys=False, default_flow_style=False).rstrip("\n")
    if fmt == "table":
        return _to_table(data)
    raise ValueError(f"Unsupported format: {fmt}")


def emit(data: Any, fmt: str, output_path: Path | None = None) -> None:
    rendered = render(data, fmt)
    if output_path:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(rendered + ("\n" if not rendered.endswith("\n") else ""), encoding="utf-8")
    else:
        print(rendered)


def load_document(path: Path) -> Any:
    """Read a JSON or YAML document, returning an empty mapping for empty files."""
    raw = path.read_text(encoding="utf-8")
    if not raw.strip():
        return {}
    if path.suffix == ".json":
        return json.loads(raw)
    return yaml.load(raw, Loader=TemplateLoader)


def _to_table(data: Any) -> str:
    if isinstance(data, dict) and isinstance(data.get("Resources"), dict):
        data = data["Resources"]
    if isinstance(data, dict) and data and all(isinstance(value, dict) and "Type" in value for value in data.values()):
        rows = [{"LogicalId": name, "Type": value["Type"]} for name, value in data.items()]
        return _to_table(rows)
    if isinstance(data, list) and data and isinstance(data[0], dict):
        headers = list(dict.fromkeys(key for row in data for key in row.keys()))
        widths = {header: max(len(header), *(len(str(row.get(header, ""))) for row in data)) for header in headers}
        header_line = " ".join(header.ljust(widths[header]) for header in headers)
        sep_line = " ".join("-" * widths[header] for header in headers)
        rows = [" ".join(str(row.get(header, "")).ljust(widths[header]) for header in headers) for row in data]
        return "\n".join([header_line, sep_line, *rows])
    if isinstance(data, dict):
        width = max(len(str(key)) for key in data.keys()) if data else 0
        return "\n".join(f"{str(key).ljust(width)} : {value}" for key, value in data.items())
    if isinstance(data, list):
        return "\n".join(str(item) for item in data)
    return str(data)


__all__ = ["FORMATS", "TemplateLoader", "emit", "load_document", "render"]
