"""CloudFormation intrinsic function helpers."""

from __future__ import annotations

from typing import Any, Iterable

AWS_REGION = {"Ref": "AWS::Region"}
AWS_ACCOUNT_ID = {"Ref": "AWS::AccountId"}


def logical_name(prefix: str, suffix: str) -> str:
    return f"{prefix}{suffix}"


def ref(name: str) -> dict[str, str]:
    return {"Ref": name}


def get_att(name: str, attribute: str) -> dict[str, list[str]]:
    return {"Fn::GetAtt": [name, attribute]}


def join(delimiter: str, parts: Iterable[Any]) -> dict[str, list[Any]]:
    # pseudo parameter dicts are copied so callers never share them
    values = [dict(part) if isinstance(part, dict) else part for part in parts]
    return {"Fn::Join": [delimiter, values]}


__all__ = ["AWS_ACCOUNT_ID", "AWS_REGION", "get_att", "join", "logical_name", "ref"]
