"""Resource builders for the API Gateway side of an integration."""

from __future__ import annotations

import copy
from typing import Any, Iterable

from core.constants import (
    API_MAPPING_TYPE,
    API_SUFFIX,
    API_TYPE,
    APIGATEWAY_PRINCIPAL,
    IAM_POLICY_VERSION,
    OPENAPI_INFO_VERSION,
    OPENAPI_VERSION,
    ROLE_TYPE,
    STAGE_SUFFIX,
    STAGE_TYPE,
)
from core.intrinsics import logical_name, ref
from core.models import ResourceFragment


def build_openapi_body(title: str, integration: dict[str, Any]) -> dict[str, Any]:
    """OpenAPI document with a single ``POST /`` operation.

    The integration extension keys become siblings of ``responses``.
    """
    operation: dict[str, Any] = {"responses": {"default": {"description": "Success"}}}
    operation.update(copy.deepcopy(integration))
    return {
        "openapi": OPENAPI_VERSION,
        "info": {"version": OPENAPI_INFO_VERSION, "title": title},
        "paths": {"/": {"post": operation}},
    }


def build_api_mapping(prefix: str, domain_name: str, path: str) -> dict[str, Any]:
    return ResourceFragment(
        type=API_MAPPING_TYPE,
        properties={
            "DomainName": domain_name,
            "ApiMappingKey": path,
            "ApiId": ref(logical_name(prefix, API_SUFFIX)),
            "Stage": ref(logical_name(prefix, STAGE_SUFFIX)),
        },
    ).as_template()


def build_api(title: str, integration: dict[str, Any]) -> dict[str, Any]:
    return ResourceFragment(
        type=API_TYPE,
        properties={"Body": build_openapi_body(title, integration)},
    ).as_template()


def build_stage(prefix: str, stage_name: str) -> dict[str, Any]:
    # AutoDeploy publishes a new deployment on every template update
    return ResourceFragment(
        type=STAGE_TYPE,
        properties={
            "ApiId": ref(logical_name(prefix, API_SUFFIX)),
            "StageName": stage_name,
            "AutoDeploy": True,
        },
    ).as_template()


def build_role(policies: Iterable[dict[str, Any]]) -> dict[str, Any]:
    """IAM role assumable only by the API Gateway service principal."""
    return ResourceFragment(
        type=ROLE_TYPE,
        properties={
            "AssumeRolePolicyDocument": {
                "Version": IAM_POLICY_VERSION,
                "Statement": [
                    {
                        "Effect": "Allow",
                        "Principal": {"Service": APIGATEWAY_PRINCIPAL},
                        "Action": ["sts:AssumeRole"],
                    }
                ],
            },
            "Policies": [copy.deepcopy(policy) for policy in policies],
        },
    ).as_template()


__all__ = ["build_api", "build_api_mapping", "build_openapi_body", "build_role", "build_stage"]
