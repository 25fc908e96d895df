"""EventBridge ``PutEvents`` integration builders."""

from __future__ import annotations

from typing import Any

from core.constants import EVENTBRIDGE_POLICY_NAME, IAM_POLICY_VERSION, INTEGRATION_EXTENSION, ROLE_SUFFIX
from core.intrinsics import AWS_ACCOUNT_ID, AWS_REGION, get_att, join, logical_name
from core.models import EventBridgeOptions

PUT_EVENTS_ACTION = "events:PutEvents"
PAYLOAD_FORMAT_VERSION = "1.0"


def build_eventbridge_integration(prefix: str, source_name: str, bus_name: str) -> dict[str, Any]:
    """Vendor extension proxying the request body to ``PutEvents``."""
    return {
        INTEGRATION_EXTENSION: {
            "integrationSubtype": "EventBridge-PutEvents",
            "credentials": get_att(logical_name(prefix, ROLE_SUFFIX), "Arn"),
            "requestParameters": {
                "Detail": "$request.body.Detail",
                "DetailType": "$request.body.DetailType",
                "Source": source_name,
                "EventBusName": bus_name,
            },
            "payloadFormatVersion": PAYLOAD_FORMAT_VERSION,
            "type": "aws_proxy",
            "connectionType": "INTERNET",
        }
    }


def build_eventbridge_policy(bus_name: str) -> dict[str, Any]:
    """Inline policy allowing ``events:PutEvents`` on a single bus."""
    bus_arn = join(
        ":",
        ["arn", "aws", "events", AWS_REGION, AWS_ACCOUNT_ID, f"event-bus/{bus_name}"],
    )
    return {
        "PolicyName": EVENTBRIDGE_POLICY_NAME,
        "PolicyDocument": {
            "Version": IAM_POLICY_VERSION,
            "Statement": {
                "Action": [PUT_EVENTS_ACTION],
                "Effect": "Allow",
                "Resource": [bus_arn],
            },
        },
    }


def extension_from_options(prefix: str, options: EventBridgeOptions) -> dict[str, Any]:
    return build_eventbridge_integration(prefix, options.source_name, options.bus_name)


def policies_from_options(options: EventBridgeOptions) -> list[dict[str, Any]]:
    return [build_eventbridge_policy(options.bus_name)]


__all__ = [
    "build_eventbridge_integration",
    "build_eventbridge_policy",
    "extension_from_options",
    "policies_from_options",
]
