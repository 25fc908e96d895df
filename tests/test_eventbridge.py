"""EventBridge integration builder tests."""

from __future__ import annotations

from core.integrations.eventbridge import build_eventbridge_integration, build_eventbridge_policy


def test_policy_scopes_put_events_to_single_bus():
    policy = build_eventbridge_policy("orders")
    assert policy["PolicyName"] == "ApiDirectWriteEventBridge"
    statement = policy["PolicyDocument"]["Statement"]
    assert statement["Action"] == ["events:PutEvents"]
    assert statement["Effect"] == "Allow"
    assert len(statement["Resource"]) == 1
    delimiter, parts = statement["Resource"][0]["Fn::Join"]
    assert delimiter == ":"
    assert parts[-1].endswith("event-bus/orders")
    assert parts == [
        "arn",
        "aws",
        "events",
        {"Ref": "AWS::Region"},
        {"Ref": "AWS::AccountId"},
        "event-bus/orders",
    ]


def test_policies_do_not_share_pseudo_parameters():
    first = build_eventbridge_policy("a")
    first["PolicyDocument"]["Statement"]["Resource"][0]["Fn::Join"][1][3]["Ref"] = "changed"
    second = build_eventbridge_policy("b")
    assert second["PolicyDocument"]["Statement"]["Resource"][0]["Fn::Join"][1][3] == {"Ref": "AWS::Region"}


def test_integration_extension_shape():
    extension = build_eventbridge_integration("Ord", "svc.orders", "orders-bus")
    assert extension == {
        "x-amazon-apigateway-integration": {
            "integrationSubtype": "EventBridge-PutEvents",
            "credentials": {"Fn::GetAtt": ["OrdIamRole", "Arn"]},
            "requestParameters": {
                "Detail": "$request.body.Detail",
                "DetailType": "$request.body.DetailType",
                "Source": "svc.orders",
                "EventBusName": "orders-bus",
            },
            "payloadFormatVersion": "1.0",
            "type": "aws_proxy",
            "connectionType": "INTERNET",
        }
    }
