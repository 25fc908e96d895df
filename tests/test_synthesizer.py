"""Template synthesizer tests."""

from __future__ import annotations

import logging

import pytest

from core.integrations.registry import IntegrationKind
from core.models import (
    AmbiguousIntegrationError,
    ConfigurationError,
    EventBridgeOptions,
    ResourceConflictError,
)
from core.synthesizer import TemplateSynthesizer


def _config(**overrides) -> dict:
    data = {
        "prefix": "Ord",
        "domain": "api.example.com",
        "path": "orders",
        "title": "Orders API",
        "eventBridge": {"sourceName": "svc.orders", "busName": "orders-bus"},
    }
    data.update(overrides)
    return data


def test_synthesize_emits_four_prefixed_resources():
    result = TemplateSynthesizer().synthesize(_config(prefix="Foo"), "dev")
    assert result is not None
    assert sorted(result.resources) == sorted(
        ["FooApiGatewayApiMapping", "FooApiGatewayApi", "FooApiGatewayStage", "FooIamRole"]
    )
    assert result.kind == "eventBridge"
    assert result.stage == "dev"


def test_synthesize_end_to_end_request_parameters(caplog):
    with caplog.at_level(logging.WARNING):
        result = TemplateSynthesizer().synthesize(_config(), "dev")
    assert not [record for record in caplog.records if record.levelno >= logging.WARNING]
    post = result.resources["OrdApiGatewayApi"]["Properties"]["Body"]["paths"]["/"]["post"]
    integration = post["x-amazon-apigateway-integration"]
    assert integration["requestParameters"] == {
        "Detail": "$request.body.Detail",
        "DetailType": "$request.body.DetailType",
        "Source": "svc.orders",
        "EventBusName": "orders-bus",
    }
    assert integration["credentials"] == {"Fn::GetAtt": ["OrdIamRole", "Arn"]}
    assert result.resources["OrdApiGatewayStage"]["Properties"]["StageName"] == "dev"
    assert result.resources["OrdApiGatewayApiMapping"]["Properties"]["DomainName"] == "api.example.com"
    role = result.resources["OrdIamRole"]["Properties"]
    statement = role["Policies"][0]["PolicyDocument"]["Statement"]
    assert statement["Resource"][0]["Fn::Join"][1][-1] == "event-bus/orders-bus"


def test_synthesize_is_deterministic():
    synthesizer = TemplateSynthesizer()
    assert synthesizer.synthesize(_config(), "dev") == synthesizer.synthesize(_config(), "dev")


def test_unrecognised_kind_warns_and_returns_none(caplog):
    config = _config()
    del config["eventBridge"]
    with caplog.at_level(logging.WARNING, logger="core.synthesizer"):
        result = TemplateSynthesizer().synthesize(config, "dev")
    assert result is None
    assert "No integration type recognised, expecting one of [eventBridge]" in caplog.text


def test_missing_fields_fail_before_building():
    config = _config(eventBridge={"sourceName": "svc.orders"})
    del config["title"]
    with pytest.raises(ConfigurationError) as excinfo:
        TemplateSynthesizer().synthesize(config, "dev")
    message = str(excinfo.value)
    assert "missing required field 'title'" in message
    assert "missing required field 'eventBridge.busName'" in message


def test_missing_stage_is_rejected():
    with pytest.raises(ConfigurationError):
        TemplateSynthesizer().synthesize(_config(), "")


def test_non_mapping_config_is_rejected():
    with pytest.raises(ConfigurationError):
        TemplateSynthesizer().synthesize(["eventBridge"], "dev")  # type: ignore[arg-type]


def test_ambiguous_config_is_rejected():
    synthesizer = TemplateSynthesizer()
    synthesizer.registry.register(
        IntegrationKind(
            key="sqs",
            name="SQS",
            options_model=EventBridgeOptions,
            build_extension=lambda prefix, options: {},
            build_policies=lambda options: [],
        )
    )
    with pytest.raises(AmbiguousIntegrationError):
        synthesizer.synthesize(_config(sqs={"queueName": "q"}), "dev")


def test_merge_creates_resources_section():
    template: dict = {}
    result = TemplateSynthesizer().synthesize(_config(), "dev")
    replaced = TemplateSynthesizer.merge_resources(template, result.resources)
    assert replaced == []
    assert set(template["Resources"]) == set(result.resources)


def test_merge_keeps_unrelated_resources():
    template = {"Resources": {"Other": {"Type": "AWS::SNS::Topic"}}}
    result = TemplateSynthesizer().synthesize(_config(), "dev")
    TemplateSynthesizer.merge_resources(template, result.resources)
    assert template["Resources"]["Other"] == {"Type": "AWS::SNS::Topic"}
    assert len(template["Resources"]) == 5


def test_merge_last_write_wins():
    synthesizer = TemplateSynthesizer()
    template: dict = {"Resources": {}}
    first = synthesizer.synthesize(_config(eventBridge={"sourceName": "s", "busName": "first"}), "dev")
    second = synthesizer.synthesize(_config(eventBridge={"sourceName": "s", "busName": "second"}), "dev")
    synthesizer.merge_resources(template, first.resources)
    replaced = synthesizer.merge_resources(template, second.resources)
    assert sorted(replaced) == sorted(second.resources)
    assert template["Resources"] == second.resources


def test_merge_without_overwrite_rejects_conflicts_atomically():
    synthesizer = TemplateSynthesizer()
    template = {"Resources": {"OrdIamRole": {"Type": "AWS::IAM::Role", "Properties": {}}}}
    result = synthesizer.synthesize(_config(), "dev")
    with pytest.raises(ResourceConflictError) as excinfo:
        synthesizer.merge_resources(template, result.resources, overwrite=False)
    assert excinfo.value.names == ["OrdIamRole"]
    assert list(template["Resources"]) == ["OrdIamRole"]


def test_merge_replaces_null_resources_section():
    template = {"AWSTemplateFormatVersion": "2010-09-09", "Resources": None}
    result = TemplateSynthesizer().synthesize(_config(), "dev")
    replaced = TemplateSynthesizer.merge_resources(template, result.resources)
    assert replaced == []
    assert template["Resources"] == result.resources


def test_merge_rejects_non_mapping_resources():
    template = {"Resources": ["not", "a", "mapping"]}
    result = TemplateSynthesizer().synthesize(_config(), "dev")
    with pytest.raises(ConfigurationError):
        TemplateSynthesizer.merge_resources(template, result.resources)
    assert template["Resources"] == ["not", "a", "mapping"]
