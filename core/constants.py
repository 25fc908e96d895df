"""Common constants shared across apigwint modules."""

OPENAPI_VERSION = "3.0.1"
OPENAPI_INFO_VERSION = "1"
IAM_POLICY_VERSION = "2012-10-17"

API_TYPE = "AWS::ApiGatewayV2::Api"
STAGE_TYPE = "AWS::ApiGatewayV2::Stage"
API_MAPPING_TYPE = "AWS::ApiGatewayV2::ApiMapping"
ROLE_TYPE = "AWS::IAM::Role"

API_SUFFIX = "ApiGatewayApi"
STAGE_SUFFIX = "ApiGatewayStage"
API_MAPPING_SUFFIX = "ApiGatewayApiMapping"
ROLE_SUFFIX = "IamRole"

APIGATEWAY_PRINCIPAL = "apigateway.amazonaws.com"
INTEGRATION_EXTENSION = "x-amazon-apigateway-integration"
EVENTBRIDGE_POLICY_NAME = "ApiDirectWriteEventBridge"

PACKAGE_HOOK = "package:compileEvents"
DEFAULT_STAGE = "dev"
