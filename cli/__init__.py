"""Command line entry points for apigwint."""
