"""Exceptions raised outside the generation core (config loading, handler discovery)."""


class LambdaOpenApiError(Exception):
    """Base class for lambda-openapi errors."""


class ConfigError(LambdaOpenApiError):
    """A configuration file could not be read or is invalid."""


class HandlerImportError(LambdaOpenApiError):
    """A handler module could not be imported."""
