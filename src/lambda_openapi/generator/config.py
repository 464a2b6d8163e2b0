"""Generation configuration models, loading and validation.

Field names are snake_case in Python and camelCase in config files and in
the generated document (``basePath``, ``externalDocs``, ``includeOperationIds``).
"""

import logging
from pathlib import Path
from typing import Literal

import yaml
from pydantic import BaseModel, ConfigDict, ValidationError
from pydantic.alias_generators import to_camel

from lambda_openapi.errors import ConfigError

logger = logging.getLogger(__name__)


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class _OpenApiObject(_CamelModel):
    """Copied into the document as-is, so unknown keys are kept."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow")


class InfoObject(_OpenApiObject):
    title: str
    version: str
    description: str | None = None
    terms_of_service: str | None = None
    contact: dict | None = None
    license: dict | None = None


class ServerObject(_OpenApiObject):
    url: str
    description: str | None = None


class ExternalDocs(_OpenApiObject):
    url: str
    description: str | None = None


class TagObject(_OpenApiObject):
    name: str
    description: str | None = None
    external_docs: ExternalDocs | None = None


class GenerationOptions(_CamelModel):
    exported_only: bool = True  # scanner: skip _private names
    include_operation_ids: bool = False  # fall back to the function name
    sort_paths: bool = False
    sort_operations: bool = False
    include_lambda_extensions: bool = False  # x-lambda-handler
    hoist_schemas: bool = False  # components.schemas + $ref
    validate_schema: bool = False
    pretty_print: bool = True


DEFAULT_INFO = InfoObject(title="Lambda API", version="1.0.0")


class GenerationConfig(_CamelModel):
    """Everything the generator needs besides the handler list."""

    input_paths: list[str] = []
    output_path: str | None = None
    format: Literal["json", "yaml"] = "json"
    info: InfoObject = DEFAULT_INFO
    servers: list[ServerObject] | None = None
    base_path: str | None = None
    security: list[dict[str, list[str]]] | None = None
    tags: list[TagObject] | None = None
    external_docs: ExternalDocs | None = None
    options: GenerationOptions = GenerationOptions()


class ValidationIssue(BaseModel):
    rule: str
    message: str


class ConfigValidationResult(BaseModel):
    is_valid: bool
    errors: list[ValidationIssue] = []
    warnings: list[ValidationIssue] = []


def coerce_config(config: GenerationConfig | dict) -> GenerationConfig:
    """Accept either a GenerationConfig or a plain mapping."""
    if isinstance(config, GenerationConfig):
        return config
    return GenerationConfig.model_validate(config)


def load_config(file_path: Path) -> GenerationConfig:
    """Load a YAML or JSON configuration file."""
    try:
        text = file_path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read config file {file_path}: {e}") from e

    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise ConfigError(f"Config file {file_path} is not valid YAML/JSON: {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f"Config file {file_path} must contain a mapping")

    try:
        config = GenerationConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid config in {file_path}:\n{e}") from e

    logger.debug("Loaded config from %s", file_path)
    return config


def validate_config(config: GenerationConfig) -> ConfigValidationResult:
    """Check a configuration for problems the models cannot express."""
    errors = []
    warnings = []

    if not config.info.title.strip():
        errors.append(ValidationIssue(rule="info-title", message="API title must not be empty"))
    if not config.info.version.strip():
        errors.append(ValidationIssue(rule="info-version", message="API version must not be empty"))

    for i, server in enumerate(config.servers or []):
        if not server.url.strip():
            errors.append(ValidationIssue(rule="server-url", message=f"Server #{i + 1} has an empty URL"))

    if config.base_path and not config.base_path.startswith("/"):
        errors.append(ValidationIssue(rule="base-path", message="Base path must start with '/'"))

    if not config.input_paths:
        warnings.append(ValidationIssue(rule="input-paths", message="No input paths configured"))
    if not config.servers:
        warnings.append(ValidationIssue(rule="servers", message="No servers configured"))

    return ConfigValidationResult(is_valid=not errors, errors=errors, warnings=warnings)
