"""
Parameter normalization module.

Turns caller-supplied generation parameters into the ``parameters`` section
of a Mistral request body, driven entirely by the schema table in
config/schema.py. Invalid values are rejected, never clamped.
"""

from typing import Any, Dict, Mapping, Optional, Union

from pydantic import ValidationError

from ...config.schema import SCHEMA, check_value, get_schema, resolve_default
from ...errors import ConfigurationError
from ...models.generation import GenerationParams


def build_params(raw_params: Optional[Mapping[str, Any]] = None, **overrides) -> GenerationParams:
    """
    Build GenerationParams from a loose dict.

    Pydantic type errors are reported as ConfigurationError so callers only
    deal with one kind of rejected-configuration failure.
    """
    data = dict(raw_params or {})
    data.update({k: v for k, v in overrides.items() if v is not None})
    try:
        return GenerationParams(**data)
    except ValidationError as e:
        errors = {
            ".".join(str(part) for part in err["loc"]) or "params": err["msg"]
            for err in e.errors()
        }
        raise ConfigurationError("Invalid generation parameters", errors=errors) from e


def _explicit_values(params: Union[GenerationParams, Mapping[str, Any]]) -> Dict[str, Any]:
    if isinstance(params, GenerationParams):
        return params.model_dump(exclude_none=True)
    return {k: v for k, v in params.items() if v is not None}


def validate_parameters(values: Mapping[str, Any]) -> Dict[str, str]:
    """
    Validate parameter values against the schema.

    Args:
        values: Parameter name to value; names not in the schema are ignored

    Returns:
        Dict of parameter name to failure message (empty if all valid)
    """
    errors: Dict[str, str] = {}
    for name, value in values.items():
        schema_field = SCHEMA.get(name)
        if schema_field is None or value is None:
            continue
        ok, message = check_value(schema_field, value)
        if not ok:
            errors[name] = message or "Invalid value"
    return errors


def form_parameters(params: Union[GenerationParams, Mapping[str, Any]]) -> Dict[str, Any]:
    """
    Form the request parameters for a chat-completion call.

    Explicit values win; otherwise each schema default is resolved once (a
    default may be a zero-argument resolver). Parameters whose resolved value
    is None are left out of the request.

    Args:
        params: GenerationParams or a plain mapping of parameter values

    Returns:
        Dict of schema parameters, in schema order, ready for the request body

    Raises:
        ConfigurationError: If any value fails its type or range check
    """
    explicit = _explicit_values(params)

    formed: Dict[str, Any] = {}
    for schema_field in get_schema():
        if schema_field.name in explicit:
            value = explicit[schema_field.name]
        else:
            value = resolve_default(schema_field.default)
        if value is not None:
            formed[schema_field.name] = value

    errors = validate_parameters(formed)
    if errors:
        details = "; ".join(f"{name}: {message}" for name, message in errors.items())
        raise ConfigurationError(f"Rejected parameters ({details})", errors=errors)

    return formed
