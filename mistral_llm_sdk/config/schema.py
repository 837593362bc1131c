"""
Request parameter schema for the Mistral chat-completions endpoint.

Each entry declares the parameter's type, default, whether it may be left
out of the request and how its value is validated. The table is data: the
checking itself happens in core/normalization/params.py so that every
failure is reported together, before a request body is built.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Tuple

from .constants import MODEL_ENV_VAR
from .models import DEFAULT_MODEL, MODEL_CHOICES

Validator = Callable[[Any], Tuple[bool, str]]


@dataclass
class SchemaField:
    """One request parameter.

    Attributes:
        name: Parameter name as sent to the API
        order: Display/processing order
        type: One of "enum", "number", "integer", "list", "boolean"
        desc: Human readable description
        default: Literal default or zero-argument resolver
        optional: Whether the parameter may be omitted from the request
        mapping: Request section the value lands in
        choices: Allowed values for enum parameters
        subtype: Element type for list parameters
        validate: Returns (ok, message) for a value of the right type
    """
    name: str
    order: int
    type: str
    desc: str
    default: Any = None
    optional: bool = False
    mapping: str = "parameters"
    choices: Optional[List[str]] = None
    subtype: Optional[str] = None
    validate: Optional[Validator] = field(default=None, repr=False)


def resolve_default(value: Any) -> Any:
    """Resolve a default that may be a literal or a zero-argument resolver."""
    if callable(value):
        return value()
    return value


def _default_model() -> str:
    return os.getenv(MODEL_ENV_VAR) or DEFAULT_MODEL


SCHEMA: Dict[str, SchemaField] = {
    "model": SchemaField(
        name="model",
        order=1,
        type="enum",
        desc=(
            "ID of the model to use. See the model endpoint compatibility table "
            "for details on which models work with the Chat API."
        ),
        default=_default_model,
        choices=MODEL_CHOICES,
    ),
    "temperature": SchemaField(
        name="temperature",
        order=2,
        type="number",
        optional=True,
        default=0,
        desc=(
            "What sampling temperature to use, we recommend between 0.0 and 0.7. "
            "Higher values like 0.7 will make the output more random, while lower "
            "values like 0.2 will make it more focused and deterministic. We "
            "generally recommend altering this or top_p but not both."
        ),
        validate=lambda n: (0 <= n <= 1.5, "Must be between 0 and 1.5"),
    ),
    "top_p": SchemaField(
        name="top_p",
        order=3,
        type="number",
        optional=True,
        default=1,
        desc=(
            "Nucleus sampling, where the model considers the results of the tokens "
            "with top_p probability mass. So 0.1 means only the tokens comprising "
            "the top 10% probability mass are considered. We generally recommend "
            "altering this or temperature but not both."
        ),
        validate=lambda n: (0 <= n <= 1, "Must be between 0 and 1"),
    ),
    "max_tokens": SchemaField(
        name="max_tokens",
        order=4,
        type="integer",
        optional=True,
        default=None,
        desc=(
            "The maximum number of tokens to generate in the completion. The token "
            "count of your prompt plus max_tokens cannot exceed the model's context length."
        ),
        validate=lambda n: (n > 0, "Must be greater than 0"),
    ),
    "stop": SchemaField(
        name="stop",
        order=5,
        type="list",
        optional=True,
        default=None,
        subtype="string",
        desc=(
            "Stop generation if this token is detected. Or if one of these tokens "
            "is detected when providing an array."
        ),
        validate=lambda l: (len(l) >= 1, "Must have more than 1 element"),
    ),
    "random_seed": SchemaField(
        name="random_seed",
        order=6,
        type="number",
        optional=True,
        default=0,
        desc=(
            "The seed to use for random sampling. If set, different calls will "
            "generate deterministic results."
        ),
        validate=lambda n: (n >= 0, "Must be a non-negative number"),
    ),
    "presence_penalty": SchemaField(
        name="presence_penalty",
        order=7,
        type="number",
        optional=True,
        default=0,
        desc=(
            "Determines how much the model penalizes the repetition of words or "
            "phrases. A higher presence penalty encourages the model to use a wider "
            "variety of words and phrases, making the output more diverse and creative."
        ),
        validate=lambda n: (-2 <= n <= 2, "Must be between -2 and 2"),
    ),
    "frequency_penalty": SchemaField(
        name="frequency_penalty",
        order=8,
        type="number",
        optional=True,
        default=0,
        desc=(
            "Penalizes the repetition of words based on their frequency in the "
            "generated text. A higher frequency penalty discourages the model from "
            "repeating words that have already appeared frequently in the output, "
            "promoting diversity and reducing repetition."
        ),
        validate=lambda n: (-2 <= n <= 2, "Must be between -2 and 2"),
    ),
    "n": SchemaField(
        name="n",
        order=9,
        type="number",
        default=1,
        desc="Number of completions to return for each request, input tokens are only billed once.",
    ),
    "safe_prompt": SchemaField(
        name="safe_prompt",
        order=10,
        type="boolean",
        optional=True,
        default=False,
        desc="Whether to inject a safety prompt before all conversations.",
    ),
}


def get_schema() -> List[SchemaField]:
    """Get the schema entries in declared order."""
    return sorted(SCHEMA.values(), key=lambda f: f.order)


def check_type(schema_field: SchemaField, value: Any) -> Tuple[bool, Optional[str]]:
    """Check that a value matches the field's declared type."""
    kind = schema_field.type
    if kind == "enum":
        if value not in (schema_field.choices or []):
            return False, f"Must be one of: {', '.join(schema_field.choices or [])}"
    elif kind == "number":
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            return False, "Must be a number"
    elif kind == "integer":
        if isinstance(value, bool) or not isinstance(value, int):
            return False, "Must be an integer"
    elif kind == "list":
        if not isinstance(value, (list, tuple)):
            return False, "Must be a list"
        if schema_field.subtype == "string" and not all(isinstance(v, str) for v in value):
            return False, "All elements must be strings"
    elif kind == "boolean":
        if not isinstance(value, bool):
            return False, "Must be a boolean"
    return True, None


def check_value(schema_field: SchemaField, value: Any) -> Tuple[bool, Optional[str]]:
    """Validate a single parameter value against its schema entry."""
    ok, message = check_type(schema_field, value)
    if not ok:
        return ok, message
    if schema_field.validate is not None:
        ok, message = schema_field.validate(value)
        if not ok:
            return False, message
    return True, None


def describe_schema() -> List[Dict[str, Any]]:
    """Serializable view of the schema with defaults resolved."""
    return [
        {
            "name": f.name,
            "order": f.order,
            "type": f.type,
            "mapping": f.mapping,
            "optional": f.optional,
            "default": resolve_default(f.default),
            "choices": f.choices,
            "subtype": f.subtype,
            "desc": f.desc,
        }
        for f in get_schema()
    ]
