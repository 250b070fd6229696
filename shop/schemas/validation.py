"""
Payload validation producing a field -> message map.

Pydantic collects every failing field in one pass, so all violations are
reported together. Messages come from the schema's ``messages`` table where
one is defined for the field, falling back to pydantic's own text.
"""
from typing import Any, Mapping, Type, TypeVar
import logging

from pydantic import BaseModel, ValidationError

from shop.core.exceptions import ValidationFailed

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)

REQUIRED_MESSAGE = "This field is required"
BODY_MESSAGE = "Request body must be a JSON object"

# Range/length violations get the schema's message; type errors keep pydantic's.
CONSTRAINT_ERRORS = frozenset(
    {
        "string_too_short",
        "string_too_long",
        "greater_than",
        "greater_than_equal",
        "less_than",
        "less_than_equal",
    }
)


def _field_name(loc: tuple) -> str:
    return ".".join(str(part) for part in loc) or "body"


def collect_errors(schema: Type[BaseModel], exc: ValidationError) -> dict[str, str]:
    """Flatten a pydantic ValidationError into ``{field: message}``.

    Only the first message per field is kept.
    """
    messages: Mapping[str, str] = getattr(schema, "messages", {})
    errors: dict[str, str] = {}
    for error in exc.errors():
        field = _field_name(error["loc"])
        if field in errors:
            continue
        if error["type"] == "missing" or error.get("input", ...) is None:
            errors[field] = REQUIRED_MESSAGE
        elif error["type"] in CONSTRAINT_ERRORS:
            errors[field] = messages.get(field, error["msg"])
        else:
            errors[field] = error["msg"]
    return errors


def validate_payload(schema: Type[M], data: Any) -> M:
    """Validate *data* against *schema*.

    Raises:
        ValidationFailed: with every violated field when *data* is invalid.
    """
    if not isinstance(data, Mapping):
        logger.warning("Rejected non-object payload for %s", schema.__name__)
        raise ValidationFailed({"body": BODY_MESSAGE})
    try:
        return schema.model_validate(dict(data))
    except ValidationError as exc:
        errors = collect_errors(schema, exc)
        logger.warning(
            "Validation failed for %s: %s", schema.__name__, ", ".join(sorted(errors))
        )
        raise ValidationFailed(errors) from exc
