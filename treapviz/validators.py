"""Input validation for text typed by users.

The treap engine trusts its inputs. Hosts (like the CLI) run user supplied text
through these helpers first, and report the error message when it is rejected.
"""
from typing import NamedTuple, Optional, Union

from pydantic import BaseModel, Field, ValidationError

MIN_NODE_VALUE = -1000
MAX_NODE_VALUE = 1000
MIN_PRIORITY = 0
MAX_PRIORITY = 100


class NodeValue(BaseModel):
    value: int = Field(..., ge=MIN_NODE_VALUE, le=MAX_NODE_VALUE)


class PriorityValue(BaseModel):
    value: int = Field(..., ge=MIN_PRIORITY, le=MAX_PRIORITY)


class ValidationResult(NamedTuple):
    success: bool
    value: Optional[int] = None
    error: Optional[str] = None


def _parse_int(text: Union[str, int]) -> Union[str, int]:
    if isinstance(text, str):
        text = text.strip()
        try:
            return int(text)
        except ValueError:
            return text
    return text


def _validate(model, text: Union[str, int], label: str) -> ValidationResult:
    try:
        parsed = model(value=_parse_int(text))
    except ValidationError as error:
        details = error.errors()[0]
        return ValidationResult(False, error=f"{label}: {details['msg']}")
    return ValidationResult(True, value=parsed.value)


def validate_node_value(text: Union[str, int]) -> ValidationResult:
    """Validate a node key: an integer in [-1000, 1000]."""
    return _validate(NodeValue, text, "Value")


def validate_priority(text: Union[str, int]) -> ValidationResult:
    """Validate a node priority: an integer in [0, 100]."""
    return _validate(PriorityValue, text, "Priority")
