"""Shared annotated field types for raw record schemas."""

from decimal import Decimal
from typing import Annotated, Any, Optional, Union

from pydantic import BeforeValidator, StrictFloat, StrictInt, StrictStr


def _false_as_missing(v: Any) -> Any:
    # JSON ``false`` in an id column means "no id"
    return None if v is False else v


def _only_true(v: Any) -> bool:
    return v is True


# Opaque identifier: must be hashable so records can be grouped and joined.
RecordId = Annotated[
    Optional[Union[StrictInt, StrictFloat, StrictStr]],
    BeforeValidator(_false_as_missing),
]

# Boolean flag where only a literal JSON ``true`` counts as set.
Flag = Annotated[bool, BeforeValidator(_only_true)]


def is_numeric(value: Any) -> bool:
    """True for JSON numbers; booleans are not amounts."""
    return isinstance(value, (int, float, Decimal)) and not isinstance(value, bool)
