"""Typed field accessors for loosely-structured JSON objects.

All leniency/strictness policy for reading match JSON lives here:

* ``require_field`` -- the field must be present and non-null.
* ``optional_field`` -- absent or null yields the caller's default.

Values are coerced through cached Pydantic ``TypeAdapter`` instances in
lax mode, so ``"42"`` and ``42.0`` both read as the int ``42`` while
``42.5``, ``"abc"`` or ``true`` fail.  Adapters are immutable once built
and ``lru_cache`` is thread-safe, so concurrent callers can share them.

Usage::

    from dotaloader.accessors import Int64, optional_field, require_field

    match_id = require_field(data, "match_id", Int64)
    account_id = optional_field(player, "account_id", Int64, -1)
"""

from functools import lru_cache
from typing import Annotated, Any

from pydantic import Field, TypeAdapter, ValidationError

from dotaloader.exceptions import FieldTypeError, MalformedLineError, MissingFieldError

# Storage column widths
Int32 = Annotated[int, Field(ge=-(2**31), le=2**31 - 1)]
Int64 = Annotated[int, Field(ge=-(2**63), le=2**63 - 1)]
# NaN and Infinity would be stored as null
FiniteFloat = Annotated[float, Field(allow_inf_nan=False)]


@lru_cache(maxsize=None)
def _adapter(type_: Any) -> TypeAdapter:
    return TypeAdapter(type_)


def coerce(value: Any, type_: Any, name: str) -> Any:
    """Coerce ``value`` to ``type_``, naming ``name`` in any failure.

    Raises:
        FieldTypeError: If the value cannot be read as ``type_``.
    """
    # JSON true/false are never numbers, strings or containers
    if isinstance(value, bool) and type_ is not bool:
        raise FieldTypeError(
            f"Field {name!r} has boolean value {value!r}", field=name, value=value
        )
    try:
        return _adapter(type_).validate_python(value)
    except ValidationError as e:
        raise FieldTypeError(
            f"Field {name!r} has invalid value {value!r}: "
            f"{e.errors()[0]['msg']}",
            field=name,
            value=value,
        ) from e


def _as_object(obj: Any, name: str) -> dict:
    if not isinstance(obj, dict):
        raise MalformedLineError(
            f"Expected a JSON object when reading {name!r}, "
            f"got {type(obj).__name__}",
            field=name,
        )
    return obj


def require_field(obj: dict, name: str, type_: Any) -> Any:
    """Read a required field.

    Args:
        obj: Decoded JSON object.
        name: Field name in ``obj``.
        type_: Target type (``int``, ``Int64``, ``list``, ...).

    Returns:
        The coerced value.

    Raises:
        MissingFieldError: If the field is absent or JSON-null.
        FieldTypeError: If the field cannot be coerced.
    """
    value = _as_object(obj, name).get(name)
    if value is None:
        state = "null" if name in obj else "missing"
        raise MissingFieldError(
            f"Required field {name!r} is {state}", field=name
        )
    return coerce(value, type_, name)


def optional_field(obj: dict, name: str, type_: Any, default: Any) -> Any:
    """Read an optional field, returning ``default`` if absent or null."""
    value = _as_object(obj, name).get(name)
    if value is None:
        return default
    return coerce(value, type_, name)
