"""
Struct binding — copy document values onto dataclass fields.

Binding only talks to the document through ``get``: for every field a
list of candidate keys is probed and the first key present wins.

Probe order for a field ``order_price`` with ``metadata={"prop": "p"}``::

    order_price, p, orderPrice, OrderPrice, order_price, ORDER_PRICE,
    order-price, ORDER-PRICE

Supported field types: ``str``, ``int``, ``float``, ``bool``,
``datetime.timedelta``, nested dataclasses and ``Optional`` of any of
those.  Fields of other types are left untouched.
"""
from __future__ import annotations

import dataclasses
import logging
import types
import typing
from datetime import timedelta
from typing import Any, Optional, Protocol, Union

from core import naming
from core.conversions import parse_duration, parse_float, parse_int64, parse_loose_bool
from core.errors import BindingError

logger = logging.getLogger(__name__)

DEFAULT_TAG = "prop"


class SupportsGet(Protocol):
    def get(self, key: str) -> Optional[str]: ...


_SCALAR_CONVERTERS = {
    str: lambda raw: raw,
    int: parse_int64,
    float: parse_float,
    bool: parse_loose_bool,
    timedelta: parse_duration,
}


def candidate_keys(field: dataclasses.Field, tag: str = DEFAULT_TAG) -> list[str]:
    """Keys probed for *field*, in order, without duplicates."""
    name = field.name
    candidates = [name]
    tag_value = field.metadata.get(tag)
    if tag_value:
        candidates.append(tag_value)
    candidates.extend((
        naming.to_camel_lower(name),
        naming.to_camel_upper(name),
        naming.to_snake(name),
        naming.to_snake_upper(name),
        naming.to_kebab(name),
        naming.to_kebab_upper(name),
    ))
    return list(dict.fromkeys(c for c in candidates if c))


def lookup(document: SupportsGet, field: dataclasses.Field, tag: str = DEFAULT_TAG) -> Optional[str]:
    """Resolve the raw value for *field*, or ``None`` when no candidate key exists."""
    for key in candidate_keys(field, tag):
        value = document.get(key)
        if value is not None:
            return value
    return None


def populate(document: SupportsGet, target: Any, tag: str = DEFAULT_TAG) -> Any:
    """
    Fill the fields of dataclass instance *target* from *document*.

    Returns *target* for convenience.  Fields whose keys are all missing
    keep their current values.

    Raises:
        BindingError: *target* is not a dataclass instance, a value does
            not convert to its field type, or a nested dataclass cannot
            be constructed without arguments.
    """
    if not dataclasses.is_dataclass(target) or isinstance(target, type):
        raise BindingError(
            f"populate() needs a dataclass instance, got {type(target).__name__}"
        )

    try:
        hints = typing.get_type_hints(type(target))
    except NameError:
        # forward reference to a name that is not importable from the module
        hints = {}
    for field in dataclasses.fields(target):
        field_type = _unwrap_optional(hints.get(field.name, field.type))

        if dataclasses.is_dataclass(field_type):
            nested = getattr(target, field.name)
            if nested is None:
                nested = _construct(field_type, field.name)
            populate(document, nested, tag)
            setattr(target, field.name, nested)
            continue

        convert = _SCALAR_CONVERTERS.get(field_type)
        if convert is None:
            continue

        raw = lookup(document, field, tag)
        if raw is None:
            continue
        try:
            setattr(target, field.name, convert(raw))
        except ValueError as exc:
            raise BindingError(
                f"Cannot bind {raw!r} to field {field.name!r} "
                f"({field_type.__name__}): {exc}"
            ) from exc
        logger.debug("Bound field %s.%s", type(target).__name__, field.name)

    return target


def _unwrap_optional(tp: Any) -> Any:
    origin = typing.get_origin(tp)
    if origin is Union or origin is types.UnionType:
        args = [a for a in typing.get_args(tp) if a is not type(None)]
        if len(args) == 1:
            return args[0]
    return tp


def _construct(cls: type, field_name: str) -> Any:
    try:
        return cls()
    except TypeError as exc:
        raise BindingError(
            f"Cannot create nested {cls.__name__} for field {field_name!r}: {exc}"
        ) from exc
