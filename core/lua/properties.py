# -*- coding: utf-8 -*-
"""Script property declarations: typed values and their coercion.

A declaration looks like `go.property("speed", 12.5)`. Validation happens in
two stages and the stage decides the reported status:

1. the outer argument list must hold a quoted name plus a value, otherwise
   the property is INVALID_ARGS;
2. the value text is matched against the known literal shapes. A recognized
   constructor called with the wrong number of arguments is INVALID_ARGS,
   a component that does not coerce is INVALID_VALUE.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Tuple

from core.lua.expr import looks_numeric, parse_bool, parse_call_expr, parse_number, parse_quoted

__all__ = [
    "DEFAULT_CONSTRUCTORS",
    "Property",
    "PropertyStatus",
    "PropertyType",
    "Quat",
    "Vector3",
    "Vector4",
    "parse_property",
]

logger = logging.getLogger(__name__)


class PropertyType(str, Enum):
    NUMBER = "number"
    HASH = "hash"
    URL = "url"
    VECTOR3 = "vector3"
    VECTOR4 = "vector4"
    QUATERNION = "quaternion"
    BOOLEAN = "boolean"
    MATERIAL = "material"
    UNKNOWN = "unknown"


class PropertyStatus(str, Enum):
    OK = "ok"
    INVALID_ARGS = "invalid_args"
    INVALID_VALUE = "invalid_value"


@dataclass(frozen=True)
class Vector3:
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    def as_tuple(self) -> Tuple[float, float, float]:
        return (self.x, self.y, self.z)


@dataclass(frozen=True)
class Vector4:
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0
    w: float = 0.0

    def as_tuple(self) -> Tuple[float, float, float, float]:
        return (self.x, self.y, self.z, self.w)


@dataclass(frozen=True)
class Quat:
    """Quaternion; the default is the identity rotation."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0
    w: float = 1.0

    def as_tuple(self) -> Tuple[float, float, float, float]:
        return (self.x, self.y, self.z, self.w)


@dataclass(frozen=True)
class Property:
    name: Optional[str]
    type: PropertyType
    value: Any
    status: PropertyStatus
    line: int
    raw_value: str = field(default="", compare=False)

    @property
    def ok(self) -> bool:
        return self.status is PropertyStatus.OK


# constructor name -> property type
DEFAULT_CONSTRUCTORS: Dict[str, PropertyType] = {
    "hash": PropertyType.HASH,
    "msg.url": PropertyType.URL,
    "resource.material": PropertyType.MATERIAL,
    "vmath.vector3": PropertyType.VECTOR3,
    "vmath.vector4": PropertyType.VECTOR4,
    "vmath.quat": PropertyType.QUATERNION,
}

# accepted argument counts per constructor type
_ARITY: Dict[PropertyType, Tuple[int, ...]] = {
    PropertyType.HASH: (1,),
    PropertyType.URL: (0, 1),
    PropertyType.MATERIAL: (0, 1),
    PropertyType.VECTOR3: (0, 3),
    PropertyType.VECTOR4: (0, 4),
    PropertyType.QUATERNION: (0, 4),
}

_VECTOR_TYPES = {
    PropertyType.VECTOR3: Vector3,
    PropertyType.VECTOR4: Vector4,
    PropertyType.QUATERNION: Quat,
}


class _InvalidValue(Exception):
    pass


def _coerce_string_arg(args: List[str]) -> str:
    if not args:
        return ""
    body = parse_quoted(args[0])
    if body is None:
        raise _InvalidValue(args[0])
    return body


def _coerce_components(args: List[str]) -> List[float]:
    out: List[float] = []
    for arg in args:
        num = parse_number(arg)
        if num is None:
            raise _InvalidValue(arg)
        out.append(num)
    return out


def _coerce_value(
    value_args: List[str], constructors: Mapping[str, PropertyType]
) -> Tuple[PropertyType, Any, PropertyStatus]:
    if len(value_args) != 1:
        return PropertyType.UNKNOWN, None, PropertyStatus.INVALID_VALUE
    expr = value_args[0]

    if looks_numeric(expr):
        num = parse_number(expr)
        if num is None:
            return PropertyType.NUMBER, None, PropertyStatus.INVALID_VALUE
        return PropertyType.NUMBER, num, PropertyStatus.OK

    flag = parse_bool(expr)
    if flag is not None:
        return PropertyType.BOOLEAN, flag, PropertyStatus.OK

    call = parse_call_expr(expr)
    if call is None:
        return PropertyType.UNKNOWN, None, PropertyStatus.INVALID_VALUE

    ptype = constructors.get(call.callee)
    if ptype is None:
        return PropertyType.UNKNOWN, None, PropertyStatus.INVALID_ARGS
    args = call.args
    if len(args) not in _ARITY[ptype]:
        return ptype, None, PropertyStatus.INVALID_ARGS

    try:
        if ptype in _VECTOR_TYPES:
            value: Any = _VECTOR_TYPES[ptype](*_coerce_components(args))
        else:
            value = _coerce_string_arg(args)
    except _InvalidValue:
        return ptype, None, PropertyStatus.INVALID_VALUE
    return ptype, value, PropertyStatus.OK


def parse_property(
    arg_list: List[str],
    line: int,
    constructors: Optional[Mapping[str, PropertyType]] = None,
) -> Property:
    """Build a `Property` from the split argument list of a declaration call."""
    constructors = DEFAULT_CONSTRUCTORS if constructors is None else constructors

    name = parse_quoted(arg_list[0]) if arg_list else None
    raw_value = ", ".join(arg_list[1:])
    if name is None or len(arg_list) < 2:
        logger.debug("line %d: property declaration has invalid arguments: %r", line, arg_list)
        return Property(name, PropertyType.UNKNOWN, None, PropertyStatus.INVALID_ARGS, line, raw_value)

    ptype, value, status = _coerce_value(arg_list[1:], constructors)
    if status is not PropertyStatus.OK:
        logger.debug("line %d: property %r is %s (%r)", line, name, status.value, raw_value)
    return Property(name, ptype, value, status, line, raw_value)
