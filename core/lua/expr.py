# -*- coding: utf-8 -*-
"""Recognizers for the small set of Lua literal shapes a property value may take."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import List, Optional

from core.lua.match import find_matching
from core.lua.scan import _skip_short_string
from core.lua.split import split_top_level

__all__ = [
    "LuaCallExpr",
    "NUM_RE",
    "looks_numeric",
    "parse_bool",
    "parse_call_expr",
    "parse_number",
    "parse_quoted",
]


NUM_RE = re.compile(r"^[+-]?(?:\d+\.\d*|\d*\.\d+|\d+)(?:[eE][+-]?\d+)?$")
_HEX_RE = re.compile(r"^([+-]?)0[xX]([0-9a-fA-F]+)$")
_NUMERIC_START_RE = re.compile(r"^[+-]?\.?\d")
_CALLEE_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*(?:\s*[.:]\s*[A-Za-z_][A-Za-z0-9_]*)*")


@dataclass(frozen=True)
class LuaCallExpr:
    """`callee(args...)` with the callee normalised (`msg . url` -> `msg.url`)."""

    callee: str
    args: List[str]


def looks_numeric(expr: str) -> bool:
    """True when `expr` starts like a numeral, whether or not it is a valid one."""
    return bool(_NUMERIC_START_RE.match((expr or "").strip()))


def parse_number(expr: str) -> Optional[float]:
    """
    Parse a Lua numeral into a float.

    Accepts an optional sign, decimals without a leading digit (`.1`), a
    trailing dot (`1.`), exponents (`-1.0E2`) and hex integers (`0x1F`).
    """
    expr = (expr or "").strip()
    if NUM_RE.match(expr):
        return float(expr)
    m = _HEX_RE.match(expr)
    if m:
        value = float(int(m.group(2), 16))
        return -value if m.group(1) == "-" else value
    return None


def parse_bool(expr: str) -> Optional[bool]:
    expr = (expr or "").strip()
    if expr == "true":
        return True
    if expr == "false":
        return False
    return None


def parse_quoted(expr: str) -> Optional[str]:
    """Body of a single, terminated '...' or "..." literal, verbatim (escapes untouched)."""
    expr = (expr or "").strip()
    if len(expr) < 2 or expr[0] not in ("'", '"'):
        return None
    # probe with a sentinel so an unterminated literal cannot end exactly at len(expr)
    end = _skip_short_string(expr + "\n", 0, expr[0])
    if end != len(expr):
        return None
    return expr[1:-1]


def parse_call_expr(expr: str) -> Optional[LuaCallExpr]:
    """Recognize `name(...)`, `a.b(...)` or `a:b(...)` spanning all of `expr`."""
    expr = (expr or "").strip()
    m = _CALLEE_RE.match(expr)
    if not m:
        return None
    i = m.end()
    while i < len(expr) and expr[i].isspace():
        i += 1
    if i >= len(expr) or expr[i] != "(":
        return None
    close = find_matching(expr, i)
    if close != len(expr) - 1:
        return None
    callee = re.sub(r"\s+", "", m.group(0))
    return LuaCallExpr(callee=callee, args=split_top_level(expr[i + 1 : close]))
