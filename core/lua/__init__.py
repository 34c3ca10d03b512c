# -*- coding: utf-8 -*-
"""Lua script scanning: requires, script properties and property stripping."""

from core.lua.call_extractor import PROPERTY_CALL, REQUIRE_CALL, LuaCall, LuaCallExtractor
from core.lua.expr import LuaCallExpr, NUM_RE, looks_numeric, parse_bool, parse_call_expr, parse_number, parse_quoted
from core.lua.match import find_matching
from core.lua.properties import (
    DEFAULT_CONSTRUCTORS,
    Property,
    PropertyStatus,
    PropertyType,
    Quat,
    Vector3,
    Vector4,
    parse_property,
)
from core.lua.rewrite import statement_span, strip_statements
from core.lua.settings import ScannerSettings
from core.lua.scan import Region, Segment, SourceView, scan_source
from core.lua.split import split_top_level
from core.lua.scanner import LuaScanner, scan_file

__all__ = [
    "LuaCall",
    "LuaCallExtractor",
    "LuaCallExpr",
    "LuaScanner",
    "PROPERTY_CALL",
    "REQUIRE_CALL",
    "DEFAULT_CONSTRUCTORS",
    "NUM_RE",
    "Property",
    "PropertyStatus",
    "PropertyType",
    "Quat",
    "Vector3",
    "Vector4",
    "Region",
    "Segment",
    "ScannerSettings",
    "SourceView",
    "find_matching",
    "looks_numeric",
    "parse_bool",
    "parse_call_expr",
    "parse_number",
    "parse_property",
    "parse_quoted",
    "scan_file",
    "scan_source",
    "split_top_level",
    "statement_span",
    "strip_statements",
]
