# -*- coding: utf-8 -*-
"""LuaScanner: module dependencies, script properties and stripped source.

Typical use from a build step::

    scanner = LuaScanner()
    stripped = scanner.parse(source)
    for prop in scanner.get_properties():
        if not prop.ok:
            report(prop.line, prop.name, prop.status)
    deps = scanner.get_modules()

The scanner keeps the results of the last `parse()` only; every call starts
from empty lists. Instances are cheap, use one per thread.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional, Tuple, Union

from core.lua.settings import ScannerSettings
from core.lua.call_extractor import LuaCall, LuaCallExtractor
from core.lua.expr import parse_quoted
from core.lua.properties import Property, PropertyStatus, parse_property
from core.lua.rewrite import strip_statements
from core.lua.scan import scan_source

__all__ = [
    "LuaScanner",
    "scan_file",
]

logger = logging.getLogger(__name__)


class LuaScanner:
    def __init__(self, settings: Optional[ScannerSettings] = None):
        self.settings = settings or ScannerSettings()
        self._modules: List[str] = []
        self._requires: List[LuaCall] = []
        self._properties: List[Property] = []

    def parse(self, source: str) -> str:
        """Scan `source` and return it with every property declaration removed."""
        self._modules = []
        self._requires = []
        self._properties = []

        view = scan_source(source)
        extractor = LuaCallExtractor(view)

        for call in extractor.extract_requires(self.settings.require_call):
            self._requires.append(call)
            self._modules.append(parse_quoted(call.arg_list[0]) or "")

        prop_calls = extractor.extract_properties(self.settings.property_call)
        constructors = self.settings.constructors
        for call in prop_calls:
            self._properties.append(parse_property(call.arg_list, call.line, constructors))

        logger.debug(
            "scanned %d chars: %d modules, %d properties (%d invalid)",
            len(view.text),
            len(self._modules),
            len(self._properties),
            sum(1 for p in self._properties if not p.ok),
        )
        if not prop_calls:
            return view.text
        return strip_statements(view, prop_calls)

    def get_modules(self) -> List[str]:
        return list(self._modules)

    def get_requires(self) -> List[LuaCall]:
        """Require calls behind `get_modules()`, with their spans and lines."""
        return list(self._requires)

    def get_properties(self) -> List[Property]:
        return list(self._properties)

    def has_errors(self) -> bool:
        return any(p.status is not PropertyStatus.OK for p in self._properties)


def scan_file(
    path: Union[str, Path],
    *,
    encoding: str = "utf-8",
    settings: Optional[ScannerSettings] = None,
) -> Tuple[LuaScanner, str]:
    """
    Read and scan a script file. Returns (scanner, stripped_source).

    Read errors (missing file, bad encoding) propagate to the caller unchanged.
    """
    source = Path(path).read_text(encoding=encoding)
    scanner = LuaScanner(settings)
    stripped = scanner.parse(source)
    return scanner, stripped
