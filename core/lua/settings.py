# -*- coding: utf-8 -*-
"""Call names the scanner recognizes."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict

from core.lua.call_extractor import PROPERTY_CALL, REQUIRE_CALL
from core.lua.properties import DEFAULT_CONSTRUCTORS, PropertyType

__all__ = ["ScannerSettings"]


@dataclass(frozen=True)
class ScannerSettings:
    """Defaults match the engine's script API; see conf/settings.ini to override."""

    require_call: str = REQUIRE_CALL
    property_call: str = PROPERTY_CALL
    constructors: Dict[str, PropertyType] = field(default_factory=lambda: dict(DEFAULT_CONSTRUCTORS))
    log_level: str = "INFO"
