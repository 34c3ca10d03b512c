# -*- coding: utf-8 -*-
"""Scanner configuration (conf/settings.ini)."""

from core.config.loader import ConfigLoader, ScannerSettings, load_settings

__all__ = [
    "ConfigLoader",
    "ScannerSettings",
    "load_settings",
]
