import configparser
import os
from pathlib import Path
from typing import Optional, Union

from core.lua.properties import PropertyType
from core.lua.settings import ScannerSettings

PROJECT_ROOT = Path(__file__).resolve().parents[2]
DEFAULT_CONFIG_PATH = PROJECT_ROOT / "conf" / "settings.ini"

VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class ConfigLoader:
    def __init__(self, config_path: Optional[Union[str, Path]] = None):
        self.project_root = PROJECT_ROOT
        self.config_path = Path(config_path).expanduser() if config_path else DEFAULT_CONFIG_PATH

        self.config = configparser.ConfigParser()
        # keep option names as written (REQUIRE_CALL, VECTOR3, ...)
        self.config.optionxform = str
        if not self.config_path.exists():
            raise FileNotFoundError(f"Missing config file: {self.config_path}")

        self.config.read(self.config_path, encoding="utf-8")

    def get(self, section, key, fallback=None):
        """Read a value, expanding user paths (~)."""
        val = self.config.get(section, key, fallback=fallback)
        if val and "~" in val:
            return os.path.expanduser(val)
        return val

    def scanner_settings(self) -> ScannerSettings:
        defaults = ScannerSettings()

        constructors = dict(defaults.constructors)
        if self.config.has_section("CONSTRUCTORS"):
            constructors = {}
            for type_name, callee in self.config.items("CONSTRUCTORS"):
                try:
                    ptype = PropertyType[type_name.strip().upper()]
                except KeyError:
                    raise ValueError(f"Unknown property type in [CONSTRUCTORS]: {type_name}") from None
                constructors[callee.strip()] = ptype

        level = (self.get("LOGGING", "LEVEL") or defaults.log_level).strip().upper()
        if level not in VALID_LOG_LEVELS:
            raise ValueError(f"Invalid log level: {level}. Must be one of {list(VALID_LOG_LEVELS)}")

        return ScannerSettings(
            require_call=(self.get("SCANNER", "REQUIRE_CALL") or defaults.require_call).strip(),
            property_call=(self.get("SCANNER", "PROPERTY_CALL") or defaults.property_call).strip(),
            constructors=constructors,
            log_level=level,
        )


def load_settings(config_path: Optional[Union[str, Path]] = None) -> ScannerSettings:
    """
    Settings from `config_path`, or from conf/settings.ini when present.

    An explicitly given path must exist; the project default is optional.
    """
    if config_path is None and not DEFAULT_CONFIG_PATH.exists():
        return ScannerSettings()
    return ConfigLoader(config_path).scanner_settings()
