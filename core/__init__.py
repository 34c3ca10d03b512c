# -*- coding: utf-8 -*-
"""Script scanning core: Lua lexing (core.lua) and settings (core.config)."""
