"""surfraw 配置文件生成：结构化选项与自由设置的合并、冲突检测与渲染。"""

from src.surfraw.collisions import Collision, CollisionError, find_collisions, validate_settings
from src.surfraw.options import BrowserConfig, StructuredConfig, resolve_structured_config
from src.surfraw.projection import RESERVED_SETTINGS, ReservedPathError, project_settings
from src.surfraw.render import render_config, render_document, settings_to_config_lines
from src.surfraw.settings import resolve_settings
from src.surfraw.values import Boolean, Integer, StringList, Text, format_value, setting_value

__all__ = [
    "Boolean",
    "BrowserConfig",
    "Collision",
    "CollisionError",
    "Integer",
    "RESERVED_SETTINGS",
    "ReservedPathError",
    "StringList",
    "StructuredConfig",
    "Text",
    "find_collisions",
    "format_value",
    "project_settings",
    "render_config",
    "render_document",
    "resolve_settings",
    "resolve_structured_config",
    "setting_value",
    "settings_to_config_lines",
    "validate_settings",
]
