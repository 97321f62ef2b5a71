"""用户自由设置（SURFRAW_* 变量，不含前缀）的读取与类型收敛。"""  # 模块说明。
from __future__ import annotations  # 启用前向注解以提升类型兼容性。

from typing import Any, Dict, Mapping, Optional  # 导入类型注解辅助代码可读性。

from src.surfraw.values import Boolean, Integer, SettingValue, Text, setting_value  # 导入值变体。

_FREEFORM_TYPES = (Boolean, Integer, Text)  # 自由设置只允许这三种类型，列表仅来自结构化配置。


def resolve_settings(raw: Optional[Mapping[str, Any]] = None) -> Dict[str, SettingValue]:
    """将用户设置转换为值变体字典，出现列表等其他类型时抛出 TypeError。"""  # 函数说明。

    resolved: Dict[str, SettingValue] = {}
    for key, value in (raw or {}).items():
        if not isinstance(key, str) or not key:
            raise TypeError(f"Setting keys must be non-empty strings, got {key!r}")
        variant = setting_value(value)
        if not isinstance(variant, _FREEFORM_TYPES):
            raise TypeError(f"Setting '{key}' must be a boolean, integer or string, got {value!r}")
        resolved[key] = variant
    return resolved
