"""把结构化选项投影为 surfraw 设置键的保留映射。"""  # 模块说明。
from __future__ import annotations  # 启用前向注解以提升类型兼容性。

from types import MappingProxyType  # 导入只读映射包装，防止运行时修改保留表。
from typing import Any, Dict, Mapping  # 导入类型注解辅助代码可读性。

from src.surfraw.options import BrowserConfig, StructuredConfig  # 导入结构化配置。
from src.surfraw.values import SettingValue, setting_value  # 导入值变体转换。

# 目标设置键 -> StructuredConfig 中的点分路径。
RESERVED_SETTINGS: Mapping[str, str] = MappingProxyType(
    {
        "graphical": "useGraphicalBrowser",
        "graphical_browser": "graphical.browser",
        "graphical_browser_args": "graphical.browserArgs",
        "text_browser": "textual.browser",
        "text_browser_args": "textual.browserArgs",
    }
)


class ReservedPathError(LookupError):
    """保留映射中的点分路径无法在结构化配置中解析。"""  # 异常说明。


def lookup_path(tree: Mapping[str, Any], dotted: str) -> Any:
    """按点分路径逐级查找嵌套字典中的值。"""  # 函数说明。

    cursor: Any = tree  # 从根节点开始。
    for segment in dotted.split("."):
        if not isinstance(cursor, Mapping) or segment not in cursor:
            raise ReservedPathError(f"Path '{dotted}' does not resolve (missing '{segment}')")
        cursor = cursor[segment]
    return cursor


def project_settings(
    structured: StructuredConfig,
    reserved: Mapping[str, str] = RESERVED_SETTINGS,
) -> Dict[str, SettingValue]:
    """根据保留映射从结构化配置中取值，生成合成的设置字典。"""  # 函数说明。

    tree = structured.as_tree()  # 统一以 camelCase 嵌套字典寻址。
    return {key: setting_value(lookup_path(tree, path)) for key, path in reserved.items()}


def _check_reserved_paths() -> None:
    """导入时校验保留映射的每条路径都能在结构化配置的形状上解析，不访问文件系统。"""  # 工具函数说明。

    shape = StructuredConfig(use_graphical_browser=True, graphical=BrowserConfig(""), textual=BrowserConfig(""))
    tree = shape.as_tree()
    for path in RESERVED_SETTINGS.values():
        lookup_path(tree, path)  # 无法解析时直接抛出 ReservedPathError。


_check_reserved_paths()
