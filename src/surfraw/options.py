"""结构化浏览器配置：默认值解析、覆盖合并与只读记录。"""  # 模块说明。
from __future__ import annotations  # 启用前向注解以提升类型兼容性。

import shutil  # 导入 shutil 以在 PATH 中查找浏览器可执行文件。
from dataclasses import dataclass  # 导入 dataclass 以封装只读配置。
from pathlib import Path  # 导入 Path 构造兜底路径。
from typing import Any, Dict, Mapping, Optional, Tuple  # 导入类型注解辅助代码可读性。

from src.utils.config import deep_merge_dicts  # 复用深度合并以叠加用户覆盖。

DEFAULT_GRAPHICAL_BROWSER = "firefox"  # 默认图形浏览器名称。
DEFAULT_TEXT_BROWSER = "w3m"  # 默认文本浏览器名称。
FALLBACK_BIN_DIR = Path("/usr/bin")  # PATH 中找不到时使用的安装目录。
DEFAULT_BROWSER_ARGS: Tuple[str, ...] = ("",)  # 默认参数为单个空字符串，渲染为 none。


def resolve_browser_path(name: str) -> str:
    """返回浏览器可执行文件的绝对路径，找不到时退回 /usr/bin/<name>。"""  # 函数说明。

    located = shutil.which(name)  # 优先使用 PATH 中已安装的程序。
    if located:
        return located
    return str(FALLBACK_BIN_DIR / name)


@dataclass(frozen=True)
class BrowserConfig:
    """单个浏览器的可执行文件与命令行参数。"""  # 类说明。

    browser: str
    browser_args: Tuple[str, ...] = DEFAULT_BROWSER_ARGS

    def as_tree(self) -> Dict[str, Any]:
        """导出为使用 camelCase 键名的嵌套字典。"""  # 方法说明。
        return {"browser": self.browser, "browserArgs": list(self.browser_args)}


@dataclass(frozen=True)
class StructuredConfig:
    """surfraw 的结构化选项，一经解析即不可变。"""  # 类说明。

    use_graphical_browser: bool
    graphical: BrowserConfig
    textual: BrowserConfig

    def as_tree(self) -> Dict[str, Any]:
        """导出为点分路径可寻址的嵌套字典，键名与用户配置文件一致。"""  # 方法说明。
        return {
            "useGraphicalBrowser": self.use_graphical_browser,
            "graphical": self.graphical.as_tree(),
            "textual": self.textual.as_tree(),
        }


def default_config_tree() -> Dict[str, Any]:
    """构造内置默认值，浏览器路径在调用时解析。"""  # 函数说明。

    return {
        "useGraphicalBrowser": True,
        "graphical": {
            "browser": resolve_browser_path(DEFAULT_GRAPHICAL_BROWSER),
            "browserArgs": list(DEFAULT_BROWSER_ARGS),
        },
        "textual": {
            "browser": resolve_browser_path(DEFAULT_TEXT_BROWSER),
            "browserArgs": list(DEFAULT_BROWSER_ARGS),
        },
    }


def _browser_from_tree(node: Mapping[str, Any], section: str) -> BrowserConfig:
    """从字典节点构造 BrowserConfig，类型不符时抛出 TypeError。"""  # 工具函数说明。

    browser = node["browser"]
    if not isinstance(browser, str):
        raise TypeError(f"{section}.browser must be a string, got {type(browser).__name__}")
    args = node["browserArgs"]
    if not isinstance(args, (list, tuple)) or not all(isinstance(arg, str) for arg in args):
        raise TypeError(f"{section}.browserArgs must be a list of strings, got {args!r}")
    return BrowserConfig(browser=browser, browser_args=tuple(args))


def resolve_structured_config(overrides: Optional[Mapping[str, Any]] = None) -> StructuredConfig:
    """将用户覆盖合并到内置默认值上并返回不可变的 StructuredConfig。"""  # 函数说明。

    # None 不会覆盖默认值，因此 browser: null 等价于使用默认浏览器。
    merged = deep_merge_dicts(default_config_tree(), dict(overrides or {}))
    flag = merged["useGraphicalBrowser"]
    if not isinstance(flag, bool):  # 拒绝 "false" 这类会被 bool() 误判为真的值。
        raise TypeError(f"useGraphicalBrowser must be a boolean, got {flag!r}")
    return StructuredConfig(
        use_graphical_browser=flag,
        graphical=_browser_from_tree(merged["graphical"], "graphical"),
        textual=_browser_from_tree(merged["textual"], "textual"),
    )
