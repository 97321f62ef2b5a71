"""合并两类设置并渲染为 surfraw conf 文本。"""  # 模块说明。
from __future__ import annotations  # 启用前向注解以提升类型兼容性。

import os  # 导入 os 以读取 XDG 环境变量。
from pathlib import Path  # 导入 Path 统一路径处理。
from typing import Any, Dict, List, Mapping, Optional  # 导入类型注解辅助代码可读性。

from src.surfraw.collisions import validate_settings  # 导入冲突校验。
from src.surfraw.options import StructuredConfig  # 导入结构化配置类型。
from src.surfraw.projection import RESERVED_SETTINGS, project_settings  # 导入投影逻辑。
from src.surfraw.values import format_value  # 导入值格式化。

KEY_PREFIX = "SURFRAW_"  # surfraw 读取的变量统一前缀。
CONF_RELATIVE_PATH = Path("surfraw") / "conf"  # 相对 XDG 配置目录的文件位置。
HEADER_LINES = (
    "# Generated by surfraw-conf.",
    "# See http://surfraw.org or the projects README over at",
    "# https://gitlab.com/surfraw/Surfraw/-/blob/master/README",
)  # 写入文件时附加的来源注释。


def config_key(key: str) -> str:
    """为设置键加上 SURFRAW_ 前缀，保留原始大小写。"""  # 函数说明。
    return f"{KEY_PREFIX}{key}"


def settings_to_config_lines(settings: Mapping[str, Any]) -> List[str]:
    """将设置字典转换为按键名排序的 KEY=VALUE 行列表。"""  # 函数说明。

    return [f"{config_key(key)}={format_value(settings[key])}" for key in sorted(settings)]


def merge_settings(
    settings: Mapping[str, Any],
    structured: StructuredConfig,
    reserved: Mapping[str, str] = RESERVED_SETTINGS,
) -> Dict[str, Any]:
    """校验无冲突后合并自由设置与投影设置。"""  # 函数说明。

    projected = project_settings(structured, reserved)  # 先根据保留映射生成合成设置。
    validate_settings(settings, reserved)  # 存在冲突时抛出 CollisionError，不产生任何输出。
    merged: Dict[str, Any] = dict(settings)
    merged.update(projected)  # 键集合已确认不相交，合并不会覆盖用户值。
    return merged


def render_config(
    settings: Mapping[str, Any],
    structured: StructuredConfig,
    reserved: Mapping[str, str] = RESERVED_SETTINGS,
) -> str:
    """渲染 conf 正文，行之间以换行分隔，末尾不附加换行。"""  # 函数说明。

    merged = merge_settings(settings, structured, reserved)
    return "\n".join(settings_to_config_lines(merged))


def render_document(body: str, header: bool = True) -> str:
    """为正文加上可选的来源注释头并以换行结尾，得到最终文件内容。"""  # 函数说明。

    parts: List[str] = []
    if header:
        parts.extend(HEADER_LINES)
        parts.append("")  # 注释与正文之间空一行。
    parts.append(body)
    return "\n".join(parts) + "\n"


def default_output_path(environ: Optional[Mapping[str, str]] = None) -> Path:
    """返回 $XDG_CONFIG_HOME/surfraw/conf，未设置时使用 ~/.config。"""  # 函数说明。

    environ = os.environ if environ is None else environ
    config_home = environ.get("XDG_CONFIG_HOME")
    base = Path(config_home).expanduser() if config_home else Path.home() / ".config"
    return base / CONF_RELATIVE_PATH
