"""验证合并后的设置渲染为 SURFRAW_KEY=VALUE 文本。"""  # 模块说明。
from __future__ import annotations  # 启用前向注解支持类型提示。

import sys  # 导入 sys 以动态调整模块搜索路径。
from pathlib import Path  # 导入 Path 以定位仓库根目录。

sys.path.append(str(Path(__file__).resolve().parents[1]))  # 将仓库根目录加入 sys.path 以导入 src.* 模块。

import pytest  # 导入 pytest 以使用异常断言。

from src.surfraw.collisions import CollisionError  # 导入冲突异常。
from src.surfraw.options import BrowserConfig, StructuredConfig, resolve_structured_config  # 导入结构化配置。
from src.surfraw.render import (  # 导入渲染函数。
    HEADER_LINES,
    default_output_path,
    render_config,
    render_document,
    settings_to_config_lines,
)


def _fixed_config(**graphical: object) -> StructuredConfig:
    """辅助函数：构造浏览器路径固定的结构化配置，避免依赖本机安装。"""  # 函数说明。
    return StructuredConfig(
        use_graphical_browser=True,
        graphical=BrowserConfig(browser="/usr/bin/firefox", **graphical),
        textual=BrowserConfig(browser="/usr/bin/w3m"),
    )


def test_settings_with_defaults() -> None:
    """自由设置与默认结构化配置一起渲染，每个键一行。"""  # 测试说明。
    body = render_config({"escape_url_args": True, "results": 15}, resolve_structured_config())
    lines = body.split("\n")
    assert "SURFRAW_escape_url_args=yes" in lines
    assert "SURFRAW_results=15" in lines
    assert "SURFRAW_graphical=yes" in lines
    assert "SURFRAW_graphical_browser_args=none" in lines
    assert "SURFRAW_text_browser_args=none" in lines
    assert any(line.startswith("SURFRAW_graphical_browser=") and line.endswith("/firefox") for line in lines)
    assert any(line.startswith("SURFRAW_text_browser=") and line.endswith("/w3m") for line in lines)
    assert len(lines) == 7


def test_collision_blocks_rendering() -> None:
    """自由设置使用保留键时渲染失败，不返回任何文本。"""  # 测试说明。
    with pytest.raises(CollisionError) as exc:
        render_config({"graphical": False}, _fixed_config())
    assert exc.value.keys == ("graphical",)
    assert exc.value.collisions[0].replacement == "useGraphicalBrowser"


def test_browser_args_are_quoted() -> None:
    """结构化参数列表渲染为带引号的空格拼接字符串。"""  # 测试说明。
    body = render_config({}, _fixed_config(browser_args=("-console", "-P", "profile")))
    assert 'SURFRAW_graphical_browser_args="-console -P profile"' in body.split("\n")


def test_empty_settings_render_only_reserved_keys() -> None:
    """没有自由设置时只输出五个保留键，且按键名排序。"""  # 测试说明。
    assert render_config({}, _fixed_config()) == "\n".join(
        [
            "SURFRAW_graphical=yes",
            "SURFRAW_graphical_browser=/usr/bin/firefox",
            "SURFRAW_graphical_browser_args=none",
            "SURFRAW_text_browser=/usr/bin/w3m",
            "SURFRAW_text_browser_args=none",
        ]
    )


def test_render_is_deterministic() -> None:
    """相同输入、不同插入顺序得到逐字节相同的输出。"""  # 测试说明。
    first = render_config({"results": 15, "Alpha": "a", "elvi": "ddg"}, _fixed_config())
    second = render_config({"elvi": "ddg", "results": 15, "Alpha": "a"}, _fixed_config())
    assert first == second
    assert first.split("\n")[0] == "SURFRAW_Alpha=a"  # 键名保留大小写，大写字母排在前面。


def test_settings_to_config_lines_sorts_keys() -> None:
    """行列表按键名排序，值按格式化规则输出。"""  # 测试说明。
    assert settings_to_config_lines({"b": False, "a": "text"}) == ["SURFRAW_a=text", "SURFRAW_b=no"]


def test_render_document_header() -> None:
    """文件内容带来源注释头并以换行结尾，可关闭注释头。"""  # 测试说明。
    document = render_document("SURFRAW_results=15")
    assert document.startswith(HEADER_LINES[0] + "\n")
    assert document.endswith("\n\nSURFRAW_results=15\n")
    assert render_document("SURFRAW_results=15", header=False) == "SURFRAW_results=15\n"


def test_default_output_path(tmp_path: Path) -> None:
    """输出路径遵循 XDG_CONFIG_HOME，未设置时回退到 ~/.config。"""  # 测试说明。
    assert default_output_path({"XDG_CONFIG_HOME": str(tmp_path)}) == tmp_path / "surfraw" / "conf"
    assert default_output_path({}) == Path.home() / ".config" / "surfraw" / "conf"
