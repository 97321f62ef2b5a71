"""验证结构化选项到保留设置键的投影。"""  # 模块说明。
from __future__ import annotations  # 启用前向注解支持类型提示。

import sys  # 导入 sys 以动态调整模块搜索路径。
from pathlib import Path  # 导入 Path 以定位仓库根目录。

sys.path.append(str(Path(__file__).resolve().parents[1]))  # 将仓库根目录加入 sys.path 以导入 src.* 模块。

import pytest  # 导入 pytest 以使用异常断言。

from src.surfraw.options import BrowserConfig, StructuredConfig, resolve_structured_config  # 导入结构化配置。
from src.surfraw.projection import (  # 导入投影逻辑。
    RESERVED_SETTINGS,
    ReservedPathError,
    lookup_path,
    project_settings,
)
from src.surfraw.values import Boolean, StringList, Text  # 导入值变体以比较结果。


def _custom_config() -> StructuredConfig:
    """辅助函数：构造一份全部字段都非默认的结构化配置。"""  # 函数说明。
    return StructuredConfig(
        use_graphical_browser=False,
        graphical=BrowserConfig(browser="/opt/bin/chromium", browser_args=("--incognito",)),
        textual=BrowserConfig(browser="/opt/bin/lynx", browser_args=("-dump", "-nolist")),
    )


def test_reserved_settings_table() -> None:
    """保留映射固定为五个键，且不可修改。"""  # 测试说明。
    assert dict(RESERVED_SETTINGS) == {
        "graphical": "useGraphicalBrowser",
        "graphical_browser": "graphical.browser",
        "graphical_browser_args": "graphical.browserArgs",
        "text_browser": "textual.browser",
        "text_browser_args": "textual.browserArgs",
    }
    with pytest.raises(TypeError):
        RESERVED_SETTINGS["results"] = "x"  # type: ignore[index]


def test_projection_pulls_values_from_structured_config() -> None:
    """每个保留键都取自对应路径上的值。"""  # 测试说明。
    projected = project_settings(_custom_config())
    assert projected == {
        "graphical": Boolean(False),
        "graphical_browser": Text("/opt/bin/chromium"),
        "graphical_browser_args": StringList(("--incognito",)),
        "text_browser": Text("/opt/bin/lynx"),
        "text_browser_args": StringList(("-dump", "-nolist")),
    }


def test_projection_of_defaults() -> None:
    """默认配置投影出 firefox/w3m 与空参数列表。"""  # 测试说明。
    projected = project_settings(resolve_structured_config())
    assert set(projected) == set(RESERVED_SETTINGS)
    assert projected["graphical"] == Boolean(True)
    assert projected["graphical_browser"].value.endswith("/firefox")
    assert projected["text_browser"].value.endswith("/w3m")
    assert projected["graphical_browser_args"] == StringList(())
    assert projected["text_browser_args"] == StringList(())


def test_projection_is_pure() -> None:
    """同一输入多次投影结果相同。"""  # 测试说明。
    structured = _custom_config()
    assert project_settings(structured) == project_settings(structured)


def test_unresolvable_path_fails_loudly() -> None:
    """保留映射中不存在的路径立即抛出 ReservedPathError。"""  # 测试说明。
    with pytest.raises(ReservedPathError):
        project_settings(_custom_config(), {"graphical_remote": "graphical.remote"})
    with pytest.raises(ReservedPathError):
        lookup_path({"graphical": "x"}, "graphical.browser")  # 中间节点不是映射同样失败。


def test_structured_overrides_merge_onto_defaults() -> None:
    """用户覆盖只替换给出的字段，null 保持默认值。"""  # 测试说明。
    structured = resolve_structured_config(
        {"graphical": {"browser": None, "browserArgs": ["-console", "-P", "profile"]}}
    )
    assert structured.use_graphical_browser is True
    assert structured.graphical.browser.endswith("/firefox")
    assert structured.graphical.browser_args == ("-console", "-P", "profile")
    assert structured.textual.browser_args == ("",)


def test_reserved_path_check_does_not_search_path(monkeypatch: pytest.MonkeyPatch) -> None:
    """导入时的路径校验只依赖配置形状，不会查找浏览器可执行文件。"""  # 测试说明。
    import src.surfraw.options as options_module
    import src.surfraw.projection as projection_module

    def _fail(name: str) -> str:
        raise AssertionError(f"unexpected PATH lookup for {name}")

    monkeypatch.setattr(options_module.shutil, "which", _fail)
    assert projection_module._check_reserved_paths() is None


@pytest.mark.parametrize(
    "overrides",
    [
        {"useGraphicalBrowser": "false"},
        {"useGraphicalBrowser": 0},
        {"graphical": {"browser": 42}},
        {"textual": {"browserArgs": "-dump"}},
        {"textual": {"browserArgs": ["-dump", 1]}},
    ],
)
def test_structured_values_must_have_declared_types(overrides: dict) -> None:
    """类型不符的结构化值直接抛出 TypeError，而不是被静默转换。"""  # 测试说明。
    with pytest.raises(TypeError):
        resolve_structured_config(overrides)
