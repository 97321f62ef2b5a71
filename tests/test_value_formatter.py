"""验证单个设置值到 conf 文本的格式化规则。"""  # 模块说明。
from __future__ import annotations  # 启用前向注解支持类型提示。

import sys  # 导入 sys 以动态调整模块搜索路径。
from pathlib import Path  # 导入 Path 以定位仓库根目录。

sys.path.append(str(Path(__file__).resolve().parents[1]))  # 将仓库根目录加入 sys.path 以导入 src.* 模块。

import pytest  # 导入 pytest 以使用参数化与异常断言。

from src.surfraw.values import (  # 导入值变体与格式化函数。
    Boolean,
    Integer,
    StringList,
    Text,
    format_value,
    setting_value,
)


@pytest.mark.parametrize("value, expected", [(True, "yes"), (False, "no")])
def test_booleans_render_as_yes_no(value: bool, expected: str) -> None:
    """布尔值只会渲染为 yes/no。"""  # 测试说明。
    assert format_value(value) == expected
    assert format_value(Boolean(value)) == expected  # 显式变体与原始值结果一致。


@pytest.mark.parametrize("items", [[], [""], ["", ""], ("",)])
def test_effectively_empty_lists_render_as_none(items: list) -> None:
    """空列表以及只含空字符串的列表都渲染为 none。"""  # 测试说明。
    assert format_value(items) == "none"


def test_list_is_space_joined_and_quoted() -> None:
    """非空列表以空格拼接并整体加双引号。"""  # 测试说明。
    assert format_value(["-console", "-P", "profile"]) == '"-console -P profile"'
    assert format_value(["-dump"]) == '"-dump"'


def test_list_with_some_empty_items_keeps_them() -> None:
    """只要存在非空元素就不做归一化，空元素按原样参与拼接。"""  # 测试说明。
    assert format_value(["", "-dump"]) == '" -dump"'


@pytest.mark.parametrize("text", ["", "duckduckgo", "has spaces", "/usr/bin/w3m", '"quoted"'])
def test_strings_are_emitted_verbatim(text: str) -> None:
    """字符串不加引号、不转义，原样输出。"""  # 测试说明。
    assert format_value(text) == text


def test_integers_render_in_decimal() -> None:
    """整数按十进制输出，包括负数与零。"""  # 测试说明。
    assert format_value(15) == "15"
    assert format_value(0) == "0"
    assert format_value(-3) == "-3"
    assert format_value(Integer(42)) == "42"


def test_setting_value_classifies_raw_values() -> None:
    """原始值按类型转换为对应变体，bool 不会被当成整数。"""  # 测试说明。
    assert setting_value(True) == Boolean(True)
    assert setting_value(7) == Integer(7)
    assert setting_value(7.0) == Integer(7)  # 整数值的浮点数按整数处理。
    assert setting_value("x") == Text("x")
    assert setting_value(["a", "b"]) == StringList(("a", "b"))
    assert setting_value([""]) == StringList(())  # 全空列表在构造时即被归一化。


@pytest.mark.parametrize("raw", [1.5, None, {"a": 1}, [1, 2], object()])
def test_setting_value_rejects_unsupported_types(raw: object) -> None:
    """超出封闭类型集合的值抛出 TypeError。"""  # 测试说明。
    with pytest.raises(TypeError):
        setting_value(raw)


def test_resolve_settings_accepts_scalars_only() -> None:
    """自由设置只接受布尔、整数与字符串。"""  # 测试说明。
    from src.surfraw.settings import resolve_settings  # 局部导入，仅此用例需要。

    assert resolve_settings({"results": 15, "escape_url_args": True, "elvi": "ddg"}) == {
        "results": Integer(15),
        "escape_url_args": Boolean(True),
        "elvi": Text("ddg"),
    }
    assert resolve_settings(None) == {}
    with pytest.raises(TypeError):
        resolve_settings({"graphical_browser_args": ["-x"]})
    with pytest.raises(TypeError):
        resolve_settings({"": "empty key"})
