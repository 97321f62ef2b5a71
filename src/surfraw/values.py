"""surfraw 配置值的封闭类型集合与文本格式化规则。"""  # 模块说明。
from __future__ import annotations  # 启用前向注解以提升类型兼容性。

from dataclasses import dataclass  # 导入 dataclass 以定义不可变的值变体。
from typing import Any, Iterable, Tuple, Union  # 导入类型注解辅助代码可读性。


@dataclass(frozen=True)
class Boolean:
    """布尔值变体，渲染为 yes/no。"""  # 类说明。

    value: bool


@dataclass(frozen=True)
class Integer:
    """整数值变体，按十进制原样输出。"""  # 类说明。

    value: int


@dataclass(frozen=True)
class Text:
    """字符串变体，不加引号直接输出。"""  # 类说明。

    value: str


@dataclass(frozen=True)
class StringList:
    """字符串列表变体；全部元素为空时视为空列表。"""  # 类说明。

    items: Tuple[str, ...] = ()

    @classmethod
    def of(cls, items: Iterable[str]) -> "StringList":
        """构造列表变体，并把 [""] 一类的全空列表规范化为空列表。"""  # 方法说明。
        collected = tuple(items)  # 先固化为元组，避免多次迭代生成器。
        if all(item == "" for item in collected):  # [""] 与 [] 在目标格式中等价。
            return cls(())
        return cls(collected)

    @property
    def is_empty(self) -> bool:
        return not self.items


SettingValue = Union[Boolean, Integer, Text, StringList]  # 渲染器接受的全部值类型。


def setting_value(raw: Any) -> SettingValue:
    """把原始 Python 值转换为对应的值变体，超出范围时抛出 TypeError。"""  # 函数说明。

    if isinstance(raw, (Boolean, Integer, Text, StringList)):  # 已是变体则直接返回。
        return raw
    # bool 是 int 的子类，必须先于 int 判断。
    if isinstance(raw, bool):
        return Boolean(raw)
    if isinstance(raw, int):
        return Integer(raw)
    if isinstance(raw, float) and raw.is_integer():  # YAML/JSON 中的 15.0 按整数处理。
        return Integer(int(raw))
    if isinstance(raw, str):
        return Text(raw)
    if isinstance(raw, (list, tuple)):
        if not all(isinstance(item, str) for item in raw):  # 列表只允许字符串元素。
            raise TypeError(f"String list contains non-string items: {raw!r}")
        return StringList.of(raw)
    raise TypeError(f"Unsupported setting value type {type(raw).__name__}: {raw!r}")


def format_value(value: Any) -> str:
    """将单个值渲染为 surfraw conf 文件中的文本形式。"""  # 函数说明。

    variant = setting_value(value)  # 统一转换为变体后再分派。
    if isinstance(variant, Boolean):
        return "yes" if variant.value else "no"
    if isinstance(variant, StringList):
        if variant.is_empty:  # 空列表在 surfraw 中写作 none。
            return "none"
        return '"' + " ".join(variant.items) + '"'  # 以空格拼接并整体加双引号，不做转义。
    if isinstance(variant, Text):
        return variant.value
    return str(variant.value)  # Integer 按十进制输出。
