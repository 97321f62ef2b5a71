"""检测自由设置与保留设置之间的键冲突。"""  # 模块说明。
from __future__ import annotations  # 启用前向注解以提升类型兼容性。

from dataclasses import dataclass  # 导入 dataclass 以描述单条冲突。
from typing import Iterable, Mapping, Tuple  # 导入类型注解辅助代码可读性。

from src.surfraw.projection import RESERVED_SETTINGS  # 导入保留映射常量。
from src.utils.config import ConfigError  # 冲突属于配置错误的一种。


@dataclass(frozen=True)
class Collision:
    """一条冲突：用户设置键与应改用的结构化路径。"""  # 类说明。

    key: str
    replacement: str

    @property
    def hint(self) -> str:
        return f"use {self.replacement} instead"

    def describe(self) -> str:
        """返回可直接展示给用户的修复说明。"""  # 方法说明。
        return f"replace settings.{self.key} with config.{self.replacement}"


class CollisionError(ConfigError):
    """自由设置中出现了保留键，渲染被拒绝。"""  # 异常说明。

    def __init__(self, collisions: Iterable[Collision]) -> None:
        self.collisions: Tuple[Collision, ...] = tuple(collisions)  # 保存全部冲突而非仅第一条。
        lines = "\n".join(collision.describe() for collision in self.collisions)
        super().__init__(
            "Some settings options conflict with some config options.\n"
            "To resolve these conflicts, you should:\n" + lines
        )

    @property
    def keys(self) -> Tuple[str, ...]:
        return tuple(collision.key for collision in self.collisions)


def find_collisions(
    settings: Mapping[str, object],
    reserved: Mapping[str, str] = RESERVED_SETTINGS,
) -> Tuple[Collision, ...]:
    """返回同时出现在自由设置与保留映射中的键，按键名排序。"""  # 函数说明。

    overlap = sorted(set(settings) & set(reserved))  # 排序保证错误信息稳定。
    return tuple(Collision(key=key, replacement=reserved[key]) for key in overlap)


def validate_settings(
    settings: Mapping[str, object],
    reserved: Mapping[str, str] = RESERVED_SETTINGS,
) -> None:
    """键集合不相交时静默返回，否则抛出携带全部冲突的 CollisionError。"""  # 函数说明。

    collisions = find_collisions(settings, reserved)
    if collisions:
        raise CollisionError(collisions)
