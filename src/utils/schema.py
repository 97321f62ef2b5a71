"""提供 JSON Schema 加载、缓存与配置文档校验的工具函数。"""  # 模块文档说明。
# 导入 json 以解析 schema 文件内容。
import json
# 导入 pathlib.Path 以定位仓库中的 schemas 目录。
from pathlib import Path
# 导入 typing 以标注缓存字典类型。
from typing import Any, Dict, List, Optional

# 从 jsonschema 导入校验器与异常类型。
from jsonschema import Draft202012Validator, ValidationError

# 预先解析 schema 目录，避免每次调用都重新计算。
SCHEMA_DIR = Path(__file__).resolve().parents[2] / "schemas"
# 定义支持的 schema 名称到文件名的映射，便于统一管理。
SCHEMA_FILES = {
    "config": "surfraw_config.schema.json",
}
# 使用字典缓存已加载的 schema，避免重复读取磁盘。
_SCHEMA_CACHE: Dict[str, dict] = {}
# 缓存编译后的 jsonschema 校验器，进一步减少初始化开销。
_VALIDATOR_CACHE: Dict[str, Draft202012Validator] = {}


def load_schema(name: str) -> dict:
    """加载指定名称的 JSON Schema，并在内存中缓存。"""  # 函数文档说明。

    # 标准化 schema 名称。
    key = name.strip().lower()
    # 确认名称受支持，否则抛出直观的错误提示。
    if key not in SCHEMA_FILES:
        raise KeyError(f"Unknown schema: {name}")
    if key in _SCHEMA_CACHE:
        return _SCHEMA_CACHE[key]
    # 读取 JSON 并解析为字典。
    with (SCHEMA_DIR / SCHEMA_FILES[key]).open("r", encoding="utf-8") as handle:
        schema = json.load(handle)
    # 加载时即检查 schema 本身是否合法，错误在启动阶段暴露。
    Draft202012Validator.check_schema(schema)
    _SCHEMA_CACHE[key] = schema
    return schema


def _get_validator(name: str) -> Draft202012Validator:
    """获取编译后的 Draft2020-12 校验器实例并缓存。"""  # 内部工具函数说明。

    key = name.strip().lower()
    if key not in _VALIDATOR_CACHE:
        _VALIDATOR_CACHE[key] = Draft202012Validator(load_schema(key))
    return _VALIDATOR_CACHE[key]


def document_errors(payload: Dict[str, Any]) -> List[ValidationError]:
    """返回配置文档的全部校验错误，按文档路径排序以保证稳定。"""  # 函数文档说明。

    validator = _get_validator("config")
    return sorted(validator.iter_errors(payload), key=lambda error: [str(part) for part in error.absolute_path])


def first_document_error(payload: Dict[str, Any]) -> Optional[ValidationError]:
    """返回排序后的第一条校验错误，文档合法时返回 None。"""  # 函数文档说明。

    errors = document_errors(payload)
    return errors[0] if errors else None
