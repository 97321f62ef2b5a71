"""配置系统：分层加载、来源追踪、Schema 校验与快照导出工具集合。"""  # 模块说明。
from __future__ import annotations  # 启用前向注解以提升类型兼容性。

import copy  # 导入 copy 以执行深拷贝避免引用共享。
import os  # 导入 os 以访问环境变量与路径扩展。
from dataclasses import dataclass  # 导入 dataclass 以封装结果结构。
from pathlib import Path  # 导入 Path 统一路径处理。
from typing import Any, Dict, Iterable, Mapping  # 导入类型注解辅助代码可读性。

import yaml  # 导入 PyYAML 以读取/写出 YAML 文件。

from src.utils.io import atomic_write_text  # 复用原子写入工具以保存配置快照。
from src.utils.schema import first_document_error  # 导入 Schema 校验入口。

ENV_PREFIX = "SURFRAWCONF_"  # 所有环境变量需以此前缀开头才会被解析。


@dataclass
class ConfigBundle:
    """封装配置加载结果，包含配置体与来源映射。"""  # 数据类说明。

    config: Dict[str, Any]  # 最终合并并经过规范化的配置字典。
    sources: Dict[str, Any]  # 与 config 对应的来源追踪树，叶子为字符串。
    user_path: str | None  # 实际读取的用户配置文件，未读取时为 None。


class ConfigError(ValueError):
    """对外统一的配置异常类型，包含来源链路信息。"""  # 自定义异常说明。


def _project_root() -> Path:
    """返回仓库根目录，基于当前文件路径推断。"""  # 工具函数说明。

    return Path(__file__).resolve().parents[2]  # config.py 位于 src/utils，下两级即仓库根。


def _load_yaml(path: Path) -> Dict[str, Any]:
    """读取 YAML 文件并返回字典结构，若为空则返回空字典。"""  # 工具函数说明。

    try:
        with path.open("r", encoding="utf-8") as handle:  # 打开文件读取 UTF-8 文本。
            data = yaml.safe_load(handle)  # 使用 safe_load 避免执行任意代码。
    except yaml.YAMLError as exc:  # YAML 语法错误转为配置异常。
        raise ConfigError(f"Invalid YAML in {path}: {exc}") from exc
    if data is None:  # 空文件视为空字典。
        return {}
    if not isinstance(data, dict):  # 顶层必须是映射。
        raise ConfigError(f"Top level of {path} must be a mapping, got {type(data).__name__}")
    return data


def _build_source_tree(node: Any, label: str) -> Any:
    """根据数据结构构造来源树，用于深度合并时携带来源信息。"""  # 工具函数说明。

    if isinstance(node, dict):  # 对字典逐键生成嵌套来源。
        return {key: _build_source_tree(value, label) for key, value in node.items()}  # 递归构造。
    return label  # 标量与列表直接返回标签。


def _deep_merge(base: Dict[str, Any], incoming: Dict[str, Any], sources: Dict[str, Any], incoming_sources: Any) -> None:
    """递归地将 incoming 合并进 base，并同步更新来源信息。"""  # 工具函数说明。

    for key, value in incoming.items():  # 遍历待合并的键值对。
        source_info = incoming_sources.get(key) if isinstance(incoming_sources, dict) else incoming_sources  # 获取对应的来源标签或子树。
        if isinstance(value, dict):  # 若值为字典需要递归处理。
            base_child = base.get(key)  # 读取基准中的旧值。
            source_child = sources.get(key)  # 读取来源子树。
            if not isinstance(base_child, dict):  # 若旧值不是字典则直接替换为新字典。
                base_child = {}
            if not isinstance(source_child, dict):  # 若来源不是字典则初始化新字典。
                source_child = {}
            base[key] = base_child  # 将合并结果写回。
            sources[key] = source_child  # 同步来源树。
            if isinstance(source_info, str):  # 若来源只是标签需扩展为整棵树。
                source_info = _build_source_tree(value, source_info)
            _deep_merge(base_child, value, source_child, source_info)  # 递归合并子结构。
            continue
        if value is None and key in base and base[key] is not None:  # None 不会覆盖已有非空值。
            continue
        base[key] = copy.deepcopy(value)  # 对标量/列表执行深拷贝后写入。
        sources[key] = source_info  # 记录来源标签。


def deep_merge_dicts(base: Dict[str, Any], incoming: Dict[str, Any]) -> Dict[str, Any]:
    """对外暴露的深度合并助手，仅返回新的合并结果。"""  # 公共函数说明。

    result = copy.deepcopy(base)  # 拷贝基准避免修改原数据。
    sources_stub = _build_source_tree(result, "base")  # 构造占位来源，外部通常不会读取。
    _deep_merge(result, incoming, sources_stub, _build_source_tree(incoming, "incoming"))
    return result


def _parse_scalar(value: str) -> Any:
    """将字符串解析为布尔、整数、浮点或 YAML 流式列表，失败时返回原字符串。"""  # 工具函数说明。

    stripped = value.strip()
    if stripped.startswith("["):  # 以 [ 开头按 YAML 流式列表解析，例如 [-console, -P]。
        try:
            parsed = yaml.safe_load(stripped)
        except yaml.YAMLError:
            return stripped
        if isinstance(parsed, list):
            return ["" if item is None else str(item) for item in parsed]  # 列表元素统一为字符串。
        return stripped
    lowered = stripped.lower()  # 统一小写后识别关键字。
    if lowered in {"true", "false"}:  # 识别布尔文本。
        return lowered == "true"
    if lowered in {"null", "none"}:  # 支持 null/none 表达空值。
        return None
    try:
        if lowered.startswith("0") and lowered not in {"0", "0.0"}:  # 以 0 开头的字符串保持原样避免八进制误判。
            raise ValueError
        return int(lowered)
    except ValueError:
        try:
            return float(lowered)
        except ValueError:
            return stripped


def _keypath_to_tree(keypath: Iterable[str], value: Any) -> Dict[str, Any]:
    """根据层级列表生成嵌套字典，用于覆盖项与环境变量合并。"""  # 工具函数说明。

    result: Dict[str, Any] = {}  # 初始化结果字典。
    cursor = result  # 游标指向当前层级。
    components = list(keypath)  # 将迭代器转为列表以便索引。
    for index, part in enumerate(components):
        if index == len(components) - 1:  # 末尾键直接赋值。
            cursor[part] = value
        else:
            cursor = cursor.setdefault(part, {})  # 逐层创建嵌套字典。
    return result


def _canonical_path(segments: Iterable[str], reference: Any) -> list[str]:
    """按参考树将大小写不敏感的路径段还原为真实键名，未知段统一小写。"""  # 工具函数说明。

    resolved: list[str] = []
    cursor = reference
    for segment in segments:
        match = None
        if isinstance(cursor, dict):  # 在参考树中寻找忽略大小写相同的键。
            match = next((key for key in cursor if str(key).lower() == segment.lower()), None)
        resolved.append(match if match is not None else segment.lower())
        cursor = cursor.get(match) if match is not None else None
    return resolved


def _collect_env_from_mapping(env: Mapping[str, str], reference: Dict[str, Any]) -> tuple[Dict[str, Any], Dict[str, Any]]:
    """从映射中提取 SURFRAWCONF_* 变量并构造值树与来源树。"""  # 工具函数说明。

    values: Dict[str, Any] = {}  # 存放解析后的值。
    value_sources: Dict[str, Any] = {}  # 存放对应的来源描述。
    for key in sorted(env):  # 排序保证同一路径的多次定义结果稳定。
        if not key.startswith(ENV_PREFIX):  # 过滤非指定前缀。
            continue
        trimmed = key[len(ENV_PREFIX) :]  # 去除前缀获得层级表达。
        segments = [segment for segment in trimmed.split("__") if segment]  # 双下划线表示层级。
        if not segments:
            continue
        path = _canonical_path(segments, reference)
        tree = _keypath_to_tree(path, _parse_scalar(env[key]))  # 对值执行类型推断后构造嵌套字典。
        source_tree = _keypath_to_tree(path, f"env:{key}")  # 记录来源信息。
        _deep_merge(values, tree, value_sources, source_tree)
    return values, value_sources


def _normalize_path(value: str) -> str:
    """展开用户目录与环境变量，并清理尾部斜杠。"""  # 工具函数说明。

    expanded = os.path.expanduser(os.path.expandvars(value.strip()))  # 展开 ~ 及环境变量。
    if expanded not in {"/", ""}:  # 避免对根目录或空串进行裁剪。
        expanded = expanded.rstrip("/\\")
    return expanded


def _normalize_config(config: Dict[str, Any]) -> None:
    """对配置进行就地规范化，例如统一日志枚举大小写与路径形态。"""  # 工具函数说明。

    for section, key in (("output", "path"), ("logging", "file")):  # 需要规范化的路径字段。
        node = config.get(section)
        if isinstance(node, dict) and isinstance(node.get(key), str) and node[key].strip():
            node[key] = _normalize_path(node[key])
    logging_section = config.get("logging")
    if isinstance(logging_section, dict):
        if isinstance(logging_section.get("format"), str):  # 日志格式统一小写。
            logging_section["format"] = logging_section["format"].strip().lower()
        if isinstance(logging_section.get("level"), str):  # 日志等级统一大写。
            logging_section["level"] = logging_section["level"].strip().upper()


def _source_for_path(path: Iterable[Any], sources: Dict[str, Any]) -> str:
    """根据键路径在来源树中查找对应标签。"""  # 工具函数说明。

    cursor: Any = sources  # 从根开始遍历。
    for part in path:
        if isinstance(cursor, str):  # 列表元素等子路径沿用父级标签。
            return cursor
        if not isinstance(cursor, dict):
            return "unknown"
        cursor = cursor.get(part)
        if cursor is None:
            return "unknown"
    if isinstance(cursor, str):
        return cursor
    return "unknown"


def _check_keys(node: Any, path: list[Any], sources: Dict[str, Any]) -> None:
    """递归检查映射键均为字符串；YAML 中的 1: 或 on: 会被解析为整数或布尔键。"""  # 工具函数说明。

    if not isinstance(node, dict):
        return
    for key, value in node.items():
        child_path = [*path, key]
        if not isinstance(key, str):  # Schema 的 propertyNames 不检查非字符串键。
            dotted = ".".join(str(part) for part in child_path)
            origin = _source_for_path(child_path, sources)
            raise ConfigError(
                f"Invalid value for {dotted}: keys must be strings, quote the key in YAML "
                f"(value={key!r}, source={origin})"
            )
        _check_keys(value, child_path, sources)


def _validate_config(config: Dict[str, Any], sources: Dict[str, Any]) -> None:
    """执行键类型与 Schema 校验，将第一处错误转换为带来源信息的 ConfigError。"""  # 工具函数说明。

    _check_keys(config, [], sources)  # 先于 Schema 执行，保证错误定位到具体键。
    error = first_document_error(config)
    if error is None:
        return
    path = list(error.absolute_path)  # 错误在文档中的位置。
    dotted = ".".join(str(part) for part in path) or "<root>"
    origin = _source_for_path(path, sources)  # 查找来源标签。
    raise ConfigError(f"Invalid value for {dotted}: {error.message} (value={error.instance!r}, source={origin})")


def parse_override_items(items: Iterable[str]) -> Dict[str, Any]:
    """将 KEY=VALUE 形式的覆盖项列表解析为嵌套字典，KEY 使用点分层级。"""  # 公共函数说明。

    overrides: Dict[str, Any] = {}
    for raw in items:
        if "=" not in raw:  # 若缺少等号则抛出错误提示。
            raise ConfigError(f"Invalid override '{raw}', expected KEY=VALUE")
        key, value = raw.split("=", 1)  # 仅拆分首个等号以允许值中包含等号。
        path = [segment.strip() for segment in key.split(".") if segment.strip()]  # 保留大小写以匹配 camelCase 键。
        if not path:
            continue
        tree = _keypath_to_tree(path, _parse_scalar(value))
        _deep_merge(overrides, tree, overrides, tree)  # 直接复用 _deep_merge 进行累积。
    return overrides


def load_and_merge_config(
    config_path: str | os.PathLike[str] | None = None,
    overrides: Dict[str, Any] | None = None,
    environ: Mapping[str, str] | None = None,
) -> ConfigBundle:
    """按照默认→用户→环境→覆盖项顺序加载配置，校验后返回结果。"""  # 主函数说明。

    root = _project_root()  # 解析仓库根路径。
    default_path = root / "config" / "default.yaml"
    if not default_path.exists():  # 若默认文件缺失则立刻报错。
        raise FileNotFoundError(f"Default config not found: {default_path}")
    base_config = _load_yaml(default_path)
    config = copy.deepcopy(base_config)  # 拷贝初始配置以便后续层叠覆盖。
    sources = _build_source_tree(config, f"default:{default_path}")
    user_path = Path(config_path) if config_path else root / "config" / "user.yaml"
    if config_path and not user_path.exists():  # 显式指定的文件必须存在。
        raise ConfigError(f"Config file not found: {user_path}")
    loaded_user_path = None
    if user_path.exists():
        user_config = _load_yaml(user_path)
        _deep_merge(config, user_config, sources, _build_source_tree(user_config, f"user:{user_path}"))
        loaded_user_path = str(user_path)
    environ = os.environ if environ is None else environ
    env_values, env_sources = _collect_env_from_mapping(environ, base_config)
    if env_values:
        _deep_merge(config, env_values, sources, env_sources)
    if overrides:
        _deep_merge(config, overrides, sources, _build_source_tree(overrides, "override"))
    _normalize_config(config)  # 对合并结果执行规范化。
    _validate_config(config, sources)  # 校验规范化后的配置。
    return ConfigBundle(config=config, sources=sources, user_path=loaded_user_path)


def render_effective_config(bundle: ConfigBundle, include_sources: bool = True) -> str:
    """将配置与来源以 YAML 文本渲染，可附带来源注释。"""  # 导出函数说明。

    def _render(node: Any, source_node: Any, indent: int) -> list[str]:
        lines: list[str] = []
        for key in sorted(node.keys()):  # 排序以稳定输出。
            value = node[key]
            child_source = source_node.get(key) if isinstance(source_node, dict) else source_node
            prefix = " " * indent
            if isinstance(value, dict) and value:  # 非空字典递归展开。
                lines.append(f"{prefix}{key}:")
                lines.extend(_render(value, child_source, indent + 2))
                continue
            rendered = yaml.safe_dump(value, default_flow_style=True).strip()  # 使用 PyYAML 渲染标量或列表。
            if rendered.endswith("\n..."):  # 裸标量会带文档结束标记。
                rendered = rendered[: -len("\n...")]
            line = f"{prefix}{key}: {rendered}"
            if include_sources and isinstance(child_source, str):
                line += f"  # {child_source}"
            lines.append(line)
        return lines

    return "\n".join(_render(bundle.config, bundle.sources, 0)) + "\n"


def save_config(bundle: ConfigBundle, path: str | os.PathLike[str], include_sources: bool = True) -> None:
    """将配置快照写入目标路径，使用原子写入避免半成品。"""  # 导出函数说明。

    atomic_write_text(path, render_effective_config(bundle, include_sources=include_sources))
