"""端到端生成 surfraw conf：加载配置、校验冲突、渲染并原子落盘。"""  # 模块说明。
from __future__ import annotations  # 启用前向注解以提升类型兼容性。

import os  # 导入 os 以标注路径类型。
from pathlib import Path  # 导入 Path 统一路径处理。
from typing import Any, Dict, Iterable, Mapping  # 导入类型注解辅助代码可读性。

from src.surfraw.collisions import CollisionError  # 导入冲突异常以记录日志。
from src.surfraw.options import resolve_structured_config  # 导入结构化配置解析。
from src.surfraw.render import default_output_path, render_config, render_document  # 导入渲染函数。
from src.surfraw.settings import resolve_settings  # 导入自由设置解析。
from src.utils.config import ConfigBundle, load_and_merge_config, parse_override_items  # 导入分层配置加载。
from src.utils.io import atomic_write_text  # 导入原子写入工具。
from src.utils.logging import StructuredLogger, get_logger, new_trace_id  # 导入结构化日志工具。


def _logger_from_bundle(bundle: ConfigBundle) -> StructuredLogger:
    """根据配置中的 logging 段创建日志器。"""  # 工具函数说明。

    logging_cfg = bundle.config.get("logging") or {}
    return get_logger(
        format=logging_cfg.get("format", "human"),
        level=logging_cfg.get("level", "INFO"),
        log_file=logging_cfg.get("file"),
        quiet=bool(logging_cfg.get("quiet", False)),
    )


def build_config(
    config_path: str | os.PathLike[str] | None = None,
    *,
    overrides: Iterable[str] | Dict[str, Any] | None = None,
    output_path: str | os.PathLike[str] | None = None,
    dry_run: bool = False,
    environ: Mapping[str, str] | None = None,
    logger: StructuredLogger | None = None,
) -> dict:
    """生成 surfraw conf 文件并返回摘要；存在冲突时不写入任何内容。"""  # 函数说明。

    if overrides is not None and not isinstance(overrides, dict):  # 支持 KEY=VALUE 列表形式的覆盖项。
        overrides = parse_override_items(overrides)
    bundle = load_and_merge_config(config_path=config_path, overrides=overrides, environ=environ)
    trace_id = new_trace_id()  # 为本次生成分配 TraceID。
    run_logger = (logger or _logger_from_bundle(bundle)).bind(trace_id=trace_id)
    run_logger.info("config loaded", user_config=bundle.user_path)

    structured = resolve_structured_config(bundle.config.get("config"))
    settings = resolve_settings(bundle.config.get("settings"))
    run_logger.debug(
        "options resolved",
        settings=sorted(settings),
        use_graphical_browser=structured.use_graphical_browser,
    )
    try:
        body = render_config(settings, structured)
    except CollisionError as exc:
        run_logger.error("settings collide with config", keys=list(exc.keys))
        raise
    line_count = len(body.splitlines())
    run_logger.info("config rendered", lines=line_count)

    output_cfg = bundle.config.get("output") or {}
    document = render_document(body, header=bool(output_cfg.get("header", True)))
    if output_path is not None:  # 调用方显式指定的路径优先于配置。
        target = Path(output_path)
    elif output_cfg.get("path"):
        target = Path(output_cfg["path"])
    else:
        target = default_output_path(environ)

    if dry_run:
        run_logger.info("dry run, config not written", path=str(target))
    else:
        atomic_write_text(target, document)
        run_logger.info("config written", path=str(target))
    return {
        "path": str(target),
        "lines": line_count,
        "text": document,
        "written": not dry_run,
        "trace_id": trace_id,
    }
