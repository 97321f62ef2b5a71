"""提供结构化日志工具，支持 human/jsonl 两种输出格式。"""  # 模块文档说明，描述本文件的作用。
from __future__ import annotations  # 启用延迟求值的注解语义以支持联合类型语法。
import json  # 导入 json 以在 JSONL 格式下序列化日志记录。
import sys  # 导入 sys 以访问标准输出流对象。
import traceback
import uuid  # 导入 uuid 以生成高熵的 TraceID。
from datetime import datetime, timezone  # 导入 datetime 以生成 UTC 时间戳。
from pathlib import Path  # 导入 Path 便于处理日志文件路径。
from typing import Any, Dict, Optional, TextIO  # 导入类型注释以提升可读性。

from src.utils.io import jsonl_append, safe_mkdirs  # 导入 I/O 工具用于追加日志文件。

_LEVELS = {  # 定义日志等级到数值的映射，兼容 logging 模块的约定。
    "DEBUG": 10,
    "INFO": 20,
    "WARNING": 30,
    "ERROR": 40,
    "CRITICAL": 50,
}


def new_trace_id() -> str:
    """生成 12 字符长度的短 TraceID，用于贯穿一次配置生成。"""  # 函数说明。
    return uuid.uuid4().hex[:12]  # 使用 uuid4 的十六进制表示并截断以保持简洁。


def _normalize_level(level: str) -> str:
    """将外部传入的日志等级规范化为大写并验证合法性。"""  # 函数说明。
    upper = level.upper()
    if upper not in _LEVELS:  # 检查是否为已知等级。
        raise ValueError(f"Unsupported log level: {level}")
    return upper


def _append_text(path: Path, text: str) -> None:
    """向纯文本日志追加一行。"""  # 函数说明。
    safe_mkdirs(path.parent)  # 确保日志目录存在。
    with path.open("a", encoding="utf-8") as handle:
        handle.write(text)
        handle.write("\n")  # 追加换行保持一行一条日志。


class _LoggerCore:
    """封装日志格式化与写入细节的内部核心类。"""  # 类说明。

    def __init__(
        self,
        log_format: str,
        level: str,
        log_file: str | None,
        quiet: bool,
        *,
        stream: TextIO | None = None,
    ) -> None:
        """初始化日志核心，保存格式、等级与输出目标。"""  # 方法说明。
        normalized = log_format.lower()  # 统一格式字符串大小写。
        if normalized not in {"human", "jsonl"}:  # 校验格式是否受支持。
            raise ValueError(f"Unsupported log format: {log_format}")
        self.format = normalized
        self.level = _LEVELS[_normalize_level(level)]  # 将等级转换为数值阈值。
        self.log_file = Path(log_file) if log_file else None
        self.quiet = quiet  # 保存静默模式标志。
        self._console = stream if stream is not None else sys.stderr  # 日志默认写 stderr，stdout 留给数据。
        if self.log_file is not None:  # 若需要写入文件则确保目录存在。
            safe_mkdirs(self.log_file.parent)

    def _timestamp(self) -> str:
        """返回带毫秒精度的 UTC ISO8601 时间戳。"""  # 方法说明。
        now = datetime.now(timezone.utc)
        return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")

    def _render_human(self, record: Dict[str, Any]) -> str:
        """将日志记录渲染为人类易读的字符串。"""  # 方法说明。
        parts = [f"[{record['level']}]", record["ts"]]  # 初始部分包含等级标签与时间戳。
        trace_id = record.get("trace_id")
        if trace_id:  # 若存在 TraceID 则在消息前附加。
            parts.append(f"trace={trace_id}")
        parts.append(record["msg"])
        extras = [
            f"{key}={value}"
            for key, value in record.items()
            if key not in {"ts", "level", "msg", "trace_id", "trace"}
        ]  # 其余字段以 key=value 形式附在消息后。
        parts.extend(extras)
        base = " ".join(str(part) for part in parts)

        trace_text = record.get("trace")
        if isinstance(trace_text, str) and trace_text.strip():  # 堆栈信息逐行缩进输出。
            return "\n".join([base, *("    " + line for line in trace_text.rstrip().splitlines())])
        return base

    def emit(self, level: str, message: str, fields: Dict[str, Any]) -> None:
        """根据配置输出一条日志记录。"""  # 方法说明。
        normalized = _normalize_level(level)
        if _LEVELS[normalized] < self.level:  # 若日志级别低于阈值则直接丢弃。
            return
        record: Dict[str, Any] = {  # 构建基础日志记录字典。
            "ts": self._timestamp(),
            "level": normalized,
            "msg": message,
        }
        record.update(fields)  # 合并调用方提供的扩展字段。
        if self.format == "human":
            rendered = self._render_human(record)
            if not self.quiet:
                self._console.write(rendered + "\n")
                self._console.flush()
            if self.log_file is not None:
                _append_text(self.log_file, rendered)
        else:  # JSONL 模式下直接写入结构化数据。
            if not self.quiet:
                json.dump(record, self._console, ensure_ascii=False, default=str)
                self._console.write("\n")
                self._console.flush()
            if self.log_file is not None:
                jsonl_append(str(self.log_file), json.loads(json.dumps(record, default=str)))


class StructuredLogger:
    """对外暴露的结构化日志器，支持上下文绑定与多格式输出。"""  # 类说明。

    def __init__(self, core: _LoggerCore, context: Optional[Dict[str, Any]] = None, parent: "StructuredLogger" | None = None) -> None:
        """创建日志器实例，可选地继承父级上下文。"""  # 方法说明。
        self._core = core
        self._context = context or {}
        self._parent = parent

    def _collect_context(self) -> Dict[str, Any]:
        """递归合并父级上下文并返回总上下文字典。"""  # 方法说明。
        aggregated: Dict[str, Any] = {}
        if self._parent is not None:
            aggregated.update(self._parent._collect_context())
        aggregated.update(self._context)
        return aggregated

    def bind(self, **kwargs: Any) -> "StructuredLogger":
        """基于当前实例追加上下文字段并返回新的子日志器。"""  # 方法说明。
        return StructuredLogger(self._core, context=kwargs, parent=self)

    def log(self, level: str, message: str, **fields: Any) -> None:
        """记录一条带指定等级的日志，可附带额外字段。"""  # 方法说明。
        payload = self._collect_context()
        payload.update(fields)
        self._core.emit(level, message, payload)

    def debug(self, message: str, **fields: Any) -> None:
        self.log("DEBUG", message, **fields)

    def info(self, message: str, **fields: Any) -> None:
        self.log("INFO", message, **fields)

    def warning(self, message: str, **fields: Any) -> None:
        self.log("WARNING", message, **fields)

    def error(self, message: str, **fields: Any) -> None:
        self.log("ERROR", message, **fields)

    def exception(self, message: str, exc: BaseException | None = None, **fields: Any) -> None:
        """输出包含异常堆栈的 ERROR 级日志。"""  # 方法说明。
        exception_obj = exc
        if exception_obj is None:
            _, exception_obj, _ = sys.exc_info()
        if exception_obj is not None:
            fields.setdefault("error", str(exception_obj))
            fields.setdefault("error_type", exception_obj.__class__.__name__)
            fields.setdefault(
                "trace",
                "".join(
                    traceback.format_exception(
                        exception_obj.__class__, exception_obj, exception_obj.__traceback__
                    )
                ),
            )
        self.log("ERROR", message, **fields)


def get_logger(
    format: str = "human",
    level: str = "INFO",
    log_file: str | None = None,
    quiet: bool = False,
    *,
    stream: TextIO | None = None,
) -> StructuredLogger:
    """创建并返回结构化日志器，支持 human/jsonl 两种模式。"""  # 函数说明。
    core = _LoggerCore(format, level, log_file, quiet, stream=stream)
    return StructuredLogger(core)  # 返回不带额外上下文的基础日志器。
