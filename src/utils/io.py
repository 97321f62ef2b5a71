"""提供文件写入相关的 I/O 工具，包括原子写入与 JSONL 追加。"""  # 模块说明。
from __future__ import annotations  # 启用前向注解以支持联合类型语法。
# 导入 json 以支持 JSON 序列化。
import json
# 导入 os 模块以执行文件系统操作与原子替换。
import os
# 导入 pathlib.Path 统一处理路径对象。
from pathlib import Path


# 定义安全创建目录的函数，确保重复调用也不会抛异常。
def safe_mkdirs(path: str | os.PathLike[str]) -> None:
    """创建目标目录及其父级目录，目录已存在时静默跳过。"""  # 函数说明。
    Path(path).mkdir(parents=True, exist_ok=True)


# 定义原子替换函数，封装 os.replace 并确保目录存在。
def atomic_replace(tmp_path: str | os.PathLike[str], final_path: str | os.PathLike[str]) -> None:
    """使用 os.replace 将临时文件移动到目标位置，确保父目录存在。"""  # 函数说明。
    final = Path(final_path)
    safe_mkdirs(final.parent)
    # 调用 os.replace 完成原子替换，可覆盖旧文件。
    os.replace(Path(tmp_path), final)


# 定义以原子方式写入文本的函数。
def atomic_write_text(path: str | os.PathLike[str], text: str) -> None:
    """通过临时文件写入文本内容，并以原子方式替换目标文件。"""  # 函数说明。
    target_path = Path(path)
    safe_mkdirs(target_path.parent)
    # 构造临时文件路径，追加 .tmp 后缀以便后续清理。
    tmp_path = target_path.with_name(f"{target_path.name}.tmp")
    # 使用 try/finally 确保临时文件在异常时被删除。
    try:
        with open(tmp_path, "w", encoding="utf-8") as handle:
            handle.write(text)
        atomic_replace(tmp_path, target_path)
    finally:
        # 如果临时文件仍然存在（替换失败），进行清理。
        if tmp_path.exists():
            tmp_path.unlink(missing_ok=True)


# 定义追加 JSON 行到 JSONL 文件的函数。
def jsonl_append(path: str | os.PathLike[str], record: dict) -> None:
    """向 JSONL 文件追加一行记录。"""  # 函数说明。
    target = Path(path)
    safe_mkdirs(target.parent)
    with target.open("a", encoding="utf-8") as handle:
        handle.write(json.dumps(record, ensure_ascii=False))
        handle.write("\n")
