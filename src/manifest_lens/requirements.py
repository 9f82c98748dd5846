from __future__ import annotations

from pathlib import Path

from manifest_lens.log import get_logger
from manifest_lens.models import REQUIREMENTS_FILE_NAME
from manifest_lens.names import get_python_dependency

log = get_logger(__name__)


def parse_requirements_txt(directory: Path) -> set[str] | None:
    """
    读取目录下的 requirements.txt 并返回规范化依赖名集合。

    文件不存在或无法打开时返回 None；无法按 UTF-8 解码的行记录 warning 后跳过。
    """
    path = directory / REQUIREMENTS_FILE_NAME
    try:
        f = path.open("rb")
    except OSError:
        return None

    names: set[str] = set()
    with f:
        for lineno, raw_line in enumerate(f, start=1):
            try:
                line = raw_line.decode("utf-8")
            except UnicodeDecodeError as exc:
                log.warning("%s:%d 无法解码，已跳过：%s", path, lineno, exc)
                continue
            name = get_python_dependency(line)
            if name is not None:
                names.add(name)
    return names
