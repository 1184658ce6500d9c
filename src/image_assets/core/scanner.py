"""输入目录扫描与筛选逻辑。"""

from __future__ import annotations

from pathlib import Path
from typing import Iterator, Sequence

from image_assets.core.config import JobConfig
from image_assets.core.models import ScanEntry


def _contains_reserved(relative: Path, reserved: Sequence[str]) -> bool:
    text = relative.as_posix()
    return any(name in text for name in reserved)


def iter_input_entries(config: JobConfig) -> Iterator[ScanEntry]:
    """按排序后的目录遍历顺序产出待处理条目。

    名称等于保留资源包名的目录产出一次 reserved 条目，
    路径中包含保留名称的其他条目全部跳过。
    """

    root = config.input_dir
    extensions = set(config.extensions)
    reserved = tuple(config.reserved_bundles)

    for candidate in sorted(root.rglob("*")):
        relative = candidate.relative_to(root)

        if _contains_reserved(relative.parent, reserved):
            continue
        if candidate.name in reserved and candidate.is_dir():
            yield ScanEntry(kind="reserved", path=candidate, relative_path=relative)
            continue
        if _contains_reserved(relative, reserved):
            continue

        if not candidate.is_file():
            continue
        # 扩展名区分大小写，PNG/JPG 不视为图片
        if candidate.suffix[1:] not in extensions:
            continue

        yield ScanEntry(kind="image", path=candidate, relative_path=relative)
