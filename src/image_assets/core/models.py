"""核心数据模型定义。"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Iterator, Optional


@dataclass(slots=True, frozen=True)
class ImageName:
    """解析后的图片文件名，例如 `icon_home@2x.png`。"""

    file_name: str
    identifier: str
    scale: str
    extension: str

    @property
    def bundle_name(self) -> str:
        return f"{self.identifier}.imageset"

    def sibling(self, scale: str) -> str:
        """同一 identifier、同一扩展名下另一倍率的文件名。"""

        return f"{self.identifier}@{scale}.{self.extension}"


@dataclass(slots=True)
class ScanEntry:
    """扫描阶段得到的输入路径。kind 为 image 或 reserved。"""

    kind: str
    path: Path
    relative_path: Path


@dataclass(slots=True)
class ContentsTemplate:
    """Contents.json 模板：原始字节用于播种，解析结果用于校验。"""

    path: Path
    raw: bytes
    document: Any


@dataclass(slots=True)
class FileOutcome:
    """记录单个文件的处理结果（用于汇总/报告）。"""

    source_path: Path
    status: str
    identifier: Optional[str] = None
    output_path: Optional[Path] = None
    message: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status == "processed"


@dataclass(slots=True)
class BatchResult:
    """一次完整构建的产出。"""

    succeeded: list[FileOutcome]
    failed: list[FileOutcome]
    identifiers: list[str] = field(default_factory=list)
    generated_path: Optional[Path] = None

    def all_outcomes(self) -> list[FileOutcome]:
        """返回所有结果记录，方便生成报告。"""

        return [*self.succeeded, *self.failed]

    def errors(self) -> Iterator[tuple[Path, str]]:
        """按记录顺序返回 (path, reason)。"""

        for outcome in self.failed:
            yield outcome.source_path, outcome.message or ""
