"""汇总输出与报告生成工具。"""

from __future__ import annotations

import csv
from pathlib import Path
from typing import Iterable

from image_assets.core.models import BatchResult, FileOutcome

HEADER = ["source_path", "identifier", "status", "output_path", "message"]
BANNER = "*" * 45


def summary_lines(result: BatchResult) -> list[str]:
    """构建结束时打印的横幅文本。"""

    if not result.failed:
        return [
            BANNER,
            f"*** {len(result.identifiers)} images processed successfully ***",
            BANNER,
        ]

    lines = [BANNER, f"*** Completed with error count: {len(result.failed)} ***"]
    lines.extend(f"reason: {reason}, path: {path}" for path, reason in result.errors())
    lines.append(BANNER)
    return lines


def write_csv_report(outcomes: Iterable[FileOutcome], report_path: Path) -> Path:
    """将处理结果写入 CSV 报告。"""

    report_path.parent.mkdir(parents=True, exist_ok=True)
    with report_path.open("w", newline="", encoding="utf-8") as handle:
        writer = csv.writer(handle)
        writer.writerow(HEADER)
        for record in outcomes:
            writer.writerow(
                [
                    record.source_path.as_posix(),
                    record.identifier or "",
                    record.status,
                    str(record.output_path) if record.output_path else "",
                    record.message or "",
                ]
            )
    return report_path
