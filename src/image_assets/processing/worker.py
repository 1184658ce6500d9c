"""单个图片的入库工作单元。"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Sequence

from image_assets.core.exceptions import InvalidFileNameError, MissingPairError
from image_assets.core.models import FileOutcome
from image_assets.core.output_manager import BundleWriter
from image_assets.processing.naming import check_pairing, parse_image_name

LOGGER = logging.getLogger(__name__)


@dataclass(slots=True)
class IngestTask:
    """描述单个图片的入库任务。"""

    source_path: Path
    relative_path: Path
    output_dir: Path
    template_raw: bytes
    cleanup_partial: bool = True


def run_task(task: IngestTask) -> FileOutcome:
    """校验文件名、写入描述文件并复制图片到对应资源包。"""

    file_name = task.source_path.name

    try:
        name = parse_image_name(file_name)
    except InvalidFileNameError as exc:
        LOGGER.warning("文件名不合法：%s", task.relative_path)
        return FileOutcome(source_path=task.relative_path, status="error-name", message=exc.reason)

    try:
        check_pairing(task.source_path)
    except MissingPairError as exc:
        LOGGER.warning("缺少 @3x 图片：%s", exc.missing_path)
        return FileOutcome(
            source_path=task.relative_path,
            status="error-pair",
            identifier=name.identifier,
            message=exc.reason,
        )

    LOGGER.info("=== 处理图片：%s (%s) ===", name.identifier, name.scale)
    writer = BundleWriter(output_dir=task.output_dir, name=name)
    created = False

    try:
        created = writer.ensure_bundle()
        writer.ensure_contents(task.template_raw)
        writer.record_image()
        destination = writer.copy_image(task.source_path)
    except (OSError, ValueError) as exc:
        LOGGER.error("写入资源包失败 %s: %s", task.relative_path, exc)
        if created and task.cleanup_partial:
            writer.discard()
        return FileOutcome(
            source_path=task.relative_path,
            status="error-io",
            identifier=name.identifier,
            output_path=writer.bundle_dir,
            message=str(exc),
        )

    return FileOutcome(
        source_path=task.relative_path,
        status="processed",
        identifier=name.identifier,
        output_path=destination,
    )


def run_group(tasks: Sequence[IngestTask]) -> list[FileOutcome]:
    """按顺序处理同一 identifier 的全部任务，避免并发写同一个描述文件。"""

    return [run_task(task) for task in tasks]
