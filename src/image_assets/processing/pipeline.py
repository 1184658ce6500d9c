"""构建流水线：重建输出目录、扫描输入、入库图片并生成代码。"""

from __future__ import annotations

import logging
from concurrent.futures import ProcessPoolExecutor, as_completed
from pathlib import Path
from typing import Callable, Optional

from image_assets.core.config import JobConfig
from image_assets.core.exceptions import AssetWriteError, InvalidConfigurationError
from image_assets.core.models import BatchResult, FileOutcome
from image_assets.core.output_manager import copy_reserved_bundle, reset_output_root
from image_assets.core.progress import ProgressUpdate
from image_assets.core.report import write_csv_report
from image_assets.core.scanner import iter_input_entries
from image_assets.processing.codegen import write_generated_source
from image_assets.processing.descriptor import load_contents_template
from image_assets.processing.naming import IMAGE_NAME_RE
from image_assets.processing.worker import IngestTask, run_group

LOGGER = logging.getLogger(__name__)


ProgressCallback = Optional[Callable[[ProgressUpdate], None]]


def process_batch(config: JobConfig, progress_callback: ProgressCallback = None) -> BatchResult:
    """完整构建入口：每次都从空的输出目录重新生成。"""

    if not config.input_dir.is_dir():
        raise InvalidConfigurationError(f"输入目录不存在: {config.input_dir}")

    template = load_contents_template(config.templates.contents_template)
    output_dir = reset_output_root(config.assets_output)

    LOGGER.info("开始扫描输入路径：%s", config.input_dir)
    # 以扫描顺序为键，保证失败记录顺序与并发与否无关
    outcomes: dict[int, FileOutcome] = {}
    groups: dict[str, list[tuple[int, IngestTask]]] = {}

    for index, entry in enumerate(iter_input_entries(config)):
        if entry.kind == "reserved":
            try:
                copy_reserved_bundle(entry.path, output_dir)
            except AssetWriteError as exc:
                LOGGER.error("%s", exc)
                outcomes[index] = FileOutcome(
                    source_path=entry.relative_path,
                    status="error-io",
                    message=str(exc),
                )
            continue

        task = IngestTask(
            source_path=entry.path,
            relative_path=entry.relative_path,
            output_dir=output_dir,
            template_raw=template.raw,
            cleanup_partial=config.cleanup_partial,
        )
        groups.setdefault(_group_key(entry.path), []).append((index, task))

    total = sum(len(members) for members in groups.values())
    LOGGER.info("发现 %d 个候选图片文件", total)
    _emit_progress(progress_callback, 0, total, "开始处理图片")

    completed = 0
    for indices, results in _run_groups(groups, config.max_workers):
        for index, outcome in zip(indices, results):
            outcomes[index] = outcome
            completed += 1
            _emit_progress(progress_callback, completed, total, _describe(outcome))

    ordered = [outcomes[index] for index in sorted(outcomes)]
    succeeded = [outcome for outcome in ordered if outcome.ok]
    failed = [outcome for outcome in ordered if not outcome.ok]
    identifiers = sorted({outcome.identifier for outcome in succeeded if outcome.identifier})

    generated = write_generated_source(identifiers, config.templates.code_template, config.code_output)

    result = BatchResult(
        succeeded=succeeded,
        failed=failed,
        identifiers=identifiers,
        generated_path=generated,
    )
    if config.report_path is not None:
        _write_report(config.report_path, result)
    _emit_progress(progress_callback, total, total, "处理完成")
    return result


def _group_key(path: Path) -> str:
    # 合法文件名按 identifier 分组；其余文件各自独立
    match = IMAGE_NAME_RE.match(path.name)
    if match:
        return "id:" + match.group("identifier")
    return "path:" + str(path)


def _run_groups(groups: dict[str, list[tuple[int, IngestTask]]], max_workers: int):
    if max_workers <= 1 or len(groups) <= 1:
        for members in groups.values():
            indices = [index for index, _ in members]
            yield indices, run_group([task for _, task in members])
        return

    with ProcessPoolExecutor(max_workers=max_workers) as executor:
        future_map = {
            executor.submit(run_group, [task for _, task in members]): members for members in groups.values()
        }
        for future in as_completed(future_map):
            members = future_map[future]
            indices = [index for index, _ in members]
            try:
                results = future.result()
            except Exception as exc:  # noqa: BLE001
                LOGGER.exception("任务执行异常：%s", exc)
                results = [
                    FileOutcome(source_path=task.relative_path, status="error-worker", message=str(exc))
                    for _, task in members
                ]
            yield indices, results


def _describe(outcome: FileOutcome) -> str:
    if outcome.ok:
        return f"完成 {outcome.source_path}"
    return f"失败 {outcome.source_path}: {outcome.message}"


def _emit_progress(
    callback: ProgressCallback,
    completed: int,
    total: int,
    message: Optional[str] = None,
) -> None:
    if not callback:
        return
    callback(ProgressUpdate(total=total, completed=completed, message=message))


def _write_report(report_path: Path, result: BatchResult) -> None:
    try:
        write_csv_report(result.all_outcomes(), report_path)
    except OSError as exc:
        LOGGER.error("写入报告失败：%s", exc)
