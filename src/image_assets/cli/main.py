"""命令行入口。"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import typer
from rich.progress import (
    BarColumn,
    Progress,
    SpinnerColumn,
    TextColumn,
    TimeElapsedColumn,
)

from image_assets.core.config import JobConfig, TemplateConfig
from image_assets.core.exceptions import ImageAssetsError
from image_assets.core.progress import ProgressUpdate
from image_assets.core.report import summary_lines
from image_assets.processing.pipeline import process_batch
from image_assets.utils.logging import setup_logging

app = typer.Typer(help="扫描图片目录，生成 .imageset 资源包与 R.generated.swift。")


def _build_progress_callback(progress: Progress):
    task_id: Optional[int] = None

    def callback(update: ProgressUpdate) -> None:
        nonlocal task_id
        if update.total == 0:
            return
        if task_id is None:
            task_id = progress.add_task("处理图片", total=update.total)
        progress.update(task_id, completed=update.completed)

    return callback


def _check_workers(value: int) -> int:
    if value < 1:
        raise typer.BadParameter("并发进程数量必须大于 0")
    return value


@app.command("run")
def run_cli(  # noqa: PLR0913
    input_path: Path = typer.Option(..., "-i", help="输入图片目录"),
    assets_output: Path = typer.Option(..., "-assetsOutput", help="资源目录输出路径（每次运行会被清空）"),
    code_output: Path = typer.Option(..., "-codeOutput", help="R.generated.swift 输出目录"),
    contents_template: Path = typer.Option(
        Path("ContentsTemplate.json"), "--contents-template", help="Contents.json 模板"
    ),
    code_template: Path = typer.Option(Path("R.template.swift"), "--code-template", help="代码模板"),
    max_workers: int = typer.Option(1, "--workers", "-w", callback=_check_workers, help="并发进程数量"),
    report: Optional[Path] = typer.Option(None, "--report", help="CSV 报告输出路径"),
    keep_partial: bool = typer.Option(False, "--keep-partial", help="失败时保留不完整的资源包目录"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="输出调试日志"),
) -> None:
    """执行一次完整构建。"""

    setup_logging(logging.DEBUG if verbose else logging.INFO)
    logging.getLogger(__name__).debug("CLI 参数解析完成")

    job = JobConfig(
        input_dir=input_path.expanduser().resolve(),
        assets_output=assets_output.expanduser().resolve(),
        code_output=code_output.expanduser().resolve(),
        templates=TemplateConfig(
            contents_template=contents_template.expanduser(),
            code_template=code_template.expanduser(),
        ),
        max_workers=max_workers,
        cleanup_partial=not keep_partial,
        report_path=report.expanduser().resolve() if report else None,
    )

    progress = Progress(
        SpinnerColumn(),
        TextColumn("[bold blue]{task.description}"),
        BarColumn(),
        TimeElapsedColumn(),
    )

    try:
        with progress:
            result = process_batch(job, progress_callback=_build_progress_callback(progress))
    except ImageAssetsError as exc:
        typer.secho(f"!!!Error: {exc}", fg=typer.colors.RED)
        raise typer.Exit(code=1) from exc

    color = typer.colors.GREEN if not result.failed else typer.colors.RED
    for line in summary_lines(result):
        typer.secho(line, fg=color)

    if result.generated_path is not None:
        typer.echo(f"生成代码：{result.generated_path}")
    if job.report_path is not None:
        typer.echo(f"报告文件：{job.report_path}")

    if result.failed:
        raise typer.Exit(code=1)


if __name__ == "__main__":
    app()
