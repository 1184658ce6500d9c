"""处理任务的配置模型。"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Sequence

APP_ICON_BUNDLE = "AppIcon.appiconset"
SUPPORTED_EXTENSIONS = ("png", "jpg")


@dataclass(slots=True)
class TemplateConfig:
    """描述文件模板与代码模板的位置。"""

    contents_template: Path = Path("ContentsTemplate.json")
    code_template: Path = Path("R.template.swift")


@dataclass(slots=True)
class JobConfig:
    """单次构建任务的配置集合。"""

    input_dir: Path
    assets_output: Path
    code_output: Path
    templates: TemplateConfig = field(default_factory=TemplateConfig)
    reserved_bundles: Sequence[str] = (APP_ICON_BUNDLE,)
    extensions: Sequence[str] = SUPPORTED_EXTENSIONS
    max_workers: int = 1
    cleanup_partial: bool = True
    report_path: Optional[Path] = None
