"""根据模板生成 R.generated.swift 图片访问代码。"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, Optional

from image_assets.core.exceptions import TemplateError

LOGGER = logging.getLogger(__name__)

PLACEHOLDER = "// Images Template placeholder"
GENERATED_FILENAME = "R.generated.swift"


def render_accessor(identifier: str) -> str:
    return f'\t\tpublic static let {identifier}: UIImage? = UIImage(named: "{identifier}")'


def generate_source(identifiers: Iterable[str], template_text: str) -> str:
    """用访问器代码替换模板中的占位符（仅替换一次）。

    identifier 会去重并排序，保证多次运行输出一致。
    """

    if PLACEHOLDER not in template_text:
        raise TemplateError(f"代码模板缺少占位符: {PLACEHOLDER}")

    block = "\n".join(render_accessor(identifier) for identifier in sorted(set(identifiers)))
    return template_text.replace(PLACEHOLDER, block, 1)


def write_generated_source(
    identifiers: Iterable[str],
    template_path: Path,
    output_dir: Path,
) -> Optional[Path]:
    """读取模板并写出生成文件。

    模板读取失败抛出 TemplateError，不写任何文件；
    写入失败仅记录日志，返回 None。
    """

    try:
        template_text = template_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise TemplateError(f"无法读取代码模板: {template_path}") from exc

    source = generate_source(identifiers, template_text)
    destination = output_dir / GENERATED_FILENAME

    try:
        destination.write_text(source, encoding="utf-8")
    except OSError as exc:
        LOGGER.error("生成代码写入失败：%s", exc)
        return None

    LOGGER.info("已生成代码文件：%s", destination)
    return destination
