"""Contents.json 描述文件的读取、合并与序列化。"""

from __future__ import annotations

import copy
import json
import logging
from pathlib import Path
from typing import Any

from image_assets.core.exceptions import TemplateError
from image_assets.core.models import ContentsTemplate
from image_assets.processing.naming import parse_image_name

LOGGER = logging.getLogger(__name__)

ENTRIES_KEY = "images"
SCALE_KEY = "scale"
FILENAME_KEY = "filename"


def merge_descriptor(descriptor: Any, file_name: str) -> Any:
    """把文件名写入倍率匹配的记录，返回新的描述文档。

    输入文档不会被修改；缺少 images 列表时原样返回。
    """

    scale = parse_image_name(file_name).scale

    if not isinstance(descriptor, dict):
        return descriptor
    entries = descriptor.get(ENTRIES_KEY)
    if not isinstance(entries, list):
        return descriptor

    merged = copy.deepcopy(descriptor)
    for record in merged[ENTRIES_KEY]:
        if isinstance(record, dict) and record.get(SCALE_KEY) == scale:
            record[FILENAME_KEY] = file_name
    return merged


def dump_descriptor(document: Any) -> str:
    """稳定的缩进格式，保留键顺序。"""

    return json.dumps(document, indent=2, ensure_ascii=False) + "\n"


def read_descriptor(path: Path) -> Any:
    with path.open("r", encoding="utf-8") as handle:
        return json.load(handle)


def write_descriptor(path: Path, document: Any) -> None:
    path.write_text(dump_descriptor(document), encoding="utf-8")


def load_contents_template(path: Path) -> ContentsTemplate:
    """读取 Contents.json 模板；读取或解析失败属于致命错误。"""

    try:
        raw = path.read_bytes()
    except OSError as exc:
        raise TemplateError(f"无法读取描述文件模板: {path}") from exc

    try:
        document = json.loads(raw.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise TemplateError(f"描述文件模板不是合法的 JSON: {path}") from exc

    if not isinstance(document, dict) or not isinstance(document.get(ENTRIES_KEY), list):
        LOGGER.warning("描述文件模板缺少 %s 列表，合并将不会写入文件名", ENTRIES_KEY)

    return ContentsTemplate(path=path, raw=raw, document=document)
