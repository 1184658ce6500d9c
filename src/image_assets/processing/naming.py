"""图片文件名校验与倍率配对检查。"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Callable

from image_assets.core.config import SUPPORTED_EXTENSIONS
from image_assets.core.exceptions import InvalidFileNameError, MissingPairError
from image_assets.core.models import ImageName

IMAGE_NAME_RE = re.compile(
    r"^(?P<identifier>[A-Za-z0-9_]+)@(?P<scale>2x|3x)\.(?P<extension>"
    + "|".join(SUPPORTED_EXTENSIONS)
    + r")$"
)

PAIRED_SCALES = {"2x": "3x"}


def validate_image_name(file_name: str) -> bool:
    """文件名是否满足 `<identifier>@<2x|3x>.<png|jpg>`。"""

    return IMAGE_NAME_RE.match(file_name) is not None


def parse_image_name(file_name: str) -> ImageName:
    """解析文件名，失败时抛出 InvalidFileNameError。"""

    match = IMAGE_NAME_RE.match(file_name)
    if not match:
        raise InvalidFileNameError(file_name)
    return ImageName(
        file_name=file_name,
        identifier=match.group("identifier"),
        scale=match.group("scale"),
        extension=match.group("extension"),
    )


def check_pairing(path: Path, file_exists: Callable[[Path], bool] = Path.exists) -> None:
    """@2x 图片必须在同目录下存在同名同扩展名的 @3x 图片。

    @3x 图片不需要检查。缺失时抛出 MissingPairError。
    """

    name = parse_image_name(path.name)
    required_scale = PAIRED_SCALES.get(name.scale)
    if required_scale is None:
        return

    sibling = path.with_name(name.sibling(required_scale))
    if not file_exists(sibling):
        raise MissingPairError(sibling)
