"""输出目录管理：重建根目录、资源包目录、描述文件与图片复制。"""

from __future__ import annotations

import errno
import logging
import shutil
from dataclasses import dataclass
from pathlib import Path

from image_assets.core.exceptions import AssetWriteError
from image_assets.core.models import ImageName
from image_assets.processing.descriptor import merge_descriptor, read_descriptor, write_descriptor

LOGGER = logging.getLogger(__name__)

CONTENTS_FILENAME = "Contents.json"
DIRECTORY_MODE = 0o755


def reset_output_root(output_dir: Path) -> Path:
    """删除并重新创建输出根目录。

    目录不存在时忽略删除错误；符号链接与普通文件只删除其本身。
    """

    LOGGER.info("清理已有输出目录：%s", output_dir)
    if output_dir.is_symlink() or output_dir.is_file():
        try:
            output_dir.unlink()
        except OSError as exc:
            raise AssetWriteError(f"无法删除输出路径: {output_dir}: {exc}") from exc
    else:
        shutil.rmtree(output_dir, ignore_errors=True)

    try:
        output_dir.mkdir(parents=True, exist_ok=True, mode=DIRECTORY_MODE)
    except OSError as exc:
        raise AssetWriteError(f"无法创建输出目录: {output_dir}: {exc}") from exc
    return output_dir


def copy_reserved_bundle(source: Path, output_dir: Path) -> Path:
    """原样复制保留资源包（如 AppIcon.appiconset）到输出根目录。"""

    destination = output_dir / source.name
    try:
        shutil.copytree(source, destination, dirs_exist_ok=True)
    except (OSError, shutil.Error) as exc:
        raise AssetWriteError(f"复制资源包失败: {source} -> {destination}: {exc}") from exc
    LOGGER.info("已复制保留资源包 %s", source.name)
    return destination


@dataclass(slots=True)
class BundleWriter:
    """负责单个 identifier 的 .imageset 目录。"""

    output_dir: Path
    name: ImageName

    @property
    def bundle_dir(self) -> Path:
        return self.output_dir / self.name.bundle_name

    @property
    def contents_path(self) -> Path:
        return self.bundle_dir / CONTENTS_FILENAME

    def ensure_bundle(self) -> bool:
        """创建资源包目录，返回是否为本次新建。"""

        created = not self.bundle_dir.exists()
        self.bundle_dir.mkdir(parents=True, exist_ok=True, mode=DIRECTORY_MODE)
        return created

    def ensure_contents(self, template_raw: bytes) -> None:
        if self.contents_path.exists():
            return
        LOGGER.debug("Contents.json 不存在，使用模板创建：%s", self.contents_path)
        self.contents_path.write_bytes(template_raw)

    def record_image(self) -> None:
        """读取描述文件、写入当前文件名并覆盖保存。"""

        document = merge_descriptor(read_descriptor(self.contents_path), self.name.file_name)
        write_descriptor(self.contents_path, document)
        LOGGER.debug("已写入 %s 到 %s", self.name.file_name, self.contents_path)

    def copy_image(self, source: Path) -> Path:
        """复制图片；同名文件已存在时失败，不覆盖。"""

        destination = self.bundle_dir / self.name.file_name
        if destination.exists():
            raise FileExistsError(errno.EEXIST, "目标图片已存在", str(destination))
        shutil.copy2(source, destination)
        return destination

    def discard(self) -> None:
        """删除不完整的资源包目录。"""

        LOGGER.warning("回滚不完整的资源包：%s", self.bundle_dir)
        shutil.rmtree(self.bundle_dir, ignore_errors=True)
