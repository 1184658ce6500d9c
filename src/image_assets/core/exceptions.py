"""项目内使用的自定义异常定义。"""


class ImageAssetsError(Exception):
    """基础异常类型。"""


class InvalidConfigurationError(ImageAssetsError):
    """配置不合法时抛出。"""


class TemplateError(ImageAssetsError):
    """模板文件无法读取、解析或缺少占位符。"""


class InvalidFileNameError(ImageAssetsError):
    """图片文件名不符合 `<identifier>@<scale>.<ext>` 规范。"""

    reason = "Invalid file name"

    def __init__(self, file_name: str) -> None:
        super().__init__(self.reason)
        self.file_name = file_name


class MissingPairError(ImageAssetsError):
    """存在 @2x 图片但缺少对应的 @3x 图片。"""

    reason = "@2x image exists but @3x is missing"

    def __init__(self, missing_path) -> None:
        super().__init__(self.reason)
        self.missing_path = missing_path


class AssetWriteError(ImageAssetsError):
    """资源目录、描述文件或图片写入失败。"""
