"""文件名校验、倍率配对与描述文件合并的单元测试。"""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from image_assets.core.exceptions import InvalidFileNameError, MissingPairError, TemplateError
from image_assets.processing.descriptor import dump_descriptor, load_contents_template, merge_descriptor
from image_assets.processing.naming import check_pairing, parse_image_name, validate_image_name

TEMPLATE = {
    "images": [
        {"idiom": "universal", "scale": "1x"},
        {"idiom": "universal", "scale": "2x"},
        {"idiom": "universal", "scale": "3x"},
    ],
    "info": {"version": 1, "author": "xcode"},
}


@pytest.mark.parametrize(
    "name",
    ["icon_home@2x.png", "icon_home@3x.jpg", "A1@2x.jpg", "_@3x.png"],
)
def test_valid_names(name: str) -> None:
    assert validate_image_name(name)


@pytest.mark.parametrize(
    "name",
    [
        "icon_home@2.5x.png",
        "icon-home@2x.png",
        "icon_home@1x.png",
        "icon_home@2x.PNG",
        "icon_home@2x.jpeg",
        "icon_home.png",
        "@2x.png",
        "icon home@2x.png",
        "icon_home@2x.png.bak",
    ],
)
def test_invalid_names(name: str) -> None:
    assert not validate_image_name(name)
    with pytest.raises(InvalidFileNameError):
        parse_image_name(name)


def test_parse_image_name_extracts_parts() -> None:
    name = parse_image_name("icon_home@3x.jpg")

    assert name.identifier == "icon_home"
    assert name.scale == "3x"
    assert name.extension == "jpg"
    assert name.bundle_name == "icon_home.imageset"
    assert name.sibling("2x") == "icon_home@2x.jpg"


def test_check_pairing_requires_3x_for_2x(tmp_path: Path) -> None:
    two_x = tmp_path / "icon@2x.png"

    with pytest.raises(MissingPairError) as excinfo:
        check_pairing(two_x, file_exists=lambda path: False)
    assert excinfo.value.missing_path == tmp_path / "icon@3x.png"
    assert str(excinfo.value) == "@2x image exists but @3x is missing"

    seen: list[Path] = []
    check_pairing(two_x, file_exists=lambda path: seen.append(path) or True)
    assert seen == [tmp_path / "icon@3x.png"]


def test_check_pairing_ignores_3x_and_other_extension(tmp_path: Path) -> None:
    check_pairing(tmp_path / "icon@3x.png", file_exists=lambda path: False)

    # 另一扩展名的 @3x 不算配对
    (tmp_path / "icon@3x.jpg").write_bytes(b"x")
    with pytest.raises(MissingPairError):
        check_pairing(tmp_path / "icon@2x.png")


def test_merge_sets_filename_on_matching_scale_only() -> None:
    merged = merge_descriptor(TEMPLATE, "icon@2x.png")

    assert merged["images"][1]["filename"] == "icon@2x.png"
    assert "filename" not in merged["images"][0]
    assert "filename" not in merged["images"][2]
    assert merged["info"] == TEMPLATE["info"]
    # 输入文档保持不变
    assert all("filename" not in record for record in TEMPLATE["images"])


def test_merge_both_scales_accumulates() -> None:
    merged = merge_descriptor(merge_descriptor(TEMPLATE, "icon@3x.png"), "icon@2x.png")

    assert [record.get("filename") for record in merged["images"]] == [None, "icon@2x.png", "icon@3x.png"]


def test_merge_without_entries_is_noop() -> None:
    document = {"info": {"version": 1}}
    assert merge_descriptor(document, "icon@2x.png") is document
    assert merge_descriptor(["not", "a", "mapping"], "icon@2x.png") == ["not", "a", "mapping"]


def test_merge_rejects_unvalidated_name() -> None:
    with pytest.raises(InvalidFileNameError):
        merge_descriptor(TEMPLATE, "icon-2x.png")


def test_dump_descriptor_is_stable() -> None:
    text = dump_descriptor(merge_descriptor(TEMPLATE, "icon@2x.png"))

    assert text == dump_descriptor(json.loads(text))
    assert text.endswith("\n")
    assert text.index('"images"') < text.index('"info"')


def test_load_contents_template_errors(tmp_path: Path) -> None:
    with pytest.raises(TemplateError):
        load_contents_template(tmp_path / "missing.json")

    broken = tmp_path / "broken.json"
    broken.write_text("{not json", encoding="utf-8")
    with pytest.raises(TemplateError):
        load_contents_template(broken)

    good = tmp_path / "ContentsTemplate.json"
    good.write_text(json.dumps(TEMPLATE), encoding="utf-8")
    template = load_contents_template(good)
    assert template.raw == good.read_bytes()
    assert template.document == TEMPLATE
