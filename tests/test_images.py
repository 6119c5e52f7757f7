import base64

import pytest

from app.utils.images import (
    ImageKind,
    ImageUpload,
    classify,
    file_to_base64,
    first_invalid_base64,
    get_base64_mime_type,
    is_base64,
    is_file_path,
    normalize_mime_type,
    process_images_array,
    process_main_image,
    validate_base64,
    validate_upload,
)

# PNG 1x1 transparent
PNG_BYTES = base64.b64decode(
    "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAQAAAC1HAwCAAAAC0lEQVR42mNkYAAAAAYAAjCB0C8AAAAASUVORK5CYII="
)


def test_classify_inline_path_and_url():
    assert classify("data:image/png;base64,AAAA") is ImageKind.BASE64
    assert classify("/uploads/x.jpg") is ImageKind.FILE_PATH
    assert classify("images/x.jpg") is ImageKind.FILE_PATH
    assert classify("https://example.com/x.jpg") is ImageKind.URL
    assert classify("") is None
    assert classify(None) is None
    assert classify(42) is None


def test_base64_subtype_and_validation():
    assert is_base64("data:image/png;base64,AAAA")
    assert get_base64_mime_type("data:image/png;base64,AAAA") == "png"
    assert get_base64_mime_type("data:image/svg+xml;base64,AAAA") == "svg+xml"
    assert validate_base64("data:image/PNG;base64,AAAA")
    assert not validate_base64("data:image/bmp;base64,AAAA")
    assert get_base64_mime_type("/uploads/x.jpg") is None


def test_is_file_path_rejects_data_and_http():
    assert not is_file_path("data:text/plain;base64,AAAA")
    assert not is_file_path("http://example.com/a.png")
    assert is_file_path("/uploads/a.png")


@pytest.mark.parametrize(
    "mime, expected",
    [
        ("image/jpg", "image/jpeg"),
        ("IMAGE/PNG", "image/png"),
        ("image/svg+xml", "image/svg+xml"),
        ("application/pdf", "image/jpeg"),
        (None, "image/jpeg"),
        ("", "image/jpeg"),
    ],
)
def test_normalize_mime_type(mime, expected):
    assert normalize_mime_type(mime) == expected


def test_file_to_base64_requires_bytes():
    assert file_to_base64(b"abc", "image/png") == "data:image/png;base64,YWJj"
    with pytest.raises(TypeError):
        file_to_base64("abc", "image/png")


def test_process_main_image():
    assert process_main_image(None) is None
    assert process_main_image("") is None
    assert process_main_image("https://example.com/x.jpg") == "https://example.com/x.jpg"
    assert process_main_image(b"abc", "image/gif") == "data:image/gif;base64,YWJj"


def test_process_images_array_keeps_order_and_falsy_entries():
    items = [b"abc", "/uploads/a.png", None, ImageUpload(b"abc", "image/webp"), ""]
    assert process_images_array(items) == [
        "data:image/jpeg;base64,YWJj",
        "/uploads/a.png",
        None,
        "data:image/webp;base64,YWJj",
        "",
    ]
    assert process_images_array("not-a-list") == []
    assert process_images_array(None) == []


def test_first_invalid_base64():
    assert first_invalid_base64(["/uploads/a.png", "data:image/png;base64,AA"]) is None
    assert first_invalid_base64(["data:image/png;base64,AA", "data:image/bmp;base64,AA"]) == 1


def test_validate_upload_detects_real_type():
    assert validate_upload(PNG_BYTES, max_mb=1) == "image/png"
    # le type annoncé ne suffit pas
    with pytest.raises(ValueError):
        validate_upload(b"plain text", max_mb=1, declared_mime="image/png")
    with pytest.raises(ValueError):
        validate_upload(b"", max_mb=1)


def test_validate_upload_size_limit():
    too_big = PNG_BYTES + b"\0" * (1024 * 1024)
    with pytest.raises(ValueError, match="Taille"):
        validate_upload(too_big, max_mb=1)


def test_validate_upload_svg_by_declared_type():
    svg = b'<svg xmlns="http://www.w3.org/2000/svg"></svg>'
    assert validate_upload(svg, max_mb=1, declared_mime="image/svg+xml") == "image/svg+xml"
