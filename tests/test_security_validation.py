import pytest

from utils.validation import (
    has_allowed_extension,
    output_format_for,
    validate_image_path,
    validate_output_path,
)
from gridcollage import config


def test_validate_image_path_rejects_urls(tmp_path):
    with pytest.raises(ValueError):
        validate_image_path("http://example.com/a.png")


def test_validate_image_path_rejects_missing_and_directories(tmp_path):
    with pytest.raises(ValueError, match="does not exist"):
        validate_image_path(tmp_path / "missing.png")
    with pytest.raises(ValueError, match="Not a file"):
        validate_image_path(tmp_path)


def test_validate_image_path_rejects_bad_extension(tmp_path):
    f = tmp_path / "evil.txt"
    f.write_text("not an image")
    with pytest.raises(ValueError):
        validate_image_path(f, config.SUPPORTED_IMAGE_FORMATS)
    # Without an extension filter any existing file is accepted
    assert validate_image_path(f) == f.resolve()


def test_validate_output_path_checks_directory(tmp_path):
    bad_dir = tmp_path / "missing" / "out.png"
    with pytest.raises(ValueError):
        validate_output_path(bad_dir)
    with pytest.raises(ValueError):
        validate_output_path(tmp_path)
    with pytest.raises(ValueError):
        validate_output_path("ftp://host/out.png")


def test_validate_output_path_accepts_any_extension(tmp_path):
    assert validate_output_path(tmp_path / "out.weird") == (tmp_path / "out.weird").resolve()


@pytest.mark.parametrize(
    "name, fmt",
    [
        ("out.png", "PNG"),
        ("OUT.PNG", "PNG"),
        ("out.jpg", "JPEG"),
        ("out.jpeg", "JPEG"),
        ("out.tiff", "JPEG"),
        ("out", "JPEG"),
    ],
)
def test_output_format_for(name, fmt):
    assert output_format_for(name) == fmt


def test_has_allowed_extension_is_case_insensitive():
    assert has_allowed_extension("photo.JPG", config.SUPPORTED_IMAGE_FORMATS)
    assert has_allowed_extension("photo.heic", {".heic"})
    assert not has_allowed_extension("notes.txt", config.SUPPORTED_IMAGE_FORMATS)
    assert not has_allowed_extension("README", config.SUPPORTED_IMAGE_FORMATS)


def test_colon_in_filename_is_not_a_url(tmp_path, monkeypatch):
    f = tmp_path / "shot:1.png"
    f.write_bytes(b"")
    monkeypatch.chdir(tmp_path)

    assert validate_image_path("shot:1.png") == f.resolve()
    assert validate_output_path("out:1.png") == (tmp_path / "out:1.png").resolve()
    with pytest.raises(ValueError, match="URLs"):
        validate_image_path("HTTPS://example.com/shot:1.png")
