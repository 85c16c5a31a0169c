"""Path checks for collage inputs and outputs."""
from __future__ import annotations

from pathlib import Path
from typing import Iterable, Optional, Union
from urllib.parse import urlparse

PathLike = Union[str, Path]


def _has_url_scheme(path_str: str) -> bool:
    """Return True if *path_str* looks like a URL with a scheme.

    Only ``scheme://...`` forms count, so filenames containing a colon
    (``shot:1.png``) stay plain paths.  Single-letter schemes such as ``"C"``
    are treated as drive letters on Windows and therefore ignored.
    """
    parsed = urlparse(path_str)
    return bool(
        parsed.scheme
        and len(parsed.scheme) > 1
        and path_str[len(parsed.scheme):].startswith("://")
    )


def _normalize_exts(exts: Iterable[str]) -> set[str]:
    return {"." + ext.lower().lstrip(".") for ext in exts}


def has_allowed_extension(path: PathLike, allowed_exts: Iterable[str]) -> bool:
    """Return ``True`` when the suffix of *path* is one of *allowed_exts*.

    Extensions may be given with or without the leading dot; comparison is
    case-insensitive.
    """
    return Path(str(path)).suffix.lower() in _normalize_exts(allowed_exts)


def validate_image_path(
    path: PathLike, allowed_exts: Optional[Iterable[str]] = None
) -> Path:
    """Validate a user-supplied image *path*.

    The path must point to an existing regular file and must not include a
    URL scheme.  When *allowed_exts* is given the suffix must also match one
    of them.  Returns the resolved ``Path`` object.
    """
    path_str = str(path)
    if _has_url_scheme(path_str):
        raise ValueError("URLs are not allowed")

    p = Path(path_str).expanduser()
    try:
        p = p.resolve(strict=True)
    except FileNotFoundError as exc:
        raise ValueError(f"File does not exist: {path_str}") from exc

    if not p.is_file():
        raise ValueError(f"Not a file: {path_str}")

    if allowed_exts is not None and not has_allowed_extension(p, allowed_exts):
        raise ValueError(f"Unsupported file extension: {p.suffix}")

    return p


def validate_output_path(path: PathLike) -> Path:
    """Validate an output file *path*.

    Ensures the directory exists, the target is not itself a directory and
    the path does not contain a URL scheme.  Any extension is accepted since
    non-PNG outputs are written as JPEG.  Returns the resolved ``Path``.
    """
    path_str = str(path)
    if _has_url_scheme(path_str):
        raise ValueError("URLs are not allowed")

    p = Path(path_str).expanduser().resolve()

    if not p.parent.is_dir():
        raise ValueError(f"Directory does not exist: {p.parent}")

    if p.is_dir():
        raise ValueError(f"Output path is a directory: {p}")

    return p


def output_format_for(path: PathLike) -> str:
    """Return the Pillow format name used to encode *path*.

    ``.png`` (any case) selects lossless PNG; every other suffix, including
    none at all, selects JPEG.
    """
    if Path(str(path)).suffix.lower() == ".png":
        return "PNG"
    return "JPEG"


__all__ = [
    "has_allowed_extension",
    "output_format_for",
    "validate_image_path",
    "validate_output_path",
]
