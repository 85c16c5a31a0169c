"""Reusable image manipulation operations.

This module centralizes the small Pillow helpers the collage builder is made
of.  Functions are intentionally small and pure to keep them easy to test
and to encourage reuse.
"""

from __future__ import annotations

from pathlib import Path
from typing import Union

from PIL import Image, ImageOps

ColorValue = int | tuple[int, ...]

_ALPHA_MODES = {"RGBA", "LA", "PA", "RGBa", "La"}


def open_image(path: Union[str, Path]) -> Image.Image:
    """Decode ``path`` into a fully loaded, upright image.

    EXIF orientation is applied and multi-frame files (GIF, TIFF) yield
    their first frame.  The returned image no longer references the file.
    Pillow's own errors (``UnidentifiedImageError``, ``OSError``,
    ``DecompressionBombError``) propagate to the caller.
    """
    with Image.open(path) as img:
        img.seek(0)
        upright = ImageOps.exif_transpose(img)
        upright.load()
        if upright is img:
            upright = img.copy()
    return upright


def scaled_width(width: int, height: int, target_height: int) -> int:
    """Return the width that keeps ``width:height`` at ``target_height``.

    Halves round up and the result is never below one pixel.
    """
    if height <= 0:
        raise ValueError("height must be positive")
    return max(1, int(target_height * width / height + 0.5))


def resize_to_height(image: Image.Image, target_height: int) -> Image.Image:
    """Resize ``image`` to ``target_height`` preserving its aspect ratio."""
    width = scaled_width(image.width, image.height, target_height)
    if image.mode not in {"RGB", "RGBA"}:
        image = image.convert("RGBA" if has_alpha(image) else "RGB")
    return image.resize((width, target_height), Image.Resampling.LANCZOS)


def has_alpha(image: Image.Image) -> bool:
    """Return ``True`` when ``image`` carries transparency."""
    return image.mode in _ALPHA_MODES or "transparency" in image.info


def new_canvas(size: tuple[int, int], color: ColorValue = (255, 255, 255)) -> Image.Image:
    """Return an opaque RGB canvas of ``size`` filled with ``color``."""
    return Image.new("RGB", size, color)


def paste_image(canvas: Image.Image, image: Image.Image, origin: tuple[int, int]) -> None:
    """Draw ``image`` unscaled onto ``canvas`` with its top-left at ``origin``.

    Transparent pixels let the canvas show through.
    """
    if image.mode == "RGBA":
        canvas.paste(image, origin, image)
    else:
        canvas.paste(image, origin)


__all__ = [
    "has_alpha",
    "new_canvas",
    "open_image",
    "paste_image",
    "resize_to_height",
    "scaled_width",
]
