"""Uniform-height grid collage builder.

Every source image is scaled to a common height, laid out left-to-right and
top-to-bottom in a grid whose cells share the widest image's width, pasted
onto a white canvas and written out as PNG or JPEG depending on the output
extension.

The build is a single blocking call with no shared state, so callers that
need a responsive UI run it on a worker (see ``gridcollage.workers``).
"""

from __future__ import annotations

import logging
import math
import os
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Tuple, Union

from PIL import Image

from gridcollage import config
from .image_operations import new_canvas, open_image, paste_image, resize_to_height
from .validation import output_format_for, validate_image_path

PathLike = Union[str, Path]

logger = logging.getLogger("gridcollage.builder")

# mkstemp creates files as 0600
_NEW_FILE_MODE = 0o644


class CollageError(Exception):
    """Base class for every failure of a collage build."""


class NoImagesError(CollageError):
    """Raised when a build is requested without any input image."""

    def __init__(self) -> None:
        super().__init__("No images provided")


class ImageLoadError(CollageError):
    """Raised when an input image cannot be decoded."""

    def __init__(self, path: PathLike, reason: Optional[str] = None) -> None:
        self.path = str(path)
        self.reason = reason
        super().__init__(f"Failed to load image: {self.path}")


class CanvasCreationError(CollageError):
    """Raised when the output canvas cannot be allocated."""

    def __init__(self, width: int, height: int) -> None:
        self.width = width
        self.height = height
        super().__init__("Failed to create canvas")


class SaveError(CollageError):
    """Raised when encoding or writing the collage fails."""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"Failed to save collage: {reason}")


@dataclass(frozen=True, slots=True)
class GridLayout:
    """Geometry of a collage grid.

    Attributes:
        count (int): Number of images placed
        columns (int): Cells per row
        rows (int): Number of rows
        cell_width (int): Shared width of every cell
        cell_height (int): Height of every cell
        padding (int): Margin between and around cells
    """
    count: int
    columns: int
    rows: int
    cell_width: int
    cell_height: int = config.TARGET_HEIGHT
    padding: int = config.PADDING

    @property
    def canvas_width(self) -> int:
        return self.cell_width * self.columns + self.padding * (self.columns + 1)

    @property
    def canvas_height(self) -> int:
        return self.cell_height * self.rows + self.padding * (self.rows + 1)

    @property
    def canvas_size(self) -> Tuple[int, int]:
        return self.canvas_width, self.canvas_height

    def cell_position(self, index: int) -> Tuple[int, int]:
        """Return the ``(row, column)`` of the image at ``index``."""
        if not 0 <= index < self.count:
            raise IndexError(f"Cell index {index} out of range for {self.count} images")
        return divmod(index, self.columns)

    def cell_origin(self, index: int) -> Tuple[int, int]:
        """Return the top-left ``(x, y)`` of the cell at ``index``."""
        row, col = self.cell_position(index)
        x = col * self.cell_width + self.padding * (col + 1)
        y = row * self.cell_height + self.padding * (row + 1)
        return x, y

    def to_dict(self) -> Dict[str, Any]:
        """Convert the layout to a dictionary representation."""
        return {
            "count": self.count,
            "columns": self.columns,
            "rows": self.rows,
            "cell_width": self.cell_width,
            "cell_height": self.cell_height,
            "padding": self.padding,
            "canvas_width": self.canvas_width,
            "canvas_height": self.canvas_height,
        }


def auto_columns(count: int) -> int:
    """Return ``ceil(sqrt(count))``, the automatic column count."""
    return math.isqrt(count - 1) + 1 if count > 0 else 1


def _check_images_per_row(images_per_row: Optional[int]) -> None:
    if images_per_row is None:
        return
    if isinstance(images_per_row, bool) or not isinstance(images_per_row, int):
        raise ValueError(f"images_per_row must be an integer, got {images_per_row!r}")
    if images_per_row <= 0:
        raise ValueError("images_per_row must be greater than zero")


def compute_grid(
    widths: Sequence[int],
    images_per_row: Optional[int] = None,
    *,
    cell_height: int = config.TARGET_HEIGHT,
    padding: int = config.PADDING,
) -> GridLayout:
    """
    Compute the grid for images of the given normalized ``widths``.

    Args:
        widths: Widths of the normalized images, in placement order
        images_per_row: Explicit column count, ``None`` for ``ceil(sqrt(n))``
        cell_height: Height shared by every cell
        padding: Margin between and around cells

    Returns:
        GridLayout: The derived geometry

    Raises:
        NoImagesError: If ``widths`` is empty
        ValueError: If ``images_per_row`` is not a positive integer
    """
    if not widths:
        raise NoImagesError()
    _check_images_per_row(images_per_row)

    count = len(widths)
    columns = images_per_row if images_per_row is not None else auto_columns(count)
    rows = -(-count // columns)
    return GridLayout(
        count=count,
        columns=columns,
        rows=rows,
        cell_width=max(widths),
        cell_height=cell_height,
        padding=padding,
    )


def load_normalized_image(path: PathLike, target_height: int = config.TARGET_HEIGHT) -> Image.Image:
    """
    Decode ``path`` and scale it to ``target_height``.

    Raises:
        ImageLoadError: If the file is missing, undecodable or has no height
    """
    try:
        safe_path = validate_image_path(path)
        image = open_image(safe_path)
    except Exception as e:
        logger.error("Failed to load image %s: %s", path, e)
        raise ImageLoadError(path, str(e)) from e

    if image.width <= 0 or image.height <= 0:
        logger.error("Image %s has invalid size %s", path, image.size)
        raise ImageLoadError(path, f"invalid size {image.size}")

    try:
        return resize_to_height(image, target_height)
    except Exception as e:
        logger.error("Failed to resize image %s: %s", path, e)
        raise ImageLoadError(path, str(e)) from e


def render_canvas(images: Sequence[Image.Image], layout: GridLayout) -> Image.Image:
    """Paste ``images`` onto a fresh white canvas following ``layout``.

    Raises:
        CanvasCreationError: If the canvas cannot be allocated
    """
    width, height = layout.canvas_size
    try:
        canvas = new_canvas((width, height), config.BACKGROUND_COLOR)
    except (MemoryError, ValueError) as e:
        logger.error("Failed to allocate %dx%d canvas: %s", width, height, e)
        raise CanvasCreationError(width, height) from e

    for idx, image in enumerate(images):
        paste_image(canvas, image, layout.cell_origin(idx))
    return canvas


def _save_params(fmt: str) -> Dict[str, Any]:
    if fmt == "JPEG":
        return {"format": "JPEG", "quality": config.QUALITY_DEFAULT}
    return {"format": "PNG", "optimize": True}


def save_canvas(canvas: Image.Image, output_path: PathLike) -> Path:
    """
    Encode ``canvas`` to ``output_path`` without leaving partial files.

    The image is written to a temporary file beside the target and moved
    into place once encoding succeeded.

    Raises:
        SaveError: If encoding or any filesystem step fails
    """
    path = Path(output_path).expanduser()
    fmt = output_format_for(path)
    tmp_name: Optional[str] = None
    try:
        mode = path.stat().st_mode & 0o777 if path.is_file() else _NEW_FILE_MODE
        fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
        with os.fdopen(fd, "wb") as fh:
            canvas.save(fh, **_save_params(fmt))
        os.chmod(tmp_name, mode)
        os.replace(tmp_name, path)
        tmp_name = None
    except Exception as e:
        logger.error("Failed to save collage to %s: %s", path, e)
        raise SaveError(str(e) or type(e).__name__) from e
    finally:
        if tmp_name is not None:
            try:
                os.unlink(tmp_name)
            except FileNotFoundError:
                pass
    return path


def create_collage(
    image_paths: Sequence[PathLike],
    output_path: PathLike,
    images_per_row: Optional[int] = None,
) -> Path:
    """
    Build a collage from ``image_paths`` and write it to ``output_path``.

    Args:
        image_paths: Input images, in placement order
        output_path: Destination; ``.png`` selects PNG, anything else JPEG
        images_per_row: Explicit column count, ``None`` for automatic

    Returns:
        Path: The written file

    Raises:
        NoImagesError: If ``image_paths`` is empty
        ImageLoadError: If any input cannot be decoded
        CanvasCreationError: If the canvas cannot be allocated
        SaveError: If the output cannot be written
        ValueError: If ``images_per_row`` is not a positive integer
    """
    if not image_paths:
        raise NoImagesError()
    _check_images_per_row(images_per_row)

    images: List[Image.Image] = [load_normalized_image(p) for p in image_paths]
    layout = compute_grid([img.width for img in images], images_per_row)
    logger.info("Building collage: %s", layout.to_dict())

    canvas = render_canvas(images, layout)
    images.clear()
    saved = save_canvas(canvas, output_path)
    logger.info("Saved collage to %s", saved)
    return saved


__all__ = [
    "CanvasCreationError",
    "CollageError",
    "GridLayout",
    "ImageLoadError",
    "NoImagesError",
    "SaveError",
    "auto_columns",
    "compute_grid",
    "create_collage",
    "load_normalized_image",
    "render_canvas",
    "save_canvas",
]
