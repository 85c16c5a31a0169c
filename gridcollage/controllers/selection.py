"""Selection controller for the images that make up a collage.

:class:`ImageSelection` keeps the ordered list of chosen images, the
images-per-row choice and whether a build is currently running.  It holds
plain paths only, so the same model backs the command line entry point and
any Qt front end.

The two ways of adding images behave differently on purpose: choosing files
through a picker *replaces* the selection exactly as given, while dropping
files *appends* them, skipping unsupported extensions and paths already
selected.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Optional, Tuple, Union

from utils.collage_builder import NoImagesError
from utils.validation import has_allowed_extension

from .. import config

PathLike = Union[str, Path]


class SelectionBusyError(RuntimeError):
    """Raised when the selection is changed while a build is running."""


@dataclass(frozen=True)
class BuildRequest:
    """Everything a single collage build needs."""

    image_paths: Tuple[Path, ...]
    output_path: Path
    images_per_row: Optional[int]


class ImageSelection:
    """Manage the ordered image selection independently of UI widgets."""

    def __init__(self, paths: Iterable[PathLike] = ()) -> None:
        self._paths: List[Path] = [Path(p) for p in paths]
        self._images_per_row: str = config.IMAGES_PER_ROW_AUTO
        self._is_building = False
        self.logger = logging.getLogger("gridcollage.selection")

    @property
    def paths(self) -> Tuple[Path, ...]:
        return tuple(self._paths)

    @property
    def count(self) -> int:
        return len(self._paths)

    @property
    def is_building(self) -> bool:
        """Return whether a collage build is in progress."""

        return self._is_building

    @property
    def can_export(self) -> bool:
        return self.count > 0 and not self._is_building

    @property
    def can_clear(self) -> bool:
        return self.count > 0 and not self._is_building

    @property
    def images_per_row_choice(self) -> str:
        return self._images_per_row

    @property
    def images_per_row(self) -> Optional[int]:
        """Return the explicit column count, or ``None`` for automatic."""

        if self._images_per_row == config.IMAGES_PER_ROW_AUTO:
            return None
        return int(self._images_per_row)

    def set_images_per_row(self, choice: Union[str, int, None]) -> None:
        """Select one of :data:`config.IMAGES_PER_ROW_CHOICES`.

        ``None`` is accepted as an alias for ``"Auto"`` and integers are
        matched against their string form.
        """

        value = config.IMAGES_PER_ROW_AUTO if choice is None else str(choice)
        if value not in config.IMAGES_PER_ROW_CHOICES:
            raise ValueError(
                f"Unsupported images per row: {choice!r}; "
                f"expected one of {', '.join(config.IMAGES_PER_ROW_CHOICES)}"
            )
        self._images_per_row = value

    def replace(self, paths: Iterable[PathLike]) -> None:
        """Replace the selection with *paths* as chosen in a file picker."""

        self._ensure_idle()
        self._paths = [Path(p) for p in paths]
        self.logger.info("Selection replaced: %d images", len(self._paths))

    def add_dropped(self, paths: Iterable[PathLike]) -> int:
        """Append dropped *paths*, returning how many were actually added.

        Paths without a supported image extension and paths already in the
        selection are skipped.
        """

        self._ensure_idle()
        added = 0
        for raw in paths:
            path = Path(raw)
            if not has_allowed_extension(path, config.SUPPORTED_IMAGE_FORMATS):
                self.logger.warning("Skipping unsupported file: %s", path)
                continue
            if path in self._paths:
                continue
            self._paths.append(path)
            added += 1
        self.logger.info("Added %d dropped images; total %d", added, self.count)
        return added

    def clear(self) -> None:
        """Remove every selected image."""

        self._ensure_idle()
        self._paths.clear()

    def begin_build(self) -> None:
        """Mark a build as started.

        Raises:
            NoImagesError: If nothing is selected
            SelectionBusyError: If a build is already running
        """

        if self._is_building:
            raise SelectionBusyError("A collage is already being built")
        if not self._paths:
            raise NoImagesError()
        self._is_building = True

    def end_build(self) -> None:
        self._is_building = False

    def build_request(self, output_path: PathLike) -> BuildRequest:
        """Return a snapshot of the selection for a build writing *output_path*."""

        return BuildRequest(
            image_paths=tuple(self._paths),
            output_path=Path(output_path),
            images_per_row=self.images_per_row,
        )

    def _ensure_idle(self) -> None:
        if self._is_building:
            raise SelectionBusyError("Selection cannot change while a collage is being built")
