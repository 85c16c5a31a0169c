"""Utility package for grid collage."""

from . import collage_builder, image_operations, validation

__all__ = ["collage_builder", "image_operations", "validation"]
