"""Grid Collage: lay out images on a uniform-height grid and save the result."""

__version__ = "1.0.0"
