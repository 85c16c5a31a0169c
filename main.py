"""Entrypoint: builds a collage from the command line via gridcollage.main.

Run from the project root, e.g. ``python main.py a.jpg b.png -o out.png``.
"""

import sys

try:
    from gridcollage.main import main
except Exception as exc:
    # Provide a clear error if imports fail due to PYTHONPATH issues
    raise RuntimeError("Failed to import gridcollage. Ensure project root is on PYTHONPATH.") from exc


if __name__ == "__main__":
    sys.exit(main())
