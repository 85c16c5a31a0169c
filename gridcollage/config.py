# config.py
"""
Application configuration constants for Grid Collage
"""

# Layout
TARGET_HEIGHT = 600     # Every image is normalized to this height
PADDING = 10            # White margin between and around cells
BACKGROUND_COLOR = (255, 255, 255)

# Output
QUALITY_DEFAULT = 95    # JPEG quality for any non-PNG output
DEFAULT_OUTPUT_NAME = "collage.jpg"

# Extensions accepted from drag-and-drop
SUPPORTED_IMAGE_FORMATS = ['jpg', 'jpeg', 'png', 'gif', 'bmp', 'tiff', 'tif', 'heic', 'webp']

# Images-per-row picker
IMAGES_PER_ROW_AUTO = "Auto"
IMAGES_PER_ROW_CHOICES = (IMAGES_PER_ROW_AUTO, "2", "3", "4", "5", "6")

# Logging
LOGGER_NAME = "gridcollage"
LOG_FILENAME = "gridcollage.log"
LOG_MAX_BYTES = 1_048_576
LOG_BACKUP_COUNT = 5
LOG_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"
