"""Application-wide constants and default values."""

# Default window dimensions (pixels)
DEFAULT_WINDOW_WIDTH = 1280
DEFAULT_WINDOW_HEIGHT = 760

# Auto-fit never enlarges a sticker beyond this factor
MAX_AUTO_SCALE = 1.5

# Smallest scale reachable by dragging a corner handle
MIN_INTERACTIVE_SCALE = 0.05
ROTATION_SNAP_DEG = 15.0

# Uploads accepted from the file picker / drop zone
ALLOWED_UPLOAD_MIME_TYPES = frozenset(
    {"image/png", "image/jpeg", "image/svg+xml", "image/webp"}
)
VECTOR_MIME_TYPE = "image/svg+xml"
VECTOR_EXTENSION = ".svg"

DEFAULT_EXPORT_MULTIPLIER = 2
EXPORT_FILENAME_PREFIX = "vehicle-sticker"

DEFAULT_DESIGN_SERVICE_URL = "http://localhost:3000"
DEFAULT_DESIGN_SERVICE_PORT = 3000

EMPTY_TEXT_MESSAGE = "Please enter text first!"
INVALID_UPLOAD_MESSAGE = "Please upload PNG, JPG, SVG or WEBP."
CLEAR_CONFIRMATION_MESSAGE = "Are you sure you want to clear the canvas?"
