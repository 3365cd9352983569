"""Application configuration constants."""

from __future__ import annotations

from pathlib import Path

APP_NAME = "iBanner"
APP_VERSION = "1.0.0"
ORG_NAME = "ThankL"


def get_data_dir() -> Path:
    """Return the application data directory, creating it if needed."""
    data_dir = Path.home() / ".ibanner"
    data_dir.mkdir(parents=True, exist_ok=True)
    return data_dir


# Key-value store keys
HISTORY_LIST_KEY = "iBanner_HistoryList"
CUSTOM_TEMPLATES_KEY = "iBanner_CustomTemplates"
FAVORITE_TEMPLATE_IDS_KEY = "iBanner_FavoriteTemplateIds"
LAST_USED_STYLE_KEY = "LastUsedStyle"

# History
MAX_HISTORY_COUNT = 10

# Banner text / style limits
MAX_TEXT_LENGTH = 100
FONT_SIZE_MIN = 20
FONT_SIZE_MAX = 100
FONT_SIZE_STEP = 2
DEFAULT_FONT_SIZE = 48.0

# Animation speed: UI slider range and the hard clamp applied before timing math
SPEED_SLIDER_MIN = 0.5
SPEED_SLIDER_MAX = 3.0
SPEED_MIN = 0.1
SPEED_MAX = 10.0
DEFAULT_ANIMATION_SPEED = 1.0

# Background images
BACKGROUND_IMAGES_FOLDER = "BackgroundImages"
BACKGROUND_IMAGE_PREFIX = "bg_"
BACKGROUND_IMAGE_SUFFIX = ".jpg"
JPEG_QUALITY = 80

IMAGE_EXTENSIONS = [".png", ".jpg", ".jpeg", ".bmp", ".gif", ".webp", ".tiff"]
IMAGE_FILTER = "Image Files ({});;All Files (*)".format(
    " ".join(f"*{ext}" for ext in IMAGE_EXTENSIONS)
)

# Animation timing (seconds at speed 1.0)
SCROLL_DURATION = 8.0
BLINK_DURATION = 0.8
GRADIENT_DURATION = 3.0
BREATHING_DURATION = 2.0
TYPEWRITER_INTERVAL = 0.1
TYPEWRITER_PAUSE = 2.0
FLASH_INTERVAL = 0.3
FLASH_FADE_IN = 0.5
FLASH_FADE_OUT_DELAY = 0.3
FLASH_FADE_OUT = 0.3
FLASH_SLOT_COUNT = 5

# Display
FRAME_INTERVAL_MS = 16
# Longest step fed to the engine after a stall or suspend
MAX_TICK_SECONDS = 1.0
DISMISS_DRAG_DISTANCE = 100
TEXT_HORIZONTAL_PADDING = 20

# Premium
PREMIUM_GATING_ENABLED = False
