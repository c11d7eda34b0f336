"""Central configuration for slideshow image selection.

Constants shared by the walker, the metadata resolver, the cache store and
the playlist writer live here. Per-slideshow settings (directories, date and
aspect ratio ranges) come from the user's YAML file, see settings.py.
"""

import os

# =============================================================================
# APPLICATION
# =============================================================================

# Used for the platform cache directory and the config directory names
APP_NAME = "slidepick"

# Default config file name inside the platform config directory
CONFIG_FILENAME = "config.yaml"

# =============================================================================
# METADATA CACHE
# =============================================================================

# Extension of cache entry files (<md5-of-path>.json)
CACHE_EXTENSION = ".json"

# =============================================================================
# CONCURRENCY
# =============================================================================

# Number of resolutions in flight at once (one per logical processor)
DEFAULT_CONCURRENCY = os.cpu_count() or 1

# =============================================================================
# EXIF DATE TAGS
# =============================================================================

# Tag ids considered as creation date candidates, mapped to display names.
# DateTime lives in IFD0, the other two in the Exif sub-IFD.
EXIF_DATE_TIME = 0x0132  # "ModifyDate"
EXIF_DATE_TIME_ORIGINAL = 0x9003  # "DateTimeOriginal"
EXIF_DATE_TIME_DIGITIZED = 0x9004  # "CreateDate"

EXIF_DATE_TAG_NAMES = {
    EXIF_DATE_TIME_ORIGINAL: "DateTimeOriginal",
    EXIF_DATE_TIME_DIGITIZED: "CreateDate",
    EXIF_DATE_TIME: "ModifyDate",
}

# Offset tags (e.g. "+09:00") paired with each date tag
EXIF_OFFSET_TAGS = {
    EXIF_DATE_TIME: 0x9010,  # OffsetTime
    EXIF_DATE_TIME_ORIGINAL: 0x9011,  # OffsetTimeOriginal
    EXIF_DATE_TIME_DIGITIZED: 0x9012,  # OffsetTimeDigitized
}

# =============================================================================
# PLAYLIST
# =============================================================================

# Seconds each slide is shown
SLIDE_TIMER_SECONDS = 2

# Transition effect duration in milliseconds
EFFECT_DURATION_MS = 1000
