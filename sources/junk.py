"""
Junk file detection.

Recognizes files and directories created by operating systems and tools
(Finder metadata, thumbnail databases, editor swap files) by name.
"""

import re
from pathlib import Path

JUNK_PATTERNS = [
    r"^npm-debug\.log$",  # npm error log
    r"^\..*\.swp$",  # vim swap file
    r"^\.DS_Store$",  # macOS folder attributes
    r"^\.AppleDouble$",  # macOS resource forks
    r"^\.LSOverride$",  # macOS launch services
    r"^Icon\r$",  # macOS custom folder icon
    r"^\._.*",  # AppleDouble companion file
    r"^\.Spotlight-V100(?:$|/)",  # macOS Spotlight index
    r"\.Trashes",  # macOS trash
    r"^__MACOSX$",  # macOS zip extraction leftovers
    r"~$",  # backup file
    r"^Thumbs\.db$",  # Windows thumbnail cache
    r"^ehthumbs\.db$",  # Windows Media Center thumbnails
    r"^ehthumbs_vista\.db$",
    r"^Desktop\.ini$",  # Windows folder settings
    r"@eaDir$",  # Synology thumbnail directory
]

JUNK_REGEX = re.compile("|".join(f"(?:{pattern})" for pattern in JUNK_PATTERNS))


def is_junk(path: str | Path) -> bool:
    """Check if a file or directory name is an OS/tool artifact.

    Args:
        path: File name or path; only the final component is checked.

    Returns:
        True if the name matches a known junk pattern.
    """
    return JUNK_REGEX.search(Path(path).name) is not None
