"""Archive file naming.

Archives are named after the local time of the cycle that produced them::

    md_save_backup_(Mon_Jan_2_3_04PM_2006).zip
"""

import os
from datetime import datetime
from pathlib import Path

ARCHIVE_PREFIX = "md_save_backup_("
ARCHIVE_SUFFIX = ").zip"

# Fixed English names so the archive name does not depend on the host locale
_WEEKDAYS = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")
_MONTHS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun",
           "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")


def format_timestamp(now: datetime) -> str:
    """Format like "Mon Jan 2 3:04PM 2006" (12-hour clock, unpadded day/hour)."""
    hour = now.hour % 12 or 12
    meridiem = "AM" if now.hour < 12 else "PM"
    return (
        f"{_WEEKDAYS[now.weekday()]} {_MONTHS[now.month - 1]} {now.day} "
        f"{hour}:{now.minute:02d}{meridiem} {now.year}"
    )


def sanitize(text: str) -> str:
    return text.replace(" ", "_").replace(":", "_")


def generate_archive_name(now: datetime) -> str:
    return f"{ARCHIVE_PREFIX}{sanitize(format_timestamp(now))}{ARCHIVE_SUFFIX}"


def unique_archive_path(out_dir, name: str) -> Path:
    """Join ``name`` onto ``out_dir``, disambiguating if it already exists.

    Two cycles finishing within the same minute would otherwise share a
    name; the counter goes inside the parentheses so the result still
    reads ``md_save_backup_(...).zip``.
    """
    out_dir = Path(out_dir)
    dest = out_dir / name
    if name.endswith(ARCHIVE_SUFFIX):
        stem, ext = name[:-len(ARCHIVE_SUFFIX)], ARCHIVE_SUFFIX
    else:
        stem, ext = os.path.splitext(name)

    counter = 1
    while dest.exists():
        dest = out_dir / f"{stem}_{counter}{ext}"
        counter += 1
    return dest
