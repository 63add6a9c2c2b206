"""Tests for archive naming and collision handling."""

import re
from datetime import datetime

from src.backup.naming import (
    format_timestamp,
    generate_archive_name,
    sanitize,
    unique_archive_path,
)
from tests.helpers import FIXED_NOW

NAME_PATTERN = re.compile(r"^md_save_backup_\(.+\)\.zip$")


class TestFormatTimestamp:
    def test_reference_instant(self):
        assert format_timestamp(FIXED_NOW) == "Mon Jan 2 3:04PM 2006"

    def test_midnight_is_twelve_am(self):
        assert format_timestamp(datetime(2023, 7, 15, 0, 9)) == "Sat Jul 15 12:09AM 2023"

    def test_noon_is_twelve_pm(self):
        assert format_timestamp(datetime(2024, 12, 31, 12, 0)) == "Tue Dec 31 12:00PM 2024"

    def test_morning(self):
        assert format_timestamp(datetime(2021, 3, 4, 9, 30)) == "Thu Mar 4 9:30AM 2021"


class TestGenerateArchiveName:
    def test_reference_name(self):
        assert generate_archive_name(FIXED_NOW) == "md_save_backup_(Mon_Jan_2_3_04PM_2006).zip"

    def test_no_spaces_or_colons(self):
        for hour in range(24):
            name = generate_archive_name(datetime(2022, 5, 9, hour, 59))
            assert " " not in name
            assert ":" not in name
            assert NAME_PATTERN.match(name)

    def test_deterministic(self):
        assert generate_archive_name(FIXED_NOW) == generate_archive_name(FIXED_NOW)

    def test_seconds_ignored(self):
        later = FIXED_NOW.replace(second=59)
        assert generate_archive_name(later) == generate_archive_name(FIXED_NOW)

    def test_sanitize(self):
        assert sanitize("a b:c") == "a_b_c"


class TestUniqueArchivePath:
    def test_free_name_unchanged(self, out_dir):
        name = generate_archive_name(FIXED_NOW)
        assert unique_archive_path(out_dir, name) == out_dir / name

    def test_collision_gets_counter_inside_parens(self, out_dir):
        name = generate_archive_name(FIXED_NOW)
        (out_dir / name).write_bytes(b"existing")

        dest = unique_archive_path(out_dir, name)
        assert dest.name == "md_save_backup_(Mon_Jan_2_3_04PM_2006_1).zip"
        assert NAME_PATTERN.match(dest.name)

    def test_repeated_collisions(self, out_dir):
        name = generate_archive_name(FIXED_NOW)
        (out_dir / name).write_bytes(b"0")
        (out_dir / "md_save_backup_(Mon_Jan_2_3_04PM_2006_1).zip").write_bytes(b"1")

        dest = unique_archive_path(out_dir, name)
        assert dest.name == "md_save_backup_(Mon_Jan_2_3_04PM_2006_2).zip"
