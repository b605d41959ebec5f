#!/usr/bin/env python3
"""
test_io.py

Unit tests for settings loading and data.csv streaming.
"""

import os
import unittest
import tempfile
import shutil
from pathlib import Path
from unittest import mock
import sys

# Add code directory to path
sys.path.insert(0, str(Path(__file__).resolve().parents[1] / "code"))

from accountwatch.io import load_items, load_settings, read_rows
from accountwatch.kinds import SCREEN_NAMES, SUSPENSIONS
from accountwatch.config import build_settings
from accountwatch.records import InvalidRecord, UnknownSuspension

URL = "https://pbs.twimg.com/profile_images/42/abc_normal.jpg"
GOOD = f"1609459200,42,true,false,500,oldname,newname,{URL}"


class TestLoadSettings(unittest.TestCase):
    """Test cases for settings resolution."""

    def setUp(self):
        patcher = mock.patch.dict(os.environ, {}, clear=False)
        patcher.start()
        self.addCleanup(patcher.stop)
        for name in list(os.environ):
            if name.startswith("ACCOUNTWATCH_"):
                del os.environ[name]

    def test_defaults(self):
        s = load_settings(SCREEN_NAMES)
        self.assertEqual(s.base_dir, Path("screen-names/"))
        self.assertEqual(s.input_csv, Path("screen-names/data.csv"))
        self.assertEqual(s.thumbnails_dir, Path("screen-names/thumbnails"))
        self.assertEqual(s.reported_limit, 10)
        self.assertEqual(s.followers_count_limit, 200)

        self.assertEqual(load_settings(SUSPENSIONS).base_dir, Path("suspensions/"))

    def test_explicit_base_wins(self):
        os.environ["ACCOUNTWATCH_SUSPENSIONS_DIR"] = "/data/from-env"
        self.assertEqual(load_settings(SUSPENSIONS, "elsewhere").base_dir, Path("elsewhere"))
        self.assertEqual(load_settings(SUSPENSIONS).base_dir, Path("/data/from-env"))

    def test_limits_from_environment(self):
        os.environ["ACCOUNTWATCH_REPORTED_LIMIT"] = "3"
        os.environ["ACCOUNTWATCH_FOLLOWERS_LIMIT"] = "1000"
        s = load_settings(SCREEN_NAMES)
        self.assertEqual(s.reported_limit, 3)
        self.assertEqual(s.followers_count_limit, 1000)

    def test_bad_limit_rejected(self):
        os.environ["ACCOUNTWATCH_FOLLOWERS_LIMIT"] = "lots"
        with self.assertRaises(ValueError) as ctx:
            load_settings(SCREEN_NAMES)
        self.assertIn("ACCOUNTWATCH_FOLLOWERS_LIMIT", str(ctx.exception))


class TestReadRows(unittest.TestCase):
    """Test cases for streaming data.csv rows."""

    def setUp(self):
        self.test_dir = tempfile.mkdtemp()
        self.settings = build_settings(self.test_dir)

    def tearDown(self):
        shutil.rmtree(self.test_dir, ignore_errors=True)

    def write(self, *lines):
        self.settings.input_csv.write_text("\n".join(lines) + "\n", encoding="utf-8")

    def test_missing_file(self):
        with self.assertRaises(FileNotFoundError):
            list(read_rows(self.settings.input_csv, 8))

    def test_empty_file(self):
        self.settings.input_csv.write_text("", encoding="utf-8")
        self.assertEqual(list(load_items(SCREEN_NAMES, self.settings)), [])

    def test_fields_kept_as_text(self):
        self.write(GOOD, f'1609459200,0042,false,true,0,"a,b",NA,{URL}')
        rows = list(read_rows(self.settings.input_csv, 8))

        self.assertEqual(rows[0], (1, GOOD.split(",")))
        self.assertEqual(rows[1][1][1], "0042")
        self.assertEqual(rows[1][1][5], "a,b")
        self.assertEqual(rows[1][1][6], "NA")

    def test_first_row_is_data(self):
        self.write(GOOD)
        items = list(load_items(SCREEN_NAMES, self.settings))
        self.assertEqual(len(items), 1)
        self.assertEqual(items[0].followers_count, 500)

    def test_short_row_fails_with_raw_row(self):
        short = "1609459200,43,true,false,500,oldname,newname"
        self.write(GOOD, short, GOOD)

        with self.assertRaises(InvalidRecord) as ctx:
            list(load_items(SCREEN_NAMES, self.settings))
        self.assertEqual(ctx.exception.row, short.split(","))
        self.assertEqual(ctx.exception.line, 2)

    def test_long_row_fails(self):
        self.write(GOOD, GOOD + ",extra", GOOD)
        with self.assertRaises(InvalidRecord) as ctx:
            list(load_items(SCREEN_NAMES, self.settings))
        self.assertEqual(ctx.exception.row, (GOOD + ",extra").split(","))
        self.assertEqual(ctx.exception.line, 2)

    def test_earlier_short_row_reported_before_later_long_row(self):
        short = "1609459200,43,true,false,500,oldname,newname"
        self.write(GOOD, short, GOOD + ",extra")

        with self.assertRaises(InvalidRecord) as ctx:
            list(load_items(SCREEN_NAMES, self.settings))
        self.assertEqual(ctx.exception.row, short.split(","))
        self.assertEqual(ctx.exception.line, 2)

    def test_long_first_row_keeps_raw_text(self):
        long_row = f"0001609459200,0042,true,false,500,oldname,newname,{URL},extra"
        self.write(long_row, GOOD)

        with self.assertRaises(InvalidRecord) as ctx:
            list(load_items(SCREEN_NAMES, self.settings))
        self.assertEqual(ctx.exception.row[:2], ["0001609459200", "0042"])
        self.assertEqual(ctx.exception.row, long_row.split(","))
        self.assertEqual(ctx.exception.line, 1)

    def test_quoted_empty_row_fails(self):
        self.write(GOOD, '""')
        with self.assertRaises(InvalidRecord) as ctx:
            list(load_items(SCREEN_NAMES, self.settings))
        self.assertEqual(ctx.exception.row, [""])
        self.assertEqual(ctx.exception.line, 2)

    def test_whitespace_row_fails(self):
        self.write(GOOD, "   ")
        with self.assertRaises(InvalidRecord) as ctx:
            list(load_items(SCREEN_NAMES, self.settings))
        self.assertEqual(ctx.exception.row, ["   "])

    def test_blank_lines_skipped_but_counted(self):
        short = "1609459200,43,true,false,500,oldname,newname"
        self.write(GOOD, "", GOOD, short)

        rows = list(read_rows(self.settings.input_csv, 8))
        self.assertEqual([n for n, _ in rows], [1, 3, 4])

        with self.assertRaises(InvalidRecord) as ctx:
            list(load_items(SCREEN_NAMES, self.settings))
        self.assertEqual(ctx.exception.line, 4)

    def test_bad_field_fails(self):
        self.write(GOOD, GOOD.replace("true", "yes"))
        with self.assertRaises(InvalidRecord):
            list(load_items(SCREEN_NAMES, self.settings))

    def test_suspension_rows(self):
        self.write(
            f"1609459200,,42,1262304000,someone,false,false,300,{URL}",
            "1609459200,1609718400,,,,,,,",
        )
        items = list(load_items(SUSPENSIONS, self.settings))

        self.assertIsNone(items[0].reversed_at)
        self.assertEqual(items[0].screen_name, "someone")
        self.assertIsInstance(items[1], UnknownSuspension)
        self.assertIsNotNone(items[1].reversed_at)


if __name__ == "__main__":
    unittest.main(verbosity=2)
