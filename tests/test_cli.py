#!/usr/bin/env python3
"""
Tests for the copygate command-line layer.

Covers argument parsing, logging setup and the terminal control surface.
"""

import io
import logging
import shutil
import sys
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

# Add src directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from copygate import (
    CHUNK_SIZE,
    CLIProcessor,
    ConflictDecision,
    CopyConfig,
    main,
    parse_arguments,
    setup_logging,
)


class TestArgumentParsing(unittest.TestCase):
    """Test cases for command-line argument parsing."""

    def test_basic_argument_parsing(self) -> None:
        args = parse_arguments(["source.mov", "dest.mov"])

        self.assertEqual(args.source, Path("source.mov"))
        self.assertEqual(args.destination, Path("dest.mov"))
        self.assertEqual(args.chunk_size, CHUNK_SIZE)
        self.assertFalse(args.verbose)
        self.assertFalse(args.overwrite)
        self.assertFalse(args.no_clobber)

    def test_chunk_size_option(self) -> None:
        args = parse_arguments(["-b", "4096", "a", "b"])
        config = CopyConfig.from_args(args)

        self.assertEqual(config.chunk_size, 4096)
        self.assertTrue(config.check_disk_space)

    def test_no_space_check_option(self) -> None:
        args = parse_arguments(["--no-space-check", "a", "b"])
        self.assertFalse(CopyConfig.from_args(args).check_disk_space)

    def test_conflict_flags_are_exclusive(self) -> None:
        """Test that --overwrite and --no-clobber cannot be combined."""
        with patch("sys.stderr", new_callable=io.StringIO):
            with self.assertRaises(SystemExit):
                parse_arguments(["--overwrite", "--no-clobber", "a", "b"])


class TestLoggingSetup(unittest.TestCase):
    """Test cases for logging setup."""

    def test_setup_logging_info_level(self) -> None:
        setup_logging(verbose=False)
        self.assertEqual(logging.getLogger().level, logging.INFO)

    def test_setup_logging_debug_level(self) -> None:
        setup_logging(verbose=True)
        self.assertEqual(logging.getLogger().level, logging.DEBUG)


class TestCLIProcessor(unittest.TestCase):
    """Test cases for the terminal control surface."""

    def setUp(self) -> None:
        """Set up test environment."""
        self.test_dir = tempfile.mkdtemp()
        self.test_path = Path(self.test_dir)

        self.source_file = self.test_path / "source.txt"
        self.test_data = b"This is test data for copying operations." * 50
        self.source_file.write_bytes(self.test_data)

    def tearDown(self) -> None:
        """Clean up test environment."""
        shutil.rmtree(self.test_dir, ignore_errors=True)

    def _run(self, processor: CLIProcessor) -> tuple[int, str]:
        with patch("sys.stdout", new_callable=io.StringIO) as stdout:
            code = processor.run()
        return code, stdout.getvalue()

    def test_copy_to_file(self) -> None:
        dest = self.test_path / "dest.txt"

        code, output = self._run(
            CLIProcessor(self.source_file, dest, CopyConfig(chunk_size=256))
        )

        self.assertEqual(code, 0)
        self.assertEqual(dest.read_bytes(), self.test_data)
        self.assertIn("Copying: 100.0%", output)
        self.assertIn("Success", output)

    def test_copy_into_directory(self) -> None:
        """Test that an existing directory receives the source file name."""
        dest_dir = self.test_path / "backup"
        dest_dir.mkdir()

        code, _ = self._run(CLIProcessor(self.source_file, dest_dir, CopyConfig()))

        self.assertEqual(code, 0)
        self.assertEqual((dest_dir / "source.txt").read_bytes(), self.test_data)

    def test_overwrite_policy(self) -> None:
        dest = self.test_path / "dest.txt"
        dest.write_bytes(b"X")

        code, _ = self._run(
            CLIProcessor(
                self.source_file, dest, CopyConfig(), ConflictDecision.OVERWRITE
            )
        )

        self.assertEqual(code, 0)
        self.assertEqual(dest.read_bytes(), self.test_data)

    def test_no_clobber_policy(self) -> None:
        dest = self.test_path / "dest.txt"
        dest.write_bytes(b"X")

        code, output = self._run(
            CLIProcessor(self.source_file, dest, CopyConfig(), ConflictDecision.ABANDON)
        )

        self.assertEqual(code, 0)
        self.assertEqual(dest.read_bytes(), b"X")
        self.assertIn("Skipped", output)

    def test_prompt_answer_overwrites(self) -> None:
        """Test the interactive prompt on a terminal."""
        dest = self.test_path / "dest.txt"
        dest.write_bytes(b"X")
        processor = CLIProcessor(self.source_file, dest, CopyConfig())

        with patch("sys.stdin") as stdin, patch("builtins.input", return_value="y"):
            stdin.isatty.return_value = True
            code, _ = self._run(processor)

        self.assertEqual(code, 0)
        self.assertEqual(dest.read_bytes(), self.test_data)

    def test_missing_source_fails(self) -> None:
        code, output = self._run(
            CLIProcessor(
                self.test_path / "missing.txt", self.test_path / "dest.txt", CopyConfig()
            )
        )

        self.assertEqual(code, 1)
        self.assertIn("Failed", output)

    def test_main_entry_point(self) -> None:
        dest = self.test_path / "dest.txt"

        with patch("sys.stdout", new_callable=io.StringIO):
            code = main(["-b", "128", str(self.source_file), str(dest)])

        self.assertEqual(code, 0)
        self.assertEqual(dest.read_bytes(), self.test_data)

    def test_main_rejects_bad_chunk_size(self) -> None:
        code = main(["-b", "0", str(self.source_file), str(self.test_path / "d")])
        self.assertEqual(code, 1)


if __name__ == "__main__":
    unittest.main()
