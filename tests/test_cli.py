"""
Integration tests for the turkmorf command line.
"""

import io
import json
import os
import tempfile
import unittest
from contextlib import redirect_stderr, redirect_stdout
from pathlib import Path
from unittest.mock import patch

from turkmorf.cli import build_arg_parser, main


def run_cli(*argv):
    stdout, stderr = io.StringIO(), io.StringIO()
    with redirect_stdout(stdout), redirect_stderr(stderr):
        status = main(list(argv))
    return status, stdout.getvalue(), stderr.getvalue()


class TestCLI(unittest.TestCase):
    """Test the parse, roots and batch commands end to end."""

    def setUp(self):
        self.test_dir = tempfile.TemporaryDirectory()
        self.test_path = Path(self.test_dir.name)
        self.env = patch.dict("os.environ")
        self.env.start()
        for key in [key for key in os.environ if key.startswith("TURKMORF_")]:
            del os.environ[key]

    def tearDown(self):
        self.env.stop()
        self.test_dir.cleanup()

    def test_no_command_prints_help(self):
        status, stdout, _ = run_cli()
        self.assertEqual(status, 1)
        self.assertIn("usage", stdout)

    def test_parse_text(self):
        status, stdout, _ = run_cli("parse", "kitabım", "foo")
        self.assertEqual(status, 0)
        self.assertIn("kitap+Noun+A3sg+P1sg[ım]+Nom", stdout)
        self.assertIn("foo\n  (no analysis)", stdout)

    def test_parse_json(self):
        status, stdout, _ = run_cli("parse", "kitap", "--format", "json")
        self.assertEqual(status, 0)
        data = json.loads(stdout)
        self.assertEqual(data[0]["word"], "kitap")
        self.assertEqual(data[0]["analyses"][0]["analysis"], "kitap+Noun+A3sg+Pnon+Nom")

    def test_parse_unknown_letter(self):
        status, _, stderr = run_cli("parse", "taxi")
        self.assertEqual(status, 1)
        self.assertIn("Unknown letter", stderr)

    def test_roots_from_lexicon_and_inline_entry(self):
        status, stdout, _ = run_cli("roots", "kitap", "akıl [A:LastVowelDrop]")
        self.assertEqual(status, 0)
        self.assertIn("kitab\tkitap+Noun", stdout)
        self.assertIn("akl\takıl+Noun", stdout)

    def test_roots_unhandled_special(self):
        status, _, stderr = run_cli("roots", "kalem [A:Special]")
        self.assertEqual(status, 1)
        self.assertIn("special", stderr)

    def test_custom_lexicon(self):
        lexicon = self.test_path / "lexicon.txt"
        lexicon.write_text("masa\n", encoding="utf-8")
        status, stdout, _ = run_cli("--lexicon", str(lexicon), "parse", "masalar", "kitap")
        self.assertEqual(status, 0)
        self.assertIn("masa+Noun+A3pl[lar]+Pnon+Nom", stdout)
        self.assertIn("kitap\n  (no analysis)", stdout)

    def test_missing_lexicon_file(self):
        status, _, stderr = run_cli("--lexicon", str(self.test_path / "missing.txt"), "parse", "kitap")
        self.assertEqual(status, 1)
        self.assertIn("ERROR", stderr)

    def test_batch(self):
        words = self.test_path / "words.txt"
        words.write_text("kitabım\n\nfoo\ngitti\n", encoding="utf-8")
        status, stdout, _ = run_cli("batch", str(words), "--workers", "2", "--timeout", "30")
        self.assertEqual(status, 0)
        lines = stdout.splitlines()
        self.assertEqual(lines[0], "kitabım\tkitap+Noun+A3sg+P1sg[ım]+Nom")
        self.assertIn("foo\t-", lines)
        self.assertIn("gitti\tgitmek+Verb+Pos+Past[ti]+A3sg", lines)

    def test_batch_reports_bad_words(self):
        words = self.test_path / "words.txt"
        words.write_text("kitap\nxyz\n", encoding="utf-8")
        status, stdout, _ = run_cli("batch", str(words))
        self.assertEqual(status, 1)
        self.assertIn("xyz\tERROR", stdout)

    def test_bad_environment(self):
        with patch.dict("os.environ", {"TURKMORF_WORKERS": "lots"}):
            status, _, stderr = run_cli("parse", "kitap")
        self.assertEqual(status, 2)
        self.assertIn("TURKMORF_WORKERS", stderr)

    def test_arg_parser_subcommands(self):
        args = build_arg_parser().parse_args(["--debug", "batch", "words.txt", "--workers", "3"])
        self.assertTrue(args.debug)
        self.assertEqual(args.command, "batch")
        self.assertEqual(args.workers, 3)
        self.assertIsNone(args.timeout)


if __name__ == '__main__':
    unittest.main()
