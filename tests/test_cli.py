import contextlib
import io
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from htmlformat.__main__ import main


class TestCommandLine(unittest.TestCase):
    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.dir = Path(self.tmp.name)

    def tearDown(self):
        self.tmp.cleanup()

    def test_formats_file_to_output(self):
        source = self.dir / "in.html"
        target = self.dir / "out.html"
        source.write_text("<ol> <li> A </li> </ol>", encoding="utf-8")
        assert main([str(source), "--fragment", "-o", str(target)]) == 0
        assert target.read_text(encoding="utf-8") == "<ol>\n <li>A</li>\n</ol>\n"

    def test_reads_stdin_and_writes_stdout(self):
        stdout = io.StringIO()
        with mock.patch("sys.stdin", io.StringIO("<p>Hi</p>")), contextlib.redirect_stdout(stdout):
            assert main([]) == 0
        assert "  <p>Hi</p>\n" in stdout.getvalue()

    def test_fragment_context(self):
        source = self.dir / "row.html"
        source.write_text("<td>x</td>", encoding="utf-8")
        stdout = io.StringIO()
        with contextlib.redirect_stdout(stdout):
            assert main([str(source), "--fragment", "--context", "tr"]) == 0
        assert stdout.getvalue() == "<td>x</td>\n"

    def test_missing_file(self):
        stderr = io.StringIO()
        with contextlib.redirect_stderr(stderr):
            assert main([str(self.dir / "missing.html")]) == 1
        assert "cannot read" in stderr.getvalue()

    def test_strict_parse_error(self):
        source = self.dir / "bad.html"
        source.write_text("<p>\x00</p>", encoding="utf-8")
        stderr = io.StringIO()
        with contextlib.redirect_stderr(stderr):
            assert main([str(source), "--fragment", "--strict", "-o", str(self.dir / "out.html")]) == 1
        assert "parse error" in stderr.getvalue()

    def test_strict_parse_error_leaves_no_output_file(self):
        source = self.dir / "bad.html"
        target = self.dir / "out.html"
        source.write_text("<p>\x00</p>", encoding="utf-8")
        with contextlib.redirect_stderr(io.StringIO()):
            assert main([str(source), "--fragment", "--strict", "-o", str(target)]) == 1
        assert not target.exists()

    def test_strict_parse_error_keeps_existing_output(self):
        source = self.dir / "bad.html"
        target = self.dir / "out.html"
        source.write_text("<p>\x00</p>", encoding="utf-8")
        target.write_text("<p>previous</p>\n", encoding="utf-8")
        with contextlib.redirect_stderr(io.StringIO()):
            assert main([str(source), "--fragment", "--strict", "-o", str(target)]) == 1
        assert target.read_text(encoding="utf-8") == "<p>previous</p>\n"

    def test_non_utf8_input(self):
        source = self.dir / "latin1.html"
        source.write_bytes(b"<p>caf\xe9</p>")
        stderr = io.StringIO()
        with contextlib.redirect_stderr(stderr):
            assert main([str(source), "--fragment"]) == 1
        assert "cannot read" in stderr.getvalue()
