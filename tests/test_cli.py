"""Tests for the command-line interface."""

from typer.testing import CliRunner

from htmlguard.cli.app import app

runner = CliRunner()


class TestSanitizeCommand:
    """Tests for `htmlguard sanitize`."""

    def test_stdin(self, config_file):
        """Test that stdin is sanitized to stdout."""
        path = config_file("sanitizer:\n  engine: lexical\n")
        result = runner.invoke(app, ["sanitize", "--config", path], input="<b>x</b><foo>y</foo>")
        assert result.exit_code == 0
        assert result.stdout == "<b>x</b>y"

    def test_file_input(self, config_file, tmp_path):
        """Test that a file argument is read."""
        path = config_file("{}\n")
        src = tmp_path / "in.html"
        src.write_text('<div onclick="evil()">hi</div>')
        result = runner.invoke(app, ["sanitize", str(src), "--config", path])
        assert result.exit_code == 0
        assert result.stdout == "<div>hi</div>"

    def test_engine_override(self, config_file):
        """Test that --engine selects the bleach engine."""
        path = config_file("{}\n")
        result = runner.invoke(app, ["sanitize", "--engine", "bleach", "--config", path], input="a & b")
        assert result.exit_code == 0
        assert result.stdout == "a &amp; b"

    def test_missing_file(self, config_file, tmp_path):
        """Test that an unreadable file exits 1."""
        path = config_file("{}\n")
        result = runner.invoke(app, ["sanitize", str(tmp_path / "missing.html"), "--config", path])
        assert result.exit_code == 1

    def test_bad_config(self, config_file):
        """Test that an invalid config exits 1."""
        path = config_file("sanitizer:\n  engine: nope\n")
        result = runner.invoke(app, ["sanitize", "--config", path], input="x")
        assert result.exit_code == 1


class TestOtherCommands:
    """Tests for escape, render and policy commands."""

    def test_escape(self):
        """Test that escape writes entity-escaped text."""
        result = runner.invoke(app, ["escape"], input="<i>'</i>")
        assert result.exit_code == 0
        assert result.stdout == "&lt;i&gt;&#039;&lt;/i&gt;"

    def test_render(self, config_file):
        """Test that render converts markdown."""
        path = config_file("{}\n")
        result = runner.invoke(app, ["render", "--config", path], input="# T\n")
        assert result.exit_code == 0
        assert result.stdout == "<h1>T</h1>"

    def test_policy_show(self, config_file):
        """Test that policy show lists tags and schemes."""
        path = config_file("sanitizer:\n  extra_tags: [details]\n")
        result = runner.invoke(app, ["policy", "show", "--config", path])
        assert result.exit_code == 0
        assert "blockquote" in result.stdout
        assert "details" in result.stdout
        assert "javascript:" in result.stdout

    def test_check_url_safe(self, config_file):
        """Test that a safe URL exits 0."""
        path = config_file("{}\n")
        result = runner.invoke(app, ["policy", "check-url", "https://x", "--config", path])
        assert result.exit_code == 0
        assert "safe" in result.stdout

    def test_check_url_unsafe(self, config_file):
        """Test that a denylisted URL exits 1."""
        path = config_file("{}\n")
        result = runner.invoke(app, ["policy", "check-url", " javascript:x", "--config", path])
        assert result.exit_code == 1
        assert "unsafe" in result.stdout
