"""Tests for the `pipes` CLI."""

import pytest
from typer.testing import CliRunner

from pipe_preprocessor.cli import app

runner = CliRunner()


@pytest.fixture(autouse=True)
def _isolated_cwd(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("HOME", str(tmp_path / "home"))


class TestTransformCommand:
    def test_single_file_to_stdout(self, tmp_path):
        src = tmp_path / "Card.svelte"
        src.write_text("<p>Text: {text | toUpperCase}</p>\n")
        result = runner.invoke(app, ["transform", str(src)])
        assert result.exit_code == 0
        assert "<p>Text: {toUpperCase(text)}</p>" in result.output

    def test_prefix_option(self, tmp_path):
        src = tmp_path / "Card.svelte"
        src.write_text("{price | formatCurrency:'EUR' | toUpperCase}")
        result = runner.invoke(app, ["transform", str(src), "--prefix", "utils."])
        assert result.exit_code == 0
        assert "{utils.toUpperCase(utils.formatCurrency(price, 'EUR'))}" in result.output

    def test_single_file_to_out(self, tmp_path):
        src = tmp_path / "Card.svelte"
        src.write_text("{a | f}")
        dest = tmp_path / "build" / "Card.svelte"
        result = runner.invoke(app, ["transform", str(src), "--out", str(dest)])
        assert result.exit_code == 0
        assert "Wrote" in result.output
        assert dest.read_text() == "{f(a)}"

    def test_debug_lists_rewrites(self, tmp_path):
        src = tmp_path / "Card.svelte"
        src.write_text("{a | f}")
        dest = tmp_path / "build" / "Card.svelte"
        result = runner.invoke(app, ["transform", str(src), "-o", str(dest), "--debug"])
        assert result.exit_code == 0
        assert "Rewritten blocks (1)" in result.output

    def test_directory_requires_out(self, svelte_tree):
        result = runner.invoke(app, ["transform", str(svelte_tree)])
        assert result.exit_code == 1
        assert "--out is required" in result.output

    def test_directory_with_out(self, svelte_tree, tmp_path):
        out = tmp_path / "out"
        result = runner.invoke(app, ["transform", str(svelte_tree), "--out", str(out)])
        assert result.exit_code == 0
        assert "Processed" in result.output
        assert (out / "App.svelte").read_text().startswith("<h1>{uppercase(title)}</h1>")

    def test_directory_dry_run(self, svelte_tree, tmp_path):
        result = runner.invoke(app, ["transform", str(svelte_tree), "--dry-run"])
        assert result.exit_code == 0
        assert "Would process" in result.output
        assert (svelte_tree / "App.svelte").read_text().startswith("<h1>{title | uppercase}</h1>")

    def test_missing_path(self, tmp_path):
        result = runner.invoke(app, ["transform", str(tmp_path / "missing.svelte")])
        assert result.exit_code == 1
        assert "path not found" in result.output

    def test_config_prefix_used(self, tmp_path):
        (tmp_path / "pipes.yaml").write_text("rewrite:\n  name_prefix: 'p.'\n")
        src = tmp_path / "Card.svelte"
        src.write_text("{a | f}")
        result = runner.invoke(app, ["transform", str(src)])
        assert result.exit_code == 0
        assert "{p.f(a)}" in result.output


class TestScanCommand:
    def test_scan_directory(self, svelte_tree):
        result = runner.invoke(app, ["scan", str(svelte_tree)])
        assert result.exit_code == 0
        assert "uppercase" in result.output
        assert "currency" in result.output

    def test_scan_reports_unreadable_file_and_continues(self, svelte_tree):
        (svelte_tree / "Broken.svelte").write_bytes(b"\xff\xfe\x00bad")
        result = runner.invoke(app, ["scan", str(svelte_tree)])
        assert result.exit_code == 1
        assert "uppercase" in result.output
        assert "Error" in result.output
        assert "Traceback" not in result.output

    def test_scan_no_usage(self, tmp_path):
        src = tmp_path / "Plain.svelte"
        src.write_text("<p>{name}</p>")
        result = runner.invoke(app, ["scan", str(src)])
        assert result.exit_code == 0
        assert "No pipe usage found" in result.output


class TestConfigCommands:
    def test_init_creates_file(self, tmp_path):
        result = runner.invoke(app, ["config", "init"])
        assert result.exit_code == 0
        assert (tmp_path / "pipes.yaml").exists()

    def test_init_refuses_overwrite(self, tmp_path):
        (tmp_path / "pipes.yaml").write_text("log_level: info\n")
        result = runner.invoke(app, ["config", "init"])
        assert result.exit_code == 1
        assert "already exists" in result.output

    def test_init_force(self, tmp_path):
        (tmp_path / "pipes.yaml").write_text("log_level: info\n")
        result = runner.invoke(app, ["config", "init", "--force"])
        assert result.exit_code == 0
        assert "name_prefix" in (tmp_path / "pipes.yaml").read_text()

    def test_show(self):
        result = runner.invoke(app, ["config", "show"])
        assert result.exit_code == 0
        assert "name_prefix" in result.output

    def test_bad_config_path(self, tmp_path):
        result = runner.invoke(app, ["--config", str(tmp_path / "nope.yaml"), "config", "show"])
        assert result.exit_code == 1
        assert "Error" in result.output
