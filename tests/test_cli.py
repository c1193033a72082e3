"""Tests for the command-line interface."""

import json

import pytest
from click.testing import CliRunner

from schema_import.cli import cli
from schema_import.metadata import load_snapshot, save_snapshot


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def catalog_file(tmp_path, o2m_two_types_schema):
    return save_snapshot(o2m_two_types_schema, tmp_path / "catalog.yaml")


class TestInspectCommand:

    def test_summary(self, runner, catalog_file):
        """Test the summary table for a snapshot catalog."""
        result = runner.invoke(cli, ["inspect", "--catalog", str(catalog_file)])

        assert result.exit_code == 0, result.output
        assert "User" in result.output
        assert "Pet" in result.output

    def test_writes_entities(self, runner, tmp_path, catalog_file):
        """Test writing entity documents with --out."""
        out = tmp_path / "schema"
        result = runner.invoke(cli, ["inspect", "--catalog", str(catalog_file), "--out", str(out)])

        assert result.exit_code == 0, result.output
        assert json.loads((out / "user.json").read_text())["edges"][0]["name"] == "pets"
        assert (out / "manifest.json").exists()

    def test_config_file(self, runner, tmp_path, catalog_file):
        """Test loading tables and output dir from a YAML config."""
        out = tmp_path / "from_config"
        config = tmp_path / "import.yaml"
        config.write_text(f"schema: public\ntables: [pets]\noutput_dir: {out}\n")
        result = runner.invoke(cli, ["inspect", "--catalog", str(catalog_file), "--config", str(config)])

        assert result.exit_code == 0, result.output
        assert sorted(p.name for p in out.iterdir()) == ["manifest.json", "pet.json"]

    def test_join_table_error(self, runner, tmp_path, join_table_only_schema):
        """Test that inference errors exit with status 1."""
        path = save_snapshot(join_table_only_schema, tmp_path / "join.json")
        result = runner.invoke(cli, ["inspect", "--catalog", str(path)])

        assert result.exit_code == 1
        assert "Error:" in result.output

    def test_no_source(self, runner):
        """Test that a missing catalog source exits with status 1."""
        result = runner.invoke(cli, ["inspect"])

        assert result.exit_code == 1


class TestDumpCommand:

    def test_dump_subset(self, runner, tmp_path, catalog_file):
        """Test dumping a restricted snapshot."""
        out = tmp_path / "subset.json"
        result = runner.invoke(cli, ["dump", "--catalog", str(catalog_file), "--tables", "users", "--out", str(out)])

        assert result.exit_code == 0, result.output
        assert load_snapshot(out).table_names == ["users"]
