"""Tests for the metamodel CLI."""

from __future__ import annotations

import json
import logging
from collections.abc import Generator
from pathlib import Path

import pytest
from click.testing import CliRunner

from metamodel.cli.main import cli

runner = CliRunner()

ORDER_GO = """\
package shop

type Order struct {
    ID     string `gorm:"primaryKey" json:"order_id"`
    Status string `gorm:"column:state" json:"status"`
    Hidden string `json:"-"`
}
"""


@pytest.fixture(autouse=True)
def isolated_config(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> Generator[None, None, None]:
    """Run every command from tmp_path with no global config and no gofmt."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr("metamodel.config.loader.GLOBAL_CONFIG_PATH", tmp_path / "none.yaml")
    monkeypatch.setattr("metamodel.emission.render.shutil.which", lambda _name: None)
    yield
    for handler in logging.getLogger().handlers:
        handler.close()
    logging.getLogger().handlers.clear()


@pytest.fixture
def order_source(tmp_path: Path) -> Path:
    source = tmp_path / "shop" / "order.go"
    source.parent.mkdir()
    source.write_text(ORDER_GO)
    return source


class TestCliGroup:
    """Top-level group behavior."""

    def test_version(self) -> None:
        result = runner.invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert "0.1.0" in result.output

    def test_help_lists_commands(self) -> None:
        result = runner.invoke(cli, ["--help"])
        assert result.exit_code == 0
        assert "generate" in result.output
        assert "inspect" in result.output

    def test_invalid_project_config(self, tmp_path: Path, order_source: Path) -> None:
        (tmp_path / ".metamodel.yaml").write_text("logging:\n  level: LOUD\n")
        result = runner.invoke(cli, ["inspect", str(order_source)])
        assert result.exit_code != 0
        assert "logging.level" in result.output


class TestGenerateCommand:
    """Tests for metamodel generate."""

    def test_writes_files_beside_source(self, order_source: Path) -> None:
        result = runner.invoke(cli, ["generate", str(order_source)])

        assert result.exit_code == 0, result.output
        text = (order_source.parent / "order_metamodel.go").read_text()
        assert "package shop_" in text
        assert 'TableName: "orders"' in text
        assert 'FieldName: "order_id"' in text
        assert (order_source.parent / "common_metamodel.go").exists()

    def test_options(self, order_source: Path, tmp_path: Path) -> None:
        out_dir = tmp_path / "out"
        result = runner.invoke(
            cli,
            [
                "generate",
                str(order_source),
                "--destination",
                f"{out_dir}/",
                "--package-name",
                "meta",
                "--tag",
                "gorm",
                "--table-name",
                "purchase_orders",
                "--no-format",
            ],
        )

        assert result.exit_code == 0, result.output
        text = (out_dir / "order_metamodel.go").read_text()
        assert "package meta_" in text
        assert 'TableName: "purchase_orders"' in text
        assert 'FieldName: "state"' in text
        assert 'FieldName: "order_id"' in text

    def test_project_config_tag(self, tmp_path: Path, order_source: Path) -> None:
        (tmp_path / ".metamodel.yaml").write_text("generation:\n  tag: gorm\n")
        result = runner.invoke(cli, ["generate", str(order_source)])

        assert result.exit_code == 0, result.output
        assert 'FieldName: "state"' in (order_source.parent / "order_metamodel.go").read_text()

    def test_no_matching_declarations(self, tmp_path: Path) -> None:
        source = tmp_path / "empty.go"
        source.write_text("package empty\n")

        result = runner.invoke(cli, ["generate", str(source)])

        assert result.exit_code == 1
        assert "No structs with 'json' tagged fields" in result.output

    def test_missing_source(self, tmp_path: Path) -> None:
        result = runner.invoke(cli, ["generate", str(tmp_path / "missing.go")])
        assert result.exit_code == 2

    def test_invalid_tag_option(self, order_source: Path) -> None:
        result = runner.invoke(cli, ["generate", str(order_source), "--tag", "a b"])
        assert result.exit_code == 1
        assert "generation.tag" in result.output


class TestInspectCommand:
    """Tests for metamodel inspect."""

    def test_json_output(self, order_source: Path) -> None:
        result = runner.invoke(cli, ["inspect", str(order_source), "--json"])

        assert result.exit_code == 0, result.output
        data = json.loads(result.stdout)
        assert data["namespace"] == "shop_"
        assert [f["name"] for f in data["types"][0]["fields"]] == ["order_id", "status"]

    def test_verbose_json_output_keeps_logs_off_stdout(self, order_source: Path) -> None:
        result = runner.invoke(cli, ["-v", "inspect", str(order_source), "--json"])

        assert result.exit_code == 0, result.output
        assert "cli.start" not in result.stdout
        assert "cli.start" in result.stderr
        assert json.loads(result.stdout)["namespace"] == "shop_"

    def test_table_output(self, order_source: Path) -> None:
        result = runner.invoke(cli, ["inspect", str(order_source), "--tag", "gorm"])

        assert result.exit_code == 0, result.output
        assert "Order" in result.output
        assert "state" in result.output

    def test_does_not_write_files(self, order_source: Path) -> None:
        runner.invoke(cli, ["inspect", str(order_source)])
        assert sorted(p.name for p in order_source.parent.iterdir()) == ["order.go"]
