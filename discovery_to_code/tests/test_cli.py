"""
Tests for the discovery_to_code command line.
"""

from __future__ import annotations

import json
from pathlib import Path

from click.testing import CliRunner

from discovery_to_code import __version__
from discovery_to_code.discovery_to_code import discovery_to_code

TEST_DATA = Path(__file__).parent / "test_data" / "discovery"
BOOKS = str(TEST_DATA / "books.json")
CYCLIC = str(TEST_DATA / "cyclic.json")
BROKEN = str(TEST_DATA / "broken.json")


class TestCli:
    """Tests for the CLI entry point."""

    def test_generates_service_file(self, tmp_path):
        runner = CliRunner()
        result = runner.invoke(discovery_to_code, [BOOKS, str(tmp_path)])

        assert result.exit_code == 0, result.output
        assert [p.name for p in tmp_path.iterdir()] == ["BooksService.cs"]
        content = (tmp_path / "BooksService.cs").read_text()
        assert content.startswith(f"// Generated by discovery_to_code v{__version__} : discovery_to_code books.json ")
        assert "namespace Google.Apis.Books.v1" in content

    def test_several_services_in_parallel(self, tmp_path):
        runner = CliRunner()
        result = runner.invoke(discovery_to_code, ["--jobs", "2", BOOKS, CYCLIC, str(tmp_path)])

        assert result.exit_code == 0, result.output
        assert sorted(p.name for p in tmp_path.iterdir()) == ["BooksService.cs", "GraphService.cs"]
        assert "--jobs 2" in (tmp_path / "GraphService.cs").read_text().splitlines()[0]

    def test_one_file_per_type_and_namespace(self, tmp_path):
        runner = CliRunner()
        result = runner.invoke(discovery_to_code, ["--one-file-per-type", "-n", "Graph.Client", CYCLIC, str(tmp_path)])

        assert result.exit_code == 0, result.output
        assert sorted(p.name for p in tmp_path.iterdir()) == ["GraphService.cs", "Node.cs", "Tree.cs", "TreesResource.cs"]
        assert "namespace Graph.Client\n" in (tmp_path / "Node.cs").read_text()

    def test_errors_exit_with_failure(self, tmp_path):
        runner = CliRunner()
        result = runner.invoke(discovery_to_code, [BROKEN, str(tmp_path)])

        assert result.exit_code == 1
        # The rest of the service is still written
        assert (tmp_path / "ShopService.cs").exists()
        assert "Generation errors" in result.output
        assert "MalformedDocumentError" in result.output

    def test_existing_file_requires_force(self, tmp_path):
        (tmp_path / "GraphService.cs").write_text("hand written")
        runner = CliRunner()

        result = runner.invoke(discovery_to_code, [CYCLIC, str(tmp_path)])
        assert result.exit_code == 1
        assert "FileExistsError" in result.output
        assert (tmp_path / "GraphService.cs").read_text() == "hand written"

        result = runner.invoke(discovery_to_code, ["--force", CYCLIC, str(tmp_path)])
        assert result.exit_code == 0, result.output
        assert "public class GraphService" in (tmp_path / "GraphService.cs").read_text()

    def test_config_file(self, tmp_path):
        config = tmp_path / "config.json"
        config.write_text(json.dumps({"namespace": "Books.Client", "add_generation_comment": False}))
        output = tmp_path / "out"

        runner = CliRunner()
        result = runner.invoke(discovery_to_code, ["--config", str(config), BOOKS, str(output)])

        assert result.exit_code == 0, result.output
        assert (output / "BooksService.cs").read_text().startswith("using System;\n")
        assert "namespace Books.Client\n" in (output / "BooksService.cs").read_text()

    def test_unknown_decorator(self, tmp_path):
        config = tmp_path / "config.json"
        config.write_text(json.dumps({"request_decorators": ["request_magic"]}))

        runner = CliRunner()
        result = runner.invoke(discovery_to_code, ["-c", str(config), BOOKS, str(tmp_path / "out")])

        assert result.exit_code == 1
        assert "request_magic" in result.output
        assert not (tmp_path / "out").exists()

    def test_invalid_json(self, tmp_path):
        document = tmp_path / "bad.json"
        document.write_text("{ not json")

        runner = CliRunner()
        result = runner.invoke(discovery_to_code, [str(document), str(tmp_path / "out")])

        assert result.exit_code == 1
        assert "bad.json is not valid JSON" in result.output
