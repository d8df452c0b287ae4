import json
from pathlib import Path
from unittest.mock import patch

from click.testing import CliRunner

from postman_markdown.cli import main
from postman_markdown.errors import DocumentWriteError

FIXTURES = Path(__file__).parent / "fixtures"


class TestCliConvert:
    def test_writes_named_after_collection(self, tmp_path):
        runner = CliRunner()
        result = runner.invoke(main, [str(FIXTURES / "sample.postman.json"), "-o", str(tmp_path)])

        assert result.exit_code == 0
        output_file = tmp_path / "Sample API.md"
        assert output_file.exists()
        assert output_file.read_text(encoding="utf-8").startswith("# Sample API\n")
        assert "Documentation was created correctly" in result.output

    def test_custom_name(self, tmp_path):
        runner = CliRunner()
        result = runner.invoke(main, [
            str(FIXTURES / "sample.postman.json"),
            "-o", str(tmp_path),
            "--name", "docs",
        ])

        assert result.exit_code == 0
        assert (tmp_path / "docs.md").exists()

    def test_output_from_env(self, tmp_path):
        runner = CliRunner()
        result = runner.invoke(
            main,
            [str(FIXTURES / "sample.postman.json")],
            env={"POSTMAN_MARKDOWN_OUTPUT": str(tmp_path / "out")},
        )

        assert result.exit_code == 0
        assert (tmp_path / "out" / "Sample API.md").exists()

    def test_stdout(self, tmp_path):
        runner = CliRunner()
        result = runner.invoke(main, [str(FIXTURES / "sample.postman.json"), "--stdout"])

        assert result.exit_code == 0
        assert result.output.startswith("# Sample API\n")
        assert not list(tmp_path.iterdir())

    def test_separator_in_collection_name(self, tmp_path):
        doc = tmp_path / "billing.json"
        doc.write_text(json.dumps({"info": {"_postman_id": "1", "name": "Billing/v2"}, "item": []}), encoding="utf-8")

        runner = CliRunner()
        result = runner.invoke(main, [str(doc), "-o", str(tmp_path / "out")])

        assert result.exit_code == 0
        assert (tmp_path / "out" / "Billing-v2.md").exists()
        assert not (tmp_path / "out" / "Billing").exists()

    def test_falls_back_to_file_stem(self, tmp_path):
        doc = tmp_path / "nameless.json"
        doc.write_text(json.dumps({"info": {"_postman_id": "1"}, "item": []}), encoding="utf-8")

        runner = CliRunner()
        result = runner.invoke(main, [str(doc), "-o", str(tmp_path)])

        assert result.exit_code == 0
        assert (tmp_path / "nameless.md").read_text(encoding="utf-8") == "# undefined\n"


class TestCliErrors:
    def test_malformed_document(self, tmp_path):
        doc = tmp_path / "broken.json"
        doc.write_text(json.dumps({"info": {"name": "x"}}), encoding="utf-8")

        runner = CliRunner()
        result = runner.invoke(main, [str(doc), "-o", str(tmp_path)])

        assert result.exit_code == 1
        assert "item" in result.output
        assert not (tmp_path / "x.md").exists()

    def test_warns_on_unknown_format(self, tmp_path):
        doc = tmp_path / "plain.json"
        doc.write_text(json.dumps({"info": {"name": "Plain"}, "item": []}), encoding="utf-8")

        runner = CliRunner()
        result = runner.invoke(main, [str(doc), "-o", str(tmp_path)])

        assert result.exit_code == 0
        assert "does not look like a Postman collection" in result.output
        assert (tmp_path / "Plain.md").exists()

    def test_not_utf8_file(self, tmp_path):
        doc = tmp_path / "binary.json"
        doc.write_bytes(b"\xff")

        runner = CliRunner()
        result = runner.invoke(main, [str(doc), "-o", str(tmp_path)])

        assert result.exit_code == 1
        assert "cannot read" in result.output
        assert not isinstance(result.exception, UnicodeDecodeError)

    @patch("postman_markdown.cli.write_markdown")
    def test_write_failure(self, mock_write, tmp_path):
        mock_write.side_effect = DocumentWriteError("cannot write x.md: disk full")

        runner = CliRunner()
        result = runner.invoke(main, [str(FIXTURES / "sample.postman.json"), "-o", str(tmp_path)])

        assert result.exit_code == 1
        assert "disk full" in result.output

    def test_missing_file(self, tmp_path):
        runner = CliRunner()
        result = runner.invoke(main, [str(tmp_path / "nope.json")])

        assert result.exit_code != 0
