"""Tests for the typer CLI."""

import json

import pytest
from typer.testing import CliRunner

from cvpress.cli import app
from cvpress.export import count_pages, render_to_bytes
from cvpress.templates.registry import build_cv_document

runner = CliRunner()


@pytest.fixture(autouse=True)
def isolated_cwd(tmp_path, monkeypatch):
    """Keep a stray config.yaml in the working directory out of the tests."""
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def cv_json(tmp_path, sample_cv):
    path = tmp_path / "cv.json"
    path.write_text(sample_cv.model_dump_json(), encoding="utf-8")
    return path


@pytest.fixture
def one_page_pdf(tmp_path, sample_cv, colors):
    path = tmp_path / "cv.pdf"
    path.write_bytes(render_to_bytes(build_cv_document("ats", sample_cv, "fr", colors)))
    return path


class TestCli:
    def test_templates(self):
        result = runner.invoke(app, ["templates"])
        assert result.exit_code == 0
        assert "pro_max" in result.output
        assert "ats" in result.output

    def test_colors(self):
        result = runner.invoke(app, ["colors", "#2563eb"])
        assert result.exit_code == 0
        assert "#0947cf" in result.output

    def test_render(self, tmp_path, cv_json):
        output = tmp_path / "out" / "cv.pdf"
        result = runner.invoke(app, ["render", str(cv_json), "-o", str(output), "-t", "modern"])
        assert result.exit_code == 0, result.output
        assert output.read_bytes().startswith(b"%PDF")
        assert count_pages(output.read_bytes()) == 1

    def test_render_with_text_letter(self, tmp_path, cv_json):
        letter = tmp_path / "letter.txt"
        letter.write_text("Madame, Monsieur,\n\nMa candidature.\n\nCordialement", encoding="utf-8")
        output = tmp_path / "bundle.pdf"
        result = runner.invoke(
            app, ["render", str(cv_json), "-o", str(output), "--letter-text", str(letter)]
        )
        assert result.exit_code == 0, result.output
        assert count_pages(output.read_bytes()) == 2

    def test_letter_command(self, tmp_path, sample_letter):
        source = tmp_path / "letter.json"
        source.write_text(sample_letter.model_dump_json(), encoding="utf-8")
        output = tmp_path / "letter.pdf"
        result = runner.invoke(app, ["letter", str(source), "-o", str(output)])
        assert result.exit_code == 0, result.output
        assert count_pages(output.read_bytes()) == 1

    def test_render_bad_json(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("{not json", encoding="utf-8")
        result = runner.invoke(app, ["render", str(path)])
        assert result.exit_code == 1
        assert "Invalid JSON" in result.output

    def test_render_invalid_model(self, tmp_path):
        path = tmp_path / "cv.json"
        path.write_text(json.dumps({"name": {"first": "A"}}), encoding="utf-8")
        result = runner.invoke(app, ["render", str(path)])
        assert result.exit_code == 1

    def test_render_missing_file(self, tmp_path):
        result = runner.invoke(app, ["render", str(tmp_path / "nope.json")])
        assert result.exit_code == 1
        assert "File not found" in result.output

    def test_merge(self, tmp_path, one_page_pdf):
        output = tmp_path / "merged.pdf"
        result = runner.invoke(
            app, ["merge", str(one_page_pdf), str(one_page_pdf), "-o", str(output)]
        )
        assert result.exit_code == 0, result.output
        assert count_pages(output.read_bytes()) == 2

    def test_merge_missing_file(self, tmp_path, one_page_pdf):
        result = runner.invoke(app, ["merge", str(one_page_pdf), str(tmp_path / "gone.pdf")])
        assert result.exit_code == 1
        assert "File not found" in result.output
