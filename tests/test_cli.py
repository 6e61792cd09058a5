"""
CLI tests via typer's CliRunner.
"""

from pathlib import Path

import pytest
from typer.testing import CliRunner

from narrowmind import app

runner = CliRunner()

SHELL_CONFIG = str(Path(__file__).parent.parent / "configs" / "shell.json")


@pytest.fixture
def corpus_file(tmp_path, corpus_text):
    path = tmp_path / "input.txt"
    path.write_text(corpus_text, encoding="utf-8")
    return str(path)


@pytest.fixture
def no_fillers(tmp_path):
    return str(tmp_path / "missing-fillers.json")


class TestCli:
    def test_validate(self):
        result = runner.invoke(app, ["validate", SHELL_CONFIG])
        assert result.exit_code == 0
        assert "Validation passed" in result.output

    def test_validate_failure(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text('{"co_occ_method": "cosine"}')
        result = runner.invoke(app, ["validate", str(path)])
        assert result.exit_code == 1

    def test_info(self, corpus_file, no_fillers):
        result = runner.invoke(app, ["info", corpus_file, "--fillers", no_fillers])
        assert result.exit_code == 0
        assert "Corpus Statistics" in result.output

    def test_info_missing_corpus(self, tmp_path, no_fillers):
        result = runner.invoke(app, ["info", str(tmp_path / "none.txt"), "--fillers", no_fillers])
        assert result.exit_code == 1

    def test_info_empty_corpus(self, tmp_path, no_fillers):
        path = tmp_path / "empty.txt"
        path.write_text("   \n")
        result = runner.invoke(app, ["info", str(path), "--fillers", no_fillers])
        assert result.exit_code == 1

    def test_query(self, corpus_file, no_fillers):
        result = runner.invoke(app, ["query", corpus_file, "--q", "cat", "--fillers", no_fillers])
        assert result.exit_code == 0
        assert "The cat sat" in result.output
        assert "3 relevant sentence(s) found" in result.output

    def test_query_with_config(self, corpus_file, no_fillers):
        result = runner.invoke(
            app,
            ["query", corpus_file, "--q", "cat dog", "--config", SHELL_CONFIG,
             "--top-n", "1", "--fillers", no_fillers],
        )
        assert result.exit_code == 0
        assert "1 relevant sentence(s) found" in result.output

    def test_query_requires_text(self, corpus_file, no_fillers):
        result = runner.invoke(app, ["query", corpus_file, "--fillers", no_fillers])
        assert result.exit_code == 1

    def test_shell(self, corpus_file, no_fillers):
        result = runner.invoke(
            app, ["shell", corpus_file, "--fillers", no_fillers], input="cat\n\nquit\n"
        )
        assert result.exit_code == 0
        assert "The cat sat" in result.output
        assert "Goodbye!" in result.output

    def test_shell_defaults_to_co_occurrence_weights(self, corpus_file, no_fillers):
        result = runner.invoke(
            app, ["shell", corpus_file, "--fillers", no_fillers], input="cat\nquit\n"
        )
        assert result.exit_code == 0
        assert "TF-IDF 0.7 | Character 0.1 | Co-occurrence 0.2 (jaccard)" in result.output

    def test_shell_config_overrides_default(self, corpus_file, no_fillers, tmp_path):
        path = tmp_path / "plain.json"
        path.write_text('{"tfidf_weight": 0.95, "char_weight": 0.05}')
        result = runner.invoke(
            app,
            ["shell", corpus_file, "--config", str(path), "--fillers", no_fillers],
            input="cat\nquit\n",
        )
        assert result.exit_code == 0
        assert "Co-occurrence off" in result.output

    def test_query_keeps_plain_default(self, corpus_file, no_fillers):
        result = runner.invoke(app, ["query", corpus_file, "--q", "cat", "--fillers", no_fillers])
        assert "TF-IDF 0.95 | Character 0.05 | Co-occurrence off" in result.output

    def test_shell_ends_on_eof(self, corpus_file, no_fillers):
        result = runner.invoke(app, ["shell", corpus_file, "--fillers", no_fillers], input="")
        assert result.exit_code == 0
