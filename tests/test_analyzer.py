"""Tests for LOC counting and language detection."""

import pytest

from bugsense.analyzer import count_lines_of_code, detect_language, measure_file


class TestCountLinesOfCode:
    def test_skips_blank_and_comment_lines(self):
        content = "\n".join(
            [
                "# header comment",
                "import os",
                "",
                "   ",
                "// js style comment",
                "    x = 1  # trailing comment still counts",
                "def f():",
                "    return x",
            ]
        )
        assert count_lines_of_code(content) == 4

    def test_empty(self):
        assert count_lines_of_code("") == 0

    def test_block_comments_count_as_code(self):
        assert count_lines_of_code("/* a\n * b\n */") == 3

    def test_windows_newlines(self):
        assert count_lines_of_code("a = 1\r\n\r\nb = 2\r\n") == 2


class TestDetectLanguage:
    @pytest.mark.parametrize(
        "path,language",
        [
            ("src/app.ts", "TypeScript"),
            ("src/App.TSX", "TypeScript"),
            ("lib/util.js", "JavaScript"),
            ("main.py", "Python"),
            ("Main.java", "Java"),
            ("engine.cpp", "C++"),
            ("kernel.c", "C"),
            ("cmd/server.go", "Go"),
            ("lib.rs", "Rust"),
            ("app.rb", "Ruby"),
            ("index.php", "PHP"),
        ],
    )
    def test_known(self, path, language):
        assert detect_language(path) == language

    @pytest.mark.parametrize("path", ["Makefile", "README.md", ".bashrc", "archive.tar.gz"])
    def test_unknown(self, path):
        assert detect_language(path) == "Unknown"


class TestMeasureFile:
    def test_builds_metric(self):
        metric = measure_file("src/app.py", "x = 1\n# note\ny = 2\n", cyclomatic_complexity=3, churn=4)
        assert metric.path == "src/app.py"
        assert metric.lines_of_code == 2
        assert metric.cyclomatic_complexity == 3
        assert metric.churn == 4
        assert metric.language == "Python"
