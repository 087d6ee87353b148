"""Per-file source metrics that don't need a parser.

Cyclomatic complexity and churn come from collaborators (a language-aware
parser and the commit history); this module only counts lines and maps
extensions to languages.
"""

from pathlib import PurePosixPath

from .models import FileMetric

LANGUAGE_BY_EXTENSION = {
    "ts": "TypeScript",
    "tsx": "TypeScript",
    "js": "JavaScript",
    "jsx": "JavaScript",
    "py": "Python",
    "java": "Java",
    "cpp": "C++",
    "c": "C",
    "go": "Go",
    "rs": "Rust",
    "rb": "Ruby",
    "php": "PHP",
}

UNKNOWN_LANGUAGE = "Unknown"

_COMMENT_PREFIXES = ("//", "#")


def count_lines_of_code(content: str) -> int:
    """Count non-blank lines that don't start with a line comment.

    Block comments are counted as code.
    """
    count = 0
    for line in content.splitlines():
        stripped = line.strip()
        if stripped and not stripped.startswith(_COMMENT_PREFIXES):
            count += 1
    return count


def detect_language(path: str) -> str:
    """Map a file path to a language name by its extension."""
    suffix = PurePosixPath(path).suffix.lower().lstrip(".")
    return LANGUAGE_BY_EXTENSION.get(suffix, UNKNOWN_LANGUAGE)


def measure_file(path: str, content: str, cyclomatic_complexity: int, churn: int) -> FileMetric:
    """Build a FileMetric from file content plus externally computed metrics."""
    return FileMetric(
        path=path,
        cyclomatic_complexity=cyclomatic_complexity,
        lines_of_code=count_lines_of_code(content),
        churn=churn,
        language=detect_language(path),
    )
