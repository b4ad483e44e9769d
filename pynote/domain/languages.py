from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import PurePath

# Editor modes understood by the syntax highlighter.
MODE_PLAIN = "plain"
MODE_CPP = "cpp"
MODE_JAVA = "java"
MODE_PYTHON = "python"
MODE_JAVASCRIPT = "javascript"

_EDITOR_MODES: dict[str, str] = {
    "cs": MODE_CPP,
    "cpp": MODE_CPP,
    "c": MODE_CPP,
    "h": MODE_CPP,
    "py": MODE_PYTHON,
    "java": MODE_JAVA,
    "js": MODE_JAVASCRIPT,
}


@dataclass(frozen=True)
class Language:
    """A language the execution service can run."""

    id: str
    label: str
    extensions: tuple[str, ...]
    file_name: str
    compiled: bool
    blocked: bool = False
    input_patterns: tuple[re.Pattern[str], ...] = field(default_factory=tuple)

    def expects_input(self, source: str) -> bool:
        return any(p.search(source) for p in self.input_patterns)


LANGUAGES: tuple[Language, ...] = (
    Language(
        id="csharp",
        label="C#",
        extensions=("cs",),
        file_name="Program.cs",
        compiled=True,
        # The public runner's C# image is too slow/unreliable; users are told to run locally.
        blocked=True,
        input_patterns=(re.compile(r"Console\.(ReadLine|Read|ReadKey)\s*\("),),
    ),
    Language(
        id="cpp",
        label="C++",
        extensions=("cpp",),
        file_name="main.cpp",
        compiled=True,
        input_patterns=(
            re.compile(r"\bcin\s*>>"),
            re.compile(r"\bgetline\s*\(\s*(std::)?cin\b"),
            re.compile(r"\bscanf\s*\("),
        ),
    ),
    Language(
        id="c",
        label="C",
        extensions=("c",),
        file_name="main.c",
        compiled=True,
        input_patterns=(
            re.compile(r"\bscanf\s*\("),
            re.compile(r"\bgetchar\s*\("),
            re.compile(r"\bfgets\s*\([^)]*\bstdin\b"),
        ),
    ),
    Language(
        id="python",
        label="Python",
        extensions=("py",),
        file_name="main.py",
        compiled=False,
        input_patterns=(
            re.compile(r"(?<![\w.])input\s*\("),
            re.compile(r"\bsys\.stdin\b"),
        ),
    ),
    Language(
        id="java",
        label="Java",
        extensions=("java",),
        file_name="Main.java",
        compiled=True,
        input_patterns=(
            re.compile(r"new\s+Scanner\s*\(\s*System\.in\s*\)"),
            re.compile(r"new\s+InputStreamReader\s*\(\s*System\.in\s*\)"),
            re.compile(r"\bSystem\.in\.read\s*\("),
        ),
    ),
    Language(
        id="javascript",
        label="JavaScript",
        extensions=("js",),
        file_name="main.js",
        compiled=False,
        input_patterns=(
            re.compile(r"\bprocess\.stdin\b"),
            re.compile(r"require\s*\(\s*['\"]readline['\"]\s*\)"),
        ),
    ),
)

_BY_EXTENSION: dict[str, Language] = {ext: lang for lang in LANGUAGES for ext in lang.extensions}

SUPPORTED_EXTENSIONS: tuple[str, ...] = tuple(f".{ext}" for ext in _BY_EXTENSION)


def file_extension(name: str | PurePath | None) -> str:
    """Lower-case extension without the dot; '' when there is none."""
    if not name:
        return ""
    return PurePath(str(name)).suffix.lower().lstrip(".")


def language_for(name: str | PurePath | None) -> Language | None:
    return _BY_EXTENSION.get(file_extension(name))


def editor_mode_for(name: str | PurePath | None) -> str:
    return _EDITOR_MODES.get(file_extension(name), MODE_PLAIN)
