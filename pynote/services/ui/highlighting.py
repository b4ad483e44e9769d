from __future__ import annotations

from PyQt6.QtCore import QRegularExpression
from PyQt6.QtGui import QColor, QSyntaxHighlighter, QTextCharFormat, QTextDocument

from pynote.domain.languages import MODE_CPP, MODE_JAVA, MODE_JAVASCRIPT, MODE_PYTHON

_C_FAMILY_KEYWORDS = (
    "auto break case catch char class const continue default delete do double else enum "
    "explicit extern false float for friend goto if inline int long namespace new nullptr "
    "operator private protected public return short signed sizeof static struct switch "
    "template this throw true try typedef typename union unsigned using virtual void "
    "volatile while bool string var foreach in out ref readonly override base"
).split()

_JAVA_KEYWORDS = (
    "abstract assert boolean break byte case catch char class const continue default do "
    "double else enum extends final finally float for if implements import instanceof int "
    "interface long new null package private protected public return short static super "
    "switch synchronized this throw throws try void volatile while true false var"
).split()

_PYTHON_KEYWORDS = (
    "False None True and as assert async await break class continue def del elif else "
    "except finally for from global if import in is lambda nonlocal not or pass raise "
    "return try while with yield self"
).split()

_JS_KEYWORDS = (
    "async await break case catch class const continue debugger default delete do else "
    "export extends false finally for function if import in instanceof let new null "
    "return super switch this throw true try typeof undefined var void while yield"
).split()

_KEYWORDS: dict[str, list[str]] = {
    MODE_CPP: _C_FAMILY_KEYWORDS,
    MODE_JAVA: _JAVA_KEYWORDS,
    MODE_PYTHON: _PYTHON_KEYWORDS,
    MODE_JAVASCRIPT: _JS_KEYWORDS,
}


def _format(*, foreground: str, bold: bool = False, italic: bool = False) -> QTextCharFormat:
    text_format = QTextCharFormat()
    text_format.setForeground(QColor(foreground))
    text_format.setFontItalic(italic)
    if bold:
        text_format.setFontWeight(700)
    return text_format


class KeywordHighlighter(QSyntaxHighlighter):
    """Single-line regex highlighter: keywords, numbers, strings, comments."""

    def __init__(self, document: QTextDocument, mode: str) -> None:
        super().__init__(document)
        self.mode = mode
        rules: list[tuple[QRegularExpression, QTextCharFormat]] = []

        keyword_format = _format(foreground="#569cd6", bold=True)
        for token in _KEYWORDS.get(mode, []):
            rules.append((QRegularExpression(rf"\b{token}\b"), keyword_format))

        rules.append((QRegularExpression(r"\b\d+(\.\d+)?[fFlLuU]?\b"), _format(foreground="#b5cea8")))
        rules.append((QRegularExpression(r"\"(?:[^\"\\]|\\.)*\"|'(?:[^'\\]|\\.)*'"), _format(foreground="#ce9178")))
        if mode == MODE_CPP:
            rules.append((QRegularExpression(r"^\s*#\s*\w+"), _format(foreground="#c586c0")))

        comment = r"#[^\n]*" if mode == MODE_PYTHON else r"//[^\n]*"
        rules.append((QRegularExpression(comment), _format(foreground="#6a9955", italic=True)))
        self._rules = rules

    def highlightBlock(self, text: str) -> None:  # noqa: N802 (Qt API)
        for pattern, text_format in self._rules:
            iterator = pattern.globalMatch(text)
            while iterator.hasNext():
                match = iterator.next()
                self.setFormat(match.capturedStart(), match.capturedLength(), text_format)


def build_highlighter(document: QTextDocument, mode: str) -> KeywordHighlighter | None:
    if mode not in _KEYWORDS:
        return None
    return KeywordHighlighter(document, mode)
