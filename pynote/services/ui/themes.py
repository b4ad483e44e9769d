from __future__ import annotations

from pynote.domain.models import Theme

DEFAULT_THEME_ID = "oneDark"


def _palette(bg: str, fg: str, gutter: str, selection: str, accent: str, muted: str) -> dict[str, str]:
    return {
        "bg": bg,
        "fg": fg,
        "gutter": gutter,
        "selection": selection,
        "accent": accent,
        "muted": muted,
    }


THEMES: tuple[Theme, ...] = (
    Theme("oneDark", "One Dark (Default)", True, _palette("#282c34", "#abb2bf", "#21252b", "#3e4451", "#61afef", "#5c6370")),
    Theme("dracula", "Dracula", True, _palette("#282a36", "#f8f8f2", "#21222c", "#44475a", "#bd93f9", "#6272a4")),
    Theme("githubDark", "GitHub Dark", True, _palette("#0d1117", "#c9d1d9", "#010409", "#264f78", "#58a6ff", "#8b949e")),
    Theme("nord", "Nord", True, _palette("#2e3440", "#d8dee9", "#272c36", "#434c5e", "#88c0d0", "#616e88")),
    Theme("githubLight", "GitHub Light", False, _palette("#ffffff", "#24292f", "#f6f8fa", "#b6d7ff", "#0969da", "#6e7781")),
    Theme("solarizedLight", "Solarized Light", False, _palette("#fdf6e3", "#657b83", "#eee8d5", "#eee8d5", "#268bd2", "#93a1a1")),
)

_BY_ID = {t.id: t for t in THEMES}


def theme_by_id(theme_id: str | None) -> Theme:
    """Unknown or missing ids resolve to the default theme."""
    return _BY_ID.get(theme_id or "", _BY_ID[DEFAULT_THEME_ID])


def editor_stylesheet(theme: Theme) -> str:
    p = theme.palette
    return (
        f"QPlainTextEdit {{ background:{p['bg']}; color:{p['fg']}; "
        f"selection-background-color:{p['selection']}; border:none; }}"
    )


def output_stylesheet(theme: Theme, kind: str) -> str:
    p = theme.palette
    colour = {
        "success": "#98c379" if theme.dark else "#1a7f37",
        "error": "#e06c75" if theme.dark else "#cf222e",
        "running": p["accent"],
    }.get(kind, p["fg"])
    return f"QPlainTextEdit {{ background:{p['gutter']}; color:{colour}; border:1px solid {p['selection']}; }}"
