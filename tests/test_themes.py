from pynote.services.ui.themes import (
    DEFAULT_THEME_ID,
    THEMES,
    editor_stylesheet,
    output_stylesheet,
    theme_by_id,
)


def test_theme_ids_are_unique_and_default_present():
    ids = [t.id for t in THEMES]
    assert len(ids) == len(set(ids))
    assert DEFAULT_THEME_ID in ids


def test_unknown_theme_falls_back_to_default():
    assert theme_by_id("nope").id == DEFAULT_THEME_ID
    assert theme_by_id(None).id == DEFAULT_THEME_ID
    assert theme_by_id("nord").id == "nord"


def test_stylesheets_use_palette():
    t = theme_by_id("solarizedLight")
    assert not t.dark
    assert t.palette["bg"] in editor_stylesheet(t)
    assert t.palette["accent"] in output_stylesheet(t, "running")
