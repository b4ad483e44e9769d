from pathlib import Path

from pynote.services.document_store import DocumentStore


def test_create_assigns_unique_ids_and_activates():
    s = DocumentStore()
    a = s.create("Untitled")
    b = s.create("Untitled")
    assert a.id != b.id
    assert s.active_id == b.id
    assert len(s) == 2
    assert [d.id for d in s] == [a.id, b.id]


def test_create_with_path_uses_file_name(tmp_path):
    s = DocumentStore()
    d = s.create("ignored", tmp_path / "hello.py", "print(1)")
    assert d.display_name == "hello.py"
    assert d.source_path == tmp_path / "hello.py"
    assert d.live_text == d.saved_text == "print(1)"
    assert not d.is_dirty


def test_close_clean_document_removes_it():
    s = DocumentStore()
    a = s.create("a")
    assert s.close(a.id) is False
    assert a.id not in s
    assert s.is_empty()
    assert s.active_id is None


def test_close_dirty_document_requires_confirmation():
    s = DocumentStore()
    a = s.create("a")
    s.update_text(a.id, "changed")
    assert s.close(a.id) is True
    assert a.id in s  # nothing removed yet
    assert s.remove(a.id) is True
    assert a.id not in s


def test_close_unknown_id_is_noop():
    s = DocumentStore()
    s.create("a")
    assert s.close(999) is False
    assert len(s) == 1


def test_remove_active_promotes_previous_neighbour():
    s = DocumentStore()
    a = s.create("a")
    b = s.create("b")
    c = s.create("c")
    s.switch_active(b.id)
    s.remove(b.id)
    assert s.active_id == a.id
    s.switch_active(a.id)
    s.remove(a.id)
    # nothing before it: first live document
    assert s.active_id == c.id


def test_remove_inactive_keeps_active():
    s = DocumentStore()
    a = s.create("a")
    b = s.create("b")
    s.remove(a.id)
    assert s.active_id == b.id


def test_ids_are_not_reused_after_close():
    s = DocumentStore()
    a = s.create("a")
    s.remove(a.id)
    b = s.create("b")
    assert b.id != a.id
    assert s.get(a.id) is None


def test_switch_active_unknown_returns_false():
    s = DocumentStore()
    a = s.create("a")
    assert s.switch_active(42) is False
    assert s.active_id == a.id


def test_next_cycles_and_wraps():
    s = DocumentStore()
    a = s.create("a")
    b = s.create("b")
    c = s.create("c")
    s.switch_active(a.id)
    assert s.next().id == b.id
    assert s.next().id == c.id
    assert s.next().id == a.id


def test_next_with_single_document_stays():
    s = DocumentStore()
    a = s.create("a")
    assert s.next().id == a.id


def test_mark_saved_clears_dirty():
    s = DocumentStore()
    a = s.create("a")
    s.update_text(a.id, "new")
    assert a.is_dirty
    s.mark_saved(a.id, "new")
    assert not a.is_dirty
    assert a.saved_text == "new"


def test_mark_modified_explicitly_keeps_dirty_derived():
    s = DocumentStore()
    a = s.create("a", initial_text="base")
    s.mark_modified_explicitly(a.id, "base")
    assert not a.is_dirty
    s.mark_modified_explicitly(a.id, "base + template")
    assert a.is_dirty
    assert a.live_text == "base + template"


def test_update_path_and_rename():
    s = DocumentStore()
    a = s.create("Untitled")
    p = Path("/tmp/x/main.cpp")
    s.update_path(a.id, p)
    assert a.source_path == p
    assert a.display_name == "main.cpp"
    s.update_path(a.id, p, "other.cpp")
    assert a.display_name == "other.cpp"
    s.rename(a.id, "renamed.py")
    assert a.display_name == "renamed.py"
    assert s.rename(999, "x") is False


def test_update_view_state():
    s = DocumentStore()
    a = s.create("a")
    assert s.update_view_state(a.id, 3, 7) is True
    assert (a.cursor_offset, a.scroll_offset) == (3, 7)
    assert s.update_view_state(999, 0, 0) is False
