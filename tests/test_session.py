from __future__ import annotations

from pathlib import Path
from typing import Iterable, List

import pytest

from writers_editor.actions.session import UNSAVED_WARNING
from writers_editor.config import EditorSettings
from writers_editor.context import KeyInput, ModeResult
from writers_editor.session import EditorSession


class Clock:
    """Hands out timestamps far enough apart that no two presses form a chord."""

    def __init__(self) -> None:
        self.now = 0.0

    def next(self, step: float = 1.0) -> float:
        self.now += step
        return self.now


def make_session(text: str = "", path: str | None = None) -> EditorSession:
    return EditorSession(path=path, text=text)


def press(
    session: EditorSession,
    key: str,
    *,
    mods: Iterable[str] = (),
    now: float,
) -> ModeResult:
    modifiers = tuple(mods)
    text = key if len(key) == 1 and not modifiers else None
    key_input = KeyInput(key=key, text=text, modifiers=modifiers)
    return session.handle_key(key_input, now=now)


def type_keys(session: EditorSession, keys: Iterable[str], clock: Clock) -> None:
    for key in keys:
        press(session, key, now=clock.next())


def lines(session: EditorSession) -> List[str]:
    return list(session.buffer.lines)


def test_open_existing_file(tmp_path: Path) -> None:
    target = tmp_path / "draft.txt"
    target.write_text("first\nsecond", encoding="utf-8")

    session = EditorSession.open(str(target))

    assert lines(session) == ["first", "second"]
    assert session.state.status_message == f"Opened: {target}"
    assert not session.dirty
    assert not session.buffer.can_undo()


def test_open_missing_file_starts_empty(tmp_path: Path) -> None:
    target = tmp_path / "new.txt"

    session = EditorSession.open(str(target))

    assert lines(session) == [""]
    assert session.state.status_message == f"New file: {target}"
    assert session.state.path == str(target)
    assert not target.exists()


def test_open_without_path() -> None:
    session = EditorSession.open()

    assert session.state.path is None
    assert session.state.status_message == "Ready"


def test_open_read_error_propagates(tmp_path: Path) -> None:
    with pytest.raises(OSError):
        EditorSession.open(str(tmp_path))


def test_open_decode_error_propagates(tmp_path: Path) -> None:
    target = tmp_path / "binary.txt"
    target.write_bytes(b"\xff\xfe\xfa")

    with pytest.raises(UnicodeDecodeError):
        EditorSession.open(str(target))


def test_type_and_save(tmp_path: Path) -> None:
    target = tmp_path / "note.txt"
    session = EditorSession.open(str(target))
    clock = Clock()

    type_keys(session, ["i", "h", "i", "ENTER", "y", "o"], clock)
    assert session.dirty

    result = press(session, "s", mods=("ctrl",), now=clock.next())

    assert result.status == "saved"
    assert target.read_text(encoding="utf-8") == "hi\nyo"
    assert session.state.status_message == f"Saved: {target}"
    assert not session.dirty
    outcome = session.outcome()
    assert outcome.saved and not outcome.dirty
    assert outcome.path == str(target)


def test_save_joins_lines_without_trailing_newline(tmp_path: Path) -> None:
    target = tmp_path / "keep.txt"
    target.write_text("one\r\ntwo\n", encoding="utf-8")
    session = EditorSession.open(str(target))

    assert lines(session) == ["one", "two"]
    session.save()

    assert target.read_text(encoding="utf-8") == "one\ntwo"


def test_save_without_path_reports_status() -> None:
    session = make_session()
    clock = Clock()
    type_keys(session, ["i", "x"], clock)

    result = press(session, "s", mods=("ctrl",), now=clock.next())

    assert result.status == "no_path"
    assert session.state.status_message == "No file path set"
    assert session.dirty


def test_save_failure_keeps_session_running(tmp_path: Path) -> None:
    target = tmp_path / "missing-dir" / "file.txt"
    session = EditorSession.open(str(target))
    clock = Clock()
    type_keys(session, ["i", "x"], clock)

    result = press(session, "s", mods=("ctrl",), now=clock.next())

    assert result.status == "save_error"
    assert session.state.status_message.startswith("Save failed:")
    assert session.dirty
    assert not session.should_quit
    assert not session.outcome().saved


def test_quit_when_clean() -> None:
    session = make_session("text")

    press(session, "q", mods=("ctrl",), now=1.0)

    assert session.should_quit
    assert session.tick() is True


def test_quit_when_dirty_needs_second_press() -> None:
    session = make_session()
    clock = Clock()
    type_keys(session, ["i", "x"], clock)

    start = clock.next()
    press(session, "q", mods=("ctrl",), now=start)
    assert not session.should_quit
    assert session.state.status_message == UNSAVED_WARNING

    press(session, "q", mods=("ctrl",), now=start + 0.2)
    assert session.should_quit
    assert session.outcome().dirty


def test_slow_second_quit_only_warns_again() -> None:
    session = make_session()
    clock = Clock()
    type_keys(session, ["i", "x"], clock)

    press(session, "q", mods=("ctrl",), now=clock.next())
    press(session, "q", mods=("ctrl",), now=clock.next())

    assert not session.should_quit
    assert session.state.status_message == UNSAVED_WARNING


def test_undo_and_redo_keys() -> None:
    session = make_session()
    clock = Clock()
    type_keys(session, ["i", "a", "b"], clock)

    press(session, "z", mods=("ctrl",), now=clock.next())
    assert session.text == "a"
    assert session.state.status_message == "Undo"

    press(session, "y", mods=("ctrl",), now=clock.next())
    assert session.text == "ab"
    assert session.state.status_message == "Redo"
    assert session.cursor.position == (0, 1)

    for _ in range(3):
        press(session, "z", mods=("ctrl",), now=clock.next())
    assert session.text == ""
    assert session.state.status_message == "Nothing to undo"
    assert session.cursor.position == (0, 0)


def test_tab_inserts_spaces_as_one_edit() -> None:
    session = make_session()
    clock = Clock()
    type_keys(session, ["i", "TAB"], clock)

    assert session.text == "    "
    assert session.cursor.position == (0, 4)

    press(session, "z", mods=("ctrl",), now=clock.next())
    assert session.text == ""


def test_enter_splits_line_at_cursor() -> None:
    session = make_session("ab")
    clock = Clock()

    type_keys(session, ["l", "i", "ENTER"], clock)

    assert lines(session) == ["a", "b"]
    assert session.cursor.position == (1, 0)


def test_backspace_joins_into_previous_line() -> None:
    session = make_session("ab\ncd")
    clock = Clock()

    type_keys(session, ["j", "i", "BACKSPACE"], clock)

    assert lines(session) == ["abcd"]
    assert session.cursor.position == (0, 2)


def test_backspace_deletes_previous_character() -> None:
    session = make_session("abc")
    clock = Clock()

    type_keys(session, ["$", "i", "BACKSPACE"], clock)

    assert lines(session) == ["ab"]
    assert session.cursor.position == (0, 2)


def test_backspace_at_document_start_changes_nothing() -> None:
    session = make_session("abc")
    clock = Clock()

    type_keys(session, ["i", "BACKSPACE"], clock)

    assert lines(session) == ["abc"]
    assert not session.dirty
    assert not session.buffer.can_undo()


def test_delete_forward_in_navigation() -> None:
    session = make_session("abc\ndef")
    clock = Clock()

    type_keys(session, ["DELETE"], clock)
    assert lines(session) == ["bc", "def"]

    type_keys(session, ["$", "DELETE"], clock)
    assert lines(session) == ["bcdef"]


def test_home_and_end_depend_on_mode() -> None:
    session = make_session("one\ntwo words")
    clock = Clock()

    type_keys(session, ["END"], clock)
    assert session.cursor.position == (1, 9)

    type_keys(session, ["HOME"], clock)
    assert session.cursor.position == (0, 0)

    type_keys(session, ["j", "i", "END"], clock)
    assert session.cursor.position == (1, 9)

    type_keys(session, ["HOME"], clock)
    assert session.cursor.position == (1, 0)


def test_page_down_moves_by_text_height_minus_one() -> None:
    session = make_session("\n".join(f"line {n}" for n in range(50)))
    session.handle_resize(80, 13)
    clock = Clock()

    type_keys(session, ["PAGEDOWN"], clock)
    assert session.cursor.row == 9

    type_keys(session, ["PAGEUP"], clock)
    assert session.cursor.row == 0


def test_toggles_change_presentation_only() -> None:
    session = make_session("text")
    clock = Clock()

    press(session, "t", mods=("ctrl",), now=clock.next())
    assert session.state.typewriter
    assert session.state.status_message == "Typewriter mode: ON"

    press(session, "F3", now=clock.next())
    assert session.state.distraction_free
    assert session.state.status_message == "Distraction-free mode: ON"
    assert session.render().status is None

    press(session, "t", mods=("ctrl",), now=clock.next())
    assert session.state.status_message == "Typewriter mode: OFF"
    assert lines(session) == ["text"]
    assert not session.dirty


def test_render_status_line() -> None:
    session = make_session("hello there", path="/tmp/story.txt")
    session.handle_resize(80, 10)

    frame = session.render()

    assert frame.status == (
        " NORMAL | story.txt | Words: 2 | Reading: 1 minute | 1:1 ".ljust(80)
    )
    assert frame.rows[0].plain == "   1 hello there"
    assert frame.rows[1].plain == "~"


def test_bus_reports_saves(tmp_path: Path) -> None:
    target = tmp_path / "bus.txt"
    session = EditorSession.open(str(target))
    seen: List[object] = []
    session.bus.subscribe("session.saved", seen.append)

    session.save()

    assert seen == [str(target)]


def test_render_without_word_count() -> None:
    settings = EditorSettings(word_count=False)
    session = EditorSession(path="/tmp/story.txt", text="hello", settings=settings)
    session.handle_resize(40, 10)

    assert session.render().status == " NORMAL | story.txt | 1:1 ".ljust(40)


def make_autosave_session(tmp_path: Path, interval_ms: int = 1000) -> EditorSession:
    settings = EditorSettings(autosave_interval_ms=interval_ms)
    return EditorSession.open(str(tmp_path / "auto.txt"), settings=settings)


def test_autosave_writes_dirty_document_after_interval(tmp_path: Path) -> None:
    session = make_autosave_session(tmp_path)
    target = tmp_path / "auto.txt"
    type_keys(session, ["i", "h", "i"], Clock())

    assert session.tick(now=10.0) is False
    session.tick(now=10.5)
    assert not target.exists()

    session.tick(now=11.0)

    assert target.read_text(encoding="utf-8") == "hi"
    assert not session.dirty
    assert session.state.status_message == f"Saved: {target}"


def test_autosave_skips_clean_or_unnamed_documents(tmp_path: Path) -> None:
    clean = make_autosave_session(tmp_path)
    clean.tick(now=0.0)
    clean.tick(now=5.0)
    assert not (tmp_path / "auto.txt").exists()

    unnamed = EditorSession(settings=EditorSettings(autosave_interval_ms=1000))
    type_keys(unnamed, ["i", "x"], Clock())
    unnamed.tick(now=0.0)
    unnamed.tick(now=5.0)
    assert unnamed.dirty
    assert unnamed.state.status_message == "-- INSERT --"


def test_autosave_is_off_by_default(tmp_path: Path) -> None:
    session = EditorSession.open(str(tmp_path / "auto.txt"))
    type_keys(session, ["i", "x"], Clock())

    session.tick(now=0.0)
    session.tick(now=3600.0)

    assert session.dirty
    assert not (tmp_path / "auto.txt").exists()
