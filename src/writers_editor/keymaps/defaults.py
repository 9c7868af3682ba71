"""Built-in keymaps that seed the navigation, insert and global layers."""

from __future__ import annotations

from typing import Iterable, Mapping, Sequence

from writers_editor.actions import core as core_actions
from writers_editor.actions import edit as edit_actions
from writers_editor.actions import motion as motion_actions
from writers_editor.actions import session as session_actions

from .models import GLOBAL_MODE, ActionRef, Binding, KeyStroke, WhenClause
from .registry import KeymapRegistry

NAV = "navigation"
INSERT = "insert"

DEFAULT_ACTIONS: tuple[ActionRef, ...] = (
    ActionRef("core.enter_insert", core_actions.enter_insert_mode, "Enter insert mode"),
    ActionRef(
        "core.append", core_actions.append_after_cursor, "Insert after the cursor"
    ),
    ActionRef("core.open_below", core_actions.open_line_below, "Open a line below"),
    ActionRef(
        "core.exit_to_navigation",
        core_actions.exit_to_navigation,
        "Return to navigation mode",
    ),
    ActionRef("motion.left", motion_actions.move_left, "Cursor left"),
    ActionRef("motion.right", motion_actions.move_right, "Cursor right"),
    ActionRef("motion.up", motion_actions.move_up, "Cursor up"),
    ActionRef("motion.down", motion_actions.move_down, "Cursor down"),
    ActionRef("motion.line_start", motion_actions.line_start, "Start of line"),
    ActionRef("motion.line_end", motion_actions.line_end, "End of line"),
    ActionRef(
        "motion.document_start", motion_actions.document_start, "Start of document"
    ),
    ActionRef("motion.document_end", motion_actions.document_end, "End of document"),
    ActionRef("motion.word_left", motion_actions.word_left, "Previous word"),
    ActionRef("motion.word_right", motion_actions.word_right, "Next word"),
    ActionRef("motion.page_up", motion_actions.page_up, "Page up"),
    ActionRef("motion.page_down", motion_actions.page_down, "Page down"),
    ActionRef("edit.insert_text", edit_actions.insert_text, "Insert typed text"),
    ActionRef("edit.insert_newline", edit_actions.insert_newline, "Split line"),
    ActionRef("edit.insert_tab", edit_actions.insert_tab, "Insert spaces"),
    ActionRef("edit.backspace", edit_actions.backspace, "Delete backwards"),
    ActionRef("edit.delete_forward", edit_actions.delete_forward, "Delete forwards"),
    ActionRef("edit.delete_line", edit_actions.delete_line, "Delete line"),
    ActionRef("session.save", session_actions.save_document, "Save the file"),
    ActionRef("session.quit", session_actions.quit_editor, "Quit the editor"),
    ActionRef("session.undo", session_actions.undo, "Undo"),
    ActionRef("session.redo", session_actions.redo, "Redo"),
    ActionRef(
        "session.toggle_typewriter",
        session_actions.toggle_typewriter,
        "Toggle typewriter scrolling",
    ),
    ActionRef(
        "session.toggle_distraction_free",
        session_actions.toggle_distraction_free,
        "Toggle distraction-free view",
    ),
    ActionRef("session.search", session_actions.start_search, "Start a search"),
)


def _bind(
    binding_id: str,
    mode: str,
    token: str,
    action_id: str,
    *,
    when: tuple[WhenClause, ...] = (),
) -> Binding:
    return Binding(
        id=binding_id,
        mode=mode,
        stroke=KeyStroke.parse(token),
        action_id=action_id,
        when=when,
    )


_NAVIGATION_BINDINGS = (
    _bind("nav.h", NAV, "h", "motion.left"),
    _bind("nav.left", NAV, "LEFT", "motion.left"),
    _bind("nav.shift_a", NAV, "A", "motion.left"),
    _bind("nav.l", NAV, "l", "motion.right"),
    _bind("nav.right", NAV, "RIGHT", "motion.right"),
    _bind("nav.shift_d", NAV, "D", "motion.right"),
    _bind("nav.k", NAV, "k", "motion.up"),
    _bind("nav.up", NAV, "UP", "motion.up"),
    _bind("nav.shift_w", NAV, "W", "motion.up"),
    _bind("nav.j", NAV, "j", "motion.down"),
    _bind("nav.down", NAV, "DOWN", "motion.down"),
    _bind("nav.shift_s", NAV, "S", "motion.down"),
    _bind("nav.zero", NAV, "0", "motion.line_start"),
    _bind("nav.dollar", NAV, "$", "motion.line_end"),
    _bind("nav.home", NAV, "HOME", "motion.document_start"),
    _bind("nav.end", NAV, "END", "motion.document_end"),
    _bind("nav.w", NAV, "w", "motion.word_right"),
    _bind("nav.b", NAV, "b", "motion.word_left"),
    _bind("nav.pageup", NAV, "PAGEUP", "motion.page_up"),
    _bind("nav.pagedown", NAV, "PAGEDOWN", "motion.page_down"),
    _bind("nav.i", NAV, "i", "core.enter_insert"),
    _bind("nav.a", NAV, "a", "core.append"),
    _bind("nav.o", NAV, "o", "core.open_below"),
    _bind("nav.dd", NAV, "d", "edit.delete_line", when=(WhenClause("chord"),)),
    _bind("nav.delete", NAV, "DELETE", "edit.delete_forward"),
    _bind("nav.slash", NAV, "/", "session.search"),
)

_INSERT_BINDINGS = (
    _bind("insert.esc", INSERT, "ESC", "core.exit_to_navigation"),
    _bind("insert.enter", INSERT, "ENTER", "edit.insert_newline"),
    _bind("insert.backspace", INSERT, "BACKSPACE", "edit.backspace"),
    _bind("insert.delete", INSERT, "DELETE", "edit.delete_forward"),
    _bind("insert.tab", INSERT, "TAB", "edit.insert_tab"),
    _bind("insert.left", INSERT, "LEFT", "motion.left"),
    _bind("insert.right", INSERT, "RIGHT", "motion.right"),
    _bind("insert.up", INSERT, "UP", "motion.up"),
    _bind("insert.down", INSERT, "DOWN", "motion.down"),
    _bind("insert.home", INSERT, "HOME", "motion.line_start"),
    _bind("insert.end", INSERT, "END", "motion.line_end"),
    _bind("insert.pageup", INSERT, "PAGEUP", "motion.page_up"),
    _bind("insert.pagedown", INSERT, "PAGEDOWN", "motion.page_down"),
)

_GLOBAL_BINDINGS = (
    _bind("global.save", GLOBAL_MODE, "ctrl+s", "session.save"),
    _bind("global.quit", GLOBAL_MODE, "ctrl+q", "session.quit"),
    _bind("global.undo", GLOBAL_MODE, "ctrl+z", "session.undo"),
    _bind("global.redo", GLOBAL_MODE, "ctrl+y", "session.redo"),
    _bind("global.typewriter", GLOBAL_MODE, "ctrl+t", "session.toggle_typewriter"),
    _bind(
        "global.distraction_free",
        GLOBAL_MODE,
        "F3",
        "session.toggle_distraction_free",
    ),
)

DEFAULT_BINDINGS: tuple[Binding, ...] = (
    _NAVIGATION_BINDINGS + _INSERT_BINDINGS + _GLOBAL_BINDINGS
)


def load_default_keymaps(
    registry: KeymapRegistry,
    *,
    replace: bool = False,
    extra_bindings: Iterable[Binding] | None = None,
    include_actions: Sequence[str] | None = None,
    exclude_actions: Sequence[str] | None = None,
    include_bindings: Sequence[str] | None = None,
    exclude_bindings: Sequence[str] | None = None,
    per_mode_overrides: Mapping[str, Iterable[Binding]] | None = None,
) -> None:
    """Register built-in actions and bindings for every layer."""

    allowed_actions = _build_filters(include_actions, exclude_actions)
    allowed_bindings = _build_filters(include_bindings, exclude_bindings)

    for action in DEFAULT_ACTIONS:
        if not _selected(action.id, allowed_actions):
            continue
        registry.register_action(action, replace=replace)

    for binding in DEFAULT_BINDINGS:
        if not _selected(binding.id, allowed_bindings):
            continue
        if not registry.has_action(binding.action_id):
            continue
        registry.register_binding(binding, replace=replace)

    if extra_bindings:
        for binding in extra_bindings:
            registry.register_binding(binding, replace=replace)

    if per_mode_overrides:
        for mode, bindings in per_mode_overrides.items():
            for binding in bindings:
                if binding.mode != mode:
                    raise ValueError(
                        f"Override binding '{binding.id}' must target mode '{mode}'"
                    )
                registry.register_binding(binding, replace=True)


def _build_filters(
    include: Sequence[str] | None, exclude: Sequence[str] | None
) -> tuple[set[str] | None, set[str]]:
    include_set = set(include) if include else None
    exclude_set = set(exclude or ())
    return include_set, exclude_set


def _selected(item_id: str, filters: tuple[set[str] | None, set[str]]) -> bool:
    include, exclude = filters
    if include is not None and item_id not in include:
        return False
    return item_id not in exclude


__all__ = ["load_default_keymaps", "DEFAULT_ACTIONS", "DEFAULT_BINDINGS"]
