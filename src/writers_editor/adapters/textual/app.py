"""Executable Textual app that hosts the editor session."""

from __future__ import annotations

import argparse
import sys
from typing import Optional, Sequence, TextIO, Tuple

from rich.text import Text
from textual import events
from textual.app import App, ComposeResult
from textual.widgets import Static

from writers_editor.config import EditorSettings
from writers_editor.runtime import telemetry
from writers_editor.screen import Frame
from writers_editor.session import EditorSession, SessionOutcome, TerminalRequiredError

from .controller import TextualEditorAdapter, TextualUIHooks

NAMED_TEXTUAL_KEYS = {
    "escape": "ESC",
    "enter": "ENTER",
    "return": "ENTER",
    "backspace": "BACKSPACE",
    "delete": "DELETE",
    "tab": "TAB",
    "left": "LEFT",
    "right": "RIGHT",
    "up": "UP",
    "down": "DOWN",
    "home": "HOME",
    "end": "END",
    "pageup": "PAGEUP",
    "pagedown": "PAGEDOWN",
    **{f"f{n}": f"F{n}" for n in range(1, 13)},
}

NormalizedKey = Tuple[str, Optional[str], Tuple[str, ...]]


class WritersEditorApp(App[None], inherit_bindings=False):
    """Full-screen host: one text view plus help, status and message lines."""

    ENABLE_COMMAND_PALETTE = False

    CSS = """
    Screen {
        layout: vertical;
    }

    #text-view {
        height: 1fr;
    }

    #help-line {
        height: 1;
        color: $text-muted;
    }

    #status-line {
        height: 1;
        text-style: reverse;
    }

    #message-line {
        height: 1;
    }
    """

    def __init__(self, session: EditorSession) -> None:
        super().__init__()
        self.session = session
        self.adapter: TextualEditorAdapter | None = None
        self._text_widget: Static | None = None
        self._help_widget: Static | None = None
        self._status_widget: Static | None = None
        self._message_widget: Static | None = None
        self._telemetry_logger = telemetry.get_logger("adapters.textual")

    def compose(self) -> ComposeResult:
        self._text_widget = Static("", id="text-view")
        self._help_widget = Static("", id="help-line")
        self._status_widget = Static("", id="status-line")
        self._message_widget = Static("", id="message-line")
        yield self._text_widget
        yield self._help_widget
        yield self._status_widget
        yield self._message_widget

    def on_mount(self) -> None:
        hooks = TextualUIHooks(
            render_frame=self._render_frame,
            handle_event=self._handle_event,
            log=self._log_line,
        )
        self.session.handle_resize(self.size.width, self.size.height)
        self.adapter = TextualEditorAdapter(self.session, hooks)
        interval = self.session.settings.poll_interval_ms / 1000.0
        self.set_interval(interval, self._tick)

    def on_resize(self, event: events.Resize) -> None:
        if self.adapter:
            self.adapter.resize(event.size.width, event.size.height)

    def on_key(self, event: events.Key) -> None:
        if not self.adapter:
            return
        event.stop()
        event.prevent_default()
        normalized = self._normalize_key(event)
        if normalized is None:
            return
        key, text, modifiers = normalized
        self.adapter.handle_textual_key(key, text=text, modifiers=modifiers)
        if self.session.should_quit:
            self.exit()

    def _tick(self) -> None:
        if self.adapter and self.adapter.tick():
            self.exit()

    def _render_frame(self, frame: Frame) -> None:
        if self._text_widget:
            self._text_widget.update(self._frame_text(frame))
        chrome = (
            (self._help_widget, frame.help),
            (self._status_widget, frame.status),
            (self._message_widget, frame.message),
        )
        for widget, line in chrome:
            if widget is None:
                continue
            widget.display = line is not None
            widget.update(Text(line or ""))

    @staticmethod
    def _frame_text(frame: Frame) -> Text:
        text = Text(no_wrap=True, overflow="crop")
        cursor_x, cursor_y = frame.cursor
        for y, row in enumerate(frame.rows):
            if y:
                text.append("\n")
            text.append(row.gutter, style="dim")
            body = row.text
            if y != cursor_y:
                text.append(body, style="dim" if row.filler else "")
                continue
            col = max(0, cursor_x - len(row.gutter))
            body = body.ljust(col + 1)
            text.append(body[:col])
            text.append(body[col], style="reverse")
            text.append(body[col + 1 :])
        return text

    def _handle_event(self, name: str, payload: object | None) -> None:
        del payload
        telemetry.record_event("ui.event", level="debug", data={"event": name})

    def _log_line(self, line: str) -> None:
        self._telemetry_logger.debug(line)

    @staticmethod
    def _normalize_key(event: events.Key) -> Optional[NormalizedKey]:
        """Map a Textual key event onto ``(key, text, modifiers)``.

        Printable characters keep their case and drop ``shift``; named keys
        become upper-case tokens such as ``ESC`` or ``PAGEUP``.
        """

        *modifiers, base = event.key.split("+")
        modifiers = [mod for mod in modifiers if mod]
        character = event.character
        if (
            character
            and character.isprintable()
            and not {"ctrl", "alt", "meta"} & set(modifiers)
        ):
            return (character, character, ())

        modifiers = [mod for mod in modifiers if mod != "shift"]
        named = NAMED_TEXTUAL_KEYS.get(base)
        if named is not None:
            return (named, None, tuple(modifiers))
        if not base:
            return None
        return (base, None, tuple(modifiers))


def launch(
    path: Optional[str] = None,
    *,
    settings: Optional[EditorSettings] = None,
    stdin: Optional[TextIO] = None,
    stdout: Optional[TextIO] = None,
) -> SessionOutcome:
    """Run the editor on ``path`` until the user quits.

    ``stdin`` and ``stdout`` default to the process streams. Raises
    ``TerminalRequiredError`` before touching the terminal when either is not
    interactive. Read errors from opening ``path`` propagate.
    """

    stdin = sys.stdin if stdin is None else stdin
    stdout = sys.stdout if stdout is None else stdout
    if not (stdin.isatty() and stdout.isatty()):
        raise TerminalRequiredError("writers-edit requires an interactive terminal")

    telemetry.quiet_console()
    session = EditorSession.open(path, settings=settings)
    app = WritersEditorApp(session)
    telemetry.record_event("session.start", data={"path": path or ""})
    try:
        app.run()
    finally:
        outcome = session.outcome()
        telemetry.record_event(
            "session.teardown",
            data={"path": outcome.path or "", "dirty": outcome.dirty},
        )
    return outcome


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="writers-edit", description="Modal terminal editor for prose."
    )
    parser.add_argument("path", nargs="?", help="File to open or create")
    parser.add_argument(
        "--typewriter",
        action="store_true",
        help="Keep the cursor row centered vertically",
    )
    parser.add_argument(
        "--distraction-free",
        action="store_true",
        help="Hide line numbers, help, status and message lines",
    )
    parser.add_argument(
        "--no-line-numbers",
        action="store_true",
        help="Do not draw the line-number gutter",
    )
    parser.add_argument(
        "--autosave",
        type=int,
        metavar="SECONDS",
        help="Save a dirty named file every SECONDS while idle",
    )
    parser.add_argument("--log-file", help="Write logs to this file")
    parser.add_argument(
        "--log-level",
        help="Minimum log level (default: WRITERS_EDITOR_LOG_LEVEL or INFO)",
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = _parse_args(argv)
    telemetry.configure(preset="session", log_file=args.log_file, level=args.log_level)
    settings = EditorSettings.from_env().override(
        typewriter=True if args.typewriter else None,
        distraction_free=True if args.distraction_free else None,
        line_numbers=False if args.no_line_numbers else None,
        autosave_interval_ms=args.autosave * 1000 if args.autosave else None,
    )

    try:
        outcome = launch(args.path, settings=settings)
    except TerminalRequiredError as exc:
        print(
            f"{exc}. Run it directly in a terminal, without piping or "
            "redirecting input or output.",
            file=sys.stderr,
        )
        return 2
    except (OSError, UnicodeDecodeError) as exc:
        telemetry.record_event(
            "session.open_failed", level="error", data={"error": str(exc)}
        )
        print(f"writers-edit: {exc}", file=sys.stderr)
        return 1

    if outcome.dirty:
        print(f"Quit without saving {outcome.path or 'buffer'}", file=sys.stderr)
    elif outcome.saved and outcome.path:
        print(f"Saved: {outcome.path}")
    return 0


if __name__ == "__main__":  # pragma: no cover - manual run
    sys.exit(main())
