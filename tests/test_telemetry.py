from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Iterator, List

import pytest
from rich.logging import RichHandler

from writers_editor.config import EditorSettings
from writers_editor.runtime import telemetry


class ListHandler(logging.Handler):
    def __init__(self) -> None:
        super().__init__(level=logging.DEBUG)
        self.records: List[logging.LogRecord] = []

    def emit(self, record: logging.LogRecord) -> None:
        self.records.append(record)


@pytest.fixture(autouse=True)
def restore_telemetry() -> Iterator[None]:
    yield
    telemetry.configure(preset="session")


@pytest.fixture
def captured() -> Iterator[ListHandler]:
    telemetry.configure(preset="session", level="DEBUG")
    handler = ListHandler()
    root = telemetry.get_logger()
    root.addHandler(handler)
    yield handler
    root.removeHandler(handler)


def test_get_logger_stays_in_package_tree() -> None:
    assert telemetry.get_logger().name == "writers_editor"
    assert telemetry.get_logger("keymaps").name == "writers_editor.keymaps"
    assert telemetry.get_logger("writers_editor.modes").name == "writers_editor.modes"


def test_session_preset_keeps_console_quiet() -> None:
    config = telemetry.configure(preset="session")

    assert config.console is False
    handlers = telemetry.get_logger().handlers
    assert not any(type(h) is logging.StreamHandler for h in handlers)


def test_configure_rejects_conflicting_arguments() -> None:
    with pytest.raises(ValueError):
        telemetry.configure(config=telemetry.TelemetryConfig(), preset="session")

    with pytest.raises(ValueError):
        telemetry.configure(preset="loud")


def test_record_event_carries_payload(captured: ListHandler) -> None:
    telemetry.record_event("buffer.saved", data={"path": "a.txt"})

    record = captured.records[-1]
    assert record.getMessage().startswith("event::buffer.saved")
    assert record.telemetry["path"] == "a.txt"
    assert record.levelno == logging.INFO


def test_record_event_rejects_unknown_level() -> None:
    with pytest.raises(ValueError):
        telemetry.record_event("x", level="chatty")


def test_span_reports_failure_and_reraises(captured: ListHandler) -> None:
    with pytest.raises(RuntimeError):
        with telemetry.span("work", component=True, metadata={"step": 1}):
            raise RuntimeError("boom")

    messages = [record.getMessage() for record in captured.records]
    assert any(m.startswith("span::fail") and "reason=boom" in m for m in messages)
    assert any(m.startswith("span::end") for m in messages)


def test_span_handle_metadata(captured: ListHandler) -> None:
    with telemetry.span("resolve", component="keymaps") as handle:
        handle.add_metadata("status", "match")

    end = [r for r in captured.records if r.getMessage().startswith("span::end")][-1]
    assert end.telemetry["status"] == "match"
    assert end.telemetry["component"] == "keymaps"


def test_session_preset_writes_log_file(tmp_path: Path) -> None:
    target = tmp_path / "editor.log"
    telemetry.configure(preset="session", log_file=str(target))

    telemetry.record_event("session.start", data={"path": "x"})

    assert "event::session.start" in target.read_text(encoding="utf-8")


def test_performance_preset_writes_json(tmp_path: Path) -> None:
    target = tmp_path / "perf.log"
    telemetry.configure(preset="performance", log_file=str(target))

    telemetry.record_event("mode.switch", data={"mode": "insert"})

    line = target.read_text(encoding="utf-8").strip().splitlines()[-1]
    payload = json.loads(line)
    assert payload["event"] == "mode.switch"
    assert payload["mode"] == "insert"


def test_settings_from_env_reads_prefixed_values() -> None:
    settings = EditorSettings.from_env(
        {
            "WRITERS_EDITOR_TAB_WIDTH": "2",
            "WRITERS_EDITOR_TYPEWRITER": "yes",
            "WRITERS_EDITOR_UNDO_LIMIT": "junk",
            "WRITERS_EDITOR_CHORD_TIMEOUT_MS": "-5",
        }
    )

    assert settings.tab_width == 2
    assert settings.typewriter is True
    assert settings.undo_limit == 100
    assert settings.chord_timeout_ms == 500


def test_settings_override_ignores_none() -> None:
    settings = EditorSettings().override(typewriter=True, line_numbers=None)

    assert settings.typewriter is True
    assert settings.line_numbers is True


def test_quiet_console_keeps_level_and_log_file(tmp_path: Path) -> None:
    target = tmp_path / "quiet.log"
    telemetry.configure(
        config=telemetry.TelemetryConfig(
            level="DEBUG", console=True, log_file=str(target)
        )
    )

    config = telemetry.quiet_console()

    assert config.console is False
    assert config.level == "DEBUG"
    assert config.log_file == str(target)
    handlers = telemetry.get_logger().handlers
    assert not any(isinstance(h, RichHandler) for h in handlers)
    assert any(isinstance(h, logging.FileHandler) for h in handlers)


def test_quiet_console_leaves_quiet_config_alone() -> None:
    quiet = telemetry.configure(preset="session")

    assert telemetry.quiet_console() is quiet
