"""Base class shared by the navigation and insert modes."""

from __future__ import annotations

from typing import Optional

from writers_editor.context import EditorContext, KeyInput, ModeResult
from writers_editor.keymaps.resolver import KeymapResolver, ResolutionMatch
from writers_editor.runtime import telemetry


class Mode:
    """Classifies keys through the keymap resolver and runs the matched action.

    Subclasses override ``fallback`` for keys no binding claims.
    """

    name: str = "mode"

    def __init__(self, context: EditorContext, resolver: KeymapResolver) -> None:
        self.context = context
        self.resolver = resolver
        self.logger = telemetry.get_logger(f"writers_editor.modes.{self.name}")

    def on_enter(self, previous: Optional[str]) -> None:  # pragma: no cover
        del previous

    def on_exit(self, next_mode: Optional[str]) -> None:  # pragma: no cover
        del next_mode

    def classify(self, key: KeyInput) -> Optional[ResolutionMatch]:
        """Map a key to a binding under the current ``context.flags``."""

        result = self.resolver.resolve(
            self.name, key.stroke, context=self.context.flags
        )
        return result.match

    def handle_key(self, key: KeyInput) -> ModeResult:
        match = self.classify(key)
        if match is None:
            return self.fallback(key)
        return self.execute(match)

    def execute(self, match: ResolutionMatch) -> ModeResult:
        with telemetry.span(
            "keymaps::execute",
            component="keymaps",
            metadata={"binding_id": match.binding.id, "action": match.action.id},
        ):
            outcome = match.action(self.context, match)

        if isinstance(outcome, ModeResult):
            return outcome
        return ModeResult(consumed=True)

    def fallback(self, key: KeyInput) -> ModeResult:
        del key
        return ModeResult(consumed=False, status="miss", message="unhandled")
