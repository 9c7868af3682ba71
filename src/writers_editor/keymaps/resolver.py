"""Per-mode keystroke resolution with telemetry instrumentation."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Literal, Mapping, Optional

from writers_editor.runtime.telemetry import span

from .models import GLOBAL_MODE, ActionRef, Binding, KeyStroke
from .registry import KeymapRegistry

KeyIndex = Dict[str, tuple[str, ...]]


@dataclass(frozen=True, slots=True)
class ResolutionMatch:
    """Resolved binding, its action and the stroke that triggered it."""

    binding: Binding
    action: ActionRef
    stroke: KeyStroke


@dataclass(frozen=True, slots=True)
class ResolutionResult:
    status: Literal["match", "miss"]
    match: Optional[ResolutionMatch] = None


class KeymapResolver:
    """Looks up the binding for a stroke in a mode, then in the global layer.

    Per-mode indexes are rebuilt lazily whenever the registry revision moves.
    """

    def __init__(
        self, registry: KeymapRegistry, *, logger_name: str | None = None
    ) -> None:
        self._registry = registry
        self._logger_name = logger_name
        self._cache: Dict[str, tuple[int, KeyIndex]] = {}

    @property
    def registry(self) -> KeymapRegistry:
        return self._registry

    def resolve(
        self,
        mode: str,
        stroke: KeyStroke,
        *,
        context: Optional[Mapping[str, bool]] = None,
    ) -> ResolutionResult:
        ctx = context or {}
        with span(
            "keymaps::resolve",
            logger_name=self._logger_name,
            component="keymaps",
            metadata={"mode": mode, "token": stroke.token},
        ) as handle:
            for layer in (mode, GLOBAL_MODE):
                match = self._select_match(layer, stroke, ctx)
                if match:
                    handle.add_metadata("status", "match")
                    handle.add_metadata("binding_id", match.binding.id)
                    return ResolutionResult(status="match", match=match)

            handle.add_metadata("status", "miss")
            return ResolutionResult(status="miss")

    def reset(self, mode: Optional[str] = None) -> None:
        if mode is None:
            self._cache.clear()
        else:
            self._cache.pop(mode, None)

    def _ensure_index(self, mode: str) -> KeyIndex:
        revision = self._registry.revision()
        cached = self._cache.get(mode)
        if cached and cached[0] == revision:
            return cached[1]

        grouped: Dict[str, list[str]] = {}
        for binding in self._registry.iter_bindings(mode):
            grouped.setdefault(binding.key_signature, []).append(binding.id)
        index = {token: tuple(ids) for token, ids in grouped.items()}
        self._cache[mode] = (revision, index)
        return index

    def _select_match(
        self, mode: str, stroke: KeyStroke, context: Mapping[str, bool]
    ) -> Optional[ResolutionMatch]:
        candidates = []
        for binding_id in self._ensure_index(mode).get(stroke.token, ()):
            binding = self._registry.get_binding(binding_id)
            if binding.allows(context):
                candidates.append(binding)
        if not candidates:
            return None

        # most specific wins: priority, then the number of when-clauses
        candidates.sort(key=lambda b: (-b.priority, -len(b.when), b.id))
        binding = candidates[0]
        return ResolutionMatch(
            binding=binding,
            action=self._registry.get_action(binding.action_id),
            stroke=stroke,
        )


__all__ = [
    "KeymapResolver",
    "ResolutionResult",
    "ResolutionMatch",
]
