"""Dataclasses describing keystrokes, bindings and action metadata."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Callable, Iterable, Mapping

GLOBAL_MODE = "global"

NAMED_KEYS = frozenset(
    {
        "ESC",
        "ENTER",
        "BACKSPACE",
        "DELETE",
        "TAB",
        "LEFT",
        "RIGHT",
        "UP",
        "DOWN",
        "HOME",
        "END",
        "PAGEUP",
        "PAGEDOWN",
        *(f"F{n}" for n in range(1, 13)),
    }
)


def _normalize_modifiers(modifiers: Iterable[str]) -> tuple[str, ...]:
    values = tuple(m.strip().lower() for m in modifiers if m.strip())
    return tuple(sorted(dict.fromkeys(values)))


@dataclass(frozen=True, slots=True)
class KeyStroke:
    """A single normalized key press.

    Printable keys keep their case (``"w"`` and ``"W"`` differ); named keys
    are upper-case (``"LEFT"``, ``"F3"``).
    """

    key: str
    modifiers: tuple[str, ...] = ()
    text: str | None = None

    def __post_init__(self) -> None:
        if not self.key:
            raise ValueError("key cannot be empty")
        key = self.key.upper() if self.key.upper() in NAMED_KEYS else self.key
        object.__setattr__(self, "key", key)
        object.__setattr__(self, "modifiers", _normalize_modifiers(self.modifiers))

    @property
    def token(self) -> str:
        if self.modifiers:
            return "+".join(self.modifiers + (self.key,))
        return self.key

    @property
    def printable(self) -> bool:
        """True when the stroke should type its text in insert mode."""

        if not self.text or "ctrl" in self.modifiers or "alt" in self.modifiers:
            return False
        return self.text.isprintable()

    @classmethod
    def parse(cls, token: str) -> "KeyStroke":
        """Build a stroke from ``"ctrl+s"``-style notation."""

        if len(token) > 1 and "+" in token[:-1]:
            *modifiers, key = token.split("+")
            return cls(key, tuple(modifiers))
        return cls(token)


@dataclass(frozen=True, slots=True)
class WhenClause:
    """Boolean flag a binding requires before it can match."""

    flag: str
    expected: bool = True

    def __post_init__(self) -> None:
        if not self.flag:
            raise ValueError("flag cannot be empty")

    @classmethod
    def parse(cls, expression: str) -> "WhenClause":
        expr = expression.strip()
        if not expr:
            raise ValueError("expression cannot be empty")
        if expr.startswith("!"):
            return cls(expr[1:], False)
        return cls(expr)

    def evaluate(self, context: Mapping[str, bool]) -> bool:
        return bool(context.get(self.flag, False)) is self.expected


@dataclass(frozen=True, slots=True)
class ActionRef:
    """Named editing verb; ``handler(context, match)`` does the work."""

    id: str
    handler: Callable[..., object]
    description: str = ""
    metadata: Mapping[str, object] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("ActionRef id cannot be empty")
        if not callable(self.handler):
            raise TypeError("handler must be callable")
        object.__setattr__(self, "metadata", MappingProxyType(dict(self.metadata)))

    def __call__(self, *args: object, **kwargs: object) -> object:
        return self.handler(*args, **kwargs)


@dataclass(frozen=True, slots=True)
class Binding:
    """Associates one keystroke in one mode with an action."""

    id: str
    mode: str
    stroke: KeyStroke
    action_id: str
    description: str = ""
    when: tuple[WhenClause, ...] = ()
    priority: int = 0

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("binding id cannot be empty")
        if not self.mode:
            raise ValueError("binding mode cannot be empty")
        if not self.action_id:
            raise ValueError("binding action_id cannot be empty")
        object.__setattr__(
            self,
            "when",
            tuple(
                clause
                if isinstance(clause, WhenClause)
                else WhenClause.parse(str(clause))
                for clause in self.when
            ),
        )

    @property
    def when_map(self) -> Mapping[str, bool]:
        return MappingProxyType({clause.flag: clause.expected for clause in self.when})

    def allows(self, context: Mapping[str, bool]) -> bool:
        return all(clause.evaluate(context) for clause in self.when)

    @property
    def key_signature(self) -> str:
        return self.stroke.token


__all__ = [
    "GLOBAL_MODE",
    "NAMED_KEYS",
    "KeyStroke",
    "WhenClause",
    "ActionRef",
    "Binding",
]
