from __future__ import annotations

from writers_editor.keymaps import (
    GLOBAL_MODE,
    ActionRef,
    Binding,
    KeymapRegistry,
    KeymapResolver,
    KeyStroke,
    WhenClause,
)


def make_action(action_id: str) -> ActionRef:
    return ActionRef(id=action_id, handler=lambda *args, **kwargs: None)


def make_binding(
    binding_id: str,
    *,
    mode: str = "navigation",
    token: str = "d",
    action_id: str = "core.test",
    when: tuple[WhenClause, ...] = (),
    priority: int = 0,
) -> Binding:
    return Binding(
        id=binding_id,
        mode=mode,
        stroke=KeyStroke.parse(token),
        action_id=action_id,
        when=when,
        priority=priority,
    )


def build_registry(bindings: list[Binding]) -> KeymapRegistry:
    registry = KeymapRegistry()
    for action_id in {binding.action_id for binding in bindings}:
        registry.register_action(make_action(action_id))
    for binding in bindings:
        registry.register_binding(binding)
    return registry


def test_resolver_matches_stroke_in_mode() -> None:
    binding = make_binding("nav.d")
    resolver = KeymapResolver(build_registry([binding]))

    result = resolver.resolve("navigation", KeyStroke("d"))

    assert result.status == "match"
    assert result.match is not None
    assert result.match.binding.id == binding.id


def test_resolver_miss_for_unbound_stroke() -> None:
    resolver = KeymapResolver(build_registry([make_binding("nav.d")]))

    result = resolver.resolve("navigation", KeyStroke("x"))

    assert result.status == "miss"
    assert result.match is None


def test_resolver_falls_back_to_global_layer() -> None:
    save = make_binding(
        "global.save", mode=GLOBAL_MODE, token="ctrl+s", action_id="session.save"
    )
    resolver = KeymapResolver(build_registry([save]))

    result = resolver.resolve("insert", KeyStroke("s", ("ctrl",)))

    assert result.match is not None
    assert result.match.binding.id == "global.save"


def test_mode_layer_shadows_global_layer() -> None:
    local = make_binding("nav.x", token="x", action_id="local")
    shared = make_binding("global.x", mode=GLOBAL_MODE, token="x", action_id="shared")
    resolver = KeymapResolver(build_registry([local, shared]))

    result = resolver.resolve("navigation", KeyStroke("x"))

    assert result.match is not None
    assert result.match.action.id == "local"


def test_resolver_honors_when_clauses() -> None:
    chord = make_binding("nav.dd", when=(WhenClause("chord"),))
    resolver = KeymapResolver(build_registry([chord]))

    miss = resolver.resolve("navigation", KeyStroke("d"), context={})
    hit = resolver.resolve("navigation", KeyStroke("d"), context={"chord": True})

    assert miss.status == "miss"
    assert hit.status == "match"


def test_resolver_prefers_more_specific_binding() -> None:
    plain = make_binding("nav.d", action_id="plain")
    gated = make_binding("nav.dd", action_id="gated", when=(WhenClause("chord"),))
    resolver = KeymapResolver(build_registry([plain, gated]))

    first = resolver.resolve("navigation", KeyStroke("d"), context={"chord": False})
    second = resolver.resolve("navigation", KeyStroke("d"), context={"chord": True})

    assert first.match is not None and first.match.action.id == "plain"
    assert second.match is not None and second.match.action.id == "gated"


def test_resolver_priority_breaks_ties() -> None:
    low = make_binding("nav.low", action_id="low", when=(WhenClause("a"),))
    high = make_binding(
        "nav.high", action_id="high", when=(WhenClause("b"),), priority=5
    )
    resolver = KeymapResolver(build_registry([low, high]))

    result = resolver.resolve(
        "navigation", KeyStroke("d"), context={"a": True, "b": True}
    )

    assert result.match is not None
    assert result.match.action.id == "high"


def test_resolver_sees_bindings_added_later() -> None:
    registry = build_registry([make_binding("nav.d")])
    resolver = KeymapResolver(registry)
    assert resolver.resolve("navigation", KeyStroke("x")).status == "miss"

    registry.register_binding(make_binding("nav.x", token="x"))

    assert resolver.resolve("navigation", KeyStroke("x")).status == "match"
