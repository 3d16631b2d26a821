"""Tests for the instance-scoped hook registry."""

import logging

from resource_mentions.hooks import MentionHooks


def test_emit_calls_handler():
    hooks = MentionHooks()
    received = []
    hooks.register("cache:hit", lambda event, data: received.append((event, data)))

    hooks.emit("cache:hit", {"key": "k"})

    assert received == [("cache:hit", {"key": "k"})]


def test_emit_without_handlers_is_noop():
    MentionHooks().emit("cache:hit", {})


def test_priority_order():
    hooks = MentionHooks()
    order = []
    hooks.register("resolve:start", lambda e, d: order.append("late"), priority=10)
    hooks.register("resolve:start", lambda e, d: order.append("early"), priority=-5)
    hooks.register("resolve:start", lambda e, d: order.append("default"))

    hooks.emit("resolve:start", {})

    assert order == ["early", "default", "late"]


def test_unregister():
    hooks = MentionHooks()
    received = []
    unregister = hooks.register("cache:hit", lambda e, d: received.append(d))
    assert hooks.handler_count("cache:hit") == 1

    unregister()
    hooks.emit("cache:hit", {})

    assert received == []
    assert hooks.handler_count("cache:hit") == 0


def test_on_alias():
    hooks = MentionHooks()
    hooks.on("cache:cleared", lambda e, d: None)
    assert hooks.handler_count("cache:cleared") == 1


def test_failing_handler_isolated(caplog):
    """A raising handler is logged and the remaining handlers still run."""
    hooks = MentionHooks()
    received = []

    def explode(event, data):
        raise RuntimeError("observer bug")

    hooks.register("resolve:error", explode, name="explode")
    hooks.register("resolve:error", lambda e, d: received.append(d), priority=1)

    with caplog.at_level(logging.ERROR, logger="resource_mentions.hooks"):
        hooks.emit("resolve:error", {"n": 1})

    assert received == [{"n": 1}]
    assert "explode" in caplog.text
    assert "observer bug" in caplog.text
