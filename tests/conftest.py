# tests/conftest.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

import itertools
import threading

import pytest

from minimachine.config import Settings
from minimachine.core.actions import assign
from minimachine.core.machine import create_machine


def pytest_configure(config):
    """Register custom marks."""
    config.addinivalue_line("markers", "stress: mark test as a stress test")


@pytest.fixture
def settings():
    """Quiet settings: no development-mode diagnostics."""
    return Settings(dev_mode=False)


@pytest.fixture
def dev_settings():
    return Settings(dev_mode=True)


@pytest.fixture
def id_factory():
    """Deterministic actor ids: actor-1, actor-2, ..."""
    counter = itertools.count(1)
    return lambda: f"actor-{next(counter)}"


@pytest.fixture
def make_actor(settings, id_factory):
    """Returns a factory building actors with deterministic ids and quiet settings."""
    from minimachine.runtime.actor import Actor

    def _factory(definition, **kwargs):
        kwargs.setdefault("settings", settings)
        kwargs.setdefault("id_factory", id_factory)
        return Actor(definition, **kwargs)

    return _factory


@pytest.fixture
def increment():
    """Assignment adding one to ``count``."""
    return assign(lambda ctx, ev: {"count": ctx["count"] + 1}, name="increment")


@pytest.fixture
def toggle_machine(increment):
    """inactive <-> active on TOGGLE; INCREMENT counts while active."""
    return create_machine(
        {
            "id": "toggle",
            "initial": "inactive",
            "context": {"count": 0},
            "states": {
                "inactive": {"on": {"TOGGLE": {"target": "active"}}},
                "active": {
                    "on": {
                        "TOGGLE": {"target": "inactive"},
                        "INCREMENT": {"actions": [increment]},
                    }
                },
            },
        }
    )


@pytest.fixture
def counter_machine(increment):
    """Single-state counter with INCREMENT, DECREMENT and RESET."""
    return create_machine(
        {
            "id": "counter",
            "initial": "active",
            "context": {"count": 0},
            "states": {
                "active": {
                    "on": {
                        "INCREMENT": {"actions": [increment]},
                        "DECREMENT": {"actions": [assign(lambda ctx, ev: {"count": ctx["count"] - 1})]},
                        "RESET": {"actions": [assign({"count": 0})]},
                    }
                }
            },
        }
    )


@pytest.fixture
def recorder():
    """A list-backed log plus a factory of effects appending labels to it."""

    class Recorder:
        def __init__(self):
            self.log = []

        def effect(self, label):
            def _record(ctx, ev, actor):
                self.log.append(label)

            _record.__name__ = f"record_{label}"
            return _record

    return Recorder()


@pytest.fixture(autouse=True)
def cleanup_threads():
    yield
    # Cleanup any remaining threads after each test
    for thread in threading.enumerate():
        if thread != threading.current_thread() and thread.is_alive():
            thread.join(timeout=1.0)
