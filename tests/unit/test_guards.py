# tests/unit/test_guards.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from unittest.mock import MagicMock

import pytest

from minimachine.core.errors import ConfigurationError
from minimachine.core.events import Event
from minimachine.core.guards import Guard, evaluate_guards, guard, to_guard


def test_guard_check_passes_context_and_event():
    condition = MagicMock(return_value=True)
    g = Guard("enough_coins", condition)
    event = Event("INSERT_COIN")
    assert g.check({"coins": 3}, event) is True
    condition.assert_called_once_with({"coins": 3}, event)


def test_guard_result_is_coerced_to_bool():
    assert Guard("g", lambda ctx, ev: 0).check({}, Event("X")) is False
    assert Guard("g", lambda ctx, ev: "yes").check({}, Event("X")) is True


def test_guard_helper_names_after_function():
    def has_coins(ctx, ev):
        return ctx["coins"] > 0

    assert guard(has_coins).name == "has_coins"
    assert to_guard(has_coins).name == "has_coins"


def test_to_guard_passes_guards_through():
    g = Guard("g", lambda ctx, ev: True)
    assert to_guard(g) is g


def test_guard_rejects_non_callable():
    with pytest.raises(ConfigurationError):
        guard(True)


def test_evaluate_guards_all_must_pass():
    yes = Guard("yes", lambda ctx, ev: True)
    no = Guard("no", lambda ctx, ev: False)
    assert evaluate_guards([], {}, Event("X")) is True
    assert evaluate_guards([yes, yes], {}, Event("X")) is True
    assert evaluate_guards([yes, no], {}, Event("X")) is False
    assert evaluate_guards([no, yes], {}, Event("X")) is False
