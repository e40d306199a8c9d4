# minimachine/core/validations.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from __future__ import annotations

from typing import TYPE_CHECKING

from minimachine.core.errors import ConfigurationError, InvalidInitialStateError, InvalidTargetError
from minimachine.core.transitions import Transition

if TYPE_CHECKING:
    from minimachine.core.machine import MachineDefinition

GLOBAL_SOURCE = "(machine)"


class Validator:
    """
    Performs construction-time validation of machine definitions, so that a
    malformed definition fails before any actor is created from it.
    """

    def __init__(self) -> None:
        self._rules = _DefaultValidationRules

    def validate_definition(self, definition: "MachineDefinition") -> None:
        """
        Check the definition's states and transitions for consistency.

        :param definition: The machine definition to validate.
        :raises ConfigurationError: If validation fails.
        """
        self._rules.validate_states(definition)
        self._rules.validate_initial(definition)
        for source, node in definition.states.items():
            for event_type, transition in node.on.items():
                self.validate_transition(definition, source, event_type, transition)
        for event_type, transition in definition.global_transitions.items():
            self.validate_transition(definition, GLOBAL_SOURCE, event_type, transition)

    def validate_transition(
        self, definition: "MachineDefinition", source: str, event_type: str, transition: Transition
    ) -> None:
        """
        Check that a transition targets a defined state.

        :raises InvalidTargetError: If the target is not one of the definition's states.
        """
        self._rules.validate_transition(definition, source, event_type, transition)


class _DefaultValidationRules:
    """
    Built-in rules ensuring basic correctness of a definition.
    """

    @staticmethod
    def validate_states(definition: "MachineDefinition") -> None:
        if not definition.states:
            raise ConfigurationError(f"Machine {definition.id!r} defines no states.")
        for name in definition.states:
            if not isinstance(name, str) or not name:
                raise ConfigurationError(f"State names must be non-empty strings, got {name!r}")

    @staticmethod
    def validate_initial(definition: "MachineDefinition") -> None:
        if definition.initial not in definition.states:
            raise InvalidInitialStateError(definition.initial, definition.states.keys())

    @staticmethod
    def validate_transition(
        definition: "MachineDefinition", source: str, event_type: str, transition: Transition
    ) -> None:
        if transition.target is not None and transition.target not in definition.states:
            raise InvalidTargetError(source, event_type, transition.target)
