"""
StateMachine - Table-Driven Instrument Modes

Builds small state machines from a declarative definition:

    {
        "init": "OFF",
        "OFF": {"transitions": {"power": {"target": "ALIGN"}}},
        "ALIGN": {"transitions": {"aligned": {"target": "NAV"}}},
        "NAV": {"transitions": {"power": {"target": "OFF"}}},
    }

State and event keys may be strings or Enum members.
"""

import logging
from typing import Any, Hashable, Mapping

logger = logging.getLogger(__name__)

INIT_KEY = "init"


class Machine:
    """
    Labelled-transition object created by create_machine().

    There are no guards, entry/exit actions or history. Unknown events are
    ignored. Transition targets are not checked against the definition:
    a target with no entry of its own becomes the current state and the
    machine stays there, since no event has a transition out of it.
    """

    def __init__(self, machine_def: Mapping[Any, Any]):
        self.machine_def = machine_def
        self.value = machine_def[INIT_KEY]

    def _state_def(self, state: Hashable):
        if state == INIT_KEY:
            return None
        return self.machine_def.get(state)

    def dispatch(self, event: Hashable):
        """
        Apply an event to the current state.

        Args:
            event: Event name
        """
        state_def = self._state_def(self.value)
        if not state_def:
            return

        transitions = state_def.get("transitions") or {}
        dest_transition = transitions.get(event)
        if not dest_transition:
            return

        dest_state = dest_transition["target"]
        if self._state_def(dest_state) is None:
            logger.warning(f"Transition {self.value!r} --{event!r}--> {dest_state!r}: "
                           f"target is not defined, machine will not leave it")
        else:
            logger.debug(f"Transition {self.value!r} --{event!r}--> {dest_state!r}")

        self.value = dest_state

    def force_state(self, new_state: Hashable):
        """
        Jump to a state without an event.

        Ignored unless new_state is defined in the machine definition.

        Args:
            new_state: Target state
        """
        if self._state_def(new_state) is None:
            logger.debug(f"force_state({new_state!r}) ignored: state not defined")
            return
        self.value = new_state

    def __repr__(self) -> str:
        return f"Machine(value={self.value!r})"


def create_machine(machine_def: Mapping[Any, Any]) -> Machine:
    """
    Create a state machine from a declarative definition.

    Args:
        machine_def: Mapping with an "init" key naming the initial state and
            one {"transitions": {event: {"target": state}}} entry per state

    Returns:
        Machine whose value is the initial state
    """
    return Machine(machine_def)
