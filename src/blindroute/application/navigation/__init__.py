"""Navigation session state machine and executor."""

from blindroute.application.navigation.session import NavigationSession
from blindroute.application.navigation.state import NavigationState
from blindroute.application.navigation.state_machine import PREVIOUS_STEP, Transition, transition
from blindroute.application.navigation.steps import ExitReason, PathFinderStep, StationRole

__all__ = [
    "PREVIOUS_STEP",
    "ExitReason",
    "NavigationSession",
    "NavigationState",
    "PathFinderStep",
    "StationRole",
    "Transition",
    "transition",
]
