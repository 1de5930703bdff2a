"""Pause State Machine — строгий двухсостоянийный автомат.

Переходы:
- PAUSE: ACTIVE → PAUSED
- UNPAUSE: PAUSED → ACTIVE

Других переходов нет. Недопустимый переход — отказ (EnforcedPause /
ExpectedPause), состояние не меняется.
"""

from dataclasses import dataclass
from enum import Enum

from src.core.domain.custodian_state import OperationalState
from src.core.errors import EnforcedPause, ExpectedPause


class PauseAction(str, Enum):
    PAUSE = "PAUSE"
    UNPAUSE = "UNPAUSE"


@dataclass(frozen=True)
class PauseTransitionResult:
    """Результат перехода pause state."""

    new_state: OperationalState
    previous_state: OperationalState
    action: PauseAction

    transition_reason: str


class PauseStateMachine:
    """Автомат ACTIVE ↔ PAUSED.

    Таблица переходов фиксирована; автомат stateless, текущее состояние
    хранит владелец (custodian).
    """

    _TRANSITIONS = {
        (OperationalState.ACTIVE, PauseAction.PAUSE): OperationalState.PAUSED,
        (OperationalState.PAUSED, PauseAction.UNPAUSE): OperationalState.ACTIVE,
    }

    def evaluate_transition(
        self, current_state: OperationalState, action: PauseAction
    ) -> PauseTransitionResult:
        """Оценка перехода.

        Args:
            current_state: текущее operational state
            action: PAUSE или UNPAUSE

        Returns:
            PauseTransitionResult с новым состоянием

        Raises:
            EnforcedPause: PAUSE из состояния PAUSED
            ExpectedPause: UNPAUSE из состояния ACTIVE
        """
        new_state = self._TRANSITIONS.get((current_state, action))
        if new_state is None:
            if action == PauseAction.PAUSE:
                raise EnforcedPause("Custodian is already paused")
            raise ExpectedPause("Custodian is not paused")

        return PauseTransitionResult(
            new_state=new_state,
            previous_state=current_state,
            action=action,
            transition_reason=f"{current_state.value}_to_{new_state.value}",
        )
