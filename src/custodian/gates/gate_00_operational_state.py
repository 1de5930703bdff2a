"""GATE 0: Operational State

Первый gate в цепочке intake:
- Блокирует sell / deposit / receipt callback в состоянии PAUSED
- Административные операции через этот gate не проходят
"""

from dataclasses import dataclass

from src.core.domain.custodian_state import OperationalState


@dataclass(frozen=True)
class Gate00Result:
    """Результат GATE 0."""

    entry_allowed: bool
    block_reason: str

    state: OperationalState

    details: str


class Gate00OperationalState:
    """GATE 0: intake разрешён только в ACTIVE."""

    def evaluate(self, state: OperationalState, operation: str) -> Gate00Result:
        if state == OperationalState.PAUSED:
            return Gate00Result(
                entry_allowed=False,
                block_reason="paused",
                state=state,
                details=f"{operation} blocked: custodian is PAUSED",
            )

        return Gate00Result(
            entry_allowed=True,
            block_reason="",
            state=state,
            details=f"PASS: {operation}, state={state.value}",
        )
