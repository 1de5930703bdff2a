"""Gates — intake гейты Buyback Custodian.

Фиксированный порядок:
- GATE 0: Operational State (PAUSED блокирует intake)
- GATE 1: Input Validation (пустой batch, нулевая сумма)
- GATE 2: Pool Sufficiency (fail fast до перемещения активов)
"""

from .gate_00_operational_state import Gate00OperationalState, Gate00Result
from .gate_01_input_validation import Gate01InputValidation, Gate01Result
from .gate_02_pool_sufficiency import Gate02PoolSufficiency, Gate02Result

__all__ = [
    "Gate00OperationalState",
    "Gate00Result",
    "Gate01InputValidation",
    "Gate01Result",
    "Gate02PoolSufficiency",
    "Gate02Result",
]
