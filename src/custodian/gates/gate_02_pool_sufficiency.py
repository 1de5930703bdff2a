"""GATE 2: Pool Sufficiency

Fail fast: выплата проверяется до первого перемещения актива.
Инвариант: payout не выполняется, если pool_balance < required_payout.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class Gate02Result:
    """Результат GATE 2."""

    entry_allowed: bool
    block_reason: str

    pool_balance: int
    required_payout: int

    details: str


class Gate02PoolSufficiency:
    """GATE 2: pool_balance >= required_payout."""

    def evaluate(self, pool_balance: int, required_payout: int) -> Gate02Result:
        if pool_balance < required_payout:
            return Gate02Result(
                entry_allowed=False,
                block_reason="insufficient_pool",
                pool_balance=pool_balance,
                required_payout=required_payout,
                details=f"Pool {pool_balance} < required payout {required_payout}",
            )

        return Gate02Result(
            entry_allowed=True,
            block_reason="",
            pool_balance=pool_balance,
            required_payout=required_payout,
            details=f"PASS: pool={pool_balance}, payout={required_payout}",
        )
