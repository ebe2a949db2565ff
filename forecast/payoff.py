"""Debt payoff strategy ordering."""

from decimal import Decimal
from typing import List, Optional, Sequence

PAYOFF_STRATEGIES = ("snowball", "avalanche")


def order_debts(debts: Sequence, strategy: Optional[str]) -> List:
    """
    Order debts by the priority extra payments should follow.

    snowball:  smallest balance first
    avalanche: highest APR first
    no strategy: highest APR first, matching the stored list order

    Ties fall back to the debt name so the order is stable.
    """
    if strategy == "snowball":
        return sorted(debts, key=lambda d: (Decimal(d.balance), d.name.lower()))

    if strategy not in (None, "avalanche"):
        raise ValueError(f"Unknown payoff strategy: {strategy}")

    return sorted(debts, key=lambda d: (-Decimal(d.apr), d.name.lower()))
