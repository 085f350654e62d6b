# world_state.py
"""Global bookkeeping for conservation of settled height.

Every settled particle adds exactly 2 * radius of height to the terrain.
Relaxation only moves height between columns, so the sum over all columns
must always equal what the ledger says was deposited.
"""
from __future__ import annotations

from dataclasses import dataclass


@dataclass
class HeightLedger:
    """Conservation of settled height across the terrain.

    Height enters the terrain in one way only:
    - A particle settles (normally or force-settled at end of life)

    Height is never destroyed; relaxation migrates it between columns.
    """
    deposited: float = 0.0      # Total height added by settling
    settled_count: int = 0      # Particles converted into grains
    forced_count: int = 0       # Of those, how many were force-settled at end of life

    def record_settle(self, amount: float, forced: bool = False) -> None:
        """Record one particle becoming a grain."""
        self.deposited += amount
        self.settled_count += 1
        if forced:
            self.forced_count += 1

    def discrepancy(self, total_height: float) -> float:
        """Difference between the measured terrain total and the deposited total.

        Args:
            total_height: Sum of all column heights

        Returns:
            Signed error (0 when height is conserved)
        """
        return total_height - self.deposited

    def reset(self) -> None:
        self.deposited = 0.0
        self.settled_count = 0
        self.forced_count = 0
