"""Validation errors raised by the allocation engine.

Every error is raised before anything is mutated, so callers can simply
discard the request and leave persisted state untouched.
"""


class AllocationError(ValueError):
    """Base class for rejected allocation proposals."""


class InvalidAllocation(AllocationError):
    """An allocation was negative or not a finite number."""

    def __init__(self, key: str, value: float) -> None:
        self.key = key
        self.value = value
        super().__init__(f"Allocation for '{key}' must be a non-negative number (got {value})")


class BelowSafeSavingsFloor(AllocationError):
    """Proposed savings fall under the safe-savings floor."""

    def __init__(self, floor: float, proposed: float) -> None:
        self.floor = floor
        self.proposed = proposed
        super().__init__(
            f"Savings cannot be less than safe savings amount of {floor:.2f}"
        )


class OverAllocated(AllocationError):
    """Proposed total exceeds the initial investment."""

    def __init__(self, total: float, investment: float) -> None:
        self.total = total
        self.investment = investment
        super().__init__(
            f"Total allocations ({total:.2f}) exceed available investment amount ({investment:.2f})"
        )


class InvestmentReductionError(AllocationError):
    """An investment decrease is larger than the money not yet allocated."""

    def __init__(self, reduction: float, unallocated: float) -> None:
        self.reduction = reduction
        self.unallocated = unallocated
        super().__init__(
            f"Cannot reduce investment by {reduction:.2f}. Only {unallocated:.2f} is "
            "unallocated. Please adjust your portfolio allocations first."
        )
