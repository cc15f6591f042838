"""
Resource Model - Categories, pools, and cost deduction.

A resource category doubles as a board desk: the eight primary categories
are the desks players move between AND the kinds of skill an application
costs. Two synthetic categories only ever appear on the supply side:
- WILDCARD: pays for any primary category (Bonus cards)
- SHODDY: low-quality fallback that also pays for any category

Cost deduction runs in three fixed tiers:
1. Specific category matches
2. Wildcard supply, consumed in cost-entry order
3. Shoddy supply, consumed in cost-entry order
"""

from __future__ import annotations
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from enum import Enum

from .errors import ProtocolError


class ResourceCategory(Enum):
    """Desks / resource kinds. Values are the wire indices."""
    TRAINING = 0
    CODING = 1
    DAILY_ROUTINE = 2
    TASK_PRIORITIZATION = 3
    ARCHITECTURE_STUDY = 4
    CONTINUOUS_DELIVERY = 5
    CODE_REVIEW = 6
    REFACTORING = 7

    # Supply-only
    WILDCARD = 8
    SHODDY = 9

    @property
    def is_primary(self) -> bool:
        """True for the eight desk categories."""
        return self.value < 8


PRIMARY_CATEGORIES: tuple[ResourceCategory, ...] = tuple(
    c for c in ResourceCategory if c.is_primary
)


def desk_from_index(index: int) -> ResourceCategory | None:
    """
    Convert a desk index from the game into a category.

    -1 means the participant has not been placed yet and maps to None.
    Anything outside -1..7 is a protocol error.
    """
    if index == -1:
        return None
    if 0 <= index < len(PRIMARY_CATEGORIES):
        return PRIMARY_CATEGORIES[index]
    raise ProtocolError(f"Invalid desk index: {index}")


def desk_to_index(desk: ResourceCategory | None) -> int:
    """Inverse of desk_from_index."""
    if desk is None:
        return -1
    if not desk.is_primary:
        raise ValueError(f"{desk.name} is not a desk")
    return desk.value


# =============================================================================
# Costs
# =============================================================================

@dataclass(frozen=True)
class Cost:
    """A positive amount owed in one primary category."""
    category: ResourceCategory
    amount: int


CostVector = tuple[Cost, ...]


def cost_vector(amounts: Mapping[ResourceCategory, int] | Iterable[tuple[ResourceCategory, int]]) -> CostVector:
    """
    Build a cost vector, dropping zero entries.

    Entries are kept in the order given. Negative amounts are rejected.
    """
    items = amounts.items() if isinstance(amounts, Mapping) else amounts
    costs = []
    for category, amount in items:
        if amount < 0:
            raise ValueError(f"Negative cost for {category.name}: {amount}")
        if not category.is_primary:
            raise ValueError(f"{category.name} cannot be a cost target")
        if amount > 0:
            costs.append(Cost(category, amount))
    return tuple(costs)


def total_cost(costs: CostVector) -> int:
    return sum(c.amount for c in costs)


# =============================================================================
# Resource pool
# =============================================================================

@dataclass(frozen=True)
class ResourcePool:
    """
    Multiset of resource units keyed by category.

    Every stored count is > 0; empty categories are simply absent.
    """
    counts: Mapping[ResourceCategory, int] = field(default_factory=dict)

    def __post_init__(self):
        cleaned = {c: n for c, n in self.counts.items() if n > 0}
        object.__setattr__(self, "counts", cleaned)

    @classmethod
    def from_units(cls, units: Iterable[ResourceCategory]) -> ResourcePool:
        """Fold a flat list of units into a pool."""
        counts: dict[ResourceCategory, int] = {}
        for unit in units:
            counts[unit] = counts.get(unit, 0) + 1
        return cls(counts)

    def get(self, category: ResourceCategory) -> int:
        return self.counts.get(category, 0)

    def without(self, category: ResourceCategory) -> ResourcePool:
        """Return a pool with every unit of a category removed."""
        return ResourcePool({c: n for c, n in self.counts.items() if c != category})

    @property
    def is_empty(self) -> bool:
        return not self.counts

    def __len__(self) -> int:
        return sum(self.counts.values())


EMPTY_POOL = ResourcePool()


# =============================================================================
# Deduction
# =============================================================================

def _deduct_specific(costs: list[list], pool: dict[ResourceCategory, int]) -> None:
    for entry in costs:
        category, amount = entry
        paid = min(pool.get(category, 0), amount)
        if paid:
            entry[1] = amount - paid
            pool[category] -= paid
            if pool[category] == 0:
                del pool[category]


def _deduct_fungible(costs: list[list], supply: int) -> int:
    """Spend a single running counter across cost entries in order."""
    for entry in costs:
        if supply <= 0:
            break
        paid = min(supply, entry[1])
        entry[1] -= paid
        supply -= paid
    return supply


def cost_remaining_after(costs: CostVector, pool: ResourcePool) -> CostVector:
    """
    Cost left over once a pool has been applied.

    Tiers run strictly in order (specific, wildcard, shoddy) and each
    tier only sees what the previous one left. The pool is not modified.
    """
    working = [[c.category, c.amount] for c in costs]
    supply = dict(pool.counts)

    _deduct_specific(working, supply)
    _deduct_fungible(working, supply.get(ResourceCategory.WILDCARD, 0))
    _deduct_fungible(working, supply.get(ResourceCategory.SHODDY, 0))

    return tuple(Cost(category, amount) for category, amount in working if amount > 0)


def is_affordable(costs: CostVector, pool: ResourcePool) -> bool:
    return not cost_remaining_after(costs, pool)


def required_shoddy_mana(costs: CostVector, pool: ResourcePool) -> int:
    """
    How much of a cost could only be paid with shoddy resources.

    Runs the deduction with SHODDY stripped from the pool and sums
    what is left. Used for ranking, never for gating.
    """
    return total_cost(cost_remaining_after(costs, pool.without(ResourceCategory.SHODDY)))
