"""
Cards - Card variants and the resources they provide.

Three variants exist:
- GENERIC: one per desk category, yields 2 of its category + 2 SHODDY
- BONUS: yields 1 WILDCARD + 1 SHODDY
- TECHNICAL_DEBT: yields nothing

Cards are plain values. Which zone "owns" a card is decided by the
snapshot that lists it, not by the card.
"""

from __future__ import annotations
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from enum import Enum

from .resources import PRIMARY_CATEGORIES, ResourceCategory, ResourcePool
from .errors import ProtocolError


class CardKind(Enum):
    GENERIC = "generic"
    BONUS = "bonus"
    TECHNICAL_DEBT = "technical_debt"


BONUS_TYPE_ID = 8
TECHNICAL_DEBT_TYPE_ID = 9
CARD_TYPE_COUNT = 10


@dataclass(frozen=True)
class Card:
    """
    A single card.

    `category` is set for GENERIC cards only.
    """
    kind: CardKind
    category: ResourceCategory | None = None

    def __post_init__(self):
        if self.kind == CardKind.GENERIC:
            if self.category is None or not self.category.is_primary:
                raise ValueError("Generic cards need a desk category")
        elif self.category is not None:
            raise ValueError(f"{self.kind.name} cards have no category")

    @classmethod
    def generic(cls, category: ResourceCategory) -> Card:
        return cls(kind=CardKind.GENERIC, category=category)

    @classmethod
    def bonus(cls) -> Card:
        return cls(kind=CardKind.BONUS)

    @classmethod
    def technical_debt(cls) -> Card:
        return cls(kind=CardKind.TECHNICAL_DEBT)

    @classmethod
    def from_type_id(cls, type_id: int) -> Card:
        """Build a card from its wire type id (0-7 desks, 8 bonus, 9 debt)."""
        if 0 <= type_id < len(PRIMARY_CATEGORIES):
            return cls.generic(PRIMARY_CATEGORIES[type_id])
        if type_id == BONUS_TYPE_ID:
            return cls.bonus()
        if type_id == TECHNICAL_DEBT_TYPE_ID:
            return cls.technical_debt()
        raise ProtocolError(f"Unknown card type id: {type_id}")

    @property
    def type_id(self) -> int:
        if self.kind == CardKind.GENERIC:
            return self.category.value
        if self.kind == CardKind.BONUS:
            return BONUS_TYPE_ID
        return TECHNICAL_DEBT_TYPE_ID

    @property
    def name(self) -> str:
        """Upper-case type name, as used in PLAY commands."""
        if self.kind == CardKind.GENERIC:
            return self.category.name
        if self.kind == CardKind.BONUS:
            return "BONUS"
        return "TECHNICAL_DEBT"

    def provided_mana(self) -> tuple[ResourceCategory, ...]:
        return provided_mana(self)

    def __str__(self) -> str:
        return self.name


def provided_mana(card: Card) -> tuple[ResourceCategory, ...]:
    """Resource units a card yields while it is in hand."""
    if card.kind == CardKind.GENERIC:
        return (card.category, card.category, ResourceCategory.SHODDY, ResourceCategory.SHODDY)
    if card.kind == CardKind.BONUS:
        return (ResourceCategory.WILDCARD, ResourceCategory.SHODDY)
    return ()


def pool_from_cards(cards: Iterable[Card]) -> ResourcePool:
    """Sum the yield of every card into a pool."""
    return ResourcePool.from_units(unit for card in cards for unit in provided_mana(card))


def cards_from_counts(counts: Sequence[int]) -> tuple[Card, ...]:
    """
    Expand per-type counts (indexed by type id) into card values.

    The game sends one count per card type, in type id order.
    """
    if len(counts) != CARD_TYPE_COUNT:
        raise ProtocolError(f"Expected {CARD_TYPE_COUNT} card counts, got {len(counts)}")
    cards: list[Card] = []
    for type_id, count in enumerate(counts):
        if count < 0:
            raise ProtocolError(f"Negative card count for type {type_id}: {count}")
        cards.extend([Card.from_type_id(type_id)] * count)
    return tuple(cards)
