"""
type.py
========
Core type objects and lightweight value classes for the SET rules engine.

Design goals
------------
- Deterministic & test-friendly: randomness is injected (see RandomLike).
- Safety: frozen dataclasses / Enums; explicit error types; clear invariants.
- Minimal: just the primitives, no game loop, no I/O.

Key invariants
--------------
- A 'Set' is any 3 distinct cards where, for each attribute, the values are
  either all the same or all different.
- The full deck is the Cartesian product of the four attribute domains:
  81 distinct cards, each exactly once.
- Cards compare by value; there is no identity beyond the four attributes.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import (
    Any, Dict, List, Literal, Mapping, Protocol, Tuple, TypedDict,
    runtime_checkable
)


class TypesError(Exception):
    """Base error for type and invariant violations."""


class InvalidCardError(TypesError):
    """Raised when a Card has invalid attributes or an out-of-range code."""


__all__ = [
    # Enums
    "Color", "Shape", "Filling", "Number",
    # Core values
    "Card", "Deck", "CardTriple", "CardJSON",
    # Protocols
    "RandomLike",
    # Errors
    "TypesError", "InvalidCardError",
    # Encoding
    "card_to_code", "code_to_card",
    # Constants
    "DECK_SIZE", "SET_SIZE", "TABLE_SIZE", "TABLE_INCREASE_STEP",
    "MAX_TABLE_SIZE", "PUZZLE_OPTIONS", "BEST_TIMES_KEPT", "BEST_TIMES_SHOWN",
    "ALL_COLORS", "ALL_SHAPES", "ALL_FILLINGS", "ALL_NUMBERS",
    "ATTRIBUTES", "DOMAINS",
]


class Color(Enum):
    RED = "red"
    GREEN = "green"
    PURPLE = "purple"


class Shape(Enum):
    CIRCLE = "circle"
    SQUARE = "square"
    TRIANGLE = "triangle"


class Filling(Enum):
    BLANK = "blank"
    FILLED = "filled"
    STRIPED = "striped"


class Number(Enum):
    ONE = 1
    TWO = 2
    THREE = 3


ALL_COLORS: Tuple[Color, ...] = (Color.RED, Color.GREEN, Color.PURPLE)
ALL_SHAPES: Tuple[Shape, ...] = (Shape.CIRCLE, Shape.SQUARE, Shape.TRIANGLE)
ALL_FILLINGS: Tuple[Filling, ...] = (Filling.BLANK, Filling.FILLED, Filling.STRIPED)
ALL_NUMBERS: Tuple[Number, ...] = (Number.ONE, Number.TWO, Number.THREE)

# Attribute name -> canonical domain, in card field order
ATTRIBUTES: Tuple[str, ...] = ("color", "shape", "filling", "number")
DOMAINS: Dict[str, Tuple[Enum, ...]] = {
    "color": ALL_COLORS,
    "shape": ALL_SHAPES,
    "filling": ALL_FILLINGS,
    "number": ALL_NUMBERS,
}

DECK_SIZE: int = 81
SET_SIZE: int = 3
TABLE_SIZE: int = 12
TABLE_INCREASE_STEP: int = 3
MAX_TABLE_SIZE: int = 21  # 21 cards always hold at least one Set
PUZZLE_OPTIONS: int = 9
BEST_TIMES_KEPT: int = 10
BEST_TIMES_SHOWN: int = 5


class CardJSON(TypedDict):
    color: Literal["red", "green", "purple"]
    shape: Literal["circle", "square", "triangle"]
    filling: Literal["blank", "filled", "striped"]
    number: Literal[1, 2, 3]


def _coerce(enum_cls, value: Any):
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(value)
    except ValueError:
        raise InvalidCardError(f"{value!r} is not a valid {enum_cls.__name__.lower()}") from None


@dataclass(frozen=True, slots=True)
class Card:
    """
    Immutable card value.

    Canonical mapping
    The code encodes the 4 ternary attributes (each idx in {0,1,2}):
       code = 27*color_idx + 9*shape_idx + 3*filling_idx + number_idx
    """
    color: Color
    shape: Shape
    filling: Filling
    number: Number

    def __post_init__(self):
        # Accept plain domain values ("red", 2, ...) as well as enum members
        for attr in ATTRIBUTES:
            enum_cls = type(DOMAINS[attr][0])
            object.__setattr__(self, attr, _coerce(enum_cls, getattr(self, attr)))

    def as_tuple(self) -> Tuple[Color, Shape, Filling, Number]:
        return (self.color, self.shape, self.filling, self.number)

    @property
    def code(self) -> int:
        return card_to_code(self)

    @classmethod
    def from_code(cls, code: int) -> "Card":
        return code_to_card(code)

    def to_dict(self) -> CardJSON:
        return {
            "color": self.color.value,
            "shape": self.shape.value,
            "filling": self.filling.value,
            "number": self.number.value,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Card":
        missing = [attr for attr in ATTRIBUTES if attr not in data]
        if missing:
            raise InvalidCardError(f"Card mapping is missing {', '.join(missing)}")
        return cls(**{attr: data[attr] for attr in ATTRIBUTES})

    def __str__(self) -> str:
        n = self.number.value
        noun = self.shape.value + ("s" if n > 1 else "")
        return f"{n} {self.filling.value} {self.color.value} {noun}"


# A triple of cards in table order
CardTriple = Tuple[Card, Card, Card]

# Ordered pool of undealt cards, consumed from the front
Deck = List[Card]


def card_to_code(card: Card) -> int:
    code = 0
    for attr in ATTRIBUTES:
        code = code * 3 + DOMAINS[attr].index(getattr(card, attr))
    return code


def code_to_card(code: int) -> Card:
    """Decode base-3 card code -> Card. Order: COLOR, SHAPE, FILLING, NUMBER."""
    if isinstance(code, bool) or not isinstance(code, int) or not 0 <= code < DECK_SIZE:
        raise InvalidCardError(f"Card code must be an int in 0..{DECK_SIZE - 1}, got {code!r}")
    n = code % 3
    f = (code // 3) % 3
    s = (code // 9) % 3
    c = (code // 27) % 3
    return Card(ALL_COLORS[c], ALL_SHAPES[s], ALL_FILLINGS[f], ALL_NUMBERS[n])


@runtime_checkable
class RandomLike(Protocol):
    """
    Minimal interface expected from RNG providers.
    Implemented by 'random.Random' and 'random.SystemRandom'.
    """
    def randint(self, a: int, b: int) -> int: ...  # inclusive
