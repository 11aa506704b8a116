"""
rules.py
========
Pure SET rules: deck generation, dealing, set validation, exhaustive set
discovery and third-card deduction.

Every function takes its inputs and returns newly built outputs; nothing here
keeps state or mutates its arguments, so calls are safe from any thread.
Randomness is injected through a RandomLike source (random.Random works), so a
seeded source gives reproducible decks and puzzles.
"""

from __future__ import annotations

import itertools
import logging
import random
from typing import Iterable, List, NamedTuple, Optional, Sequence, Tuple

from .type import (
    ALL_COLORS, ALL_FILLINGS, ALL_NUMBERS, ALL_SHAPES, ATTRIBUTES, DOMAINS,
    DECK_SIZE, PUZZLE_OPTIONS, SET_SIZE,
    Card, CardTriple, Deck, RandomLike, card_to_code,
)

logger = logging.getLogger(__name__)


# ----------------
# Deck & dealing
# ----------------

def shuffle_cards(cards: Iterable[Card], rng: Optional[RandomLike] = None) -> List[Card]:
    """Return a uniformly shuffled copy of `cards` (Fisher-Yates)."""
    if rng is None:
        rng = random.Random()
    out = list(cards)
    for i in range(len(out) - 1, 0, -1):
        j = rng.randint(0, i)
        out[i], out[j] = out[j], out[i]
    return out


def generate_deck(rng: Optional[RandomLike] = None) -> Deck:
    """Build all 81 cards and return them in a uniformly random order."""
    ordered = [
        Card(color, shape, filling, number)
        for color, shape, filling, number in itertools.product(
            ALL_COLORS, ALL_SHAPES, ALL_FILLINGS, ALL_NUMBERS
        )
    ]
    deck = shuffle_cards(ordered, rng)
    logger.debug(f"Generated deck of {len(deck)} cards, first 3: {[str(c) for c in deck[:3]]}")
    return deck


def deal_cards(deck: Sequence[Card], count: int) -> Tuple[List[Card], Deck]:
    """Split `deck` into (dealt, remaining).

    Dealt cards keep deck order. Asking for more cards than the deck holds
    deals everything and leaves an empty remainder.
    """
    if count < 0:
        raise ValueError(f"Cannot deal a negative number of cards: {count}")
    dealt = list(deck[:count])
    remaining = list(deck[count:])
    logger.debug(f"Dealt {len(dealt)} of {count} requested cards, {len(remaining)} remain")
    return dealt, remaining


# ---------
# Rule check
# ---------

def is_valid_set(cards: Sequence[Card]) -> bool:
    """Classic SET predicate.

    For each attribute the three values must be all the same or all different;
    a 2-same-1-different pattern on any attribute fails the whole triple.
    Anything other than exactly three distinct cards is not a Set.
    """
    if len(cards) != SET_SIZE:
        logger.debug(f"Not a set: expected {SET_SIZE} cards, got {len(cards)}")
        return False
    if len(set(cards)) != SET_SIZE:
        return False
    for attr in ATTRIBUTES:
        if len({getattr(card, attr) for card in cards}) == 2:
            return False
    return True


def find_all_sets(cards: Sequence[Card]) -> List[CardTriple]:
    """Every valid Set among `cards`, ordered by index triples i < j < k."""
    arr = list(cards)
    out: List[CardTriple] = [
        combo for combo in itertools.combinations(arr, SET_SIZE) if is_valid_set(combo)
    ]
    logger.debug(f"Found {len(out)} valid sets in {len(arr)} cards")
    return out


def find_first_set(cards: Sequence[Card]) -> Optional[CardTriple]:
    """The first Set in find_all_sets order, or None if there is none."""
    for combo in itertools.combinations(cards, SET_SIZE):
        if is_valid_set(combo):
            return combo
    return None


def has_set(cards: Sequence[Card]) -> bool:
    return find_first_set(cards) is not None


def set_key(cards: Sequence[Card]) -> Tuple[int, ...]:
    """Order-independent identity for a group of cards (sorted card codes)."""
    return tuple(sorted(card_to_code(card) for card in cards))


# ------------
# Third card
# ------------

def find_third_card(card1: Card, card2: Card) -> Card:
    """The unique card that completes a Set with `card1` and `card2`.

    Per attribute: equal values carry over, different values leave the one
    remaining value of the domain.
    """
    assert card1 != card2, f"Cannot complete a set from two identical cards: {card1}"
    values = {}
    for attr in ATTRIBUTES:
        a, b = getattr(card1, attr), getattr(card2, attr)
        if a == b:
            values[attr] = a
        else:
            values[attr] = next(v for v in DOMAINS[attr] if v != a and v != b)
    third = Card(**values)
    logger.debug(f"Cards {card1}, {card2} need {third} to complete a set")
    return third


# -------
# Puzzle
# -------

class Puzzle(NamedTuple):
    """Two target cards and a shuffled row of options holding exactly one answer."""
    targets: Tuple[Card, Card]
    options: Tuple[Card, ...]
    answer: Card

    @property
    def answer_index(self) -> int:
        return self.options.index(self.answer)

    def is_answer(self, card: Card) -> bool:
        return is_valid_set([self.targets[0], self.targets[1], card])


def generate_puzzle(rng: Optional[RandomLike] = None, option_count: int = PUZZLE_OPTIONS) -> Puzzle:
    """Pick two distinct cards and offer their third card among decoys.

    Decoys are drawn from the rest of the deck, so none of them is a target or
    the answer, and since the third card is unique no decoy completes the Set.
    """
    if not 1 <= option_count <= DECK_SIZE - 2:
        raise ValueError(f"option_count must be in 1..{DECK_SIZE - 2}, got {option_count}")
    if rng is None:
        rng = random.Random()
    deck = generate_deck(rng)
    card1, card2 = deck[0], deck[1]
    answer = find_third_card(card1, card2)
    decoys = [card for card in deck[2:] if card != answer][:option_count - 1]
    options = shuffle_cards(decoys + [answer], rng)
    logger.debug(f"Generated puzzle: targets {card1}, {card2}; answer {answer} at {options.index(answer)}")
    return Puzzle(targets=(card1, card2), options=tuple(options), answer=answer)


# -----
# Hints
# -----

def hint_message(sets_count: int) -> str:
    if sets_count == 0:
        return "No sets available! Add 3 cards to get more options."
    if sets_count == 1:
        return "There is 1 set available on the table!"
    return f"There are {sets_count} sets available on the table!"
