"""
env.py
======
Stateful SET game sessions built on the pure rules in `rules.py`.

Overview:
---------
The rules core owns no state. Whoever presents the game (a UI, a CLI, a test)
still needs somewhere to keep the table, the draw pile, the score and the
puzzle timer; these classes are that somewhere. They are single-threaded: the
caller must evaluate one selection at a time.

Classic mode:
- reset(): fresh shuffled deck, 12 cards on the table
- select(i, j, k): three 0-based table indices
    • Valid Set: cards removed, table refilled (3 at a time) up to its size
    • Invalid Set: table unchanged, error message
- add_three(): 3 more cards on the table (up to 21)
- hint(): how many Sets are currently on the table

Puzzle mode:
- new_puzzle(): two target cards plus 9 options, exactly one completes the Set
- guess(index): timed answer; best times are kept (top 10)

Every action returns an EnvReturn(ok, message).
"""

from __future__ import annotations

import logging
import random
import time
from typing import Callable, Iterable, List, NamedTuple, Optional, Sequence, Tuple

from .config import GameConfig, load_config
from .rules import (
    Puzzle, deal_cards, find_all_sets, find_third_card, generate_deck,
    generate_puzzle, has_set, hint_message, is_valid_set, set_key,
)
from .type import (
    BEST_TIMES_KEPT, BEST_TIMES_SHOWN, MAX_TABLE_SIZE, PUZZLE_OPTIONS, SET_SIZE,
    TABLE_INCREASE_STEP, TABLE_SIZE, Card, CardTriple, RandomLike,
)

logger = logging.getLogger(__name__)

MAX_DEAL_ATTEMPTS = 20
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def setup_logging(config: Optional[GameConfig] = None):
    """Configure logging from a GameConfig (loaded from the environment if omitted)."""
    if config is None:
        config = load_config()
    if config.enable_logging:
        logging.disable(logging.NOTSET)
        handlers: List[logging.Handler] = [logging.StreamHandler()]
        if config.log_file:
            handlers.append(logging.FileHandler(config.log_file))
        logging.basicConfig(
            level=getattr(logging, config.log_level.upper(), logging.WARNING),
            format=LOG_FORMAT,
            handlers=handlers,
            force=True,
        )
    else:
        logging.disable(logging.CRITICAL)


class EnvReturn(NamedTuple):
    ok: bool
    message: str


def _make_rng(seed: Optional[int], rng: Optional[RandomLike]) -> RandomLike:
    if rng is not None:
        return rng
    return random.Random(seed)


# ==============================
# Classic mode: table & draw pile
# ==============================

class ClassicEnv:
    """Classic SET session: a table of cards, a draw pile and found Sets.

    Indexing: selection expects 0-based positions into the current table.
    """

    def __init__(
        self,
        seed: Optional[int] = None,
        table_size: int = TABLE_SIZE,
        require_initial_set: bool = False,
        rng: Optional[RandomLike] = None,
    ):
        if not SET_SIZE <= table_size <= MAX_TABLE_SIZE:
            raise ValueError(f"table_size must be in {SET_SIZE}..{MAX_TABLE_SIZE}, got {table_size}")
        logger.info(f"Initializing ClassicEnv with seed={seed}, table_size={table_size}, "
                    f"require_initial_set={require_initial_set}")
        self.rng = _make_rng(seed, rng)
        self.table_size = table_size
        self.require_initial_set = require_initial_set
        self._table: List[Card] = []
        self._deck: List[Card] = []
        self._found: List[CardTriple] = []
        self._found_keys: set = set()
        self.score = 0
        self.reset()

    @classmethod
    def from_config(cls, config: GameConfig, rng: Optional[RandomLike] = None) -> "ClassicEnv":
        return cls(
            seed=config.seed,
            table_size=config.table_size,
            require_initial_set=config.require_initial_set,
            rng=rng,
        )

    # --------
    # State
    # --------
    @property
    def table(self) -> List[Card]:
        return list(self._table)

    @property
    def deck(self) -> List[Card]:
        return list(self._deck)

    @property
    def found_sets(self) -> List[CardTriple]:
        return list(self._found)

    # --------
    # Lifecycle
    # --------
    def reset(self, seed: Optional[int] = None) -> List[Card]:
        logger.info(f"Resetting classic game with seed={seed}")
        if seed is not None:
            self.rng = random.Random(seed)
        attempts = 0
        while True:
            attempts += 1
            self._table, self._deck = deal_cards(generate_deck(self.rng), self.table_size)
            if not self.require_initial_set or has_set(self._table):
                break
            logger.debug(f"No valid sets on initial table, attempt {attempts}")
            if attempts >= MAX_DEAL_ATTEMPTS:
                logger.warning(f"Reached maximum attempts ({attempts}), forcing a valid set")
                self._force_table_contains_set()
                break
        self._found = []
        self._found_keys = set()
        self.score = 0
        logger.info(f"Game reset complete. Table size: {len(self._table)}, Deck size: {len(self._deck)}")
        return self.table

    def _force_table_contains_set(self):
        # Swap the last table card for the one completing a set with the first two
        a, b = self._table[0], self._table[1]
        c = find_third_card(a, b)
        if c in self._table:
            return
        self._deck.remove(c)
        old_card = self._table[-1]
        self._table[-1] = c
        self._deck.append(old_card)
        logger.debug(f"Replaced card {old_card} with {c} to force a valid set")

    # -------
    # Actions
    # -------
    def select(self, indices: Sequence[int]) -> EnvReturn:
        """Claim a Set by three 0-based table indices."""
        logger.info(f"Select called with indices: {indices}")
        indices = tuple(indices)
        if len(indices) != SET_SIZE or len(set(indices)) != SET_SIZE:
            return EnvReturn(False, "Error: provide three distinct indices.")
        if any(not 0 <= i < len(self._table) for i in indices):
            return EnvReturn(False, "Error: index out of range.")

        cards = tuple(self._table[i] for i in indices)
        if not is_valid_set(cards):
            logger.info(f"Invalid set selected: {', '.join(str(c) for c in cards)}")
            return EnvReturn(False, "Not a Set. Try again.")

        key = set_key(cards)
        if key not in self._found_keys:
            self._found_keys.add(key)
            self._found.append(cards)
            self.score += 1

        self._table = [card for i, card in enumerate(self._table) if i not in indices]
        cards_added = 0
        if len(self._table) < self.table_size and self._deck:
            new_cards, self._deck = deal_cards(self._deck, TABLE_INCREASE_STEP)
            self._table.extend(new_cards)
            cards_added = len(new_cards)
        logger.info(f"Set removed. Table size: {len(self._table)}, cards added: {cards_added}, score: {self.score}")
        return EnvReturn(True, "Success: valid Set removed.")

    def select_cards(self, cards: Iterable[Card]) -> EnvReturn:
        """Claim a Set by card value instead of position."""
        indices = []
        for card in cards:
            if card not in self._table:
                return EnvReturn(False, f"Error: {card} is not on the table.")
            indices.append(self._table.index(card))
        return self.select(indices)

    def add_three(self) -> EnvReturn:
        """Deal 3 more cards onto the table, up to MAX_TABLE_SIZE."""
        logger.info(f"Add three requested. Current table size: {len(self._table)}")
        if len(self._table) + TABLE_INCREASE_STEP > MAX_TABLE_SIZE:
            return EnvReturn(False, "Error: table is at maximum size.")
        if len(self._deck) < TABLE_INCREASE_STEP:
            return EnvReturn(False, "Error: deck depleted; cannot deal more cards.")
        new_cards, self._deck = deal_cards(self._deck, TABLE_INCREASE_STEP)
        self._table.extend(new_cards)
        return EnvReturn(True, "Success: dealt 3 new cards.")

    def available_sets(self) -> List[CardTriple]:
        return find_all_sets(self._table)

    def hint(self) -> str:
        return hint_message(len(self.available_sets()))

    def is_over(self) -> bool:
        return not self._deck and not has_set(self._table)


# ==================================
# Puzzle mode: find the missing card
# ==================================

class PuzzleEnv:
    """Timed "find the third card" session."""

    def __init__(
        self,
        seed: Optional[int] = None,
        option_count: int = PUZZLE_OPTIONS,
        rng: Optional[RandomLike] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        logger.info(f"Initializing PuzzleEnv with seed={seed}, option_count={option_count}")
        self.rng = _make_rng(seed, rng)
        self.option_count = option_count
        self.clock = clock
        self.score = 0
        self.completed = False
        self._best: List[float] = []
        self._started = 0.0
        self.puzzle: Puzzle = self.new_puzzle()

    @classmethod
    def from_config(cls, config: GameConfig, rng: Optional[RandomLike] = None, **kwargs) -> "PuzzleEnv":
        return cls(seed=config.seed, option_count=config.puzzle_options, rng=rng, **kwargs)

    @property
    def targets(self) -> Tuple[Card, Card]:
        return self.puzzle.targets

    @property
    def options(self) -> Tuple[Card, ...]:
        return self.puzzle.options

    def new_puzzle(self) -> Puzzle:
        self.puzzle = generate_puzzle(self.rng, self.option_count)
        self.completed = False
        self._started = self.clock()
        logger.info(f"New puzzle: {self.puzzle.targets[0]} + {self.puzzle.targets[1]}")
        return self.puzzle

    def guess(self, index: int) -> EnvReturn:
        """Pick one option (0-based) as the card completing the Set."""
        if self.completed:
            return EnvReturn(False, "Puzzle already solved; start a new one.")
        if not 0 <= index < len(self.puzzle.options):
            return EnvReturn(False, "Error: index out of range.")
        card = self.puzzle.options[index]
        if not self.puzzle.is_answer(card):
            logger.info(f"Wrong guess: {card}")
            return EnvReturn(False, "Wrong card. Try again.")
        elapsed = self.clock() - self._started
        self.completed = True
        self.score += 1
        self._best = sorted(self._best + [elapsed])[:BEST_TIMES_KEPT]
        logger.info(f"Puzzle solved in {elapsed:.2f}s, score: {self.score}")
        return EnvReturn(True, f"Correct! Solved in {elapsed:.2f}s.")

    def best_times(self, limit: int = BEST_TIMES_SHOWN) -> List[float]:
        return self._best[:limit]
