from .type import (
    Card, Color, Shape, Filling, Number, Deck,
    TypesError, InvalidCardError,
    card_to_code, code_to_card,
)
from .rules import (
    generate_deck, deal_cards, is_valid_set, find_all_sets, find_third_card,
    shuffle_cards, find_first_set, has_set, set_key, generate_puzzle, Puzzle,
    hint_message,
)

__all__ = [
    'Card', 'Color', 'Shape', 'Filling', 'Number', 'Deck',
    'TypesError', 'InvalidCardError',
    'card_to_code', 'code_to_card',
    'generate_deck', 'deal_cards', 'is_valid_set', 'find_all_sets', 'find_third_card',
    'shuffle_cards', 'find_first_set', 'has_set', 'set_key', 'generate_puzzle', 'Puzzle',
    'hint_message',
]
