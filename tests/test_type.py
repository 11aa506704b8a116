import pytest

from setgame.type import (
    DECK_SIZE, Card, Color, Filling, InvalidCardError, Number, RandomLike, Shape,
    TypesError, card_to_code, code_to_card,
)


def test_card_accepts_plain_values():
    card = Card("green", "triangle", "striped", 2)
    assert card == Card(Color.GREEN, Shape.TRIANGLE, Filling.STRIPED, Number.TWO)
    assert card.as_tuple() == (Color.GREEN, Shape.TRIANGLE, Filling.STRIPED, Number.TWO)


def test_card_equality_is_structural():
    a = Card("red", "circle", "blank", 1)
    b = Card("red", "circle", "blank", 1)
    assert a == b
    assert hash(a) == hash(b)
    assert len({a, b}) == 1


def test_card_is_immutable():
    card = Card("red", "circle", "blank", 1)
    with pytest.raises(AttributeError):
        card.color = Color.GREEN


@pytest.mark.parametrize("kwargs", [
    {"color": "blue", "shape": "circle", "filling": "blank", "number": 1},
    {"color": "red", "shape": "oval", "filling": "blank", "number": 1},
    {"color": "red", "shape": "circle", "filling": "solid", "number": 1},
    {"color": "red", "shape": "circle", "filling": "blank", "number": 4},
])
def test_invalid_attribute_raises(kwargs):
    with pytest.raises(InvalidCardError):
        Card(**kwargs)


def test_codes_cover_the_deck():
    cards = [code_to_card(i) for i in range(DECK_SIZE)]
    assert len(set(cards)) == DECK_SIZE
    assert [card_to_code(c) for c in cards] == list(range(DECK_SIZE))


def test_code_layout():
    assert Card("red", "circle", "blank", 1).code == 0
    assert Card("red", "circle", "blank", 3).code == 2
    assert Card("red", "circle", "striped", 1).code == 6
    assert Card("red", "triangle", "blank", 1).code == 18
    assert Card("purple", "triangle", "striped", 3).code == 80


@pytest.mark.parametrize("code", [-1, 81, 2.0, True, "3"])
def test_bad_code_raises(code):
    with pytest.raises(InvalidCardError):
        code_to_card(code)


def test_dict_round_trip_and_missing_keys():
    card = Card("purple", "square", "filled", 3)
    data = card.to_dict()
    assert data == {"color": "purple", "shape": "square", "filling": "filled", "number": 3}
    assert Card.from_dict(data) == card
    with pytest.raises(InvalidCardError):
        Card.from_dict({"color": "red"})
    assert issubclass(InvalidCardError, TypesError)


def test_str():
    assert str(Card("red", "circle", "blank", 1)) == "1 blank red circle"
    assert str(Card("green", "square", "striped", 3)) == "3 striped green squares"


def test_random_like_protocol():
    import random
    assert isinstance(random.Random(), RandomLike)
    assert not isinstance(object(), RandomLike)
