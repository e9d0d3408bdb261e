import pytest

from dicenotation.notation import (
    BinaryOperation,
    Constant,
    Dice,
    DiceOperand,
    Operator,
    ParseError,
)
from dicenotation.notation_parser import parse


@pytest.mark.parametrize(
    ("text", "dice"),
    [
        ("1d1", Dice(1, 1)),
        ("1d6", Dice(1, 6)),
        ("1D6", Dice(1, 6)),
        ("0d6", Dice(0, 6)),
        ("2147483647d2147483647", Dice(2147483647, 2147483647)),
        ("4d6kh3", Dice(4, 6, 3)),
        ("4d6KH3", Dice(4, 6, 3)),
        ("4d6kl1", Dice(4, 6, -1)),
        ("4d6dl1", Dice(4, 6, 3, drop=True)),
        ("4d6dh1", Dice(4, 6, -3, drop=True)),
        ("4D6DL1", Dice(4, 6, 3, drop=True)),
        ("2d6kh5", Dice(2, 6, 5)),
        ("3d6kh0", Dice(3, 6, 0)),
        (" 3 d 6 ", Dice(3, 6)),
    ],
)
def test_parse_dice(text, dice):
    assert parse(text) == DiceOperand(dice)


@pytest.mark.parametrize(
    "text", ["1d1", "3d6", "0d4", "10d100", "4d6kh3", "4d6kl2", "4d6dl1", "5d8dh2"]
)
def test_dice_notation_round_trip(text):
    assert str(parse(text).dice) == text


def test_drop_nothing_renders_plain():
    assert str(parse("4d6dl0").dice) == "4d6"


@pytest.mark.parametrize(
    ("text", "dice", "notation"),
    [
        ("2d6dl2", Dice(2, 6, 0, drop=True), "2d6"),
        ("2d6dh3", Dice(2, 6, 1, drop=True), "2d6dl1"),
        ("2d6dl5", Dice(2, 6, -3, drop=True), "2d6"),
        ("0d6dl1", Dice(0, 6, -1, drop=True), "0d6"),
    ],
)
def test_drop_at_least_quantity(text, dice, notation):
    parsed = parse(text)
    assert parsed == DiceOperand(dice)
    assert str(parsed.dice) == notation


def test_left_associative():
    assert parse("5-2d1+3") == BinaryOperation(
        Operator.ADD,
        BinaryOperation(Operator.SUB, Constant(5), DiceOperand(Dice(2, 1))),
        Constant(3),
    )


def test_leading_minus():
    assert parse("-1d1-2d1") == BinaryOperation(
        Operator.SUB,
        BinaryOperation(Operator.SUB, Constant(0), DiceOperand(Dice(1, 1))),
        DiceOperand(Dice(2, 1)),
    )


def test_whitespace_between_terms():
    assert repr(parse("2d20dl1 -  5")) == "2d20dl1 - 5"


@pytest.mark.parametrize(
    "text",
    [
        "",
        "   ",
        "abc",
        "-1",
        "5",
        "2+3",
        "1d0",
        "d6",
        "1d",
        "3d6+",
        "3d6*2",
        "(3d6)",
        "3d6k3",
        "3d6kx3",
        "3d6+-2",
        "--1d6",
    ],
)
def test_parse_rejections(text):
    with pytest.raises(ParseError):
        parse(text)
