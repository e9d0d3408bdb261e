import logging
import os
import typing

import lark

from .notation import (
    BinaryOperation,
    Constant,
    Dice,
    DiceError,
    DiceOperand,
    Expression,
    Operator,
    ParseError,
    dice_operands,
)

logger = logging.getLogger(__name__)


@lark.v_args(inline=True)
class _NotationParser(lark.Transformer):
    number = lambda self, value: Constant(int(value))
    add = lambda self, lhs, rhs: BinaryOperation(Operator.ADD, lhs, rhs)
    sub = lambda self, lhs, rhs: BinaryOperation(Operator.SUB, lhs, rhs)
    neg = lambda self, term: BinaryOperation(Operator.SUB, Constant(0), term)

    def modifier(self, mode: lark.Token, direction: lark.Token, magnitude: lark.Token):
        return mode.lower(), direction.lower(), int(magnitude)

    def dice(
        self,
        quantity: lark.Token,
        _separator: lark.Token,
        sides: lark.Token,
        modifier: typing.Optional[typing.Tuple[str, str, int]],
    ) -> DiceOperand:
        n = int(quantity)
        keep, drop = n, False
        if modifier is not None:
            mode, direction, magnitude = modifier
            if mode == "k":
                keep = magnitude if direction == "h" else -magnitude
            else:
                # dropping every die leaves keep == 0, which keeps them all
                drop = True
                keep = n - magnitude if direction == "l" else -(n - magnitude)
        try:
            return DiceOperand(Dice(n, int(sides), keep, drop))
        except DiceError as e:
            raise ParseError(str(e)) from e


_grammar_file = os.path.join(os.path.dirname(__file__), "notation.lark")
with open(_grammar_file) as f:
    _grammar = lark.Lark(f, parser="lalr")


def parse(text: str) -> Expression:
    if not text or not text.strip():
        raise ParseError("empty dice notation")
    try:
        result = _NotationParser().transform(_grammar.parse(text))
    except lark.exceptions.VisitError as e:
        raise e.orig_exc
    except lark.exceptions.UnexpectedInput as e:
        raise ParseError("syntax error in '%s':\n%s" % (text, e))
    if next(dice_operands(result), None) is None:
        raise ParseError("'%s' does not roll any dice" % text)
    logger.debug("Parsed %r into %r", text, result)
    return result
