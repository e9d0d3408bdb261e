import collections
import itertools
import logging
import math
import typing
from dataclasses import dataclass

from .generator import NumberGenerator, RandomNumberGenerator
from .notation import (
    BinaryOperation,
    Constant,
    Dice,
    DiceError,
    DiceOperand,
    Expression,
    Operator,
)

logger = logging.getLogger(__name__)

# Upper bound on the sorted outcomes enumerated for the mean of a keep/drop group.
MAX_MEAN_OUTCOMES = 200_000


@dataclass(frozen=True)
class RollResult:
    """The outcome of rolling one dice group.

    ``rolls`` holds every generated value in the order the generator produced
    them, ``kept`` the values selected by the keep/drop modifier (highest or
    lowest first), and ``total`` the sum of ``kept``.

    Rendered as the rolls in generator order, with dropped dice in
    parentheses: ``[3, 6, (1), 4]``.
    """

    dice: Dice
    rolls: typing.Tuple[int, ...]
    kept: typing.Tuple[int, ...]
    total: int

    def __str__(self) -> str:
        unclaimed = collections.Counter(self.kept)
        shown = []
        for value in self.rolls:
            if unclaimed[value] > 0:
                unclaimed[value] -= 1
                shown.append(str(value))
            else:
                shown.append("(%s)" % value)
        if len(shown) == 1:
            return shown[0]
        return "[%s]" % ", ".join(shown)


@dataclass(frozen=True)
class RollHistory:
    results: typing.Tuple[RollResult, ...]
    total: int
    text: str

    def __str__(self) -> str:
        return self.text


RollTransformer = typing.Callable[[RollResult, int], RollResult]


def resolve(dice: Dice, generator: NumberGenerator) -> RollResult:
    rolls = tuple(generator.generate(dice.quantity, dice.sides))

    ordered = sorted(rolls)
    if dice.keep > 0:
        ordered.reverse()

    if dice.keep == 0:
        n = len(ordered)
    else:
        n = min(abs(dice.keep), len(ordered))
    kept = tuple(ordered[:n])
    total = sum(kept)

    logger.debug("Rolled %s", dice)
    logger.debug("Generated rolls: %s", rolls)
    logger.debug("Total roll: %s", total)

    return RollResult(dice, rolls, kept, total)


def evaluate(
    expression: Expression, generator: typing.Optional[NumberGenerator] = None
) -> int:
    """Rolls ``expression`` and returns its total."""
    if generator is None:
        generator = RandomNumberGenerator()
    return _evaluate(expression, generator)


def _evaluate(expression: Expression, generator: NumberGenerator) -> int:
    if isinstance(expression, BinaryOperation):
        lhs = _evaluate(expression.lhs, generator)
        rhs = _evaluate(expression.rhs, generator)
        return expression.operator.apply(lhs, rhs)
    elif isinstance(expression, DiceOperand):
        return resolve(expression.dice, generator).total
    elif isinstance(expression, Constant):
        return expression.value
    raise TypeError("not a dice expression: %r" % (expression,))


def roll(
    expression: Expression,
    generator: typing.Optional[NumberGenerator] = None,
    transform: typing.Optional[RollTransformer] = None,
) -> RollHistory:
    """Rolls ``expression``, recording the outcome of every dice group.

    ``transform``, when given, is called with each group's result and its
    index in the history; whatever it returns is recorded and counted
    instead.
    """
    if generator is None:
        generator = RandomNumberGenerator()
    results: typing.List[RollResult] = []

    def visit(node: Expression) -> typing.Tuple[int, str]:
        if isinstance(node, BinaryOperation):
            lhs, lhs_text = visit(node.lhs)
            rhs, rhs_text = visit(node.rhs)
            return (
                node.operator.apply(lhs, rhs),
                "%s %s %s" % (lhs_text, node.operator.value, rhs_text),
            )
        elif isinstance(node, DiceOperand):
            result = resolve(node.dice, generator)
            if transform is not None:
                result = transform(result, len(results))
            results.append(result)
            return result.total, str(result)
        elif isinstance(node, Constant):
            return node.value, str(node.value)
        raise TypeError("not a dice expression: %r" % (node,))

    total, text = visit(expression)
    return RollHistory(tuple(results), total, text)


def minimum(expression: Expression) -> int:
    if isinstance(expression, BinaryOperation):
        if expression.operator is Operator.ADD:
            return minimum(expression.lhs) + minimum(expression.rhs)
        return minimum(expression.lhs) - maximum(expression.rhs)
    elif isinstance(expression, DiceOperand):
        return expression.dice.kept_count
    return expression.value


def maximum(expression: Expression) -> int:
    if isinstance(expression, BinaryOperation):
        if expression.operator is Operator.ADD:
            return maximum(expression.lhs) + maximum(expression.rhs)
        return maximum(expression.lhs) - minimum(expression.rhs)
    elif isinstance(expression, DiceOperand):
        return expression.dice.kept_count * expression.dice.sides
    return expression.value


def mean(expression: Expression) -> float:
    if isinstance(expression, BinaryOperation):
        return expression.operator.apply(mean(expression.lhs), mean(expression.rhs))
    elif isinstance(expression, DiceOperand):
        return _dice_mean(expression.dice)
    return float(expression.value)


def _dice_mean(dice: Dice) -> float:
    if not dice.selects:
        return dice.quantity * (dice.sides + 1) / 2

    if _too_many_outcomes(dice):
        raise DiceError("Mean of '%s' cannot be computed" % dice)

    n = dice.kept_count
    permutations = math.factorial(dice.quantity)
    total = 0
    # each sorted outcome stands for all of its distinct orderings
    for outcome in itertools.combinations_with_replacement(
        range(1, dice.sides + 1), dice.quantity
    ):
        weight = permutations
        for count in collections.Counter(outcome).values():
            weight //= math.factorial(count)
        kept = outcome[-n:] if dice.keep > 0 else outcome[:n]
        total += weight * sum(kept)
    return total / dice.sides ** dice.quantity


def _too_many_outcomes(dice: Dice) -> bool:
    # C(quantity + sides - 1, quantity), built up factor by factor so huge
    # groups give up after a few steps
    n = dice.quantity + dice.sides - 1
    k = min(dice.quantity, dice.sides - 1)
    outcomes = 1
    for i in range(1, k + 1):
        outcomes = outcomes * (n - k + i) // i
        if outcomes > MAX_MEAN_OUTCOMES:
            return True
    return False
