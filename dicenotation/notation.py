import enum
import typing
from dataclasses import dataclass


class DiceError(ValueError):
    pass


class ParseError(DiceError):
    pass


class GeneratorError(DiceError):
    pass


@dataclass(frozen=True)
class Dice:
    """A group of identical dice, with an optional keep/drop selection.

    ``keep`` is signed: positive keeps the highest dice, negative keeps the
    lowest ones. A magnitude of zero, or one not smaller than ``quantity``,
    keeps every die. ``drop`` records whether the selection was written as a
    drop modifier, so it can be rendered back the same way.
    """

    quantity: int
    sides: int
    keep: typing.Optional[int] = None
    drop: bool = False

    def __post_init__(self) -> None:
        if self.quantity < 0:
            raise DiceError("cannot roll %s dice" % self.quantity)
        if self.sides < 1:
            raise DiceError("attempted to roll a die with %s faces" % self.sides)
        if self.keep is None:
            object.__setattr__(self, "keep", self.quantity)

    @property
    def kept_count(self) -> int:
        if self.keep == 0:
            return self.quantity
        return min(abs(self.keep), self.quantity)

    @property
    def selects(self) -> bool:
        return self.kept_count < self.quantity

    def __str__(self) -> str:
        if self.keep == 0 or abs(self.keep) == self.quantity:
            return "%sd%s" % (self.quantity, self.sides)
        if self.drop:
            if not self.selects:
                return "%sd%s" % (self.quantity, self.sides)
            # keep > 0 came from dropping the lowest, keep < 0 from the highest
            direction = "l" if self.keep > 0 else "h"
            return "%sd%sd%s%s" % (
                self.quantity,
                self.sides,
                direction,
                self.quantity - abs(self.keep),
            )
        direction = "h" if self.keep > 0 else "l"
        return "%sd%sk%s%s" % (self.quantity, self.sides, direction, abs(self.keep))


class Operator(enum.Enum):
    ADD = "+"
    SUB = "-"

    def apply(self, lhs: int, rhs: int) -> int:
        if self is Operator.ADD:
            return lhs + rhs
        return lhs - rhs


@dataclass(frozen=True, repr=False)
class Constant:
    value: int

    def __repr__(self) -> str:
        return str(self.value)


@dataclass(frozen=True, repr=False)
class DiceOperand:
    dice: Dice

    def __repr__(self) -> str:
        return str(self.dice)


@dataclass(frozen=True, repr=False)
class BinaryOperation:
    operator: Operator
    lhs: "Expression"
    rhs: "Expression"

    def __repr__(self) -> str:
        return "%s %s %s" % (self.lhs, self.operator.value, self.rhs)


Expression = typing.Union[Constant, DiceOperand, BinaryOperation]


def dice_operands(expression: Expression) -> typing.Iterator[DiceOperand]:
    """Yields the dice groups of an expression in left-to-right order."""
    if isinstance(expression, BinaryOperation):
        yield from dice_operands(expression.lhs)
        yield from dice_operands(expression.rhs)
    elif isinstance(expression, DiceOperand):
        yield expression
