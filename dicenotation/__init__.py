from .generator import NumberGenerator, RandomNumberGenerator
from .interpreter import (
    RollHistory,
    RollResult,
    evaluate,
    maximum,
    mean,
    minimum,
    resolve,
    roll,
)
from .notation import (
    BinaryOperation,
    Constant,
    Dice,
    DiceError,
    DiceOperand,
    Expression,
    GeneratorError,
    Operator,
    ParseError,
)
from .notation_parser import parse
