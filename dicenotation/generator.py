import random
import typing

from .notation import GeneratorError


class NumberGenerator:
    def generate(self, quantity: int, sides: int) -> typing.Sequence[int]:
        """Returns ``quantity`` values, each one in ``[1, sides]``."""
        raise NotImplementedError


class RandomNumberGenerator(NumberGenerator):
    def __init__(self, seed: typing.Optional[int] = None) -> None:
        self.random = random.Random(seed)

    def generate(self, quantity: int, sides: int) -> typing.List[int]:
        if quantity < 0:
            raise GeneratorError("cannot generate %s values" % quantity)
        if sides < 1:
            raise GeneratorError("cannot generate values in [1, %s]" % sides)
        return [self.random.randint(1, sides) for _ in range(quantity)]
