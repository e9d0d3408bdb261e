import typing

import pytest

from dicenotation.generator import NumberGenerator


class FixedGenerator(NumberGenerator):
    """Hands out queued roll lists, one per dice group, then repeats ``fill``."""

    def __init__(self, *rolls: typing.Sequence[int], fill: int = 1) -> None:
        self.rolls = list(rolls)
        self.fill = fill
        self.calls: typing.List[typing.Tuple[int, int]] = []

    def generate(self, quantity: int, sides: int) -> typing.List[int]:
        self.calls.append((quantity, sides))
        if self.rolls:
            return list(self.rolls.pop(0))
        return [self.fill] * quantity


@pytest.fixture
def ones() -> FixedGenerator:
    return FixedGenerator()
