import argparse
import logging
import os
import sys
import typing

import yaml

from .generator import RandomNumberGenerator
from .interpreter import maximum, mean, minimum, roll
from .notation import DiceError
from .notation_parser import parse

DEFAULT_SETTINGS = os.path.join(os.path.dirname(__file__), "settings.default.yaml")


def load_settings(path: typing.Optional[str] = None) -> typing.Dict[str, typing.Any]:
    with open(DEFAULT_SETTINGS) as f:
        settings = yaml.safe_load(f) or {}
    if path is None and os.path.exists("settings.yaml"):
        path = "settings.yaml"
    if path is not None:
        with open(path) as f:
            settings.update(yaml.safe_load(f) or {})
    return settings


def roll_notation(
    notation: str, generator: RandomNumberGenerator, stats: bool
) -> str:
    expression = parse(notation)
    history = roll(expression, generator)
    message = "%s: %s = %s" % (expression, history, history.total)
    if stats:
        message += "\n  min %s, max %s, mean %.2f" % (
            minimum(expression),
            maximum(expression),
            mean(expression),
        )
    return message


def main(argv: typing.List[str] = sys.argv) -> int:
    parser = argparse.ArgumentParser(
        prog="dicenotation", description="Roll dice written in NdS notation."
    )
    parser.add_argument("notation", nargs="+", help="e.g. 3d6+2, 4d6kh3, 2d20dl1-5")
    parser.add_argument("--settings", help="YAML settings file")
    parser.add_argument("--seed", type=int, help="seed for the dice")
    parser.add_argument(
        "--stats", action="store_true", default=None, help="also print min/max/mean"
    )
    args = parser.parse_args(argv[1:])

    settings = load_settings(args.settings)
    logging.basicConfig(level=settings.get("log_level", "WARNING"))

    seed = args.seed if args.seed is not None else settings.get("seed")
    stats = args.stats if args.stats is not None else settings.get("stats", False)
    generator = RandomNumberGenerator(seed)

    for notation in args.notation:
        try:
            print(roll_notation(notation, generator, stats))
        except DiceError as e:
            print("error: %s" % e, file=sys.stderr)
            return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
