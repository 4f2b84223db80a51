"""Minor-unit money helpers"""

import math
from fractions import Fraction


def round_half_up(value: Fraction | int) -> int:
    """Round an exact amount to the nearest minor unit, halves towards +infinity"""
    return math.floor(value + Fraction(1, 2))


def is_minor_units(value: object) -> bool:
    """True for plain ints (bool is excluded even though it subclasses int)"""
    return isinstance(value, int) and not isinstance(value, bool)
