from decimal import Decimal
import math


VERSION = "0.0.1"

SUPPORTED_STATEMENTS = ["SELECT"]
SUPPORTED_OPERATORS = ["+", "-", "*", ">"]
SUPPORTED_FUNCTIONS = ["SQRT"]

# CAST targets treated as integer types
INTEGER_TYPES = ["INT", "INTEGER"]


def format_number(value: float) -> str:
    """
    Formats a float as plain decimal text without exponent, using the shortest digits that round-trip.
    Integral values are written without fraction, e.g. 2.0 -> "2" and 1e20 -> "100000000000000000000".
    """
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "inf" if value > 0 else "-inf"

    text = format(Decimal(repr(value)), "f")
    return text.removesuffix(".0")


def parse_float(text: str) -> float | None:
    """
    Parses text as a float, returns None if the text is no plain number.
    Surrounding whitespace, "_" separators and non-ASCII digits are not accepted.
    """
    if not text.isascii() or text != text.strip() or "_" in text:
        return None
    try:
        return float(text)
    except ValueError:
        return None
