import math
import re

from dicestack.conditions import Condition
from dicestack.errors import Error

condition_re = re.compile(r'\s*(-=|=-|!=|=!|<=|>=|=|<|>)\s*(-?\d+)\s*')


def parse_values(text):
    """
    "2, 5, 1, 6" -> [2, 5, 1, 6]
    """
    return [int(v) for v in text.replace(',', ' ').split()]


def parse_conditions(text):
    """
    ">=6" or "-=1; >=6" -> list of Condition
    """
    conditions = []
    for part in (text or '').split(';'):
        if not part.strip():
            continue
        m = condition_re.fullmatch(part)
        assert m is not None, "Bad condition: %r" % part
        conditions.append(Condition(m.group(1), int(m.group(2))))
    return conditions


def parse_number(text):
    text = text.strip()
    if text == 'NaN':
        return math.nan
    if text in ('inf', '∞'):
        return math.inf
    if text in ('-inf', '-∞'):
        return -math.inf
    return float(text)


def assert_number(actual, expected_text):
    expected = parse_number(expected_text)
    if math.isnan(expected):
        assert math.isnan(actual), "Expected NaN, got %r" % actual
    else:
        assert actual == expected, "Expected %r, got %r" % (expected, actual)


def attempt(context, func, *args):
    """
    Call func, storing any dicestack error on the context instead of raising.
    """
    context.error = None
    try:
        return func(*args)
    except Error as e:
        context.error = e
