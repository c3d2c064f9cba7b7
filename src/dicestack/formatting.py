"""
Locale-aware display of roll results.
"""
import contextlib
import locale
import logging
import math

logger = logging.getLogger('dicestack.formatting')


@contextlib.contextmanager
def numeric_locale(name):
    """
    Temporarily switch LC_NUMERIC. An empty name leaves the locale alone.
    """
    if not name:
        yield
        return
    previous = locale.setlocale(locale.LC_NUMERIC)
    try:
        locale.setlocale(locale.LC_NUMERIC, name)
    except locale.Error:
        logger.warning("Unsupported locale %r, using %r", name, previous)
        yield
        return
    try:
        yield
    finally:
        locale.setlocale(locale.LC_NUMERIC, previous)


def to_float(value):
    """
    Convert a result to a float. Integers too large for a float become
    infinities of the same sign.
    """
    try:
        return float(value)
    except OverflowError:
        return math.inf if value > 0 else -math.inf


def format_number(value, fraction_digits=2, locale_name=None):
    """
    Format a number with digit grouping and at most fraction_digits digits
    after the decimal point, without trailing zeros.
    """
    if value is None:
        return ''
    value = to_float(value)
    if math.isnan(value):
        return 'NaN'
    if math.isinf(value):
        return '-∞' if value < 0 else '∞'
    with numeric_locale(locale_name):
        text = locale.format_string('%%.%df' % fraction_digits, value,
                                    grouping=True)
        point = locale.localeconv()['decimal_point']
    if fraction_digits > 0 and point in text:
        text = text.rstrip('0').rstrip(point)
    if text in ('-0', '-0' + point):
        text = '0'
    return text
