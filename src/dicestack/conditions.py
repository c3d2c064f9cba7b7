"""
Comparison conditions attached to dice.

A condition pairs an operator with a number to compare against. Conditions are
used as triggers for rerolls and explosions, and as the success test when a
group counts successes. A list of conditions is satisfied when any one of its
members is (logical OR).

Operators:
    =       equal
    != =!   not equal
    <  <=   less than (or equal)
    >  >=   greater than (or equal)
    -= =-   negate (success counting only; never matches here)
"""
import math
import operator

#: Returned by check_condition() when there is nothing to check against.
NO_CONDITIONS = None

NEGATE_OPERATORS = ('-=', '=-')

operators = {
    '=': operator.eq,
    '!=': operator.ne,
    '=!': operator.ne,
    '<': operator.lt,
    '<=': operator.le,
    '>': operator.gt,
    '>=': operator.ge,
}


def _is_nan(value):
    try:
        return math.isnan(value)
    except TypeError:
        return True


class Condition(object):
    """
    A single comparison, such as ">= 5".
    """
    __slots__ = ('operator', 'comparer')

    def __init__(self, operator, comparer):
        self.operator = operator
        self.comparer = comparer

    @classmethod
    def from_dict(cls, data):
        return cls(data['operator'], data['comparer'])

    @property
    def negates(self):
        return self.operator in NEGATE_OPERATORS

    def matches(self, value):
        if _is_nan(value) or _is_nan(self.comparer):
            return False
        func = operators.get(self.operator)
        if func is None:
            return False
        return func(value, self.comparer)

    def __eq__(self, other):
        if isinstance(other, Condition):
            return (self.operator == other.operator
                    and self.comparer == other.comparer)
        return NotImplemented

    def __hash__(self):
        return hash((self.operator, self.comparer))

    def __repr__(self):
        return "Condition(%r, %r)" % (self.operator, self.comparer)

    def __str__(self):
        return "%s%s" % (self.operator, self.comparer)


def coerce_conditions(conditions):
    """
    Accept conditions as Condition instances, (operator, comparer) pairs or
    dicts with 'operator' and 'comparer' keys.

    :rtype: list of Condition
    """
    coerced = []
    for c in conditions or ():
        if isinstance(c, Condition):
            coerced.append(c)
        elif isinstance(c, dict):
            coerced.append(Condition.from_dict(c))
        else:
            coerced.append(Condition(*c))
    return coerced


def check_condition(value, conditions):
    """
    Test a value against a list of conditions.

    :param value: The number to test.
    :param conditions: The conditions, any one of which must match.
    :type conditions: list of Condition

    :return: NO_CONDITIONS if the list is empty, otherwise whether any
        condition matched.
    """
    if not conditions:
        return NO_CONDITIONS
    # Evaluate every condition; a NaN comparison only voids itself.
    return any([c.matches(value) for c in conditions])
