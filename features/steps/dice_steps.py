from behave import when, then

from dicestack.dice import DieGroup, StuntGroup
from dicestack.lexemes import Lexeme, DICE, STUNT
from dicestack.rng import RandomSource

from helpers import parse_values, parse_conditions, assert_number, attempt


def build_group(context, cls, notation, lexeme=None):
    context.group = attempt(context, cls, notation, lexeme, context.source)


@when('I build the group "{notation}"')
def build(context, notation):
    build_group(context, DieGroup, notation)


@when('I try to build the group "{notation}"')
def try_build(context, notation):
    build_group(context, DieGroup, notation)


@when('I build the success pool "{notation}" on "{conditions}"')
def build_counting(context, notation, conditions):
    lexeme = Lexeme(DICE, notation, conditions=parse_conditions(conditions))
    build_group(context, DieGroup, notation, lexeme)


@when('I build the stunt group "{notation}"')
def build_stunt(context, notation):
    build_group(context, StuntGroup, notation, Lexeme(STUNT, notation))


@when('I keep the highest {n:d}')
@when('I try to keep the highest {n:d}')
def keep_highest(context, n):
    attempt(context, context.group.keep_high, n)


@when('I keep the lowest {n:d}')
def keep_lowest(context, n):
    attempt(context, context.group.keep_low, n)


@when('I reroll up to {n:d} times')
@when('I try to reroll up to {n:d} times')
def reroll(context, n):
    attempt(context, context.group.reroll, n)


@when('I reroll up to {n:d} times on "{conditions}"')
def reroll_on(context, n, conditions):
    attempt(context, context.group.reroll, n, parse_conditions(conditions))


@when('I explode up to {n:d} times')
@when('I try to explode up to {n:d} times')
def explode(context, n):
    attempt(context, context.group.explode, n)


@when('I explode up to {n:d} times on "{conditions}"')
def explode_on(context, n, conditions):
    attempt(context, context.group.explode, n, parse_conditions(conditions))


@when('I explode and combine up to {n:d} times')
def explode_combine(context, n):
    attempt(context, context.group.explode_and_combine, n)


@when('I explode and combine up to {n:d} times on "{conditions}"')
def explode_combine_on(context, n, conditions):
    attempt(context, context.group.explode_and_combine, n,
            parse_conditions(conditions))


@when('I count successes')
@when('I try to count successes')
def count_successes(context):
    attempt(context, context.group.apply_conditions)


@when('I count successes on "{conditions}"')
def count_successes_on(context, conditions):
    attempt(context, context.group.apply_conditions,
            parse_conditions(conditions))


@when('I attach the modifier "{kind}" with {n:d}')
@when('I try to attach the modifier "{kind}" with {n:d}')
def attach_modifier(context, kind, n):
    attempt(context, context.group.set_modifier, kind, n)


@when('I roll the group')
def roll_group(context):
    context.raw_roll = context.group.roll()


@then('the result should be {value}')
def result_should_be(context, value):
    assert_number(context.group.result, value)


@then('the display should be "{text}"')
def display_should_be(context, text):
    assert context.group.display == text, \
        "Display is %r, expected %r" % (context.group.display, text)


@then('the group should have {n:d} dice')
def group_size(context, n):
    assert len(context.group.slots) == n, \
        "Group has %d dice, expected %d" % (len(context.group.slots), n)


@then('the group should roll {n:d} dice from {low} to {high}')
def group_shape(context, n, low, high):
    group = context.group
    assert group.rolls == n, "Rolls %d dice" % group.rolls
    assert group.faces.min == int(low), "Minimum face %r" % group.faces.min
    assert group.faces.max == int(high), "Maximum face %r" % group.faces.max


@then('the group should be static')
def group_static(context):
    assert context.group.static


@then('the roll should have returned {values}')
def roll_returned(context, values):
    assert context.raw_roll == parse_values(values), \
        "Roll returned %r" % context.raw_roll


@then('the group should show doubles')
def shows_doubles(context):
    assert context.group.doubles


@then('the group should not show doubles')
def no_doubles(context):
    assert not context.group.doubles


@then('the stunt points should be {n:d}')
def stunt_points(context, n):
    assert context.group.stunt_points == n, \
        "Stunt points: %r" % context.group.stunt_points


@then('there should be no stunt points')
def no_stunt_points(context):
    assert context.group.stunt_points is None


@when('I build the group "{notation}" with real dice')
def build_random(context, notation):
    context.group = DieGroup(notation, source=RandomSource(seed=notation))
    context.group.roll()


@then('every die should be between {low:d} and {high:d}')
def dice_between(context, low, high):
    for slot in context.group.slots:
        assert low <= slot.value <= high, "Rolled %r" % slot.value
