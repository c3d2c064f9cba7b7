import json

from behave import given, when, then

from dicestack.events import EventResponder, NewResult, event_handler
from dicestack.lexemes import Lexeme
from dicestack.stack import StackRoller, roll

from helpers import parse_conditions, assert_number, attempt


def new_roller(context):
    return StackRoller(context.expression, context.lexemes,
                       source=context.source, config=context.dice_config)


@given('the expression "{text}" lexed as')
def expression_lexed(context, text):
    lexemes = []
    for row in context.table or ():
        data = row.get('data', '') or None
        conditions = parse_conditions(row.get('conditions', ''))
        lexemes.append(Lexeme(row['type'], row['original'], data,
                              conditions))
    context.expression = text
    context.lexemes = lexemes
    context.roller = new_roller(context)


@given('the expression "{text}" lexed from JSON')
def expression_json(context, text):
    context.expression = text
    context.lexemes = json.loads(context.text)
    context.roller = new_roller(context)


@given('the expression "{text}" with no lexemes')
def expression_empty(context, text):
    context.expression = text
    context.lexemes = []
    context.roller = new_roller(context)


@given('I am listening for results')
def listening(context):
    context.roller.subscribe_to_event(NewResult, context.events.append)


@given('the display option "{option}" is "{value}"')
def display_option(context, option, value):
    context.dice_config.set('display', option, value)


@when('I roll the expression')
@when('I roll the expression again')
def roll_expression(context):
    context.roller.roll()


@when('I try to roll the expression')
def try_roll_expression(context):
    attempt(context, context.roller.roll)


@when('I roll the expression through a deferred')
def roll_deferred(context):
    context.deferred_results = []
    d = context.roller.roll_deferred()
    d.addCallback(context.deferred_results.append)


@when('I take a snapshot')
def take_snapshot(context):
    context.snapshot = context.roller.to_result()
    context.draws_at_snapshot = context.source.draws


@when('I restore the snapshot into a fresh roller')
def restore_snapshot(context):
    context.fresh = new_roller(context)
    context.fresh.apply_result(context.snapshot)


@when('I restore a "{kind}" snapshot into a fresh roller')
def restore_other_snapshot(context, kind):
    context.fresh = new_roller(context)
    context.fresh.apply_result({'type': kind, 'result': 99,
                                'tooltip': 'elsewhere'})


@then('the expression result should be {value}')
def expression_result(context, value):
    assert_number(context.roller.result, value)


@then('the roller should have no result')
def no_result(context):
    assert context.roller.result is None, \
        "Result is %r" % context.roller.result


@then('the tooltip should read')
def tooltip_reads(context):
    assert context.roller.tooltip == context.text, \
        "Tooltip is %r" % context.roller.tooltip


@then('the displayed result should be "{text}"')
def displayed_result(context, text):
    assert context.roller.text == text, \
        "Displayed %r, expected %r" % (context.roller.text, text)


@then('the roller should have created {n:d} dice groups')
def created_groups(context, n):
    assert len(context.roller.dice) == n, \
        "Created %d groups" % len(context.roller.dice)


@then('the deferred should have fired with {value}')
def deferred_fired(context, value):
    assert len(context.deferred_results) == 1, "Deferred did not fire"
    assert_number(context.deferred_results[0], value)


@then('the fresh roller should match the snapshot')
def fresh_matches(context):
    assert context.fresh.result == context.roller.result
    assert context.fresh.tooltip == context.roller.tooltip, \
        "Restored tooltip %r" % context.fresh.tooltip
    assert context.fresh.to_result() == context.snapshot
    assert context.source.draws == context.draws_at_snapshot, \
        "Restoring drew dice"


@then('the fresh roller should have no result')
def fresh_no_result(context):
    assert context.fresh.result is None
    assert context.fresh.tooltip != 'elsewhere'


@then('I should have heard {n:d} results')
@then('I should have heard {n:d} result')
def heard_results(context, n):
    assert len(context.events) == n, "Heard %d" % len(context.events)


@then('the last result heard should be {value}')
def last_heard(context, value):
    event = context.events[-1]
    assert event.obj is context.roller
    assert_number(event.result, value)
    assert event.tooltip == context.roller.tooltip


class ResultLog(EventResponder):
    def __init__(self):
        self.heard = []

    @event_handler(NewResult)
    def on_result(self, event):
        self.heard.append(event)


@given('a result log is listening')
def result_log(context):
    context.result_log = ResultLog()
    context.roller.subscribe_to_event(NewResult, context.result_log)


@when('I stop listening for results')
def stop_listening(context):
    context.roller.unsubscribe_from_event(NewResult, context.events.append)


@when('I restore the snapshot')
def restore_same(context):
    context.roller.apply_result(context.snapshot)


@then('the result log should have heard {n:d} results')
@then('the result log should have heard {n:d} result')
def result_log_heard(context, n):
    heard = context.result_log.heard
    assert len(heard) == n, "Result log heard %d" % len(heard)


@then('the last result heard should have been restored')
def last_heard_restored(context):
    assert context.events[-1].restored


@then('the last result heard should have been rolled')
def last_heard_rolled(context):
    assert not context.events[-1].restored


@when('I roll the expression in one call')
def roll_one_call(context):
    context.one_call = roll(context.expression, context.lexemes,
                            source=context.source)


@then('the one-call result should be {value}')
def one_call_result(context, value):
    assert_number(context.one_call, value)
