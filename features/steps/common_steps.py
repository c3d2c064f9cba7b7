from behave import step, then

from helpers import parse_values


@step('the dice will roll {values}')
def dice_will_roll(context, values):
    context.source.extend(parse_values(values))


@then('the source should have drawn {n:d} dice')
def source_drew(context, n):
    assert context.source.draws == n, \
        "Drew %d dice, expected %d" % (context.source.draws, n)


@then('the error should be {name}')
def error_should_be(context, name):
    assert context.error is not None, "No error was raised"
    assert type(context.error).__name__ == name, \
        "Expected %s, got %r" % (name, context.error)


@then('there should be no error')
def no_error(context):
    assert context.error is None, "Unexpected error: %r" % context.error


@then('a warning should have been logged containing "{text}"')
def warning_logged(context, text):
    messages = context.log_handler.messages()
    assert any(text in m for m in messages), \
        "%r not in warnings %r" % (text, messages)


@then('no warning should have been logged')
def no_warning_logged(context):
    messages = context.log_handler.messages()
    assert not messages, "Unexpected warnings: %r" % messages
