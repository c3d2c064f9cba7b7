import logging
import os

from behave import given, when, then
from twisted.python import log as twisted_log

from dicestack import logs
from dicestack.formatting import format_number

from helpers import parse_number


@then('the number {value} should format as "{text}"')
def number_formats(context, value, text):
    formatted = format_number(parse_number(value))
    assert formatted == text, "Formatted as %r" % formatted


@then('the number {value} should format with {digits:d} digits as "{text}"')
def number_formats_digits(context, value, digits, text):
    formatted = format_number(parse_number(value), digits)
    assert formatted == text, "Formatted as %r" % formatted


@given('a config file "{name}" containing')
def config_file(context, name):
    path = os.path.join(context.tmpdir, name)
    with open(path, 'w') as f:
        f.write(context.text)


@when('I load the config file "{name}"')
def load_config(context, name):
    context.loaded = context.dice_config.load(
        os.path.join(context.tmpdir, name))


@then('the display option "{option}" should be "{value}"')
def display_option_is(context, option, value):
    actual = context.dice_config.section('display')[option]
    assert actual == value, "%s is %r" % (option, actual)


@then('the display option "{option}" should default to "{value}"')
def display_option_default(context, option, value):
    actual = context.dice_config.getdefault('display', option, default=value)
    assert actual == value, "%s is %r" % (option, actual)


@given('logging is opened to the file "{name}"')
def open_log(context, name):
    context.log_path = os.path.join(context.tmpdir, name)
    context.file_handler = logs.open_log(context.log_path,
                                         level=logging.DEBUG)


@when('I close the log')
def close_log(context):
    logs.close_log(context.file_handler)


@then('the log file should contain "{text}"')
def log_contains(context, text):
    with open(context.log_path) as f:
        contents = f.read()
    assert text in contents, "%r not in log: %r" % (text, contents)


@when('Twisted logs "{text}"')
def twisted_logs(context, text):
    twisted_log.msg(text)


@when('I reset the configuration')
def reset_config(context):
    context.dice_config.reset()


@then('the config file should have been read')
def config_read(context):
    assert len(context.loaded) == 1, "Read %r" % context.loaded
