"""
Stack-based evaluation of lexed dice expressions.

The roller walks the lexemes left to right. Dice lexemes create die groups
(once; later rolls reuse them) and push them on the evaluation stack. Modifier
lexemes attach to the most recently created group. Operator lexemes pop two
entries, roll both, and push a static group holding the combined value. The
last entry left on the stack is rolled for the final result.

Example, "4d6kh3 + 2" lexed as:
    dice(4d6) kh(3) dice(2) +
"""
import logging
import math
import operator

from twisted.internet import defer

from dicestack import rng
from dicestack.config import config as default_config
from dicestack.dice import DieGroup, StuntGroup
from dicestack.errors import MalformedTokenSequence, ModifiersNotAllowed
from dicestack.events import HasSubscribableEvents, NewResult
from dicestack.formatting import format_number, to_float
from dicestack.lexemes import DICE, STUNT, KEEP_TYPES, REPEAT_TYPES
from dicestack.lexemes import lexemes_from_dicts

logger = logging.getLogger('dicestack.stack')

RESULT_TYPE = 'dice'


def divide(a, b):
    if b == 0:
        if a == 0 or math.isnan(a):
            return math.nan
        return math.copysign(math.inf, a) * math.copysign(1.0, b)
    return a / b


def power(a, b):
    try:
        return math.pow(a, b)
    except OverflowError:
        if a < 0 and float(b).is_integer() and b % 2:
            return -math.inf
        return math.inf
    except ValueError:
        # Zero to a negative power, or a negative base to a fractional one.
        return math.inf if a == 0 else math.nan


class StackRoller(HasSubscribableEvents):
    """
    Evaluates one lexed dice expression, as many times as asked.

    :ivar original: The expression text the lexemes came from.
    :ivar lexemes: The lexemes, in postfix order.
    :ivar dice: Die groups created so far, in creation order.
    :ivar stack: The evaluation stack during a roll.
    :ivar result: The latest result, or None before the first roll.
    :ivar stunted: Stunt point annotation for the latest roll, if any.
    """
    operators = {
        '+': operator.add,
        '-': operator.sub,
        '*': operator.mul,
        '/': divide,
        '^': power,
    }

    group_classes = {
        DICE: DieGroup,
        STUNT: StuntGroup,
    }

    def __init__(self, original, lexemes, source=None, config=None):
        """
        :param original: The expression text.
        :param lexemes: Lexeme instances, or dicts in the lexer's format.
        :param source: Random source handed to every die group created.
        :type source: dicestack.rng.RandomSource
        :param config: Configuration to format results with.
        :type config: dicestack.config.Config
        """
        self.original = original
        self.lexemes = lexemes_from_dicts(lexemes)
        self.source = source or rng.default_source
        self.config = config or default_config
        self.dice = []
        self.stack = []
        self.result = None
        self.stunted = ''
        self._tooltip = None

    def __repr__(self):
        return "StackRoller(%r)" % self.original

    def __str__(self):
        return "%s = %s" % (self.original, self.text)

    @property
    def tooltip(self):
        if self._tooltip:
            return self._tooltip
        text = self.original
        for group in self.dice:
            text = text.replace(group.lexeme.original, group.display, 1)
        return "%s\n%s" % (self.original, text)

    @property
    def inline_text(self):
        return "%s -> " % self.original

    @property
    def text(self):
        return self.format_result()

    def format_result(self):
        """
        The result as it should be displayed: a locale-formatted number,
        optionally preceded by the expression and followed by any stunt
        point annotation.
        """
        display = self.config['display']
        result = format_number(self.result,
                               display.getint('fraction digits'),
                               display.get('locale'))
        if display.getboolean('inline'):
            result = self.inline_text + result
        return result + self.stunted

    def roll(self):
        """
        Evaluate the expression with fresh dice.

        :raises: dicestack.errors.InvalidDiceNotation
        :raises: dicestack.errors.MalformedTokenSequence

        :return: The result.
        """
        index = 0
        self.stunted = ''
        self.stack = []
        for lexeme in self.lexemes:
            if lexeme.is_operator:
                self._apply_operator(lexeme)
            elif lexeme.type in KEEP_TYPES or lexeme.type in REPEAT_TYPES:
                self._attach_modifier(lexeme, index)
            elif lexeme.type in self.group_classes:
                if index >= len(self.dice):
                    self.dice.append(self._create_group(lexeme))
                self.stack.append(self.dice[index])
                index += 1
            else:
                logger.warning("Ignoring lexeme of unknown type %r in %r",
                               lexeme.type, self.original)

        if not self.stack:
            raise MalformedTokenSequence("Nothing to roll in %r"
                                         % self.original)
        final = self.stack.pop()
        if self.stack:
            logger.warning("%d operands left unused in %r",
                           len(self.stack), self.original)
            self.stack = []
        final.roll()
        self._note_stunt(final)
        self.result = final.result
        self._tooltip = None

        self.trigger_event(NewResult, result=self.result,
                           tooltip=self.tooltip)
        return self.result

    def roll_deferred(self):
        """
        Roll for a host that schedules its work through Twisted.

        :rtype: twisted.internet.defer.Deferred
        """
        return defer.maybeDeferred(self.roll)

    def _create_group(self, lexeme):
        cls = self.group_classes[lexeme.type]
        if lexeme.type == STUNT or lexeme.data is None:
            return cls(lexeme.original, lexeme, self.source)
        return cls(lexeme.data, lexeme, self.source)

    def _note_stunt(self, entry):
        points = entry.stunt_points
        if points is not None:
            self.stunted = " - %s %s" % (points,
                                         self.config['display']['stunt label'])

    def _apply_operator(self, lexeme):
        b = self.stack.pop() if self.stack else None
        a = self.stack.pop() if self.stack else None
        if a is None:
            if b is not None:
                self.stack.append(b)
            logger.warning("Operator %r in %r lacks an operand",
                           lexeme.original, self.original)
            return
        op = lexeme.data if lexeme.data in self.operators else lexeme.type
        if op not in self.operators:
            raise MalformedTokenSequence("Unknown operator %r" % op)
        b.roll()
        self._note_stunt(b)
        a.roll()
        self._note_stunt(a)
        result = self.operators[op](to_float(a.result), to_float(b.result))
        self.stack.append(DieGroup(result, lexeme, self.source))

    def _attach_modifier(self, lexeme, index):
        if not index:
            raise MalformedTokenSequence("Modifier %r has no dice to modify"
                                         % lexeme.original)
        group = self.dice[index - 1]
        kind = lexeme.type
        data = _magnitude(lexeme.data)
        conditions = ()
        if kind == 'dl':
            kind, data = 'kh', len(group.slots) - data
        elif kind == 'dh':
            kind, data = 'kl', len(group.slots) - data
        elif kind in REPEAT_TYPES:
            data = data or 1
            conditions = lexeme.conditions
        try:
            group.set_modifier(kind, data, conditions)
        except ModifiersNotAllowed as e:
            logger.warning("%s (%r in %r)", e, lexeme.original,
                           self.original)

    def to_result(self):
        """
        A snapshot of the latest result, for redisplay without rolling.

        :rtype: dict
        """
        return {
            'type': RESULT_TYPE,
            'result': self.result,
            'tooltip': self.tooltip,
        }

    def apply_result(self, result):
        """
        Restore a snapshot produced by to_result(). Snapshots of another type
        are ignored.
        """
        if result.get('type') != RESULT_TYPE:
            return
        if result.get('result') is not None:
            self.result = result['result']
        if result.get('tooltip'):
            self._tooltip = result['tooltip']
        self.trigger_event(NewResult, result=self.result,
                           tooltip=self.tooltip, restored=True)


def _magnitude(data):
    if data is None or data == '':
        return 1
    return int(data)


def roll(original, lexemes, source=None):
    """
    Roll a lexed expression once and return its result.
    """
    return StackRoller(original, lexemes, source=source).roll()
