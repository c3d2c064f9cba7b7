"""
Parser for the notation of a single die group.

BNF:
       integer ::= ["-"] digit+
         count ::= digit+
        bounds ::= "[" [integer ","] integer "]"
         faces ::= integer | "%" | "F" | bounds
          roll ::= [count] ("d" | "D") [faces]
      notation ::= integer | roll

Face specs:
    N       -- Faces 1 through N. A negative N rolls N through -1.
    %       -- Percentile die, faces 1 through 100.
    F       -- Fudge die, faces -1 through 1.
    [A, B]  -- Faces A through B (bounds given backwards are swapped).

A bare integer is a static literal: it rolls nothing and takes no modifiers.
Whitespace anywhere in the notation is ignored.
"""
from collections import namedtuple

from pyparsing import ParseException

from dicestack.errors import InvalidDiceNotation

Faces = namedtuple('Faces', 'min max')


def _grammar():
    from pyparsing import Regex, Literal, CaselessLiteral, Suppress
    from pyparsing import Optional, StringEnd

    LBRAC, RBRAC, COMMA = map(Suppress, "[],")

    integer = Regex(r'-?\d+')
    integer.set_parse_action(lambda t: int(t[0]))
    count = Regex(r'\d+')
    count.set_parse_action(lambda t: int(t[0]))

    bounds = LBRAC + Optional(integer("min") + COMMA) + integer("max") + RBRAC
    faces = bounds | integer("max") | Literal('%')("max") | Literal('F')("max")

    literal = integer("literal") + StringEnd()
    roll = (Optional(count("count")) + Suppress(CaselessLiteral('d'))
            + Optional(faces) + StringEnd())

    return literal | roll

grammar = _grammar()


class Notation(object):
    """
    The parsed form of a die group's notation.
    """
    static = False
    literal = None
    count = 1
    faces = Faces(1, 1)

    def __init__(self, text, parser=None):
        parser = parser or grammar
        self.raw = text
        self.text = ''.join(text.split())
        try:
            parsed = parser.parse_string(self.text, parse_all=True)
        except ParseException as e:
            raise InvalidDiceNotation(text, "Non parseable dice string %r: %s"
                                      % (text, e))
        if 'literal' in parsed:
            self.static = True
            self.literal = parsed['literal']
        else:
            self.count = parsed.get('count') or 1
            self.faces = self._faces(parsed.get('min'), parsed.get('max'))

    @staticmethod
    def _faces(low, high):
        if high is None:
            high = 1
        if high == '%':
            high = 100
        elif high == 'F':
            low, high = -1, 1
        elif high < 0 and low is None:
            low = -1
        if low is None:
            low = 1
        if high < low:
            low, high = high, low
        return Faces(low, high)

    def __repr__(self):
        return "Notation(%r)" % self.raw

    def __str__(self):
        if self.static:
            return str(self.literal)
        return "%dd[%d,%d]" % (self.count, self.faces.min, self.faces.max)


def parse(text):
    """
    Parse die group notation.

    :param text: Notation such as "4d6", "d%", "3dF", "2d[3, 8]" or "-7".
    :type text: str

    :raises: InvalidDiceNotation
    :rtype: Notation
    """
    return Notation(text)
