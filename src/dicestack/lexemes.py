"""
Tokens handed to the stack roller by a lexer.

Each lexeme carries its type, the text it was lexed from, a payload and any
conditions written after it. Lexemes arrive in postfix order: operators
follow their operands and modifier lexemes directly follow the dice lexeme
they decorate.

Types:
    dice            -- Die group notation; data is the notation text.
    stunt           -- Stunt roll (3d6 with doubles); data is unused.
    + - * / ^ math  -- Arithmetic; data is the operator symbol.
    kh kl dh dl     -- Keep/drop highest/lowest; data is the count.
    ! !! r          -- Explode, explode-and-combine, reroll; data is the
                       maximum number of times, conditions are the triggers.
"""
from dicestack.conditions import coerce_conditions

DICE = 'dice'
STUNT = 'stunt'
MATH = 'math'

OPERATOR_TYPES = ('+', '-', '*', '/', '^', MATH)
KEEP_TYPES = ('kh', 'kl', 'dh', 'dl')
REPEAT_TYPES = ('!', '!!', 'r')


class Lexeme(object):
    __slots__ = ('type', 'original', 'data', 'conditions')

    def __init__(self, type, original, data=None, conditions=()):
        self.type = type
        self.original = original
        self.data = data
        self.conditions = coerce_conditions(conditions)

    @classmethod
    def from_dict(cls, data):
        return cls(data['type'], data['original'], data.get('data'),
                   data.get('conditionals', data.get('conditions', ())))

    @property
    def is_operator(self):
        return self.type in OPERATOR_TYPES

    def __repr__(self):
        if self.conditions:
            return "Lexeme(%r, %r, %r, %r)" % (self.type, self.original,
                                               self.data, self.conditions)
        return "Lexeme(%r, %r, %r)" % (self.type, self.original, self.data)


def lexemes_from_dicts(items):
    """
    Build lexemes from plain dicts, such as those a lexer serialized to JSON.

    :rtype: list of Lexeme
    """
    return [i if isinstance(i, Lexeme) else Lexeme.from_dict(i)
            for i in items]
