"""
Evaluation of lexed tabletop dice expressions.

    >>> from dicestack import StackRoller, Lexeme
    >>> roller = StackRoller('2d20 + 5', [Lexeme('dice', '2d20'),
    ...                                   Lexeme('dice', '5'),
    ...                                   Lexeme('+', '+')])
    >>> roller.roll()  # doctest: +SKIP
    27
"""
from dicestack.conditions import Condition
from dicestack.dice import DieGroup, StuntGroup
from dicestack.errors import Error, InvalidDiceNotation, ModifiersNotAllowed
from dicestack.errors import MalformedTokenSequence
from dicestack.lexemes import Lexeme
from dicestack.rng import RandomSource, SequenceSource
from dicestack.stack import StackRoller, roll

__version__ = '0.1.0'
