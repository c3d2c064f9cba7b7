"""
Errors raised while building and evaluating dice expressions.
"""


class Error(Exception):
    def __init__(self, msg=""):
        super(Error, self).__init__(msg)
        self.message = msg

    def __str__(self):
        return str(self.message)


class InvalidDiceNotation(Error):
    """
    The text handed to a die group could not be parsed.
    """
    def __init__(self, notation=None, msg=None):
        self.notation = notation
        if msg is None:
            msg = "Non parseable dice string: %r" % (notation,)
        super(InvalidDiceNotation, self).__init__(msg)


class ModifiersNotAllowed(Error):
    """
    A modifier or condition was applied to a static literal.
    """
    def __init__(self, msg="Modifiers are only allowed on dice rolls."):
        super(ModifiersNotAllowed, self).__init__(msg)


class MalformedTokenSequence(Error):
    pass
