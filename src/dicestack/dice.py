"""
Die groups: a homogeneous set of dice rolled together.

A group owns one slot per die. Slots keep their value, whether they count
towards the result, and the marks that modifiers left on them. The marks are
shown beside each value in the group's display:

    d -- Dropped by a keep/drop modifier.
    r -- Rerolled.
    ! -- Part of an explosion chain.
    * -- Counted as a success.
    - -- Counted as a failure (negated to -1).

Modifiers (applied on every roll, always in this order):
    kh[N=1] / kl[N=1] -- Keep the N highest/lowest dice, drop the rest.
    r[N=1]            -- Reroll dice matching the trigger (default: minimum
                         face) up to N times.
    ![N=1]            -- Explode dice matching the trigger (default: maximum
                         face), adding up to N new dice per exploding die.
    !![N=1]           -- Like !, but new rolls are added into the die that
                         exploded instead of becoming new dice.

Success conditions given on the dice lexeme turn the group into a success
pool: passing dice count as 1, failing dice are dropped, and dice matching a
negate condition count as -1.
"""
import logging
import numbers
from collections import namedtuple

from dicestack import notation
from dicestack import rng
from dicestack.conditions import Condition, check_condition
from dicestack.conditions import coerce_conditions
from dicestack.errors import ModifiersNotAllowed
from dicestack.lexemes import Lexeme, DICE, STUNT

logger = logging.getLogger('dicestack.dice')

Modifier = namedtuple('Modifier', 'data conditions')


class Rollable(object):
    """
    Anything the stack roller can push, roll and read a result from.
    """
    lexeme = None

    def roll(self):
        raise NotImplementedError()

    @property
    def result(self):
        raise NotImplementedError()

    @property
    def display(self):
        raise NotImplementedError()

    @property
    def stunt_points(self):
        """
        Stunt points generated by the latest roll, or None.
        """
        return None


class DieSlot(object):
    """
    One die within a group.
    """
    __slots__ = ('value', 'display', 'usable', 'modifiers')

    def __init__(self, value):
        self.value = value
        self.display = str(value)
        self.usable = True
        self.modifiers = []

    def set_value(self, value):
        self.value = value
        self.display = str(value)

    def mark(self, tag):
        if tag not in self.modifiers:
            self.modifiers.append(tag)

    def drop(self):
        self.usable = False
        self.mark('d')

    @property
    def text(self):
        return self.display + ''.join(self.modifiers)

    def __repr__(self):
        return "DieSlot(%s%s)" % (self.text, '' if self.usable else ', unused')


class DieGroup(Rollable):
    """
    A group of identical dice, or a static literal number.

    :ivar dice: The notation this group was built from.
    :ivar rolls: How many dice the group rolls.
    :ivar faces: The inclusive face range of each die.
    :ivar slots: The current dice, in display order.
    :ivar modifiers: Modifier kind mapped to its Modifier.
    :ivar conditions: Success conditions.
    """
    static = False
    value = None

    mod_funcs = {
        'kh': lambda g, m: g.keep_high(m.data),
        'kl': lambda g, m: g.keep_low(m.data),
        'r': lambda g, m: g.reroll(m.data, m.conditions),
        '!': lambda g, m: g.explode(m.data, m.conditions),
        '!!': lambda g, m: g.explode_and_combine(m.data, m.conditions),
    }
    mod_order = ('kh', 'kl', 'r', '!', '!!')

    def __init__(self, dice, lexeme=None, source=None):
        """
        :param dice: Die group notation, or a number for a static literal.
        :param lexeme: The lexeme this group was built from.
        :type lexeme: dicestack.lexemes.Lexeme
        :param source: Where random draws come from.
        :type source: dicestack.rng.RandomSource

        :raises: dicestack.errors.InvalidDiceNotation
        """
        self.source = source or rng.default_source
        self.modifiers = {}
        if isinstance(dice, numbers.Number):
            self._init_static(dice)
            self.dice = str(self.value)
        else:
            parsed = notation.parse(dice)
            self.dice = parsed.text
            if parsed.static:
                self._init_static(parsed.literal)
            else:
                self.rolls = parsed.count
                self.faces = parsed.faces
        self.lexeme = lexeme or Lexeme(DICE, str(dice))
        self.conditions = [] if self.static else list(self.lexeme.conditions)
        self.slots = [DieSlot(n) for n in self._roll()]

    def _init_static(self, value):
        if isinstance(value, float) and value.is_integer():
            value = int(value)
        self.static = True
        self.value = value
        self.rolls = 1
        self.faces = notation.Faces(value, value)

    def __repr__(self):
        return "%s(%r)" % (self.__class__.__name__, self.dice)

    @property
    def result(self):
        if self.static:
            return self.value
        return sum(s.value for s in self.slots if s.usable)

    @property
    def display(self):
        if self.static:
            return str(self.value)
        return "[%s]" % ', '.join(s.text for s in self.slots)

    def _check_modifiers_allowed(self):
        if self.static:
            raise ModifiersNotAllowed()

    def _draw(self):
        return self.source.between(self.faces.min, self.faces.max)

    def _roll(self):
        if self.static:
            return [self.value]
        return [self._draw() for _ in range(self.rolls)]

    def roll(self):
        """
        Roll every die fresh and re-apply attached modifiers and conditions.

        :return: The values drawn, before any modifier touched them.
        :rtype: list
        """
        rolls = self._roll()
        self.slots = [DieSlot(n) for n in rolls]
        if self.static:
            return rolls
        for kind in self.mod_order:
            if kind in self.modifiers:
                self.mod_funcs[kind](self, self.modifiers[kind])
        if self.conditions:
            self.apply_conditions()
        logger.debug("Rolled %s: %s", self.dice, self.display)
        return rolls

    def set_modifier(self, kind, data=1, conditions=()):
        """
        Attach a modifier to be applied on every roll. A modifier of a kind
        the group already has replaces it.

        :raises: ModifiersNotAllowed
        """
        self._check_modifiers_allowed()
        if kind not in self.mod_funcs:
            raise ValueError("Unknown modifier: %r" % kind)
        self.modifiers[kind] = Modifier(data, coerce_conditions(conditions))

    def keep_high(self, keep=1):
        self._check_modifiers_allowed()
        ranked = sorted(self.slots, key=lambda s: s.value, reverse=True)
        for slot in ranked[max(keep, 0):]:
            slot.drop()

    def keep_low(self, keep=1):
        self._check_modifiers_allowed()
        # Ties rank from the right, so keep_low(n) keeps exactly the dice
        # keep_high(len(slots) - n) drops.
        ranked = sorted(reversed(self.slots), key=lambda s: s.value)
        for slot in ranked[max(keep, 0):]:
            slot.drop()

    def _triggered(self, conditions):
        return [s for s in self.slots if check_condition(s.value, conditions)]

    def reroll(self, times=1, conditions=()):
        """
        Reroll dice matching the conditions (default: the lowest face).

        The dice matching before the first pass are rerolled together, all of
        them on every pass, for as long as any of them still matches.
        """
        self._check_modifiers_allowed()
        conditions = (coerce_conditions(conditions)
                      or [Condition('=', self.faces.min)])
        selected = self._triggered(conditions)
        passes = 0
        while passes < times and any(check_condition(s.value, conditions)
                                     for s in selected):
            passes += 1
            for slot in selected:
                slot.mark('r')
                slot.set_value(self._draw())

    def explode(self, times=1, conditions=()):
        """
        Add a new die after each die matching the conditions (default: the
        highest face), and keep adding while the newest die matches.
        """
        self._check_modifiers_allowed()
        conditions = (coerce_conditions(conditions)
                      or [Condition('=', self.faces.max)])
        for slot in self._triggered(conditions):
            position = self.slots.index(slot)
            value = slot.value
            inserted = 0
            while inserted < times and check_condition(value, conditions):
                self.slots[position + inserted].mark('!')
                value = self._draw()
                self.slots.insert(position + inserted + 1, DieSlot(value))
                inserted += 1
            if inserted:
                self.slots[position + inserted].mark('!')

    def explode_and_combine(self, times=1, conditions=()):
        """
        Like explode(), but every new roll is added into the die that
        exploded rather than becoming a die of its own.
        """
        self._check_modifiers_allowed()
        conditions = (coerce_conditions(conditions)
                      or [Condition('=', self.faces.max)])
        for slot in self._triggered(conditions):
            value = self._draw()
            draws = 1
            slot.mark('!')
            slot.set_value(slot.value + value)
            while draws < times and check_condition(value, conditions):
                value = self._draw()
                draws += 1
                slot.set_value(slot.value + value)

    def apply_conditions(self, conditions=None):
        """
        Count successes: dice passing the conditions count as 1, the rest stop
        counting. A die equal to a negate condition's comparer counts as -1.
        Each die still displays the face it rolled.
        """
        self._check_modifiers_allowed()
        if conditions is not None:
            self.conditions = coerce_conditions(conditions)
        negate = None
        for c in self.conditions:
            if c.negates:
                negate = c
                break
        for slot in self.slots:
            if negate is not None and slot.value == negate.comparer:
                slot.value = -1
                slot.mark('-')
                continue
            if check_condition(slot.value, self.conditions):
                slot.mark('*')
                slot.value = 1
            else:
                slot.usable = False


class StuntGroup(DieGroup):
    """
    A stunt roll: always 3d6, whatever its notation says. Doubles on any two
    dice generate stunt points equal to the first die.
    """
    def __init__(self, dice, lexeme=None, source=None):
        lexeme = lexeme or Lexeme(STUNT, dice)
        super(StuntGroup, self).__init__('3d6', lexeme, source)
        self.dice = dice

    @property
    def doubles(self):
        return len(set(s.value if s.usable else 0 for s in self.slots)) < 3

    @property
    def stunt_points(self):
        if self.doubles:
            return self.slots[0].value
        return None

    @property
    def display(self):
        texts = [s.text for s in self.slots]
        if texts and self.doubles:
            texts[0] = "%sS" % self.slots[0].value
        return "[%s]" % ', '.join(texts)
