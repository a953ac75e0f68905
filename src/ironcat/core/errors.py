"""Startup errors for rule parsing and grid construction.

All of these are raised before the first frame is drawn. Once a RuleSet and
a Grid exist, stepping and rendering cannot fail.
"""


class IronCatError(Exception):
    """Base class for all ironcat errors."""


class InvalidRuleSyntax(IronCatError, ValueError):
    """Rule string does not have the B<digits>/S<digits> shape."""

    def __init__(self, rule_string: object):
        self.rule_string = rule_string
        super().__init__(f"Invalid rulestring {rule_string!r}: expected B<digits>/S<digits>")


class InvalidRuleDigit(IronCatError, ValueError):
    """A neighbor count outside 0-8 appeared in a rule."""

    def __init__(self, char: object):
        self.char = char
        super().__init__(f"Invalid value {char!r} in rulestring: counts must be 0-8")


class InvalidDimensions(IronCatError, ValueError):
    """Grid width or height is not a positive integer."""

    def __init__(self, width: object, height: object):
        self.width = width
        self.height = height
        super().__init__(f"Grid dimensions must be positive, got {width}x{height}")
