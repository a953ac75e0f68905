"""
IronCAT core: rules, grid state and parallel stepping.

Nothing in here touches the terminal.
"""

from .errors import IronCatError, InvalidRuleSyntax, InvalidRuleDigit, InvalidDimensions
from .rules import RuleSet, parse_rule
from .grid import Grid
from .engine import StepEngine

__all__ = [
    'IronCatError',
    'InvalidRuleSyntax',
    'InvalidRuleDigit',
    'InvalidDimensions',
    'RuleSet',
    'parse_rule',
    'Grid',
    'StepEngine',
]
