"""
IronCAT: cellular automata for terminals

Simulates two-dimensional B/S rule automata on a toroidal grid and animates
them in the terminal, redrawing only the cells that changed.
"""

from .core import (
    IronCatError,
    InvalidRuleSyntax,
    InvalidRuleDigit,
    InvalidDimensions,
    RuleSet,
    parse_rule,
    Grid,
    StepEngine,
)
from .render import FrameDiffer, AnsiTerminal
from .loop import AnimationLoop, LoopState
from .config import SimulationConfig

__version__ = "1.0.0"

__all__ = [
    'IronCatError',
    'InvalidRuleSyntax',
    'InvalidRuleDigit',
    'InvalidDimensions',
    'RuleSet',
    'parse_rule',
    'Grid',
    'StepEngine',
    'FrameDiffer',
    'AnsiTerminal',
    'AnimationLoop',
    'LoopState',
    'SimulationConfig',
]
