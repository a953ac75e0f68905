"""Rendering: frame diffing and ANSI output."""

from .differ import FrameDiffer
from .terminal import AnsiTerminal, ALIVE_GLYPH, DEAD_GLYPH

__all__ = [
    'FrameDiffer',
    'AnsiTerminal',
    'ALIVE_GLYPH',
    'DEAD_GLYPH',
]
