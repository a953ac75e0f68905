"""ANSI terminal writer.

Takes (row, column, glyph) triples and turns them into cursor-positioning
escape sequences. Runs of adjacent cells on one row share a single cursor
move. Raw mode and the alternate screen are left to the caller.
"""

import sys
from typing import IO, Iterable, Optional, Tuple

ESC = "\x1b["
CLEAR_SCREEN = ESC + "2J"
CURSOR_HOME = ESC + "H"

DEAD_GLYPH = "░░"
ALIVE_GLYPH = "▓▓"

Cell = Tuple[int, int, str]


class AnsiTerminal:
    """Writes cells to a text stream using ANSI cursor positioning.

    Attributes:
        stream: Output text stream (stdout by default)
        cell_width: Terminal columns occupied by one cell's glyph
    """

    def __init__(self, stream: Optional[IO[str]] = None, cell_width: int = 2):
        if cell_width < 1:
            raise ValueError("Cell width must be positive")
        self.stream = stream if stream is not None else sys.stdout
        self.cell_width = cell_width

    def move_to(self, row: int, column: int) -> str:
        """Escape sequence placing the cursor on a grid cell (0-based)."""
        return f"{ESC}{row + 1};{column * self.cell_width + 1}H"

    def write_cells(self, cells: Iterable[Cell]) -> int:
        """Draw cells, coalescing horizontally adjacent ones.

        Args:
            cells: (row, column, glyph) triples

        Returns:
            Number of cells written
        """
        out = []
        written = 0
        cursor = None
        for row, column, glyph in cells:
            if cursor != (row, column):
                out.append(self.move_to(row, column))
            out.append(glyph)
            cursor = (row, column + 1)
            written += 1

        if out:
            self.stream.write("".join(out))
        return written

    def clear(self) -> None:
        """Erase the screen and home the cursor."""
        self.stream.write(CLEAR_SCREEN + CURSOR_HOME)

    def finish(self, height: int) -> None:
        """Park the cursor on the line below a grid of ``height`` rows."""
        self.stream.write(f"{ESC}{height + 1};1H\n")
        self.flush()

    def flush(self) -> None:
        self.stream.flush()
