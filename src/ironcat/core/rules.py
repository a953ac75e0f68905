"""
Birth/Survival Rules

Parses B/S rulestrings such as "B3/S23" (Conway's Life) or "B36/S23"
(HighLife) into an immutable RuleSet that decides the next state of a cell
from its current state and live neighbor count.
"""

from typing import Dict, FrozenSet, Iterable, Tuple

import numpy as np

from .errors import InvalidRuleDigit, InvalidRuleSyntax

# Moore neighborhood: a cell has at most 8 live neighbors
MAX_NEIGHBORS = 8
VALID_DIGITS = frozenset("012345678")


def _parse_counts(run: str) -> FrozenSet[int]:
    counts = set()
    for char in run:
        if char not in VALID_DIGITS:
            raise InvalidRuleDigit(char)
        counts.add(int(char))
    return frozenset(counts)


class RuleSet:
    """Immutable birth/survival rule.

    Attributes:
        birth: Neighbor counts that bring a dead cell to life
        survive: Neighbor counts that keep a live cell alive
    """

    __slots__ = ("_birth", "_survive")

    def __init__(self, birth: Iterable[int] = (), survive: Iterable[int] = ()):
        """Create a rule from explicit neighbor counts.

        Args:
            birth: Neighbor counts for dead cell birth
            survive: Neighbor counts for live cell survival

        Raises:
            InvalidRuleDigit: If any count is outside 0-8
        """
        birth = frozenset(birth)
        survive = frozenset(survive)
        for count in birth | survive:
            if not isinstance(count, int) or not 0 <= count <= MAX_NEIGHBORS:
                raise InvalidRuleDigit(count)

        object.__setattr__(self, "_birth", birth)
        object.__setattr__(self, "_survive", survive)

    def __setattr__(self, name, value):
        raise AttributeError("RuleSet is immutable")

    @classmethod
    def parse(cls, rule_string: str) -> 'RuleSet':
        """Parse a rulestring of the form B<digits>/S<digits>.

        Digit runs may be empty ("B/S") and repeated digits are ignored.
        Markers are case-sensitive and no whitespace is accepted.

        Args:
            rule_string: Rule in B/S notation

        Returns:
            Parsed RuleSet

        Raises:
            InvalidRuleSyntax: If the string is not shaped like B.../S...
            InvalidRuleDigit: If a digit run contains anything but 0-8
        """
        if not isinstance(rule_string, str):
            raise InvalidRuleSyntax(rule_string)

        parts = rule_string.split("/")
        if len(parts) != 2:
            raise InvalidRuleSyntax(rule_string)

        birth_part, survive_part = parts
        if not birth_part.startswith("B") or not survive_part.startswith("S"):
            raise InvalidRuleSyntax(rule_string)

        return cls(_parse_counts(birth_part[1:]), _parse_counts(survive_part[1:]))

    @classmethod
    def conway(cls) -> 'RuleSet':
        """Standard Conway rules (B3/S23)."""
        return cls(birth={3}, survive={2, 3})

    @property
    def birth(self) -> FrozenSet[int]:
        return self._birth

    @property
    def survive(self) -> FrozenSet[int]:
        return self._survive

    def next_state(self, is_alive: bool, live_neighbors: int) -> bool:
        """Apply the rule to a single cell.

        Args:
            is_alive: Current cell state
            live_neighbors: Number of live neighbors (0-8)

        Returns:
            Next cell state
        """
        if is_alive:
            return live_neighbors in self._survive
        return live_neighbors in self._birth

    @property
    def birth_table(self) -> np.ndarray:
        """Lookup table indexed by neighbor count, True where a dead cell is born."""
        table = np.zeros(MAX_NEIGHBORS + 1, dtype=bool)
        table[sorted(self._birth)] = True
        return table

    @property
    def survive_table(self) -> np.ndarray:
        """Lookup table indexed by neighbor count, True where a live cell survives."""
        table = np.zeros(MAX_NEIGHBORS + 1, dtype=bool)
        table[sorted(self._survive)] = True
        return table

    def rule_table(self) -> Dict[Tuple[bool, int], bool]:
        """Get the outcome for every (current_state, neighbor_count) pair.

        Returns:
            Dictionary mapping (current_state, neighbor_count) to next_state
        """
        return {
            (alive, neighbors): self.next_state(alive, neighbors)
            for alive in (False, True)
            for neighbors in range(MAX_NEIGHBORS + 1)
        }

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RuleSet):
            return NotImplemented
        return self._birth == other._birth and self._survive == other._survive

    def __hash__(self) -> int:
        return hash((self._birth, self._survive))

    def __str__(self) -> str:
        """Canonical B/S notation with digits in ascending order."""
        birth = "".join(str(n) for n in sorted(self._birth))
        survive = "".join(str(n) for n in sorted(self._survive))
        return f"B{birth}/S{survive}"

    def __repr__(self) -> str:
        return f"RuleSet('{self}')"


def parse_rule(rule_string: str) -> RuleSet:
    """Module-level shorthand for RuleSet.parse."""
    return RuleSet.parse(rule_string)
