r"""Multi-pattern matcher returning the longest pattern at every offset.

The automaton is a trie of patterns augmented with failure links and merged
output lists. Nodes live in flat parallel lists addressed by integer id, the
root being id ``0``; failure links therefore never create object cycles.

Typical usage:
    >>> automaton = MatchAutomaton(["Orokin Vault", "Orokin", "Vault"])
    >>> table = automaton.scan("Orokin Vault")
    >>> table.match_at(0)
    (12, 0)
    >>> table.match_at(7)
    (5, 2)

Text positions count code points (Python string indices), for patterns and
scanned text alike.
"""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from typing import Deque, Dict, List, Optional, Sequence, Tuple


ROOT = 0


@dataclass(frozen=True)
class BestMatchTable:
    """Longest pattern found at each start position of a scanned text.

    Attributes:
        lengths: Best match length per position, ``0`` when nothing matches.
        patterns: Index of the pattern achieving ``lengths[p]``, ``-1`` when
            nothing matches.
    """

    lengths: List[int]
    patterns: List[int]

    def __len__(self) -> int:
        return len(self.lengths)

    def match_at(self, position: int) -> Optional[Tuple[int, int]]:
        """Return ``(length, pattern_index)`` for a position, if any."""
        length = self.lengths[position]
        if not length:
            return None
        return length, self.patterns[position]


class MatchAutomaton:
    """Trie with failure links scanning text in a single left-to-right pass.

    Patterns keep the index they had in the sequence given to the
    constructor. Among equal-length patterns starting at the same offset, the
    one reported first during the scan wins, so the insertion order decides
    ties; callers pass patterns sorted longest-first (see
    :func:`~droptables_l10n.matching.patterns.collect_patterns`).

    The automaton is immutable once built and may be shared between
    concurrent scans.
    """

    def __init__(self, patterns: Sequence[str]) -> None:
        """Build the trie, the failure links and the merged outputs.

        Args:
            patterns: Patterns to index. Empty strings are kept in
                :attr:`patterns` for index stability but never match.
        """
        self._patterns: Tuple[str, ...] = tuple(patterns)
        self._lengths: Tuple[int, ...] = tuple(len(p) for p in self._patterns)
        self._transitions: List[Dict[str, int]] = [{}]
        self._failure: List[int] = [ROOT]
        self._outputs: List[List[int]] = [[]]

        for index, pattern in enumerate(self._patterns):
            if pattern:
                self._insert(pattern, index)
        self._build_failure_links()

    @property
    def patterns(self) -> Tuple[str, ...]:
        """Indexed patterns, in insertion order."""
        return self._patterns

    @property
    def node_count(self) -> int:
        """Number of trie nodes, root included."""
        return len(self._transitions)

    def pattern(self, index: int) -> str:
        """Return the pattern registered under ``index``."""
        return self._patterns[index]

    # ------------------ Construction ------------------

    def _new_node(self) -> int:
        self._transitions.append({})
        self._failure.append(ROOT)
        self._outputs.append([])
        return len(self._transitions) - 1

    def _insert(self, pattern: str, index: int) -> None:
        node = ROOT
        for char in pattern:
            child = self._transitions[node].get(char)
            if child is None:
                child = self._new_node()
                self._transitions[node][char] = child
            node = child
        self._outputs[node].append(index)

    def _build_failure_links(self) -> None:
        """Compute failure links breadth-first and merge output lists.

        Depth-one nodes fall back to the root. Deeper nodes follow the failure
        chain of their parent until a node with a transition on the same
        character is found. A node's outputs are extended with the (already
        merged) outputs of its failure target, so scanning reads one list per
        node.
        """
        queue: Deque[int] = deque(self._transitions[ROOT].values())
        while queue:
            node = queue.popleft()
            for char, child in self._transitions[node].items():
                queue.append(child)

                fallback = self._failure[node]
                while fallback != ROOT and char not in self._transitions[fallback]:
                    fallback = self._failure[fallback]
                target = self._transitions[fallback].get(char, ROOT)
                self._failure[child] = target
                if self._outputs[target]:
                    self._outputs[child].extend(self._outputs[target])

    # ------------------ Scanning ------------------

    def scan(self, text: str) -> BestMatchTable:
        """Return the longest pattern starting at each position of ``text``.

        Args:
            text: Text to scan.

        Returns:
            Table whose entry at position ``p`` holds the length and index of
            the longest pattern occurring at ``p``. Equal-length candidates
            never overwrite the first one recorded.
        """
        size = len(text)
        best_lengths = [0] * size
        best_patterns = [-1] * size

        transitions = self._transitions
        failure = self._failure
        outputs = self._outputs
        lengths = self._lengths

        node = ROOT
        for position, char in enumerate(text):
            while node != ROOT and char not in transitions[node]:
                node = failure[node]
            node = transitions[node].get(char, ROOT)

            for index in outputs[node]:
                length = lengths[index]
                start = position - length + 1
                if start < 0:
                    continue
                if length > best_lengths[start]:
                    best_lengths[start] = length
                    best_patterns[start] = index

        return BestMatchTable(lengths=best_lengths, patterns=best_patterns)
