"""
Self-avoiding walk generator.

Finds walks of an exact length between two cells of a rectangular board,
leaving the start with one heading and arriving at the end with another.
Walks are produced lazily, one at a time, by a depth-first search whose
frontier survives between calls:

    generator = SelfAvoidingWalkGenerator(Boundary(Position(0, 0), Position(7, 7)), 27)
    while generator.probe():
        walk = generator.consume()

The generator and its enumerator are not concurrency-safe: one caller at a
time, probing then consuming.
"""

from __future__ import annotations

import logging
import random
import time
from collections import Counter, deque
from dataclasses import dataclass
from enum import Enum
from typing import Protocol

from walk_types import Boundary, Heading, PathNode, Position

logger = logging.getLogger(__name__)


# =============================================================================
# Errors
# =============================================================================


class WalkError(Exception):
    """Base class for walk generator errors."""


class ConfigurationError(WalkError, ValueError):
    """A requested configuration was rejected before any search began."""


class DegenerateBoundaryError(ConfigurationError):
    """The board is narrower or shorter than two cells."""


class StartOutOfBoundsError(ConfigurationError):
    """The start cell lies outside the board."""


class EndOutOfBoundsError(ConfigurationError):
    """The end cell lies outside the board."""


class LengthTooShortError(ConfigurationError):
    """No walk that short can connect start and end."""


class LengthTooLongError(ConfigurationError):
    """The walk would need more cells than the board has."""


class ParityInfeasibleError(ConfigurationError):
    """The parity rule judges the configuration unsolvable."""


class InvalidStateError(WalkError, RuntimeError):
    """consume() was called with no probed walk waiting."""


class SearchBudgetExceeded(WalkError):
    """A probe ran out of steps or time before reaching a result."""

    def __init__(self, message: str, steps: int) -> None:
        super().__init__(message)
        self.steps = steps


# =============================================================================
# Rules
# =============================================================================


class ParityRule(Enum):
    """How the preflight decides a length has the wrong parity."""

    CHECKERBOARD = "checkerboard"  # Step count vs. Manhattan distance
    BOUNDING_BOX = "bounding_box"  # Legacy: start/end box area vs. length
    DISABLED = "disabled"


class PruneReason(Enum):
    """Why a candidate node was discarded."""

    OUT_OF_BOUNDS = "out_of_bounds"
    SELF_INTERSECTION = "self_intersection"
    TOO_LONG = "too_long"
    UNREACHABLE = "unreachable"  # Remaining steps cannot cover the distance to the end


@dataclass(frozen=True)
class SearchRules:
    """Rules governing preflight and search behavior."""

    parity: ParityRule = ParityRule.CHECKERBOARD
    shuffle: bool = True  # Randomize the left/straight/right order at each expansion
    max_steps: int | None = None  # Default pop budget per probe
    timeout: float | None = None  # Default seconds per probe


class RandomSource(Protocol):
    def shuffle(self, x: list) -> None: ...


# =============================================================================
# Feasibility Preflight
# =============================================================================


def minimum_length(start: Position, end: Position) -> int:
    """Fewest nodes a walk from start to end can have."""
    box = Boundary(start, end)
    return box.width + box.height - 1


def is_parity_infeasible(
    start: Position, end: Position, length: int, rule: ParityRule
) -> bool:
    """
    Apply a parity rule to a walk of `length` nodes from start to end.

    CHECKERBOARD colours the board like a chessboard: every step changes
    colour, so the step count and the Manhattan distance share parity.

    BOUNDING_BOX compares the parity of the start/end bounding box area with
    the parity of the length, rejecting odd/odd and even/even. It disagrees
    with CHECKERBOARD unless both axis distances are odd, and is kept only for
    compatibility with boards generated by earlier releases.
    """
    match rule:
        case ParityRule.CHECKERBOARD:
            return (length - 1) % 2 != start.manhattan(end) % 2
        case ParityRule.BOUNDING_BOX:
            area = Boundary(start, end).cell_count
            if area % 2 == 1 and length % 2 == 1:
                return True
            if area % 2 == 0 and length % 2 == 0:
                return True
            return False
        case ParityRule.DISABLED:
            return False
        case _:
            raise ValueError(f"Unknown parity rule: {rule}")


def check_feasibility(
    boundary: Boundary,
    length: int,
    start: Position,
    end: Position,
    parity: ParityRule = ParityRule.CHECKERBOARD,
) -> None:
    """
    Reject configurations that cannot, or almost certainly cannot, be solved.

    Checks run in a fixed order and the first violation is raised.

    Raises:
        DegenerateBoundaryError: board smaller than 2x2
        StartOutOfBoundsError: start outside the board
        EndOutOfBoundsError: end outside the board
        LengthTooShortError: length below the start/end minimum
        LengthTooLongError: length above the board's cell count
        ParityInfeasibleError: the parity rule rejects the length
    """
    if boundary.width < 2 or boundary.height < 2:
        raise DegenerateBoundaryError(
            f"Board size has to be at least 2x2\n"
            f"  Boundary: {boundary.a} - {boundary.b}\n"
            f"  Size: {boundary.width}x{boundary.height}"
        )
    if not boundary.contains(start):
        raise StartOutOfBoundsError(
            f"Start has to be within boundary\n"
            f"  Start: {start}\n"
            f"  Boundary: {boundary.a} - {boundary.b}"
        )
    if not boundary.contains(end):
        raise EndOutOfBoundsError(
            f"End has to be within boundary\n"
            f"  End: {end}\n"
            f"  Boundary: {boundary.a} - {boundary.b}"
        )
    shortest = minimum_length(start, end)
    if length < shortest:
        raise LengthTooShortError(
            f"Requested length is shorter than the shortest walk from start to end\n"
            f"  Requested: {length}\n"
            f"  Shortest: {shortest}"
        )
    if length > boundary.cell_count:
        raise LengthTooLongError(
            f"Requested walk does not fit within the boundary\n"
            f"  Requested: {length}\n"
            f"  Cells available: {boundary.cell_count}"
        )
    if is_parity_infeasible(start, end, length, parity):
        raise ParityInfeasibleError(
            f"No walk of this length can connect start and end\n"
            f"  Requested: {length}\n"
            f"  Start: {start}, End: {end}\n"
            f"  Parity rule: {parity.value}"
        )


# =============================================================================
# Search Engine
# =============================================================================


class SelfAvoidingWalkGenerator:
    """
    Depth-first search for self-avoiding walks of an exact length.

    The frontier is a stack seeded with the start node. Each unit of work pops
    one node, evaluates its three successors, discards those that match a
    prune rule, records those that satisfy every acceptance rule, and pushes
    the rest. Every walk ever found is kept in `solutions`, in discovery order.
    """

    def __init__(
        self,
        boundary: Boundary,
        length: int,
        start: Position | None = None,
        end: Position | None = None,
        start_heading: Heading = Heading.EAST,
        end_heading: Heading = Heading.EAST,
        rules: SearchRules = SearchRules(),
        rng: RandomSource | None = None,
    ) -> None:
        start = boundary.a if start is None else start
        end = boundary.b if end is None else end
        check_feasibility(boundary, length, start, end, rules.parity)

        self._boundary = boundary
        self._length = length
        self.start = start
        self.end = end
        self.start_heading = start_heading
        self.end_heading = end_heading
        self.rules = rules
        self._rng: RandomSource = rng if rng is not None else random.Random()

        self._frontier: list[PathNode] = [PathNode(start, start_heading)]
        self._solutions: list[PathNode] = []
        self.expansions = 0
        self.pruned: Counter[PruneReason] = Counter()

        self.enumerator = SolutionEnumerator(self)

        logger.info(
            "walk search seeded: board=%dx%d length=%d start=%s%s end=%s%s",
            boundary.width,
            boundary.height,
            length,
            start,
            start_heading.glyph,
            end,
            end_heading.glyph,
        )

    @property
    def boundary(self) -> Boundary:
        return self._boundary

    @property
    def length(self) -> int:
        return self._length

    @property
    def solutions(self) -> tuple[PathNode, ...]:
        """Every walk found so far, in discovery order."""
        return tuple(self._solutions)

    @property
    def frontier_size(self) -> int:
        return len(self._frontier)

    @property
    def is_exhausted(self) -> bool:
        return not self._frontier

    def prune_reason(self, node: PathNode) -> PruneReason | None:
        """Return the first prune rule the node matches, or None if it may be kept."""
        if not self._boundary.contains(node.position):
            return PruneReason.OUT_OF_BOUNDS
        if node.intersects_itself():
            return PruneReason.SELF_INTERSECTION
        if node.length > self._length:
            return PruneReason.TOO_LONG
        if self._length - node.length < node.position.manhattan(self.end):
            return PruneReason.UNREACHABLE
        return None

    def is_solution(self, node: PathNode) -> bool:
        return (
            node.position == self.end
            and node.heading == self.end_heading
            and node.length == self._length
        )

    def expand_next(self) -> list[PathNode]:
        """
        Perform one unit of work: pop the newest frontier node and expand it.

        Returns the walks completed by this expansion (zero to three).
        """
        node = self._frontier.pop()
        self.expansions += 1

        candidates = node.successors()
        if self.rules.shuffle:
            self._rng.shuffle(candidates)

        found: list[PathNode] = []
        for candidate in candidates:
            reason = self.prune_reason(candidate)
            if reason is not None:
                self.pruned[reason] += 1
            elif self.is_solution(candidate):
                found.append(candidate)
            else:
                self._frontier.append(candidate)

        for walk in found:
            self._solutions.append(walk)
            logger.debug("walk #%d found: %s", len(self._solutions), walk)
        return found

    def advance(
        self, max_steps: int | None = None, timeout: float | None = None
    ) -> list[PathNode]:
        """
        Expand frontier nodes until an expansion completes a walk.

        Args:
            max_steps: Maximum number of expansions before giving up
            timeout: Maximum seconds to spend before giving up

        Returns:
            The walks completed by the last expansion, or an empty list if the
            frontier ran out.

        Raises:
            SearchBudgetExceeded: the budget ran out first; the frontier is
                left as it was so a later call resumes the search.
        """
        if max_steps is not None and max_steps < 1:
            raise ValueError(f"max_steps must be positive, got {max_steps}")
        if timeout is not None and timeout <= 0:
            raise ValueError(f"timeout must be positive, got {timeout}")

        deadline = None if timeout is None else time.monotonic() + timeout
        steps = 0
        while self._frontier:
            if max_steps is not None and steps >= max_steps:
                logger.warning("probe stopped after %d expansions (step budget)", steps)
                raise SearchBudgetExceeded(
                    f"Step budget of {max_steps} expansions used up\n"
                    f"  Frontier size: {len(self._frontier)}",
                    steps,
                )
            if deadline is not None and time.monotonic() >= deadline:
                logger.warning("probe stopped after %d expansions (timeout)", steps)
                raise SearchBudgetExceeded(
                    f"Timeout of {timeout}s reached\n"
                    f"  Frontier size: {len(self._frontier)}",
                    steps,
                )
            found = self.expand_next()
            steps += 1
            if found:
                return found

        logger.info(
            "walk search exhausted: %d walks, %d expansions, pruned=%s",
            len(self._solutions),
            self.expansions,
            {reason.value: count for reason, count in self.pruned.items()},
        )
        return []

    def probe(self, max_steps: int | None = None, timeout: float | None = None) -> bool:
        return self.enumerator.probe(max_steps, timeout)

    def consume(self) -> PathNode:
        return self.enumerator.consume()


# =============================================================================
# Resumable Solution Enumerator
# =============================================================================


class EnumeratorState(Enum):
    """Where the enumerator stands between calls."""

    EXPLORING = "exploring"  # Frontier non-empty, nothing cached
    HAS_CACHED = "has_cached"  # At least one walk waiting for consume()
    EXHAUSTED = "exhausted"  # Frontier empty, nothing cached


class SolutionEnumerator:
    """
    Probe/consume access to a generator's walks.

    probe() makes sure a walk is waiting and reports whether one is;
    consume() hands out the oldest waiting walk. One enumerator per generator.
    """

    def __init__(self, generator: SelfAvoidingWalkGenerator) -> None:
        self._generator = generator
        self._cached: deque[PathNode] = deque()
        self.state = EnumeratorState.EXPLORING

    def probe(self, max_steps: int | None = None, timeout: float | None = None) -> bool:
        """
        Return True if a walk is ready to consume, searching for one if needed.

        Budgets default to the generator's SearchRules. Once this returns
        False it keeps returning False without touching the frontier.

        Raises:
            SearchBudgetExceeded: the budget ran out before a result
        """
        match self.state:
            case EnumeratorState.HAS_CACHED:
                return True
            case EnumeratorState.EXHAUSTED:
                return False

        rules = self._generator.rules
        found = self._generator.advance(
            rules.max_steps if max_steps is None else max_steps,
            rules.timeout if timeout is None else timeout,
        )
        if found:
            self._cached.extend(found)
            self.state = EnumeratorState.HAS_CACHED
            return True

        self.state = EnumeratorState.EXHAUSTED
        return False

    def consume(self) -> PathNode:
        """
        Remove and return the oldest probed walk.

        Raises:
            InvalidStateError: no walk is waiting (probe() first)
        """
        if self.state is not EnumeratorState.HAS_CACHED:
            raise InvalidStateError(
                f"No walk available to consume, have you called probe() first?\n"
                f"  State: {self.state.value}"
            )

        walk = self._cached.popleft()
        if not self._cached:
            self.state = (
                EnumeratorState.EXHAUSTED
                if self._generator.is_exhausted
                else EnumeratorState.EXPLORING
            )
        return walk

    @property
    def pending(self) -> int:
        """Number of walks probed but not yet consumed."""
        return len(self._cached)
