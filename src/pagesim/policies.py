"""Page replacement policies — who gets evicted when memory is full.

When a referenced page is not resident (a **page fault**) and every
frame is taken, the OS must pick a **victim** to evict before the new
page can be loaded.  Which victim it picks is the replacement policy,
and the choice decides how many faults a workload suffers.

Policies (Strategy pattern — the simulator only sees ``reference``):
    - **FIFO** — evict the page that has been resident longest.  Cheap
      (just a queue) but suffers from Belady's anomaly: for some
      traces, *more* frames mean *more* faults.
    - **LRU** — evict the page referenced longest ago.  Uses an
      OrderedDict, which is a doubly-linked list paired with a hash
      index, so move-to-end and pop-oldest are both O(1).
    - **Optimal** (Belady's MIN) — evict the page whose next use is
      farthest in the future.  Needs the whole trace up front, so it
      is an offline baseline, not something a real kernel can run.
      It is the lower bound every other policy is measured against.
    - **Clock** (second chance) — a circular array of frames, one
      reference bit each, and a sweeping hand.  Approximates LRU at
      O(1) amortized cost; the most common choice in real kernels.
    - **LRU_Clock** — a named Clock variant reserved for a richer aging
      rule.  Today it makes exactly the same decisions as Clock.

Every policy owns its own frame table and bookkeeping, built fresh per
run, so two runs (even of the same policy) never interfere.
"""

from collections import OrderedDict, deque
from collections.abc import Sequence
from enum import StrEnum
from typing import Protocol

from pagesim.errors import UnknownPolicyError
from pagesim.frames import FrameTable, check_capacity


class Access(StrEnum):
    """Outcome of a single page reference."""

    HIT = "hit"
    FAULT = "fault"


class PolicyName(StrEnum):
    """The closed set of selectable replacement policies.

    Values are the names accepted on the command line.
    """

    FIFO = "FIFO"
    LRU = "LRU"
    OPTIMAL = "Optimal"
    CLOCK = "Clock"
    LRU_CLOCK = "LRU_Clock"


# ---------------------------------------------------------------------------
# Replacement Policy Protocol (Strategy pattern)
# ---------------------------------------------------------------------------


class ReplacementPolicy(Protocol):
    """Interface every replacement policy satisfies.

    ``reference`` is called once per trace entry, in trace order.  It
    decides hit or fault and, on a fault with a full table, evicts at
    most one page before installing the new one.
    """

    @property
    def name(self) -> PolicyName:
        """Return the policy's selectable name."""
        ...  # pragma: no cover

    @property
    def frames(self) -> FrameTable:
        """Return the frame table this policy manages."""
        ...  # pragma: no cover

    @property
    def evictions(self) -> int:
        """Return the number of pages evicted so far."""
        ...  # pragma: no cover

    @property
    def last_victim(self) -> int | None:
        """Return the page evicted by the latest reference, if any."""
        ...  # pragma: no cover

    def reference(self, page: int) -> Access:
        """Process one page reference and classify it."""
        ...  # pragma: no cover


class _PolicyBase:
    """Bookkeeping shared by every policy: frame table and eviction tally."""

    name: PolicyName

    def __init__(self, capacity: int) -> None:
        self._frames = FrameTable(capacity)
        self._evictions = 0
        self._last_victim: int | None = None

    @property
    def frames(self) -> FrameTable:
        """Return the frame table this policy manages."""
        return self._frames

    @property
    def evictions(self) -> int:
        """Return the number of pages evicted so far."""
        return self._evictions

    @property
    def last_victim(self) -> int | None:
        """Return the page evicted by the latest reference, if any."""
        return self._last_victim

    def _evict(self, page: int) -> None:
        self._frames.evict(page)
        self._evictions += 1
        self._last_victim = page

    def __repr__(self) -> str:
        """Return a developer-friendly representation."""
        return f"{type(self).__name__}({self._frames!r})"


# ---------------------------------------------------------------------------
# FIFO Policy
# ---------------------------------------------------------------------------


class FIFOPolicy(_PolicyBase):
    """First In, First Out — evict the page resident longest.

    A deque records arrival order; the front is always the oldest.
    Hits do not reorder anything.
    """

    name = PolicyName.FIFO

    def __init__(self, capacity: int) -> None:
        """Create an empty FIFO policy over ``capacity`` frames."""
        super().__init__(capacity)
        self._queue: deque[int] = deque()

    def reference(self, page: int) -> Access:
        """Classify the reference; on a full-table fault evict the oldest page."""
        self._last_victim = None
        if page in self._frames:
            return Access.HIT
        if self._frames.is_full():
            self._evict(self._queue.popleft())
        self._frames.insert(page)
        self._queue.append(page)
        return Access.FAULT


# ---------------------------------------------------------------------------
# LRU Policy
# ---------------------------------------------------------------------------


class LRUPolicy(_PolicyBase):
    """Least Recently Used — evict the page referenced longest ago.

    The OrderedDict runs from least to most recently used.  Every
    reference, hit or fault, leaves the page at the most-recent end.
    """

    name = PolicyName.LRU

    def __init__(self, capacity: int) -> None:
        """Create an empty LRU policy over ``capacity`` frames."""
        super().__init__(capacity)
        self._order: OrderedDict[int, None] = OrderedDict()

    def reference(self, page: int) -> Access:
        """Classify the reference and promote the page to most recent."""
        self._last_victim = None
        if page in self._frames:
            self._order.move_to_end(page)
            return Access.HIT
        if self._frames.is_full():
            victim, _ = self._order.popitem(last=False)
            self._evict(victim)
        self._frames.insert(page)
        self._order[page] = None
        return Access.FAULT


# ---------------------------------------------------------------------------
# Optimal Policy
# ---------------------------------------------------------------------------


def next_occurrences(trace: Sequence[int]) -> list[int]:
    """Return, for each position, the index of the same page's next use.

    Positions whose page never appears again map to ``len(trace)``,
    which is larger than any real index.  Built in one backward pass.
    """
    never = len(trace)
    result = [never] * len(trace)
    seen: dict[int, int] = {}
    for index in range(len(trace) - 1, -1, -1):
        page = trace[index]
        result[index] = seen.get(page, never)
        seen[page] = index
    return result


class OptimalPolicy(_PolicyBase):
    """Belady's Optimal — evict the page needed farthest in the future.

    A naive implementation rescans the rest of the trace for every
    resident page on every fault.  We precompute each position's next
    occurrence once, and keep each resident page's next use up to date,
    so a fault only scans the m resident pages: O(n*m) worst case.

    Victim choice, scanning residents in frame-table order:
        1. The first page that is never used again is evicted at once.
        2. Otherwise the page with the farthest next use; on a tie the
           first one found wins.
    """

    name = PolicyName.OPTIMAL

    def __init__(self, capacity: int, trace: Sequence[int]) -> None:
        """Create an Optimal policy that will replay ``trace`` in order."""
        super().__init__(capacity)
        self._trace = trace
        self._next = next_occurrences(trace)
        self._never = len(trace)
        self._position = 0
        self._next_use: dict[int, int] = {}

    @property
    def position(self) -> int:
        """Return the index of the next expected reference."""
        return self._position

    def reference(self, page: int) -> Access:
        """Classify the reference at the current trace position.

        Raises:
            ValueError: If ``page`` is not the trace entry at the current
                position (Optimal can only replay its own trace).

        """
        index = self._position
        if index >= len(self._trace) or self._trace[index] != page:
            msg = f"Reference {page} does not match the trace at position {index}"
            raise ValueError(msg)
        self._last_victim = None
        self._position += 1

        if page in self._frames:
            self._next_use[page] = self._next[index]
            return Access.HIT
        if self._frames.is_full():
            victim = self._choose_victim()
            del self._next_use[victim]
            self._evict(victim)
        self._frames.insert(page)
        self._next_use[page] = self._next[index]
        return Access.FAULT

    def _choose_victim(self) -> int:
        victim = -1
        farthest = -1
        for page in self._frames:
            upcoming = self._next_use[page]
            if upcoming == self._never:
                return page
            if upcoming > farthest:
                farthest = upcoming
                victim = page
        return victim


# ---------------------------------------------------------------------------
# Clock Policies
# ---------------------------------------------------------------------------


class ClockPolicy(_PolicyBase):
    """Second Chance (Clock) — approximate LRU with reference bits.

    Frames form a circular array of ``(page, referenced)`` slots.  The
    array grows one slot per fault until it reaches capacity, so a huge
    frame count costs nothing up front.  A hand points at the next slot
    to consider.

    - Hit: set the page's bit.  The hand does not move.
    - Fault: sweep from the hand, clearing set bits (second chance),
      until a slot with a clear bit is found.  Put the new page there
      with its bit set, and move the hand one past it.

    Until the table fills, the hand always rests on the next free slot,
    so a fault there takes the new slot without sweeping and no page is
    evicted while a frame is free.  A page → slot index makes the hit
    check O(1).
    """

    name = PolicyName.CLOCK

    def __init__(self, capacity: int) -> None:
        """Create an empty clock of up to ``capacity`` slots."""
        super().__init__(capacity)
        self._ring: list[int] = []
        self._ref_bits: list[bool] = []
        self._slot_of: dict[int, int] = {}
        self._hand = 0

    @property
    def hand(self) -> int:
        """Return the slot the hand points at."""
        return self._hand

    @property
    def slots(self) -> list[tuple[int, bool]]:
        """Return a snapshot of ``(page, referenced)`` for every filled slot."""
        return list(zip(self._ring, self._ref_bits, strict=True))

    def reference(self, page: int) -> Access:
        """Classify the reference, giving second chances on a fault."""
        self._last_victim = None
        slot = self._slot_of.get(page)
        if slot is not None:
            self._ref_bits[slot] = True
            return Access.HIT

        if len(self._ring) < self._frames.capacity:
            slot = len(self._ring)
            self._ring.append(page)
            self._ref_bits.append(True)
        else:
            slot = self._select_slot()
            victim = self._ring[slot]
            del self._slot_of[victim]
            self._evict(victim)
            self._ring[slot] = page
            self._ref_bits[slot] = True
        self._slot_of[page] = slot
        self._frames.insert(page)
        self._hand = (slot + 1) % self._frames.capacity
        return Access.FAULT

    def _select_slot(self) -> int:
        """Sweep the hand to the first slot whose bit is clear."""
        while self._ref_bits[self._hand]:
            self._ref_bits[self._hand] = False
            self._hand = (self._hand + 1) % len(self._ring)
        return self._hand


class LRUClockPolicy(ClockPolicy):
    """Clock variant selectable as ``LRU_Clock``.

    Currently makes exactly the same decisions as ClockPolicy.  It is
    kept as its own policy so an aging or dirty-bit rule can later be
    added by overriding ``_select_slot`` without changing callers.
    """

    name = PolicyName.LRU_CLOCK


# ---------------------------------------------------------------------------
# Policy selection
# ---------------------------------------------------------------------------

_BY_LOWER_NAME = {member.value.lower(): member for member in PolicyName}


def resolve_policy_name(name: str) -> PolicyName:
    """Map a user-supplied policy name to a PolicyName (case-insensitive).

    Raises:
        UnknownPolicyError: If the name is not a supported policy.

    """
    if isinstance(name, PolicyName):
        return name
    member = _BY_LOWER_NAME.get(str(name).lower())
    if member is None:
        raise UnknownPolicyError(str(name), [m.value for m in PolicyName])
    return member


def create_policy(
    name: str,
    *,
    capacity: int,
    trace: Sequence[int] = (),
) -> ReplacementPolicy:
    """Build a fresh policy instance, chosen once before the replay loop.

    Args:
        name: A PolicyName or its string value.
        capacity: Number of frames.
        trace: The trace to be replayed (only Optimal looks at it).

    Raises:
        ConfigurationError: If capacity is not a positive integer.
        UnknownPolicyError: If the name is not a supported policy.

    """
    check_capacity(capacity)
    match resolve_policy_name(name):
        case PolicyName.FIFO:
            return FIFOPolicy(capacity)
        case PolicyName.LRU:
            return LRUPolicy(capacity)
        case PolicyName.OPTIMAL:
            return OptimalPolicy(capacity, trace)
        case PolicyName.CLOCK:
            return ClockPolicy(capacity)
        case PolicyName.LRU_CLOCK:
            return LRUClockPolicy(capacity)
