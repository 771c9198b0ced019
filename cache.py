# cache.py
import enum
import logging
import threading
from collections import OrderedDict

logger = logging.getLogger(__name__)

POLICIES = ("rotating", "lru")


class InvalidConfiguration(ValueError):
    """Raised when a cache cannot be built from the given block count/associativity."""


class AccessResult(enum.Enum):
    HIT = "hit"
    MISS = "miss"


class CacheSet:
    """
    One group of `associativity` slots.

    With the default "rotating" policy the victim pointer only advances when a
    full set has to replace something; hits and first-time fills leave it alone.
    The "lru" policy keeps slot indices in recency order instead (oldest first).
    """

    def __init__(self, associativity, policy="rotating"):
        self.associativity = associativity
        self.policy = policy
        self._slots = [None] * associativity
        self._victim = 0
        self._is_full = False
        # Empty slots start out as the oldest entries, lowest index first.
        self._recency = OrderedDict((i, True) for i in range(associativity)) if policy == "lru" else None

    @property
    def is_full(self):
        return self._is_full or self._slots[-1] is not None

    @property
    def next_victim_index(self):
        if self._recency is not None:
            return next(iter(self._recency))
        return self._victim

    def snapshot(self):
        return tuple(self._slots)

    def occupied(self):
        return sum(1 for v in self._slots if v is not None)

    def __contains__(self, value):
        return value in self._slots

    def _touch(self, index):
        if self._recency is not None:
            self._recency.move_to_end(index)

    def _access(self, value):
        """
        Place `value` in this set.
        Returns (AccessResult, replaced) where `replaced` is True only when an
        existing entry was evicted.
        """
        # Fullness is sticky and keyed on the last slot; fills go left to right.
        if self._slots[-1] is not None:
            self._is_full = True

        if not self._is_full:
            for i, current in enumerate(self._slots):
                if current == value:
                    self._touch(i)
                    return AccessResult.HIT, False
                if current is None:
                    self._slots[i] = value
                    self._touch(i)
                    return AccessResult.MISS, False

        for i, current in enumerate(self._slots):
            if current == value:
                self._touch(i)
                return AccessResult.HIT, False

        victim = self.next_victim_index
        self._slots[victim] = value
        if self._recency is not None:
            self._touch(victim)
        else:
            self._victim = (victim + 1) % self.associativity
        return AccessResult.MISS, True


class SetAssociativeCache:
    """
    Set-associative cache model.
    A value goes to set `value % set_count`; a full set evicts its victim slot.
    """

    def __init__(self, block_capacity, associativity, policy="rotating"):
        for name, n in (("block_capacity", block_capacity), ("associativity", associativity)):
            if isinstance(n, bool) or not isinstance(n, int):
                raise InvalidConfiguration(f"{name} must be an integer, got {n!r}")
            if n <= 0:
                raise InvalidConfiguration(f"{name} must be positive, got {n}")
        if block_capacity % associativity:
            raise InvalidConfiguration(
                f"associativity {associativity} does not divide block capacity {block_capacity}"
            )
        if policy not in POLICIES:
            raise InvalidConfiguration(f"unknown replacement policy {policy!r}")

        self._block_capacity = block_capacity
        self._associativity = associativity
        self._policy = policy
        self._sets = tuple(CacheSet(associativity, policy) for _ in range(block_capacity // associativity))
        self._hits = 0
        self._total_accesses = 0
        self._replacements = 0
        self._max_digit_width = 0
        self._lock = threading.Lock()
        logger.info(
            "Created cache: %d blocks, %d-way, %d sets, %s policy",
            block_capacity, associativity, len(self._sets), policy,
        )

    @property
    def block_capacity(self):
        return self._block_capacity

    @property
    def associativity(self):
        return self._associativity

    @property
    def policy(self):
        return self._policy

    @property
    def set_count(self):
        return len(self._sets)

    @property
    def sets(self):
        return self._sets

    @property
    def hits(self):
        return self._hits

    @property
    def misses(self):
        return self._total_accesses - self._hits

    @property
    def replacements(self):
        return self._replacements

    @property
    def total_accesses(self):
        return self._total_accesses

    @property
    def max_digit_width(self):
        return self._max_digit_width

    @property
    def hit_rate(self):
        return self._hits / self._total_accesses if self._total_accesses else 0.0

    def set_index_for(self, value):
        return value % len(self._sets)

    def access(self, value) -> AccessResult:
        """
        Access `value` (a non-negative integer). Returns AccessResult.HIT or MISS
        and updates the counters.
        """
        if value < 0:
            raise ValueError(f"cache values must be non-negative, got {value}")

        with self._lock:
            index = self.set_index_for(value)
            self._max_digit_width = max(self._max_digit_width, len(str(value)))

            result, replaced = self._sets[index]._access(value)
            self._total_accesses += 1
            if result is AccessResult.HIT:
                self._hits += 1
            elif replaced:
                self._replacements += 1
                logger.debug("Replaced entry in set %d with %d", index, value)
            return result

    def slots(self):
        """Yield (set_index, slot_index, value) for every slot; value is None when empty."""
        for i, s in enumerate(self._sets):
            for j, value in enumerate(s.snapshot()):
                yield i, j, value

    def stats(self):
        return {
            "block_capacity": self._block_capacity,
            "associativity": self._associativity,
            "num_sets": len(self._sets),
            "policy": self._policy,
            "used_blocks": sum(s.occupied() for s in self._sets),
            "total_accesses": self._total_accesses,
            "hits": self._hits,
            "misses": self.misses,
            "replacements": self._replacements,
            "hit_rate": self.hit_rate,
        }
