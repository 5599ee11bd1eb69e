# site.py
from dataclasses import dataclass, field
from typing import Set


@dataclass
class Site:
    """
    In-memory stand-in for one storage site:
    - holds at most `capacity` keys (enforced by the caller via full())
    - counts every read probe as exactly one hit or one miss
    """
    site_id: int
    capacity: int
    known_keys: Set[int] = field(default_factory=set)
    read_hits: int = 0
    read_misses: int = 0

    @property
    def used(self) -> int:
        return len(self.known_keys)

    def full(self) -> bool:
        return len(self.known_keys) >= self.capacity

    def write(self, key: int):
        # no capacity check here, placement checks full() first
        self.known_keys.add(key)

    def read(self, key: int) -> bool:
        if key in self.known_keys:
            self.read_hits += 1
            return True
        self.read_misses += 1
        return False
