# scoring.py
"""
Weighted rendezvous (highest random weight) scoring.

For a (site, key) pair a keyed hash gives a uniform value c in (0, 1); the
score is -capacity / ln(c), i.e. an exponential variate scaled by capacity.
The site with the largest score wins, so a site ranks first for a fraction of
keys equal to capacity / total capacity, and a site's score never depends on
any other site.
"""
import hashlib
import math
from dataclasses import dataclass

import numpy as np
import pandas as pd

MAX_UINT64 = float(2**64 - 1)

# nearest floats to 0 and 1; ln() of either end would give an infinite or zero denominator
C_LOW = float(np.nextafter(0.0, 1.0))
C_HIGH = float(np.nextafter(1.0, 0.0))


@dataclass(frozen=True)
class RendezvousScorer:
    seed: int = 0

    @property
    def hash_key(self) -> bytes:
        # fixed 32 bytes whatever the seed's size; blake2b keys are capped at 64
        return hashlib.blake2b(str(self.seed).encode("utf-8"), digest_size=32).digest()

    def _hash64(self, site_id: int, key: int) -> int:
        h = hashlib.blake2b(digest_size=8, key=self.hash_key)
        h.update(f"{site_id}-{key}".encode("utf-8"))
        return int.from_bytes(h.digest(), byteorder="big")

    def unit_value(self, site_id: int, key: int) -> float:
        c = self._hash64(site_id, key) / MAX_UINT64
        return min(max(c, C_LOW), C_HIGH)

    def score(self, site_id: int, capacity: int, key: int) -> float:
        return -float(capacity) / math.log(self.unit_value(site_id, key))

    def scores(self, sites, key: int) -> np.ndarray:
        c = np.array([self.unit_value(s.site_id, key) for s in sites], dtype=float)
        caps = np.array([s.capacity for s in sites], dtype=float)
        return -caps / np.log(c)


def rank_order(sites, key: int, scorer: RendezvousScorer) -> np.ndarray:
    """
    Indices into `sites`, best first.
    Sort by score descending; equal scores fall back to ascending site_id.
    """
    scores = scorer.scores(sites, key)
    ids = np.array([s.site_id for s in sites], dtype=np.int64)
    # lexsort: last key is primary
    return np.lexsort((ids, -scores))


def rank_sites(sites, key: int, scorer: RendezvousScorer):
    return [sites[i] for i in rank_order(sites, key, scorer)]


def score_table(sites, key: int, scorer: RendezvousScorer) -> pd.DataFrame:
    """Ranking of all sites for one key, with the scores, for inspection."""
    df = pd.DataFrame({
        "site_id": [s.site_id for s in sites],
        "capacity": [s.capacity for s in sites],
        "score": scorer.scores(sites, key),
    })
    df = df.iloc[rank_order(sites, key, scorer)].reset_index(drop=True)
    df["rank"] = np.arange(1, len(df) + 1)
    return df
