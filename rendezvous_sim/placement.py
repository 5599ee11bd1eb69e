# placement.py
import numpy as np

from .scoring import rank_sites


def place_writes(cfg, sites, scorer):
    """
    All-or-nothing replica placement:
    - keys are written in increasing order 0..num_writes-1
    - for each key, take the top replication_factor sites of its ranking
    - if every one of them has room, write the key to all of them
    - otherwise write nowhere and mark the key unwritable (no fallback to lower ranks)

    Returns (placement, unwritable):
    placement[key] holds the site ids in rank order, or -1 in every column for an unwritable key.
    """
    k = cfg.replication_factor
    placement = np.full((cfg.num_writes, k), -1, dtype=int)
    unwritable = set()

    for key in range(cfg.num_writes):
        top = rank_sites(sites, key, scorer)[:k]
        if any(s.full() for s in top):
            unwritable.add(key)
            continue
        for s in top:
            s.write(key)
        placement[key] = [s.site_id for s in top]

    return placement, unwritable


def verify_placement(sites, placement, unwritable, cfg):
    k = cfg.replication_factor

    over = [s.site_id for s in sites if s.used > s.capacity]
    if over:
        raise AssertionError(f"sites over capacity: {over}")

    # key -> number of sites holding it
    holders = np.zeros(cfg.num_writes, dtype=int)
    for s in sites:
        for key in s.known_keys:
            holders[key] += 1

    written_mask = placement[:, 0] >= 0
    written = int(written_mask.sum())

    if written + len(unwritable) != cfg.num_writes:
        raise AssertionError(
            f"written ({written}) + unwritable ({len(unwritable)}) != num_writes ({cfg.num_writes})"
        )

    bad = [key for key in range(cfg.num_writes)
           if holders[key] != (k if written_mask[key] else 0)
           or bool(written_mask[key]) == (key in unwritable)]
    if bad:
        raise AssertionError(f"Placement violates all-or-nothing replication. "
                             f"Example bad keys (first 10): {bad[:10]}")

    distinct = np.array([len(set(row)) for row in placement[written_mask]], dtype=int)
    if len(distinct) and (distinct.min() != k or distinct.max() != k):
        raise AssertionError("Placement repeats a site within one key's replicas.")

    print(f"[VERIFY] written={written}, unwritable={len(unwritable)}, "
          f"replicas per written key={k}, sites within capacity={len(sites)}/{len(sites)}")
