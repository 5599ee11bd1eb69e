# routing.py
from .scoring import rank_sites


def route_reads(sites, scorer, unwritable, read_keys):
    """
    First-hit read routing.
    For every key in read_keys:
    - unwritable keys are skipped without probing any site
    - otherwise sites are probed in rank order until one reports a hit;
      each probed site records exactly one hit or miss, later sites are not touched
    """
    reads = 0
    skipped = 0
    probes = 0
    served = 0
    exhausted = 0

    for key in read_keys:
        key = int(key)
        reads += 1
        if key in unwritable:
            skipped += 1
            continue

        hit = False
        for s in rank_sites(sites, key, scorer):
            probes += 1
            if s.read(key):
                hit = True
                break

        if hit:
            served += 1
        else:
            # only reachable if the ranking disagrees with placement
            exhausted += 1

    return {
        "reads": reads,
        "skipped": skipped,
        "probes": probes,
        "served": served,
        "exhausted": exhausted,
    }
