# gen_data.py
import numpy as np
import pandas as pd

from .site import Site


def gen_sites(cfg):
    # ids follow the order of cfg.site_caps, starting at 1
    return [Site(site_id=i + 1, capacity=int(c)) for i, c in enumerate(cfg.site_caps)]


def gen_workload(cfg):
    """
    Read sequence: one key per read, drawn from [0, num_writes).
    Uses its own RNG (seed + 1) so the hash seed and the reads stay independent.
    """
    rng = np.random.default_rng(cfg.seed + 1)
    if cfg.num_writes == 0 or cfg.num_reads == 0:
        return pd.DataFrame({"t": np.arange(0), "key": np.arange(0)})

    if cfg.read_dist == "uniform":
        keys = rng.integers(0, cfg.num_writes, size=cfg.num_reads)
    elif cfg.read_dist == "zipf":
        # Zipf over key ids
        ranks = np.arange(1, cfg.num_writes + 1)
        weights = 1.0 / (ranks ** cfg.zipf_s)
        probs = weights / weights.sum()
        keys = rng.choice(cfg.num_writes, size=cfg.num_reads, p=probs)
    else:
        raise ValueError(f"unknown read_dist: {cfg.read_dist}")

    return pd.DataFrame({"t": np.arange(cfg.num_reads), "key": keys})
