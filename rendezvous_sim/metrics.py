# metrics.py
import numpy as np
import pandas as pd

from .scoring import rank_order

Z_95 = 1.96


def site_stats(sites, num_reads: int) -> pd.DataFrame:
    """
    One row per site:
    - used / capacity / occupancy_pct: how full the site ended up
    - read_hits / hit_pct / read_misses: hit_pct is relative to all reads issued (0 when there were none)
    """
    used = np.array([s.used for s in sites], dtype=int)
    cap = np.array([s.capacity for s in sites], dtype=int)
    hits = np.array([s.read_hits for s in sites], dtype=int)
    misses = np.array([s.read_misses for s in sites], dtype=int)

    return pd.DataFrame({
        "site_id": [s.site_id for s in sites],
        "used": used,
        "capacity": cap,
        "occupancy_pct": used / cap * 100.0,
        "read_hits": hits,
        "hit_pct": hits / num_reads * 100.0 if num_reads > 0 else np.zeros(len(sites)),
        "read_misses": misses,
    })


def summarize(cfg, unwritable, read_counters) -> dict:
    n_unwritable = len(unwritable)
    return {
        "seed": cfg.seed,
        "n_sites": len(cfg.site_caps),
        "total_capacity": int(sum(cfg.site_caps)),
        "replication_factor": cfg.replication_factor,
        "num_writes": cfg.num_writes,
        "written": cfg.num_writes - n_unwritable,
        "unwritable": n_unwritable,
        "unwritable_ratio": (n_unwritable / cfg.num_writes) if cfg.num_writes > 0 else 0.0,
        "num_reads": cfg.num_reads,
        "reads_skipped": read_counters["skipped"],
        "probes": read_counters["probes"],
        "reads_served": read_counters["served"],
        "reads_exhausted": read_counters["exhausted"],
        # hits / probes issued; 1.0 means every read found the key at its first probe
        "probe_hit_ratio": (read_counters["served"] / read_counters["probes"]) if read_counters["probes"] > 0 else 0.0,
    }


def primary_share(sites, scorer, num_keys: int) -> pd.DataFrame:
    """
    Fraction of keys in [0, num_keys) for which each site ranks first,
    next to the site's share of total capacity. Ranking only, sites are not touched.
    """
    firsts = np.zeros(len(sites), dtype=int)
    for key in range(num_keys):
        firsts[rank_order(sites, key, scorer)[0]] += 1

    cap = np.array([s.capacity for s in sites], dtype=float)
    return pd.DataFrame({
        "site_id": [s.site_id for s in sites],
        "capacity": cap.astype(int),
        "capacity_share": cap / cap.sum(),
        "primary_share": firsts / num_keys if num_keys > 0 else np.zeros(len(sites)),
    })


def format_report(stats: pd.DataFrame, summary: dict):
    lines = []
    num_reads = summary["num_reads"]
    for _, r in stats.iterrows():
        line = f"site {int(r['site_id'])}: {int(r['used'])}/{int(r['capacity'])} ({r['occupancy_pct']:.2f}% full)"
        if num_reads > 0:
            line += (f". received reads: {int(r['read_hits'])} hits ({r['hit_pct']:.2f}% of total), "
                     f"{int(r['read_misses'])} misses")
        lines.append(line)
    lines.append(f"unable to write: {summary['unwritable']} ({summary['unwritable_ratio'] * 100:.2f}%)")
    return lines


def seed_spread(long_df: pd.DataFrame, metrics) -> pd.DataFrame:
    """
    One row per metric across the per-seed runs in long_df:
    metric, n, mean, std, ci95_low, ci95_high (normal approximation).
    A single seed gives std 0 and a zero-width interval.
    """
    sub = long_df[list(metrics)]
    n = sub.count()
    mean = sub.mean()
    std = sub.std(ddof=1).where(n >= 2, 0.0).where(n > 0)
    half = Z_95 * std / np.sqrt(n.clip(lower=1))

    out = pd.DataFrame({
        "n": n.astype(int),
        "mean": mean,
        "std": std,
        "ci95_low": mean - half,
        "ci95_high": mean + half,
    })
    return out.rename_axis("metric").reset_index()
