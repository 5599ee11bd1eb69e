import numpy as np
import pandas as pd
import pytest

from rendezvous_sim.config import Config
from rendezvous_sim.metrics import format_report, primary_share, seed_spread, site_stats, summarize
from rendezvous_sim.scoring import RendezvousScorer
from rendezvous_sim.site import Site

NO_READS = {"reads": 0, "skipped": 0, "probes": 0, "served": 0, "exhausted": 0}


def test_site_stats_columns_and_values():
    a = Site(site_id=1, capacity=4, known_keys={1, 2}, read_hits=3, read_misses=1)
    b = Site(site_id=2, capacity=10, known_keys={3}, read_hits=1, read_misses=0)

    df = site_stats([a, b], num_reads=4)

    assert df["site_id"].tolist() == [1, 2]
    assert df["used"].tolist() == [2, 1]
    assert df["occupancy_pct"].tolist() == pytest.approx([50.0, 10.0])
    assert df["hit_pct"].tolist() == pytest.approx([75.0, 25.0])
    assert df["read_misses"].tolist() == [1, 0]


def test_site_stats_without_reads():
    df = site_stats([Site(site_id=1, capacity=5, known_keys={0})], num_reads=0)
    assert df["hit_pct"].tolist() == [0.0]
    assert df["read_hits"].tolist() == [0]


def test_summarize_counts_unwritable():
    cfg = Config(site_caps=[5], num_writes=10, num_reads=0)
    s = summarize(cfg, {5, 6, 7, 8, 9}, NO_READS)
    assert s["written"] == 5
    assert s["unwritable"] == 5
    assert s["unwritable_ratio"] == pytest.approx(0.5)
    assert s["probe_hit_ratio"] == 0.0


def test_summarize_zero_writes():
    s = summarize(Config(num_writes=0, num_reads=0), set(), NO_READS)
    assert s["unwritable_ratio"] == 0.0


def test_format_report_with_reads():
    cfg = Config(site_caps=[20000], num_writes=100, num_reads=4)
    site = Site(site_id=1, capacity=20000, known_keys=set(range(412)), read_hits=4)
    lines = format_report(site_stats([site], 4), summarize(cfg, set(), {**NO_READS, "probes": 4, "served": 4}))

    assert lines[0] == "site 1: 412/20000 (2.06% full). received reads: 4 hits (100.00% of total), 0 misses"
    assert lines[-1] == "unable to write: 0 (0.00%)"


def test_format_report_without_reads():
    cfg = Config(site_caps=[5], num_writes=10, num_reads=0)
    site = Site(site_id=1, capacity=5, known_keys=set(range(5)))
    lines = format_report(site_stats([site], 0), summarize(cfg, set(range(5, 10)), NO_READS))

    assert lines == ["site 1: 5/5 (100.00% full)", "unable to write: 5 (50.00%)"]


def test_primary_share_sums_to_one_and_tracks_capacity():
    sites = [Site(site_id=i + 1, capacity=c) for i, c in enumerate([30, 10, 10])]
    df = primary_share(sites, RendezvousScorer(seed=2), 6000)

    assert df["primary_share"].sum() == pytest.approx(1.0)
    assert df["capacity_share"].tolist() == pytest.approx([0.6, 0.2, 0.2])
    np.testing.assert_allclose(df["primary_share"], df["capacity_share"], atol=0.03)
    # ranking only
    assert all(s.used == 0 and s.read_hits == 0 for s in sites)


def test_seed_spread():
    long_df = pd.DataFrame({
        "seed": [0, 1, 2, 3],
        "unwritable_ratio": [0.1, 0.2, 0.3, np.nan],
        "probe_hit_ratio": [1.0, 1.0, 1.0, 1.0],
    })
    out = seed_spread(long_df, ["unwritable_ratio", "probe_hit_ratio"])

    assert out["metric"].tolist() == ["unwritable_ratio", "probe_hit_ratio"]
    row = out.set_index("metric").loc["unwritable_ratio"]
    assert row["n"] == 3
    assert row["mean"] == pytest.approx(0.2)
    assert row["std"] == pytest.approx(0.1)
    assert row["ci95_low"] < 0.2 < row["ci95_high"]

    flat = out.set_index("metric").loc["probe_hit_ratio"]
    assert flat["std"] == 0.0
    assert flat["ci95_low"] == flat["ci95_high"] == 1.0


def test_seed_spread_single_seed():
    out = seed_spread(pd.DataFrame({"unwritable_ratio": [0.5]}), ["unwritable_ratio"])
    assert out.loc[0, "n"] == 1
    assert out.loc[0, "std"] == 0.0
    assert out.loc[0, "ci95_low"] == out.loc[0, "ci95_high"] == 0.5
