# main.py
import os
import argparse

import pandas as pd

from .config import Config, ConfigError, parse_site_caps, validate
from .gen_data import gen_sites, gen_workload
from .metrics import format_report, primary_share, seed_spread, site_stats, summarize
from .placement import place_writes, verify_placement
from .plot import plot_site_load
from .routing import route_reads
from .scoring import RendezvousScorer


def run_one(cfg: Config):
    """
    One full simulation: write phase, then read phase.
    Returns (summary, stats, sites); sites carry their final keys and counters.
    """
    validate(cfg)

    sites = gen_sites(cfg)
    scorer = RendezvousScorer(seed=cfg.seed)

    placement, unwritable = place_writes(cfg, sites, scorer)

    # capacity / all-or-nothing / conservation
    verify_placement(sites, placement, unwritable, cfg)

    workload = gen_workload(cfg)
    counters = route_reads(sites, scorer, unwritable, workload["key"].to_numpy())
    if counters["exhausted"]:
        print(f"[WARN] {counters['exhausted']} reads of written keys found no replica")

    summary = summarize(cfg, unwritable, counters)
    stats = site_stats(sites, cfg.num_reads)
    return summary, stats, sites


def parse_args(argv=None):
    base = Config()
    ap = argparse.ArgumentParser(
        prog="rendezvous-sim",
        description="Capacity-aware weighted rendezvous hashing simulator",
    )
    ap.add_argument("--site_caps", type=str, default=",".join(str(c) for c in base.site_caps),
                    help="comma separated list of integers, each of which represents a site and its capacity")
    ap.add_argument("--rf", type=int, default=base.replication_factor, help="replication factor")
    ap.add_argument("--num_writes", type=int, default=base.num_writes, help="number of writes")
    ap.add_argument("--num_reads", type=int, default=base.num_reads,
                    help="number of reads, drawn from the written key range")
    ap.add_argument("--seed", type=int, default=base.seed, help="hash seed; reads use seed + 1")
    ap.add_argument("--read_dist", type=str, default=base.read_dist, choices=["uniform", "zipf"])
    ap.add_argument("--zipf_s", type=float, default=base.zipf_s)
    ap.add_argument("--out_dir", type=str, default=None,
                    help="write site_stats.csv / summary.csv / primary_share.csv here")
    ap.add_argument("--plot", action="store_true", help="also write site_load.png (needs --out_dir)")
    ap.add_argument("--seeds", type=str, default=None,
                    help="multi-seed mode, e.g. 0,1,2,3,4; overrides --seed")
    return ap, ap.parse_args(argv)


def build_config(args) -> Config:
    cfg = Config(
        seed=args.seed,
        site_caps=parse_site_caps(args.site_caps),
        replication_factor=args.rf,
        num_writes=args.num_writes,
        num_reads=args.num_reads,
        read_dist=args.read_dist,
        zipf_s=args.zipf_s,
    )
    return validate(cfg)


def write_outputs(out_dir, cfg, summary, stats, sites, plot=False):
    os.makedirs(out_dir, exist_ok=True)

    stats.to_csv(os.path.join(out_dir, "site_stats.csv"), index=False, encoding="utf-8-sig")
    pd.DataFrame([summary]).to_csv(os.path.join(out_dir, "summary.csv"), index=False, encoding="utf-8-sig")

    share = primary_share(sites, RendezvousScorer(seed=cfg.seed), cfg.num_writes)
    share.to_csv(os.path.join(out_dir, "primary_share.csv"), index=False, encoding="utf-8-sig")

    print("[INFO] wrote:", os.path.join(out_dir, "site_stats.csv"))
    print("[INFO] wrote:", os.path.join(out_dir, "summary.csv"))
    print("[INFO] wrote:", os.path.join(out_dir, "primary_share.csv"))

    if plot:
        png = os.path.join(out_dir, "site_load.png")
        plot_site_load(stats, png, title=f"rf={cfg.replication_factor} writes={cfg.num_writes} seed={cfg.seed}")
        print("[INFO] wrote:", png)


def run_seeds(cfg: Config, seeds, out_dir=None):
    """
    Same config, one run per seed.
    Returns (per-seed summary frame, mean/std/ci of the unwritable and probe-hit ratios).
    """
    rows = []
    for s in seeds:
        c = Config(**vars(cfg))
        c.seed = int(s)
        summary, _, _ = run_one(c)
        rows.append(summary)
        print(f"[DONE] seed={s} => unwritable={summary['unwritable']} "
              f"({summary['unwritable_ratio'] * 100:.2f}%) probe_hit_ratio={summary['probe_hit_ratio']:.4f}")

    long_df = pd.DataFrame(rows)
    agg_df = seed_spread(long_df, ["unwritable_ratio", "probe_hit_ratio"])

    if out_dir is not None:
        os.makedirs(out_dir, exist_ok=True)
        long_out = os.path.join(out_dir, "seed_summary_long.csv")
        agg_out = os.path.join(out_dir, "seed_summary_agg.csv")
        long_df.to_csv(long_out, index=False, encoding="utf-8-sig")
        agg_df.to_csv(agg_out, index=False, encoding="utf-8-sig")
        print("[INFO] wrote:", long_out)
        print("[INFO] wrote:", agg_out)

    return long_df, agg_df


def main(argv=None):
    ap, args = parse_args(argv)

    try:
        cfg = build_config(args)
    except ConfigError as e:
        # exits with status 2 before anything is simulated
        ap.error(str(e))

    if args.plot and args.out_dir is None:
        ap.error("--plot needs --out_dir")

    if args.seeds is not None:
        try:
            seeds = [int(x.strip()) for x in args.seeds.split(",") if x.strip()]
        except ValueError:
            ap.error(f"invalid --seeds: {args.seeds!r}")
        if not seeds:
            ap.error("--seeds is empty")
        if args.plot:
            ap.error("--plot is not supported with --seeds")
        for s in seeds:
            try:
                validate(Config(**{**vars(cfg), "seed": s}))
            except ConfigError as e:
                ap.error(f"--seeds: {e}")
        _, agg_df = run_seeds(cfg, seeds, out_dir=args.out_dir)
        print(agg_df)
        return 0

    summary, stats, sites = run_one(cfg)
    for line in format_report(stats, summary):
        print(line)

    if args.out_dir is not None:
        write_outputs(args.out_dir, cfg, summary, stats, sites, plot=args.plot)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
