# config.py
from dataclasses import dataclass, field
from typing import List

READ_DISTS = ("uniform", "zipf")


class ConfigError(ValueError):
    """Raised when a simulation config is rejected before any state is built."""


@dataclass
class Config:
    # hash seed; the read workload uses seed + 1
    seed: int = 7

    # cluster: one entry per site, list order gives the site ids 1..n
    site_caps: List[int] = field(default_factory=lambda: [20000, 10000, 10000, 10000])
    replication_factor: int = 1

    # workload
    num_writes: int = 1000
    num_reads: int = 10000

    # "uniform": every written key equally likely
    # "zipf": low key ids are hot, exponent zipf_s
    read_dist: str = "uniform"
    zipf_s: float = 1.1


def parse_site_caps(text: str) -> List[int]:
    """
    "20000,10000,10000" -> [20000, 10000, 10000]
    Every entry must be a positive integer.
    """
    if text is None or not text.strip():
        raise ConfigError("please supply --site_caps")

    caps = []
    for raw in text.split(","):
        s = raw.strip()
        try:
            c = int(s)
        except ValueError:
            raise ConfigError(f"invalid site capacity: {s!r}") from None
        if c <= 0:
            raise ConfigError(f"site capacity must be positive, got {c}")
        caps.append(c)
    return caps


def _is_int(v) -> bool:
    # bool is an int subclass, reject it explicitly
    return isinstance(v, int) and not isinstance(v, bool)


def validate(cfg: Config) -> Config:
    if not _is_int(cfg.seed) or cfg.seed < 0:
        raise ConfigError(f"seed must be a non-negative integer, got {cfg.seed!r}")

    if not cfg.site_caps:
        raise ConfigError("at least one site is required")
    for c in cfg.site_caps:
        if not _is_int(c) or c <= 0:
            raise ConfigError(f"site capacity must be a positive integer, got {c!r}")

    n_sites = len(cfg.site_caps)
    if not _is_int(cfg.replication_factor) or cfg.replication_factor < 1:
        raise ConfigError(f"replication factor must be a positive integer, got {cfg.replication_factor!r}")
    if cfg.replication_factor > n_sites:
        raise ConfigError(
            f"replication factor {cfg.replication_factor} is greater than num sites ({n_sites})"
        )

    if not _is_int(cfg.num_writes) or cfg.num_writes < 0:
        raise ConfigError(f"num_writes must be an integer >= 0, got {cfg.num_writes!r}")
    if not _is_int(cfg.num_reads) or cfg.num_reads < 0:
        raise ConfigError(f"num_reads must be an integer >= 0, got {cfg.num_reads!r}")

    if cfg.read_dist not in READ_DISTS:
        raise ConfigError(f"unknown read_dist: {cfg.read_dist}")
    if cfg.zipf_s <= 0:
        raise ConfigError("zipf_s must be > 0.")
    return cfg
