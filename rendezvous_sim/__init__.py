"""
rendezvous_sim - capacity-aware weighted rendezvous hashing simulator.
"""

from .config import Config, ConfigError, parse_site_caps, validate
from .site import Site
from .scoring import RendezvousScorer, rank_sites, score_table
from .placement import place_writes, verify_placement
from .routing import route_reads
from .main import run_one

__all__ = [
    "Config",
    "ConfigError",
    "parse_site_caps",
    "validate",
    "Site",
    "RendezvousScorer",
    "rank_sites",
    "score_table",
    "place_writes",
    "verify_placement",
    "route_reads",
    "run_one",
]

__version__ = "0.1.0"
