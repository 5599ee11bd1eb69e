import pytest

from rendezvous_sim.config import Config, ConfigError, parse_site_caps, validate


def test_parse_site_caps():
    assert parse_site_caps("20000,10000, 10000,10000") == [20000, 10000, 10000, 10000]
    assert parse_site_caps("5") == [5]


@pytest.mark.parametrize("text", ["", "   ", "10,abc", "10,,20", "1.5", "0", "10,-3"])
def test_parse_site_caps_rejects_bad_input(text):
    with pytest.raises(ConfigError):
        parse_site_caps(text)


def test_config_error_is_value_error():
    with pytest.raises(ValueError):
        parse_site_caps("x")


def test_default_config_is_valid():
    cfg = Config()
    assert validate(cfg) is cfg


def test_replication_factor_greater_than_sites():
    cfg = Config(site_caps=[10, 10], replication_factor=3)
    with pytest.raises(ConfigError, match="greater than num sites"):
        validate(cfg)


def test_replication_factor_equal_to_sites_is_allowed():
    validate(Config(site_caps=[10, 10], replication_factor=2))


@pytest.mark.parametrize("kwargs", [
    {"site_caps": []},
    {"site_caps": [10, 0]},
    {"site_caps": [10, True]},
    {"site_caps": [10, 2.5]},
    {"replication_factor": 0},
    {"num_writes": -1},
    {"num_reads": -1},
    {"read_dist": "pareto"},
    {"zipf_s": 0.0},
])
def test_validate_rejects(kwargs):
    with pytest.raises(ConfigError):
        validate(Config(**kwargs))


@pytest.mark.parametrize("seed", [-1, -2, -5, 1.5, True, "7"])
def test_validate_rejects_bad_seed(seed):
    with pytest.raises(ConfigError, match="seed"):
        validate(Config(seed=seed))


def test_validate_accepts_large_seed():
    validate(Config(seed=10**70))


@pytest.mark.parametrize("kwargs", [
    {"replication_factor": 1.0},
    {"replication_factor": True},
    {"num_writes": 10.0},
    {"num_reads": 2.5},
])
def test_validate_rejects_non_integer_counts(kwargs):
    with pytest.raises(ConfigError):
        validate(Config(**kwargs))
