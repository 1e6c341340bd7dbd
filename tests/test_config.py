import pytest

from groupseeding.distribution import DistributionConfig, DistributionStrategy, TierRule
from groupseeding.exceptions import InvalidConfigurationException


def _config(**kwargs):
    defaults = dict(
        selected_tiers=("Gold", "Silber"),
        groups_per_tier=2,
        min_per_group=2,
        max_per_group=5,
    )
    defaults.update(kwargs)
    return DistributionConfig(**defaults)


def test_group_count_uses_default_without_rule():
    config = _config()
    assert config.effective_group_count("Gold") == 2
    assert config.effective_group_count("Unknown") == 2


def test_group_count_uses_custom_override():
    config = _config(tier_rules={"Gold": TierRule(custom_group_count=4)})
    assert config.effective_group_count("Gold") == 4
    assert config.effective_group_count("Silber") == 2


def test_skip_takes_precedence_over_custom_group_count():
    config = _config(tier_rules={"Gold": TierRule(custom_group_count=7, skip=True)})
    assert config.effective_group_count("Gold") == 0
    assert config.is_skipped("Gold")
    assert config.active_tiers == ["Silber"]


def test_negative_group_count_resolves_to_zero():
    config = _config(tier_rules={"Gold": TierRule(custom_group_count=-3)})
    assert config.effective_group_count("Gold") == 0


def test_capacity_defaults_to_max_per_group():
    config = _config()
    assert config.effective_capacity("Gold", 0) == 5
    assert config.effective_capacity("Gold", 1) == 5


def test_custom_capacity_is_clamped_into_bounds():
    config = _config(
        tier_rules={
            "Gold": TierRule(custom_capacity=9),
            "Silber": TierRule(custom_capacity=1),
        }
    )
    assert config.effective_capacity("Gold", 0) == 5
    assert config.effective_capacity("Silber", 0) == 2


def test_custom_capacity_inside_bounds_is_kept():
    config = _config(tier_rules={"Gold": TierRule(custom_capacity=3)})
    assert config.effective_capacity("Gold", 0) == 3


def test_inverted_bounds_use_upper_bound():
    config = _config(min_per_group=6, max_per_group=3)
    assert config.effective_capacity("Gold", 0) == 3


def test_totals_ignore_skipped_tiers():
    config = _config(
        tier_rules={
            "Gold": TierRule(custom_group_count=3, custom_capacity=4),
            "Silber": TierRule(skip=True),
        }
    )
    assert config.total_groups == 3
    assert config.total_capacity == 12


def test_copy_is_independent_snapshot():
    config = _config(tier_rules={"Gold": TierRule(custom_group_count=3)})
    snapshot = config.copy()
    assert snapshot == config
    assert snapshot.tier_rules is not config.tier_rules


def test_with_rule_does_not_touch_original():
    config = _config()
    changed = config.with_rule("Gold", TierRule(skip=True))
    assert changed.is_skipped("Gold")
    assert not config.is_skipped("Gold")
    assert not changed.with_rule("Gold", None).is_skipped("Gold")


def test_selected_tiers_become_tuple():
    config = DistributionConfig(selected_tiers=["Gold", "Bronze"])
    assert config.selected_tiers == ("Gold", "Bronze")


@pytest.mark.parametrize(
    "name, expected",
    [
        ("balanced", DistributionStrategy.BALANCED),
        ("SnakeDraft", DistributionStrategy.SNAKE_DRAFT),
        ("snake-draft", DistributionStrategy.SNAKE_DRAFT),
        ("TOP_HEAVY", DistributionStrategy.TOP_HEAVY),
        ("TopHeavy", DistributionStrategy.TOP_HEAVY),
        ("Random", DistributionStrategy.RANDOM),
    ],
)
def test_strategy_parse_accepts_common_spellings(name, expected):
    assert DistributionStrategy.parse(name) is expected


def test_strategy_parse_rejects_unknown_name():
    with pytest.raises(InvalidConfigurationException):
        DistributionStrategy.parse("zigzag")


def test_config_from_dict_applies_defaults():
    config = DistributionConfig.from_dict({"selected_tiers": ["Gold"]})
    assert config.groups_per_tier == 1
    assert config.min_per_group == 2
    assert config.max_per_group == 6
    assert config.strategy is DistributionStrategy.BALANCED
    assert config.tier_rules == {}


def test_config_survives_dict_round_trip():
    config = _config(
        strategy=DistributionStrategy.SNAKE_DRAFT,
        tier_rules={"Gold": TierRule(custom_group_count=3, custom_capacity=4, skip=False)},
    )
    assert DistributionConfig.from_dict(config.to_dict()) == config


@pytest.mark.parametrize(
    "data",
    [
        {"selected_tiers": "Gold"},
        {"selected_tiers": [""]},
        {"groups_per_tier": -1},
        {"max_per_group": "many"},
        {"strategy": "zigzag"},
        {"tier_rules": {"Gold": {"custom_capacity": -2}}},
        {"tier_rules": ["Gold"]},
        {"tier_rules": {"Gold": {"skip": "false"}}},
        {"tier_rules": {"Gold": {"skip": 0}}},
    ],
)
def test_config_from_dict_rejects_malformed_data(data):
    with pytest.raises(InvalidConfigurationException):
        DistributionConfig.from_dict(data)


@pytest.mark.parametrize("value", ["false", "0", "no", 1, None])
def test_tier_rule_skip_must_be_boolean(value):
    with pytest.raises(InvalidConfigurationException):
        TierRule.from_dict({"skip": value})


def test_tier_rule_skip_accepts_booleans():
    assert TierRule.from_dict({"skip": True}).skip is True
    assert TierRule.from_dict({"skip": False}).skip is False
    assert TierRule.from_dict({}).skip is False


def test_config_is_hashable():
    config = _config(tier_rules={"Gold": TierRule(custom_group_count=3)})
    assert hash(config) == hash(config.copy())
    assert len({config, config.copy(), _config()}) == 2
