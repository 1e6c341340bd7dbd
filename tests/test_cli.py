import json

import pytest

from groupseeding.cli import (
    EXIT_FAILURE,
    EXIT_INVALID_DISTRIBUTION,
    EXIT_OK,
    build_config,
    create_parser,
    main,
)
from groupseeding.distribution import DistributionConfig, DistributionStrategy
from groupseeding.exceptions import FileLoadException, InvalidPlayerDataException
from groupseeding.storage import load_config, load_players, parse_players, save_json
from groupseeding.utils.validation import validate_strength


def _write_players(tmp_path, count=6):
    path = tmp_path / "players.json"
    players = [
        {"id": f"p{i}", "name": f"Player {i}", "strength": 100 - i}
        for i in range(1, count + 1)
    ]
    path.write_text(json.dumps({"players": players}), encoding="utf-8")
    return path


def test_distribute_json_output(tmp_path, capsys):
    players = _write_players(tmp_path)
    code = main(
        [
            "distribute",
            str(players),
            "--tiers",
            "Gold",
            "--groups",
            "2",
            "--max",
            "3",
            "--strategy",
            "SnakeDraft",
            "--format",
            "json",
        ]
    )
    assert code == EXIT_OK

    payload = json.loads(capsys.readouterr().out)
    assert payload["config"]["strategy"] == "snake_draft"
    groups = payload["result"]["groups"]
    assert [[p["id"] for p in g["players"]] for g in groups] == [
        ["p1", "p4", "p5"],
        ["p2", "p3", "p6"],
    ]
    assert payload["validation"]["is_valid"] is True
    assert payload["preview"]["total_players"] == 6


def test_distribute_text_output_to_file(tmp_path, capsys):
    players = _write_players(tmp_path, count=4)
    output = tmp_path / "out" / "groups.txt"
    code = main(
        ["distribute", str(players), "--tiers", "Gold", "--max", "4", "--output", str(output)]
    )
    assert code == EXIT_OK
    assert "Result saved to:" in capsys.readouterr().out

    text = output.read_text(encoding="utf-8")
    assert text.startswith("=== Group Distribution ===")
    assert "Gold - Group 1:" in text
    assert "Validation successful" in text


def test_distribute_json_output_to_file(tmp_path):
    players = _write_players(tmp_path, count=4)
    output = tmp_path / "groups.json"
    code = main(
        ["distribute", str(players), "--tiers", "Gold", "--format", "json", "--output", str(output)]
    )
    assert code == EXIT_OK
    payload = json.loads(output.read_text(encoding="utf-8"))
    assert payload["result"]["total_players"] == 4


def test_distribute_uses_config_file_with_overrides(tmp_path, capsys):
    players = _write_players(tmp_path, count=6)
    config_path = tmp_path / "config.json"
    save_json(
        {
            "selected_tiers": ["Gold", "Silber"],
            "groups_per_tier": 1,
            "max_per_group": 3,
            "tier_rules": {"Gold": {"skip": True}},
        },
        config_path,
    )
    code = main(
        ["distribute", str(players), "--config", str(config_path), "--max", "2", "--format", "json"]
    )
    assert code == EXIT_OK

    payload = json.loads(capsys.readouterr().out)
    assert payload["config"]["max_per_group"] == 2
    assert {g["tier"] for g in payload["result"]["groups"]} == {"Silber"}
    assert payload["result"]["unassigned_count"] == 4


def test_distribute_without_groups_is_invalid(tmp_path, capsys):
    players = _write_players(tmp_path, count=1)
    code = main(["distribute", str(players), "--tiers", "Gold"])
    assert code == EXIT_INVALID_DISTRIBUTION
    assert "No group distribution available" in capsys.readouterr().out


def test_missing_player_file_fails(tmp_path):
    assert main(["distribute", str(tmp_path / "nope.json")]) == EXIT_FAILURE


def test_malformed_player_file_fails(tmp_path):
    path = tmp_path / "players.json"
    path.write_text("{not json", encoding="utf-8")
    assert main(["distribute", str(path)]) == EXIT_FAILURE


def test_undecodable_player_file_fails(tmp_path):
    path = tmp_path / "players.json"
    path.write_bytes(b"\xff\xfe[]")
    assert main(["distribute", str(path), "--tiers", "Gold"]) == EXIT_FAILURE

    with pytest.raises(FileLoadException, match="Cannot decode"):
        load_players(path)


def test_negative_count_is_rejected_by_parser():
    with pytest.raises(SystemExit):
        create_parser().parse_args(["distribute", "players.json", "--groups", "-1"])


def test_unknown_strategy_is_rejected_by_parser():
    with pytest.raises(SystemExit):
        create_parser().parse_args(["distribute", "players.json", "--strategy", "zigzag"])


def test_build_config_defaults_and_overrides():
    args = create_parser().parse_args(["distribute", "players.json"])
    config = build_config(args)
    assert config.selected_tiers == ("Platin",)
    assert config.strategy is DistributionStrategy.BALANCED

    args = create_parser().parse_args(
        ["distribute", "players.json", "--tiers", "Gold", "Eisen", "--min", "1"]
    )
    base = DistributionConfig(selected_tiers=("Bronze",), max_per_group=8)
    config = build_config(args, base)
    assert config.selected_tiers == ("Gold", "Eisen")
    assert config.min_per_group == 1
    assert config.max_per_group == 8


def test_parse_players_keeps_ranking_order():
    players = parse_players(
        [
            {"id": "b", "name": "Bea", "strength": 10},
            {"id": "a", "name": "Ann", "strength": 90},
        ]
    )
    assert [p.id for p in players] == ["b", "a"]
    assert players[1].strength == 90.0


def test_parse_players_generates_missing_ids():
    players = parse_players([{"name": "Ann"}, {"name": "Bea"}])
    assert players[0].id != players[1].id
    assert players[0].strength == 0.0


@pytest.mark.parametrize(
    "data",
    [
        "players",
        {"members": []},
        [{"strength": 3}],
        [{"name": "Ann", "strength": "strong"}],
        [{"name": "Ann", "strength": True}],
        [{"name": "Ann", "strength": 10**400}],
        [{"id": "x", "name": "Ann"}, {"id": "x", "name": "Bea"}],
    ],
)
def test_parse_players_rejects_invalid_data(data):
    with pytest.raises(InvalidPlayerDataException):
        parse_players(data)


def test_parse_players_reports_entry_position():
    with pytest.raises(InvalidPlayerDataException, match="Player #2"):
        parse_players([{"name": "Ann"}, {"name": ""}])


def test_load_players_and_config_round_trip_files(tmp_path):
    players_path = _write_players(tmp_path, count=3)
    assert [p.id for p in load_players(players_path)] == ["p1", "p2", "p3"]

    config = DistributionConfig(selected_tiers=("Gold",), groups_per_tier=3)
    config_path = tmp_path / "nested" / "config.json"
    save_json(config.to_dict(), config_path)
    assert load_config(config_path) == config


def test_load_config_missing_file(tmp_path):
    with pytest.raises(FileLoadException):
        load_config(tmp_path / "missing.json")


def test_oversized_strength_is_rejected(tmp_path):
    result = validate_strength(10**400)
    assert not result
    assert "Strength must be a number" in result.error_message

    path = tmp_path / "players.json"
    path.write_text('[{"name": "Ann", "strength": 1' + "0" * 400 + "}]", encoding="utf-8")
    assert main(["distribute", str(path), "--tiers", "Gold"]) == EXIT_FAILURE
