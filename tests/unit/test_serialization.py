"""Tests for knightsprint.engine.serialization and event dumps."""

import json

import pytest

from knightsprint.engine.resolution import resolve, submit_intent
from knightsprint.engine.serialization import (
    SNAPSHOT_KEYS,
    config_from_snapshot,
    replay_snapshot,
    serialize_state,
    snapshot_to_json,
    verify_replay,
)
from knightsprint.engine.setup import create_game
from knightsprint.models.events import (
    CollisionEvent,
    MoveEvent,
    events_from_dicts,
    events_to_dicts,
)


class TestSerializeState:
    """Tests for the snapshot layout."""

    def test_keys(self, two_player_state):
        assert tuple(serialize_state(two_player_state)) == SNAPSHOT_KEYS

    def test_player_fields_are_camel_case(self, two_player_state):
        player = serialize_state(two_player_state)["players"][0]
        assert player == {
            "id": 0,
            "isHuman": True,
            "status": "alive",
            "row": 1,
            "col": 1,
            "score": 1,
            "aiStrategy": None,
        }

    def test_ruleset_fields(self, two_player_state):
        assert serialize_state(two_player_state)["ruleset"] == {
            "timerSeconds": 0,
            "obstacleCount": 0,
            "fogOfWar": False,
            "shrinkBoard": False,
        }

    def test_history_records(self, two_player_state):
        state = submit_intent(two_player_state, 0, (3, 2))
        state, _ = resolve(state)
        history = serialize_state(state)["history"]
        assert history == [
            {"turn": 0, "moves": [{"playerId": 0, "from": [1, 1], "to": [3, 2]}]}
        ]

    def test_rng_and_intents_excluded(self, two_player_state):
        state = submit_intent(two_player_state, 0, (3, 2))
        snapshot = serialize_state(state)
        assert "rng" not in snapshot
        assert "pendingIntents" not in snapshot

    def test_json_text(self, two_player_state):
        data = json.loads(snapshot_to_json(two_player_state))
        assert data["boardSize"] == 8
        assert data["phase"] == "select"


class TestReplay:
    def test_config_round_trip(self):
        state = create_game(board_size=9, seed=17, player_count=3, cpu_count=2, obstacle_count=4)
        config = config_from_snapshot(serialize_state(state))
        assert config.board_size == 9
        assert config.seed == 17
        assert config.player_count == 3
        assert config.cpu_count == 2
        assert config.obstacle_count == 4
        assert config.player_strategies == {1: "mobility", 2: "aggressor"}

    def test_replay_reproduces_manual_rounds(self, two_player_state):
        state = two_player_state
        for intents in ({0: (3, 2), 1: (4, 5)}, {0: (5, 3), 1: (5, 3)}, {0: (4, 4)}):
            for pid, dest in intents.items():
                state = submit_intent(state, pid, dest)
            state, _ = resolve(state)

        snapshot = serialize_state(state)
        replayed = replay_snapshot(snapshot)

        assert replayed.grid == state.grid
        assert replayed.turn == 3
        assert [p.position for p in replayed.players] == [p.position for p in state.players]

    def test_verify_replay_detects_tampering(self, two_player_state):
        state = submit_intent(two_player_state, 0, (3, 2))
        state, _ = resolve(state)
        snapshot = serialize_state(state)
        snapshot["players"][0]["score"] = 5
        assert verify_replay(snapshot) is False

    @pytest.mark.parametrize(
        "snapshot",
        [
            {},
            {"boardSize": 8, "seed": 1},
            {"boardSize": 2, "seed": 1, "players": [{"id": 0, "isHuman": True}] * 2},
            {"boardSize": 8, "seed": 1, "players": "nope"},
        ],
    )
    def test_malformed_snapshot_raises_value_error(self, snapshot):
        with pytest.raises(ValueError):
            replay_snapshot(snapshot)


class TestEventDumps:
    def test_event_dicts(self):
        events = [
            MoveEvent(player_id=0, from_=(1, 1), to=(3, 2)),
            CollisionEvent(square=(3, 2), player_ids=[0, 1]),
        ]
        dumped = events_to_dicts(events)
        assert dumped == [
            {"type": "move", "playerId": 0, "from": [1, 1], "to": [3, 2]},
            {"type": "collision", "square": [3, 2], "playerIds": [0, 1]},
        ]
        assert events_from_dicts(dumped) == events
