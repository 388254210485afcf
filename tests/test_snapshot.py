"""Tests for the snapshot codec and Game save/load."""

import json

import pytest

from tilegame.config import GameConfig
from tilegame.core.enums import GameStatus, GoodieType
from tilegame.core.errors import BoardNotReady, SnapshotError
from tilegame.core.game import Game
from tilegame.core.grid import Grid
from tilegame.core.models import Goodie, Vector2
from tilegame.persistence import snapshot
from tilegame.persistence.snapshot import SNAPSHOT_VERSION, BlockItem, PlayerItem
from tilegame.persistence.store import FileStore, MemoryStore


def _make_game(width: int = 5, height: int = 5, **overrides) -> Game:
    game = Game(GameConfig(**overrides))
    game.create_board(width, height)
    return game


def _occupancy(game: Game) -> dict[Vector2, tuple]:
    return {pos: (g.type, g.visual, g.value, g.sound) for pos, g in game.grid.occupied()}


class TestEncode:
    def test_layout_keyed_by_x_then_y(self):
        grid = Grid(3, 2)
        g = Goodie.create(GoodieType.FOOD, 50, visual="apple", energy=40)
        g.pos = Vector2(2, 1)
        grid.set(g.pos, g)

        data = snapshot.encode(grid)
        assert data["version"] == SNAPSHOT_VERSION
        assert (data["width"], data["height"]) == (3, 2)
        assert sorted(data["tiles"]) == ["0", "1", "2"]
        assert sorted(data["tiles"]["0"]) == ["0", "1"]
        assert data["tiles"]["0"]["0"] is False
        assert data["tiles"]["2"]["1"]["item"] == "block"
        assert data["tiles"]["2"]["1"]["value"] == 40

    def test_players_written_into_their_tile(self):
        game = _make_game(3, 3)
        game.add_player("Ann", "girl", Vector2(1, 2))
        data = json.loads(game.save_game_state())
        leaf = data["tiles"]["1"]["2"]
        assert leaf == {"item": "player", "name": "Ann", "type": "girl", "health": 100, "active": True}

    def test_dumps_is_json(self):
        text = snapshot.dumps(Grid(2, 2))
        assert json.loads(text)["tiles"]["1"]["1"] is False


class TestDecode:
    def test_entries_sorted_x_then_y(self):
        data = {
            "version": 1, "width": 3, "height": 3,
            "tiles": {
                "2": {"0": {"item": "block"}},
                "0": {"2": {"item": "player", "name": "A", "type": "t"}, "1": {"item": "block", "value": 7}},
            },
        }
        decoded = snapshot.decode(data)
        assert [pos for pos, _ in decoded.entries] == [Vector2(0, 1), Vector2(0, 2), Vector2(2, 0)]
        assert isinstance(decoded.entries[0][1], BlockItem)
        assert isinstance(decoded.entries[1][1], PlayerItem)
        assert decoded.blocks[0][1].value == 7

    def test_legacy_snapshot_without_version(self):
        legacy = {"0": {"0": False, "1": {"item": "block"}}, "1": {"0": False, "1": False}}
        decoded = snapshot.decode(json.dumps(legacy))
        assert (decoded.width, decoded.height) == (2, 2)
        assert decoded.blocks[0][0] == Vector2(0, 1)
        assert decoded.blocks[0][1].value is None

    @pytest.mark.parametrize(
        "payload",
        [
            "not json",
            "[1, 2]",
            json.dumps({"version": 1, "width": 2, "height": 2, "tiles": {"0": {"0": {"item": "dragon"}}}}),
            json.dumps({"version": 1, "width": 2, "height": 2, "tiles": {"5": {"0": False}}}),
            json.dumps({"version": 1, "width": 2, "height": 2, "tiles": {"a": {"0": False}}}),
            json.dumps({"version": 99, "width": 2, "height": 2, "tiles": {}}),
            json.dumps({"version": 1, "width": 0, "height": 2, "tiles": {}}),
            json.dumps({"version": 1, "width": 2, "height": 2, "tiles": {"0": {"0": {"item": "player"}}}}),
            json.dumps({"version": 1, "width": 2, "height": 2, "tiles": {"01": {"0": False}}}),
            json.dumps({"version": 1, "width": 2, "height": 2, "tiles": {"0": {"+1": False}}}),
            json.dumps(
                {
                    "version": 1,
                    "width": 3,
                    "height": 3,
                    "tiles": {"1": {"1": {"item": "block", "value": 5}, "01": {"item": "block", "value": 9}}},
                }
            ),
            json.dumps(
                {
                    "version": 1,
                    "width": 3,
                    "height": 3,
                    "tiles": {"1": {"1": {"item": "block"}, " 1": {"item": "player", "name": "A", "type": "t"}}},
                }
            ),
        ],
    )
    def test_bad_snapshots_rejected(self, payload):
        with pytest.raises(SnapshotError):
            snapshot.decode(payload)


class TestSaveLoad:
    def test_round_trip_on_unchanged_board(self):
        game = _make_game(6, 4)
        game.add_goodies(7, visual="apple", sound="crunch")
        before = _occupancy(game)

        text = game.save_game_state()
        placed = game.load_game_state(text)

        assert placed == 7
        assert _occupancy(game) == before
        assert len(game.goodies) == 7
        assert all(game.grid.get(g.pos) is g for g in game.goodies)

    def test_round_trip_into_fresh_game(self):
        source = _make_game(6, 4)
        source.add_goodies(5, energy=12)
        store = MemoryStore()
        source.save_game_state(store)

        target = _make_game(6, 4)
        assert target.load_game_state(store) == 5
        assert _occupancy(target) == _occupancy(source)
        assert target.status == GameStatus.BOARD_READY

    def test_players_restored(self):
        game = _make_game(5, 5)
        game.add_player("Ann", "girl", Vector2(0, 0))
        game.add_player("Bob", "boy", Vector2(3, 3))
        game.set_active_player(0)
        game.move_right()
        text = game.save_game_state()

        other = _make_game(5, 5)
        assert other.load_game_state(text) == 2
        assert [(p.name, p.type, p.pos, p.health) for p in other.players] == [
            ("Ann", "girl", Vector2(1, 0), 80),
            ("Bob", "boy", Vector2(3, 3), 100),
        ]
        assert other.active_index == 0
        assert other.status == GameStatus.IN_PROGRESS

    def test_missing_player_health_uses_start_energy(self):
        game = _make_game(2, 2, start_energy=55)
        data = {"version": 1, "width": 2, "height": 2,
                "tiles": {"1": {"1": {"item": "player", "name": "Ann", "type": "girl"}}}}
        game.load_game_state(data)
        assert game.active_player.health == 55
        assert game.active_player.pos == Vector2(1, 1)

    def test_missing_block_value_uses_goodie_energy(self):
        game = _make_game(2, 2, goodie_energy=33)
        game.load_game_state({"0": {"0": {"item": "block"}, "1": False}, "1": {"0": False, "1": False}})
        assert game.goodies[0].value == 33

    def test_dimension_mismatch_rejected_and_state_kept(self):
        small = _make_game(3, 3)
        small.add_goodies(2)
        text = small.save_game_state()

        game = _make_game(5, 5)
        kept = game.add_goodies(4)
        with pytest.raises(SnapshotError):
            game.load_game_state(text)
        assert game.goodies == kept

    def test_missing_key_in_store_is_noop(self):
        game = _make_game()
        kept = game.add_goodies(3)
        assert game.load_game_state(MemoryStore()) == 0
        assert game.goodies == kept

    def test_save_writes_under_game_state_key(self):
        game = _make_game()
        store = MemoryStore()
        text = game.save_game_state(store)
        assert store.get_item("gameState") == text

    def test_load_needs_board(self):
        with pytest.raises(BoardNotReady):
            Game().load_game_state("{}")

    def test_loaded_food_is_edible(self):
        game = _make_game(3, 1)
        game.add_player("Ann", "girl", Vector2(0, 0))
        game.place_goodie(Vector2(1, 0), energy=40)
        text = game.save_game_state()

        other = _make_game(3, 1)
        other.load_game_state(text)
        other.move_right()
        assert other.active_player.health == 120
        assert other.goodies == []

    def test_stacked_tile_entries_rejected_and_state_kept(self):
        game = _make_game(3, 3)
        kept = game.add_goodies(2)
        data = {
            "version": 1,
            "width": 3,
            "height": 3,
            "tiles": {"1": {"1": {"item": "block", "value": 5}}, "01": {"1": {"item": "block", "value": 9}}},
        }
        with pytest.raises(SnapshotError):
            game.load_game_state(data)
        assert game.goodies == kept
        assert all(game.grid.get(g.pos) is g for g in game.goodies)

    def test_corrupt_state_file_raises_snapshot_error(self, tmp_path):
        path = tmp_path / "state.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(SnapshotError):
            _make_game().load_game_state(FileStore(path))
