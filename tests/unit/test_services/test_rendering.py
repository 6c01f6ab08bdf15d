"""Unit tests for the text views of boards and games."""

from models.domain_models import Board, Game, GameStatus
from services.rendering import blind_projection, render_board, render_game_status
from tests.factories import board, plant, started_game


def _rows(text: str) -> list[str]:
    assert text.endswith("\n")
    return text.split("\n")[:-1]


class TestRenderBoard:

    def test_empty_board(self) -> None:
        assert render_board(Board(), 5) == ".....\n" * 5

    def test_plant_symbols(self) -> None:
        b = board(plant("SOLAR", "A1"), plant("WIND", "B2", "B3"), plant("GAS", "D4", "D5", "E4", "E5"))
        assert _rows(render_board(b, 5)) == [
            "S....",
            ".WW..",
            ".....",
            "...GG",
            "...GG",
        ]

    def test_hits_and_misses_override_plants(self) -> None:
        b = board(plant("SOLAR", "A1"))
        b.hits = ["A1"]
        b.misses = ["B2"]
        rows = _rows(render_board(b, 5))
        assert rows[0] == "X...."
        assert rows[1] == ".O..."

    def test_blind_hides_plants(self) -> None:
        b = board(plant("NUCLEAR", "A1", "A2", "A3", "B1", "B2", "B3", "C1", "C2", "C3"))
        b.misses = ["E5"]
        rows = _rows(render_board(b, 5, blind=True))
        assert rows[:3] == ["....."] * 3
        assert rows[4] == "....O"
        assert "N" not in render_board(b, 5, blind=True)

    def test_row_count_matches_size(self) -> None:
        assert len(_rows(render_board(Board(), 12))) == 12
        assert all(len(r) == 12 for r in _rows(render_board(Board(), 12)))


class TestBlindProjection:

    def test_strips_coordinates_only(self) -> None:
        b = board(plant("SOLAR", "A1"), plant("WIND", "B1", "B2"))
        b.hits = ["A1"]
        b.misses = ["C3"]
        b.total_capacity = 125
        b.capacity = 100

        blind = blind_projection(b)

        assert [p.type for p in blind.plants] == ["SOLAR", "WIND"]
        assert all(p.coordinates == [] for p in blind.plants)
        assert blind.hits == ["A1"]
        assert blind.misses == ["C3"]
        assert (blind.total_capacity, blind.capacity) == (125, 100)

    def test_source_board_untouched(self) -> None:
        b = board(plant("SOLAR", "A1"))
        blind = blind_projection(b)
        blind.hits.append("E5")
        assert b.plants[0].coordinates == ["A1"]
        assert b.hits == []


class TestRenderGameStatus:

    def test_pending_game_lists_players_alphabetically(self, engine) -> None:
        game = Game(id="abc123", size=5, capacity=100)
        engine.join(game, "bob")
        engine.join(game, "alice")

        assert render_game_status(game) == (
            "Game ID: abc123\n"
            "Status: PENDING\n"
            "Players:\n"
            "- alice: Ready=False, Capacity=0/0\n"
            "- bob: Ready=False, Capacity=0/0\n"
        )

    def test_started_game_shows_turn(self) -> None:
        game = started_game()
        text = render_game_status(game)
        assert "Status: IN_PROGRESS\n" in text
        assert "Turn: alice\n" in text
        assert "Winner:" not in text
        assert "- bob: Ready=True, Capacity=100/100\n" in text

    def test_ended_game_shows_winner(self) -> None:
        game = started_game()
        game.status = GameStatus.ENDED
        game.winner = "alice"
        text = render_game_status(game)
        assert "Status: END\n" in text
        assert "Winner: alice\n" in text
