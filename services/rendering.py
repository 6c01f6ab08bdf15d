"""Text views of boards and games."""
from models.domain_models import Board, Game, GameStatus, Plant, plant_spec
from . import coordinates

EMPTY = "."
HIT = "X"
MISS = "O"


def blind_projection(board: Board) -> Board:
    """Copy of `board` safe to hand to an opponent.

    Hits, misses and capacities are kept; plants keep their type but lose
    their coordinates.
    """
    return Board(
        plants=[Plant(type=p.type, coordinates=[]) for p in board.plants],
        hits=list(board.hits),
        misses=list(board.misses),
        total_capacity=board.total_capacity,
        capacity=board.capacity,
    )


def render_board(board: Board, size: int, blind: bool = False) -> str:
    """Render a board as `size` lines of `size` characters.

    Plant cells show their type symbol unless `blind`; hits and misses are
    drawn last so they always win over a plant symbol.
    """
    grid = [[EMPTY] * size for _ in range(size)]

    if not blind:
        for plant in board.plants:
            spec = plant_spec(plant.type)
            symbol = spec.symbol if spec else "?"
            for coord in plant.coordinates:
                row, col = coordinates.validate(coord, size)
                grid[row][col] = symbol

    for coord in board.hits:
        row, col = coordinates.validate(coord, size)
        grid[row][col] = HIT
    for coord in board.misses:
        row, col = coordinates.validate(coord, size)
        grid[row][col] = MISS

    return "".join("".join(row) + "\n" for row in grid)


def render_game_status(game: Game) -> str:
    lines = [
        f"Game ID: {game.id}",
        f"Status: {game.status.value}",
    ]
    if game.status != GameStatus.PENDING:
        lines.append(f"Turn: {game.turn}")
    if game.winner is not None:
        lines.append(f"Winner: {game.winner}")
    lines.append("Players:")
    for name in game.player_order():
        info = game.players[name]
        lines.append(f"- {name}: Ready={info.ready}, Capacity={info.capacity}/{info.total_capacity}")
    return "\n".join(lines) + "\n"
