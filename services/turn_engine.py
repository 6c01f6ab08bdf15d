"""
Game rules: joining, board placement, readiness and strikes.

The engine mutates the `Game` it is handed and knows nothing about locking or
persistence. Every check runs before the first write, so a raised error
always leaves the game untouched. Callers that need atomicity with storage
(see `services.game_registry`) hand the engine a copy and keep the original
until the copy is saved.
"""
import logging
from typing import Callable

from models.domain_models import (
    MAX_PLAYERS,
    Board,
    Game,
    GameStatus,
    Plant,
    PlantType,
    PlayerInfo,
    StrikeResult,
    plant_spec,
)
from stores.exceptions import (
    AlreadyStruck,
    BoardNotSet,
    GameAlreadyStarted,
    GameFull,
    InvalidParameters,
    InvalidPlayer,
    NotInProgress,
    NotYourTurn,
    PlayerAlreadyExists,
    PlayerNotFound,
)
from utils.tokens import generate_token
from . import coordinates
from .board_validation import validate_board

logger = logging.getLogger(__name__)

# A player whose remaining capacity drops to this share of their starting
# capacity (or below) has lost.
LOSS_THRESHOLD_PERCENT = 10


def next_player(game: Game, current: str) -> str:
    """Player after `current` in cyclic alphabetical order."""
    order = game.player_order()
    return order[(order.index(current) + 1) % len(order)]


def has_collapsed(info: PlayerInfo) -> bool:
    return info.capacity * 100 <= info.total_capacity * LOSS_THRESHOLD_PERCENT


class TurnEngine:

    def __init__(self, token_factory: Callable[[], str] = generate_token):
        self.token_factory = token_factory

    # -------------------------------------------------
    # Lobby phase
    # -------------------------------------------------

    def join(self, game: Game, player_name: str) -> str:
        """
        Add a player to a pending game.

        Args:
            game: game to join (mutated)
            player_name: name of the joining player

        Returns:
            the player's secret token

        Raises:
            GameAlreadyStarted: if the game has left PENDING
            InvalidParameters: if the name is empty
            PlayerAlreadyExists: if the name is taken
            GameFull: if the game already has MAX_PLAYERS players
        """
        if game.status != GameStatus.PENDING:
            raise GameAlreadyStarted(f"Game {game.id} has already started")
        if not player_name:
            raise InvalidParameters("player name must not be empty")
        # a taken name is reported even when the game is also full
        if player_name in game.players:
            raise PlayerAlreadyExists(f"Player {player_name} already in game {game.id}")
        if len(game.players) >= MAX_PLAYERS:
            raise GameFull(f"Game {game.id} is full (max {MAX_PLAYERS} players)")

        token = self.token_factory()
        game.players[player_name] = PlayerInfo(token=token)

        # placeholder until every player is ready
        if not game.turn:
            game.turn = game.player_order()[0]

        logger.info(f"Player {player_name} joined game {game.id}")
        return token

    def set_board(self, game: Game, player_name: str, board: Board) -> Board:
        """
        Validate and store a player's plant placement.

        Coordinates are stored in canonical form and strike history starts
        empty.

        Returns:
            the stored board

        Raises:
            GameAlreadyStarted: if the game has left PENDING
            PlayerNotFound: if the player is not in the game
            InvalidBoard (or a subclass) / InvalidCoordinate: if validation fails
        """
        if game.status != GameStatus.PENDING:
            raise GameAlreadyStarted(f"Game {game.id} has already started")
        info = game.players.get(player_name)
        if info is None:
            raise PlayerNotFound(f"Player {player_name} not in game {game.id}")

        total = validate_board(board, game.size, game.capacity)

        stored = Board(
            plants=[
                Plant(
                    type=PlantType(p.type).value,
                    coordinates=[coordinates.normalize(c, game.size) for c in p.coordinates],
                )
                for p in board.plants
            ],
            total_capacity=total,
            capacity=total,
        )
        info.board = stored
        info.total_capacity = total
        info.capacity = total
        return stored

    def set_ready(self, game: Game, player_name: str) -> bool:
        """
        Mark a player ready; start the game once everyone is.

        The game starts only when every player is ready and there are at
        least two of them. The first player in alphabetical order moves
        first.

        Returns:
            True if this call started the game

        Raises:
            GameAlreadyStarted: if the game has left PENDING
            PlayerNotFound: if the player is not in the game
            BoardNotSet: if the player has not placed any plants
        """
        if game.status != GameStatus.PENDING:
            raise GameAlreadyStarted(f"Game {game.id} has already started")
        info = game.players.get(player_name)
        if info is None:
            raise PlayerNotFound(f"Player {player_name} not in game {game.id}")
        if not info.board.plants:
            raise BoardNotSet(f"Player {player_name} has not placed a board")

        info.ready = True

        if len(game.players) >= 2 and all(p.ready for p in game.players.values()):
            game.status = GameStatus.IN_PROGRESS
            game.turn = game.player_order()[0]
            logger.info(f"Game {game.id} started with {len(game.players)} players, {game.turn} to move")
            return True
        return False

    # -------------------------------------------------
    # Play phase
    # -------------------------------------------------

    def strike(self, game: Game, attacker: str, target: str, coordinate: str) -> StrikeResult:
        """
        Strike one cell of another player's board.

        A hit destroys the whole plant under the cell at once. If the target's
        capacity collapses the game ends with the attacker as winner and the
        turn stays where it is; otherwise the turn passes on.

        Raises:
            NotInProgress: if the game is not IN_PROGRESS
            NotYourTurn: if it is not the attacker's turn
            InvalidPlayer: if attacker or target is unknown, or they are the same
            InvalidCoordinate: if the coordinate is malformed or off the board
            AlreadyStruck: if the cell was already hit or missed
        """
        if game.status != GameStatus.IN_PROGRESS:
            raise NotInProgress(f"Game {game.id} is not in progress")
        if game.turn != attacker:
            raise NotYourTurn(f"It is {game.turn}'s turn, not {attacker}'s")
        if attacker not in game.players or target not in game.players:
            raise InvalidPlayer(f"Unknown player in strike {attacker} -> {target}")
        if attacker == target:
            raise InvalidPlayer(f"Player {attacker} cannot strike their own board")

        cell = coordinates.validate(coordinate, game.size)
        coord = coordinates.format(*cell)

        info = game.players[target]
        board = info.board
        if coord in board.hits or coord in board.misses:
            raise AlreadyStruck(f"{coord} on {target}'s board was already struck")

        hit_plant = None
        for plant in board.plants:
            if coord in plant.coordinates:
                hit_plant = plant
                break

        if hit_plant is not None:
            for plant_coord in hit_plant.coordinates:
                if plant_coord not in board.hits:
                    board.hits.append(plant_coord)
            lost = plant_spec(hit_plant.type).capacity
            info.capacity -= lost
            board.capacity -= lost
            result = StrikeResult.HIT
            logger.info(f"Game {game.id}: {attacker} destroyed {target}'s {hit_plant.type} at {coord}")

            if has_collapsed(info):
                game.status = GameStatus.ENDED
                game.winner = attacker
                logger.info(f"Game {game.id} ended, winner {attacker}")
        else:
            board.misses.append(coord)
            result = StrikeResult.MISS

        if game.status == GameStatus.IN_PROGRESS:
            game.turn = next_player(game, attacker)

        return result
