"""Data models used by the application.

Split into:
- `api_models`: Pydantic models used for request/response validation
- `domain_models`: the game aggregate and its parts, used in business logic

Import submodules to make them available as `models.api_models`.
"""

from . import api_models, domain_models

# Re-export selected API models (Pydantic models used for request/response)
from .api_models import (
	BoardRequest,
	JoinResponse,
	ReadyResponse,
	StrikeResponse,
	ErrorResponse,
	PublicPlayerView,
	PublicGameView,
)

# Re-export domain models
from .domain_models import (
	GameStatus,
	PlantType,
	StrikeResult,
	Plant,
	Board,
	PlayerInfo,
	Game,
)

__all__ = [
	# submodules
	"api_models",
	"domain_models",
	# api models
	"BoardRequest",
	"JoinResponse",
	"ReadyResponse",
	"StrikeResponse",
	"ErrorResponse",
	"PublicPlayerView",
	"PublicGameView",
	# domain models
	"GameStatus",
	"PlantType",
	"StrikeResult",
	"Plant",
	"Board",
	"PlayerInfo",
	"Game",
]
