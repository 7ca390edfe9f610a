from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass
class PlayerRecord:
    name: str
    score: int = 0
    ready: bool = False
    # Opaque connection reference owned by the transport layer
    sid: Optional[str] = None


@dataclass(frozen=True)
class PlayerView:
    name: str
    score: int
    is_ready: bool

    def to_dict(self) -> Dict[str, Any]:
        return {'name': self.name, 'score': self.score, 'isReady': self.is_ready}


@dataclass(frozen=True)
class Box:
    x: float
    y: float
    width: float
    height: float

    def to_dict(self) -> Dict[str, Any]:
        return {'x': self.x, 'y': self.y, 'width': self.width, 'height': self.height}


@dataclass(frozen=True)
class MatchSnapshot:
    """Read-only projection of a match, as sent to its participants."""

    game_id: str
    player1: PlayerView
    player2: PlayerView
    ball: Box
    paddle1: Box
    paddle2: Box
    is_running: bool
    max_score: int
    canvas_width: int
    canvas_height: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            'players': {
                'p1': self.player1.to_dict(),
                'p2': self.player2.to_dict(),
            },
            'ball': self.ball.to_dict(),
            'paddle1': self.paddle1.to_dict(),
            'paddle2': self.paddle2.to_dict(),
            'is_running': self.is_running,
            'maxScore': self.max_score,
            'gameId': self.game_id,
            'canvas': {'width': self.canvas_width, 'height': self.canvas_height},
        }
