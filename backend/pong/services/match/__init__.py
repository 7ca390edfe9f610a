"""Match simulation core: paddles, ball physics, scoring and lifecycle.

Nothing in this package knows about Flask or Socket.IO. The transport layer
hands a match its broadcaster and tick driver, and keeps the registry of
active matches on its side.
"""

from .ball import Ball
from .errors import MatchError, MatchFinished, MatchNotRunning, MatchStateError
from .match import Match, MatchStatus
from .paddle import Paddle
from .ticker import BackgroundTicker, ManualTicker

__all__ = [
    'Ball',
    'BackgroundTicker',
    'ManualTicker',
    'Match',
    'MatchError',
    'MatchFinished',
    'MatchNotRunning',
    'MatchStateError',
    'MatchStatus',
    'Paddle',
]
