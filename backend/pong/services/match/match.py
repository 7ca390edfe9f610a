import enum
import logging
import random
import threading
from typing import Optional, Protocol

from pong.models import Box, MatchSnapshot, PlayerRecord, PlayerView

from .ball import Ball
from .constants import (
    CANVAS_HEIGHT,
    CANVAS_WIDTH,
    DIRECTIONS,
    PADDLE_MARGIN,
    PADDLE_WIDTH,
    PLAYER_ONE,
    PLAYER_TWO,
    WAITING_PLAYER_NAME,
)
from .errors import MatchFinished, MatchNotRunning, MatchStateError
from .paddle import Paddle

logger = logging.getLogger(__name__)


class Broadcaster(Protocol):
    def state(self, game_id: str, snapshot: MatchSnapshot) -> None: ...

    def log(self, game_id: str, message: str) -> None: ...

    def game_over(self, game_id: str, winner: str) -> None: ...


class Ticker(Protocol):
    running: bool

    def start(self, step, on_error=None) -> None: ...

    def stop(self) -> None: ...


class MatchStatus(enum.Enum):
    IDLE = 'idle'
    WAITING = 'waiting'
    RUNNING = 'running'
    FINISHED = 'finished'


class Match:
    """One two-player session: two paddles, a ball and the scoreboard.

    State only changes through the tick step (``update``) and the named
    lifecycle operations below; all of them hold the match lock, so an intent
    delivered from a socket handler never lands halfway through a tick.

    Lifecycle: IDLE -> WAITING (``announce``) -> RUNNING (``attach_player`` /
    ``start_game``) -> FINISHED (score threshold, ``stop_game`` or ``abort``).
    """

    def __init__(self, game_id: str, player1_name: str, max_score: int,
                 broadcaster: Broadcaster, ticker: Ticker,
                 rng: Optional[random.Random] = None,
                 player1_sid: Optional[str] = None):
        if max_score < 1:
            raise ValueError('max_score must be at least 1')
        self.game_id = game_id
        self.max_score = max_score
        self.broadcaster = broadcaster
        self.ticker = ticker

        self.players = {
            PLAYER_ONE: PlayerRecord(name=player1_name, ready=True, sid=player1_sid),
            PLAYER_TWO: PlayerRecord(name=WAITING_PLAYER_NAME),
        }
        self.ball = Ball(rng=rng)
        self.paddle1 = Paddle(PADDLE_MARGIN)
        self.paddle2 = Paddle(CANVAS_WIDTH - PADDLE_WIDTH - PADDLE_MARGIN)

        self.status = MatchStatus.IDLE
        self.winner: Optional[str] = None
        self._lock = threading.RLock()

    @property
    def player1(self) -> PlayerRecord:
        return self.players[PLAYER_ONE]

    @property
    def player2(self) -> PlayerRecord:
        return self.players[PLAYER_TWO]

    @property
    def is_running(self) -> bool:
        return self.status is MatchStatus.RUNNING

    @property
    def is_finished(self) -> bool:
        return self.status is MatchStatus.FINISHED

    # ---- Lifecycle ----

    def announce(self) -> None:
        """Open the match to a second player."""
        with self._lock:
            if self.status is not MatchStatus.IDLE:
                raise MatchStateError(self.game_id, f'Match {self.game_id} was already announced')
            self.status = MatchStatus.WAITING
            self.broadcast_state('Waiting for the second player...')

    def attach_player(self, name: str, sid: Optional[str] = None) -> None:
        with self._lock:
            if self.status not in (MatchStatus.IDLE, MatchStatus.WAITING):
                raise MatchStateError(self.game_id, f'Match {self.game_id} is not waiting for a player')
            player2 = self.player2
            previous = (player2.name, player2.sid, player2.ready)
            player2.name = name
            player2.sid = sid
            player2.ready = True
            try:
                self.broadcast_state(f'Player {name} joined. The match is about to start!')
            except Exception:
                player2.name, player2.sid, player2.ready = previous
                raise
            self.status = MatchStatus.WAITING
            logger.info(f"[match-join] game={self.game_id} player2={name}")
            self.start_game()

    def start_game(self) -> None:
        with self._lock:
            if self.is_running:
                return
            if self.is_finished:
                raise MatchFinished(self.game_id)
            self.status = MatchStatus.RUNNING
            self.ball.reset()
            self.ticker.start(self.update, on_error=self._on_tick_error)
            logger.info(
                f"[match-start] game={self.game_id} p1={self.player1.name} "
                f"p2={self.player2.name} max_score={self.max_score}"
            )
            self.broadcast_state('Game started')

    def stop_game(self) -> None:
        with self._lock:
            self.ticker.stop()
            if self.status is not MatchStatus.IDLE:
                self.status = MatchStatus.FINISHED

    def abort(self, reason: str) -> None:
        """End the match without a winner, e.g. when a player disconnects."""
        with self._lock:
            self.stop_game()
            self.status = MatchStatus.FINISHED
            logger.info(f"[match-abort] game={self.game_id} reason={reason!r}")
            self.broadcaster.log(self.game_id, reason)

    def _on_tick_error(self, exc: Exception) -> None:
        # Broadcasting may be what failed, so the match ends without a final emit
        with self._lock:
            self.ticker.stop()
            self.status = MatchStatus.FINISHED
            logger.error(f"[match-abort] game={self.game_id} tick failed: {exc!r}")

    # ---- Input ----

    def role_of(self, sid: str) -> Optional[str]:
        for role, player in self.players.items():
            if player.sid is not None and player.sid == sid:
                return role
        return None

    def set_direction(self, role: str, direction: str) -> None:
        """Store a paddle intent (``up``/``down``/``stop``) for ``role``.

        Unknown direction strings are treated as ``stop``. The most recent
        intent before a tick is the one that tick applies.
        """
        if role == PLAYER_ONE:
            paddle = self.paddle1
        elif role == PLAYER_TWO:
            paddle = self.paddle2
        else:
            raise ValueError(f'Unknown player role: {role!r}')
        with self._lock:
            if not self.is_running:
                raise MatchNotRunning(self.game_id)
            paddle.set_direction(DIRECTIONS.get(direction, 0))

    # ---- Simulation ----

    def update(self) -> bool:
        """Advance the simulation by one tick.

        Returns False without touching any state when the match is not
        running.
        """
        with self._lock:
            if not self.is_running:
                return False
            self.paddle1.update()
            self.paddle2.update()
            self.ball.update(self.paddle1, self.paddle2)
            self.check_scoring()
            self.broadcast_state()
            return True

    def _credit(self, role: str) -> None:
        player = self.players[role]
        player.score += 1
        self.ball.reset()
        logger.info(f"[point] game={self.game_id} player={player.name} score={player.score}")
        self.broadcast_state(f'{player.name} scored a point!')

    def check_scoring(self) -> None:
        ball = self.ball
        if ball.x + ball.width > CANVAS_WIDTH:
            self._credit(PLAYER_ONE)
        elif ball.x < 0:
            self._credit(PLAYER_TWO)

        if self.winner is None and (
            self.player1.score >= self.max_score or self.player2.score >= self.max_score
        ):
            self._finish()

    def _finish(self) -> None:
        self.stop_game()
        # Ties cannot happen with one point per tick; player2 takes them if they do
        if self.player1.score > self.player2.score:
            self.winner = self.player1.name
        else:
            self.winner = self.player2.name
        logger.info(
            f"[match-over] game={self.game_id} winner={self.winner} "
            f"score={self.player1.score}-{self.player2.score}"
        )
        self.broadcaster.game_over(self.game_id, self.winner)

    # ---- Snapshots ----

    def snapshot(self) -> MatchSnapshot:
        with self._lock:
            return MatchSnapshot(
                game_id=self.game_id,
                player1=PlayerView(self.player1.name, self.player1.score, self.player1.ready),
                player2=PlayerView(self.player2.name, self.player2.score, self.player2.ready),
                ball=Box(self.ball.x, self.ball.y, self.ball.width, self.ball.height),
                paddle1=Box(self.paddle1.x, self.paddle1.y, self.paddle1.width, self.paddle1.height),
                paddle2=Box(self.paddle2.x, self.paddle2.y, self.paddle2.width, self.paddle2.height),
                is_running=self.is_running,
                max_score=self.max_score,
                canvas_width=CANVAS_WIDTH,
                canvas_height=CANVAS_HEIGHT,
            )

    def broadcast_state(self, message: Optional[str] = None) -> None:
        self.broadcaster.state(self.game_id, self.snapshot())
        if message:
            self.broadcaster.log(self.game_id, message)

    def __repr__(self):
        return (
            f'Match({self.game_id!r}, status={self.status.value}, '
            f'score={self.player1.score}-{self.player2.score})'
        )
