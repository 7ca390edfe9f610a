from flask import current_app, request
from flask_socketio import emit, join_room, leave_room

from pong import socketio
from pong.models import MatchSnapshot
from pong.registry import registry
from pong.services.match import (
    BackgroundTicker,
    ManualTicker,
    Match,
    MatchError,
    MatchStatus,
)
from pong.services.match.constants import PLAYER_ONE, PLAYER_TWO

DISCONNECT_MESSAGE = 'Your opponent disconnected. The game is over.'


class SocketIOBroadcaster:
    """Delivers match output to everyone in the match's Socket.IO room."""

    def __init__(self, sio):
        self._sio = sio

    def state(self, game_id: str, snapshot: MatchSnapshot) -> None:
        self._sio.emit('game_state', snapshot.to_dict(), to=game_id)

    def log(self, game_id: str, message: str) -> None:
        self._sio.emit('game_log', message, to=game_id)

    def game_over(self, game_id: str, winner: str) -> None:
        self._sio.emit('game_over', {'winner': winner}, to=game_id)


_broadcaster = SocketIOBroadcaster(socketio)


def _get_sid() -> str:
    # type: ignore: request.sid exists in Socket.IO context
    return request.sid  # type: ignore


def _make_ticker(game_id: str):
    cfg = current_app.config
    if cfg.get('TESTING') and not cfg.get('ENABLE_TICKER_IN_TESTS'):
        return ManualTicker()
    return BackgroundTicker(socketio, rate_hz=cfg.get('TICK_RATE_HZ', 60), name=game_id)


def _parse_max_score(raw):
    if raw is None or raw == '':
        return int(current_app.config.get('DEFAULT_MAX_SCORE', 5))
    try:
        value = int(raw)
    except (TypeError, ValueError):
        return None
    return value if value >= 1 else None


def handle_connect(auth=None):
    current_app.logger.info(f"[connect] sid={_get_sid()}")


def handle_disconnect(reason=None):
    sid = _get_sid()
    current_app.logger.info(f"[disconnect] sid={sid} reason={reason}")
    for match in registry.find_all_by_sid(sid):
        if not match.is_finished:
            match.abort(DISCONNECT_MESSAGE)
            current_app.logger.info(f"[game-ended] game={match.game_id} player disconnected")
        registry.remove(match.game_id)


def handle_create_game(data):
    data = data or {}
    player_name = data.get('playerName')
    if not player_name:
        emit('game_error', 'playerName is required.')
        return
    max_score = _parse_max_score(data.get('maxScore'))
    if max_score is None:
        emit('game_error', 'maxScore must be a positive integer.')
        return

    sid = _get_sid()
    for finished_id in registry.prune_finished():
        current_app.logger.info(f"[game-pruned] game={finished_id}")
    game_id = registry.next_id()
    match = Match(
        game_id,
        player_name,
        max_score,
        broadcaster=_broadcaster,
        ticker=_make_ticker(game_id),
        player1_sid=sid,
    )
    registry.add(match)

    join_room(game_id)
    emit('game_created', {'gameId': game_id, 'playerRole': PLAYER_ONE})
    current_app.logger.info(f"[game-created] game={game_id} player={player_name} max_score={max_score}")
    match.announce()


def handle_join_game(data):
    data = data or {}
    player_name = data.get('playerName')
    game_id = data.get('gameId')
    if not player_name:
        emit('game_error', 'playerName is required.')
        return

    match = registry.get(game_id)
    if not match:
        emit('game_error', 'Game not found.')
        return
    if match.player2.sid or match.status is not MatchStatus.WAITING:
        emit('game_error', 'Game is full.')
        return

    join_room(game_id)
    emit('game_joined', {'gameId': game_id, 'playerRole': PLAYER_TWO})
    try:
        match.attach_player(player_name, sid=_get_sid())
    except MatchError as exc:
        # Lost the slot to another joiner after the check above
        leave_room(game_id)
        emit('game_error', exc.message)
        return
    current_app.logger.info(f"[game-joined] game={game_id} player={player_name}")


def handle_move_paddle(data):
    data = data or {}
    match = registry.get(data.get('gameId'))
    if not match or not match.is_running:
        return
    role = match.role_of(_get_sid())
    if not role:
        return
    try:
        match.set_direction(role, data.get('direction'))
    except MatchError as exc:
        # The match ended between the check above and the intent landing
        current_app.logger.debug(f"[move-ignored] game={match.game_id} {exc.message}")


def register_socketio_handlers() -> None:
    """Register Socket.IO event handlers on the default namespace."""
    socketio.on_event('connect', handle_connect)
    socketio.on_event('disconnect', handle_disconnect)
    socketio.on_event('create_game', handle_create_game)
    socketio.on_event('join_game', handle_join_game)
    socketio.on_event('move_paddle', handle_move_paddle)
