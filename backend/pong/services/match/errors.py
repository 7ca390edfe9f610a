class MatchError(Exception):
    """Base class for caller contract violations on a match."""

    def __init__(self, game_id: str, message: str):
        super().__init__(message)
        self.game_id = game_id
        self.message = message


class MatchStateError(MatchError):
    """The operation is not legal in the match's current lifecycle state."""


class MatchNotRunning(MatchStateError):
    def __init__(self, game_id: str):
        super().__init__(game_id, f'Match {game_id} is not running')


class MatchFinished(MatchStateError):
    def __init__(self, game_id: str):
        super().__init__(game_id, f'Match {game_id} is already finished')
