import itertools
import threading
from typing import Dict, List, Optional

from pong.services.match import Match


class MatchRegistry:
    """Active matches, keyed by game id.

    Lives on the transport side: the simulation core never looks matches up
    by id, it only receives the handles stored here.
    """

    def __init__(self):
        self._matches: Dict[str, Match] = {}
        self._ids = itertools.count(1)
        self._lock = threading.Lock()

    def next_id(self) -> str:
        with self._lock:
            return f"G{next(self._ids)}"

    def add(self, match: Match) -> None:
        with self._lock:
            self._matches[match.game_id] = match

    def get(self, game_id) -> Optional[Match]:
        if not game_id:
            return None
        with self._lock:
            return self._matches.get(game_id)

    def remove(self, game_id: str) -> Optional[Match]:
        with self._lock:
            return self._matches.pop(game_id, None)

    def find_all_by_sid(self, sid: str) -> List[Match]:
        """Every match, live or finished, that ``sid`` plays in."""
        with self._lock:
            matches = list(self._matches.values())
        return [match for match in matches if match.role_of(sid)]

    def prune_finished(self) -> List[str]:
        """Drop finished matches; returns the removed game ids."""
        with self._lock:
            finished = [gid for gid, match in self._matches.items() if match.is_finished]
            for gid in finished:
                del self._matches[gid]
        return finished

    def game_ids(self, include_finished: bool = True) -> List[str]:
        with self._lock:
            return [
                gid for gid, match in self._matches.items()
                if include_finished or not match.is_finished
            ]

    def clear(self) -> None:
        """Stop and drop every match; the id counter starts over."""
        with self._lock:
            matches = list(self._matches.values())
            self._matches.clear()
            self._ids = itertools.count(1)
        for match in matches:
            match.stop_game()

    def __len__(self):
        with self._lock:
            return len(self._matches)


registry = MatchRegistry()
