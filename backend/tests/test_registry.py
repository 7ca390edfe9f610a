from pong.registry import MatchRegistry
from pong.services.match import ManualTicker, Match

from conftest import RecordingBroadcaster


def new_match(registry, player1_sid, player2_sid=None):
    match = Match(registry.next_id(), 'Alice', 1, broadcaster=RecordingBroadcaster(),
                  ticker=ManualTicker(), player1_sid=player1_sid)
    match.announce()
    if player2_sid:
        match.attach_player('Bob', sid=player2_sid)
    registry.add(match)
    return match


def test_ids_are_sequential():
    registry = MatchRegistry()
    assert [registry.next_id() for _ in range(3)] == ['G1', 'G2', 'G3']


def test_find_all_by_sid_returns_every_membership():
    registry = MatchRegistry()
    done = new_match(registry, 'sid-a', 'sid-b')
    done.abort('gone')
    live = new_match(registry, 'sid-a', 'sid-c')
    other = new_match(registry, 'sid-d')

    assert registry.find_all_by_sid('sid-a') == [done, live]
    assert registry.find_all_by_sid('sid-d') == [other]
    assert registry.find_all_by_sid('sid-z') == []


def test_prune_finished_keeps_live_matches():
    registry = MatchRegistry()
    done = new_match(registry, 'sid-a', 'sid-b')
    done.abort('gone')
    waiting = new_match(registry, 'sid-c')

    assert registry.game_ids(include_finished=False) == [waiting.game_id]
    assert registry.prune_finished() == [done.game_id]
    assert registry.game_ids() == [waiting.game_id]


def test_clear_stops_matches_and_restarts_ids():
    registry = MatchRegistry()
    live = new_match(registry, 'sid-a', 'sid-b')
    registry.clear()
    assert len(registry) == 0
    assert not live.ticker.running
    assert registry.next_id() == 'G1'
