"""
Stats aggregation tests.
"""

import pytest

from puzzlehub.exceptions import StorageCorrupt
from puzzlehub.models.game import EventKind, GameKind
from puzzlehub.models.progress import PendingEvent
from puzzlehub.services import stats_service


def test_win_rate_is_rounded_percentage():
    stats = stats_service.summarize(GameKind.WORDLE, {
        'games_played': 3, 'wordles_completed': 2, 'wordle_in_3': 1, 'wordle_in_4': 1,
    })
    assert stats.win_rate == 67
    assert stats.distribution['wordle_in_3'] == 1
    assert stats.distribution['wordle_in_1'] == 0
    assert len(stats.distribution) == 10


def test_no_games_means_zero_rate():
    stats = stats_service.summarize(GameKind.STRANDS, {})
    assert stats.games_played == 0
    assert stats.win_rate == 0
    assert stats.distribution == {}


def test_increments_for_results():
    win = PendingEvent(GameKind.CONNECTIONS, EventKind.WIN, '2024-06-01', {'mistakesUsed': 2})
    assert stats_service.increments_for(win) == {
        'connections_games_played': 1, 'connections_completed': 1, 'connections_in_2': 1,
    }

    loss = PendingEvent(GameKind.WORDLE, EventKind.LOSS, '2024-06-01')
    assert stats_service.increments_for(loss) == {'games_played': 1, 'wordles_failed': 1}

    strands_loss = PendingEvent(GameKind.STRANDS, EventKind.LOSS, '2024-06-01')
    assert stats_service.increments_for(strands_loss) == {'strands_games_played': 1}


def test_apply_event_accumulates():
    counters = {}
    for guesses in (2, 2, 5):
        event = PendingEvent(GameKind.WORDLE, EventKind.WIN, '2024-06-01', {'guessCount': guesses})
        counters = stats_service.apply_event(counters, event)
    stats = stats_service.summarize(GameKind.WORDLE, counters)
    assert stats.games_played == 3
    assert stats.win_rate == 100
    assert stats.distribution['wordle_in_2'] == 2
    assert stats.to_dict()['winRate'] == 100


def test_guess_count_limit():
    event = PendingEvent.from_dict(GameKind.WORDLE, {'type': 'win', 'date': '2024-06-01', 'guessCount': 10})
    assert stats_service.increments_for(event)['wordle_in_10'] == 1

    with pytest.raises(StorageCorrupt):
        PendingEvent.from_dict(GameKind.WORDLE, {'type': 'win', 'date': '2024-06-01', 'guessCount': 11})
