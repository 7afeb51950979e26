"""
Puzzle payload validation and the upstream puzzle service.
"""

import datetime

import pytest

from puzzlehub.exceptions import UpstreamMalformed, UpstreamUnavailable
from puzzlehub.models.game import GameKind, WordKind
from puzzlehub.models.puzzle import parse_connections_puzzle, parse_strands_puzzle, parse_wordle_puzzle
from puzzlehub.services.puzzle_service import PuzzleService
from puzzlehub.utils.helpers import is_valid_date, puzzle_date


def test_wordle_payload():
    puzzle = parse_wordle_puzzle({'solution': 'CRATE', 'print_date': '2024-06-01'})
    assert puzzle.solution == 'crate' and puzzle.date == '2024-06-01'
    with pytest.raises(UpstreamMalformed):
        parse_wordle_puzzle({'solution': 'cr4te'}, '2024-06-01')
    with pytest.raises(UpstreamMalformed):
        parse_wordle_puzzle({'solution': 'crate'})


def test_connections_payload_shape(connections_puzzle):
    assert [c.position for c in connections_puzzle.cards_in_display_order()] == list(range(16))
    assert connections_puzzle.category_of('HUSKY') == 3
    assert connections_puzzle.category_of('NOPE') is None

    raw = connections_puzzle.to_dict()
    raw['categories'][1]['cards'][0]['content'] = 'BASS'
    with pytest.raises(UpstreamMalformed):
        parse_connections_puzzle(raw)

    raw = connections_puzzle.to_dict()
    raw['categories'].pop()
    with pytest.raises(UpstreamMalformed):
        parse_connections_puzzle(raw)


def test_strands_payload_shape(strands_puzzle):
    assert (strands_puzzle.rows, strands_puzzle.cols) == (3, 4)
    assert strands_puzzle.theme_word_count == 2
    with pytest.raises(UpstreamMalformed):
        parse_strands_puzzle({'clue': 'x', 'startingBoard': ['ABC', 'DE'], 'date': '2024-06-01'})


def test_service_caches_valid_puzzles_only(upstream):
    service = PuzzleService('https://upstream.test/svc', fetch_json=upstream)
    service.get_puzzle(GameKind.STRANDS, '2024-06-01')
    service.get_puzzle(GameKind.STRANDS, '2024-06-01')
    assert len(upstream.requests) == 1

    bad_url = 'https://upstream.test/svc/wordle/v2/2024-06-05.json'
    upstream.payloads[bad_url] = {'solution': 'toolong'}
    for _ in range(2):
        with pytest.raises(UpstreamMalformed):
            service.get_puzzle(GameKind.WORDLE, '2024-06-05')
    assert upstream.requests.count(bad_url) == 2

    with pytest.raises(UpstreamUnavailable):
        service.get_puzzle(GameKind.WORDLE, '2024-06-09')


def test_service_classifies_from_answer_key(upstream):
    service = PuzzleService('https://upstream.test/svc', fetch_json=upstream)
    assert service.classify_strands_word('2024-06-01', 'dog') == WordKind.THEME
    assert service.classify_strands_word('2024-06-01', 'BIRD') == WordKind.SPANGRAM
    assert service.classify_strands_word('2024-06-01', 'CATS') == WordKind.OTHER


def test_puzzle_date_uses_new_york_day():
    late_utc = datetime.datetime(2024, 6, 2, 3, 0, tzinfo=datetime.timezone.utc)
    assert puzzle_date(late_utc) == '2024-06-01'
    assert puzzle_date(datetime.datetime(2024, 6, 2, 12, 0)) == '2024-06-02'


def test_date_format():
    assert is_valid_date('2024-02-29')
    assert not is_valid_date('2024-02-30')
    assert not is_valid_date('2024-6-1')
    assert not is_valid_date(None)


def test_service_cache_is_bounded(upstream):
    service = PuzzleService('https://upstream.test/svc', fetch_json=upstream, max_cached=2)
    for day in ('2024-06-02', '2024-06-03'):
        upstream.payloads[f'https://upstream.test/svc/wordle/v2/{day}.json'] = {'status': 'OK', 'print_date': day, 'solution': 'arise'}

    for day in ('2024-06-01', '2024-06-02', '2024-06-03', '2024-06-01'):
        service.get_puzzle(GameKind.WORDLE, day)

    assert upstream.requests.count('https://upstream.test/svc/wordle/v2/2024-06-01.json') == 2
    assert len(service._cache) == 2


def test_evicted_answer_key_is_fetched_again(upstream):
    service = PuzzleService('https://upstream.test/svc', fetch_json=upstream, max_cached=1)
    service.get_puzzle(GameKind.STRANDS, '2024-06-01')
    service._answer_keys.clear()
    assert service.classify_strands_word('2024-06-01', 'CAT') == WordKind.THEME
