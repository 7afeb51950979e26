"""
Session tests: one puzzle played from start to a terminal result.
"""

import asyncio

import pytest

from puzzlehub.exceptions import InputInvalid
from puzzlehub.models.game import EventKind, LetterResult, WordKind
from puzzlehub.sessions import ConnectionsSession, StrandsSession, WordleSession

FISH = ['BASS', 'PIKE', 'SOLE', 'CARP']
PLANETS = ['MARS', 'VENUS', 'SATURN', 'PLUTO']
COLORS = ['RED', 'TEAL', 'CYAN', 'PINK']
DOGS = ['PUG', 'LAB', 'BOXER', 'HUSKY']

ACCEPTED = {'crate', 'arise', 'alloy', 'lolly', 'speed', 'eerie', 'geese', 'abbey'}


def _select(session, contents):
    session.deselect_all()
    for content in contents:
        session.toggle(content)


def test_wordle_win_in_two(wordle_puzzle):
    session = WordleSession(wordle_puzzle, accepted=ACCEPTED)
    session.submit_guess('arise')
    assert not session.is_done
    assert session.letter_status['r'] == LetterResult.CORRECT
    assert session.letter_status['a'] == LetterResult.PRESENT
    assert session.letter_status['i'] == LetterResult.ABSENT

    session.submit_guess('CRATE')
    assert session.is_won and session.is_done
    event = session.terminal_event()
    assert event.kind == EventKind.WIN
    assert event.guess_count == 2


def test_wordle_invalid_guess_uses_no_row(wordle_puzzle):
    session = WordleSession(wordle_puzzle, accepted=ACCEPTED)
    with pytest.raises(InputInvalid):
        session.submit_guess('zzzzz')
    assert session.current_round == 0


def test_wordle_loss_after_six_rows(wordle_puzzle):
    session = WordleSession(wordle_puzzle, accepted=ACCEPTED)
    for guess in ['arise', 'alloy', 'lolly', 'speed', 'eerie', 'geese']:
        session.submit_guess(guess)
    assert session.is_done and not session.is_won
    assert session.terminal_event().kind == EventKind.LOSS
    with pytest.raises(InputInvalid):
        session.submit_guess('crate')


def test_wordle_restore_replays_guesses(wordle_puzzle):
    played = WordleSession(wordle_puzzle, accepted=ACCEPTED)
    played.submit_guess('arise')

    fresh = WordleSession(wordle_puzzle, accepted=ACCEPTED)
    assert fresh.restore(played.snapshot())
    assert fresh.guesses == ['arise']
    assert fresh.evaluations == played.evaluations


def test_claim_result_is_one_shot(wordle_puzzle):
    session = WordleSession(wordle_puzzle, accepted=ACCEPTED)
    assert not session.claim_result()
    session.submit_guess('crate')
    assert session.claim_result()
    assert not session.claim_result()
    assert session.result_recorded


def test_connections_solved_group_is_idempotent(connections_puzzle):
    session = ConnectionsSession(connections_puzzle)
    _select(session, FISH)
    assert session.submit().match
    assert session.solved_indexes == {0}

    # Solved tiles cannot be selected again
    _select(session, FISH)
    assert session.selected == set()
    with pytest.raises(InputInvalid):
        session.submit()
    assert session.mistakes_left == 4
    assert len(session.solved) == 1


def test_connections_toggle_limits_selection(connections_puzzle):
    session = ConnectionsSession(connections_puzzle)
    _select(session, ['BASS', 'PIKE', 'SOLE', 'CARP', 'MARS'])
    assert session.selected == set(FISH)
    assert not session.toggle('BASS')
    assert 'BASS' not in session.selected


def test_connections_loss_after_four_mistakes(connections_puzzle):
    session = ConnectionsSession(connections_puzzle)
    wrong = ['BASS', 'PIKE', 'SOLE', 'MARS']
    for expected_left in (3, 2, 1, 0):
        _select(session, wrong)
        assert not session.submit().match
        assert session.mistakes_left == expected_left
    assert session.is_done and not session.is_won
    assert session.terminal_event().kind == EventKind.LOSS


def test_connections_win_records_mistakes_used(connections_puzzle):
    session = ConnectionsSession(connections_puzzle)
    _select(session, ['BASS', 'PIKE', 'SOLE', 'MARS'])
    session.submit()
    for group in (FISH, PLANETS, COLORS, DOGS):
        _select(session, group)
        assert session.submit().match
    assert session.is_won
    assert session.terminal_event().mistakes_used == 1


def test_connections_shuffle_keeps_solved_in_front(connections_puzzle):
    session = ConnectionsSession(connections_puzzle)
    _select(session, FISH)
    session.submit()
    tiles = session.shuffle()
    assert set(tiles[:4]) == set(FISH)
    assert sorted(tiles) == sorted(FISH + PLANETS + COLORS + DOGS)


def test_connections_restore(connections_puzzle):
    session = ConnectionsSession(connections_puzzle)
    _select(session, DOGS)
    session.submit()
    _select(session, ['BASS', 'PIKE', 'SOLE', 'MARS'])
    session.submit()

    fresh = ConnectionsSession(connections_puzzle)
    assert fresh.restore(session.snapshot())
    assert fresh.mistakes_left == 3
    assert fresh.solved_indexes == {3}


CAT = [[0, 0], [0, 1], [0, 2]]
DOG = [[1, 0], [1, 1], [1, 2]]
BIRD = [[2, 0], [2, 1], [2, 2], [2, 3]]


def test_strands_win(strands_puzzle, classifier):
    session = StrandsSession(strands_puzzle)

    async def play():
        assert await session.submit_path(CAT, classifier) == WordKind.THEME
        assert await session.submit_path(BIRD, classifier) == WordKind.SPANGRAM
        assert not session.is_done
        assert await session.submit_path(DOG, classifier) == WordKind.THEME

    asyncio.run(play())
    assert session.is_won
    assert session.found_theme_words == ['CAT', 'DOG']
    assert session.terminal_event().kind == EventKind.WIN


def test_strands_duplicate_path_recorded_once(strands_puzzle, classifier):
    session = StrandsSession(strands_puzzle)

    async def play():
        await session.submit_path(CAT, classifier)
        return await session.submit_path(CAT, classifier)

    assert asyncio.run(play()) == WordKind.THEME
    assert len(session.found_paths) == 1
    assert classifier.calls == ['CAT']


def test_strands_bad_path_never_reaches_classifier(strands_puzzle, classifier):
    session = StrandsSession(strands_puzzle)
    with pytest.raises(InputInvalid):
        asyncio.run(session.submit_path([[0, 0], [0, 2]], classifier))
    with pytest.raises(InputInvalid):
        asyncio.run(session.submit_path([[0, 0], [0, 1], [0, 0]], classifier))
    assert classifier.calls == []


def test_strands_found_cells_cannot_be_reused(strands_puzzle, classifier):
    session = StrandsSession(strands_puzzle)
    asyncio.run(session.submit_path(CAT, classifier))
    with pytest.raises(InputInvalid):
        asyncio.run(session.submit_path([[0, 2], [0, 3]], classifier))


def test_strands_give_up_is_a_loss(strands_puzzle, classifier):
    session = StrandsSession(strands_puzzle)
    asyncio.run(session.submit_path(CAT, classifier))
    session.give_up()
    assert session.is_done and not session.is_won
    assert session.terminal_event().kind == EventKind.LOSS

    fresh = StrandsSession(strands_puzzle)
    assert fresh.restore(session.snapshot())
    assert fresh.gave_up
    assert fresh.found_theme_words == ['CAT']


class SpangramEverything:
    async def classify_word(self, date, word):
        return WordKind.SPANGRAM


def test_strands_keeps_a_single_spangram(strands_puzzle):
    session = StrandsSession(strands_puzzle)
    classifier = SpangramEverything()

    async def play():
        await session.submit_path(BIRD, classifier)
        return await session.submit_path(DOG, classifier)

    assert asyncio.run(play()) == WordKind.SPANGRAM
    spangrams = [p for p in session.found_paths if p.kind == WordKind.SPANGRAM]
    assert [p.word for p in spangrams] == ['BIRD']
    assert session.snapshot().found_paths == tuple(spangrams)
