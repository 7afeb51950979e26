"""
HTTP endpoint tests through Flask's test client, backed by mongomock.
"""

DATE = '2024-06-01'


def test_register_and_login(client):
    resp = client.post('/api/auth/register', json={'username': 'Alice', 'password': 'hunter22'})
    assert resp.status_code == 201

    resp = client.post('/api/auth/register', json={'username': 'alice', 'password': 'hunter22'})
    assert resp.status_code == 400

    resp = client.post('/api/auth/login', json={'username': 'alice', 'password': 'wrong-pass'})
    assert resp.status_code == 401

    resp = client.post('/api/auth/login', json={'username': 'alice', 'password': 'hunter22'})
    data = resp.get_json()
    assert resp.status_code == 200
    assert data['token'] and data['user']['username'] == 'alice'
    assert 'session_token=' in resp.headers.get('Set-Cookie', '')


def test_me_reports_sign_in_state(app, client, auth_headers):
    # Fresh client: no session cookie from the login fixture
    data = app.test_client().get('/api/auth/me').get_json()
    assert data['success'] and data['signedIn'] is False

    data = client.get('/api/auth/me', headers=auth_headers).get_json()
    assert data['signedIn'] is True and data['user']['username'] == 'player1'

    data = client.get('/api/auth/me', headers={'Authorization': 'Bearer nonsense'}).get_json()
    assert data['signedIn'] is False


def test_logout_clears_cookie(client, auth_headers):
    resp = client.post('/api/auth/logout', headers=auth_headers)
    assert resp.status_code == 200
    assert 'session_token=;' in resp.headers.get('Set-Cookie', '')


def test_per_user_endpoints_require_auth(client):
    assert client.get(f'/api/wordle/progress?date={DATE}').status_code == 401
    assert client.post('/api/wordle/win', json={'date': DATE, 'guessCount': 3}).status_code == 401
    assert client.get('/api/wordle/stats').status_code == 401


def test_progress_round_trip(client, auth_headers):
    resp = client.get(f'/api/connections/progress?date={DATE}', headers=auth_headers)
    assert resp.get_json()['progress'] is None

    body = {'date': DATE, 'mistakesLeft': 3, 'solvedCategoryIndexes': [2, 0], 'updatedAt': 5.0}
    assert client.post('/api/connections/progress', json=body, headers=auth_headers).status_code == 200

    progress = client.get(f'/api/connections/progress?date={DATE}', headers=auth_headers).get_json()['progress']
    assert progress['mistakesLeft'] == 3
    assert progress['solvedCategoryIndexes'] == [0, 2]


def test_invalid_progress_is_rejected(client, auth_headers):
    body = {'date': DATE, 'guesses': ['toolong'], 'cols': 5}
    assert client.post('/api/wordle/progress', json=body, headers=auth_headers).status_code == 400
    assert client.get('/api/wordle/progress?date=06-01-2024', headers=auth_headers).status_code == 400


def test_results_increment_counters(client, auth_headers):
    assert client.post('/api/wordle/win', json={'date': DATE, 'guessCount': 3}, headers=auth_headers).status_code == 200
    assert client.post('/api/wordle/loss', json={'date': DATE}, headers=auth_headers).status_code == 200

    data = client.get('/api/wordle/stats', headers=auth_headers).get_json()
    assert data['counters']['games_played'] == 2
    assert data['counters']['wordles_completed'] == 1
    assert data['counters']['wordles_failed'] == 1
    assert data['counters']['wordle_in_3'] == 1
    assert data['stats']['winRate'] == 50


def test_out_of_range_result_is_rejected(client, auth_headers):
    resp = client.post('/api/wordle/win', json={'date': DATE, 'guessCount': 11}, headers=auth_headers)
    assert resp.status_code == 400
    resp = client.post('/api/connections/win', json={'date': DATE, 'mistakesUsed': 5}, headers=auth_headers)
    assert resp.status_code == 400

    data = client.get('/api/wordle/stats', headers=auth_headers).get_json()
    assert data['counters']['games_played'] == 0


def test_unknown_game(client, auth_headers):
    assert client.get(f'/api/sudoku/{DATE}').status_code == 404
    assert client.get('/api/sudoku/stats', headers=auth_headers).status_code == 404


def test_puzzle_proxy(client, upstream):
    data = client.get(f'/api/connections/{DATE}').get_json()
    assert data['success']
    assert len(data['puzzle']['categories']) == 4

    data = client.get(f'/api/strands/{DATE}').get_json()
    assert data['puzzle']['themeWordCount'] == 2
    assert 'themeWords' not in data['puzzle'] and 'spangram' not in data['puzzle']

    client.get(f'/api/connections/{DATE}')
    assert upstream.requests.count(f'https://upstream.test/svc/connections/v2/{DATE}.json') == 1


def test_puzzle_proxy_errors(client, upstream):
    assert client.get('/api/wordle/2024-13-45').status_code == 400
    assert client.get('/api/wordle/2024-06-02').status_code == 502

    upstream.payloads['https://upstream.test/svc/wordle/v2/2024-06-03.json'] = {'solution': 'toolong'}
    assert client.get('/api/wordle/2024-06-03').status_code == 502


def test_strands_word_classification(client):
    for word, kind in (('cat', 'theme'), ('BIRD', 'spangram'), ('TS', 'other')):
        data = client.post('/api/strands/submit', json={'date': DATE, 'word': word}).get_json()
        assert data['kind'] == kind
        assert data['word'] == word.upper()

    assert client.post('/api/strands/submit', json={'date': DATE, 'word': 'x'}).status_code == 400
