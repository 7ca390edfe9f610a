def test_index(client):
    res = client.get('/')
    assert res.status_code == 200
    assert b'Pong multiplayer server is running.' in res.data


def test_health_without_games(client):
    res = client.get('/health')
    assert res.status_code == 200
    assert res.get_json() == {'status': 'ok', 'activeGames': 0, 'games': []}


def test_health_lists_active_games(client, sio_client):
    sio_client.emit('create_game', {'playerName': 'Alice', 'maxScore': 3})
    sio_client.emit('create_game', {'playerName': 'Carol', 'maxScore': 3})
    data = client.get('/health').get_json()
    assert data['activeGames'] == 2
    assert sorted(data['games']) == ['G1', 'G2']


def test_cors_header_present(client):
    res = client.get('/health', headers={'Origin': 'http://localhost:5173'})
    assert res.headers.get('Access-Control-Allow-Origin') in ('*', 'http://localhost:5173')
