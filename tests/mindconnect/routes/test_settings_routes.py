def test_zoom_settings_empty_until_saved(client) -> None:
    response = client.get('/api/zoom-settings')

    assert response.status_code == 200
    assert response.json() == {}


def test_zoom_settings_are_created_then_merged(client) -> None:
    created = client.post('/api/zoom-settings', json={'apiKey': 'key-1', 'apiSecret': 'secret-1', 'zoomEmail': 'host@example.com'})
    updated = client.post('/api/zoom-settings', json={'apiKey': 'key-2'})

    assert created.status_code == 200
    assert created.json()['id'] == 1
    assert updated.json() == {
        'id': 1,
        'apiKey': 'key-2',
        'apiSecret': 'secret-1',
        'zoomEmail': 'host@example.com',
    }
    assert client.get('/api/zoom-settings').json() == updated.json()


def test_zoom_settings_reject_wrong_types(client) -> None:
    response = client.post('/api/zoom-settings', json={'apiKey': ['not', 'a', 'string']})

    assert response.status_code == 400
