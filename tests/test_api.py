import logging

import pytest
from starlette.requests import ClientDisconnect


def put_blob(client, body, repository='codingtest'):
    resp = client.put(f'/data/{repository}', content=body)
    assert resp.status_code == 201
    assert resp.headers['content-type'] == 'application/json'
    return resp.json()


def test_put_returns_distinct_oids_and_sizes(client):
    res1 = put_blob(client, b'something')
    res2 = put_blob(client, b'other')
    assert res1['oid'] != res2['oid']
    assert res1['size'] == 9
    assert res2['size'] == 5


def test_get_returns_original_bytes(client):
    res1 = put_blob(client, b'something')
    res2 = put_blob(client, b'other')

    resp = client.get(f"/data/codingtest/{res1['oid']}")
    assert resp.status_code == 200
    assert resp.content == b'something'

    resp = client.get(f"/data/codingtest/{res2['oid']}")
    assert resp.status_code == 200
    assert resp.content == b'other'


def test_binary_and_empty_payloads(client):
    payload = bytes(range(256))
    res = put_blob(client, payload)
    assert res['size'] == 256
    assert client.get(f"/data/codingtest/{res['oid']}").content == payload

    empty = put_blob(client, b'')
    assert empty['size'] == 0
    resp = client.get(f"/data/codingtest/{empty['oid']}")
    assert resp.status_code == 200
    assert resp.content == b''


def test_delete_then_get_and_redelete(client):
    res = put_blob(client, b'something')
    url = f"/data/codingtest/{res['oid']}"

    assert client.delete(url).status_code == 200
    assert client.get(url).status_code == 404
    assert client.delete(url).status_code == 404


def test_unknown_oid_is_not_found(client):
    assert client.get('/data/codingtest/unknown-oid').status_code == 404
    assert client.delete('/data/codingtest/unknown-oid').status_code == 404


def test_objects_are_scoped_by_repository(client):
    res = put_blob(client, b'something', repository='one')
    assert client.get(f"/data/one/{res['oid']}").status_code == 200
    assert client.get(f"/data/two/{res['oid']}").status_code == 404
    assert client.delete(f"/data/two/{res['oid']}").status_code == 404
    assert client.get(f"/data/one/{res['oid']}").status_code == 200


def test_random_strategy_gives_fresh_oid_for_same_content(client):
    assert put_blob(client, b'same')['oid'] != put_blob(client, b'same')['oid']


def test_sha256_strategy_deduplicates(sha_client):
    res1 = put_blob(sha_client, b'same')
    res2 = put_blob(sha_client, b'same')
    assert res1 == res2
    assert sha_client.delete(f"/data/codingtest/{res1['oid']}").status_code == 200
    assert sha_client.get(f"/data/codingtest/{res1['oid']}").status_code == 404


@pytest.mark.parametrize('method', ['POST', 'PATCH'])
def test_unsupported_method(client, method):
    resp = client.request(method, '/data/codingtest/abc')
    assert resp.status_code == 405
    assert resp.headers['allow'] == 'DELETE, GET, PUT'


@pytest.mark.parametrize('method,url', [
    ('GET', '/data'),
    ('GET', '/data/'),
    ('PUT', '/data/'),
    ('GET', '/data/codingtest/abc/extra'),
    ('DELETE', '/data//abc'),
])
def test_malformed_paths(client, method, url):
    assert client.request(method, url).status_code == 400


def test_object_id_required_for_get_and_delete(client):
    assert client.get('/data/codingtest').status_code == 400
    assert client.delete('/data/codingtest/').status_code == 400


def test_put_with_object_id_rejected(client):
    resp = client.put('/data/codingtest/chosen-oid', content=b'x')
    assert resp.status_code == 400
    assert client.get('/data/codingtest/chosen-oid').status_code == 404


def test_body_read_failure_stores_nothing(client, app, monkeypatch):
    async def broken_body(self):
        raise ClientDisconnect()

    monkeypatch.setattr('starlette.requests.Request.body', broken_body)
    resp = client.put('/data/codingtest', content=b'something')
    assert resp.status_code == 500
    assert len(app.state.object_table) == 0


def test_requests_are_logged(client, caplog):
    with caplog.at_level(logging.INFO, logger='config.middleware'):
        client.get('/data/codingtest/unknown-oid')
    assert any('GET /data/codingtest/unknown-oid -> 404' in r.getMessage() for r in caplog.records)
