import pytest
from fastapi.testclient import TestClient
from todo_api.main import app

client = TestClient(app)


@pytest.fixture
def todo_id():
    r = client.post('/todos/', json={'todo': 'original', 'isChecked': False})
    assert r.status_code == 201
    return r.json()['id']


def _get(todo_id):
    return client.get(f'/todos/{todo_id}/').json()


def test_update_both_fields(todo_id):
    r = client.put(f'/todos/{todo_id}/', json={'todo': 'renamed', 'isChecked': True})
    assert r.status_code == 204
    assert _get(todo_id) == {'id': todo_id, 'todo': 'renamed', 'isChecked': True}


def test_update_text_only_keeps_checkbox(todo_id):
    client.put(f'/todos/{todo_id}/', json={'isChecked': True})
    r = client.put(f'/todos/{todo_id}/', json={'todo': 'renamed'})
    assert r.status_code == 204
    assert _get(todo_id) == {'id': todo_id, 'todo': 'renamed', 'isChecked': True}


def test_checkbox_only_client_is_supported(todo_id):
    r = client.put(f'/todos/{todo_id}/', json={'isChecked': True, 'color': 'red'})
    assert r.status_code == 204
    assert _get(todo_id)['isChecked'] is True


@pytest.mark.parametrize('payload', [{'todo': 5}, {'todo': None}, {'todo': ['a']}, {'todo': True}])
def test_invalid_todo_text(todo_id, payload):
    r = client.put(f'/todos/{todo_id}/', json=payload)
    assert r.status_code == 400
    assert r.json() == {'error': 'Invalid todo text'}
    assert _get(todo_id)['todo'] == 'original'


@pytest.mark.parametrize('payload', [{'isChecked': 'true'}, {'isChecked': 0}, {'isChecked': None}])
def test_invalid_is_checked_value(todo_id, payload):
    r = client.put(f'/todos/{todo_id}/', json=payload)
    assert r.status_code == 400
    assert r.json() == {'error': 'Invalid isChecked value'}
    assert _get(todo_id)['isChecked'] is False


def test_text_error_reported_before_checkbox_error(todo_id):
    r = client.put(f'/todos/{todo_id}/', json={'todo': 1, 'isChecked': 'yes'})
    assert r.status_code == 400
    assert r.json() == {'error': 'Invalid todo text'}


def test_valid_fields_are_not_written_when_another_is_invalid(todo_id):
    r = client.put(f'/todos/{todo_id}/', json={'todo': 'renamed', 'isChecked': 'yes'})
    assert r.status_code == 400
    assert _get(todo_id) == {'id': todo_id, 'todo': 'original', 'isChecked': False}


def test_invalid_body_on_missing_id_is_400_not_404():
    r = client.put('/todos/999/', json={'isChecked': 'yes'})
    assert r.status_code == 400


def test_empty_update_is_noop(todo_id):
    assert client.put(f'/todos/{todo_id}/', json={}).status_code == 204
    assert client.put(f'/todos/{todo_id}/').status_code == 204
    assert _get(todo_id) == {'id': todo_id, 'todo': 'original', 'isChecked': False}
    assert client.put('/todos/999/', json={}).status_code == 404


def test_non_object_body_is_invalid_input(todo_id):
    r = client.put(f'/todos/{todo_id}/', json=[True])
    assert r.status_code == 400
    assert r.json() == {'error': 'Invalid input'}
