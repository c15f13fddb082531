from datetime import datetime, timedelta, timezone

import pytest

from user_api.auth import jwt_handler

NEW_USER = {'name': 'A', 'email': 'a@x.com', 'phone': '1', 'role': 'user'}


def _flip_signature(token: str) -> str:
    head, signature = token.rsplit('.', 1)
    replacement = 'A' if signature[0] != 'A' else 'B'
    return f'{head}.{replacement}{signature[1:]}'


def test_create_then_list_contains_user_without_password(client, auth_headers) -> None:
    created = client.post('/', json=NEW_USER, headers=auth_headers)

    assert created.status_code == 201
    created_body = created.json()
    assert created_body == {'id': created_body['id'], **NEW_USER}

    listed = client.get('/', headers=auth_headers)

    assert listed.status_code == 200
    rows = listed.json()
    assert {'id': created_body['id'], **NEW_USER} in rows
    assert all('password' not in row for row in rows)


def test_create_ignores_submitted_password(client, auth_headers) -> None:
    response = client.post('/', json={**NEW_USER, 'password': 'secret'}, headers=auth_headers)

    assert response.status_code == 201
    assert 'password' not in response.json()


def test_create_rejects_missing_field(client, auth_headers) -> None:
    response = client.post('/', json={'name': 'A', 'email': 'a@x.com', 'role': 'user'}, headers=auth_headers)

    assert response.status_code == 400
    assert response.json() == {'detail': 'All fields are required'}


def test_list_orders_rows_by_id(client, auth_headers) -> None:
    client.post('/', json={**NEW_USER, 'email': 'b@x.com'}, headers=auth_headers)
    client.post('/', json={**NEW_USER, 'email': 'c@x.com'}, headers=auth_headers)

    ids = [row['id'] for row in client.get('/', headers=auth_headers).json()]

    assert ids == sorted(ids)
    assert len(ids) == 3


def test_update_replaces_fields_and_echoes_them(client, auth_headers) -> None:
    user_id = client.post('/', json=NEW_USER, headers=auth_headers).json()['id']
    changes = {'id': user_id, 'name': 'B', 'email': 'b@x.com', 'phone': '2', 'role': 'admin'}

    response = client.put('/', json=changes, headers=auth_headers)

    assert response.status_code == 200
    assert response.json() == changes
    assert changes in client.get('/', headers=auth_headers).json()


def test_update_unknown_id_still_succeeds(client, auth_headers) -> None:
    changes = {'id': 9999, 'name': 'Ghost', 'email': 'ghost@x.com', 'phone': '0', 'role': 'user'}

    response = client.put('/', json=changes, headers=auth_headers)

    assert response.status_code == 200
    assert response.json() == changes


def test_update_requires_id(client, auth_headers) -> None:
    response = client.put('/', json=NEW_USER, headers=auth_headers)

    assert response.status_code == 400


def test_delete_removes_user(client, auth_headers) -> None:
    user_id = client.post('/', json=NEW_USER, headers=auth_headers).json()['id']

    response = client.request('DELETE', '/', json={'id': user_id}, headers=auth_headers)

    assert response.status_code == 200
    assert response.text == f'User with ID {user_id} deleted successfully'
    assert all(row['id'] != user_id for row in client.get('/', headers=auth_headers).json())


def test_delete_unknown_id_still_succeeds(client, auth_headers) -> None:
    response = client.request('DELETE', '/', json={'id': 4242}, headers=auth_headers)

    assert response.status_code == 200


def test_delete_requires_id(client, auth_headers) -> None:
    response = client.request('DELETE', '/', json={}, headers=auth_headers)

    assert response.status_code == 400
    assert response.json() == {'detail': 'User ID is required'}


@pytest.mark.parametrize(
    ('method', 'body'),
    [
        ('GET', None),
        ('POST', NEW_USER),
        ('PUT', {'id': 1, **NEW_USER}),
        ('DELETE', {'id': 1}),
    ],
)
def test_protected_routes_without_token_return_401(client, method: str, body) -> None:
    response = client.request(method, '/', json=body)

    assert response.status_code == 401
    assert response.json() == {'detail': 'Access denied'}


def test_non_bearer_scheme_counts_as_missing_token(client) -> None:
    response = client.get('/', headers={'Authorization': 'Basic dXNlcjpwYXNz'})

    assert response.status_code == 401


@pytest.mark.parametrize(
    ('method', 'body'),
    [
        ('GET', None),
        ('POST', NEW_USER),
        ('PUT', {'id': 1, **NEW_USER}),
        ('DELETE', {'id': 1}),
    ],
)
def test_protected_routes_reject_tampered_token(client, auth_headers, method: str, body) -> None:
    token = auth_headers['Authorization'].split(' ', 1)[1]
    headers = {'Authorization': f'Bearer {_flip_signature(token)}'}

    response = client.request(method, '/', json=body, headers=headers)

    assert response.status_code == 403
    assert response.json() == {'detail': 'Invalid token'}


def test_expired_token_returns_403(client, settings) -> None:
    token = jwt_handler.create_access_token(
        settings,
        user_id=1,
        email='ada@example.com',
        role='admin',
        issued_at=datetime.now(timezone.utc) - timedelta(hours=2),
    )

    response = client.get('/', headers={'Authorization': f'Bearer {token}'})

    assert response.status_code == 403


def test_token_signed_with_other_secret_returns_403(client, settings) -> None:
    other = settings.model_copy(update={'jwt_secret': 'a-completely-different-signing-secret-value'})
    token = jwt_handler.create_access_token(other, user_id=1, email='ada@example.com', role='admin')

    response = client.get('/', headers={'Authorization': f'Bearer {token}'})

    assert response.status_code == 403
