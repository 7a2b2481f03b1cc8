"""API tests for user administration and the role-hierarchy rules it enforces."""

import uuid

import pytest
from httpx import AsyncClient
from sqlalchemy import func, select

from src.models.enums import Role
from src.models.user import User

from support import auth_headers

URL = "/api/v1/users/admin"


async def _get_user(session_factory, user_id: uuid.UUID) -> User | None:
    async with session_factory() as session:
        return (await session.execute(select(User).where(User.id == user_id))).scalar_one_or_none()


async def _user_count(session_factory) -> int:
    async with session_factory() as session:
        return (await session.execute(select(func.count()).select_from(User))).scalar_one()


# ---------------------------------------------------------------------------
# create
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
@pytest.mark.parametrize("actor", [Role.ADMIN, Role.OWNER])
async def test_manager_creates_user(async_client: AsyncClient, session_factory, acme, actor):
    response = await async_client.post(
        URL,
        json={"name": "New Person", "email": "new@acme.io", "password": "secret1", "role": "ADMIN"},
        headers=auth_headers(acme.id_for(actor)),
    )

    assert response.status_code == 201
    body = response.json()
    assert body["role"] == "ADMIN"
    assert set(body) == {"id", "name", "email", "role", "created_at"}
    created = await _get_user(session_factory, uuid.UUID(body["id"]))
    assert created.organization_id == acme.organization_id
    assert created.password_hash != "secret1"


@pytest.mark.asyncio
async def test_role_defaults_to_user(async_client: AsyncClient, acme):
    response = await async_client.post(
        URL,
        json={"name": "New Person", "email": "new@acme.io", "password": "secret1"},
        headers=auth_headers(acme.admin_id),
    )

    assert response.status_code == 201
    assert response.json()["role"] == "USER"


@pytest.mark.asyncio
async def test_user_cannot_create_users(async_client: AsyncClient, session_factory, acme):
    response = await async_client.post(
        URL,
        json={"name": "New Person", "email": "new@acme.io", "password": "secret1"},
        headers=auth_headers(acme.user_id),
    )

    assert response.status_code == 403
    assert response.json()["error"]["code"] == "FORBIDDEN"
    assert await _user_count(session_factory) == 3


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "method,body",
    [
        ("POST", {"name": "J", "email": "nope", "password": "x", "role": "OWNER"}),
        ("POST", {}),
        ("PATCH", {"name": "No target"}),
        ("DELETE", {"userId": "not-a-uuid"}),
    ],
)
async def test_user_is_refused_before_payload_is_validated(
    async_client: AsyncClient, session_factory, acme, method, body
):
    response = await async_client.request(method, URL, json=body, headers=auth_headers(acme.user_id))

    assert response.status_code == 403
    assert response.json()["error"]["code"] == "FORBIDDEN"
    assert await _user_count(session_factory) == 3


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "body,field",
    [
        ({"name": "J", "email": "new@acme.io", "password": "secret1"}, "name"),
        ({"name": "New Person", "email": "nope", "password": "secret1"}, "email"),
        ({"name": "New Person", "email": "new@acme.io", "password": "short"}, "password"),
        ({"name": "New Person", "email": "new@acme.io", "password": "secret1", "role": "OWNER"}, "role"),
    ],
)
async def test_create_validates_fields(async_client: AsyncClient, session_factory, acme, body, field):
    response = await async_client.post(URL, json=body, headers=auth_headers(acme.owner_id))

    assert response.status_code == 400
    error = response.json()["error"]
    assert error["code"] == "VALIDATION_ERROR"
    assert any(detail["field"].endswith(field) for detail in error["details"])
    assert await _user_count(session_factory) == 3


@pytest.mark.asyncio
async def test_create_rejects_email_used_in_another_tenant(async_client: AsyncClient, session_factory, acme, globex):
    response = await async_client.post(
        URL,
        json={"name": "Copy Cat", "email": "user@globex.io", "password": "secret1"},
        headers=auth_headers(acme.admin_id),
    )

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "CONFLICT"
    assert await _user_count(session_factory) == 6


# ---------------------------------------------------------------------------
# list
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_list_returns_tenant_users_newest_first(async_client: AsyncClient, acme, globex):
    response = await async_client.get(URL, headers=auth_headers(acme.admin_id))

    assert response.status_code == 200
    users = response.json()
    assert [user["id"] for user in users] == [str(acme.user_id), str(acme.admin_id), str(acme.owner_id)]
    assert all("password_hash" not in user for user in users)


@pytest.mark.asyncio
async def test_user_cannot_list_users(async_client: AsyncClient, acme):
    response = await async_client.get(URL, headers=auth_headers(acme.user_id))

    assert response.status_code == 403


# ---------------------------------------------------------------------------
# update
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_admin_updates_user(async_client: AsyncClient, session_factory, acme):
    response = await async_client.patch(
        URL,
        json={"userId": str(acme.user_id), "name": "Promoted Person", "role": "ADMIN"},
        headers=auth_headers(acme.admin_id),
    )

    assert response.status_code == 200
    assert response.json()["role"] == "ADMIN"
    updated = await _get_user(session_factory, acme.user_id)
    assert updated.name == "Promoted Person"
    assert updated.role == Role.ADMIN


@pytest.mark.asyncio
async def test_admin_cannot_update_owner(async_client: AsyncClient, session_factory, acme):
    response = await async_client.patch(
        URL,
        json={"userId": str(acme.owner_id), "name": "Hijacked"},
        headers=auth_headers(acme.admin_id),
    )

    assert response.status_code == 403
    assert (await _get_user(session_factory, acme.owner_id)).name == "acme owner"


@pytest.mark.asyncio
async def test_owner_updates_own_account(async_client: AsyncClient, session_factory, acme):
    response = await async_client.patch(
        URL,
        json={"userId": str(acme.owner_id), "name": "Renamed Owner", "password": "brand-new"},
        headers=auth_headers(acme.owner_id),
    )

    assert response.status_code == 200
    owner = await _get_user(session_factory, acme.owner_id)
    assert owner.name == "Renamed Owner"
    assert owner.role == Role.OWNER
    assert owner.password_hash != "brand-new"


@pytest.mark.asyncio
async def test_update_cannot_move_user_to_another_tenant(async_client: AsyncClient, session_factory, acme, globex):
    response = await async_client.patch(
        URL,
        json={"userId": str(acme.user_id), "organization_id": str(globex.organization_id)},
        headers=auth_headers(acme.owner_id),
    )

    assert response.status_code == 400
    assert (await _get_user(session_factory, acme.user_id)).organization_id == acme.organization_id


@pytest.mark.asyncio
async def test_update_requires_user_id(async_client: AsyncClient, acme):
    response = await async_client.patch(URL, json={"name": "Nobody"}, headers=auth_headers(acme.owner_id))

    assert response.status_code == 400


# ---------------------------------------------------------------------------
# delete
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_admin_deletes_user(async_client: AsyncClient, session_factory, acme):
    response = await async_client.request(
        "DELETE", URL, json={"userId": str(acme.user_id)}, headers=auth_headers(acme.admin_id)
    )

    assert response.status_code == 200
    assert response.json() == {"success": True}
    assert await _get_user(session_factory, acme.user_id) is None


@pytest.mark.asyncio
@pytest.mark.parametrize("actor", [Role.ADMIN, Role.OWNER])
async def test_owner_is_never_deleted(async_client: AsyncClient, session_factory, acme, actor):
    response = await async_client.request(
        "DELETE", URL, json={"userId": str(acme.owner_id)}, headers=auth_headers(acme.id_for(actor))
    )

    assert response.status_code == 403
    assert response.json()["error"]["message"] == "Cannot delete organization owner"
    assert await _get_user(session_factory, acme.owner_id) is not None


@pytest.mark.asyncio
async def test_user_cannot_delete_users(async_client: AsyncClient, session_factory, acme):
    response = await async_client.request(
        "DELETE", URL, json={"userId": str(acme.admin_id)}, headers=auth_headers(acme.user_id)
    )

    assert response.status_code == 403
    assert await _get_user(session_factory, acme.admin_id) is not None


# ---------------------------------------------------------------------------
# cross-tenant isolation
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
@pytest.mark.parametrize("target_role", [Role.USER, Role.ADMIN, Role.OWNER])
async def test_cross_tenant_targets_are_not_found(
    async_client: AsyncClient, session_factory, acme, globex, target_role
):
    target_id = globex.id_for(target_role)
    before = await _get_user(session_factory, target_id)

    patch_response = await async_client.patch(
        URL, json={"userId": str(target_id), "name": "Renamed"}, headers=auth_headers(acme.owner_id)
    )
    delete_response = await async_client.request(
        "DELETE", URL, json={"userId": str(target_id)}, headers=auth_headers(acme.owner_id)
    )

    assert patch_response.status_code == 404
    assert delete_response.status_code == 404
    after = await _get_user(session_factory, target_id)
    assert after is not None
    assert after.name == before.name
