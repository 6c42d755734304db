import asyncio
from datetime import timedelta

import pytest
from fastapi import HTTPException
from fastapi.security import HTTPAuthorizationCredentials

from farmops.core.auth import (
    CurrentUser,
    create_access_token,
    decode_token,
    get_current_user,
    require_internal_token,
    require_roles,
)
from farmops.models.enums import Role


def test_token_round_trip():
    token = create_access_token({"id": "u-1", "email": "worker@farmops.local", "role": "WORKER"})
    user = decode_token(token)
    assert user == CurrentUser(id="u-1", email="worker@farmops.local", role=Role.WORKER)


def test_expired_token():
    token = create_access_token({"id": "u-1", "email": "w@x", "role": "WORKER"}, expires_delta=timedelta(seconds=-1))
    with pytest.raises(HTTPException) as exc:
        decode_token(token)
    assert exc.value.status_code == 401
    assert exc.value.detail == "Token expired"


def test_unknown_role_is_invalid():
    token = create_access_token({"id": "u-1", "email": "w@x", "role": "GARDENER"})
    with pytest.raises(HTTPException) as exc:
        decode_token(token)
    assert exc.value.detail == "Invalid token"


def test_missing_credentials():
    with pytest.raises(HTTPException) as exc:
        asyncio.run(get_current_user(None))
    assert exc.value.status_code == 401


def test_bearer_credentials():
    token = create_access_token({"id": "u-2", "email": "s@x", "role": "SUPERVISOR"})
    creds = HTTPAuthorizationCredentials(scheme="Bearer", credentials=token)
    assert asyncio.run(get_current_user(creds)).role == Role.SUPERVISOR


def test_require_roles():
    guard = require_roles(Role.SUPERVISOR, Role.ADMIN)
    admin = CurrentUser(id="a", email="a@x", role=Role.ADMIN)
    worker = CurrentUser(id="w", email="w@x", role=Role.WORKER)

    assert asyncio.run(guard(admin)) is admin
    with pytest.raises(HTTPException) as exc:
        asyncio.run(guard(worker))
    assert exc.value.status_code == 403


def test_internal_token():
    asyncio.run(require_internal_token("internal-test-token"))
    with pytest.raises(HTTPException):
        asyncio.run(require_internal_token(None))
