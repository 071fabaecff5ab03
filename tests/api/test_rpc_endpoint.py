"""
Test suite for the RPC HTTP transport.

Covers envelopes, status codes, method/kind mismatches, and the ordering of
validation before authorization. Services are patched where a procedure
would touch the database.
"""

import json
from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock, PropertyMock, patch

import pytest

from docchat.api.deps.dependencies import get_identity_resolver
from docchat.boundary.db.models.file_model import UploadStatus
from docchat.core.exceptions import ErrorCode, RPCError, StorageError
from docchat.models.billing import StripeSessionResponse
from docchat.models.file import FileResponse

NOW = datetime(2024, 1, 1, tzinfo=timezone.utc)


def sample_file() -> FileResponse:
    return FileResponse(
        id="file-1",
        name="notes.pdf",
        url="https://files.example.com/k1",
        key="k1",
        upload_status=UploadStatus.SUCCESS,
        user_id="user-1",
        created_at=NOW,
        updated_at=NOW,
    )


def query(client, procedure, payload=None, **kwargs):
    params = {"input": json.dumps(payload)} if payload is not None else {}
    return client.get(f"/api/trpc/{procedure}", params=params, **kwargs)


def test_unknown_procedure_is_not_found(client):
    response = query(client, "doesNotExist")

    assert response.status_code == 404
    assert response.json()["error"]["code"] == "NOT_FOUND"


def test_unknown_procedure_is_not_found_even_with_malformed_input(client):
    response = client.get("/api/trpc/doesNotExist", params={"input": "{not json"})

    assert response.status_code == 404
    assert response.json()["error"]["code"] == "NOT_FOUND"


def test_collaborator_construction_failure_uses_error_envelope(client):
    client.app.dependency_overrides.pop(get_identity_resolver)
    cache = MagicMock()
    type(cache).identity_resolver = PropertyMock(
        side_effect=ValueError("Either jwt_secret or jwks_url must be configured")
    )

    with patch("docchat.api.deps.dependencies.get_service_cache", return_value=cache):
        response = query(client, "getUserFiles")

    assert response.status_code == 500
    assert response.json() == {
        "error": {"code": "INTERNAL_SERVER_ERROR", "message": "Internal server error"}
    }


def test_mutation_called_with_get_is_method_not_supported(client):
    response = query(client, "deleteFile", {"id": "file-1"})

    assert response.status_code == 405
    assert response.json()["error"]["code"] == "METHOD_NOT_SUPPORTED"


def test_query_called_with_post_is_method_not_supported(client):
    response = client.post("/api/trpc/getUserFiles", json={})

    assert response.status_code == 405
    assert response.json()["error"]["code"] == "METHOD_NOT_SUPPORTED"


def test_invalid_input_is_bad_request_before_auth(client, mock_resolver):
    response = query(client, "getFileMessages", {"fileId": "f1", "limit": 0})

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "BAD_REQUEST"
    mock_resolver.resolve_identity.assert_not_awaited()


@pytest.mark.parametrize("limit", [101, "10", 2.5])
def test_limit_out_of_range_or_wrong_type_is_bad_request(client, limit):
    response = query(client, "getFileMessages", {"fileId": "f1", "limit": limit})

    assert response.status_code == 400


def test_malformed_json_input_is_bad_request(client):
    response = client.get("/api/trpc/getFileUploadStatus", params={"input": "{not json"})

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "BAD_REQUEST"


def test_missing_required_input_is_bad_request(client):
    response = client.post("/api/trpc/getFile")

    assert response.status_code == 400


def test_private_procedure_without_identity_is_unauthorized(client, mock_resolver):
    mock_resolver.resolve_identity = AsyncMock(return_value=None)

    response = query(client, "getUserFiles")

    assert response.status_code == 401
    assert response.json() == {"error": {"code": "UNAUTHORIZED", "message": "UNAUTHORIZED"}}


def test_bearer_token_is_passed_to_resolver(client, mock_resolver):
    with patch("docchat.api.rpc.procedures.FileService") as service_cls:
        service_cls.return_value.list_user_files = AsyncMock(return_value=[])
        query(client, "getUserFiles", headers={"Authorization": "Bearer abc.def.ghi"})

    mock_resolver.resolve_identity.assert_awaited_once_with("abc.def.ghi")


def test_session_cookie_is_used_without_bearer_header(client, mock_resolver):
    with patch("docchat.api.rpc.procedures.FileService") as service_cls:
        service_cls.return_value.list_user_files = AsyncMock(return_value=[])
        query(client, "getUserFiles", headers={"Cookie": "session=cookie-token"})

    mock_resolver.resolve_identity.assert_awaited_once_with("cookie-token")


def test_get_file_success_envelope_uses_camel_case(client):
    with patch("docchat.api.rpc.procedures.FileService") as service_cls:
        service_cls.return_value.get_file = AsyncMock(return_value=sample_file())

        response = client.post("/api/trpc/getFile", json={"key": "k1"})

    assert response.status_code == 200
    data = response.json()["result"]["data"]
    assert data["id"] == "file-1"
    assert data["uploadStatus"] == "SUCCESS"
    assert data["userId"] == "user-1"
    service_cls.return_value.get_file.assert_awaited_once_with("user-1", "k1")


def test_not_found_from_service(client):
    with patch("docchat.api.rpc.procedures.FileService") as service_cls:
        service_cls.return_value.delete_file = AsyncMock(side_effect=RPCError(ErrorCode.NOT_FOUND))

        response = client.post("/api/trpc/deleteFile", json={"id": "missing"})

    assert response.status_code == 404
    assert response.json()["error"]["code"] == "NOT_FOUND"


def test_storage_failure_is_internal_error_without_details(client):
    with patch("docchat.api.rpc.procedures.FileService") as service_cls:
        service_cls.return_value.delete_file = AsyncMock(
            side_effect=StorageError("bucket secret-bucket denied", key="k1")
        )

        response = client.post("/api/trpc/deleteFile", json={"id": "file-1"})

    assert response.status_code == 500
    assert response.json() == {
        "error": {"code": "INTERNAL_SERVER_ERROR", "message": "Internal server error"}
    }


def test_get_file_messages_passes_paging_input(client):
    with patch("docchat.api.rpc.procedures.MessageService") as service_cls:
        service_cls.return_value.get_file_messages = AsyncMock(
            return_value={"messages": [], "nextCursor": None}
        )

        response = query(client, "getFileMessages", {"fileId": "f1", "limit": 5, "cursor": None})

    assert response.status_code == 200
    assert response.json()["result"]["data"] == {"messages": [], "nextCursor": None}
    service_cls.assert_called_once()
    assert service_cls.call_args.kwargs["default_limit"] == 10
    service_cls.return_value.get_file_messages.assert_awaited_once_with(
        "user-1", "f1", limit=5, cursor=None
    )


def test_create_stripe_session_returns_url(client):
    with patch("docchat.api.rpc.procedures.BillingService") as service_cls:
        service_cls.return_value.create_stripe_session = AsyncMock(
            return_value=StripeSessionResponse(url="https://checkout.stripe.test/s")
        )

        response = client.post("/api/trpc/createStripeSession")

    assert response.status_code == 200
    assert response.json() == {"result": {"data": {"url": "https://checkout.stripe.test/s"}}}


def test_auth_callback_requires_email(client, mock_resolver):
    from docchat.boundary.auth.identity_resolver import Identity

    mock_resolver.resolve_identity = AsyncMock(return_value=Identity(id="user-1", email=None))

    response = query(client, "authCallback")

    assert response.status_code == 401


def test_auth_callback_provisions_user(client):
    with patch("docchat.api.rpc.procedures.AuthService") as service_cls:
        service_cls.return_value.ensure_user = AsyncMock(return_value=True)

        response = query(client, "authCallback")

    assert response.status_code == 200
    assert response.json() == {"result": {"data": {"success": True}}}
    service_cls.return_value.ensure_user.assert_awaited_once_with("user-1", "user-1@example.com")
