from starlette.concurrency import run_in_threadpool

from storefront.users.models import User
from storefront.users.service import UserStore


def test_register_then_login_returns_usable_token(client, context):
    response = client.post(
        "/api/auth/register",
        json={"name": "Ann", "email": "ann@x.com", "password": "pw123"},
    )
    assert response.status_code == 200
    assert response.json() == {"message": "User registered successfully"}

    response = client.post("/api/auth/login", json={"email": "ann@x.com", "password": "pw123"})
    assert response.status_code == 200
    body = response.json()
    assert body["message"] == "Login successful"
    assert body["user"]["name"] == "Ann"
    assert body["user"]["email"] == "ann@x.com"
    assert set(body["user"]) == {"id", "name", "email"}

    assert str(context.tokens.verify(body["token"])) == body["user"]["id"]


def test_register_stores_hash_and_empty_lists(client, db_session, registered_user):
    user = db_session.query(User).filter(User.email == "ann@x.com").one()
    assert user.password_hash != registered_user["password"]
    assert user.password_hash.startswith("$2")
    assert user.cart == []
    assert user.wishlist == []
    assert user.version == 1


def test_duplicate_email_is_rejected_regardless_of_other_fields(client, registered_user):
    response = client.post(
        "/api/auth/register",
        json={"name": "Someone Else", "email": "ann@x.com", "password": "different"},
    )
    assert response.status_code == 400
    assert response.json()["code"] == "DUPLICATE_EMAIL"


def test_email_uniqueness_ignores_case(client, registered_user):
    response = client.post(
        "/api/auth/register",
        json={"name": "Ann", "email": "ANN@X.com", "password": "pw123"},
    )
    assert response.status_code == 400
    assert response.json()["code"] == "DUPLICATE_EMAIL"


def test_duplicate_email_is_not_written_to_logs(client, registered_user, mocker):
    handler_logger = mocker.patch("storefront.core.error_handlers.logger")
    response = client.post(
        "/api/auth/register",
        json={"name": "Ann", "email": "ann@x.com", "password": "pw123"},
    )
    assert response.status_code == 400
    handler_logger.warning.assert_called_once()
    assert "ann@x.com" not in str(handler_logger.warning.call_args)


def test_login_unknown_email(client):
    response = client.post("/api/auth/login", json={"email": "nobody@x.com", "password": "pw123"})
    assert response.status_code == 400
    assert response.json() == {"message": "User not found", "code": "NOT_FOUND"}


def test_login_wrong_password(client, registered_user):
    response = client.post("/api/auth/login", json={"email": "ann@x.com", "password": "wrong"})
    assert response.status_code == 400
    assert response.json() == {"message": "Invalid password", "code": "INVALID_CREDENTIALS"}


def test_login_records_last_login(client, db_session, auth_headers):
    user = db_session.query(User).filter(User.email == "ann@x.com").one()
    assert user.last_login is not None


def test_me_returns_summary(client, auth_headers):
    response = client.get("/api/auth/me", headers=auth_headers)
    assert response.status_code == 200
    assert response.json()["email"] == "ann@x.com"
    assert "password_hash" not in response.json()


def test_register_missing_fields_is_validation_error(client):
    response = client.post("/api/auth/register", json={"email": "ann@x.com"})
    assert response.status_code == 400
    body = response.json()
    assert body["code"] == "VALIDATION_ERROR"
    fields = {detail["field"] for detail in body["details"]}
    assert "body -> name" in fields
    assert "body -> password" in fields


def test_register_invalid_email_is_validation_error(client):
    response = client.post(
        "/api/auth/register",
        json={"name": "Ann", "email": "not-an-email", "password": "pw123"},
    )
    assert response.status_code == 400
    assert response.json()["code"] == "VALIDATION_ERROR"


def test_store_failure_is_generic_500(client, mocker):
    mocker.patch.object(UserStore, "create", side_effect=RuntimeError("database is down"))
    response = client.post(
        "/api/auth/register",
        json={"name": "Ann", "email": "ann@x.com", "password": "pw123"},
    )
    assert response.status_code == 500
    assert response.json() == {"message": "Server error", "code": "INTERNAL_ERROR"}
    assert "database" not in response.text


def test_password_hashing_runs_off_the_event_loop(client, mocker):
    spy = mocker.patch("storefront.auth.service.run_in_threadpool", wraps=run_in_threadpool)
    client.post("/api/auth/register", json={"name": "Ann", "email": "ann@x.com", "password": "pw123"})
    assert spy.call_count == 1


def test_root_and_health(client):
    assert client.get("/").json() == {"message": "Server running..."}
    assert client.get("/health").json() == {"status": "ok"}


def test_responses_carry_request_id(client):
    assert client.get("/health").headers.get("X-Request-ID")
