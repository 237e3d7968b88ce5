import pytest
from fastapi.testclient import TestClient

from main import create_app
from storefront.core.config import Settings
from storefront.users.service import UserStore

TEST_SECRET = "test-signing-secret-that-is-long-enough-for-hs256"
TEST_PASSWORD = "pw123"


@pytest.fixture(scope="function")
def settings():
    """
    In-memory SQLite on a StaticPool: one isolated database per test.
    bcrypt rounds are dropped to the minimum to keep the suite fast.
    """
    return Settings(
        DATABASE_URL="sqlite://",
        JWT_SECRET=TEST_SECRET,
        BCRYPT_ROUNDS=4,
        API_PREFIX="/api",
    )


@pytest.fixture(scope="function")
def app(settings):
    return create_app(settings)


@pytest.fixture(scope="function")
def context(app):
    app.state.context.init_db()
    return app.state.context


@pytest.fixture(scope="function")
def client(app):
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture(scope="function")
def db_session(context):
    db = context.session_factory()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture(scope="function")
def store(db_session, settings):
    return UserStore(db_session, settings.MAX_WRITE_ATTEMPTS)


@pytest.fixture(scope="function")
def user(store, context):
    """A user created directly through the store, bypassing HTTP."""
    return store.create("Ann", "ann@x.com", context.passwords.hash(TEST_PASSWORD))


@pytest.fixture(scope="function")
def registered_user(client):
    payload = {"name": "Ann", "email": "ann@x.com", "password": TEST_PASSWORD}
    response = client.post("/api/auth/register", json=payload)
    assert response.status_code == 200, response.text
    return payload


@pytest.fixture(scope="function")
def auth_headers(client, registered_user):
    """
    Logs in the `registered_user` and returns valid authorization headers.
    """
    response = client.post(
        "/api/auth/login",
        json={"email": registered_user["email"], "password": registered_user["password"]},
    )
    assert response.status_code == 200, "Failed to log in test user for auth_headers"

    token = response.json()["token"]
    return {"Authorization": f"Bearer {token}"}


def _product(product_id="P1", name="Shoe", price=50, img="img", **extra):
    return {"productId": product_id, "name": name, "price": price, "img": img, **extra}


@pytest.fixture
def make_product():
    """Factory for request bodies of /cart/add and /wishlist/add."""
    return _product
