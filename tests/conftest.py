import pytest
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker
from fastapi.testclient import TestClient

from app.config import settings
from app.database import Base
from app.dependencies import get_db, create_access_token
from app.main import app
from app.models.connection_request import ConnectionRequest
from app.models.user import User

test_engine = create_engine(settings.test_database_url)

if test_engine.dialect.name == "sqlite":
    # pysqlite manages transactions itself unless told not to, which breaks
    # SAVEPOINT handling inside the per-test transaction.
    @event.listens_for(test_engine, "connect")
    def _disable_pysqlite_transactions(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None

    @event.listens_for(test_engine, "begin")
    def _emit_begin(conn):
        conn.exec_driver_sql("BEGIN")


TestSession = sessionmaker(bind=test_engine)


@pytest.fixture(scope="session", autouse=True)
def setup_test_db():
    Base.metadata.drop_all(bind=test_engine)
    Base.metadata.create_all(bind=test_engine)
    yield
    Base.metadata.drop_all(bind=test_engine)


@pytest.fixture
def db():
    connection = test_engine.connect()
    transaction = connection.begin()
    session = TestSession(
        bind=connection, join_transaction_mode="create_savepoint"
    )
    yield session
    session.close()
    transaction.rollback()
    connection.close()


@pytest.fixture
def client(db):
    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def make_user(db):
    counter = {"n": 0}

    def _make_user(first_name: str | None = None, **fields) -> User:
        counter["n"] += 1
        n = counter["n"]
        user = User(
            email=fields.pop("email", f"dev{n}@test.com"),
            first_name=first_name or f"Developer{n}",
            last_name=fields.pop("last_name", "Tester"),
            password_hash=fields.pop("password_hash", "h"),
            **fields,
        )
        db.add(user)
        db.flush()
        return user

    return _make_user


@pytest.fixture
def make_request(db):
    def _make_request(from_user: User, to_user: User, status: str) -> ConnectionRequest:
        record = ConnectionRequest(
            from_user_id=from_user.id, to_user_id=to_user.id, status=status
        )
        db.add(record)
        db.flush()
        return record

    return _make_request


@pytest.fixture
def alice(db):
    user = User(
        email="alice@test.com",
        first_name="Alice",
        last_name="Anderson",
        password_hash="x",
        skills=["python", "sql"],
    )
    user.set_password("Alice#2024")
    db.add(user)
    db.flush()
    return user


@pytest.fixture
def bob(db):
    user = User(
        email="bob@test.com",
        first_name="Bob",
        last_name="Baker",
        password_hash="x",
    )
    user.set_password("Bob#2024x")
    db.add(user)
    db.flush()
    return user


@pytest.fixture
def carol(make_user):
    return make_user("Carol", email="carol@test.com")


@pytest.fixture
def alice_headers(alice):
    return {"Authorization": f"Bearer {create_access_token(alice)}"}


@pytest.fixture
def bob_headers(bob):
    return {"Authorization": f"Bearer {create_access_token(bob)}"}


@pytest.fixture
def carol_headers(carol):
    return {"Authorization": f"Bearer {create_access_token(carol)}"}


@pytest.fixture
def connection(make_request, alice, bob):
    return make_request(alice, bob, "accepted")
