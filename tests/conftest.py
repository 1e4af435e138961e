import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from ncf_pos.db import get_db
from ncf_pos.main import app
from ncf_pos.models import Base, Store
from ncf_pos.seed import seed_invoice_types
from ncf_pos.services import invoice_sequences


@pytest.fixture()
def engine(tmp_path):
    db_path = tmp_path / "test.db"
    engine = create_engine(
        f"sqlite+pysqlite:///{db_path}",
        connect_args={"check_same_thread": False, "timeout": 30},
    )
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture()
def SessionLocal(engine):
    factory = sessionmaker(bind=engine, autocommit=False, autoflush=False)
    seed_invoice_types(factory)
    return factory


@pytest.fixture()
def db_session(SessionLocal):
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def client(SessionLocal):
    def override_get_db():
        db = SessionLocal()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture()
def make_store(db_session):
    def _make_store(name: str, initial_number: int = 0) -> Store:
        store = Store(name=name)
        db_session.add(store)
        db_session.commit()
        invoice_sequences.provision_store(
            db_session, store.id, initial_number=initial_number
        )
        return store

    return _make_store


@pytest.fixture()
def store(make_store):
    return make_store("Colmado La Esquina")


@pytest.fixture()
def other_store(make_store):
    return make_store("Farmacia Central")
