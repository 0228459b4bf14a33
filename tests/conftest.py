import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel, create_engine

from customer_api.main import app
from customer_api.repository import InMemoryCustomerRepository, SQLModelCustomerRepository
from customer_api.routes import get_customer_repo


@pytest.fixture
def sql_engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def memory_repo():
    return InMemoryCustomerRepository()


@pytest.fixture
def sql_repo(sql_engine):
    return SQLModelCustomerRepository(sql_engine)


@pytest.fixture(params=["memory", "sql"])
def repo(request):
    # Same contract tests run against both backends
    return request.getfixturevalue(f"{request.param}_repo")


@pytest.fixture
def client(sql_repo):
    app.dependency_overrides[get_customer_repo] = lambda: sql_repo
    yield TestClient(app)
    app.dependency_overrides.clear()
