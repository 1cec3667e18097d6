import pytest

from devauth.auth.users import InMemoryUserDirectory
from devauth.infra import directory_factory
from devauth.infra.yaml_directory import YamlUserDirectory


@pytest.fixture(autouse=True)
def _fresh_singleton():
    directory_factory.reset_user_directory()
    yield
    directory_factory.reset_user_directory()


def test_default_is_yaml(monkeypatch):
    monkeypatch.delenv("DEVAUTH_USER_DIRECTORY", raising=False)
    assert isinstance(directory_factory.create_user_directory(), YamlUserDirectory)


def test_inmemory(monkeypatch):
    monkeypatch.setenv("DEVAUTH_USER_DIRECTORY", "InMemory")
    assert isinstance(directory_factory.create_user_directory(), InMemoryUserDirectory)


def test_mongodb_requires_url(monkeypatch):
    monkeypatch.setenv("DEVAUTH_USER_DIRECTORY", "mongodb")
    monkeypatch.delenv("DEVAUTH_MONGODB_URL", raising=False)
    with pytest.raises(ValueError, match="DEVAUTH_MONGODB_URL"):
        directory_factory.create_user_directory()


def test_unknown_kind(monkeypatch):
    monkeypatch.setenv("DEVAUTH_USER_DIRECTORY", "sqlite")
    with pytest.raises(ValueError, match="Invalid DEVAUTH_USER_DIRECTORY"):
        directory_factory.create_user_directory()


def test_get_user_directory_is_cached(monkeypatch):
    monkeypatch.setenv("DEVAUTH_USER_DIRECTORY", "inmemory")
    first = directory_factory.get_user_directory()
    assert directory_factory.get_user_directory() is first


def test_mongodb_client_reads_aware_datetimes(monkeypatch):
    import motor.motor_asyncio

    from devauth.infra.mongo_directory import MongoUserDirectory

    created = {}

    class FakeClient:
        def __init__(self, url, **kwargs):
            created["url"] = url
            created["kwargs"] = kwargs

        def __getitem__(self, db_name):
            return {"users": f"{db_name}.users"}

    monkeypatch.setattr(motor.motor_asyncio, "AsyncIOMotorClient", FakeClient)
    monkeypatch.setenv("DEVAUTH_USER_DIRECTORY", "mongodb")
    monkeypatch.setenv("DEVAUTH_MONGODB_URL", "mongodb://localhost:27017")
    monkeypatch.delenv("DEVAUTH_MONGODB_DATABASE", raising=False)
    monkeypatch.delenv("DEVAUTH_MONGODB_COLLECTION", raising=False)

    directory = directory_factory.create_user_directory()

    assert isinstance(directory, MongoUserDirectory)
    assert directory.collection == "devauth.users"
    assert created["url"] == "mongodb://localhost:27017"
    assert created["kwargs"].get("tz_aware") is True
