from unittest.mock import patch

import pytest
from sqlalchemy.exc import IntegrityError, OperationalError

from customer_api.database import seed_customers
from customer_api.exceptions import NameAlreadyExists, NotFound, StorageFailure
from customer_api.models import Customer


# ---- Contract tests (run against every backend via the `repo` fixture) ----
def test_save_assigns_increasing_ids(repo):
    first = repo.save(Customer(name="Fiat", age=24))
    second = repo.save(Customer(name="Anfat Nilaingan", age=40))

    assert first.id is not None and first.id > 0
    assert second.id > first.id
    assert repo.get(first.id) == Customer(id=first.id, name="Fiat", age=24)


def test_save_rejects_existing_name(repo):
    repo.save(Customer(name="Fiat", age=24))

    with pytest.raises(NameAlreadyExists):
        repo.save(Customer(name="Fiat", age=30))
    assert len(repo.get_all()) == 1


def test_get_missing_raises_not_found(repo):
    with pytest.raises(NotFound):
        repo.get(999)


def test_get_all_returns_rows_in_id_order(repo):
    repo.save(Customer(name="Fiat", age=24))
    repo.save(Customer(name="Anfat", age=40))

    customers = repo.get_all()

    assert [c.name for c in customers] == ["Fiat", "Anfat"]
    assert [c.id for c in customers] == sorted(c.id for c in customers)


def test_get_all_on_empty_store(repo):
    assert repo.get_all() == []


def test_update_overwrites_fields_and_keeps_id(repo):
    created = repo.save(Customer(name="Fiat", age=24))

    updated = repo.update(created.id, Customer(name="Fiat Four", age=25))

    assert updated == Customer(id=created.id, name="Fiat Four", age=25)
    assert repo.get(created.id) == updated


def test_update_may_keep_own_name(repo):
    created = repo.save(Customer(name="Fiat", age=24))

    updated = repo.update(created.id, Customer(name="Fiat", age=30))

    assert updated.age == 30


def test_update_rejects_name_of_another_customer(repo):
    fiat = repo.save(Customer(name="Fiat", age=24))
    repo.save(Customer(name="Anfat", age=40))

    with pytest.raises(NameAlreadyExists):
        repo.update(fiat.id, Customer(name="Anfat", age=24))
    assert repo.get(fiat.id).name == "Fiat"


def test_update_missing_raises_not_found(repo):
    with pytest.raises(NotFound):
        repo.update(42, Customer(name="Nobody", age=20))


def test_delete_is_idempotent(repo):
    created = repo.save(Customer(name="Fiat", age=24))

    repo.delete(created.id)
    repo.delete(created.id)
    repo.delete(12345)

    with pytest.raises(NotFound):
        repo.get(created.id)


def test_search(repo):
    created = repo.save(Customer(name="Fiat", age=24))

    assert repo.search(created.id) is None
    with pytest.raises(NotFound):
        repo.search(created.id + 1)


HUGE_ID = 2 ** 70


def test_ids_beyond_integer_range_are_misses(repo):
    repo.save(Customer(name="Fiat", age=24))

    with pytest.raises(NotFound):
        repo.get(HUGE_ID)
    with pytest.raises(NotFound):
        repo.search(HUGE_ID)
    with pytest.raises(NotFound):
        repo.update(HUGE_ID, Customer(name="Nobody", age=20))
    repo.delete(HUGE_ID)
    repo.delete(-HUGE_ID)

    assert [c.name for c in repo.get_all()] == ["Fiat"]


def test_returned_customers_are_copies(repo):
    created = repo.save(Customer(name="Fiat", age=24))

    fetched = repo.get(created.id)
    fetched.age = 99

    assert repo.get(created.id).age == 24


def test_seed_customers_skips_existing_names(repo):
    repo.save(Customer(name="Fiat", age=24))

    inserted = seed_customers(repo)

    assert inserted == 1
    assert sorted(c.name for c in repo.get_all()) == ["Anfat Nilaingan", "Fiat"]


# ---- SQLModel-specific failure translation ----
def test_sql_unique_constraint_race_surfaces_as_name_clash(sql_repo):
    sql_repo.save(Customer(name="Fiat", age=24))

    # Simulate a concurrent writer: the pre-check sees no clash, the insert hits the constraint
    with patch.object(type(sql_repo), "_name_taken", return_value=False):
        with pytest.raises(NameAlreadyExists):
            sql_repo.save(Customer(name="Fiat", age=30))


def test_sql_integrity_error_on_update_surfaces_as_name_clash(sql_repo):
    fiat = sql_repo.save(Customer(name="Fiat", age=24))
    sql_repo.save(Customer(name="Anfat", age=40))

    with patch.object(type(sql_repo), "_name_taken", return_value=False):
        with pytest.raises(NameAlreadyExists) as excinfo:
            sql_repo.update(fiat.id, Customer(name="Anfat", age=24))
    assert isinstance(excinfo.value.__cause__, IntegrityError)


def test_sql_other_database_errors_become_storage_failure(sql_engine, sql_repo):
    sql_repo.save(Customer(name="Fiat", age=24))
    error = OperationalError("SELECT", {}, Exception("database is locked"))

    with patch("customer_api.repository.Session.get", side_effect=error):
        with pytest.raises(StorageFailure) as excinfo:
            sql_repo.get(1)
    assert excinfo.value.details["operation"] == "get"
    assert excinfo.value.__cause__ is error


def test_sql_missing_table_becomes_storage_failure(sql_engine, sql_repo):
    from sqlmodel import SQLModel

    SQLModel.metadata.drop_all(sql_engine)

    with pytest.raises(StorageFailure):
        sql_repo.get_all()
