# repository.py
import logging
from abc import ABC, abstractmethod
from typing import Dict, List

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlmodel import Session, select

from customer_api.exceptions import NameAlreadyExists, NotFound, StorageFailure
from customer_api.models import Customer, CustomerSQL

log = logging.getLogger(__name__)

MIN_STORED_ID = -(2 ** 63)
MAX_STORED_ID = 2 ** 63 - 1

# ==============================================================================
# --- REPOSITORY INTERFACE ---
# ==============================================================================

class BaseCustomerRepository(ABC):
    """
    Storage port for customers.

    Implementations own name uniqueness at the storage level and report
    failures with the errors in ``customer_api.exceptions``:
    ``NameAlreadyExists`` on a name clash, ``NotFound`` on a lookup miss and
    ``StorageFailure`` for anything else.
    """

    @abstractmethod
    def save(self, customer: Customer) -> Customer:
        pass

    @abstractmethod
    def get(self, customer_id: int) -> Customer:
        pass

    @abstractmethod
    def get_all(self) -> List[Customer]:
        pass

    @abstractmethod
    def update(self, customer_id: int, customer: Customer) -> Customer:
        pass

    @abstractmethod
    def delete(self, customer_id: int) -> None:
        pass

    @abstractmethod
    def search(self, customer_id: int) -> None:
        pass

# ==============================================================================
# --- IN-MEMORY REPOSITORY ---
# ==============================================================================

class InMemoryCustomerRepository(BaseCustomerRepository):
    def __init__(self):
        self.customers: Dict[int, Customer] = {}
        self.next_id = 1

    def _name_taken(self, name: str, exclude_id=None) -> bool:
        return any(
            c.name == name and cid != exclude_id for cid, c in self.customers.items()
        )

    def save(self, customer: Customer) -> Customer:
        if self._name_taken(customer.name):
            raise NameAlreadyExists(customer.name)
        stored = Customer(id=self.next_id, name=customer.name, age=customer.age)
        self.customers[stored.id] = stored
        self.next_id += 1
        return stored.model_copy()

    def get(self, customer_id: int) -> Customer:
        if customer_id not in self.customers:
            raise NotFound(customer_id)
        return self.customers[customer_id].model_copy()

    def get_all(self) -> List[Customer]:
        return [self.customers[cid].model_copy() for cid in sorted(self.customers)]

    def update(self, customer_id: int, customer: Customer) -> Customer:
        if self._name_taken(customer.name, exclude_id=customer_id):
            raise NameAlreadyExists(customer.name)
        if customer_id not in self.customers:
            raise NotFound(customer_id)
        updated = Customer(id=customer_id, name=customer.name, age=customer.age)
        self.customers[customer_id] = updated
        return updated.model_copy()

    def delete(self, customer_id: int) -> None:
        self.customers.pop(customer_id, None)

    def search(self, customer_id: int) -> None:
        if customer_id not in self.customers:
            raise NotFound(customer_id)

# ==============================================================================
# --- SQLMODEL REPOSITORY ---
# ==============================================================================

class SQLModelCustomerRepository(BaseCustomerRepository):
    """Customer storage on a relational table through SQLModel sessions."""

    def __init__(self, engine):
        self.engine = engine

    @staticmethod
    def _storable_id(customer_id: int) -> bool:
        # primary keys are signed 64-bit; anything wider cannot be a stored row
        return MIN_STORED_ID <= customer_id <= MAX_STORED_ID

    @staticmethod
    def _to_customer(customer_sql: CustomerSQL) -> Customer:
        return Customer(id=customer_sql.id, name=customer_sql.name, age=customer_sql.age)

    @staticmethod
    def _name_taken(session: Session, name: str, exclude_id=None) -> bool:
        statement = select(CustomerSQL).where(CustomerSQL.name == name)
        if exclude_id is not None:
            statement = statement.where(CustomerSQL.id != exclude_id)
        return session.exec(statement).first() is not None

    def save(self, customer: Customer) -> Customer:
        try:
            with Session(self.engine) as session:
                if self._name_taken(session, customer.name):
                    raise NameAlreadyExists(customer.name)
                customer_sql = CustomerSQL(name=customer.name, age=customer.age)
                session.add(customer_sql)
                session.commit()
                session.refresh(customer_sql)
                return self._to_customer(customer_sql)
        except IntegrityError as e:
            # a concurrent insert won the race for this name
            log.warning(f"Unique constraint hit while saving '{customer.name}': {e.orig}")
            raise NameAlreadyExists(customer.name) from e
        except SQLAlchemyError as e:
            log.error(f"Failed to save customer '{customer.name}': {e}")
            raise StorageFailure("save", str(e)) from e

    def get(self, customer_id: int) -> Customer:
        if not self._storable_id(customer_id):
            raise NotFound(customer_id)
        try:
            with Session(self.engine) as session:
                customer_sql = session.get(CustomerSQL, customer_id)
                if customer_sql is None:
                    raise NotFound(customer_id)
                return self._to_customer(customer_sql)
        except SQLAlchemyError as e:
            log.error(f"Failed to load customer {customer_id}: {e}")
            raise StorageFailure("get", str(e)) from e

    def get_all(self) -> List[Customer]:
        try:
            with Session(self.engine) as session:
                results = session.exec(select(CustomerSQL).order_by(CustomerSQL.id)).all()
                return [self._to_customer(c) for c in results]
        except SQLAlchemyError as e:
            log.error(f"Failed to list customers: {e}")
            raise StorageFailure("get_all", str(e)) from e

    def update(self, customer_id: int, customer: Customer) -> Customer:
        if not self._storable_id(customer_id):
            raise NotFound(customer_id)
        try:
            with Session(self.engine) as session:
                if self._name_taken(session, customer.name, exclude_id=customer_id):
                    raise NameAlreadyExists(customer.name)
                customer_sql = session.get(CustomerSQL, customer_id)
                if customer_sql is None:
                    raise NotFound(customer_id)
                customer_sql.name = customer.name
                customer_sql.age = customer.age
                session.add(customer_sql)
                session.commit()
                session.refresh(customer_sql)
                return self._to_customer(customer_sql)
        except IntegrityError as e:
            log.warning(f"Unique constraint hit while updating customer {customer_id}: {e.orig}")
            raise NameAlreadyExists(customer.name) from e
        except SQLAlchemyError as e:
            log.error(f"Failed to update customer {customer_id}: {e}")
            raise StorageFailure("update", str(e)) from e

    def delete(self, customer_id: int) -> None:
        if not self._storable_id(customer_id):
            return
        try:
            with Session(self.engine) as session:
                customer_sql = session.get(CustomerSQL, customer_id)
                if customer_sql is None:
                    return
                session.delete(customer_sql)
                session.commit()
        except SQLAlchemyError as e:
            log.error(f"Failed to delete customer {customer_id}: {e}")
            raise StorageFailure("delete", str(e)) from e

    def search(self, customer_id: int) -> None:
        if not self._storable_id(customer_id):
            raise NotFound(customer_id)
        try:
            with Session(self.engine) as session:
                if session.get(CustomerSQL, customer_id) is None:
                    raise NotFound(customer_id)
        except SQLAlchemyError as e:
            log.error(f"Failed to look up customer {customer_id}: {e}")
            raise StorageFailure("search", str(e)) from e
