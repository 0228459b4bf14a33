# service.py
"""
Business rules for customers.

``CustomerService`` checks what it can without I/O (id, age, name format)
and hands everything else to the repository it was built with. Errors from
the repository are never caught or rewrapped here.
"""
import logging
import re
from typing import List

from customer_api.exceptions import InvalidAge, InvalidId, InvalidName
from customer_api.models import Customer
from customer_api.repository import BaseCustomerRepository

log = logging.getLogger(__name__)

# letters and spaces, at least one letter
NAME_PATTERN = r"[A-Za-z ]*[A-Za-z][A-Za-z ]*"


class CustomerService:
    def __init__(self, repo: BaseCustomerRepository):
        self.repo = repo
        self._name_re = re.compile(NAME_PATTERN)

    # --- validation ---

    def validate_name(self, name: str) -> None:
        """Raise ``InvalidName`` unless ``name`` is letters and spaces with at least one letter."""
        if not isinstance(name, str) or self._name_re.fullmatch(name) is None:
            log.info(f"Rejected customer name {name!r}")
            raise InvalidName(name)

    @staticmethod
    def _check_id(customer_id: int) -> None:
        if customer_id <= 0:
            log.info(f"Rejected customer id {customer_id}")
            raise InvalidId(customer_id)

    @staticmethod
    def _check_age(age: int) -> None:
        if age <= 0:
            log.info(f"Rejected customer age {age}")
            raise InvalidAge(age)

    # --- operations ---

    def create_customer(self, customer: Customer) -> Customer:
        log.debug(f"create_customer: {customer}")
        self._check_age(customer.age)
        self.validate_name(customer.name)
        created = self.repo.save(customer)
        log.info(f"Created customer {created.id} ('{created.name}')")
        return created

    def get_customer_by_id(self, customer_id: int) -> Customer:
        log.debug(f"get_customer_by_id: {customer_id}")
        self._check_id(customer_id)
        return self.repo.get(customer_id)

    def get_all_customers(self) -> List[Customer]:
        log.debug("get_all_customers")
        return self.repo.get_all()

    def update_customer(self, customer_id: int, customer: Customer) -> Customer:
        log.debug(f"update_customer: {customer_id} -> {customer}")
        self._check_id(customer_id)
        self._check_age(customer.age)
        self.validate_name(customer.name)
        updated = self.repo.update(customer_id, customer)
        updated.id = customer_id
        log.info(f"Updated customer {customer_id}")
        return updated

    def delete_customer(self, customer_id: int) -> None:
        log.debug(f"delete_customer: {customer_id}")
        # no id guard here, unlike get/search/update
        self.repo.delete(customer_id)
        log.info(f"Deleted customer {customer_id} (if present)")

    def search_customer_by_id(self, customer_id: int) -> None:
        log.debug(f"search_customer_by_id: {customer_id}")
        self._check_id(customer_id)
        self.repo.search(customer_id)
