# database.py
import logging

from sqlmodel import create_engine, SQLModel

from customer_api.config import settings
from customer_api.exceptions import NameAlreadyExists
from customer_api.models import Customer, CustomerSQL  # noqa: F401  (registers the table)

log = logging.getLogger(__name__)

DEMO_CUSTOMERS = [
    {"name": "Fiat", "age": 24},
    {"name": "Anfat Nilaingan", "age": 40},
]


def make_engine(database_url: str = settings.database_url):
    connect_args = {}
    if database_url.startswith("sqlite"):
        # FastAPI runs sync endpoints in a threadpool
        connect_args["check_same_thread"] = False
    return create_engine(database_url, connect_args=connect_args)


engine = make_engine()


def create_db_and_tables(bind=None):
    SQLModel.metadata.create_all(bind if bind is not None else engine)


def seed_customers(repo) -> int:
    """Insert the demo customers, skipping any whose name is already taken."""
    inserted = 0
    for data in DEMO_CUSTOMERS:
        try:
            repo.save(Customer(**data))
            inserted += 1
        except NameAlreadyExists:
            log.debug(f"Seed customer '{data['name']}' already present, skipping.")
    log.info(f"Seeded {inserted} demo customer(s).")
    return inserted
