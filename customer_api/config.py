# config.py (environment-driven settings and logging configuration)

import os
import logging.config
from dataclasses import dataclass


@dataclass
class Settings:
    database_url: str = os.environ.get('CUSTOMER_API_DATABASE_URL', 'sqlite:///customers.db')
    log_level: str = os.environ.get('CUSTOMER_API_LOG_LEVEL', 'INFO')
    sql_echo: bool = os.environ.get('CUSTOMER_API_SQL_ECHO', 'False') == 'True'
    seed_data: bool = os.environ.get('CUSTOMER_API_SEED_DATA', 'False') == 'True'
    host: str = os.environ.get('CUSTOMER_API_HOST', '127.0.0.1')
    port: int = int(os.environ.get('CUSTOMER_API_PORT', '8000'))


settings = Settings()


# --- LOGGING CONFIGURATION ---
LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'formatters': {
        'verbose': {
            'format': '{levelname} {asctime} {name} {module} {process:d} {thread:d} {message}',
            'style': '{',
        },
        'simple': {
            'format': '{levelname} {asctime} {name}: {message}',
            'style': '{',
        },
    },
    'handlers': {
        'console': {
            'class': 'logging.StreamHandler',
            'formatter': 'simple',
        },
    },
    'root': {
        'handlers': ['console'],
        'level': 'INFO',
    },
    'loggers': {
        'customer_api': {
            'handlers': ['console'],
            'level': settings.log_level,
            'propagate': False,
        },
        'uvicorn': {
            'handlers': ['console'],
            'level': 'INFO',
            'propagate': False,
        },
        'sqlalchemy.engine': {
            'handlers': ['console'],
            'level': 'INFO' if settings.sql_echo else 'WARNING',
            'propagate': False,
        },
    },
}
# --- END LOGGING CONFIGURATION ---


def configure_logging():
    logging.config.dictConfig(LOGGING)
