import logging
import os

from dotenv import load_dotenv


class _Config:
    DATABASE_URL: str

    MIDTRANS_SERVER_KEY: str
    MIDTRANS_WEBHOOK_SECRET: str
    ORDER_ID_PREFIX: str
    TIER_DURATION_DAYS: int

    LOG_LEVEL: int
    LOG_FILE: str | None

    IS_DEVELOPMENT: bool
    DASHBOARD_URL: str | None

    ADMIN_SECRET: str

    def __init__(self):
        load_dotenv()
        self.DATABASE_URL = os.path.expandvars(os.getenv("DATABASE_URL", ""))

        # Midtrans signs notifications with the server key, the path secret only guards the URL
        self.MIDTRANS_SERVER_KEY = os.getenv("MIDTRANS_SERVER_KEY", "")
        self.MIDTRANS_WEBHOOK_SECRET = os.getenv("MIDTRANS_WEBHOOK_SECRET", "")
        self.ORDER_ID_PREFIX = os.getenv("ORDER_ID_PREFIX", "DISBOT")
        self.TIER_DURATION_DAYS = int(os.getenv("TIER_DURATION_DAYS", "30"))

        # Configure logging
        log_level_str = os.getenv("LOG_LEVEL", "INFO").upper()
        self.LOG_LEVEL = getattr(logging, log_level_str, logging.INFO)
        self.LOG_FILE = os.getenv("LOG_FILE", None)

        self.IS_DEVELOPMENT = os.getenv("IS_DEVELOPMENT", "False").lower() == "true"
        self.DASHBOARD_URL = os.getenv("DASHBOARD_URL", None)

        self.ADMIN_SECRET = os.getenv("ADMIN_SECRET", "")


config = _Config()
