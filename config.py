import os
import yaml

ROOT_PATH = os.path.dirname(__file__)
CONFIG_FILE_PATH = os.path.join(ROOT_PATH, "env.yaml")

if os.path.exists(CONFIG_FILE_PATH):
    with open(CONFIG_FILE_PATH, "r") as r_file:
        data = yaml.safe_load(r_file) or dict()
else:
    data = dict()


class ApplicationConfig:
    DB_URI = data.get("DB_URI", "sqlite+aiosqlite:///./orders.db")
    API_PREFIX = data.get("API_PREFIX", "/api")
    API_PORT = data.get("API_PORT", 8000)
    API_HOST = data.get("API_HOST", "0.0.0.0")
    API_RELOAD = bool(data.get("API_RELOAD", 0))
    CORS_ORIGINS = data.get("CORS_ORIGINS", [])
    CORS_ALLOW_CREDENTIALS = data.get("CORS_ALLOW_CREDENTIALS", True)
    LOG_LEVEL = data.get("LOG_LEVEL", "INFO")
    ENABLE_LOGGING_MIDDLEWARE = bool(data.get("ENABLE_LOGGING_MIDDLEWARE", 1))
    AUTO_CREATE_TABLES = bool(data.get("AUTO_CREATE_TABLES", True))

    # Bank transfer account shown to buyers and snapshotted onto each order
    BANK_NAME = data.get("BANK_NAME", "Shinhan Bank")
    BANK_ACCOUNT_NUMBER = data.get("BANK_ACCOUNT_NUMBER", "110-123-456789")
    BANK_ACCOUNT_HOLDER = data.get("BANK_ACCOUNT_HOLDER", "Arts Factory Co., Ltd.")

    # Rental subscriptions
    DEFAULT_BILLING_CYCLE = data.get("DEFAULT_BILLING_CYCLE", "monthly")
    DEPOSIT_NOTIFICATION_WEBHOOK = data.get("DEPOSIT_NOTIFICATION_WEBHOOK", None)
