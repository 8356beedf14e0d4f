import os
from pathlib import Path

from dotenv import load_dotenv

# Carrega o .env da raiz do projeto
load_dotenv()

_TRUTHY = {"1", "true", "yes", "on"}

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./magic_coupons.db")
ENV = os.getenv("ENVIRONMENT", os.getenv("ENV", "dev"))
ENV_NORMALIZED = ENV.strip().lower()
IS_DEV = ENV_NORMALIZED in {"dev", "development", "local"}
IS_STAGE = ENV_NORMALIZED in {"stage", "staging", "homolog"}
IS_PROD = ENV_NORMALIZED in {"prod", "production"}
IS_TEST = ENV_NORMALIZED == "test"

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# Storage
COUPON_STORAGE_BACKEND = os.getenv("COUPON_STORAGE_BACKEND", "sql").strip().lower()
if COUPON_STORAGE_BACKEND not in {"sql", "memory"}:
    COUPON_STORAGE_BACKEND = "sql"

SEED_COUPONS = os.getenv("SEED_COUPONS", "").strip().lower() in _TRUTHY

# Migrations
REPO_ROOT = Path(__file__).resolve().parents[2]
ALEMBIC_CONFIG_PATH = Path(os.getenv("ALEMBIC_CONFIG", str(REPO_ROOT / "alembic.ini")))

# CORS
_cors_env = os.getenv("CORS_ORIGINS", "")
CORS_ORIGINS = [origin.strip() for origin in _cors_env.split(",") if origin.strip() and origin.strip() != "*"]

if not CORS_ORIGINS and IS_DEV:
    CORS_ORIGINS = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ]
