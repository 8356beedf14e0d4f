import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.core.config import (
    ALEMBIC_CONFIG_PATH,
    COUPON_STORAGE_BACKEND,
    CORS_ORIGINS,
    DATABASE_URL,
    ENV,
    SEED_COUPONS,
)
from app.core.database import Base, SessionLocal, engine
from app.core.exception_handlers import register_exception_handlers
from app.core.logging_setup import configure_logging
from app.core.startup_checks import (
    apply_migrations,
    ensure_migrations_applied,
    validate_database_environment,
)
from app.middleware.observability import ObservabilityMiddleware
import app.models  # garante que os models são importados antes do create_all

from app.repositories.memory_coupon_repository import InMemoryCouponRepository, memory_store
from app.repositories.sql_coupon_repository import SqlCouponRepository
from app.routers.coupons import router as coupons_router
from app.routers.internal_metrics import router as internal_metrics_router
from app.services.coupon_seed import seed_coupons

configure_logging()

logger = logging.getLogger(__name__)
STARTUP_PREFIX = "[STARTUP]"


@asynccontextmanager
async def lifespan(_: FastAPI):
    _startup_tasks()
    yield


app = FastAPI(
    title="Magic Coupons API",
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(ObservabilityMiddleware)

register_exception_handlers(app)


def _seed_demo_coupons() -> None:
    if not SEED_COUPONS:
        logger.info("%s seed disabled", STARTUP_PREFIX)
        return

    if COUPON_STORAGE_BACKEND == "memory":
        seed_coupons(InMemoryCouponRepository(memory_store))
        return

    db = SessionLocal()
    try:
        seed_coupons(SqlCouponRepository(db))
    finally:
        db.close()


def _startup_tasks() -> None:
    logger.info("%s env=%s storage=%s", STARTUP_PREFIX, ENV, COUPON_STORAGE_BACKEND)
    try:
        validate_database_environment()
        if COUPON_STORAGE_BACKEND == "sql":
            apply_migrations(alembic_config_path=ALEMBIC_CONFIG_PATH)
            # Cria tabelas (dev). Em produção, use migrations.
            if DATABASE_URL.startswith("sqlite"):
                Base.metadata.create_all(bind=engine)
            else:
                ensure_migrations_applied(engine=engine, alembic_config_path=ALEMBIC_CONFIG_PATH)
        _seed_demo_coupons()
    except Exception:
        logger.exception("%s ERROR startup failed", STARTUP_PREFIX)
        raise


# Routers
app.include_router(coupons_router)
app.include_router(internal_metrics_router)


@app.get("/")
def root():
    return {"status": "ok"}


@app.get("/health")
def health():
    return {"status": "healthy"}
