#!/usr/bin/env python3
from __future__ import annotations

import argparse
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
sys.path.append(str(ROOT))

from app.core.database import Base, SessionLocal, engine  # noqa: E402
from app.core.errors import CouponNameConflictError  # noqa: E402
from app.repositories.sql_coupon_repository import SqlCouponRepository  # noqa: E402
from app.services.coupon_seed import DEMO_COUPONS, parse_coupon_spec, seed_coupons  # noqa: E402
import app.models  # noqa: E402,F401


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Seed coupons into the configured database.")
    parser.add_argument(
        "--coupon",
        action="append",
        metavar="NAME:PERCENT[:active]",
        help="Coupon to create; repeatable. Defaults to the demo coupons.",
    )
    parser.add_argument(
        "--create-tables",
        action="store_true",
        help="Create missing tables before seeding (SQLite/dev only).",
    )
    return parser.parse_args()


def main() -> int:
    args = parse_args()

    try:
        coupons = [parse_coupon_spec(raw) for raw in args.coupon] if args.coupon else list(DEMO_COUPONS)
    except ValueError as exc:
        print(str(exc))
        return 1

    if args.create_tables:
        Base.metadata.create_all(bind=engine)

    db = SessionLocal()
    try:
        created = seed_coupons(SqlCouponRepository(db), coupons)
        for coupon in created:
            print(f"Coupon created: id={coupon.id} name={coupon.name} percent={coupon.percent}")
    except CouponNameConflictError as exc:
        print(str(exc))
        return 1
    finally:
        db.close()

    print(f"{len(created)} coupon(s) created, {len(coupons) - len(created)} skipped")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
