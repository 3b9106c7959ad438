#!/usr/bin/env python3
# scripts/seed_demo_data.py
"""
Seed demo inventory items.
This script is safe to run many times (idempotent): existing scan codes are skipped.

Examples:
  # Seed into an already-migrated database
  python -m scripts.seed_demo_data

  # Create tables first (local SQLite, no Alembic)
  python -m scripts.seed_demo_data --create-tables
"""

from __future__ import annotations

import argparse
import logging
from datetime import date, timedelta

from sqlalchemy.orm import Session

from qmedic.core.database import engine, session_scope
from qmedic.models.base import Base
from qmedic.models.item import InventoryItem, ItemCategory
from qmedic.services.item_service import find_item_by_code

logger = logging.getLogger(__name__)


def demo_items(today: date) -> list[dict]:
    return [
        {
            "item_id": "MED001",
            "name": "EpiPen",
            "category": ItemCategory.MEDICATION,
            "quantity": 5,
            "min_quantity": 3,
            "expiry_date": today + timedelta(days=15),
            "location": "Ambulance 1 - Drug Box",
        },
        {
            "item_id": "MED002",
            "name": "Naloxone 4mg Nasal Spray",
            "category": ItemCategory.MEDICATION,
            "quantity": 8,
            "min_quantity": 4,
            "expiry_date": today + timedelta(days=5),
            "location": "Ambulance 1 - Drug Box",
        },
        {
            "item_id": "EQP001",
            "name": "Portable Defibrillator Pads",
            "category": ItemCategory.EQUIPMENT,
            "quantity": 4,
            "min_quantity": 2,
            "expiry_date": today + timedelta(days=365),
            "location": "Station Storage - Shelf A",
        },
        {
            "item_id": "EQP002",
            "name": "Cervical Collar (Adult)",
            "category": ItemCategory.EQUIPMENT,
            "quantity": 6,
            "min_quantity": 2,
            "expiry_date": None,
            "location": "Ambulance 2 - Rear Cabinet",
        },
        {
            "item_id": "SUP001",
            "name": "Sterile Gauze Pads",
            "category": ItemCategory.SUPPLIES,
            "quantity": 0,
            "min_quantity": 20,
            "expiry_date": None,
            "location": "Station Storage - Shelf C",
        },
        {
            "item_id": "SUP002",
            "name": "Nitrile Gloves (Box)",
            "category": ItemCategory.SUPPLIES,
            "quantity": 12,
            "min_quantity": 5,
            "expiry_date": None,
            "location": "Ambulance 2 - Side Compartment",
        },
    ]


def seed_items(db: Session, today: date) -> int:
    created = 0
    for data in demo_items(today):
        if find_item_by_code(db, data["item_id"]):
            logger.info("Item %s already exists, skipping", data["item_id"])
            continue
        db.add(InventoryItem(**data))
        created += 1
    db.flush()
    return created


def parse_args() -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Seed demo inventory items.")
    p.add_argument(
        "--create-tables",
        action="store_true",
        help="Create tables from the ORM models before seeding (dev only).",
    )
    return p.parse_args()


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s [%(name)s] %(message)s")
    args = parse_args()

    if args.create_tables:
        import qmedic.models  # noqa: F401

        Base.metadata.create_all(bind=engine)

    try:
        with session_scope() as db:
            created = seed_items(db, date.today())
    except Exception:
        logger.exception("Seeding failed")
        raise

    logger.info("Seeded %s item(s)", created)


if __name__ == "__main__":
    main()
