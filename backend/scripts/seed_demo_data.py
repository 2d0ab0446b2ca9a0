#!/usr/bin/env python3
"""
Seed demo data for one account: bins around a campus, a scheduled collection, a notification,
and a week of analytics. Run after migrations:
  cd backend && python scripts/seed_demo_data.py --user-id demo-user
  python scripts/seed_demo_data.py --user-id demo-user --reset   # clear demo tables first
"""
import argparse
import random
import sys
from datetime import date, timedelta
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from app.core.fill_status import fill_status_for
from app.db.session import SessionLocal
from app.db.tables import DEMO_TABLE_NAMES
from app.models.analytics import Analytics
from app.models.collection import Collection
from app.models.dustbin import Dustbin
from app.models.notification import Notification
from app.models.user_profile import UserProfile

# name, type, location, lat, lng, fill level
DEMO_BINS = [
    ("Kitchen Wet Bin", "wet", "Main Gate", "19.0760", "72.8777", 70),
    ("Cafeteria Wet Bin", "wet", "Block A", "19.0761", "72.8780", 50),
    ("Office Dry Bin", "dry", "Block B", "19.0759", "72.8775", 20),
    ("Library Dry Bin", "dry", "Library", "19.0763", "72.8772", 35),
    ("Parking Dry Bin", "dry", "Parking Lot", "19.0756", "72.8782", 5),
]


def _days_from_today(days: int) -> str:
    return (date.today() + timedelta(days=days)).isoformat()


def reset(db) -> None:
    from sqlalchemy import text

    for table in DEMO_TABLE_NAMES:
        db.execute(text(f"DELETE FROM {table}"))
    db.commit()
    print(f"Cleared {', '.join(DEMO_TABLE_NAMES)}")


def seed(db, user_id: str) -> None:
    if not db.query(UserProfile).filter(UserProfile.user_id == user_id).first():
        db.add(UserProfile(
            user_id=user_id,
            organization_name="Demo College",
            category="College",
            mobile_number="+91 98765 43210",
        ))

    bins = []
    for name, type_, location, lat, lng, level in DEMO_BINS:
        b = Dustbin(
            user_id=user_id,
            name=name,
            type=type_,
            location_name=location,
            latitude=lat,
            longitude=lng,
            fill_level=level,
            status=fill_status_for(level).value,
            last_collection_date=_days_from_today(-3),
            next_collection_date=_days_from_today(1),
            is_active=True,
        )
        db.add(b)
        bins.append(b)
    db.flush()

    db.add(Collection(
        user_id=user_id,
        dustbin_id=bins[0].id,
        scheduled_date=_days_from_today(1),
        status="scheduled",
        notes="Kitchen bin nearly full",
    ))
    db.add(Notification(
        user_id=user_id,
        dustbin_id=bins[1].id,
        message=f"{bins[1].name} is half full; plan a pickup this week.",
        type="warning",
        is_read=False,
    ))
    for days_ago in range(7, 0, -1):
        for b in bins:
            db.add(Analytics(
                user_id=user_id,
                dustbin_id=b.id,
                date=_days_from_today(-days_ago),
                waste_collected_kg=round(random.uniform(2.0, 15.0), 1),
                fill_level_avg=random.randint(20, 90),
                collections_count=random.randint(0, 2),
            ))
    db.commit()
    print(f"Seeded {len(bins)} bins, 1 collection, 1 notification, {7 * len(bins)} analytics rows for {user_id}")


def main():
    parser = argparse.ArgumentParser(description="Seed Waste Wizard demo data.")
    parser.add_argument("--user-id", required=True, help="account id as forwarded by the auth layer")
    parser.add_argument("--reset", action="store_true", help="delete all rows from demo tables first")
    args = parser.parse_args()

    db = SessionLocal()
    try:
        if args.reset:
            reset(db)
        seed(db, args.user_id)
    finally:
        db.close()


if __name__ == "__main__":
    main()
