#!/usr/bin/env python3
"""
Seed demo usage entries straight into the key-value store.
Run: python scripts/seed_demo_data.py [--user-id demo-user] [--days 30]

Prints a bearer token for the demo user so the API can be called right away.
"""
from __future__ import annotations

import argparse
import random
from datetime import timedelta

from energy_tracker.core.database import SessionLocal, init_db
from energy_tracker.core.security import create_access_token
from energy_tracker.models.usage import UsageEntryCreate
from energy_tracker.services import usage_store
from energy_tracker.utils.date_helpers import utc_today

APPLIANCES = ["HVAC", "Water Heater", "Refrigerator", "Lighting", "General"]


def main():
    parser = argparse.ArgumentParser(description="Seed demo energy usage data")
    parser.add_argument("--user-id", default="demo-user")
    parser.add_argument("--days", type=int, default=30)
    parser.add_argument("--seed", type=int, default=42)
    args = parser.parse_args()

    rng = random.Random(args.seed)
    init_db()
    db = SessionLocal()
    try:
        today = utc_today()
        for offset in range(args.days, 0, -1):
            day = today - timedelta(days=offset)
            base = 18 + offset * 0.2
            usage_store.add_entry(db, args.user_id, UsageEntryCreate(
                date=day,
                usage=round(base + rng.uniform(-4, 6), 2),
                appliance=rng.choice(APPLIANCES),
                cost=0,
            ))
    finally:
        db.close()

    print(f"✅ Seeded {args.days} entries for {args.user_id}")
    print(f"   Token: {create_access_token({'sub': args.user_id})}")


if __name__ == "__main__":
    main()
