#!/usr/bin/env python3
"""
Seed the built-in laundry services (Regular, Wash + Iron, Iron Only, Express)
Usage: python seed_services.py
"""
import os
import sys
sys.path.insert(0, os.path.dirname(__file__))

from database.connection import get_db, create_tables
from services.service_catalog import seed_default_services

def seed():
    if not create_tables():
        print("DATABASE_URL is not set; cannot seed services")
        return False

    db = next(get_db())
    try:
        added = seed_default_services(db)
        print(f"Seeded {added} default services")
        return True
    except Exception as e:
        db.rollback()
        print(f"Failed to seed services: {e}")
        return False
    finally:
        db.close()

if __name__ == "__main__":
    sys.exit(0 if seed() else 1)
