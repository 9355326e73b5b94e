"""
Seed script for the Shopfront development database.

Creates three weekly schedules (one active), a few holiday overrides, the
starter menu and a development admin.

Usage:
    alembic upgrade head
    python scripts/seed.py
"""
from decimal import Decimal

from shopfront.core.security import hash_password
from shopfront.db.session import SessionLocal
from shopfront.models.admin import Admin
from shopfront.models.availability import Schedule
from shopfront.models.product import BatchOption, Product
from shopfront.services.date_overrides import DateOverrideService
from shopfront.services.schedules import ScheduleService


def week(sunday, weekday, friday, saturday):
    """Build 7 day entries; each argument is (open, close) or None for closed."""
    hours = [sunday] + [weekday] * 4 + [friday, saturday]
    return [
        {
            "day_of_week": day,
            "is_open": window is not None,
            "open_time": window[0] if window else None,
            "close_time": window[1] if window else None,
        }
        for day, window in enumerate(hours)
    ]


SCHEDULES = [
    ("Regular Business Hours", True, week(None, ("07:00", "15:00"), ("07:00", "15:00"), ("08:00", "16:00"))),
    ("Weekend Extended Hours", False, week(("08:00", "14:00"), ("07:00", "15:00"), ("07:00", "18:00"), ("07:00", "18:00"))),
    ("Summer Hours", False, week(None, ("06:30", "14:30"), ("06:30", "14:30"), ("07:30", "15:30"))),
]

DATE_OVERRIDES = [
    ("2025-12-25", "Christmas Day", False, None, None),
    ("2026-01-01", "New Year's Day", False, None, None),
    ("2025-07-04", "Independence Day", True, "08:00", "13:00"),
    ("2025-11-28", "Black Friday", True, "06:00", "18:00"),
]

PRODUCTS = {
    "bagels": [
        ("Plain Bagel", "2.50", "Classic plain bagel"),
        ("Everything Bagel", "2.75", "Topped with sesame seeds, poppy seeds, garlic, and onion"),
        ("Sesame Bagel", "2.75", "Topped with sesame seeds"),
        ("Poppy Seed Bagel", "2.75", "Topped with poppy seeds"),
        ("Cinnamon Raisin Bagel", "3.00", "Sweet bagel with cinnamon and raisins"),
        ("Blueberry Bagel", "3.00", "Fresh blueberries baked in"),
    ],
    "drinks": [
        ("Coffee", "2.00", "Fresh brewed coffee"),
        ("Espresso", "2.50", "Rich espresso shot"),
        ("Cappuccino", "3.50", "Espresso with steamed milk foam"),
        ("Orange Juice", "3.00", "Fresh squeezed orange juice"),
        ("Water", "1.50", "Bottled water"),
    ],
    "sides": [
        ("Cream Cheese", "1.50", "Plain cream cheese"),
        ("Butter", "1.00", "Fresh butter"),
        ("Jam", "1.25", "Strawberry jam"),
        ("Lox", "4.00", "Smoked salmon"),
    ],
}

BATCH_OPTIONS = [(4, "5", "4-Pack"), (6, "10", "Half Dozen"), (12, "15", "Dozen")]

DEV_ADMIN_EMAIL = "admin@example.com"
DEV_ADMIN_PASSWORD = "password123"


def seed_database():
    """Seed the database with development data."""
    session = SessionLocal()

    try:
        if session.query(Schedule).count() > 0:
            print("Database already seeded. Skipping...")
            return

        print("Seeding database...")

        schedules = ScheduleService(session)
        for name, is_active, hours in SCHEDULES:
            schedules.create_schedule(name, is_active, hours)
        print(f"Created {len(SCHEDULES)} weekly schedules")

        overrides = DateOverrideService(session)
        for override_date, name, is_open, open_time, close_time in DATE_OVERRIDES:
            overrides.create_override(override_date, name, is_open, open_time, close_time)
        print(f"Created {len(DATE_OVERRIDES)} date overrides")

        for category, items in PRODUCTS.items():
            for name, price, description in items:
                session.add(Product(
                    name=name,
                    category=category,
                    price=Decimal(price),
                    description=description,
                    available=True,
                ))
        for size, discount, name in BATCH_OPTIONS:
            session.add(BatchOption(size=size, discount=Decimal(discount), name=name))

        if session.query(Admin).filter(Admin.email == DEV_ADMIN_EMAIL).first() is None:
            session.add(Admin(email=DEV_ADMIN_EMAIL, hashed_password=hash_password(DEV_ADMIN_PASSWORD)))

        session.commit()
        print("\nDatabase seeded successfully!")
        print("\nAdmin credentials:")
        print(f"  Email: {DEV_ADMIN_EMAIL} | Password: {DEV_ADMIN_PASSWORD}")

    except Exception as e:
        session.rollback()
        print(f"Error seeding database: {e}")
        raise
    finally:
        session.close()


if __name__ == "__main__":
    seed_database()
