"""
Seed Data Generator for EventHub
Creates the default admin and organizer accounts, and optionally a set of
demo events with tickets for local development.

Usage:
    python seed_data.py            # seed accounts only
    python seed_data.py --demo     # seed accounts plus demo events
"""

import random
import sys
from datetime import date, timedelta
from decimal import Decimal
from faker import Faker
from sqlalchemy.orm import Session

from app.config import (
    SEED_ADMIN_EMAIL,
    SEED_ADMIN_PASSWORD,
    SEED_ORGANIZER_EMAIL,
    SEED_ORGANIZER_PASSWORD,
)
from app.database import init_db, session_scope
from app.models import User, Event, Ticket
from app.models.enums import UserRole, EventCategory, EventPrivacy, TicketType
from app.utils.security import hash_password

fake = Faker()


class SeedDataGenerator:
    def __init__(self, db: Session):
        self.db = db
        self.organizers = []

    def ensure_user(self, email: str, name: str, password: str, role: str) -> User:
        """Create the account unless one already exists for the email"""
        user = User.find_by_email(self.db, email)
        if user:
            print(f"ℹ️  {email} already exists, skipping")
            return user

        user = User(
            name=name,
            email=email,
            password_hash=hash_password(password),
            role=role,
        )
        self.db.add(user)
        self.db.commit()
        self.db.refresh(user)
        print(f"✅ Created {role}: {email} / {password}")
        return user

    def create_accounts(self):
        print("👥 Creating default accounts...")
        self.ensure_user(
            SEED_ADMIN_EMAIL, "Admin User", SEED_ADMIN_PASSWORD, UserRole.ADMIN.value
        )
        organizer = self.ensure_user(
            SEED_ORGANIZER_EMAIL,
            "Event Organizer",
            SEED_ORGANIZER_PASSWORD,
            UserRole.ORGANIZER.value,
        )
        self.organizers.append(organizer)

    def create_events(self, count=10):
        """Create demo events, each with two ticket classes"""
        print(f"🎫 Creating {count} demo events...")

        for _ in range(count):
            event = Event(
                title=fake.catch_phrase()[:100],
                description=fake.text(max_nb_chars=400),
                date=date.today() + timedelta(days=random.randint(7, 180)),
                time=f"{random.randint(8, 21):02d}:{random.choice([0, 30]):02d}",
                location=f"{fake.city()}, {fake.country()}"[:200],
                category=random.choice(list(EventCategory)).value,
                privacy=random.choice(
                    [EventPrivacy.PUBLIC.value] * 3 + [EventPrivacy.PRIVATE.value]
                ),
                organizer_id=random.choice(self.organizers).id,
            )
            self.db.add(event)
            self.db.flush()

            self.db.add_all(
                [
                    Ticket(
                        name="General Admission",
                        price=Decimal(random.choice([0, 15, 25, 40])),
                        quantity=random.randint(50, 300),
                        type=TicketType.REGULAR.value,
                        event_id=event.id,
                    ),
                    Ticket(
                        name="VIP",
                        description="Front row seating",
                        price=Decimal(random.choice([80, 120, 200])),
                        quantity=random.randint(5, 30),
                        type=TicketType.VIP.value,
                        event_id=event.id,
                    ),
                ]
            )

        self.db.commit()
        print(f"✅ Created {count} events")


def main():
    print("🎉 EventHub Seed Data Generator")
    print("=" * 40)

    init_db()

    try:
        with session_scope() as db:
            generator = SeedDataGenerator(db)
            generator.create_accounts()

            if "--demo" in sys.argv:
                generator.create_events(count=10)

        print("\n✅ Seeding complete!")

    except Exception as e:
        print(f"\n❌ Error seeding data: {e}")
        raise


if __name__ == "__main__":
    main()
