# backend/scripts/seed_demo.py
"""
Usage:
  # ensure DATABASE_URL (and optionally REDIS_URL) env vars are set
  python backend/scripts/seed_demo.py [--reset]
This script will:
 - create the demo ticket catalog (skipping tickets that already exist)
 - with --reset, remove the demo tickets first; their bookings are kept as orphans
"""
import argparse
import asyncio
from datetime import datetime, timedelta, timezone

from acceloka.db import AsyncSessionLocal
from acceloka.domain import Ticket
from acceloka.redis_tools import invalidate_available_quota
from acceloka.unit_of_work import SqlAlchemyUnitOfWork


def demo_tickets() -> list[Ticket]:
    now = datetime.now(timezone.utc)
    return [
        Ticket("C001", "Indie Concert - Floor", "Concert", now + timedelta(days=30),
               now + timedelta(days=30, hours=4), quota=5, price=450_000),
        Ticket("C002", "Indie Concert - Balcony", "Concert", now + timedelta(days=30),
               now + timedelta(days=30, hours=4), quota=50, price=250_000),
        Ticket("S001", "Tech Talk Day Pass", "Seminar", now + timedelta(days=7),
               now + timedelta(days=7, hours=8), quota=100, price=100_000),
        Ticket("F001", "Jakarta - Bali Economy", "Transportasi Udara", now + timedelta(days=14),
               now + timedelta(days=14, hours=2), quota=180, price=1_200_000),
    ]


async def seed(reset: bool):
    created, existing = [], []
    tickets = demo_tickets()
    async with AsyncSessionLocal() as session:
        async with SqlAlchemyUnitOfWork(session) as uow:
            for ticket in tickets:
                if reset:
                    await uow.catalog.remove_ticket(ticket.ticket_code)
                elif await uow.catalog.get_ticket(ticket.ticket_code):
                    existing.append(ticket.ticket_code)
                    continue
                await uow.catalog.add_ticket(ticket)
                created.append(ticket.ticket_code)
            await uow.commit()

    await invalidate_available_quota(*(t.ticket_code for t in tickets))

    print("Seed complete.")
    print("Tickets created:", created)
    print("Tickets already present:", existing)


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Seed the demo ticket catalog.")
    parser.add_argument("--reset", action="store_true", help="recreate demo tickets")
    asyncio.run(seed(parser.parse_args().reset))
