from __future__ import annotations
from datetime import datetime

from sqlalchemy.orm import declarative_base, Mapped, mapped_column
from sqlalchemy import Integer, String, DateTime, func, ForeignKey, CheckConstraint


Base = declarative_base()


class Ticket(Base):
    __tablename__ = "tickets"
    __table_args__ = (
        CheckConstraint("quota >= 0", name="ck_tickets_quota_non_negative"),
        CheckConstraint("price >= 0", name="ck_tickets_price_non_negative"),
        CheckConstraint("event_date_minimum <= event_date_maximum", name="ck_tickets_event_window"),
    )
    ticket_code: Mapped[str] = mapped_column(String(255), primary_key=True)
    ticket_name: Mapped[str] = mapped_column(String(255), nullable=False)
    category_name: Mapped[str] = mapped_column(String(255), nullable=False)
    event_date_minimum: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    event_date_maximum: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    quota: Mapped[int] = mapped_column(Integer, nullable=False)
    price: Mapped[int] = mapped_column(Integer, nullable=False)


    def __repr__(self):
        return f"<Ticket code={self.ticket_code} name={self.ticket_name} quota={self.quota}>"


class BookedTicket(Base):
    __tablename__ = "booked_tickets"
    __table_args__ = (
        CheckConstraint("quantity > 0", name="ck_booked_tickets_quantity_positive"),
    )
    booking_id: Mapped[str] = mapped_column(String(255), primary_key=True)
    ticket_code: Mapped[str | None] = mapped_column(
        String(255), ForeignKey("tickets.ticket_code", ondelete="SET NULL"), nullable=True, index=True
    )
    quantity: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())


    def __repr__(self):
        return f"<BookedTicket booking_id={self.booking_id} ticket_code={self.ticket_code} quantity={self.quantity}>"
