"""Initial database schema.

Revision ID: 001_initial
Revises: None
Create Date: 2026-10-19

Creates all initial tables for the LiveLocal platform:
- Users
- Musician and venue profiles
- Events and event history
- Bookings
- Messages and notifications
"""

from typing import Sequence

import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

from alembic import op

# revision identifiers
revision: str = "001_initial"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    """Create all database tables."""

    # ==================== USERS ====================
    op.create_table(
        "users",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column("email", sa.String(255), unique=True, nullable=False, index=True),
        sa.Column("password_hash", sa.String(255), nullable=False),
        sa.Column("roles", postgresql.JSONB, nullable=False, server_default=sa.text("'[\"signed-in\"]'::jsonb")),
        sa.Column("primary_role", sa.String(20), nullable=False, server_default="user"),
        sa.Column("first_name", sa.String(100)),
        sa.Column("last_name", sa.String(100)),
        sa.Column("profile_picture_url", sa.Text),
        sa.Column("email_verified", sa.Boolean, default=False),
        sa.Column("is_active", sa.Boolean, default=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), onupdate=sa.func.now()),
        sa.Column("last_signed_in", sa.DateTime(timezone=True)),
    )

    # ==================== PROFILES ====================
    op.create_table(
        "musicians",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column("user_id", postgresql.UUID(as_uuid=True), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("stage_name", sa.String(200)),
        sa.Column("email", sa.String(255)),
        sa.Column("bio", sa.Text),
        sa.Column("genres", postgresql.JSONB, server_default="[]"),
        sa.Column("instruments", postgresql.JSONB, server_default="[]"),
        sa.Column("social_links", postgresql.JSONB, server_default="[]"),
        sa.Column("hourly_rate", sa.Integer),
        sa.Column("years_experience", sa.Integer),
        sa.Column("city", sa.String(100)),
        sa.Column("state", sa.String(100)),
        sa.Column("country", sa.String(100)),
        sa.Column("location", sa.String(300)),
        sa.Column("phone", sa.String(30)),
        sa.Column("website", sa.Text),
        sa.Column("profile_picture_url", sa.Text),
        sa.Column("rating", sa.Float, server_default="0"),
        sa.Column("is_active", sa.Boolean, server_default=sa.true()),
        sa.Column("is_verified", sa.Boolean, server_default=sa.false()),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), onupdate=sa.func.now()),
    )

    op.create_table(
        "venues",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column("owner_id", postgresql.UUID(as_uuid=True), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("description", sa.Text),
        sa.Column("type", sa.String(50)),
        sa.Column("capacity", sa.Integer),
        sa.Column("price_range", sa.String(20)),
        sa.Column("genres", postgresql.JSONB, server_default="[]"),
        sa.Column("amenities", postgresql.JSONB, server_default="[]"),
        sa.Column("social_links", postgresql.JSONB, server_default="[]"),
        sa.Column("additional_pictures", postgresql.JSONB, server_default="[]"),
        sa.Column("hours", postgresql.JSONB, server_default="{}"),
        sa.Column("address", sa.String(300)),
        sa.Column("city", sa.String(100)),
        sa.Column("state", sa.String(100)),
        sa.Column("country", sa.String(100)),
        sa.Column("zip_code", sa.String(20)),
        sa.Column("location", sa.String(300)),
        sa.Column("phone", sa.String(30)),
        sa.Column("email", sa.String(255)),
        sa.Column("website", sa.Text),
        sa.Column("profile_picture_url", sa.Text),
        sa.Column("rating", sa.Float, server_default="0"),
        sa.Column("is_active", sa.Boolean, server_default=sa.true()),
        sa.Column("is_verified", sa.Boolean, server_default=sa.false()),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), onupdate=sa.func.now()),
    )

    # ==================== EVENTS ====================
    op.create_table(
        "events",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column("venue_id", postgresql.UUID(as_uuid=True), sa.ForeignKey("venues.id", ondelete="CASCADE"), nullable=False, index=True),
        sa.Column("created_by_id", postgresql.UUID(as_uuid=True), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("title", sa.String(200), nullable=False),
        sa.Column("description", sa.Text),
        sa.Column("category", sa.String(50)),
        sa.Column("genres", postgresql.JSONB, server_default="[]"),
        sa.Column("equipment", postgresql.JSONB, server_default="[]"),
        sa.Column("date", sa.DateTime(timezone=True), nullable=False, index=True),
        sa.Column("start_time", sa.String(10)),
        sa.Column("end_time", sa.String(10)),
        sa.Column("is_recurring", sa.Boolean, server_default=sa.false()),
        sa.Column("recurring_pattern", sa.String(20)),
        sa.Column("recurring_interval", sa.Integer),
        sa.Column("recurring_days", postgresql.JSONB, server_default="[]"),
        sa.Column("ticket_type", sa.String(20)),
        sa.Column("ticket_price", sa.Integer),
        sa.Column("total_capacity", sa.Integer),
        sa.Column("available_tickets", sa.Integer),
        sa.Column("status", sa.String(20), server_default="confirmed", index=True),
        sa.Column("is_active", sa.Boolean, server_default=sa.true()),
        sa.Column("is_public", sa.Boolean, server_default=sa.true()),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), onupdate=sa.func.now()),
    )

    # ==================== BOOKINGS ====================
    op.create_table(
        "bookings",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column("event_id", postgresql.UUID(as_uuid=True), sa.ForeignKey("events.id"), nullable=False, index=True),
        sa.Column("venue_id", postgresql.UUID(as_uuid=True), sa.ForeignKey("venues.id"), nullable=False, index=True),
        sa.Column("musician_id", postgresql.UUID(as_uuid=True), sa.ForeignKey("musicians.id"), nullable=False, index=True),
        sa.Column("booked_by_id", postgresql.UUID(as_uuid=True), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("status", sa.String(30), nullable=False, index=True),
        sa.Column("booking_type", sa.String(30), nullable=False),
        sa.Column("date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("start_time", sa.String(10)),
        sa.Column("end_time", sa.String(10)),
        sa.Column("response_deadline", sa.DateTime(timezone=True)),
        sa.Column("proposed_rate", sa.Integer, server_default="0"),
        sa.Column("total_amount", sa.Integer, server_default="0"),
        sa.Column("deposit_amount", sa.Integer, server_default="0"),
        sa.Column("deposit_paid", sa.Boolean, server_default=sa.false()),
        sa.Column("full_payment_paid", sa.Boolean, server_default=sa.false()),
        sa.Column("musician_pitch", sa.Text),
        sa.Column("notes", sa.Text),
        sa.Column("special_requirements", sa.Text),
        sa.Column("equipment_provided", postgresql.JSONB, server_default="[]"),
        sa.Column("is_active", sa.Boolean, server_default=sa.true()),
        sa.Column("applied_at", sa.DateTime(timezone=True)),
        sa.Column("invited_at", sa.DateTime(timezone=True)),
        sa.Column("selected_at", sa.DateTime(timezone=True)),
        sa.Column("confirmed_at", sa.DateTime(timezone=True)),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), onupdate=sa.func.now()),
    )

    op.create_table(
        "event_history",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column("event_id", postgresql.UUID(as_uuid=True), sa.ForeignKey("events.id", ondelete="CASCADE"), nullable=False, index=True),
        sa.Column("booking_id", postgresql.UUID(as_uuid=True), sa.ForeignKey("bookings.id", ondelete="SET NULL"), index=True),
        sa.Column("changed_by_id", postgresql.UUID(as_uuid=True), sa.ForeignKey("users.id", ondelete="SET NULL")),
        sa.Column("change_type", sa.String(50), nullable=False),
        sa.Column("previous_value", sa.String(100)),
        sa.Column("new_value", sa.String(100)),
        sa.Column("description", sa.Text),
        sa.Column("context", postgresql.JSONB, server_default="{}"),
        sa.Column("metadata", postgresql.JSONB, server_default="{}"),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), index=True),
    )

    # ==================== MESSAGES ====================
    op.create_table(
        "messages",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column("booking_id", postgresql.UUID(as_uuid=True), sa.ForeignKey("bookings.id", ondelete="CASCADE"), nullable=False, index=True),
        sa.Column("sender_id", postgresql.UUID(as_uuid=True), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("recipient_id", postgresql.UUID(as_uuid=True), sa.ForeignKey("users.id"), nullable=False, index=True),
        sa.Column("content", sa.Text, nullable=False),
        sa.Column("message_type", sa.String(20), server_default="text"),
        sa.Column("attachments", postgresql.JSONB, server_default="[]"),
        sa.Column("is_read", sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column("read_at", sa.DateTime(timezone=True)),
        sa.Column("is_active", sa.Boolean, server_default=sa.true()),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), index=True),
    )

    op.create_table(
        "notifications",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column("user_id", postgresql.UUID(as_uuid=True), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True),
        sa.Column("type", sa.String(50), nullable=False),
        sa.Column("title", sa.String(200), nullable=False),
        sa.Column("content", sa.Text, nullable=False),
        sa.Column("booking_id", postgresql.UUID(as_uuid=True), sa.ForeignKey("bookings.id", ondelete="CASCADE"), index=True),
        sa.Column("event_id", postgresql.UUID(as_uuid=True), sa.ForeignKey("events.id", ondelete="SET NULL")),
        sa.Column("musician_id", postgresql.UUID(as_uuid=True), sa.ForeignKey("musicians.id", ondelete="SET NULL")),
        sa.Column("venue_id", postgresql.UUID(as_uuid=True), sa.ForeignKey("venues.id", ondelete="SET NULL")),
        sa.Column("is_read", sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column("read_at", sa.DateTime(timezone=True)),
        sa.Column("is_active", sa.Boolean, server_default=sa.true()),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )

    # ==================== REVIEWS ====================
    op.create_table(
        "reviews",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column("booking_id", postgresql.UUID(as_uuid=True), sa.ForeignKey("bookings.id", ondelete="CASCADE"), nullable=False, index=True),
        sa.Column("event_id", postgresql.UUID(as_uuid=True), sa.ForeignKey("events.id", ondelete="SET NULL")),
        sa.Column("reviewer_id", postgresql.UUID(as_uuid=True), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("musician_id", postgresql.UUID(as_uuid=True), sa.ForeignKey("musicians.id"), index=True),
        sa.Column("venue_id", postgresql.UUID(as_uuid=True), sa.ForeignKey("venues.id"), index=True),
        sa.Column("review_type", sa.String(30), nullable=False),
        sa.Column("rating", sa.Integer, nullable=False),
        sa.Column("comment", sa.Text),
        sa.Column("is_active", sa.Boolean, server_default=sa.true()),
        sa.Column("is_verified", sa.Boolean, server_default=sa.false()),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), onupdate=sa.func.now()),
        sa.UniqueConstraint("booking_id", "reviewer_id", name="uq_reviews_booking_reviewer"),
    )

    # Unread lookups used by read-state propagation
    op.create_index("ix_messages_booking_recipient_unread", "messages", ["booking_id", "recipient_id", "is_read"])
    op.create_index("ix_notifications_booking_user_unread", "notifications", ["booking_id", "user_id", "is_read"])


def downgrade() -> None:
    """Drop all database tables in reverse order."""
    op.drop_index("ix_notifications_booking_user_unread", table_name="notifications")
    op.drop_index("ix_messages_booking_recipient_unread", table_name="messages")
    op.drop_table("reviews")
    op.drop_table("notifications")
    op.drop_table("messages")
    op.drop_table("event_history")
    op.drop_table("bookings")
    op.drop_table("events")
    op.drop_table("venues")
    op.drop_table("musicians")
    op.drop_table("users")
