"""initial schema

Revision ID: 20260301_0001
Revises:
Create Date: 2026-03-01

"""

from alembic import op
import sqlalchemy as sa
from sqlalchemy import inspect


revision = "20260301_0001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    bind = op.get_bind()
    insp = inspect(bind)
    tables = set(insp.get_table_names())

    if "users" not in tables:
        op.create_table(
            "users",
            sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
            sa.Column("name", sa.String(length=120), nullable=False),
            sa.Column("email", sa.String(length=255), nullable=False),
            sa.Column("password", sa.String(length=255), nullable=False),
            sa.Column(
                "role",
                sa.Enum("admin", "user", "airline", name="user_role_enum"),
                server_default="user",
                nullable=False,
            ),
            sa.Column("is_active", sa.Boolean(), server_default=sa.text("1"), nullable=False),
            sa.Column("profile_picture", sa.String(length=500), nullable=True),
            sa.Column("created_at", sa.DateTime(), server_default=sa.text("CURRENT_TIMESTAMP"), nullable=False),
            sa.Column("updated_at", sa.DateTime(), server_default=sa.text("CURRENT_TIMESTAMP"), nullable=False),
            sa.UniqueConstraint("name", name="uq_users_name"),
            sa.UniqueConstraint("email", name="uq_users_email"),
        )

    if "airlines" not in tables:
        op.create_table(
            "airlines",
            sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
            sa.Column("user_id", sa.Integer(), nullable=False),
            sa.Column("code", sa.String(length=10), nullable=False),
            sa.Column("cuit", sa.String(length=20), nullable=False),
            sa.Column("created_at", sa.DateTime(), server_default=sa.text("CURRENT_TIMESTAMP"), nullable=False),
            sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
            sa.UniqueConstraint("user_id", name="uq_airlines_user_id"),
            sa.UniqueConstraint("code", name="uq_airlines_code"),
            sa.UniqueConstraint("cuit", name="uq_airlines_cuit"),
        )

    if "flights" not in tables:
        op.create_table(
            "flights",
            sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
            sa.Column("airline", sa.String(length=120), nullable=False),
            sa.Column("origin", sa.String(length=150), nullable=False),
            sa.Column("destination", sa.String(length=150), nullable=False),
            sa.Column("date", sa.Date(), nullable=False),
            sa.Column("departure_time", sa.String(length=8), nullable=False),
            sa.Column("arrival_time", sa.String(length=8), nullable=False),
            sa.Column("capacity", sa.Integer(), nullable=False),
            sa.Column("base_price", sa.Float(), nullable=False),
            sa.Column(
                "status",
                sa.Enum("Activo", "Inactivo", name="flight_status_enum"),
                server_default="Activo",
                nullable=False,
            ),
            sa.Column("purchase_date", sa.Date(), nullable=False),
            sa.Column("created_by", sa.Integer(), nullable=True),
            sa.Column("image_url", sa.String(length=500), nullable=True),
            sa.Column("is_featured", sa.Boolean(), server_default=sa.text("0"), nullable=False),
            sa.Column("created_at", sa.DateTime(), server_default=sa.text("CURRENT_TIMESTAMP"), nullable=False),
            sa.Column("updated_at", sa.DateTime(), server_default=sa.text("CURRENT_TIMESTAMP"), nullable=False),
            sa.ForeignKeyConstraint(["created_by"], ["users.id"], ondelete="SET NULL"),
        )
        op.create_index("ix_flights_airline", "flights", ["airline"], unique=False)
        op.create_index("ix_flights_created_by", "flights", ["created_by"], unique=False)

    if "bookings" not in tables:
        op.create_table(
            "bookings",
            sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
            sa.Column("user_id", sa.Integer(), nullable=False),
            sa.Column("flight_id", sa.Integer(), nullable=False),
            sa.Column("passengers", sa.JSON(), nullable=False),
            sa.Column("passenger_count", sa.Integer(), nullable=False),
            sa.Column("total_price", sa.Numeric(10, 2), nullable=False),
            sa.Column("purchase_date", sa.DateTime(), server_default=sa.text("CURRENT_TIMESTAMP"), nullable=False),
            sa.Column(
                "status",
                sa.Enum("Activo", "Inactivo", "Cancelado", name="booking_status_enum"),
                server_default="Activo",
                nullable=False,
            ),
            sa.Column("created_at", sa.DateTime(), server_default=sa.text("CURRENT_TIMESTAMP"), nullable=False),
            sa.Column("updated_at", sa.DateTime(), server_default=sa.text("CURRENT_TIMESTAMP"), nullable=False),
            sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="RESTRICT"),
            sa.ForeignKeyConstraint(["flight_id"], ["flights.id"], ondelete="RESTRICT"),
        )
        op.create_index("ix_bookings_user_id", "bookings", ["user_id"], unique=False)
        op.create_index("ix_bookings_flight_id", "bookings", ["flight_id"], unique=False)

    if "favorites" not in tables:
        op.create_table(
            "favorites",
            sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
            sa.Column("user_id", sa.Integer(), nullable=False),
            sa.Column("flight_id", sa.Integer(), nullable=False),
            sa.Column("created_at", sa.DateTime(), server_default=sa.text("CURRENT_TIMESTAMP"), nullable=False),
            sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
            sa.ForeignKeyConstraint(["flight_id"], ["flights.id"], ondelete="CASCADE"),
            sa.UniqueConstraint("user_id", "flight_id", name="uq_favorites_user_flight"),
        )
        op.create_index("ix_favorites_user_id", "favorites", ["user_id"], unique=False)
        op.create_index("ix_favorites_flight_id", "favorites", ["flight_id"], unique=False)

    if "reviews" not in tables:
        op.create_table(
            "reviews",
            sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
            sa.Column("user_id", sa.Integer(), nullable=False),
            sa.Column("airline", sa.String(length=120), nullable=False),
            sa.Column("rating", sa.Integer(), nullable=False),
            sa.Column("comment", sa.Text(), nullable=False),
            sa.Column("created_at", sa.DateTime(), server_default=sa.text("CURRENT_TIMESTAMP"), nullable=False),
            sa.Column("updated_at", sa.DateTime(), server_default=sa.text("CURRENT_TIMESTAMP"), nullable=False),
            sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
            sa.UniqueConstraint("user_id", "airline", name="uq_reviews_user_airline"),
        )
        op.create_index("ix_reviews_user_id", "reviews", ["user_id"], unique=False)
        op.create_index("ix_reviews_airline", "reviews", ["airline"], unique=False)


def downgrade():
    bind = op.get_bind()
    insp = inspect(bind)
    tables = set(insp.get_table_names())

    # Orden inverso por las FK
    for table in ("reviews", "favorites", "bookings", "flights", "airlines", "users"):
        if table in tables:
            op.drop_table(table)
