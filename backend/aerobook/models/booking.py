from datetime import datetime

from aerobook.extensions import db


BOOKING_ACTIVE = "Activo"
BOOKING_INACTIVE = "Inactivo"
BOOKING_CANCELLED = "Cancelado"
BOOKING_STATUSES = (BOOKING_ACTIVE, BOOKING_INACTIVE, BOOKING_CANCELLED)


class Booking(db.Model):
    __tablename__ = "bookings"

    id = db.Column(db.Integer, primary_key=True, autoincrement=True)

    user_id = db.Column(
        db.Integer,
        db.ForeignKey("users.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )
    flight_id = db.Column(
        db.Integer,
        db.ForeignKey("flights.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )

    # Lista de pasajeros tal como la envía el front
    passengers = db.Column(db.JSON, nullable=False)
    passenger_count = db.Column(db.Integer, nullable=False)

    total_price = db.Column(db.Numeric(10, 2), nullable=False)
    purchase_date = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)

    status = db.Column(
        db.Enum(*BOOKING_STATUSES, name="booking_status_enum"),
        nullable=False,
        default=BOOKING_ACTIVE,
    )

    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)
    updated_at = db.Column(
        db.DateTime,
        nullable=False,
        default=datetime.utcnow,
        onupdate=datetime.utcnow,
    )

    user = db.relationship("User", lazy="joined")
    flight = db.relationship("Flight", lazy="joined")

    def __repr__(self) -> str:
        return f"<Booking id={self.id} flight={self.flight_id} status={self.status}>"
