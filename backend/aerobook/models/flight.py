from datetime import date as _date, datetime

from aerobook.extensions import db


FLIGHT_ACTIVE = "Activo"
FLIGHT_INACTIVE = "Inactivo"
FLIGHT_STATUSES = (FLIGHT_ACTIVE, FLIGHT_INACTIVE)


class Flight(db.Model):
    __tablename__ = "flights"

    id = db.Column(db.Integer, primary_key=True, autoincrement=True)

    # Etiqueta de la aerolínea (texto libre). Se mantiene al renombrar
    # la aerolínea; ver services/rename_service.py
    airline = db.Column(db.String(120), nullable=False, index=True)

    origin = db.Column(db.String(150), nullable=False)
    destination = db.Column(db.String(150), nullable=False)

    date = db.Column(db.Date, nullable=False)
    departure_time = db.Column(db.String(8), nullable=False)  # HH:MM
    arrival_time = db.Column(db.String(8), nullable=False)

    capacity = db.Column(db.Integer, nullable=False)
    base_price = db.Column(db.Float, nullable=False)

    status = db.Column(
        db.Enum(*FLIGHT_STATUSES, name="flight_status_enum"),
        nullable=False,
        default=FLIGHT_ACTIVE,
    )

    purchase_date = db.Column(db.Date, nullable=False, default=_date.today)

    created_by = db.Column(
        db.Integer,
        db.ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )

    image_url = db.Column(db.String(500), nullable=True)
    is_featured = db.Column(db.Boolean, nullable=False, default=False)

    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)
    updated_at = db.Column(
        db.DateTime,
        nullable=False,
        default=datetime.utcnow,
        onupdate=datetime.utcnow,
    )

    creator = db.relationship("User", foreign_keys=[created_by])

    def __repr__(self) -> str:
        return f"<Flight id={self.id} airline={self.airline} status={self.status}>"
