from datetime import datetime

from aerobook.extensions import db


class AirlineProfile(db.Model):
    """Datos propios de una aerolínea.

    El nombre, email y contraseña viven en `users` (role=airline); esta tabla
    solo agrega código IATA y CUIT. Una fila por usuario aerolínea.
    """

    __tablename__ = "airlines"

    id = db.Column(db.Integer, primary_key=True, autoincrement=True)

    user_id = db.Column(
        db.Integer,
        db.ForeignKey("users.id", ondelete="CASCADE"),
        unique=True,
        nullable=False,
    )

    code = db.Column(db.String(10), unique=True, nullable=False)
    cuit = db.Column(db.String(20), unique=True, nullable=False)

    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)

    user = db.relationship("User", back_populates="airline_profile", lazy="joined")

    @property
    def name(self):
        return self.user.name if self.user else None

    @property
    def email(self):
        return self.user.email if self.user else None

    def __repr__(self) -> str:
        return f"<AirlineProfile id={self.id} code={self.code} user={self.user_id}>"
