from datetime import datetime

from aerobook.extensions import db


ROLE_ADMIN = "admin"
ROLE_USER = "user"
ROLE_AIRLINE = "airline"
ROLES = (ROLE_ADMIN, ROLE_USER, ROLE_AIRLINE)


class User(db.Model):
    __tablename__ = "users"

    id = db.Column(db.Integer, primary_key=True, autoincrement=True)

    name = db.Column(db.String(120), unique=True, nullable=False)
    email = db.Column(db.String(255), unique=True, nullable=False)
    password = db.Column(db.String(255), nullable=False)

    role = db.Column(
        db.Enum(*ROLES, name="user_role_enum"),
        nullable=False,
        default=ROLE_USER,
    )
    is_active = db.Column(db.Boolean, nullable=False, default=True)

    # Ruta relativa (/uploads/profile-pictures/...)
    profile_picture = db.Column(db.String(500), nullable=True)

    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)
    updated_at = db.Column(
        db.DateTime,
        nullable=False,
        default=datetime.utcnow,
        onupdate=datetime.utcnow,
    )

    # Perfil de aerolínea (solo role=airline). Se borra junto con el usuario.
    airline_profile = db.relationship(
        "AirlineProfile",
        back_populates="user",
        uselist=False,
        cascade="all, delete-orphan",
    )

    @property
    def is_admin(self) -> bool:
        return self.role == ROLE_ADMIN

    @property
    def is_airline(self) -> bool:
        return self.role == ROLE_AIRLINE

    def __repr__(self) -> str:
        return f"<User id={self.id} name={self.name} role={self.role}>"
