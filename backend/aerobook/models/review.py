from datetime import datetime

from aerobook.extensions import db


class Review(db.Model):
    """Reseña de un usuario sobre una aerolínea (una por usuario y aerolínea)."""

    __tablename__ = "reviews"
    __table_args__ = (
        db.UniqueConstraint("user_id", "airline", name="uq_reviews_user_airline"),
    )

    id = db.Column(db.Integer, primary_key=True, autoincrement=True)

    user_id = db.Column(
        db.Integer,
        db.ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    # Nombre de la aerolínea (mismo texto que Flight.airline)
    airline = db.Column(db.String(120), nullable=False, index=True)

    rating = db.Column(db.Integer, nullable=False)
    comment = db.Column(db.Text, nullable=False)

    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)
    updated_at = db.Column(
        db.DateTime,
        nullable=False,
        default=datetime.utcnow,
        onupdate=datetime.utcnow,
    )

    user = db.relationship("User", lazy="joined")
