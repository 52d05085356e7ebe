from __future__ import annotations

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError

from aerobook.extensions import db
from aerobook.models.review import Review
from aerobook.models.user import User
from aerobook.services import airline_service
from aerobook.utils.errors import ApiError, AuthorizationError, ConflictError, NotFoundError


def review_to_dict(r: Review) -> dict:
	autor = r.user
	return {
		"id": r.id,
		"userId": r.user_id,
		"airline": r.airline,
		"rating": int(r.rating) if r.rating is not None else None,
		"comment": r.comment,
		"createdAt": r.created_at.isoformat() if r.created_at else None,
		"updatedAt": r.updated_at.isoformat() if r.updated_at else None,
		"user": {
			"id": autor.id,
			"name": autor.name,
			"profilePicture": autor.profile_picture,
		} if autor else None,
	}


def _clean_comment(comment: str | None) -> str:
	comentario = (comment or "").strip()
	if not comentario:
		raise ApiError("El comentario es obligatorio", 400)
	return comentario


def _validate_rating(rating) -> int:
	try:
		rating_int = int(rating)
	except (TypeError, ValueError):
		raise ApiError("La calificación debe estar entre 1 y 5", 400)
	if rating_int < 1 or rating_int > 5:
		raise ApiError("La calificación debe estar entre 1 y 5", 400)
	return rating_int


def list_reviews() -> list[Review]:
	return Review.query.order_by(Review.created_at.desc(), Review.id.desc()).all()


def list_reviews_by_airline(airline: str) -> list[Review]:
	if not (airline or "").strip():
		raise ApiError("Debe proporcionar el nombre de la aerolínea", 400)
	return (
		Review.query.filter(Review.airline == airline)
		.order_by(Review.created_at.desc(), Review.id.desc())
		.all()
	)


def airline_average(airline: str) -> dict:
	if not (airline or "").strip():
		raise ApiError("Debe proporcionar el nombre de la aerolínea", 400)

	avg_val, count_val = (
		db.session.query(func.avg(Review.rating), func.count(Review.id))
		.filter(Review.airline == airline)
		.first()
	)
	return {
		"airline": airline,
		"averageRating": round(float(avg_val), 1) if avg_val is not None else 0,
		"totalReviews": int(count_val or 0),
	}


def create_review(data: dict, user_id: int) -> Review:
	airline = (data.get("airline") or "").strip()
	if not airline:
		raise ApiError("La aerolínea es obligatoria", 400)
	rating = _validate_rating(data.get("rating"))
	comentario = _clean_comment(data.get("comment"))

	if not airline_service.airline_exists(airline):
		raise NotFoundError("Aerolínea no encontrada")

	if Review.query.filter_by(user_id=user_id, airline=airline).first():
		raise ConflictError("Ya has reseñado esta aerolínea")

	review = Review(user_id=user_id, airline=airline, rating=rating, comment=comentario)
	db.session.add(review)

	try:
		db.session.commit()
	except IntegrityError:
		db.session.rollback()
		raise ConflictError("Ya has reseñado esta aerolínea")

	return review


def _get_own_review(review_id: int, user: User, message: str) -> Review:
	review: Review | None = db.session.get(Review, review_id)
	if not review:
		raise NotFoundError("Reseña no encontrada")
	if review.user_id != user.id:
		raise AuthorizationError(message)
	return review


def update_review(review_id: int, data: dict, user: User) -> Review:
	review = _get_own_review(review_id, user, "No tienes permiso para editar esta reseña")

	if data.get("rating") is not None:
		review.rating = _validate_rating(data["rating"])
	if "comment" in data:
		review.comment = _clean_comment(data.get("comment"))

	db.session.commit()
	return review


def delete_review(review_id: int, user: User) -> None:
	review = _get_own_review(review_id, user, "No tienes permiso para eliminar esta reseña")
	db.session.delete(review)
	db.session.commit()
