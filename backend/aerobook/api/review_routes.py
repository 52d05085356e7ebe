from flask import Blueprint, request
from flask_jwt_extended import jwt_required

from aerobook.schemas.review_schemas import ReviewCreateSchema, ReviewUpdateSchema
from aerobook.services import review_service
from aerobook.utils.responses import success_response, deleted_response
from aerobook.utils.security import get_current_user

bp = Blueprint("reviews", __name__)


@bp.get("")
def list_reviews():
    reviews = review_service.list_reviews()
    return success_response(data=[review_service.review_to_dict(r) for r in reviews], message="OK")


@bp.get("/airline/<string:airline>")
def list_by_airline(airline: str):
    reviews = review_service.list_reviews_by_airline(airline)
    return success_response(data=[review_service.review_to_dict(r) for r in reviews], message="OK")


@bp.get("/airline/<string:airline>/average")
def airline_average(airline: str):
    return success_response(data=review_service.airline_average(airline), message="OK")


@bp.post("")
@jwt_required()
def create_review():
    usuario = get_current_user()
    data = ReviewCreateSchema().load(request.json or {})
    review = review_service.create_review(data, usuario.id)
    return success_response(
        data=review_service.review_to_dict(review),
        message="Reseña creada exitosamente",
        status_code=201,
    )


@bp.put("/<int:review_id>")
@jwt_required()
def update_review(review_id: int):
    usuario = get_current_user()
    data = ReviewUpdateSchema().load(request.json or {})
    review = review_service.update_review(review_id, data, usuario)
    return success_response(data=review_service.review_to_dict(review), message="Reseña actualizada")


@bp.delete("/<int:review_id>")
@jwt_required()
def delete_review(review_id: int):
    usuario = get_current_user()
    review_service.delete_review(review_id, usuario)
    return deleted_response("Reseña eliminada correctamente")
