from flask import Blueprint, request
from flask_jwt_extended import jwt_required

from aerobook.schemas.booking_schemas import BookingSchema, BookingCreateSchema
from aerobook.services import booking_service
from aerobook.utils.responses import success_response
from aerobook.utils.security import get_current_user, require_admin

bp = Blueprint("bookings", __name__)

booking_schema = BookingSchema()
booking_list_schema = BookingSchema(many=True)


@bp.post("")
@jwt_required()
def create_booking():
    usuario = get_current_user()
    data = BookingCreateSchema().load(request.get_json(silent=True) or {})
    booking = booking_service.create_booking(data, usuario.id)
    return success_response(
        data=booking_schema.dump(booking),
        message="Reserva creada exitosamente",
        status_code=201,
    )


@bp.get("")
@jwt_required()
def list_all_bookings():
    require_admin()
    bookings = booking_service.list_all_bookings()
    return success_response(data=booking_list_schema.dump(bookings), message="OK")


@bp.get("/my-bookings")
@jwt_required()
def list_my_bookings():
    usuario = get_current_user()
    bookings = booking_service.list_my_bookings(usuario.id)
    return success_response(data=booking_list_schema.dump(bookings), message="OK")


@bp.get("/user/<int:user_id>")
@jwt_required()
def list_user_bookings(user_id: int):
    require_admin()
    bookings = booking_service.list_user_bookings(user_id)
    return success_response(data=booking_list_schema.dump(bookings), message="OK")


@bp.get("/<int:booking_id>")
@jwt_required()
def get_booking(booking_id: int):
    usuario = get_current_user()
    booking = booking_service.get_booking(booking_id, usuario)
    return success_response(data=booking_schema.dump(booking), message="OK")


@bp.patch("/<int:booking_id>/cancel")
@jwt_required()
def cancel_booking(booking_id: int):
    usuario = get_current_user()
    booking = booking_service.cancel_booking(booking_id, usuario)
    return success_response(data=booking_schema.dump(booking), message="Reserva cancelada")
