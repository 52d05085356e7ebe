from flask import Blueprint, request
from flask_jwt_extended import jwt_required

from aerobook.schemas.flight_schemas import (
    FlightSchema,
    FlightWriteSchema,
    FlightStatusSchema,
    FlightFeaturedSchema,
)
from aerobook.services import flight_service
from aerobook.utils.responses import success_response, deleted_response
from aerobook.utils.security import require_admin, require_admin_or_airline

bp = Blueprint("flights", __name__)

flight_schema = FlightSchema()
flight_list_schema = FlightSchema(many=True)
flight_write_schema = FlightWriteSchema()


def _request_payload() -> dict:
    # multipart cuando viene imagen; si no, JSON
    if request.mimetype == "multipart/form-data":
        return request.form.to_dict()
    return request.get_json(silent=True) or {}


@bp.get("")
def list_flights():
    flights = flight_service.list_flights(
        origin=request.args.get("origin"),
        destination=request.args.get("destination"),
        departure_date=request.args.get("departureDate"),
        airlines=request.args.getlist("airline"),
        sort=request.args.get("sort"),
    )
    return success_response(data=flight_list_schema.dump(flights), message="OK")


@bp.get("/featured")
def list_featured():
    flights = flight_service.list_featured_flights()
    return success_response(data=flight_list_schema.dump(flights), message="OK")


@bp.get("/all")
@jwt_required()
def list_manageable():
    actor = require_admin_or_airline()
    flights = flight_service.list_manageable_flights(actor)
    return success_response(data=flight_list_schema.dump(flights), message="OK")


@bp.get("/<int:flight_id>")
def get_flight(flight_id: int):
    flight = flight_service.get_flight_or_404(flight_id)
    return success_response(data=flight_schema.dump(flight), message="OK")


@bp.post("")
@jwt_required()
def create_flight():
    actor = require_admin_or_airline()
    data = flight_write_schema.load(_request_payload())
    flight = flight_service.create_flight(data, actor, image=request.files.get("image"))
    return success_response(
        data=flight_schema.dump(flight),
        message="Vuelo creado exitosamente",
        status_code=201,
    )


@bp.put("/<int:flight_id>")
@jwt_required()
def update_flight(flight_id: int):
    actor = require_admin_or_airline()
    data = flight_write_schema.load(_request_payload())
    flight = flight_service.update_flight(flight_id, data, actor, image=request.files.get("image"))
    return success_response(data=flight_schema.dump(flight), message="Vuelo actualizado exitosamente")


@bp.delete("/<int:flight_id>")
@jwt_required()
def delete_flight(flight_id: int):
    actor = require_admin_or_airline()
    result = flight_service.delete_flight(flight_id, actor)
    return deleted_response("Vuelo eliminado correctamente", data=result)


@bp.patch("/<int:flight_id>/toggle-status")
@jwt_required()
def toggle_status(flight_id: int):
    actor = require_admin_or_airline()
    data = FlightStatusSchema().load(request.get_json(silent=True) or {})
    result = flight_service.toggle_flight_status(flight_id, actor, status=data.get("status"))

    return success_response(
        data={
            "flight": flight_schema.dump(result["flight"]),
            "previousStatus": result["previous"],
            "bookingsUpdated": result["bookings_updated"],
        },
        message=f"Estado del vuelo cambiado a {result['status']}",
    )


@bp.patch("/<int:flight_id>/featured")
@jwt_required()
def toggle_featured(flight_id: int):
    require_admin()
    data = FlightFeaturedSchema().load(request.get_json(silent=True) or {})
    flight = flight_service.set_featured(flight_id, data.get("is_featured"))
    return success_response(data=flight_schema.dump(flight), message="Vuelo actualizado")
