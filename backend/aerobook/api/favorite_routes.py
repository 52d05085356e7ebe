from flask import Blueprint, request
from flask_jwt_extended import jwt_required

from aerobook.schemas.favorite_schemas import FavoriteCreateSchema
from aerobook.schemas.flight_schemas import FlightSchema
from aerobook.services import favorite_service
from aerobook.utils.responses import success_response, deleted_response
from aerobook.utils.security import get_current_user

bp = Blueprint("favorites", __name__)

flight_schema = FlightSchema()


@bp.post("")
@jwt_required()
def add_favorite():
    usuario = get_current_user()
    data = FavoriteCreateSchema().load(request.json or {})
    favorite_service.add_favorite(usuario.id, data["flight_id"])
    return success_response(message="Agregado a favoritos", status_code=201)


@bp.delete("/<int:flight_id>")
@jwt_required()
def remove_favorite(flight_id: int):
    usuario = get_current_user()
    favorite_service.remove_favorite(usuario.id, flight_id)
    return deleted_response("Eliminado de favoritos")


@bp.get("")
@jwt_required()
def list_favorites():
    usuario = get_current_user()
    flights = favorite_service.list_favorite_flights(usuario.id)

    data = []
    for flight in flights:
        item = flight_schema.dump(flight)
        item["duration"] = favorite_service.compute_duration(flight.departure_time, flight.arrival_time)
        data.append(item)
    return success_response(data=data, message="OK")
