from flask import Blueprint, request
from flask_jwt_extended import jwt_required

from aerobook.schemas.airline_schemas import AirlineCreateSchema, AirlineUpdateSchema
from aerobook.services import airline_service
from aerobook.utils.responses import success_response, deleted_response
from aerobook.utils.security import require_admin

bp = Blueprint("airlines", __name__)


@bp.get("")
@jwt_required()
def list_airlines():
    require_admin()
    airlines = airline_service.list_airlines()
    return success_response(data=[airline_service.airline_to_dict(a) for a in airlines], message="OK")


@bp.get("/<int:airline_id>")
@jwt_required()
def get_airline(airline_id: int):
    require_admin()
    profile = airline_service.get_airline_or_404(airline_id)
    return success_response(data=airline_service.airline_to_dict(profile), message="OK")


@bp.post("")
@jwt_required()
def create_airline():
    require_admin()
    data = AirlineCreateSchema().load(request.json or {})
    profile = airline_service.create_airline(data)
    return success_response(
        data=airline_service.airline_to_dict(profile),
        message="Aerolínea creada exitosamente",
        status_code=201,
    )


@bp.put("/<int:airline_id>")
@jwt_required()
def update_airline(airline_id: int):
    require_admin()
    data = AirlineUpdateSchema().load(request.json or {})
    profile = airline_service.update_airline(airline_id, data)
    return success_response(data=airline_service.airline_to_dict(profile), message="Aerolínea actualizada")


@bp.delete("/<int:airline_id>")
@jwt_required()
def delete_airline(airline_id: int):
    require_admin()
    result = airline_service.delete_airline(airline_id)
    return deleted_response("Aerolínea eliminada correctamente", data=result)
