from flask import Blueprint, request
from flask_jwt_extended import jwt_required

from aerobook.schemas.auth_schemas import RegisterSchema, LoginSchema
from aerobook.services import auth_service, user_service
from aerobook.utils.responses import success_response
from aerobook.utils.security import get_current_user

bp = Blueprint("auth", __name__)


@bp.post("/register")
def register():
    data = RegisterSchema().load(request.json or {})
    usuario = auth_service.register_user(data)
    return success_response(
        data=user_service.user_to_dict(usuario),
        message="Usuario registrado exitosamente",
        status_code=201
    )


@bp.post("/login")
def login():
    data = LoginSchema().load(request.json or {})
    result = auth_service.authenticate(data["email"], data["password"])
    return success_response(data=result, message="Login exitoso")


@bp.get("/verify")
@jwt_required()
def verify():
    usuario = get_current_user()
    return success_response(
        data={"valid": True, "user": user_service.user_to_dict(usuario)},
        message="Token válido"
    )
