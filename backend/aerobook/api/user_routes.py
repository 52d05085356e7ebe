from flask import Blueprint, request
from flask_jwt_extended import jwt_required

from aerobook.schemas.user_schemas import (
    ProfileUpdateSchema,
    AdminUserCreateSchema,
    AdminUserUpdateSchema,
    RoleChangeSchema,
)
from aerobook.services import deletion_service, user_service
from aerobook.utils.responses import success_response, deleted_response
from aerobook.utils.security import get_current_user, require_admin

bp = Blueprint("users", __name__)


def _request_payload() -> dict:
    if request.mimetype == "multipart/form-data":
        return request.form.to_dict()
    return request.get_json(silent=True) or {}


@bp.get("/profile/me")
@jwt_required()
def get_profile():
    usuario = get_current_user()
    return success_response(data=user_service.user_to_dict(usuario), message="OK")


@bp.put("/profile/me")
@jwt_required()
def update_profile():
    usuario = get_current_user()
    data = ProfileUpdateSchema().load(_request_payload())
    usuario = user_service.update_profile(usuario, data, picture=request.files.get("profilePicture"))
    return success_response(data=user_service.user_to_dict(usuario), message="Perfil actualizado")


@bp.delete("/profile/me/with-bookings")
@jwt_required()
def delete_own_account():
    """Baja de la propia cuenta, borrando reservas/favoritos/reseñas si no hay vuelos vigentes."""

    usuario = get_current_user()
    result = deletion_service.delete_user(usuario.id)
    return deleted_response("Cuenta eliminada correctamente", data=result)


@bp.get("")
@jwt_required()
def list_users():
    require_admin()
    return success_response(data=[user_service.user_to_dict(u) for u in user_service.list_users()], message="OK")


@bp.post("")
@jwt_required()
def create_user():
    require_admin()
    data = AdminUserCreateSchema().load(request.json or {})
    usuario = user_service.create_user(data)
    return success_response(
        data=user_service.user_to_dict(usuario),
        message="Usuario creado exitosamente",
        status_code=201,
    )


@bp.get("/<int:user_id>")
@jwt_required()
def get_user(user_id: int):
    require_admin()
    usuario = user_service.get_user_or_404(user_id)
    return success_response(data=user_service.user_to_dict(usuario), message="OK")


@bp.put("/<int:user_id>")
@jwt_required()
def update_user(user_id: int):
    require_admin()
    data = AdminUserUpdateSchema().load(request.json or {})
    usuario = user_service.admin_update_user(user_id, data)
    return success_response(data=user_service.user_to_dict(usuario), message="Usuario actualizado")


@bp.delete("/<int:user_id>")
@jwt_required()
def delete_user(user_id: int):
    admin = require_admin()
    result = deletion_service.delete_user(user_id, acting_user_id=admin.id)
    return deleted_response("Usuario eliminado correctamente", data=result)


@bp.patch("/<int:user_id>/toggle-status")
@jwt_required()
def toggle_status(user_id: int):
    admin = require_admin()
    usuario = user_service.toggle_user_status(user_id, acting_user_id=admin.id)
    estado = "activado" if usuario.is_active else "desactivado"
    return success_response(data=user_service.user_to_dict(usuario), message=f"Usuario {estado}")


@bp.patch("/<int:user_id>/role")
@jwt_required()
def change_role(user_id: int):
    admin = require_admin()
    data = RoleChangeSchema().load(request.json or {})
    usuario = user_service.change_user_role(user_id, data["role"], acting_user_id=admin.id)
    return success_response(data=user_service.user_to_dict(usuario), message="Rol actualizado")
