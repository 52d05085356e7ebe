from typing import Optional

from flask import current_app
from sqlalchemy.exc import IntegrityError
from werkzeug.datastructures import FileStorage

from aerobook.extensions import db, bcrypt
from aerobook.models.user import User, ROLE_ADMIN, ROLE_USER, ROLE_AIRLINE
from aerobook.services import rename_service
from aerobook.utils.errors import ApiError, ConflictError, NotFoundError
from aerobook.utils.uploads import PROFILE_PICTURES, remove_upload, save_image


# Roles que un admin puede asignar a mano (airline solo vía /api/airlines)
ASSIGNABLE_ROLES = (ROLE_ADMIN, ROLE_USER)


def hash_password(password: str) -> str:
    return bcrypt.generate_password_hash(password).decode("utf-8")


def get_user_by_id(user_id: int) -> Optional[User]:
    return db.session.get(User, user_id)


def get_user_or_404(user_id: int) -> User:
    usuario = get_user_by_id(user_id)
    if not usuario:
        raise NotFoundError("Usuario no encontrado")
    return usuario


def ensure_unique_identity(name: str | None, email: str | None, exclude_id: int | None = None) -> None:
    if email:
        q = User.query.filter(User.email == email)
        if exclude_id is not None:
            q = q.filter(User.id != exclude_id)
        if q.first():
            raise ConflictError("Este email ya se encuentra registrado", status_code=400)

    if name:
        q = User.query.filter(User.name == name)
        if exclude_id is not None:
            q = q.filter(User.id != exclude_id)
        if q.first():
            raise ConflictError("Este nombre ya está en uso", status_code=400)


def create_user(data: dict) -> User:
    correo = data["email"].lower().strip()
    nombre = data["name"].strip()

    ensure_unique_identity(nombre, correo)

    usuario = User(
        name=nombre,
        email=correo,
        password=hash_password(data["password"]),
        role=data.get("role") or ROLE_USER,
        is_active=True,
    )
    db.session.add(usuario)

    try:
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        raise ConflictError("El usuario ya existe", status_code=400)

    return usuario


def list_users() -> list[User]:
    return User.query.order_by(User.id.desc()).all()


def user_to_dict(usuario: User) -> dict:
    data = {
        "id": usuario.id,
        "name": usuario.name,
        "email": usuario.email,
        "role": usuario.role,
        "isActive": bool(usuario.is_active),
        "profilePicture": usuario.profile_picture,
        "createdAt": usuario.created_at.isoformat() if usuario.created_at else None,
    }
    if usuario.role == ROLE_AIRLINE and usuario.airline_profile is not None:
        data["airline"] = {
            "id": usuario.airline_profile.id,
            "code": usuario.airline_profile.code,
            "cuit": usuario.airline_profile.cuit,
        }
    return data


def _apply_identity_changes(usuario: User, name: str | None, email: str | None) -> None:
    """Cambia nombre/email; si es aerolínea propaga el nombre. Sin commit."""

    nuevo_nombre = name.strip() if name else None
    nuevo_email = email.lower().strip() if email else None

    ensure_unique_identity(
        nuevo_nombre if nuevo_nombre != usuario.name else None,
        nuevo_email if nuevo_email != usuario.email else None,
        exclude_id=usuario.id,
    )

    if nuevo_nombre and nuevo_nombre != usuario.name:
        anterior = usuario.name
        if usuario.role == ROLE_AIRLINE:
            rename_service.propagate_airline_rename(usuario, anterior, nuevo_nombre)
        usuario.name = nuevo_nombre

    if nuevo_email:
        usuario.email = nuevo_email


def _commit_or_rollback(conflict_message: str) -> None:
    try:
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        raise ConflictError(conflict_message, status_code=400)
    except Exception:
        db.session.rollback()
        raise


def update_profile(usuario: User, data: dict, picture: FileStorage | None = None) -> User:
    """Actualización del propio perfil (nombre, email, contraseña, foto)."""

    old_picture = None
    new_picture = None
    try:
        _apply_identity_changes(usuario, data.get("name"), data.get("email"))

        if data.get("password"):
            usuario.password = hash_password(data["password"])

        if picture is not None and picture.filename:
            new_picture = save_image(picture, PROFILE_PICTURES, "profilePicture")
            old_picture = usuario.profile_picture
            usuario.profile_picture = new_picture
    except Exception:
        db.session.rollback()
        raise

    try:
        _commit_or_rollback("No se pudo actualizar el perfil: datos duplicados")
    except Exception:
        # La foto nueva ya se escribió en disco
        remove_upload(new_picture)
        raise

    if old_picture:
        remove_upload(old_picture)

    current_app.logger.info("Perfil actualizado: usuario %s", usuario.id)
    return usuario


def admin_update_user(user_id: int, data: dict) -> User:
    usuario = get_user_or_404(user_id)

    try:
        _apply_identity_changes(usuario, data.get("name"), data.get("email"))

        role = data.get("role")
        if role and role != usuario.role:
            if role not in ASSIGNABLE_ROLES or usuario.role == ROLE_AIRLINE:
                raise ApiError("Rol inválido", 400)
            usuario.role = role

        if data.get("is_active") is not None:
            usuario.is_active = bool(data["is_active"])
    except Exception:
        db.session.rollback()
        raise

    _commit_or_rollback("No se pudo actualizar el usuario: datos duplicados")
    return usuario


def toggle_user_status(user_id: int, acting_user_id: int) -> User:
    usuario = get_user_or_404(user_id)
    if usuario.id == acting_user_id:
        raise ApiError("No puedes desactivar tu propia cuenta", 400)

    usuario.is_active = not usuario.is_active
    db.session.commit()
    return usuario


def change_user_role(user_id: int, role: str | None, acting_user_id: int) -> User:
    if role not in ASSIGNABLE_ROLES:
        raise ApiError("Rol inválido", 400)

    usuario = get_user_or_404(user_id)
    if usuario.id == acting_user_id:
        raise ApiError("No puedes cambiar tu propio rol", 400)
    if usuario.role == ROLE_AIRLINE:
        raise ApiError("El rol de una aerolínea no se cambia desde usuarios", 400)

    usuario.role = role
    db.session.commit()
    return usuario
