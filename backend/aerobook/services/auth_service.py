from flask_jwt_extended import create_access_token

from aerobook.extensions import bcrypt
from aerobook.models.user import User
from aerobook.services import user_service
from aerobook.utils.errors import ApiError, AuthenticationError


def check_password(hashed: str | None, password: str) -> bool:
    try:
        return bcrypt.check_password_hash(hashed or "", password)
    except (ValueError, TypeError):
        # Hash corrupto o en texto plano: credenciales inválidas, no 500
        return False


def create_token(usuario: User) -> str:
    """Token firmado con {id, email, name, role}; expira según JWT_ACCESS_TOKEN_EXPIRES (1h)."""
    return create_access_token(
        identity=str(usuario.id),
        additional_claims={
            "id": usuario.id,
            "email": usuario.email,
            "name": usuario.name,
            "role": usuario.role,
        },
    )


def register_user(data: dict) -> User:
    return user_service.create_user(
        {
            "name": data["name"],
            "email": data["email"],
            "password": data["password"],
        }
    )


def authenticate(email: str, password: str) -> dict:
    correo = (email or "").lower().strip()
    usuario = User.query.filter_by(email=correo).first()

    if not usuario:
        raise AuthenticationError("Usuario no existente")

    if not check_password(usuario.password, password):
        raise AuthenticationError("Email y/o contraseña incorrecta")

    if not usuario.is_active:
        raise ApiError("Cuenta inactiva", 403)

    return {
        "token": create_token(usuario),
        "user": user_service.user_to_dict(usuario),
    }
