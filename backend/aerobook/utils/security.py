from flask_jwt_extended import get_jwt_identity

from aerobook.extensions import db
from aerobook.models.user import User, ROLE_ADMIN, ROLE_AIRLINE
from aerobook.utils.errors import AuthenticationError, AuthorizationError


def current_user_id() -> int:
	user_id = get_jwt_identity()
	try:
		return int(user_id)
	except (TypeError, ValueError):
		raise AuthenticationError("No autorizado - Token inválido")


def get_current_user() -> User:
	"""Usuario del token, releído de la BD para tener el rol actualizado."""

	usuario: User | None = db.session.get(User, current_user_id())
	if not usuario:
		raise AuthenticationError("No autorizado - Usuario no encontrado")
	if not usuario.is_active:
		raise AuthorizationError("Cuenta inactiva")
	return usuario


def require_admin() -> User:
	usuario = get_current_user()
	if usuario.role != ROLE_ADMIN:
		raise AuthorizationError("Acceso denegado - Se requiere rol de administrador")
	return usuario


def require_admin_or_airline() -> User:
	usuario = get_current_user()
	if usuario.role not in (ROLE_ADMIN, ROLE_AIRLINE):
		raise AuthorizationError("Acceso denegado - Se requiere rol de administrador o aerolínea")
	return usuario
