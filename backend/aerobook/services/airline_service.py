from __future__ import annotations

from flask import current_app
from sqlalchemy.exc import IntegrityError

from aerobook.extensions import db
from aerobook.models.airline import AirlineProfile
from aerobook.models.user import User, ROLE_AIRLINE
from aerobook.services import deletion_service, rename_service, user_service
from aerobook.utils.errors import ConflictError, NotFoundError


def airline_to_dict(profile: AirlineProfile) -> dict:
	return {
		"id": profile.id,
		"name": profile.name,
		"code": profile.code,
		"cuit": profile.cuit,
		"email": profile.email,
		"userId": profile.user_id,
		"createdAt": profile.created_at.isoformat() if profile.created_at else None,
	}


def _ensure_unique_profile(code: str | None, cuit: str | None, exclude_id: int | None = None) -> None:
	if code:
		q = AirlineProfile.query.filter(AirlineProfile.code == code)
		if exclude_id is not None:
			q = q.filter(AirlineProfile.id != exclude_id)
		if q.first():
			raise ConflictError("Ya existe una aerolínea con ese código", status_code=400)

	if cuit:
		q = AirlineProfile.query.filter(AirlineProfile.cuit == cuit)
		if exclude_id is not None:
			q = q.filter(AirlineProfile.id != exclude_id)
		if q.first():
			raise ConflictError("Ya existe una aerolínea con ese CUIT", status_code=400)


def list_airlines() -> list[AirlineProfile]:
	return (
		AirlineProfile.query.join(User, AirlineProfile.user_id == User.id)
		.order_by(User.name.asc())
		.all()
	)


def get_airline_or_404(airline_id: int) -> AirlineProfile:
	profile = db.session.get(AirlineProfile, airline_id)
	if not profile:
		raise NotFoundError("Aerolínea no encontrada")
	return profile


def airline_exists(name: str | None) -> bool:
	if not name:
		return False
	return (
		User.query.filter(User.name == name, User.role == ROLE_AIRLINE).first()
		is not None
	)


def create_airline(data: dict) -> AirlineProfile:
	"""Crea el usuario role=airline y su perfil en la misma transacción."""

	nombre = data["name"].strip()
	correo = data["email"].lower().strip()
	code = data["code"].strip().upper()
	cuit = data["cuit"].strip()

	user_service.ensure_unique_identity(nombre, correo)
	_ensure_unique_profile(code, cuit)

	usuario = User(
		name=nombre,
		email=correo,
		password=user_service.hash_password(data["password"]),
		role=ROLE_AIRLINE,
		is_active=True,
	)
	db.session.add(usuario)
	db.session.flush()

	profile = AirlineProfile(user_id=usuario.id, code=code, cuit=cuit)
	db.session.add(profile)

	try:
		db.session.commit()
	except IntegrityError:
		db.session.rollback()
		raise ConflictError("La aerolínea ya existe", status_code=400)
	except Exception:
		db.session.rollback()
		raise

	current_app.logger.info("Aerolínea creada: '%s' (%s)", nombre, code)
	return profile


def update_airline(airline_id: int, data: dict) -> AirlineProfile:
	profile = get_airline_or_404(airline_id)
	usuario = profile.user

	nombre = data.get("name", "").strip() or None
	correo = (data.get("email") or "").lower().strip() or None
	code = (data.get("code") or "").strip().upper() or None
	cuit = (data.get("cuit") or "").strip() or None

	try:
		user_service.ensure_unique_identity(
			nombre if nombre != usuario.name else None,
			correo if correo != usuario.email else None,
			exclude_id=usuario.id,
		)
		_ensure_unique_profile(
			code if code != profile.code else None,
			cuit if cuit != profile.cuit else None,
			exclude_id=profile.id,
		)

		if nombre and nombre != usuario.name:
			rename_service.propagate_airline_rename(usuario, usuario.name, nombre)
			usuario.name = nombre
		if correo:
			usuario.email = correo
		if code:
			profile.code = code
		if cuit:
			profile.cuit = cuit
		if data.get("password"):
			usuario.password = user_service.hash_password(data["password"])

		db.session.commit()
	except IntegrityError:
		db.session.rollback()
		raise ConflictError("No se pudo actualizar la aerolínea: datos duplicados", status_code=400)
	except Exception:
		db.session.rollback()
		raise

	return profile


def delete_airline(airline_id: int) -> dict:
	return deletion_service.delete_airline(airline_id)
