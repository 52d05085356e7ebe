"""Borrado de usuarios, aerolíneas y vuelos con sus dependencias.

Cada operación primero verifica que no haya obligaciones vivas (reservas
activas en vuelos futuros) y luego borra en cascada dentro de una sola
transacción: o se confirma todo o se revierte todo.
"""

from __future__ import annotations

from datetime import datetime

from flask import current_app
from sqlalchemy import func, or_

from aerobook.extensions import db
from aerobook.models.airline import AirlineProfile
from aerobook.models.booking import Booking, BOOKING_ACTIVE
from aerobook.models.favorite import Favorite
from aerobook.models.flight import Flight, FLIGHT_ACTIVE
from aerobook.models.review import Review
from aerobook.models.user import User, ROLE_AIRLINE
from aerobook.services import lifecycle_service
from aerobook.utils.errors import ApiError, AuthorizationError, ConflictError, NotFoundError
from aerobook.utils.uploads import remove_upload


# Borrado bloqueado: 400, como lo espera el front
DELETE_BLOCKED_STATUS = 400


def owned_flights_query(user: User):
	"""Vuelos de una aerolínea: por etiqueta o por creador (ambas reglas)."""

	return Flight.query.filter(or_(Flight.airline == user.name, Flight.created_by == user.id))


def _active_booking_counts(flight_ids: list[int]) -> dict[int, int]:
	if not flight_ids:
		return {}
	rows = (
		db.session.query(Booking.flight_id, func.count(Booking.id))
		.filter(Booking.flight_id.in_(flight_ids), Booking.status == BOOKING_ACTIVE)
		.group_by(Booking.flight_id)
		.all()
	)
	return {int(flight_id): int(count) for flight_id, count in rows}


def _purge_flights(flight_ids: list[int]) -> dict:
	"""Favoritos, reservas y vuelos, en ese orden. Sin commit."""

	if not flight_ids:
		return {"favorites": 0, "bookings": 0, "flights": 0}

	favorites = Favorite.query.filter(Favorite.flight_id.in_(flight_ids)).delete(synchronize_session=False)
	bookings = Booking.query.filter(Booking.flight_id.in_(flight_ids)).delete(synchronize_session=False)
	flights = Flight.query.filter(Flight.id.in_(flight_ids)).delete(synchronize_session=False)
	return {"favorites": favorites, "bookings": bookings, "flights": flights}


def _purge_user_dependents(user_id: int) -> dict:
	"""Reseñas, favoritos y reservas del usuario. Sin commit."""

	reviews = Review.query.filter(Review.user_id == user_id).delete(synchronize_session=False)
	favorites = Favorite.query.filter(Favorite.user_id == user_id).delete(synchronize_session=False)
	bookings = Booking.query.filter(Booking.user_id == user_id).delete(synchronize_session=False)
	return {"reviews": reviews, "favorites": favorites, "bookings": bookings}


def _delete_user_row(user_id: int) -> None:
	# Vuelos creados por el usuario que sobreviven (p.ej. de un admin) quedan sin creador
	Flight.query.filter(Flight.created_by == user_id).update(
		{Flight.created_by: None}, synchronize_session=False
	)
	AirlineProfile.query.filter(AirlineProfile.user_id == user_id).delete(synchronize_session=False)
	deleted = User.query.filter(User.id == user_id).delete(synchronize_session=False)
	if deleted != 1:
		# Otra request lo borró primero
		raise NotFoundError("Usuario no encontrado")


def _run_in_transaction(fn):
	try:
		result = fn()
		db.session.commit()
		return result
	except Exception:
		db.session.rollback()
		raise


# ---------------------------------------------------------------------------
# Aerolíneas
# ---------------------------------------------------------------------------

def find_blocking_flights(user: User, now: datetime | None = None) -> list[dict]:
	now = now or datetime.now()
	flights = owned_flights_query(user).all()
	futuros = [f for f in flights if lifecycle_service.is_future_flight(f, now)]
	counts = _active_booking_counts([f.id for f in futuros])

	blocking = []
	for f in futuros:
		count = counts.get(f.id, 0)
		if count > 0:
			blocking.append(
				{
					"flightId": f.id,
					"origin": f.origin,
					"destination": f.destination,
					"date": f.date.isoformat() if f.date else None,
					"departureTime": f.departure_time,
					"activeBookings": count,
				}
			)
	return blocking


def delete_airline_user(user_id: int) -> dict:
	"""Borra una aerolínea (usuario role=airline + perfil) y todo lo que cuelga de ella."""

	user: User | None = db.session.get(User, user_id)
	if not user:
		raise NotFoundError("Aerolínea no encontrada")
	if user.role != ROLE_AIRLINE:
		raise ApiError("El usuario no es una aerolínea", 400)

	blocking = find_blocking_flights(user)
	if blocking:
		first = blocking[0]
		raise ConflictError(
			f"No se puede eliminar la aerolínea: el vuelo {first['flightId']} "
			f"({first['origin']} - {first['destination']}) tiene "
			f"{first['activeBookings']} reserva(s) activa(s).",
			status_code=DELETE_BLOCKED_STATUS,
			payload={"blockingFlights": blocking},
		)

	name = user.name
	picture = user.profile_picture
	flight_ids = [f.id for f in owned_flights_query(user).all()]
	image_urls = [
		url for (url,) in db.session.query(Flight.image_url).filter(Flight.id.in_(flight_ids)).all() if url
	] if flight_ids else []

	def _cascade():
		summary = _purge_flights(flight_ids)
		summary["airlineReviews"] = (
			Review.query.filter(Review.airline == name).delete(synchronize_session=False)
		)
		summary.update({f"own_{k}": v for k, v in _purge_user_dependents(user_id).items()})
		_delete_user_row(user_id)
		return summary

	summary = _run_in_transaction(_cascade)

	current_app.logger.info("Aerolínea '%s' (usuario %s) eliminada: %s", name, user_id, summary)

	remove_upload(picture)
	for url in image_urls:
		remove_upload(url)

	return {"deleted": True, "airline": name, "summary": summary}


def delete_airline(airline_id: int) -> dict:
	profile: AirlineProfile | None = db.session.get(AirlineProfile, airline_id)
	if not profile:
		raise NotFoundError("Aerolínea no encontrada")
	return delete_airline_user(profile.user_id)


# ---------------------------------------------------------------------------
# Usuarios
# ---------------------------------------------------------------------------

def find_blocking_bookings(user_id: int) -> list[dict]:
	bookings = (
		Booking.query.filter(Booking.user_id == user_id, Booking.status == BOOKING_ACTIVE).all()
	)
	# El estado del vuelo tiene que estar al día antes de decidir
	lifecycle_service.expire_flights({b.flight for b in bookings if b.flight is not None})

	return [
		{
			"bookingId": b.id,
			"flightId": b.flight_id,
			"date": b.flight.date.isoformat() if b.flight.date else None,
		}
		for b in bookings
		if b.flight is not None and b.flight.status == FLIGHT_ACTIVE
	]


def delete_user(user_id: int, acting_user_id: int | None = None) -> dict:
	if acting_user_id is not None and acting_user_id == user_id:
		raise ApiError("No puedes eliminar tu propia cuenta", 400)

	user: User | None = db.session.get(User, user_id)
	if not user:
		raise NotFoundError("Usuario no encontrado")

	if user.role == ROLE_AIRLINE:
		return delete_airline_user(user_id)

	blocking = find_blocking_bookings(user_id)
	if blocking:
		raise ConflictError(
			f"No se puede eliminar la cuenta: tiene {len(blocking)} reserva(s) activa(s) en vuelos vigentes.",
			status_code=DELETE_BLOCKED_STATUS,
			payload={"blockingBookings": blocking},
		)

	picture = user.profile_picture

	def _cascade():
		summary = _purge_user_dependents(user_id)
		_delete_user_row(user_id)
		return summary

	summary = _run_in_transaction(_cascade)
	current_app.logger.info("Usuario %s eliminado: %s", user_id, summary)

	remove_upload(picture)
	return {"deleted": True, "summary": summary}


# ---------------------------------------------------------------------------
# Vuelos
# ---------------------------------------------------------------------------

def actor_owns_flight(actor: User, flight: Flight) -> bool:
	return flight.airline == actor.name or flight.created_by == actor.id


def delete_flight(flight_id: int, actor: User) -> dict:
	flight: Flight | None = db.session.get(Flight, flight_id)
	if not flight:
		raise NotFoundError("Vuelo no encontrado")

	if actor.role == ROLE_AIRLINE and not actor_owns_flight(actor, flight):
		raise AuthorizationError("No puedes eliminar vuelos de otra aerolínea")

	# Reservas de un vuelo ya partido pasan a Inactivo antes de contar
	lifecycle_service.sync_booking_statuses(
		Booking.query.filter(Booking.flight_id == flight.id, Booking.status == BOOKING_ACTIVE).all()
	)

	activos =_active_booking_counts([flight.id]).get(flight.id, 0)
	if activos > 0:
		raise ConflictError(
			f"No se puede eliminar el vuelo: tiene {activos} reserva(s) activa(s).",
			status_code=DELETE_BLOCKED_STATUS,
			payload={"flightId": flight.id, "activeBookings": activos},
		)

	image_url = flight.image_url

	def _cascade():
		summary = _purge_flights([flight_id])
		if summary["flights"] != 1:
			raise NotFoundError("Vuelo no encontrado")
		return summary

	summary = _run_in_transaction(_cascade)

	current_app.logger.info("Vuelo %s eliminado: %s", flight_id, summary)
	remove_upload(image_url)
	return {"deleted": True, "summary": summary}
