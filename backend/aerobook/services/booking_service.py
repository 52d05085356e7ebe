from __future__ import annotations

from decimal import Decimal, InvalidOperation

from flask import current_app

from aerobook.extensions import db
from aerobook.models.booking import Booking, BOOKING_ACTIVE, BOOKING_CANCELLED
from aerobook.models.flight import Flight, FLIGHT_INACTIVE
from aerobook.models.user import User, ROLE_ADMIN
from aerobook.services import lifecycle_service
from aerobook.utils.errors import ApiError, AuthorizationError, NotFoundError


def _parse_total(value) -> Decimal:
	try:
		total = Decimal(str(value))
		if not total.is_finite():
			raise InvalidOperation(value)
		total = total.quantize(Decimal("0.01"))
	except (InvalidOperation, ValueError, TypeError):
		raise ApiError("Datos de reserva incompletos", 400, errors={"totalPrice": ["Debe ser un número."]})
	if total <= 0:
		raise ApiError("Datos de reserva incompletos", 400, errors={"totalPrice": ["Debe ser mayor a 0."]})
	return total


def _validate_passengers(passengers) -> list:
	if not isinstance(passengers, list) or not passengers:
		raise ApiError(
			"Datos de reserva incompletos",
			400,
			errors={"passengers": ["Debe ser una lista con al menos un pasajero."]},
		)
	if not all(isinstance(p, dict) for p in passengers):
		raise ApiError(
			"Datos de reserva incompletos",
			400,
			errors={"passengers": ["Cada pasajero debe ser un objeto."]},
		)
	return passengers


def create_booking(data: dict, user_id: int) -> Booking:
	passengers = _validate_passengers(data.get("passengers"))
	if data.get("total_price") is None:
		raise ApiError("Datos de reserva incompletos", 400, errors={"totalPrice": ["Campo requerido."]})
	total = _parse_total(data.get("total_price"))

	flight: Flight | None = db.session.get(Flight, data.get("flight_id"))
	if not flight:
		raise NotFoundError("Vuelo no encontrado")

	lifecycle_service.expire_flights([flight])
	if flight.status == FLIGHT_INACTIVE:
		raise ApiError("El vuelo no está disponible para reservas", 400)

	count = len(passengers)

	# El total lo calcula el front; solo se registra si no coincide
	expected = (Decimal(str(flight.base_price)) * count).quantize(Decimal("0.01"))
	if expected != total:
		current_app.logger.warning(
			"Reserva con total distinto al esperado: vuelo %s, usuario %s, recibido %s, esperado %s",
			flight.id,
			user_id,
			total,
			expected,
		)

	booking = Booking(
		user_id=user_id,
		flight_id=flight.id,
		passengers=passengers,
		passenger_count=count,
		total_price=total,
		status=BOOKING_ACTIVE,
	)
	db.session.add(booking)

	try:
		db.session.commit()
	except Exception:
		db.session.rollback()
		raise

	current_app.logger.info("Reserva %s creada: vuelo %s, %s pasajero(s)", booking.id, flight.id, count)
	return booking


def _ensure_owner_or_admin(booking: Booking, user: User, message: str) -> None:
	if booking.user_id != user.id and user.role != ROLE_ADMIN:
		raise AuthorizationError(message)


def get_booking(booking_id: int, user: User) -> Booking:
	booking: Booking | None = db.session.get(Booking, booking_id)
	if not booking:
		raise NotFoundError("Reserva no encontrada")
	_ensure_owner_or_admin(booking, user, "No tienes permisos para ver esta reserva")

	lifecycle_service.sync_booking_statuses([booking])
	return booking


def _ordered(query) -> list[Booking]:
	bookings = query.order_by(Booking.purchase_date.desc(), Booking.id.desc()).all()
	lifecycle_service.sync_booking_statuses(bookings)
	return bookings


def list_my_bookings(user_id: int) -> list[Booking]:
	return _ordered(Booking.query.filter(Booking.user_id == user_id))


def list_user_bookings(user_id: int) -> list[Booking]:
	if not db.session.get(User, user_id):
		raise NotFoundError("Usuario no encontrado")
	return _ordered(Booking.query.filter(Booking.user_id == user_id))


def list_all_bookings() -> list[Booking]:
	return _ordered(Booking.query)


def cancel_booking(booking_id: int, user: User) -> Booking:
	booking: Booking | None = db.session.get(Booking, booking_id)
	if not booking:
		raise NotFoundError("Reserva no encontrada")
	_ensure_owner_or_admin(booking, user, "No tienes permisos para cancelar esta reserva")

	lifecycle_service.sync_booking_statuses([booking])
	if booking.status != BOOKING_ACTIVE:
		raise ApiError(f"Solo se pueden cancelar reservas activas (estado actual: {booking.status})", 400)

	booking.status = BOOKING_CANCELLED
	db.session.commit()

	current_app.logger.info("Reserva %s cancelada por usuario %s", booking.id, user.id)
	return booking
