from __future__ import annotations

from datetime import date, datetime

from flask import current_app
from werkzeug.datastructures import FileStorage

from aerobook.extensions import db
from aerobook.models.flight import Flight, FLIGHT_ACTIVE, FLIGHT_INACTIVE
from aerobook.models.user import User, ROLE_ADMIN, ROLE_AIRLINE
from aerobook.services import deletion_service, lifecycle_service
from aerobook.utils.errors import ApiError, AuthorizationError, NotFoundError
from aerobook.utils.uploads import FLIGHT_IMAGES, remove_upload, save_image


SORT_OPTIONS = {
    "priceAsc": Flight.base_price.asc(),
    "priceDesc": Flight.base_price.desc(),
}


def _parse_date(value: str) -> date:
    try:
        return datetime.strptime(value.strip(), "%Y-%m-%d").date()
    except ValueError:
        raise ApiError("Fecha inválida, usa el formato YYYY-MM-DD", 400)


def list_flights(
    origin: str | None = None,
    destination: str | None = None,
    departure_date: str | None = None,
    airlines: list[str] | None = None,
    sort: str | None = None,
) -> list[Flight]:
    """Listado público con filtros. Aplica la expiración lazy antes de devolver."""

    query = Flight.query

    if origin:
        query = query.filter(Flight.origin.like(f"{origin}%"))
    if destination:
        query = query.filter(Flight.destination.like(f"{destination}%"))
    if departure_date:
        query = query.filter(Flight.date == _parse_date(departure_date))
    if airlines:
        query = query.filter(Flight.airline.in_(airlines))

    order = SORT_OPTIONS.get(sort or "", SORT_OPTIONS["priceAsc"])
    flights = query.order_by(order, Flight.id.asc()).all()

    lifecycle_service.expire_flights(flights)
    return flights


def list_featured_flights() -> list[Flight]:
    flights = (
        Flight.query.filter(Flight.is_featured.is_(True), Flight.status == FLIGHT_ACTIVE)
        .order_by(Flight.date.asc(), Flight.departure_time.asc())
        .all()
    )
    lifecycle_service.expire_flights(flights)
    return [f for f in flights if f.status == FLIGHT_ACTIVE]


def list_manageable_flights(actor: User) -> list[Flight]:
    """Admin ve todos los vuelos; una aerolínea solo los suyos."""

    if actor.role == ROLE_ADMIN:
        query = Flight.query
    elif actor.role == ROLE_AIRLINE:
        query = deletion_service.owned_flights_query(actor)
    else:
        raise AuthorizationError("Acceso denegado - Se requiere rol de administrador o aerolínea")

    flights = query.order_by(Flight.date.desc(), Flight.id.desc()).all()
    lifecycle_service.expire_flights(flights)
    return flights


def get_flight_or_404(flight_id: int) -> Flight:
    flight = db.session.get(Flight, flight_id)
    if not flight:
        raise NotFoundError("Vuelo no encontrado")
    lifecycle_service.expire_flights([flight])
    return flight


def _ensure_can_manage(actor: User, flight: Flight) -> None:
    if actor.role == ROLE_AIRLINE and not deletion_service.actor_owns_flight(actor, flight):
        raise AuthorizationError("No puedes modificar vuelos de otra aerolínea")


def _resolve_airline_label(actor: User, data: dict) -> str:
    if actor.role == ROLE_AIRLINE:
        return actor.name
    label = (data.get("airline") or "").strip()
    if not label:
        raise ApiError("Todos los campos son obligatorios", 400, errors={"airline": ["Campo requerido."]})
    return label


def _apply_fields(flight: Flight, data: dict, airline_label: str) -> None:
    flight.airline = airline_label
    flight.origin = data["origin"].strip()
    flight.destination = data["destination"].strip()
    flight.date = data["date"]
    flight.departure_time = data["departure_time"].strip()
    flight.arrival_time = data["arrival_time"].strip()
    flight.capacity = int(data["capacity"])
    flight.base_price = float(data["base_price"])


def create_flight(data: dict, actor: User, image: FileStorage | None = None) -> Flight:
    flight = Flight(status=FLIGHT_ACTIVE, created_by=actor.id, is_featured=False)
    _apply_fields(flight, data, _resolve_airline_label(actor, data))

    image_url = None
    if image is not None and image.filename:
        image_url = save_image(image, FLIGHT_IMAGES, "flight")
        flight.image_url = image_url

    db.session.add(flight)
    try:
        db.session.commit()
    except Exception:
        db.session.rollback()
        remove_upload(image_url)
        raise

    current_app.logger.info(
        "Vuelo %s creado por usuario %s (%s %s-%s)",
        flight.id,
        actor.id,
        flight.airline,
        flight.origin,
        flight.destination,
    )
    return flight


def update_flight(flight_id: int, data: dict, actor: User, image: FileStorage | None = None) -> Flight:
    flight = db.session.get(Flight, flight_id)
    if not flight:
        raise NotFoundError("Vuelo no encontrado")
    _ensure_can_manage(actor, flight)

    _apply_fields(flight, data, _resolve_airline_label(actor, data))

    old_image = None
    new_image = None
    if image is not None and image.filename:
        new_image = save_image(image, FLIGHT_IMAGES, "flight")
        old_image = flight.image_url
        flight.image_url = new_image

    try:
        db.session.commit()
    except Exception:
        db.session.rollback()
        remove_upload(new_image)
        raise

    if old_image:
        remove_upload(old_image)
    return flight


def toggle_flight_status(flight_id: int, actor: User, status: str | None = None) -> dict:
    """Sin `status` alterna Activo/Inactivo; con `status` lo fija."""

    flight = db.session.get(Flight, flight_id)
    if not flight:
        raise NotFoundError("Vuelo no encontrado")
    _ensure_can_manage(actor, flight)

    if status is None:
        status = FLIGHT_INACTIVE if flight.status == FLIGHT_ACTIVE else FLIGHT_ACTIVE

    result = lifecycle_service.set_flight_status(flight, status)
    result["flight"] = flight
    return result


def set_featured(flight_id: int, value: bool | None = None) -> Flight:
    flight = db.session.get(Flight, flight_id)
    if not flight:
        raise NotFoundError("Vuelo no encontrado")

    flight.is_featured = (not flight.is_featured) if value is None else bool(value)
    db.session.commit()
    return flight


def delete_flight(flight_id: int, actor: User) -> dict:
    return deletion_service.delete_flight(flight_id, actor)
