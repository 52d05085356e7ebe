"""Transiciones de estado de vuelos calculadas al leer (expiración lazy).

No hay scheduler: el estado se corrige en cada lectura de una colección de
vuelos, o con el comando `flask expire-flights`. Entre lecturas un vuelo ya
partido puede verse todavía como "Activo"; la ventana depende de la
frecuencia de requests.

Los horarios son naive (hora local, sin zona), igual que se guardan.
"""

from datetime import datetime, time

from flask import current_app

from aerobook.extensions import db
from aerobook.models.booking import Booking, BOOKING_ACTIVE, BOOKING_INACTIVE
from aerobook.models.favorite import Favorite
from aerobook.models.flight import Flight, FLIGHT_ACTIVE, FLIGHT_INACTIVE, FLIGHT_STATUSES
from aerobook.utils.errors import ApiError


def parse_hhmm(value: str | None) -> time | None:
    raw = str(value or "").strip()
    for fmt in ("%H:%M", "%H:%M:%S"):
        try:
            return datetime.strptime(raw, fmt).time()
        except ValueError:
            continue
    return None


def departure_instant(flight: Flight) -> datetime | None:
    if flight.date is None:
        return None
    hora = parse_hhmm(flight.departure_time)
    if hora is None:
        return None
    return datetime.combine(flight.date, hora)


def compute_effective_status(flight: Flight, now: datetime) -> str:
    """Estado que el vuelo debería tener en `now`. Función pura, no escribe."""

    if flight.status == FLIGHT_INACTIVE:
        return FLIGHT_INACTIVE
    salida = departure_instant(flight)
    if salida is not None and salida < now:
        return FLIGHT_INACTIVE
    return FLIGHT_ACTIVE


def is_future_flight(flight: Flight, now: datetime) -> bool:
    salida = departure_instant(flight)
    return salida is not None and salida > now


def expire_flights(flights, now: datetime | None = None) -> int:
    """Marca Inactivo los vuelos ya partidos. Devuelve cuántos cambió."""

    now = now or datetime.now()
    changed = 0
    for flight in flights:
        if flight.status != FLIGHT_ACTIVE:
            continue
        if compute_effective_status(flight, now) == FLIGHT_INACTIVE:
            flight.status = FLIGHT_INACTIVE
            changed += 1

    if changed:
        db.session.commit()
        current_app.logger.info("Expiración lazy: %s vuelo(s) pasados a Inactivo", changed)
    return changed


def sweep_expired_flights(now: datetime | None = None) -> int:
    activos = Flight.query.filter(Flight.status == FLIGHT_ACTIVE).all()
    return expire_flights(activos, now=now)


def set_flight_status(flight: Flight, new_status: str) -> dict:
    """Cambio explícito de estado (admin / aerolínea).

    Activo -> Inactivo: las reservas activas del vuelo pasan a Inactivo.
    Inactivo -> Activo: las reservas NO se reactivan.
    """

    if new_status not in FLIGHT_STATUSES:
        raise ApiError(f"Estado inválido. Usa: {', '.join(FLIGHT_STATUSES)}", 400)

    bookings_updated = 0
    previous = flight.status
    flight.status = new_status

    if previous == FLIGHT_ACTIVE and new_status == FLIGHT_INACTIVE:
        bookings_updated = (
            Booking.query.filter(
                Booking.flight_id == flight.id,
                Booking.status == BOOKING_ACTIVE,
            ).update({Booking.status: BOOKING_INACTIVE}, synchronize_session=False)
        )

    try:
        db.session.commit()
    except Exception:
        db.session.rollback()
        raise

    current_app.logger.info(
        "Vuelo %s: %s -> %s (%s reserva(s) desactivadas)",
        flight.id,
        previous,
        new_status,
        bookings_updated,
    )
    return {"previous": previous, "status": new_status, "bookings_updated": int(bookings_updated or 0)}


def sync_booking_statuses(bookings, now: datetime | None = None) -> int:
    """Reservas activas de vuelos ya inactivos pasan a Inactivo (nunca al revés)."""

    now = now or datetime.now()
    expire_flights({b.flight for b in bookings if b.flight is not None}, now=now)

    changed = 0
    for booking in bookings:
        if booking.status != BOOKING_ACTIVE or booking.flight is None:
            continue
        if compute_effective_status(booking.flight, now) == FLIGHT_INACTIVE:
            booking.status = BOOKING_INACTIVE
            changed += 1

    if changed:
        db.session.commit()
    return changed


def prune_stale_favorites(user_id: int, now: datetime | None = None) -> int:
    """Borra los favoritos del usuario cuyo vuelo ya está inactivo."""

    now = now or datetime.now()
    favoritos = Favorite.query.filter(Favorite.user_id == user_id).all()
    expire_flights({f.flight for f in favoritos if f.flight is not None}, now=now)

    stale_ids = [
        f.id
        for f in favoritos
        if f.flight is None or f.flight.status == FLIGHT_INACTIVE
    ]
    if not stale_ids:
        return 0

    removed = (
        Favorite.query.filter(Favorite.id.in_(stale_ids))
        .delete(synchronize_session=False)
    )
    db.session.commit()
    current_app.logger.info("Favoritos obsoletos eliminados para usuario %s: %s", user_id, removed)
    return int(removed or 0)
