from sqlalchemy.exc import IntegrityError

from aerobook.extensions import db
from aerobook.models.favorite import Favorite
from aerobook.models.flight import Flight
from aerobook.services import lifecycle_service
from aerobook.utils.errors import ConflictError, NotFoundError


def compute_duration(departure_time: str | None, arrival_time: str | None) -> str:
    """Duración "Xh Ym"; si la llegada es menor que la salida, es al día siguiente."""

    salida = lifecycle_service.parse_hhmm(departure_time)
    llegada = lifecycle_service.parse_hhmm(arrival_time)
    if salida is None or llegada is None:
        return "—"

    dep_minutes = salida.hour * 60 + salida.minute
    arr_minutes = llegada.hour * 60 + llegada.minute
    if arr_minutes < dep_minutes:
        arr_minutes += 24 * 60

    total = arr_minutes - dep_minutes
    return f"{total // 60}h {total % 60}m"


def add_favorite(user_id: int, flight_id: int) -> Favorite:
    if not db.session.get(Flight, flight_id):
        raise NotFoundError("Vuelo inexistente")

    if Favorite.query.filter_by(user_id=user_id, flight_id=flight_id).first():
        raise ConflictError("Ya está en favoritos")

    favorito = Favorite(user_id=user_id, flight_id=flight_id)
    db.session.add(favorito)
    try:
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        raise ConflictError("Ya está en favoritos")
    return favorito


def remove_favorite(user_id: int, flight_id: int) -> None:
    rows = (
        Favorite.query.filter_by(user_id=user_id, flight_id=flight_id)
        .delete(synchronize_session=False)
    )
    if not rows:
        db.session.rollback()
        raise NotFoundError("No estaba en favoritos")
    db.session.commit()


def list_favorite_flights(user_id: int) -> list[Flight]:
    """Vuelos favoritos vigentes; los de vuelos inactivos se podan al leer."""

    lifecycle_service.prune_stale_favorites(user_id)
    favoritos = (
        Favorite.query.filter(Favorite.user_id == user_id)
        .order_by(Favorite.created_at.desc(), Favorite.id.desc())
        .all()
    )
    return [f.flight for f in favoritos if f.flight is not None]
