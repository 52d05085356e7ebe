from flask import current_app
from sqlalchemy import or_

from aerobook.models.flight import Flight
from aerobook.models.review import Review
from aerobook.models.user import User


def propagate_airline_rename(user: User, old_name: str | None, new_name: str | None) -> dict:
	"""Actualiza la etiqueta `airline` de vuelos y reseñas tras renombrar una aerolínea.

	No hace commit: corre dentro de la transacción del cambio de nombre, así
	un fallo aquí revierte también el nombre.
	"""

	if not old_name or not new_name or old_name == new_name:
		return {"flights": 0, "reviews": 0}

	flights = (
		Flight.query.filter(or_(Flight.airline == old_name, Flight.created_by == user.id))
		.update({Flight.airline: new_name}, synchronize_session=False)
	)
	reviews = (
		Review.query.filter(Review.airline == old_name)
		.update({Review.airline: new_name}, synchronize_session=False)
	)

	current_app.logger.info(
		"Aerolínea renombrada '%s' -> '%s': %s vuelo(s), %s reseña(s)",
		old_name,
		new_name,
		flights,
		reviews,
	)
	return {"flights": int(flights or 0), "reviews": int(reviews or 0)}
