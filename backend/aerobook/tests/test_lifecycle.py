from datetime import date, datetime, timedelta

from aerobook.models.booking import Booking, BOOKING_ACTIVE, BOOKING_INACTIVE, BOOKING_CANCELLED
from aerobook.models.favorite import Favorite
from aerobook.models.flight import Flight, FLIGHT_ACTIVE, FLIGHT_INACTIVE
from aerobook.services import lifecycle_service
from aerobook.services.favorite_service import compute_duration


def test_estado_efectivo_funcion_pura():
	now = datetime(2026, 5, 10, 12, 0)
	vuelo = Flight(date=date(2026, 5, 10), departure_time="11:59", status=FLIGHT_ACTIVE)
	assert lifecycle_service.compute_effective_status(vuelo, now) == FLIGHT_INACTIVE

	vuelo.departure_time = "12:01"
	assert lifecycle_service.compute_effective_status(vuelo, now) == FLIGHT_ACTIVE

	vuelo.departure_time = "12:01:30"
	assert lifecycle_service.compute_effective_status(vuelo, now) == FLIGHT_ACTIVE

	# Hora ilegible: nunca expira sola
	vuelo.departure_time = "mediodía"
	assert lifecycle_service.compute_effective_status(vuelo, now) == FLIGHT_ACTIVE

	# Inactivo no vuelve a Activo
	futuro = Flight(date=date(2027, 1, 1), departure_time="10:00", status=FLIGHT_INACTIVE)
	assert lifecycle_service.compute_effective_status(futuro, now) == FLIGHT_INACTIVE


def test_vuelo_de_ayer_se_lee_inactivo(client, make_flight, db_session):
	f = make_flight(days=-1, status=FLIGHT_ACTIVE)

	resp = client.get("/api/flights")
	assert resp.status_code == 200
	item = next(x for x in resp.get_json()["data"] if x["id"] == f.id)
	assert item["status"] == FLIGHT_INACTIVE

	db_session.expire_all()
	assert db_session.get(Flight, f.id).status == FLIGHT_INACTIVE


def test_toggle_es_asimetrico(client, make_admin, make_user, make_flight, make_booking, auth_header, db_session):
	admin = make_admin()
	u = make_user("Viajero")
	f = make_flight(days=30)
	activa = make_booking(u.id, f.id)
	cancelada = make_booking(u.id, f.id, status=BOOKING_CANCELLED)

	resp = client.patch(f"/api/flights/{f.id}/toggle-status", headers=auth_header(admin.id))
	assert resp.status_code == 200
	data = resp.get_json()["data"]
	assert data["flight"]["status"] == FLIGHT_INACTIVE
	assert data["bookingsUpdated"] == 1

	db_session.expire_all()
	assert db_session.get(Booking, activa.id).status == BOOKING_INACTIVE
	assert db_session.get(Booking, cancelada.id).status == BOOKING_CANCELLED

	resp = client.patch(f"/api/flights/{f.id}/toggle-status", headers=auth_header(admin.id))
	assert resp.status_code == 200
	assert resp.get_json()["data"]["flight"]["status"] == FLIGHT_ACTIVE

	db_session.expire_all()
	assert db_session.get(Booking, activa.id).status == BOOKING_INACTIVE


def test_toggle_aerolinea_ajena_prohibido(client, make_airline, make_flight, auth_header):
	make_airline("AirX", code="AX")
	otra = make_airline("OtraAir", code="OT")
	f = make_flight(airline="AirX")

	resp = client.patch(f"/api/flights/{f.id}/toggle-status", headers=auth_header(otra.id))
	assert resp.status_code == 403


def test_favoritos_de_vuelos_inactivos_se_podan(client, make_user, make_flight, auth_header, db_session):
	u = make_user("Viajero")
	vigente = make_flight(days=10)
	pasado = make_flight(days=-1)
	db_session.add_all([
		Favorite(user_id=u.id, flight_id=vigente.id),
		Favorite(user_id=u.id, flight_id=pasado.id),
	])
	db_session.commit()

	resp = client.get("/api/favorites", headers=auth_header(u.id))
	assert resp.status_code == 200
	data = resp.get_json()["data"]
	assert [x["id"] for x in data] == [vigente.id]
	assert data[0]["duration"] == "2h 30m"

	assert Favorite.query.filter_by(user_id=u.id).count() == 1


def test_reservas_se_sincronizan_al_leer(client, make_user, make_flight, make_booking, auth_header, db_session):
	u = make_user("Viajero")
	f = make_flight(days=-1)
	b = make_booking(u.id, f.id)

	resp = client.get("/api/bookings/my-bookings", headers=auth_header(u.id))
	assert resp.status_code == 200
	assert resp.get_json()["data"][0]["status"] == BOOKING_INACTIVE

	db_session.expire_all()
	assert db_session.get(Booking, b.id).status == BOOKING_INACTIVE


def test_barrido_cli(app, make_flight):
	pasado = make_flight(days=-5)
	futuro = make_flight(days=5)

	runner = app.test_cli_runner()
	result = runner.invoke(args=["expire-flights"])
	assert "1 vuelo(s)" in result.output

	assert Flight.query.filter_by(id=pasado.id).one().status == FLIGHT_INACTIVE
	assert Flight.query.filter_by(id=futuro.id).one().status == FLIGHT_ACTIVE


def test_duracion_cruza_medianoche():
	assert compute_duration("23:15", "01:45") == "2h 30m"
	assert compute_duration("xx", "01:45") == "—"


def test_reserva_activa_vigente_no_cambia(make_user, make_flight, make_booking):
	u = make_user("Viajero")
	f = make_flight(days=3)
	b = make_booking(u.id, f.id)

	changed = lifecycle_service.sync_booking_statuses([b], now=datetime.now() + timedelta(minutes=1))
	assert changed == 0
	assert b.status == BOOKING_ACTIVE
