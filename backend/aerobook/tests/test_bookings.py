from aerobook.models.booking import Booking, BOOKING_ACTIVE, BOOKING_CANCELLED
from aerobook.models.flight import FLIGHT_INACTIVE


def _pasajeros(n: int) -> list[dict]:
	return [{"firstName": f"Nombre{i}", "lastName": "Test", "dni": f"4000000{i}"} for i in range(n)]


def test_crear_reserva_cuenta_pasajeros(client, make_user, make_flight, auth_header):
	u = make_user("Viajero")
	f = make_flight(days=20, base_price=150)

	resp = client.post(
		"/api/bookings",
		json={"flightId": f.id, "passengers": _pasajeros(3), "totalPrice": 450},
		headers=auth_header(u.id),
	)
	assert resp.status_code == 201
	data = resp.get_json()["data"]
	assert data["passengerCount"] == 3
	assert data["status"] == BOOKING_ACTIVE
	assert data["flight"]["id"] == f.id

	b = Booking.query.filter_by(id=data["id"]).one()
	assert b.passenger_count == len(b.passengers) == 3
	assert b.user_id == u.id


def test_crear_reserva_vuelo_inexistente(client, make_user, auth_header):
	u = make_user("Viajero")
	resp = client.post(
		"/api/bookings",
		json={"flightId": 9999, "passengers": _pasajeros(1), "totalPrice": 100},
		headers=auth_header(u.id),
	)
	assert resp.status_code == 404


def test_crear_reserva_pasajeros_invalidos(client, make_user, make_flight, auth_header):
	u = make_user("Viajero")
	f = make_flight(days=20)

	for passengers in ([], "Juan", None, {"firstName": "Juan"}, ["Juan"]):
		resp = client.post(
			"/api/bookings",
			json={"flightId": f.id, "passengers": passengers, "totalPrice": 100},
			headers=auth_header(u.id),
		)
		assert resp.status_code == 400, passengers

	assert Booking.query.count() == 0


def test_crear_reserva_total_invalido(client, make_user, make_flight, auth_header):
	u = make_user("Viajero")
	f = make_flight(days=20)

	for total in ("NaN", float("nan"), "Infinity", "abc", 0, -10):
		resp = client.post(
			"/api/bookings",
			json={"flightId": f.id, "passengers": _pasajeros(1), "totalPrice": total},
			headers=auth_header(u.id),
		)
		assert resp.status_code == 400, total
		assert resp.get_json()["success"] is False

	assert Booking.query.count() == 0


def test_crear_reserva_vuelo_inactivo(client, make_user, make_flight, auth_header):
	u = make_user("Viajero")
	f = make_flight(days=20, status=FLIGHT_INACTIVE)

	resp = client.post(
		"/api/bookings",
		json={"flightId": f.id, "passengers": _pasajeros(1), "totalPrice": 100},
		headers=auth_header(u.id),
	)
	assert resp.status_code == 400


def test_total_distinto_se_guarda_y_se_registra(client, make_user, make_flight, auth_header, caplog):
	u = make_user("Viajero")
	f = make_flight(days=20, base_price=100)

	resp = client.post(
		"/api/bookings",
		json={"flightId": f.id, "passengers": _pasajeros(2), "totalPrice": 1},
		headers=auth_header(u.id),
	)
	assert resp.status_code == 201
	assert resp.get_json()["data"]["totalPrice"] == 1.0
	assert "total distinto" in caplog.text


def test_reserva_requiere_token(client, make_flight):
	f = make_flight(days=20)
	resp = client.post("/api/bookings", json={"flightId": f.id, "passengers": _pasajeros(1), "totalPrice": 100})
	assert resp.status_code == 401


def test_ver_reserva_ajena_prohibido(client, make_admin, make_user, make_flight, make_booking, auth_header):
	admin = make_admin()
	duenio = make_user("Duenio")
	ajeno = make_user("Ajeno")
	f = make_flight(days=20)
	b = make_booking(duenio.id, f.id)

	assert client.get(f"/api/bookings/{b.id}", headers=auth_header(ajeno.id)).status_code == 403
	assert client.get(f"/api/bookings/{b.id}", headers=auth_header(duenio.id)).status_code == 200
	assert client.get(f"/api/bookings/{b.id}", headers=auth_header(admin.id)).status_code == 200
	assert client.get("/api/bookings/9999", headers=auth_header(admin.id)).status_code == 404


def test_listados_de_reservas(client, make_admin, make_user, make_flight, make_booking, auth_header):
	admin = make_admin()
	u1 = make_user("Uno")
	u2 = make_user("Dos")
	f = make_flight(days=20)
	make_booking(u1.id, f.id)
	make_booking(u2.id, f.id)

	mias = client.get("/api/bookings/my-bookings", headers=auth_header(u1.id)).get_json()["data"]
	assert [b["userId"] for b in mias] == [u1.id]

	assert client.get("/api/bookings", headers=auth_header(u1.id)).status_code == 403

	todas = client.get("/api/bookings", headers=auth_header(admin.id)).get_json()["data"]
	assert len(todas) == 2

	de_u2 = client.get(f"/api/bookings/user/{u2.id}", headers=auth_header(admin.id)).get_json()["data"]
	assert [b["userId"] for b in de_u2] == [u2.id]


def test_cancelar_reserva(client, make_user, make_flight, make_booking, auth_header):
	u = make_user("Viajero")
	otro = make_user("Otro")
	f = make_flight(days=20)
	b = make_booking(u.id, f.id)

	assert client.patch(f"/api/bookings/{b.id}/cancel", headers=auth_header(otro.id)).status_code == 403

	resp = client.patch(f"/api/bookings/{b.id}/cancel", headers=auth_header(u.id))
	assert resp.status_code == 200
	assert resp.get_json()["data"]["status"] == BOOKING_CANCELLED

	# Ya cancelada
	assert client.patch(f"/api/bookings/{b.id}/cancel", headers=auth_header(u.id)).status_code == 400
