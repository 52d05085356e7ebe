from aerobook.models.review import Review


def test_crear_resena(client, make_airline, make_user, auth_header):
	make_airline("AirX", code="AX")
	u = make_user("Viajero")

	resp = client.post(
		"/api/reviews",
		json={"airline": "AirX", "rating": 4, "comment": "  Muy buen servicio  "},
		headers=auth_header(u.id),
	)
	assert resp.status_code == 201
	data = resp.get_json()["data"]
	assert data["comment"] == "Muy buen servicio"
	assert data["user"]["name"] == "Viajero"

	# Una por usuario y aerolínea
	resp = client.post(
		"/api/reviews",
		json={"airline": "AirX", "rating": 2, "comment": "Otra"},
		headers=auth_header(u.id),
	)
	assert resp.status_code == 409


def test_resena_validaciones(client, make_airline, make_user, auth_header):
	make_airline("AirX", code="AX")
	u = make_user("Viajero")

	malos = [
		{"airline": "AirX", "rating": 6, "comment": "x"},
		{"airline": "AirX", "rating": 0, "comment": "x"},
		{"airline": "AirX", "rating": 3, "comment": "   "},
		{"airline": "AirX", "rating": 3},
	]
	for payload in malos:
		assert client.post("/api/reviews", json=payload, headers=auth_header(u.id)).status_code == 400, payload

	resp = client.post(
		"/api/reviews",
		json={"airline": "NoExiste", "rating": 3, "comment": "x"},
		headers=auth_header(u.id),
	)
	assert resp.status_code == 404
	assert Review.query.count() == 0


def test_promedio_y_listado_por_aerolinea(client, make_airline, make_user, auth_header):
	make_airline("AirX", code="AX")
	u1 = make_user("Uno")
	u2 = make_user("Dos")

	client.post("/api/reviews", json={"airline": "AirX", "rating": 5, "comment": "a"}, headers=auth_header(u1.id))
	client.post("/api/reviews", json={"airline": "AirX", "rating": 2, "comment": "b"}, headers=auth_header(u2.id))

	lista = client.get("/api/reviews/airline/AirX").get_json()["data"]
	assert len(lista) == 2

	prom = client.get("/api/reviews/airline/AirX/average").get_json()["data"]
	assert prom == {"airline": "AirX", "averageRating": 3.5, "totalReviews": 2}

	vacio = client.get("/api/reviews/airline/Nadie/average").get_json()["data"]
	assert vacio["averageRating"] == 0
	assert vacio["totalReviews"] == 0

	assert len(client.get("/api/reviews").get_json()["data"]) == 2


def test_editar_y_borrar_solo_el_autor(client, make_airline, make_user, auth_header):
	make_airline("AirX", code="AX")
	autor = make_user("Autor")
	otro = make_user("Otro")

	rid = client.post(
		"/api/reviews",
		json={"airline": "AirX", "rating": 3, "comment": "ok"},
		headers=auth_header(autor.id),
	).get_json()["data"]["id"]

	assert client.put(f"/api/reviews/{rid}", json={"rating": 1}, headers=auth_header(otro.id)).status_code == 403
	assert client.delete(f"/api/reviews/{rid}", headers=auth_header(otro.id)).status_code == 403

	resp = client.put(f"/api/reviews/{rid}", json={"rating": 5, "comment": "Mejoró"}, headers=auth_header(autor.id))
	assert resp.status_code == 200
	assert resp.get_json()["data"]["rating"] == 5

	assert client.delete(f"/api/reviews/{rid}", headers=auth_header(autor.id)).status_code == 200
	assert Review.query.count() == 0
	assert client.delete(f"/api/reviews/{rid}", headers=auth_header(autor.id)).status_code == 404
