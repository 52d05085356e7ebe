import io
import os

from aerobook.models.airline import AirlineProfile
from aerobook.models.user import User


def test_admin_crea_aerolinea(client, make_admin, auth_header):
	admin = make_admin()

	resp = client.post(
		"/api/airlines",
		json={"name": "AirX", "email": "ops@airx.com", "password": "secreta1", "code": "ax", "cuit": "30-11111111-1"},
		headers=auth_header(admin.id),
	)
	assert resp.status_code == 201
	data = resp.get_json()["data"]
	assert data["code"] == "AX"
	assert data["name"] == "AirX"

	usuario = User.query.filter_by(id=data["userId"]).one()
	assert usuario.role == "airline"

	# La aerolínea puede iniciar sesión con su cuenta
	login = client.post("/auth/login", json={"email": "ops@airx.com", "password": "secreta1"})
	assert login.status_code == 200
	assert login.get_json()["data"]["user"]["role"] == "airline"

	lista = client.get("/api/airlines", headers=auth_header(admin.id)).get_json()["data"]
	assert [a["name"] for a in lista] == ["AirX"]


def test_aerolinea_duplicada(client, make_admin, make_airline, make_user, auth_header):
	admin = make_admin()
	make_airline("AirX", code="AX", cuit="30-1")
	make_user("Ocupado", email="ocupado@test.com")

	base = {"name": "Nueva", "email": "nueva@test.com", "password": "secreta1", "code": "NW", "cuit": "30-9"}
	for cambio in ({"name": "AirX"}, {"name": "Ocupado"}, {"email": "ocupado@test.com"}, {"code": "AX"}, {"cuit": "30-1"}):
		payload = {**base, **cambio}
		resp = client.post("/api/airlines", json=payload, headers=auth_header(admin.id))
		assert resp.status_code == 400, cambio

	assert AirlineProfile.query.count() == 1


def test_aerolineas_solo_admin(client, make_user, auth_header):
	u = make_user("Viajero")
	assert client.get("/api/airlines", headers=auth_header(u.id)).status_code == 403
	assert client.get("/api/airlines").status_code == 401


def test_perfil_propio_y_foto(client, app, make_user, auth_header):
	u = make_user("Viajero")

	resp = client.put(
		"/api/users/profile/me",
		data={
			"email": "nuevo@test.com",
			"profilePicture": (io.BytesIO(b"GIF89a"), "yo.gif", "image/gif"),
		},
		headers=auth_header(u.id),
		content_type="multipart/form-data",
	)
	assert resp.status_code == 200
	data = resp.get_json()["data"]
	assert data["email"] == "nuevo@test.com"
	primera = data["profilePicture"]
	assert primera.startswith("/uploads/profile-pictures/")

	ruta = os.path.join(app.config["UPLOADS_DIR"], "profile-pictures", os.path.basename(primera))
	assert os.path.isfile(ruta)

	# Reemplazo: la foto anterior se borra
	resp = client.put(
		"/api/users/profile/me",
		data={"profilePicture": (io.BytesIO(b"GIF89a"), "otra.gif", "image/gif")},
		headers=auth_header(u.id),
		content_type="multipart/form-data",
	)
	assert resp.status_code == 200
	assert not os.path.exists(ruta)

	# Solo imágenes
	resp = client.put(
		"/api/users/profile/me",
		data={"profilePicture": (io.BytesIO(b"hola"), "notas.txt", "text/plain")},
		headers=auth_header(u.id),
		content_type="multipart/form-data",
	)
	assert resp.status_code == 400


def test_admin_gestiona_usuarios(client, make_admin, make_user, auth_header):
	admin = make_admin()
	u = make_user("Viajero")

	lista = client.get("/api/users", headers=auth_header(admin.id)).get_json()["data"]
	assert {x["name"] for x in lista} == {"Admin", "Viajero"}

	resp = client.post(
		"/api/users",
		json={"name": "Operador", "email": "op@test.com", "password": "secreta1", "role": "admin"},
		headers=auth_header(admin.id),
	)
	assert resp.status_code == 201
	assert resp.get_json()["data"]["role"] == "admin"

	resp = client.put(f"/api/users/{u.id}", json={"name": "Viajera"}, headers=auth_header(admin.id))
	assert resp.status_code == 200
	assert resp.get_json()["data"]["name"] == "Viajera"

	resp = client.patch(f"/api/users/{u.id}/toggle-status", headers=auth_header(admin.id))
	assert resp.get_json()["data"]["isActive"] is False

	# Cuenta inactiva: el token deja de servir
	assert client.get("/api/users/profile/me", headers=auth_header(u.id)).status_code == 403

	resp = client.patch(f"/api/users/{u.id}/role", json={"role": "admin"}, headers=auth_header(admin.id))
	assert resp.get_json()["data"]["role"] == "admin"

	resp = client.patch(f"/api/users/{u.id}/role", json={"role": "airline"}, headers=auth_header(admin.id))
	assert resp.status_code == 400

	assert client.get("/api/users/9999", headers=auth_header(admin.id)).status_code == 404


def test_admin_protegido_contra_si_mismo(client, make_admin, auth_header):
	admin = make_admin()
	assert client.patch(f"/api/users/{admin.id}/toggle-status", headers=auth_header(admin.id)).status_code == 400
	assert client.patch(f"/api/users/{admin.id}/role", json={"role": "user"}, headers=auth_header(admin.id)).status_code == 400


def test_usuario_comun_no_administra(client, make_user, auth_header):
	u = make_user("Viajero")
	assert client.get("/api/users", headers=auth_header(u.id)).status_code == 403


def test_favoritos(client, make_user, make_flight, auth_header):
	u = make_user("Viajero")
	f = make_flight(days=5)

	assert client.post("/api/favorites", json={"flightId": 9999}, headers=auth_header(u.id)).status_code == 404
	assert client.post("/api/favorites", json={"flightId": f.id}, headers=auth_header(u.id)).status_code == 201
	assert client.post("/api/favorites", json={"flightId": f.id}, headers=auth_header(u.id)).status_code == 409

	assert client.delete(f"/api/favorites/{f.id}", headers=auth_header(u.id)).status_code == 200
	assert client.delete(f"/api/favorites/{f.id}", headers=auth_header(u.id)).status_code == 404
