import os
import tempfile
from datetime import date, timedelta

import pytest

from sqlalchemy.pool import StaticPool
from flask_jwt_extended import create_access_token

from aerobook import create_app
from aerobook.config import TestConfig as BaseTestConfig
from aerobook.extensions import db, bcrypt

# Importar modelos para que SQLAlchemy registre mappers/tablas
import aerobook.models  # noqa: F401
from aerobook.models.airline import AirlineProfile
from aerobook.models.booking import Booking, BOOKING_ACTIVE
from aerobook.models.flight import Flight, FLIGHT_ACTIVE
from aerobook.models.user import User, ROLE_USER, ROLE_ADMIN, ROLE_AIRLINE


class PytestConfig(BaseTestConfig):
	SQLALCHEMY_DATABASE_URI = "sqlite://"
	SQLALCHEMY_ENGINE_OPTIONS = {
		"connect_args": {"check_same_thread": False},
		"poolclass": StaticPool,
	}
	JWT_SECRET_KEY = "test-secret"
	UPLOADS_DIR = os.path.join(tempfile.gettempdir(), "aerobook-test-uploads")


@pytest.fixture()
def app(tmp_path):
	# Una BD en memoria nueva por test
	app = create_app(PytestConfig)
	app.config["UPLOADS_DIR"] = str(tmp_path)
	with app.app_context():
		db.create_all()
		yield app
		db.session.remove()
		db.drop_all()


@pytest.fixture()
def client(app):
	return app.test_client()


@pytest.fixture()
def db_session(app):
	yield db.session
	db.session.rollback()


@pytest.fixture()
def make_user(db_session):
	def _make_user(
		name: str,
		email: str | None = None,
		role: str = ROLE_USER,
		password: str = "Passw0rd!",
		is_active: bool = True,
	):
		u = User(
			name=name,
			email=email or f"{name.lower().replace(' ', '.')}@test.com",
			password=bcrypt.generate_password_hash(password).decode("utf-8"),
			role=role,
			is_active=is_active,
		)
		db_session.add(u)
		db_session.commit()
		return u

	return _make_user


@pytest.fixture()
def make_admin(make_user):
	def _make_admin(name: str = "Admin"):
		return make_user(name, role=ROLE_ADMIN)

	return _make_admin


@pytest.fixture()
def make_airline(db_session, make_user):
	"""Usuario role=airline con su perfil; devuelve el User."""

	def _make_airline(name: str, code: str | None = None, cuit: str | None = None):
		u = make_user(name, role=ROLE_AIRLINE)
		profile = AirlineProfile(
			user_id=u.id,
			code=code or name[:2].upper(),
			cuit=cuit or f"30-{u.id:08d}-1",
		)
		db_session.add(profile)
		db_session.commit()
		return u

	return _make_airline


@pytest.fixture()
def make_flight(db_session):
	def _make_flight(
		airline: str = "AirX",
		days: int = 30,
		departure_time: str = "10:00",
		arrival_time: str = "12:30",
		status: str = FLIGHT_ACTIVE,
		created_by: int | None = None,
		base_price: float = 100.0,
		origin: str = "Buenos Aires (EZE)",
		destination: str = "Córdoba (COR)",
		is_featured: bool = False,
	):
		f = Flight(
			airline=airline,
			origin=origin,
			destination=destination,
			date=date.today() + timedelta(days=days),
			departure_time=departure_time,
			arrival_time=arrival_time,
			capacity=100,
			base_price=base_price,
			status=status,
			created_by=created_by,
			is_featured=is_featured,
		)
		db_session.add(f)
		db_session.commit()
		return f

	return _make_flight


@pytest.fixture()
def make_booking(db_session):
	def _make_booking(user_id: int, flight_id: int, passengers: int = 1, status: str = BOOKING_ACTIVE):
		lista = [{"firstName": f"Pasajero {i}", "dni": f"{30000000 + i}"} for i in range(passengers)]
		b = Booking(
			user_id=user_id,
			flight_id=flight_id,
			passengers=lista,
			passenger_count=len(lista),
			total_price=100 * len(lista),
			status=status,
		)
		db_session.add(b)
		db_session.commit()
		return b

	return _make_booking


@pytest.fixture()
def make_token(app):
	def _make_token(user_id: int) -> str:
		return create_access_token(identity=str(user_id))

	return _make_token


@pytest.fixture()
def auth_header(make_token):
	def _auth_header(user_id: int) -> dict:
		token = make_token(user_id)
		return {"Authorization": f"Bearer {token}"}

	return _auth_header
