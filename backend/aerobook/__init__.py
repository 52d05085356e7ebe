import pymysql
pymysql.install_as_MySQLdb()
import click
from flask import Flask, send_from_directory
from flask_cors import CORS
from pathlib import Path

from .config import DevConfig
from .extensions import db, migrate, jwt, ma, bcrypt
from .utils.errors import register_error_handlers
from .api import (
    auth_routes,
    user_routes,
    airline_routes,
    flight_routes,
    booking_routes,
    favorite_routes,
    review_routes,
)


def create_app(config_class=DevConfig) -> Flask:
    app = Flask(__name__)
    app.config.from_object(config_class)

    if not app.config.get("JWT_SECRET_KEY"):
        raise RuntimeError("JWT_SECRET_KEY no está configurado (revisa backend/.env)")

    # Carpeta para uploads (fotos de perfil e imágenes de vuelos)
    uploads_dir = Path(app.config["UPLOADS_DIR"]).resolve()
    uploads_dir.mkdir(parents=True, exist_ok=True)
    app.config["UPLOADS_DIR"] = str(uploads_dir)

    origins = [o.strip() for o in str(app.config.get("CORS_ORIGINS") or "").split(",") if o.strip()]
    CORS(
        app,
        resources={
            r"/api/*": {"origins": origins},
            r"/auth/*": {"origins": origins},
            r"/uploads/*": {"origins": origins},
        },
        supports_credentials=True,
    )

    # Inicializar extensiones
    db.init_app(app)
    migrate.init_app(app, db)
    jwt.init_app(app)
    ma.init_app(app)
    bcrypt.init_app(app)

    # Registrar blueprints
    app.register_blueprint(auth_routes.bp, url_prefix="/auth")
    app.register_blueprint(user_routes.bp, url_prefix="/api/users")
    app.register_blueprint(airline_routes.bp, url_prefix="/api/airlines")
    app.register_blueprint(flight_routes.bp, url_prefix="/api/flights")
    app.register_blueprint(booking_routes.bp, url_prefix="/api/bookings")
    app.register_blueprint(favorite_routes.bp, url_prefix="/api/favorites")
    app.register_blueprint(review_routes.bp, url_prefix="/api/reviews")

    # Manejadores de errores
    register_error_handlers(app)

    @app.get("/api/health")
    def health_check():
        return {"status": "ok", "service": "aerobook-backend"}

    @app.get("/uploads/<path:filename>")
    def serve_upload(filename: str):
        return send_from_directory(app.config["UPLOADS_DIR"], filename)

    @app.cli.command("expire-flights")
    def expire_flights_command():
        """Pasa a Inactivo los vuelos cuya salida ya ocurrió."""
        from .services.lifecycle_service import sweep_expired_flights

        changed = sweep_expired_flights()
        click.echo(f"{changed} vuelo(s) pasados a Inactivo")

    return app
