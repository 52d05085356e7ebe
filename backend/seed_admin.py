# backend/seed_admin.py
import os

from aerobook import create_app
from aerobook.extensions import db
from aerobook.models.user import User, ROLE_ADMIN
from aerobook.services.user_service import hash_password

app = create_app()

with app.app_context():
    email = os.getenv("ADMIN_EMAIL", "admin@aerobook.com").lower().strip()
    password = os.getenv("ADMIN_PASSWORD")
    if not password:
        raise RuntimeError("Define ADMIN_PASSWORD para crear el administrador.")

    existente = User.query.filter_by(email=email).first()
    if existente:
        print(f"Ya existe un usuario con email {email} (rol {existente.role}).")
    else:
        admin = User(
            name=os.getenv("ADMIN_NAME", "Administrador"),
            email=email,
            password=hash_password(password),
            role=ROLE_ADMIN,
            is_active=True,
        )
        db.session.add(admin)
        db.session.commit()
        print(f"✅ Administrador creado: {email}")
