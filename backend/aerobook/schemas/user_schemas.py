from marshmallow import fields, validate

from aerobook.extensions import ma
from aerobook.models.user import ROLES


class ProfileUpdateSchema(ma.Schema):
    name = fields.String(required=False, validate=validate.Length(min=1, max=120))
    email = fields.Email(required=False)
    password = fields.String(
        required=False,
        allow_none=True,
        load_only=True,
        validate=validate.Length(min=6, error="La contraseña debe tener al menos 6 caracteres."),
    )


class AdminUserCreateSchema(ma.Schema):
    name = fields.String(required=True, validate=validate.Length(min=1, max=120))
    email = fields.Email(required=True)
    password = fields.String(
        required=True,
        load_only=True,
        validate=validate.Length(min=6, error="La contraseña debe tener al menos 6 caracteres."),
    )
    role = fields.String(required=False, validate=validate.OneOf(("admin", "user")))


class AdminUserUpdateSchema(ma.Schema):
    name = fields.String(required=False, validate=validate.Length(min=1, max=120))
    email = fields.Email(required=False)
    role = fields.String(required=False, validate=validate.OneOf(ROLES))
    is_active = fields.Boolean(required=False, data_key="isActive")


class RoleChangeSchema(ma.Schema):
    role = fields.String(required=True)
