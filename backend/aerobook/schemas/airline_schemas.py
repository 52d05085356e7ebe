from marshmallow import fields, validate

from aerobook.extensions import ma


class AirlineCreateSchema(ma.Schema):
    name = fields.String(required=True, validate=validate.Length(min=1, max=120))
    email = fields.Email(required=True)
    password = fields.String(
        required=True,
        load_only=True,
        validate=validate.Length(min=6, error="La contraseña debe tener al menos 6 caracteres."),
    )
    code = fields.String(required=True, validate=validate.Length(min=2, max=10))
    cuit = fields.String(required=True, validate=validate.Length(min=1, max=20))


class AirlineUpdateSchema(ma.Schema):
    name = fields.String(required=False, validate=validate.Length(min=1, max=120))
    email = fields.Email(required=False)
    password = fields.String(
        required=False,
        allow_none=True,
        load_only=True,
        validate=validate.Length(min=6, error="La contraseña debe tener al menos 6 caracteres."),
    )
    code = fields.String(required=False, validate=validate.Length(min=2, max=10))
    cuit = fields.String(required=False, validate=validate.Length(min=1, max=20))
