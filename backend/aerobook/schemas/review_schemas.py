from marshmallow import Schema, fields, validate


class ReviewCreateSchema(Schema):
    airline = fields.String(required=True, validate=validate.Length(min=1, max=120))
    rating = fields.Integer(
        required=True,
        validate=validate.Range(min=1, max=5, error="El rating debe estar entre 1 y 5."),
    )
    comment = fields.String(required=True)


class ReviewUpdateSchema(Schema):
    rating = fields.Integer(
        required=False,
        validate=validate.Range(min=1, max=5, error="El rating debe estar entre 1 y 5."),
    )
    comment = fields.String(required=False)
