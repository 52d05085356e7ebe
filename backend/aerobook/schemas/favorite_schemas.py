from marshmallow import Schema, fields


class FavoriteCreateSchema(Schema):
    flight_id = fields.Integer(required=True, data_key="flightId")
