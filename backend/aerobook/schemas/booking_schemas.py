from marshmallow import fields

from aerobook.extensions import ma
from aerobook.models.booking import Booking
from aerobook.schemas.flight_schemas import FlightSchema


class BookingUserSchema(ma.Schema):
    id = fields.Integer()
    name = fields.String()
    email = fields.String()


class BookingSchema(ma.SQLAlchemyAutoSchema):
    class Meta:
        model = Booking
        load_instance = False
        include_fk = True
        exclude = ("updated_at",)

    user_id = ma.auto_field(data_key="userId")
    flight_id = ma.auto_field(data_key="flightId")
    passengers = fields.Raw()
    passenger_count = ma.auto_field(data_key="passengerCount")
    total_price = fields.Float(data_key="totalPrice")
    purchase_date = ma.auto_field(data_key="purchaseDate")
    created_at = ma.auto_field(data_key="createdAt")

    flight = fields.Nested(FlightSchema, allow_none=True)
    user = fields.Nested(BookingUserSchema, allow_none=True)


class BookingCreateSchema(ma.Schema):
    # passengers/totalPrice se validan en booking_service (mensajes propios)
    flight_id = fields.Integer(required=True, data_key="flightId")
    passengers = fields.Raw(required=False, allow_none=True)
    total_price = fields.Raw(required=False, allow_none=True, data_key="totalPrice")
