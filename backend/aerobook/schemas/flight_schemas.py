from marshmallow import fields, validate, validates, ValidationError

from aerobook.extensions import ma
from aerobook.models.flight import Flight, FLIGHT_STATUSES
from aerobook.services.lifecycle_service import parse_hhmm


class FlightSchema(ma.SQLAlchemyAutoSchema):
    """Vuelo tal como lo consume el front (claves camelCase)."""

    class Meta:
        model = Flight
        load_instance = False
        include_fk = True
        exclude = ("created_at", "updated_at")

    departure_time = ma.auto_field(data_key="departureTime")
    arrival_time = ma.auto_field(data_key="arrivalTime")
    base_price = fields.Float(data_key="basePrice")
    purchase_date = ma.auto_field(data_key="purchaseDate")
    created_by = ma.auto_field(data_key="createdBy")
    image_url = ma.auto_field(data_key="imageUrl")
    is_featured = ma.auto_field(data_key="isFeatured")


class FlightWriteSchema(ma.Schema):
    # airline es opcional aquí: para role=airline se fuerza su propio nombre
    airline = fields.String(required=False, allow_none=True)
    origin = fields.String(required=True, validate=validate.Length(min=1))
    destination = fields.String(required=True, validate=validate.Length(min=1))
    date = fields.Date(required=True)
    departure_time = fields.String(required=True, data_key="departureTime")
    arrival_time = fields.String(required=True, data_key="arrivalTime")
    capacity = fields.Integer(
        required=True,
        validate=validate.Range(min=1, error="La capacidad debe ser mayor a 0."),
    )
    base_price = fields.Float(
        required=True,
        data_key="basePrice",
        validate=validate.Range(min=0, min_inclusive=False, error="El precio debe ser mayor a 0."),
    )

    @validates("departure_time")
    def validate_departure(self, value, **kwargs):
        if parse_hhmm(value) is None:
            raise ValidationError("Formato de hora inválido (HH:MM).")

    @validates("arrival_time")
    def validate_arrival(self, value, **kwargs):
        if parse_hhmm(value) is None:
            raise ValidationError("Formato de hora inválido (HH:MM).")


class FlightStatusSchema(ma.Schema):
    status = fields.String(required=False, validate=validate.OneOf(FLIGHT_STATUSES))


class FlightFeaturedSchema(ma.Schema):
    is_featured = fields.Boolean(required=False, data_key="isFeatured")
