from .auth_routes import bp as auth_bp
from .user_routes import bp as users_bp
from .airline_routes import bp as airlines_bp
from .flight_routes import bp as flights_bp
from .booking_routes import bp as bookings_bp
from .favorite_routes import bp as favorites_bp
from .review_routes import bp as reviews_bp

__all__ = [
    "auth_bp",
    "users_bp",
    "airlines_bp",
    "flights_bp",
    "bookings_bp",
    "favorites_bp",
    "reviews_bp",
]
