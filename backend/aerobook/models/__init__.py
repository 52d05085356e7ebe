from .user import User
from .airline import AirlineProfile
from .flight import Flight
from .booking import Booking
from .favorite import Favorite
from .review import Review

__all__ = ["User", "AirlineProfile", "Flight", "Booking", "Favorite", "Review"]
