from bikehub.db.models.bike import Bike, BikeCategory
from bikehub.db.models.booking import ALLOWED_TRANSITIONS, PREFERRED_TIME_SLOTS, Booking, BookingStatus
from bikehub.db.models.dealer import Dealer, DealerType
from bikehub.db.models.listing import DealerBikeListing
from bikehub.db.models.user import User, UserRole

__all__ = [
    "ALLOWED_TRANSITIONS",
    "PREFERRED_TIME_SLOTS",
    "Bike",
    "BikeCategory",
    "Booking",
    "BookingStatus",
    "Dealer",
    "DealerBikeListing",
    "DealerType",
    "User",
    "UserRole",
]
