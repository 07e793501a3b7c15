# Services module
from backoffice.services.hotel_service import HotelService
from backoffice.services.room_type_service import RoomTypeService
from backoffice.services.rate_service import RateService, EffectiveRate
from backoffice.services.user_service import UserService

__all__ = ['HotelService', 'RoomTypeService', 'RateService', 'EffectiveRate', 'UserService']
