# Models module
from backoffice.models.entities import User, Hotel, HotelStatus, RoomType, RateAdjustment

__all__ = ['User', 'Hotel', 'HotelStatus', 'RoomType', 'RateAdjustment']
