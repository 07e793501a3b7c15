# Routers module
from backoffice.routers import auth, hotels, room_types

__all__ = ['auth', 'hotels', 'room_types']
