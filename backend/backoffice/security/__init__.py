# Security module
from backoffice.security.auth import (
    get_password_hash, verify_password, create_access_token,
    decode_token, get_current_user, CurrentUser
)

__all__ = [
    'get_password_hash', 'verify_password', 'create_access_token',
    'decode_token', 'get_current_user', 'CurrentUser'
]
