from .responses import (
    ok,
    error,
    validation_error_response,
    result_response,
)
from .auth import auth_required, role_required, current_user_optional
from .validation import validate_schema
from .db import transactional
from .jwt import (
    create_access_token,
    create_refresh_token,
    create_reset_token,
    decode_token,
    TokenError,
)
from .phone import is_valid_phone, clean_phone
from .result import Ok, Err, Result, not_found, invalid

__all__ = [
    'ok',
    'error',
    'validation_error_response',
    'result_response',
    'auth_required',
    'role_required',
    'current_user_optional',
    'create_access_token',
    'create_refresh_token',
    'create_reset_token',
    'decode_token',
    'TokenError',
    'validate_schema',
    'transactional',
    'is_valid_phone',
    'clean_phone',
    'Ok',
    'Err',
    'Result',
    'not_found',
    'invalid',
]
