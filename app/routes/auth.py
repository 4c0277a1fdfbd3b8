from flask import Blueprint, request, current_app
from flask_limiter.util import get_remote_address
from extensions import limiter
from app.version import API_PREFIX
from app.exceptions import AuthenticationError
from app.schemas.auth import (
    SignUpRequest,
    SignInRequest,
    RefreshRequest,
    PasswordResetRequest,
    PasswordUpdateRequest,
    ProfileUpdate,
)
from app.services import accounts
from app.utils import ok, error, auth_required, role_required, current_user_optional, validate_schema
from app.utils.auth import _bearer_token
from app.utils.jwt import decode_token, TokenError

auth_bp = Blueprint("auth", __name__, url_prefix=f"{API_PREFIX}/auth")


@auth_bp.route("/signup", methods=["POST"])
@validate_schema(SignUpRequest)
def sign_up():
    data: SignUpRequest = request.validated_data
    user = accounts.sign_up(data.email, data.password, name=data.name, phone=data.phone)
    return ok({"user": user.to_dict(), **accounts.issue_tokens(user)}, message="Account created", status=201)


@auth_bp.route("/signin", methods=["POST"])
@limiter.limit(
    lambda: current_app.config["LOGIN_LIMIT_PER_IP"],
    key_func=get_remote_address,
    error_message="Too many logins from this IP",
)
@validate_schema(SignInRequest)
def sign_in():
    data: SignInRequest = request.validated_data
    user = accounts.sign_in(data.email, data.password)
    return ok({"user": user.to_dict(), **accounts.issue_tokens(user)})


@auth_bp.route("/signout", methods=["POST"])
def sign_out():
    token = _bearer_token()
    if not token:
        return error("Token missing", status=401)
    try:
        decode_token(token)
    except TokenError as e:
        return error(str(e), status=401)
    return ok(message="Signed out")


@auth_bp.route("/refresh", methods=["POST"])
@validate_schema(RefreshRequest)
def refresh_tokens():
    data: RefreshRequest = request.validated_data
    return ok(accounts.refresh(data.refresh_token))


@auth_bp.route("/password-reset", methods=["POST"])
@validate_schema(PasswordResetRequest)
def password_reset():
    data: PasswordResetRequest = request.validated_data
    accounts.request_password_reset(data.email)
    # Same answer whether or not the account exists
    return ok(message="If an account exists for this email, a reset link has been sent")


@auth_bp.route("/password-update", methods=["POST"])
@validate_schema(PasswordUpdateRequest)
def password_update():
    data: PasswordUpdateRequest = request.validated_data
    if data.reset_token:
        user = accounts.user_from_reset_token(data.reset_token)
    else:
        user = current_user_optional()
        if not user:
            raise AuthenticationError("Sign in or use a reset link to change your password")
    accounts.update_password(user, data.password)
    return ok(message="Password updated")


@auth_bp.route("/me", methods=["GET"])
@auth_required
def me():
    return ok(request.user.to_dict())


@auth_bp.route("/me", methods=["PATCH"])
@auth_required
@role_required(["customer:update_profile", "admin"])
@validate_schema(ProfileUpdate)
def update_me():
    data: ProfileUpdate = request.validated_data
    user = accounts.update_profile(request.user, data.model_dump(exclude_unset=True))
    return ok(user.to_dict(), message="Profile updated")


@auth_bp.route("/is-admin", methods=["GET"])
@auth_required
def is_admin():
    return ok({"is_admin": request.user.is_admin})
