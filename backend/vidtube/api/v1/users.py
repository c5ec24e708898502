"""Account endpoints: registration, sessions and profile management."""

from __future__ import annotations

from typing import Any

from flask import Blueprint, request

from vidtube.api.deps import (
    REFRESH_COOKIE,
    api_response,
    assets,
    build_auth_service,
    clear_auth_cookies,
    require_auth,
    set_auth_cookies,
    stashed_uploads,
    timing,
)
from vidtube.schemas import (
    AccountSchema,
    AccountUpdateSchema,
    ChannelProfileSchema,
    LoginResponseSchema,
    LoginSchema,
    PasswordChangeSchema,
    RefreshTokenSchema,
    RegisterSchema,
    TokenPairSchema,
    UsernameChangeSchema,
    VideoSchema,
)
from vidtube.services.accounts import AccountDetailsIn, AccountService, PasswordChangeIn
from vidtube.services.auth import AuthContext, LoginIn, RefreshIn
from vidtube.services.registration import RegistrationIn, RegistrationService

bp = Blueprint("users", __name__)

register_schema = RegisterSchema()
login_schema = LoginSchema()
refresh_schema = RefreshTokenSchema()
token_pair_schema = TokenPairSchema()
login_response_schema = LoginResponseSchema()
account_schema = AccountSchema()
account_update_schema = AccountUpdateSchema()
password_change_schema = PasswordChangeSchema()
username_change_schema = UsernameChangeSchema()
channel_schema = ChannelProfileSchema()
videos_schema = VideoSchema(many=True)


def _payload() -> dict[str, Any]:
    """Return the JSON body, falling back to form fields."""

    return request.get_json(silent=True) or request.form.to_dict()


# --------------------------------------------------------------------------- #
# Registration & sessions
# --------------------------------------------------------------------------- #


@bp.post("/register")
@timing
def register():
    """Create an account from a multipart form with avatar and cover image."""

    data = register_schema.load(request.form.to_dict())
    with stashed_uploads("avatar", "coverImage") as files:
        account = RegistrationService(assets=assets()).register(
            RegistrationIn(
                full_name=data["full_name"],
                email=data["email"],
                username=data["username"],
                password=data["password"],
                avatar_path=files["avatar"],
                cover_image_path=files["coverImage"],
            )
        )
    return api_response(account_schema.dump(account), "User registered successfully", status=201)


@bp.post("/login")
@timing
def login():
    """Authenticate with username or email and set both auth cookies."""

    data = login_schema.load(_payload())
    result = build_auth_service().login(
        LoginIn(password=data["password"], username=data["username"], email=data["email"])
    )
    response = api_response(login_response_schema.dump(result), "User logged in successfully")
    return set_auth_cookies(response, result.tokens)


@bp.post("/logout")
@require_auth
@timing
def logout(auth: AuthContext):
    build_auth_service(auth.ctx).logout()
    return clear_auth_cookies(api_response({}, "User logged out"))


@bp.post("/refresh-token")
@timing
def refresh_token():
    """Rotate the session using the refresh cookie or ``refreshToken`` body field."""

    token = request.cookies.get(REFRESH_COOKIE)
    if not token:
        token = refresh_schema.load(_payload())["refresh_token"]
    tokens = build_auth_service().refresh(RefreshIn(refresh_token=token or ""))
    response = api_response(token_pair_schema.dump(tokens), "Access token refreshed")
    return set_auth_cookies(response, tokens)


# --------------------------------------------------------------------------- #
# Current account
# --------------------------------------------------------------------------- #


@bp.get("/current-user")
@require_auth
@timing
def current_user(auth: AuthContext):
    account = AccountService(ctx=auth.ctx).get_current_account()
    return api_response(account_schema.dump(account), "User fetched successfully")


@bp.patch("/update-account")
@require_auth
@timing
def update_account(auth: AuthContext):
    data = account_update_schema.load(_payload())
    account = AccountService(ctx=auth.ctx).update_account_details(
        AccountDetailsIn(full_name=data["full_name"], email=data["email"])
    )
    return api_response(account_schema.dump(account), "Account details updated successfully")


@bp.post("/change-password")
@require_auth
@timing
def change_password(auth: AuthContext):
    data = password_change_schema.load(_payload())
    AccountService(ctx=auth.ctx).change_password(
        PasswordChangeIn(old_password=data["old_password"], new_password=data["new_password"])
    )
    return api_response({}, "Password changed successfully")


@bp.post("/change-username")
@require_auth
@timing
def change_username(auth: AuthContext):
    data = username_change_schema.load(_payload())
    account = AccountService(ctx=auth.ctx).change_username(data["new_username"])
    return api_response(account_schema.dump(account), "Username updated successfully")


@bp.patch("/avatar")
@require_auth
@timing
def update_avatar(auth: AuthContext):
    with stashed_uploads("avatar") as files:
        account = AccountService(assets=assets(), ctx=auth.ctx).update_avatar(files["avatar"])
    return api_response(account_schema.dump(account), "Avatar updated successfully")


@bp.patch("/cover-image")
@require_auth
@timing
def update_cover_image(auth: AuthContext):
    with stashed_uploads("coverImage") as files:
        account = AccountService(assets=assets(), ctx=auth.ctx).update_cover_image(
            files["coverImage"]
        )
    return api_response(account_schema.dump(account), "Cover image updated successfully")


# --------------------------------------------------------------------------- #
# Channels
# --------------------------------------------------------------------------- #


@bp.get("/c/<username>")
@require_auth
@timing
def channel_profile(username: str, auth: AuthContext):
    profile = AccountService(ctx=auth.ctx).get_channel_profile(username)
    return api_response(channel_schema.dump(profile), "Channel profile fetched successfully")


@bp.get("/history")
@require_auth
@timing
def watch_history(auth: AuthContext):
    videos = AccountService(ctx=auth.ctx).get_watch_history()
    return api_response(videos_schema.dump(videos), "Watch history fetched successfully")
