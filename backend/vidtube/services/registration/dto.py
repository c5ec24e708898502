"""DTOs for the registration flow."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class RegistrationIn:
    """
    Input DTO for account registration.

    :param full_name: Display name.
    :type full_name: str
    :param email: Contact address.
    :type email: str
    :param username: Handle; stored lower-cased.
    :type username: str
    :param password: Raw password, hashed once by the model setter.
    :type password: str
    :param avatar_path: Local path of the stashed avatar upload (required).
    :type avatar_path: str | None
    :param cover_image_path: Local path of the stashed cover upload.
    :type cover_image_path: str | None
    """

    full_name: str
    email: str
    username: str
    password: str
    avatar_path: str | None = None
    cover_image_path: str | None = None
