"""User registration service."""

import logging

from django.contrib.auth import get_user_model
from django.db import IntegrityError, transaction

from .exceptions import UserRegistrationError

User = get_user_model()

logger = logging.getLogger(__name__)


@transaction.atomic
def register_user(
    *,
    email: str,
    password: str,
    display_name: str = "",
    phone_number: str = ""
) -> User:
    """
    Register a new user.

    Args:
        email: User's email address
        password: User's password (will be hashed)
        display_name: Optional display name, used as the default roommate name
        phone_number: Optional phone number, copied onto roommate entries

    Returns:
        Created User instance

    Raises:
        UserRegistrationError: If the email is already registered
    """
    try:
        user = User.objects.create_user(
            email=email,
            password=password,
            display_name=display_name,
            phone_number=phone_number,
        )
    except IntegrityError:
        raise UserRegistrationError("A user with this email already exists")

    logger.info("Registered user %s", user.id)
    return user
