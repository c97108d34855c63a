# bikeclub/exceptions.py
"""Errors raised by the service layer and translated to responses by the blueprints."""


class BikeClubError(Exception):
    """Base error carrying a message that is safe to show to the user."""

    default_message = 'Something went wrong. Please try again.'

    def __init__(self, message=None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(BikeClubError):
    default_message = 'Invalid input.'


class NotFoundError(BikeClubError):
    default_message = 'Not found.'


class AuthError(BikeClubError):
    default_message = 'Incorrect password. Please try again.'


class SessionStateError(BikeClubError):
    """The request skipped a step of the login or reset flow."""

    default_message = 'Please log in to continue.'


class InvalidOtpError(BikeClubError):
    default_message = 'Invalid or expired OTP. Please try again.'


class GatewayError(BikeClubError):
    """The database or the mail provider failed."""

    default_message = 'Service temporarily unavailable. Please try again.'
