# bikeclub/validation.py
"""Form value parsing shared by the auth, rentals and admin services."""
import math
import re
from bikeclub.exceptions import ValidationError

EMAIL_PATTERN = re.compile(r"[^@]+@[^@]+\.[^@]+")

# Largest value a 32-bit INTEGER column holds on every supported database
MAX_INTEGER = 2 ** 31 - 1
MAX_RENTAL_DAYS = 365
MAX_TRIP_SEATS = 1000


def parse_int(value, field, minimum=0, maximum=MAX_INTEGER):
    try:
        number = int(str(value).strip())
    except (TypeError, ValueError):
        raise ValidationError(f'{field} must be a whole number.')
    if number < minimum:
        raise ValidationError(f'{field} must be at least {minimum}.')
    if number > maximum:
        raise ValidationError(f'{field} cannot be more than {maximum}.')
    return number


def parse_price(value, field):
    try:
        number = float(str(value).strip())
    except (TypeError, ValueError):
        raise ValidationError(f'{field} must be a number.')
    if not math.isfinite(number):
        raise ValidationError(f'{field} must be a number.')
    if number < 0:
        raise ValidationError(f'{field} cannot be negative.')
    # -0.0 is stored as plain zero
    return number + 0.0


def is_valid_id(value):
    return 1 <= value <= MAX_INTEGER
