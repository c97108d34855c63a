# bikeclub/authentication/views.py
import random
from datetime import datetime, timedelta, timezone
from flask import current_app
from werkzeug.security import generate_password_hash, check_password_hash
from sqlalchemy.exc import IntegrityError, SQLAlchemyError, OperationalError
from bikeclub.init_db import db
from bikeclub.authentication.models import User
from bikeclub.authentication.session_state import (
    ANONYMOUS, LOGIN, RESET, AwaitingOtp, ResetVerified, Authenticated,
    load_state, store_state, role_for,
)
from bikeclub.exceptions import (
    ValidationError, NotFoundError, AuthError, SessionStateError,
    InvalidOtpError, GatewayError,
)
from bikeclub.logging_config import setup_logging
from bikeclub.mailer import get_mailer
from bikeclub.validation import EMAIL_PATTERN

logger = setup_logging()

_otp_random = random.SystemRandom()

OTP_SUBJECTS = {
    LOGIN: "Your OTP for Login",
    RESET: "Your OTP for Password Reset",
}


def _utcnow():
    return datetime.now(timezone.utc).replace(tzinfo=None)


def hash_password(password):
    return generate_password_hash(password, method=current_app.config['PASSWORD_HASH_METHOD'])


def _commit():
    try:
        db.session.commit()
    except SQLAlchemyError as e:
        db.session.rollback()
        logger.error(f"Database error: {e}")
        raise GatewayError() from e


def find_user(email):
    return User.query.filter_by(email=email).first()


def register_user(name, email, password):
    name = (name or '').strip()
    email = (email or '').strip()

    if not name or not email or not password:
        logger.warning("Signup attempt with missing fields.")
        raise ValidationError('Please fill out all fields.')

    if not EMAIL_PATTERN.fullmatch(email):
        logger.warning("Invalid email format during signup.")
        raise ValidationError('Invalid email address.')

    if find_user(email):
        logger.warning(f"Signup attempt with existing email: {email}")
        raise ValidationError('Email already exists.')

    user = User(name=name, email=email, password=hash_password(password))
    db.session.add(user)
    try:
        db.session.commit()
    except IntegrityError as e:
        db.session.rollback()
        logger.warning(f"Signup lost a race on existing email: {email}")
        raise ValidationError('Email already exists.') from e
    except SQLAlchemyError as e:
        db.session.rollback()
        logger.error(f"Database error during signup: {e}")
        raise GatewayError('Registration failed. Try again.') from e

    logger.info(f"New user {email} signed up successfully.")
    return user


# Function to generate a 6-digit OTP
def generate_otp():
    return str(_otp_random.randint(100000, 999999))


def issue_otp(user, purpose, now=None):
    """Store a fresh OTP on the user, then mail it.

    The OTP and its expiry are committed before the mail goes out.
    """
    now = now or _utcnow()
    otp = generate_otp()
    user.otp = otp
    user.otp_expiry = now + timedelta(minutes=current_app.config['OTP_TTL_MINUTES'])
    _commit()

    send_otp_email(user, otp, purpose)
    return otp


def send_otp_email(user, otp, purpose):
    minutes = current_app.config['OTP_TTL_MINUTES']
    html_content = (
        f"Dear {user.name},<br>Your OTP is <strong>{otp}</strong>. "
        f"It will expire in {minutes} minutes."
    )
    try:
        get_mailer().send(user.email, OTP_SUBJECTS[purpose], html_content, to_name=user.name)
    except GatewayError:
        logger.error(f"Failed to send {purpose} OTP email to {user.email}")
        raise
    logger.info(f"{purpose.capitalize()} OTP sent to {user.email}")


def begin_login(session, email, password, now=None):
    user = find_user((email or '').strip())
    if not user:
        logger.warning(f"Login attempt for unknown email: {email}")
        raise NotFoundError('User not found. Please register first.')

    if not password or not check_password_hash(user.password, password):
        logger.warning(f"Failed login attempt for email: {user.email}")
        raise AuthError('Incorrect password. Please try again.')

    issue_otp(user, LOGIN, now=now)
    store_state(session, AwaitingOtp(email=user.email, purpose=LOGIN))
    logger.info(f"Password verified for {user.email}, awaiting OTP.")


def begin_password_reset(session, email, now=None):
    user = find_user((email or '').strip())
    if not user:
        logger.warning(f"Password reset requested for unknown email: {email}")
        raise NotFoundError('User not found')

    issue_otp(user, RESET, now=now)
    store_state(session, AwaitingOtp(email=user.email, purpose=RESET))
    logger.info(f"Password reset OTP issued for {user.email}")


def consume_otp(email, submitted_otp, now=None):
    """Check and clear the stored OTP in a single conditional UPDATE.

    Returns True only for the one caller whose update matched the row.
    """
    if not submitted_otp:
        return False

    now = now or _utcnow()
    matched = User.query.filter(
        User.email == email,
        User.otp == submitted_otp,
        User.otp_expiry.isnot(None),
        User.otp_expiry >= now,
    ).update({User.otp: None, User.otp_expiry: None}, synchronize_session=False)
    _commit()
    return matched == 1


def verify_otp(session, submitted_otp, now=None):
    state = load_state(session)
    if not isinstance(state, AwaitingOtp):
        raise SessionStateError()

    if not consume_otp(state.email, submitted_otp, now=now):
        logger.warning(f"Invalid or expired OTP submitted for {state.email}")
        raise InvalidOtpError('Invalid or expired OTP. Please try again.')

    if state.purpose == RESET:
        new_state = ResetVerified(email=state.email)
        store_state(session, new_state)
        logger.info(f"Reset OTP verified for {state.email}")
        return new_state

    user = find_user(state.email)
    if not user:
        store_state(session, ANONYMOUS)
        raise NotFoundError('User not found. Please register first.')

    new_state = Authenticated(user_id=user.id, email=user.email, role=role_for(user))
    store_state(session, new_state)
    logger.info(f"User {user.email} logged in successfully.")
    return new_state


def complete_password_reset(session, new_password):
    state = load_state(session)
    if not isinstance(state, ResetVerified):
        raise SessionStateError()

    if not new_password:
        raise ValidationError('Please enter a new password.')

    user = find_user(state.email)
    if not user:
        raise NotFoundError('User not found.')

    user.password = hash_password(new_password)
    user.otp = None
    user.otp_expiry = None
    _commit()

    store_state(session, ANONYMOUS)
    logger.info(f"Password reset completed for {user.email}")


def create_admin_users():
    config = current_app.config
    email = config.get('ADMIN_EMAIL')
    if not email:
        return

    try:
        admin_user = find_user(email)
        if admin_user is None:
            if not config.get('ADMIN_PASSWORD'):
                logger.warning(f"Admin '{email}' does not exist and ADMIN_PASSWORD is not set.")
                return
            admin_user = User(
                name=config.get('ADMIN_NAME') or 'Admin',
                email=email,
                password=hash_password(config['ADMIN_PASSWORD']),
                is_admin=True
            )
            db.session.add(admin_user)
            logger.info(f"Admin user '{email}' created successfully.")
        elif not admin_user.is_admin:
            admin_user.is_admin = True
            logger.info(f"User '{email}' promoted to admin.")
        else:
            logger.info(f"Admin user '{email}' already exists.")

        db.session.commit()
    except OperationalError as e:
        db.session.rollback()
        logger.error(f"OperationalError when creating admin users: {e}")
