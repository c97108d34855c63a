# bikeclub/authentication/routes.py
from flask import Blueprint, request, session, redirect, url_for, render_template
from flask_login import login_user, logout_user, current_user
from bikeclub.authentication.session_state import (
    ROLE_ADMIN, AwaitingOtp, ResetVerified, Authenticated, SessionUser, load_state,
)
from bikeclub.authentication.views import (
    register_user, begin_login, begin_password_reset, verify_otp,
    complete_password_reset,
)
from bikeclub.exceptions import BikeClubError, SessionStateError, GatewayError
from bikeclub.logging_config import setup_logging


auth_bp = Blueprint('auth', __name__)

# Setup logging
logger = setup_logging()


def _landing_url(state):
    if state.role == ROLE_ADMIN:
        return url_for('admin.dashboard')
    return url_for('rentals.user_dashboard')


@auth_bp.route('/register', methods=['GET'])
def register_get():
    return render_template('register.html', message=None)


@auth_bp.route('/register', methods=['POST'])
def register_post():
    try:
        register_user(
            request.form.get('name'),
            request.form.get('email'),
            request.form.get('password'),
        )
    except GatewayError:
        return render_template('register.html', message='Registration failed. Try again.'), 500
    except BikeClubError as e:
        return render_template('register.html', message=e.message), 400

    return redirect(url_for('auth.login_get'))


@auth_bp.route('/login', methods=['GET'])
def login_get():
    """Render the login page."""
    return render_template('login.html', message=None)


@auth_bp.route('/login', methods=['POST'])
def login_post():
    """Check the password and mail an OTP."""
    try:
        begin_login(session, request.form.get('email'), request.form.get('password'))
    except GatewayError:
        return render_template('login.html', message='Login failed. Try again.'), 500
    except BikeClubError as e:
        return render_template('login.html', message=e.message), 400

    return redirect(url_for('auth.verify_otp_get'))


@auth_bp.route('/verify-otp', methods=['GET'])
def verify_otp_get():
    if not isinstance(load_state(session), AwaitingOtp):
        return redirect(url_for('auth.login_get'))
    return render_template('verify_otp.html', message=None)


@auth_bp.route('/verify-otp', methods=['POST'])
def verify_otp_post():
    try:
        state = verify_otp(session, request.form.get('otp'))
    except SessionStateError:
        return redirect(url_for('auth.login_get'))
    except GatewayError:
        return render_template('verify_otp.html', message='An error occurred. Please try again.'), 500
    except BikeClubError as e:
        return render_template('verify_otp.html', message=e.message), 400

    if isinstance(state, Authenticated):
        login_user(SessionUser(state))
        return redirect(_landing_url(state))

    return redirect(url_for('auth.reset_password_get'))


@auth_bp.route('/forgot-password', methods=['GET'])
def forgot_password_get():
    return render_template('forgot_password.html', message=None)


@auth_bp.route('/forgot-password', methods=['POST'])
def forgot_password_post():
    try:
        begin_password_reset(session, request.form.get('email'))
    except GatewayError:
        return render_template('forgot_password.html', message='Error occurred. Please try again.'), 500
    except BikeClubError as e:
        return render_template('forgot_password.html', message=e.message), 400

    return redirect(url_for('auth.verify_otp_get'))


@auth_bp.route('/reset-password', methods=['GET'])
def reset_password_get():
    state = load_state(session)
    if not isinstance(state, ResetVerified):
        return redirect(url_for('auth.login_get'))
    return render_template('reset_password.html', email=state.email, message=None)


@auth_bp.route('/reset-password', methods=['POST'])
def reset_password_post():
    state = load_state(session)
    email = getattr(state, 'email', None)
    try:
        complete_password_reset(session, request.form.get('newPassword'))
    except SessionStateError:
        return redirect(url_for('auth.login_get'))
    except GatewayError:
        return render_template('reset_password.html', email=email,
                               message='Error resetting password. Please try again.'), 500
    except BikeClubError as e:
        return render_template('reset_password.html', email=email, message=e.message), 400

    return redirect(url_for('auth.login_get'))


@auth_bp.route('/logout', methods=['GET', 'POST'])
def logout():
    if current_user.is_authenticated:
        logger.info(f"User {current_user.email} logged out.")
    logout_user()
    session.clear()
    return redirect(url_for('auth.login_get'))

