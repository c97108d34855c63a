# bikeclub/app_factory.py
from flask import Flask, session, redirect, url_for
from flask_login import LoginManager
from sqlalchemy.exc import OperationalError
from bikeclub.init_db import db
from bikeclub.mailer import BrevoMailer
from bikeclub.authentication.session_state import Authenticated, SessionUser, load_state
from bikeclub.authentication.views import create_admin_users
from bikeclub.logging_config import setup_logging

logger = setup_logging()


def create_app(config_class='bikeclub.config.Config', mailer=None):
    app = Flask(__name__)
    app.config.from_object(config_class)

    db.init_app(app)

    app.extensions['mailer'] = mailer or BrevoMailer.from_config(app.config)

    login_manager = LoginManager()
    login_manager.login_view = 'auth.login_get'
    login_manager.init_app(app)

    @login_manager.user_loader
    def load_user(user_id):
        # Identity and role come from the session state, not the database
        state = load_state(session)
        if isinstance(state, Authenticated) and str(state.user_id) == user_id:
            return SessionUser(state)
        return None

    @login_manager.unauthorized_handler
    def unauthorized():
        return redirect(url_for('auth.login_get'))

    # Import models so create_all() sees every table
    from bikeclub.authentication import models as _auth_models  # noqa: F401
    from bikeclub.rentals import models as _rental_models  # noqa: F401

    # Import and register blueprints
    from bikeclub.authentication.routes import auth_bp as auth_blueprint
    app.register_blueprint(auth_blueprint)

    from bikeclub.rentals.routes import rentals_bp as rentals_blueprint
    app.register_blueprint(rentals_blueprint)

    from bikeclub.admin.routes import admin_bp as admin_blueprint
    app.register_blueprint(admin_blueprint, url_prefix='/admin')

    with app.app_context():
        try:
            db.create_all()
            create_admin_users()
        except OperationalError as e:
            logger.error(f"OperationalError during database initialization: {e}")

    return app
