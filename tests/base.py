import unittest
from werkzeug.security import generate_password_hash
from bikeclub.app_factory import create_app
from bikeclub.init_db import db
from bikeclub.authentication.models import User
from bikeclub.exceptions import GatewayError


class RecordingMailer:
    """Stands in for BrevoMailer and keeps every message in memory."""

    def __init__(self):
        self.sent = []
        self.fail = False

    def send(self, to_email, subject, html_content, to_name=None):
        if self.fail:
            raise GatewayError('Could not send email. Please try again.')
        self.sent.append({
            'to_email': to_email,
            'to_name': to_name,
            'subject': subject,
            'html_content': html_content,
        })


class AppTestCase(unittest.TestCase):
    config_class = 'bikeclub.config.TestingConfig'

    def setUp(self):
        self.mailer = RecordingMailer()
        self.app = create_app(self.config_class, mailer=self.mailer)
        self.client = self.app.test_client()

    def tearDown(self):
        with self.app.app_context():
            db.session.remove()
            db.drop_all()

    def create_user(self, name='Ana', email='ana@x.com', password='pw1', is_admin=False):
        with self.app.app_context():
            user = User(
                name=name,
                email=email,
                password=generate_password_hash(password, method=self.app.config['PASSWORD_HASH_METHOD']),
                is_admin=is_admin,
            )
            db.session.add(user)
            db.session.commit()
            return user.id

    def stored_otp(self, email):
        with self.app.app_context():
            user = User.query.filter_by(email=email).first()
            return user.otp

    def login(self, email='ana@x.com', password='pw1'):
        response = self.client.post('/login', data={'email': email, 'password': password})
        self.assertEqual(response.status_code, 302)
        return self.client.post('/verify-otp', data={'otp': self.stored_otp(email)})
