# bikeclub/config.py
import os
import binascii
from dotenv import load_dotenv

load_dotenv()


class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY') or binascii.hexlify(os.urandom(24)).decode()

    BASE_DIR = os.path.abspath(os.path.dirname(__file__))

    DATABASE_PATH = os.path.join(BASE_DIR, 'bikeclub.db')

    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL') or f'sqlite:///{DATABASE_PATH}'

    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Bootstrap admin account, see create_admin_users()
    ADMIN_EMAIL = os.environ.get('ADMIN_EMAIL', '')
    ADMIN_NAME = os.environ.get('ADMIN_NAME', 'Admin')
    ADMIN_PASSWORD = os.environ.get('ADMIN_PASSWORD', '')

    # Brevo transactional email
    MAIL_API_KEY = os.environ.get('BREVO_API_KEY', '')
    MAIL_SENDER_EMAIL = os.environ.get('MAIL_SENDER_EMAIL', '')
    MAIL_SENDER_NAME = os.environ.get('MAIL_SENDER_NAME', 'Royal Bike Club')

    OTP_TTL_MINUTES = int(os.environ.get('OTP_TTL_MINUTES', 10))

    PASSWORD_HASH_METHOD = os.environ.get('PASSWORD_HASH_METHOD', 'pbkdf2:sha256')

    LOG_TIMEZONE = os.environ.get('LOG_TIMEZONE', 'Asia/Kolkata')


class TestingConfig(Config):
    TESTING = True
    SECRET_KEY = 'testing-secret-key'
    SQLALCHEMY_DATABASE_URI = 'sqlite://'
    ADMIN_EMAIL = ''
    ADMIN_PASSWORD = ''
    MAIL_SENDER_EMAIL = 'noreply@royalbikeclub.test'
    OTP_TTL_MINUTES = 10
    PASSWORD_HASH_METHOD = 'pbkdf2:sha256:1000'
