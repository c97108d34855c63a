# bikeclub/wsgi.py
from bikeclub.app_factory import create_app

app = create_app()
