# bikeclub/rentals/models.py
from datetime import datetime
from bikeclub.init_db import db


class Bike(db.Model):
    __tablename__ = 'bikes'
    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(100), nullable=False)
    type = db.Column(db.String(50), nullable=False)
    selling_price = db.Column(db.Float, nullable=False)
    rental_price_per_day = db.Column(db.Float, nullable=False)
    quantity = db.Column(db.Integer, nullable=False, default=0)
    image_url = db.Column(db.String(500), nullable=False)
    featured = db.Column(db.Boolean, nullable=False, default=False)

    __table_args__ = (
        db.CheckConstraint('selling_price >= 0', name='ck_bike_selling_price'),
        db.CheckConstraint('rental_price_per_day >= 0', name='ck_bike_rental_price'),
        db.CheckConstraint('quantity >= 0', name='ck_bike_quantity'),
    )


class Trip(db.Model):
    __tablename__ = 'trips'
    id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.String(150), nullable=False)
    description = db.Column(db.Text, nullable=False)
    price = db.Column(db.Float, nullable=False)
    image_url = db.Column(db.String(500), nullable=False)
    start_date = db.Column(db.Date, nullable=False)
    end_date = db.Column(db.Date, nullable=False)
    total_seats = db.Column(db.Integer, nullable=False, default=0)
    seats_left = db.Column(db.Integer, nullable=False, default=0)

    __table_args__ = (
        db.CheckConstraint('price >= 0', name='ck_trip_price'),
        db.CheckConstraint('seats_left >= 0', name='ck_trip_seats_left'),
        db.CheckConstraint('seats_left <= total_seats', name='ck_trip_seats_total'),
    )


class Order(db.Model):
    __tablename__ = 'orders'
    id = db.Column(db.Integer, primary_key=True)
    rent_id = db.Column(db.String(36), unique=True, nullable=False)
    user_id = db.Column(db.Integer, db.ForeignKey('user.id'), nullable=False)
    user = db.relationship('User', backref=db.backref('orders', lazy=True))
    bike_id = db.Column(db.Integer, db.ForeignKey('bikes.id', ondelete='SET NULL'), nullable=True)
    bike = db.relationship('Bike', backref=db.backref('orders', lazy=True))
    renter_name = db.Column(db.String(100), nullable=False)
    renter_email = db.Column(db.String(100), nullable=False)
    rental_days = db.Column(db.Integer, nullable=False)
    payment_method = db.Column(db.String(50), nullable=False)
    rental_date = db.Column(db.Date, nullable=False)
    return_date = db.Column(db.Date, nullable=False)
    total_cost = db.Column(db.Float, nullable=False)
    status = db.Column(db.Enum('Pending', 'Completed', name='order_status'), nullable=False, default='Pending')
    created_at = db.Column(db.DateTime, default=datetime.utcnow)


class TripBooking(db.Model):
    __tablename__ = 'trip_bookings'
    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey('user.id'), nullable=False)
    user = db.relationship('User', backref=db.backref('trip_bookings', lazy=True))
    trip_id = db.Column(db.Integer, db.ForeignKey('trips.id', ondelete='SET NULL'), nullable=True)
    trip = db.relationship('Trip', backref=db.backref('bookings', lazy=True))
    seats = db.Column(db.Integer, nullable=False)
    total_cost = db.Column(db.Float, nullable=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
