# bikeclub/rentals/views.py
import uuid
from datetime import date, timedelta
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from bikeclub.init_db import db
from bikeclub.rentals.models import Bike, Trip, Order, TripBooking
from bikeclub.exceptions import ValidationError, NotFoundError, GatewayError
from bikeclub.logging_config import setup_logging
from bikeclub.mailer import get_mailer
from bikeclub.validation import (
    EMAIL_PATTERN, MAX_RENTAL_DAYS, MAX_TRIP_SEATS, parse_int, is_valid_id,
)

logger = setup_logging()


def generate_rent_id():
    return str(uuid.uuid4())


def get_bike(bike_id):
    bike = db.session.get(Bike, bike_id) if is_valid_id(bike_id) else None
    if not bike:
        raise NotFoundError('Bike not found')
    return bike


def get_trip(trip_id):
    trip = db.session.get(Trip, trip_id) if is_valid_id(trip_id) else None
    if not trip:
        raise NotFoundError('Trip not found')
    return trip


def featured_bikes():
    return Bike.query.filter_by(featured=True).order_by(Bike.name).all()


def rent_bike(user_id, form, today=None):
    """Reserve one unit of a bike and record the order."""
    bike_id = parse_int(form.get('bike_id'), 'Bike ID', minimum=1)
    rental_days = parse_int(form.get('rental_days'), 'Rental days', minimum=1, maximum=MAX_RENTAL_DAYS)
    renter_name = (form.get('renter_name') or '').strip()
    renter_email = (form.get('renter_email') or '').strip()
    payment_method = (form.get('payment_method') or '').strip()
    rent_id = (form.get('rent_id') or '').strip() or generate_rent_id()

    if not renter_name or not renter_email or not payment_method:
        raise ValidationError('Please fill out all fields.')
    if not EMAIL_PATTERN.fullmatch(renter_email):
        raise ValidationError('Invalid email address.')

    # Conditional decrement keeps quantity >= 0 under concurrent rentals
    reserved = Bike.query.filter(Bike.id == bike_id, Bike.quantity > 0).update(
        {Bike.quantity: Bike.quantity - 1}, synchronize_session=False)
    if reserved != 1:
        db.session.rollback()
        raise NotFoundError('Bike is not available')

    bike = db.session.get(Bike, bike_id)
    rental_date = today or date.today()
    order = Order(
        rent_id=rent_id,
        user_id=user_id,
        bike_id=bike.id,
        renter_name=renter_name,
        renter_email=renter_email,
        rental_days=rental_days,
        payment_method=payment_method,
        rental_date=rental_date,
        return_date=rental_date + timedelta(days=rental_days),
        total_cost=bike.rental_price_per_day * rental_days,
    )
    db.session.add(order)
    try:
        db.session.commit()
    except IntegrityError as e:
        db.session.rollback()
        logger.warning(f"Duplicate rent id {rent_id} for bike {bike_id}")
        raise ValidationError('This booking has already been confirmed.') from e
    except SQLAlchemyError as e:
        db.session.rollback()
        logger.error(f"Database error while renting bike {bike_id}: {e}")
        raise GatewayError() from e

    logger.info(f"Order {order.rent_id} created for bike {bike.name} ({rental_days} days)")
    return order


def send_booking_confirmation(order):
    """Mail the renter. Returns False when the mail could not be delivered."""
    html_content = (
        f"Dear {order.renter_name},<br><br>"
        f"Your bike rental has been successfully booked! Here are your booking details:<br><br>"
        f"Bike Name: {order.bike.name}<br>"
        f"Rental Days: {order.rental_days}<br>"
        f"Total Cost: &#8377;{order.total_cost:,.2f}<br>"
        f"Payment Method: {order.payment_method}<br><br>"
        f"Thank you for renting with Royal Bike Club!<br><br>"
        f"Best regards,<br>Royal Bike Club"
    )
    try:
        get_mailer().send(order.renter_email, 'Bike Rental Confirmation', html_content, to_name=order.renter_name)
    except GatewayError:
        logger.error(f"Booking confirmation for order {order.rent_id} could not be sent")
        return False
    return True


def book_trip(user_id, trip_id, seats_value):
    seats = parse_int(seats_value, 'Seats', minimum=1, maximum=MAX_TRIP_SEATS)
    trip = get_trip(trip_id)

    booked = Trip.query.filter(Trip.id == trip.id, Trip.seats_left >= seats).update(
        {Trip.seats_left: Trip.seats_left - seats}, synchronize_session=False)
    if booked != 1:
        db.session.rollback()
        raise ValidationError('Not enough seats available for booking')

    booking = TripBooking(user_id=user_id, trip_id=trip.id, seats=seats, total_cost=trip.price * seats)
    db.session.add(booking)
    try:
        db.session.commit()
    except SQLAlchemyError as e:
        db.session.rollback()
        logger.error(f"Database error while booking trip {trip_id}: {e}")
        raise GatewayError() from e

    logger.info(f"User {user_id} booked {seats} seat(s) on trip {trip_id}")
    return booking
