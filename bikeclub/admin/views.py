# bikeclub/admin/views.py
from datetime import datetime
from sqlalchemy.exc import SQLAlchemyError
from bikeclub.init_db import db
from bikeclub.rentals.models import Bike, Trip
from bikeclub.rentals.views import get_bike, get_trip
from bikeclub.exceptions import ValidationError, GatewayError
from bikeclub.logging_config import setup_logging
from bikeclub.validation import MAX_TRIP_SEATS, parse_int, parse_price

logger = setup_logging()

BIKE_FIELDS = ('name', 'type', 'selling_price', 'rental_price_per_day', 'quantity', 'image_url')
TRIP_FIELDS = ('title', 'description', 'price', 'image_url', 'start_date', 'end_date', 'total_seats')


def _commit(action):
    try:
        db.session.commit()
    except SQLAlchemyError as e:
        db.session.rollback()
        logger.error(f"Database error while trying to {action}: {e}")
        raise GatewayError(f'Failed to {action}. Please try again.') from e


def _text(form, field):
    return (form.get(field) or '').strip()


def _parse_date(value, field):
    try:
        return datetime.strptime(value, '%Y-%m-%d').date()
    except (TypeError, ValueError):
        raise ValidationError(f'{field} must be a date (YYYY-MM-DD).')


def parse_bike_form(form, require_image=True):
    required = BIKE_FIELDS if require_image else BIKE_FIELDS[:-1]
    if any(not _text(form, field) for field in required):
        raise ValidationError('All fields are required.')

    return {
        'name': _text(form, 'name'),
        'type': _text(form, 'type'),
        'selling_price': parse_price(form.get('selling_price'), 'Selling price'),
        'rental_price_per_day': parse_price(form.get('rental_price_per_day'), 'Rental price per day'),
        'quantity': parse_int(form.get('quantity'), 'Quantity'),
        'image_url': _text(form, 'image_url'),
        'featured': form.get('featured') in ('on', 'true', '1'),
    }


def parse_trip_form(form):
    if any(not _text(form, field) for field in TRIP_FIELDS):
        raise ValidationError('All fields are required.')

    start_date = _parse_date(_text(form, 'start_date'), 'Start date')
    end_date = _parse_date(_text(form, 'end_date'), 'End date')
    if end_date < start_date:
        raise ValidationError('End date cannot be before start date.')

    total_seats = parse_int(form.get('total_seats'), 'Total seats', maximum=MAX_TRIP_SEATS)
    if _text(form, 'seats_left'):
        seats_left = parse_int(form.get('seats_left'), 'Seats left')
    else:
        seats_left = total_seats
    if seats_left > total_seats:
        raise ValidationError('Seats left cannot exceed total seats.')

    return {
        'title': _text(form, 'title'),
        'description': _text(form, 'description'),
        'price': parse_price(form.get('price'), 'Price'),
        'image_url': _text(form, 'image_url'),
        'start_date': start_date,
        'end_date': end_date,
        'total_seats': total_seats,
        'seats_left': seats_left,
    }


def create_bike(form):
    bike = Bike(**parse_bike_form(form))
    db.session.add(bike)
    _commit('add bike')
    logger.info(f"Bike '{bike.name}' added with quantity {bike.quantity}")
    return bike


def update_bike(bike_id, form):
    bike = get_bike(bike_id)
    values = parse_bike_form(form, require_image=False)
    # A blank image URL keeps the current image
    if not values['image_url']:
        values.pop('image_url')
    for field, value in values.items():
        setattr(bike, field, value)
    _commit('update bike')
    logger.info(f"Bike {bike_id} updated")
    return bike


def delete_bike(bike_id):
    bike = get_bike(bike_id)
    db.session.delete(bike)
    _commit('delete bike')
    logger.info(f"Bike {bike_id} deleted")


def create_trip(form):
    trip = Trip(**parse_trip_form(form))
    db.session.add(trip)
    _commit('add trip')
    logger.info(f"Trip '{trip.title}' added with {trip.total_seats} seats")
    return trip


def update_trip(trip_id, form):
    trip = get_trip(trip_id)
    for field, value in parse_trip_form(form).items():
        setattr(trip, field, value)
    _commit('update trip')
    logger.info(f"Trip {trip_id} updated")
    return trip


def delete_trip(trip_id):
    trip = get_trip(trip_id)
    db.session.delete(trip)
    _commit('delete trip')
    logger.info(f"Trip {trip_id} deleted")
