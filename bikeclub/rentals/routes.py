# bikeclub/rentals/routes.py
from flask import Blueprint, request, redirect, url_for, render_template
from flask_login import login_required, current_user
from bikeclub.rentals.models import Bike, Trip
from bikeclub.rentals.views import (
    featured_bikes, get_bike, generate_rent_id, rent_bike,
    send_booking_confirmation, book_trip,
)
from bikeclub.exceptions import ValidationError, NotFoundError, GatewayError


rentals_bp = Blueprint('rentals', __name__)


@rentals_bp.route('/', methods=['GET'])
def index():
    user = current_user if current_user.is_authenticated else None
    return render_template('index.html', featured_bikes=featured_bikes(), user=user)


@rentals_bp.route('/user-dashboard', methods=['GET'])
@login_required
def user_dashboard():
    return render_template('index.html', featured_bikes=featured_bikes(), user=current_user)


@rentals_bp.route('/rentals', methods=['GET'])
def list_rentals():
    rentals = Bike.query.order_by(Bike.name).all()
    return render_template('rentals.html', rentals=rentals)


@rentals_bp.route('/bikes', methods=['GET'])
def list_bikes():
    bikes = Bike.query.order_by(Bike.name).all()
    return render_template('bikes.html', bikes=bikes)


@rentals_bp.route('/rent/<int:bike_id>', methods=['GET'])
@login_required
def rent_form(bike_id):
    try:
        bike = get_bike(bike_id)
    except NotFoundError as e:
        return e.message, 404
    return render_template('rent_bike.html', bike_details=bike, rent_id=generate_rent_id(), message=None)


@rentals_bp.route('/rent/confirm', methods=['POST'])
@login_required
def rent_confirm():
    try:
        order = rent_bike(current_user.id, request.form)
    except NotFoundError as e:
        return e.message, 404
    except ValidationError as e:
        return e.message, 400
    except GatewayError as e:
        return e.message, 500

    mail_sent = send_booking_confirmation(order)
    return render_template('rent_confirmed.html', order=order, mail_sent=mail_sent)


@rentals_bp.route('/trips', methods=['GET'])
def list_trips():
    trips = Trip.query.order_by(Trip.start_date).all()
    return render_template('trips.html', trips=trips)


@rentals_bp.route('/book-trip/<int:trip_id>', methods=['POST'])
@login_required
def book_trip_route(trip_id):
    try:
        book_trip(current_user.id, trip_id, request.form.get('seats'))
    except NotFoundError as e:
        return e.message, 404
    except ValidationError as e:
        return e.message, 400
    except GatewayError as e:
        return e.message, 500

    return redirect(url_for('rentals.list_trips'))
