# bikeclub/admin/routes.py
from flask import Blueprint, request, redirect, url_for, render_template
from bikeclub.decorators import admin_required
from bikeclub.rentals.models import Bike, Trip, Order
from bikeclub.rentals.views import get_bike, get_trip
from bikeclub.admin.views import (
    create_bike, update_bike, delete_bike, create_trip, update_trip, delete_trip,
)
from bikeclub.exceptions import ValidationError, NotFoundError, GatewayError


admin_bp = Blueprint('admin', __name__)

RECENT_ORDERS = 10


@admin_bp.route('/dashboard', methods=['GET'])
@admin_required
def dashboard():
    bikes = Bike.query.order_by(Bike.name).all()
    trips = Trip.query.order_by(Trip.start_date).all()
    orders = Order.query.order_by(Order.created_at.desc()).limit(RECENT_ORDERS).all()
    return render_template('admin/dashboard.html', bikes=bikes, trips=trips, orders=orders)


@admin_bp.route('/add-bike', methods=['GET'])
@admin_required
def add_bike_form():
    return render_template('admin/bike_form.html', bike=None, message=None)


@admin_bp.route('/add-bike', methods=['POST'])
@admin_required
def add_bike():
    try:
        create_bike(request.form)
    except (ValidationError, GatewayError) as e:
        status = 400 if isinstance(e, ValidationError) else 500
        return render_template('admin/bike_form.html', bike=None, message=e.message), status
    return redirect(url_for('admin.view_bikes'))


@admin_bp.route('/view-bikes', methods=['GET'])
@admin_required
def view_bikes():
    bikes = Bike.query.order_by(Bike.name).all()
    return render_template('admin/view_bikes.html', bikes=bikes)


@admin_bp.route('/view-bike/<int:bike_id>', methods=['GET'])
@admin_required
def view_bike(bike_id):
    try:
        bike = get_bike(bike_id)
    except NotFoundError as e:
        return e.message, 404
    return render_template('admin/view_bike.html', bike=bike)


@admin_bp.route('/update-bike/<int:bike_id>', methods=['GET'])
@admin_required
def update_bike_form(bike_id):
    try:
        bike = get_bike(bike_id)
    except NotFoundError as e:
        return e.message, 404
    return render_template('admin/bike_form.html', bike=bike, message=None)


@admin_bp.route('/update-bike/<int:bike_id>', methods=['POST'])
@admin_required
def update_bike_route(bike_id):
    try:
        update_bike(bike_id, request.form)
    except NotFoundError as e:
        return e.message, 404
    except (ValidationError, GatewayError) as e:
        status = 400 if isinstance(e, ValidationError) else 500
        return render_template('admin/bike_form.html', bike=get_bike(bike_id), message=e.message), status
    return redirect(url_for('admin.view_bikes'))


@admin_bp.route('/delete-bike/<int:bike_id>', methods=['POST'])
@admin_required
def delete_bike_route(bike_id):
    try:
        delete_bike(bike_id)
    except NotFoundError as e:
        return e.message, 404
    except GatewayError as e:
        return e.message, 500
    return redirect(url_for('admin.view_bikes'))


@admin_bp.route('/add-trip', methods=['GET'])
@admin_required
def add_trip_form():
    return render_template('admin/trip_form.html', trip=None, message=None)


@admin_bp.route('/add-trip', methods=['POST'])
@admin_required
def add_trip():
    try:
        create_trip(request.form)
    except (ValidationError, GatewayError) as e:
        status = 400 if isinstance(e, ValidationError) else 500
        return render_template('admin/trip_form.html', trip=None, message=e.message), status
    return redirect(url_for('admin.view_trips'))


@admin_bp.route('/view-trips', methods=['GET'])
@admin_required
def view_trips():
    trips = Trip.query.order_by(Trip.start_date).all()
    return render_template('admin/view_trips.html', trips=trips)


@admin_bp.route('/view-trip/<int:trip_id>', methods=['GET'])
@admin_required
def view_trip(trip_id):
    try:
        trip = get_trip(trip_id)
    except NotFoundError as e:
        return e.message, 404
    return render_template('admin/view_trip.html', trip=trip)


@admin_bp.route('/update-trip/<int:trip_id>', methods=['GET'])
@admin_required
def update_trip_form(trip_id):
    try:
        trip = get_trip(trip_id)
    except NotFoundError as e:
        return e.message, 404
    return render_template('admin/trip_form.html', trip=trip, message=None)


@admin_bp.route('/update-trip/<int:trip_id>', methods=['POST'])
@admin_required
def update_trip_route(trip_id):
    try:
        update_trip(trip_id, request.form)
    except NotFoundError as e:
        return e.message, 404
    except (ValidationError, GatewayError) as e:
        status = 400 if isinstance(e, ValidationError) else 500
        return render_template('admin/trip_form.html', trip=get_trip(trip_id), message=e.message), status
    return redirect(url_for('admin.view_trips'))


@admin_bp.route('/delete-trip/<int:trip_id>', methods=['POST'])
@admin_required
def delete_trip_route(trip_id):
    try:
        delete_trip(trip_id)
    except NotFoundError as e:
        return e.message, 404
    except GatewayError as e:
        return e.message, 500
    return redirect(url_for('admin.view_trips'))
