"""
Web server for the restaurant map, detail pages and JSON API
"""

import io
import logging
import time
from datetime import datetime, timezone
from typing import Dict, List

import numpy as np
from flask import Flask, Response, jsonify, redirect, render_template, request, session, url_for
from jinja2 import DictLoader
from prometheus_client import Counter, Gauge, Histogram, generate_latest, CollectorRegistry, CONTENT_TYPE_LATEST
from sqlalchemy.exc import SQLAlchemyError

from .config import config
from .core.detail import get_restaurant_detail, parse_restaurant_id
from .core.display import CROWDEDNESS_DISPLAY, PRICE_DISPLAY, QUICK_CUISINES, crowdedness_display, cuisine_glyph, price_display
from .core.filters import FilterCriteria
from .core.restaurant import Restaurant
from .core.view_model import MapViewModel
from .errors import InvalidInput, NotFound
from .mapping.markers import MapView
from .pages import PLANNED_REGIONS, TEMPLATES
from .storage.database import DatabaseManager

logger = logging.getLogger(__name__)

SESSION_KEY = 'map_view'

# Prometheus metrics setup
registry = CollectorRegistry()
app = Flask(__name__)
app.secret_key = config.web.secret_key
app.config['DATABASE_URL'] = config.database.url
app.jinja_loader = DictLoader(TEMPLATES)

# Define metrics
REQUEST_COUNT = Counter(
    'http_requests_total',
    'Total HTTP requests',
    ['method', 'endpoint', 'status_code'],
    registry=registry
)

REQUEST_DURATION = Histogram(
    'http_request_duration_seconds',
    'HTTP request duration in seconds',
    ['method', 'endpoint'],
    registry=registry
)

RESTAURANT_COUNT = Gauge(
    'restaurants_total',
    'Number of restaurants in the loaded snapshot',
    registry=registry
)

FILTER_APPLICATIONS = Counter(
    'filter_applications_total',
    'Filter changes applied to the map view',
    ['action'],
    registry=registry
)

# One store and one read-only snapshot per database URL
_databases: Dict[str, DatabaseManager] = {}
_snapshots: Dict[str, List[Restaurant]] = {}


def get_database() -> DatabaseManager:
    """Store for the configured URL, seeded on first use when empty"""
    url = app.config['DATABASE_URL']
    if url not in _databases:
        db_manager = DatabaseManager(url)
        db_manager.seed_if_empty()
        _databases[url] = db_manager
    return _databases[url]


def get_snapshot() -> List[Restaurant]:
    """Full restaurant collection, loaded (and seeded if empty) on first use"""
    url = app.config['DATABASE_URL']
    if url not in _snapshots:
        restaurants = get_database().load_snapshot()
        _snapshots[url] = restaurants
        RESTAURANT_COUNT.set(len(restaurants))
        logger.info(f"Loaded snapshot of {len(restaurants)} restaurants")
    return _snapshots[url]


def reset_state():
    """Forget cached stores and snapshots (used when the database URL changes)"""
    for db in _databases.values():
        db.engine.dispose()
    _databases.clear()
    _snapshots.clear()


def _load_view_model() -> MapViewModel:
    base = get_snapshot()
    try:
        return MapViewModel.from_session(base, session.get(SESSION_KEY))
    except InvalidInput as e:
        logger.warning(f"Discarding invalid map state from session: {e}")
        session.pop(SESSION_KEY, None)
        return MapViewModel(base)


def _save_view_model(view_model: MapViewModel):
    session[SESSION_KEY] = view_model.to_session()


def _wants_json() -> bool:
    return request.path.startswith('/api/')


# Middleware to track HTTP requests
@app.before_request
def before_request():
    request.start_time = time.time()

@app.after_request
def after_request(response):
    if hasattr(request, 'start_time'):
        duration = time.time() - request.start_time
        REQUEST_DURATION.labels(
            method=request.method,
            endpoint=request.endpoint or 'unknown'
        ).observe(duration)

        REQUEST_COUNT.labels(
            method=request.method,
            endpoint=request.endpoint or 'unknown',
            status_code=str(response.status_code)
        ).inc()

    return response

@app.errorhandler(InvalidInput)
def handle_invalid_input(e):
    logger.warning(f"Bad request to {request.path}: {e}")
    if _wants_json():
        return jsonify({'error': str(e)}), 400
    return render_template('error.html', title='Bad Request', message=str(e)), 400

@app.errorhandler(NotFound)
def handle_not_found(e):
    if _wants_json():
        return jsonify({'error': str(e)}), 404
    return render_template('error.html', title='店舗が見つかりません', message=str(e)), 404

@app.errorhandler(SQLAlchemyError)
def handle_store_error(e):
    logger.error(f"Database error while serving {request.path}: {e}")
    if _wants_json():
        return jsonify({'error': 'Failed to load restaurant data'}), 500
    return render_template('error.html', title='エラー', message='Failed to load restaurant data'), 500

@app.route('/health')
def health_check():
    """Basic health check endpoint"""
    return jsonify({
        'status': 'healthy',
        'timestamp': datetime.now(timezone.utc).isoformat()
    })

@app.route('/status')
def system_status():
    """Detailed system status"""
    try:
        db_manager = get_database()
        db_ok = db_manager.test_connection()
        stats = db_manager.get_stats() if db_ok else {}

        return jsonify({
            'database_connected': db_ok,
            'snapshot_loaded': app.config['DATABASE_URL'] in _snapshots,
            'restaurant_stats': stats,
            'config': config.to_dict()
        })
    except Exception as e:
        logger.error(f"Error in status endpoint: {e}")
        return jsonify({'error': str(e)}), 500

@app.route('/metrics')
def metrics():
    """Prometheus metrics endpoint"""
    try:
        RESTAURANT_COUNT.set(get_database().count_restaurants())

        # Generate and return Prometheus metrics
        return Response(generate_latest(registry), mimetype=CONTENT_TYPE_LATEST)
    except Exception as e:
        logger.error(f"Error in metrics endpoint: {e}")
        return Response(f"Error generating metrics: {str(e)}", status=500, mimetype='text/plain')

@app.route('/')
def landing():
    """Landing page"""
    return render_template('landing.html')

@app.route('/coming-soon')
def coming_soon():
    """Placeholder for regions outside Tokyo"""
    return render_template('coming_soon.html', regions=PLANNED_REGIONS)

@app.route('/map')
def map_page():
    """Map with the filter sidebar and the visible restaurant list"""
    view_model = _load_view_model()

    with MapView(
        on_view_details=view_model.select_restaurant,
        action_url=lambda restaurant_id: url_for('select_restaurant', restaurant_id=restaurant_id)
    ) as map_view:
        unsubscribe = view_model.subscribe(map_view.sync)
        map_data = map_view.to_leaflet()
        unsubscribe()

    cuisines = sorted({restaurant.cuisine_type for restaurant in view_model.base})
    return render_template(
        'map.html',
        restaurants=view_model.visible,
        selected=view_model.selected,
        criteria=view_model.criteria.to_dict(),
        cuisines=cuisines,
        quick_cuisines=QUICK_CUISINES,
        price_options=[(level.value, record) for level, record in PRICE_DISPLAY.items()],
        crowdedness_options=[(level.value, record) for level, record in CROWDEDNESS_DISPLAY.items()],
        map_data=map_data,
        glyph=cuisine_glyph,
        price=price_display,
        crowdedness=crowdedness_display
    )

@app.route('/map/filters', methods=['POST'])
def apply_filters():
    """Replace the active filters with the submitted form"""
    criteria = FilterCriteria.from_params(request.form)
    view_model = _load_view_model()
    view_model.apply_filters(criteria)
    _save_view_model(view_model)
    FILTER_APPLICATIONS.labels(action='apply').inc()
    return redirect(url_for('map_page'))

@app.route('/map/clear', methods=['POST'])
def clear_filters():
    """Drop every filter"""
    view_model = _load_view_model()
    view_model.clear()
    _save_view_model(view_model)
    FILTER_APPLICATIONS.labels(action='clear').inc()
    return redirect(url_for('map_page'))

@app.route('/map/select/<restaurant_id>', methods=['POST'])
def select_restaurant(restaurant_id):
    """Marker popup action: select the restaurant in the sidebar"""
    restaurant_id = parse_restaurant_id(restaurant_id)
    view_model = _load_view_model()

    with MapView(on_view_details=view_model.select_restaurant) as map_view:
        unsubscribe = view_model.subscribe(map_view.sync)
        map_view.view_details(restaurant_id)
        unsubscribe()

    _save_view_model(view_model)
    return redirect(url_for('map_page', _anchor=f'restaurant-{restaurant_id}'))

@app.route('/restaurant/<restaurant_id>')
def restaurant_detail(restaurant_id):
    """Detail page of one restaurant"""
    logger.info(f"Detail page request for restaurant {restaurant_id}")
    detail = get_restaurant_detail(get_database(), restaurant_id)
    return render_template('detail.html', detail=detail)

@app.route('/api/restaurants')
def list_restaurants():
    """Restaurants matching the query parameters, filtered in the database"""
    criteria = FilterCriteria.from_params(request.args)
    restaurants = get_database().get_restaurants_by_filters(criteria)
    return jsonify({
        'filters': criteria.to_dict(),
        'count': len(restaurants),
        'restaurants': [restaurant.to_dict() for restaurant in restaurants]
    })

@app.route('/api/restaurants/csv')
def get_restaurants_csv():
    """Get restaurant data in CSV format"""
    try:
        logger.info("API request for restaurant data (CSV)")
        limit = request.args.get('limit', type=int)

        df = get_database().get_restaurants_dataframe(limit=limit)
        if df.empty:
            logger.warning("No restaurant data available for CSV")
            return Response("No restaurant data available", status=404, mimetype='text/plain')

        # Replace NaN and inf values with None
        df = df.replace([np.nan, np.inf, -np.inf], None)

        # Convert to CSV
        output = io.StringIO()
        df.to_csv(output, index=False)
        csv_data = output.getvalue()
        output.close()

        logger.info(f"Returning CSV with {len(df)} restaurant records")
        return Response(csv_data, mimetype='text/csv', headers={'Content-Disposition': 'attachment; filename=restaurants.csv'})

    except SQLAlchemyError as e:
        logger.error(f"Error in restaurants CSV endpoint: {e}")
        return Response(f"Error: {str(e)}", status=500, mimetype='text/plain')

@app.route('/api/restaurants/<restaurant_id>')
def get_restaurant_by_id(restaurant_id):
    """Get specific restaurant data by ID"""
    logger.info(f"API request for restaurant {restaurant_id}")
    detail = get_restaurant_detail(get_database(), restaurant_id)
    return jsonify(detail.to_dict())

def run_server(host=None, port=None, debug=False):
    """Run the Flask server"""
    app.run(host=host or config.web.host, port=port or config.web.port, debug=debug)
