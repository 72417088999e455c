"""
Lunch Map - CLI Interface

Main entry point for the lunch-map command line tool.
"""

import logging
import sys
import signal
import os
from pathlib import Path

import click
from sqlalchemy.exc import SQLAlchemyError

from .core.detail import get_restaurant_detail
from .core.filters import FilterCriteria, filter_restaurants
from .core.restaurant import CrowdednessLevel, PriceRange
from .errors import InvalidInput, NotFound
from .storage.database import DatabaseManager

logger = logging.getLogger(__name__)


def _setup_logging():
    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[
            logging.StreamHandler(sys.stdout),
            logging.FileHandler('lunch_map.log')
        ]
    )


@click.group()
@click.version_option(version='1.0.0')
def cli():
    """
    Lunch Map

    Browse Tokyo lunch spots on a map, filter them by cuisine, price,
    opening status, crowdedness and distance.
    """
    _setup_logging()


@cli.command('init-db')
@click.option('--database-url', help='Database URL override')
@click.option('--no-seed', is_flag=True, help='Create the schema without inserting sample data')
def init_db(database_url, no_seed):
    """
    Create the restaurants table and seed it when empty
    """
    try:
        db_manager = DatabaseManager(database_url)
        click.echo("[DB] Schema ready")

        if no_seed:
            return

        inserted = db_manager.seed_if_empty()
        if inserted:
            click.echo(f"✅ Inserted {inserted} sample restaurants")
        else:
            click.echo("[INFO] Store already holds restaurants, nothing seeded")

    except Exception as e:
        logger.error(f"Error initializing database: {e}")
        raise click.ClickException(f"Initialization failed: {e}")


@cli.command('list')
@click.option('--cuisine', help='Cuisine tag, e.g. 和食')
@click.option('--price-range', type=click.Choice([p.value for p in PriceRange]), help='Price tier')
@click.option('--status', 'open_status', type=click.Choice(['open', 'closed']), help='Only open or only closed restaurants')
@click.option('--crowdedness', type=click.Choice([c.value for c in CrowdednessLevel]), help='Crowdedness level')
@click.option('--lat', type=float, help='Latitude of the search center')
@click.option('--lng', type=float, help='Longitude of the search center')
@click.option('--radius', type=float, help='Search radius in kilometers')
@click.option('--in-memory', is_flag=True, help='Filter the loaded snapshot instead of querying SQL')
@click.option('--database-url', help='Database URL override')
def list_restaurants(cuisine, price_range, open_status, crowdedness, lat, lng, radius, in_memory, database_url):
    """
    List restaurants matching the given filters
    """
    try:
        criteria = FilterCriteria.from_params({
            'cuisine': cuisine,
            'price_range': price_range,
            'is_open': {'open': True, 'closed': False}.get(open_status),
            'crowdedness': crowdedness,
            'lat': lat,
            'lng': lng,
            'radius': radius
        })
    except InvalidInput as e:
        raise click.BadParameter(str(e))

    try:
        db_manager = DatabaseManager(database_url)
        if in_memory:
            restaurants = filter_restaurants(db_manager.load_snapshot(), criteria)
        else:
            db_manager.seed_if_empty()
            restaurants = db_manager.get_restaurants_by_filters(criteria)
    except Exception as e:
        logger.error(f"Error listing restaurants: {e}")
        raise click.ClickException(f"Listing failed: {e}")

    click.echo(f"[DATA] {len(restaurants)} restaurants")
    for restaurant in restaurants:
        status = 'open' if restaurant.is_open else 'closed'
        click.echo(
            f"   • #{restaurant.id} {restaurant.name} [{restaurant.cuisine_type}, "
            f"{restaurant.price_range.value}, {status}, {restaurant.crowdedness_level.value}]"
        )


@cli.command()
@click.argument('restaurant_id')
@click.option('--database-url', help='Database URL override')
def show(restaurant_id, database_url):
    """
    Show the full record of one restaurant
    """
    try:
        detail = get_restaurant_detail(DatabaseManager(database_url), restaurant_id)
    except InvalidInput as e:
        raise click.BadParameter(str(e), param_hint='RESTAURANT_ID')
    except NotFound as e:
        raise click.ClickException(str(e))

    r = detail.restaurant
    click.echo(f"{detail.glyph} {r.name} (#{r.id})")
    click.echo(f"   • Address: {r.address}")
    click.echo(f"   • Position: {r.latitude}, {r.longitude}")
    click.echo(f"   • Cuisine: {r.cuisine_type}")
    click.echo(f"   • Price: {detail.price.label}")
    click.echo(f"   • Status: {detail.status.label}")
    click.echo(f"   • Crowdedness: {detail.crowdedness.label}")
    for label, value in (('Hours', r.opening_hours), ('Phone', r.phone), ('Description', r.description),
                         ('Popular menu', r.popular_menu), ('Access', r.access_info)):
        if value:
            click.echo(f"   • {label}: {value}")
    if r.rating is not None:
        click.echo(f"   • Rating: {r.rating} ({r.review_count or 0} reviews)")
    click.echo(f"   • Photos: {len(detail.photos)}")


@cli.command()
@click.option('--format', '-f', 'export_format', type=click.Choice(['json', 'csv']), default='json', help='Export format')
@click.option('--output', '-o', help='Output file (default: data/restaurants_export.<format>)')
@click.option('--database-url', help='Database URL override')
def export(export_format, output, database_url):
    """
    Write every stored restaurant to a JSON or CSV file
    """
    db_manager = DatabaseManager(database_url)
    exporters = {'json': db_manager.export_to_json, 'csv': db_manager.export_to_csv}

    try:
        exported_path = exporters[export_format](output)
    except (OSError, ValueError, SQLAlchemyError) as e:
        logger.error(f"Error during {export_format} export: {e}")
        raise click.ClickException(f"Export failed: {e}")

    size = Path(exported_path).stat().st_size
    click.echo(f"✅ Exported {db_manager.count_restaurants()} restaurants to {exported_path} ({size:,} bytes)")


@cli.command()
@click.option('--database-url', help='Database URL override')
def status(database_url):
    """
    Show current system status and statistics
    """
    click.echo("System Status")
    click.echo("=" * 50)

    try:
        db_manager = DatabaseManager(database_url)
        db_ok = db_manager.test_connection()
        click.echo(f"[LINK] Database: {'OK' if db_ok else 'ERROR'}")
        if not db_ok:
            click.echo("WARNING: Database connection failed")
            return

        stats = db_manager.get_stats()

        click.echo("[DB]  Database Status:")
        click.echo(f"   • Total restaurants: {stats['total_restaurants']:,}")
        click.echo(f"   • Open now: {stats['open_restaurants']:,}")

        for title, key in (('By cuisine', 'by_cuisine'), ('By price range', 'by_price_range'),
                           ('By crowdedness', 'by_crowdedness')):
            click.echo(f"[CHART] {title}:")
            for value, count in sorted(stats[key].items()):
                click.echo(f"   • {value}: {count}")

    except Exception as e:
        logger.error(f"Error getting status: {e}")
        click.echo(f"[ERROR] Error getting status: {e}")
        raise click.ClickException(f"Status check failed: {e}")


@cli.command()
@click.option('--host', default=None, help='Host to bind to')
@click.option('--port', default=None, type=int, help='Port to bind to')
@click.option('--database-url', help='Database URL override')
@click.option('--debug', is_flag=True, help='Run in debug mode')
def serve(host, port, database_url, debug):
    """
    Run the web server for the map, detail pages and JSON API
    """
    from .web import app, run_server

    if database_url:
        app.config['DATABASE_URL'] = database_url

    click.echo(f"Starting web server on {host or 'default host'}:{port or 'default port'}")

    def signal_handler(signum, frame):
        click.echo("Shutting down gracefully...")
        os._exit(0)

    signal.signal(signal.SIGINT, signal_handler)
    signal.signal(signal.SIGTERM, signal_handler)

    try:
        run_server(host=host, port=port, debug=debug)
    except Exception as e:
        logger.error(f"Error running server: {e}")
        raise click.ClickException(f"Server failed: {e}")


if __name__ == '__main__':
    cli()
