import os
import click
from flask import current_app
from flask.cli import with_appcontext
from flask_migrate import upgrade as alembic_upgrade, stamp as alembic_stamp, migrate as alembic_migrate
from models import db
from models.catalog import Category, Product
from app.services import accounts


def _assert_safe_for_upgrade():
    # Prevent accidental prod upgrades unless explicitly allowed
    env = (current_app.config.get("ENV") or "").lower()
    app_env = (os.getenv("APP_ENV") or "").lower()
    if app_env == "production" or env == "production":
        if (os.getenv("ALLOW_DB_MIGRATIONS") or "").lower() not in ("1", "true", "yes"):
            raise click.ClickException("Refusing to run DB migration in production without ALLOW_DB_MIGRATIONS=true")


@click.command("db-migrate-safe")
@click.option("-m", "--message", default="auto migration", help="Migration message")
@with_appcontext
def db_migrate_safe(message):
    """Generate a new migration script from current models."""
    alembic_migrate(message=message)
    click.echo("Migration script generated.")


@click.command("db-upgrade-safe")
@with_appcontext
def db_upgrade_safe():
    """Apply migrations to the configured database."""
    _assert_safe_for_upgrade()
    alembic_upgrade()
    click.echo("Database upgraded.")


@click.command("db-stamp-safe")
@click.option("--revision", default="head", help="Revision to stamp, default 'head'")
@with_appcontext
def db_stamp_safe(revision):
    """Mark the database at a given revision without running migrations."""
    _assert_safe_for_upgrade()
    alembic_stamp(revision)
    click.echo(f"Database stamped at {revision}.")


SEED_CATEGORIES = [
    {"name": "Vegetables", "name_ta": "காய்கறிகள்", "icon": "🥬"},
    {"name": "Fruits", "name_ta": "பழங்கள்", "icon": "🍎"},
    {"name": "Leafy Greens", "name_ta": "கீரைகள்", "icon": "🌿"},
    {"name": "Exotic", "name_ta": "அயல்நாட்டு", "icon": "🥝"},
]

# (category, name, name_ta, price per kg, offer price, best seller)
SEED_PRODUCTS = [
    ("Vegetables", "Tomato", "தக்காளி", 40, None, True),
    ("Vegetables", "Onion", "வெங்காயம்", 35, 30, True),
    ("Vegetables", "Potato", "உருளைக்கிழங்கு", 30, None, False),
    ("Fruits", "Banana", "வாழைப்பழம்", 60, None, True),
    ("Fruits", "Apple", "ஆப்பிள்", 180, 160, False),
    ("Leafy Greens", "Spinach", "பசலைக்கீரை", 80, None, False),
]


@click.command("seed-catalog")
@with_appcontext
def seed_catalog():
    """Insert default categories and a few sample products if missing."""
    by_name = {c.name: c for c in Category.query.all()}
    for data in SEED_CATEGORIES:
        if data["name"] not in by_name:
            category = Category(**data)
            db.session.add(category)
            by_name[data["name"]] = category
    db.session.flush()

    created = 0
    for category, name, name_ta, price, offer_price, best in SEED_PRODUCTS:
        if Product.query.filter_by(name=name).first():
            continue
        db.session.add(Product(
            category_id=by_name[category].id,
            name=name,
            name_ta=name_ta,
            price=price,
            offer_price=offer_price,
            is_offer=offer_price is not None,
            is_best_seller=best,
        ))
        created += 1
    db.session.commit()
    click.echo(f"Seeded {len(by_name)} categories, {created} new products.")


@click.command("create-admin")
@click.option("--email", required=True, help="Admin email address")
@click.option("--password", required=True, help="Admin password (min 6 characters)")
@with_appcontext
def create_admin(email, password):
    """Create an admin account, or promote an existing account to admin."""
    if len(password) < 6:
        raise click.ClickException("Password must be at least 6 characters")
    user = accounts.create_admin(email, password)
    click.echo(f"Admin ready: {user.email}")


def register_cli(app):
    app.cli.add_command(db_migrate_safe)
    app.cli.add_command(db_upgrade_safe)
    app.cli.add_command(db_stamp_safe)
    app.cli.add_command(seed_catalog)
    app.cli.add_command(create_admin)

