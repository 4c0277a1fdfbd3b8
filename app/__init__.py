from flask import Flask, request, g
from dotenv import load_dotenv
from app.config import get_config_class
from app.logging import configure_logging
from app.errors import errors_bp
from app.cli import register_cli
from app.api import register_api_v1
from app.version import API_PREFIX
from flask_cors import CORS
from flasgger import Swagger
from prometheus_client import CollectorRegistry
from prometheus_flask_exporter import PrometheusMetrics
from flask_migrate import Migrate
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
import extensions
from celery_app import celery_app
import logging
import os
import uuid
from opentelemetry.trace.propagation.tracecontext import TraceContextTextMapPropagator
from app.telemetry import init_tracing
from app import metrics as app_metrics
from app.routes.media import media_bp
from models import db


def _init_docs(app):
    Swagger(
        app,
        config={
            "headers": [],
            "specs": [
                {
                    "endpoint": "apispec",
                    "route": "/apispec.json",
                    "rule_filter": lambda rule: rule.rule.startswith(f"{API_PREFIX}/"),
                    "model_filter": lambda tag: True,
                }
            ],
            "swagger_ui": True,
            "specs_route": "/docs/",
        },
        template={
            "info": {"title": "Storefront API", "version": "1.0.0"},
            "tags": [
                {"name": "Storefront", "description": "Catalog, cart and checkout"},
                {"name": "Admin", "description": "Back-office endpoints"},
            ],
        },
    )


def _init_metrics(app):
    # Each test app gets its own registry so default metrics can be re-created
    registry = CollectorRegistry() if app.config.get("TESTING") else None
    kwargs = {"registry": registry} if registry is not None else {}
    metrics = PrometheusMetrics(app, path="/metrics", **kwargs)
    if not app.config.get("TESTING") and not os.environ.get("METRICS_APP_INFO_SET"):
        metrics.info("app_info", "Application info", version="1.0.0")
        os.environ["METRICS_APP_INFO_SET"] = "1"


def _init_cors(app):
    allowed = app.config.get("CORS_ALLOWED_ORIGINS", "*")
    if isinstance(allowed, str):
        allowed = allowed.strip()
        origins = "*" if allowed == "*" else [o.strip() for o in allowed.split(",") if o.strip()]
    else:
        origins = allowed or "*"
    CORS(
        app,
        origins=origins,
        supports_credentials=True,
        expose_headers=["X-Request-ID", "traceparent"],
    )


def _register_request_hooks(app):
    @app.before_request
    def _set_request_id():
        incoming = request.headers.get("X-Request-ID")
        g.request_id = (incoming or uuid.uuid4().hex)[:100]
        app.logger.info(f"request start {request.method} {request.path}")

    @app.after_request
    def _add_response_headers(resp):
        rid = getattr(g, "request_id", None)
        if rid:
            resp.headers["X-Request-ID"] = rid
        resp.headers.setdefault("X-Content-Type-Options", "nosniff")
        resp.headers.setdefault("X-Frame-Options", "DENY")
        resp.headers.setdefault("Referrer-Policy", "no-referrer")

        exposed = [h.strip() for h in resp.headers.get("Access-Control-Expose-Headers", "").split(",") if h.strip()]
        for name in ("X-Request-ID", "traceparent"):
            if name not in exposed:
                exposed.append(name)
        resp.headers["Access-Control-Expose-Headers"] = ",".join(exposed)

        carrier = {}
        TraceContextTextMapPropagator().inject(carrier)
        if carrier.get("traceparent"):
            resp.headers["traceparent"] = carrier["traceparent"]
        return resp


def create_app(config_object=None):
    """Application factory."""
    load_dotenv()
    app = Flask(__name__)
    app.config.from_object(config_object or get_config_class())

    configure_logging(app)
    register_cli(app)

    limiter = extensions.limiter
    limiter.init_app(app)
    app.limiter = limiter

    # Tasks queued from requests go to the configured broker
    app.extensions["celery"] = celery_app

    Migrate(app, db, compare_type=True, render_as_batch=True)
    _init_docs(app)
    _init_metrics(app)
    _init_cors(app)

    app.register_blueprint(errors_bp)
    if app.config.get("TESTING"):
        from app.test_support import test_support_bp
        app.register_blueprint(test_support_bp)

    register_api_v1(app)
    app.register_blueprint(media_bp)
    _register_request_hooks(app)

    db.init_app(app)
    init_tracing(app)
    app_metrics.init_app(app)
    if app.config.get("DEBUG") or app.config.get("TESTING"):
        with app.app_context():
            db.create_all()
            logging.info("Tables created")

    @app.route("/health")
    def health():
        try:
            db.session.execute(text("SELECT 1"))
        except SQLAlchemyError:
            logging.exception("Health check could not reach the database")
            return {"status": "degraded", "database": "unreachable"}, 503
        return {"status": "ok", "database": "ok"}, 200

    return app
