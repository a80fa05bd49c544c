# foodregistry/app.py
from flask import Flask, jsonify
from flask_cors import CORS
import atexit
import os
from sqlalchemy import text

from foodregistry.config import Config
from foodregistry.api import register_blueprints
from foodregistry.api.errors import register_error_handlers, ConfigurationError
from foodregistry.database import (
    get_db_session,
    init_sqlalchemy,
    dispose_sqlalchemy_engine,
)
from foodregistry.database.product_repository import ProductRepository
from foodregistry.database.producer_repository import ProducerRepository
from foodregistry.services import ProductService, ProducerService
from foodregistry.utils.logger import logger, configure_logger
from foodregistry.utils.system_monitor import start_resource_monitor, stop_resource_monitor


def create_app(config_object: Config) -> Flask:
    """
    Factory function to create and configure the Flask application.

    Args:
        config_object: The configuration object for the application.

    Returns:
        The configured Flask application instance.

    Raises:
        ConfigurationError: The database URI is missing or the secret key is unsafe outside debug.
        DatabaseError: The database could not be reached or its schema created.
    """
    app = Flask("FoodRegistry")
    app.config.from_object(config_object)

    # --- Logging ---
    configure_logger(config_object.LOG_LEVEL)
    logger.info("Starting the FoodRegistry API.")
    logger.info(f"Debug mode: {config_object.APP_DEBUG}")

    # --- Secret Key Check ---
    if not config_object.SECRET_KEY or config_object.SECRET_KEY == 'default_secret_key_change_me_in_env':
        if not config_object.APP_DEBUG:
            raise ConfigurationError("SECRET_KEY must be set to a unique value in production.")
        logger.warning("Using the default SECRET_KEY in debug mode.")

    # --- CORS Configuration ---
    CORS(app, resources={r"/api/*": {"origins": config_object.CORS_ORIGINS}})
    logger.info(f"CORS enabled for origins: {config_object.CORS_ORIGINS}")

    # --- Database Initialization (SQLAlchemy) ---
    if not config_object.SQLALCHEMY_DATABASE_URI:
        raise ConfigurationError("SQLALCHEMY_DATABASE_URI is not configured.")

    db_engine = init_sqlalchemy(
        config_object.SQLALCHEMY_DATABASE_URI,
        pool_size=config_object.DB_POOL_SIZE,
        max_overflow=config_object.DB_MAX_OVERFLOW,
        seed_sample_data=config_object.SEED_SAMPLE_DATA,
    )
    atexit.register(dispose_sqlalchemy_engine)

    # --- Repositories and services ---
    product_repo = ProductRepository(db_engine)
    producer_repo = ProducerRepository(db_engine)

    app.config['product_repository'] = product_repo
    app.config['producer_repository'] = producer_repo
    app.config['product_service'] = ProductService(product_repo, producer_repo)
    app.config['producer_service'] = ProducerService(producer_repo, product_repo)
    logger.info("Repositories and services registered in application config.")

    register_blueprints(app)
    register_error_handlers(app)

    # --- Resource Monitoring ---
    # The reloader parent process does not serve requests, skip it
    if not app.debug or os.environ.get('WERKZEUG_RUN_MAIN') == 'true':
        if start_resource_monitor(interval_seconds=config_object.RESOURCE_MONITOR_INTERVAL):
            atexit.register(stop_resource_monitor)

    @app.route('/health', methods=['GET'])
    def health_check():
        db_status = "ok"
        db_error = None
        try:
            with get_db_session() as db:
                db.execute(text("SELECT 1"))
        except Exception as e:
            logger.error(f"Database health check failed: {e}")
            db_status = "error"
            db_error = str(e)

        return jsonify({
            "status": "ok" if db_status == "ok" else "degraded",
            "database": db_status,
            "database_error": db_error,
        }), 200 if db_status == "ok" else 503

    logger.info("FoodRegistry API configured.")
    return app
