# run.py
# Entry point for running the Flask application.
import sys
from foodregistry.app import create_app
from foodregistry.utils.logger import logger
from foodregistry.config.settings import load_config

config = load_config()

if __name__ == '__main__':
    try:
        app = create_app(config)
        logger.info(f"Starting server on {config.APP_HOST}:{config.APP_PORT}")
        # Use waitress or gunicorn for production instead of app.run
        app.run(host=config.APP_HOST, port=config.APP_PORT, debug=config.APP_DEBUG)
    except Exception as e:
        logger.critical(f"Fatal error starting server: {e}", exc_info=True)
        sys.exit(1)
