# Main Flask application

import logging
from datetime import date
import sys

from flask import Flask, jsonify
from flask.json.provider import DefaultJSONProvider
from flask_cors import CORS
from routes.events import events_bp
from routes.stats import stats_bp
from database import init_db
import config

# =========== SET UP ============ #

logging.basicConfig(
    level=getattr(logging, config.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s [%(levelname)s] %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)]
)


class IsoDateJSONProvider(DefaultJSONProvider):
    """Serialize DATE/DATETIME columns as ISO 8601 instead of RFC 822"""

    @staticmethod
    def default(o):
        if isinstance(o, date):
            return o.isoformat()
        return DefaultJSONProvider.default(o)


def create_app(db_config=None):
    app = Flask(__name__)
    app.json = IsoDateJSONProvider(app)
    CORS(app)  # Enable CORS for frontend

    # Load database configuration
    app.config['DB_CONFIG'] = db_config or config.DB_CONFIG
    app.config['DB_POOL_SIZE'] = config.DB_POOL_SIZE
    app.config['STATS_MAX_WORKERS'] = config.STATS_MAX_WORKERS

    init_db(app)

    # Register blueprints
    app.register_blueprint(events_bp, url_prefix='/api/episode')
    app.register_blueprint(stats_bp, url_prefix='/api/episode')

    # =========== APIs ============ #

    @app.route('/api/health')
    def health():
        return jsonify({"status": "ok"}), 200

    @app.errorhandler(404)
    def not_found(error):
        return jsonify({"error": "Endpoint not found"}), 404

    @app.errorhandler(500)
    def internal_error(error):
        return jsonify({"error": "Internal server error"}), 500

    return app


app = create_app()

if __name__ == '__main__':
    app.run(debug=config.DEBUG, host=config.HOST, port=config.PORT)
