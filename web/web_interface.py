# ------------------------------------------------------------------------------
# web_interface.py
# ------------------------------------------------------------------------------

import logging

from flask import Flask, jsonify

from config import get_config
from web.blueprints.search import search_bp

logger = logging.getLogger(__name__)


def create_web_interface():
    """
    Creates the Flask server for the gall search.

    Returns:
        Dictionary with the Flask app under "server" and a "run" callable.
    """
    config = get_config()

    server = Flask(__name__)
    server.secret_key = config["FLASK_SECRET_KEY"]
    if config["FLASK_SECRET_KEY"] == "change-me":
        logger.warning("FLASK_SECRET_KEY not set in .env file, using default. THIS IS INSECURE.")

    server.register_blueprint(search_bp)

    @server.route("/health")
    def health():
        return jsonify({"status": "ok"})

    def run(debug=False, host="0.0.0.0", port=8050):
        server.run(debug=debug, host=host, port=port)

    return {"server": server, "run": run}
