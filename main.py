# ------------------------------------------------------------------------------
# Main Script for the Gall Search Web Interface
# main.py
# ------------------------------------------------------------------------------
from config import get_config

config = get_config()
from logging_config import get_logger

logger = get_logger(__name__)
import json
import os

# --------------------------------------------------------------------------
# Configuration Parameters
# --------------------------------------------------------------------------
_debug = config["DEBUG_MODE"]
data_dir = config["DATA_DIR"]

logger.info(f"Debug mode is {'enabled' if _debug else 'disabled'}.")
logger.info(
    "Configuration: "
    + json.dumps({k: v for k, v in config.items() if k != "FLASK_SECRET_KEY"}, indent=2)
)

os.makedirs(data_dir, exist_ok=True)

# -----------------------------
# Import and Run the Web Interface
# -----------------------------
from web.web_interface import create_web_interface

# Expose the Flask server as the WSGI app.
interface = create_web_interface()
app = interface["server"]

if __name__ == '__main__':
    interface["run"](debug=_debug, host=config["WEB_HOST"], port=config["WEB_PORT"])
