"""
Search Blueprint.

JSON endpoints driving the faceted gall search:
- GET  /api/search/options - Root and facet option lists
- GET  /api/search/facets  - Facet registry (name, label, cardinality)
- GET  /api/search/state   - Current query and displayed galls
- POST /api/search/root    - New root search on a host or genus
- POST /api/search/facet   - Edit one facet and narrow the displayed galls
"""

import uuid

from flask import Blueprint, jsonify, request, session

from core.errors import InvalidRootSelector, RootLookupFailure
from logging_config import get_logger
from web.services import search_service

logger = get_logger(__name__)

search_bp = Blueprint("search", __name__, url_prefix="/api/search")

_SESSION_KEY = "search_id"


def _search_id() -> str:
    """Returns the search session id stored in the Flask session cookie."""
    search_id = session.get(_SESSION_KEY)
    if not search_id:
        search_id = uuid.uuid4().hex
        session[_SESSION_KEY] = search_id
    return search_id


def _error(message: str, status: int):
    return jsonify({"status": "error", "error": message}), status


def _is_valid_facet_value(value) -> bool:
    if value is None or isinstance(value, str):
        return True
    if isinstance(value, list):
        return all(isinstance(v, str) for v in value)
    return False


@search_bp.route("/options", methods=["GET"])
def search_options():
    """Option lists for the host/genus inputs and every facet input."""
    return jsonify(search_service.get_search_options())


@search_bp.route("/facets", methods=["GET"])
def search_facets():
    return jsonify({"facets": search_service.get_facet_registry()})


@search_bp.route("/state", methods=["GET"])
def search_state():
    return jsonify({"status": "success", "state": search_service.get_state(_search_id())})


@search_bp.route("/root", methods=["POST"])
def search_root():
    """Fetches the galls for a host or genus and resets all filters."""
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return _error("JSON body with 'host' or 'genus' is required", 400)

    host = data.get("host")
    genus = data.get("genus")
    if (host is not None and not isinstance(host, str)) or (
        genus is not None and not isinstance(genus, str)
    ):
        return _error("'host' and 'genus' must be strings", 400)

    try:
        state = search_service.submit_root(_search_id(), host, genus)
    except InvalidRootSelector as e:
        return _error(str(e), 400)
    except RootLookupFailure as e:
        logger.error(f"Root search failed: {e}")
        return _error(str(e), 502)

    return jsonify({"status": "success", "state": state})


@search_bp.route("/facet", methods=["POST"])
def search_facet():
    """Applies one facet edit to the galls currently displayed."""
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return _error("JSON body with 'field' and 'value' is required", 400)

    field = data.get("field")
    value = data.get("value")
    if not isinstance(field, str) or not field:
        return _error("'field' is required", 400)
    if not _is_valid_facet_value(value):
        return _error("'value' must be a string or a list of strings", 400)

    state = search_service.edit_facet(_search_id(), field, value)
    return jsonify({"status": "success", "state": state})
