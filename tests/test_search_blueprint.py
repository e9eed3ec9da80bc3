"""Tests for the /api/search endpoints."""

from unittest.mock import patch

import pytest
from flask import Flask

from core.records import GallRecord
from core.root_query import RootLookupInterface
from web.services import search_service

GALLS = (
    GallRecord(id=1, species_id=11, name="One", color="green", locations=("stem",),
               hosts=("Quercus alba",), description="d" * 450),
    GallRecord(id=2, species_id=12, name="Two", color="brown", locations=("leaf",)),
    GallRecord(id=3, species_id=13, name="Three", color="green", locations=("leaf",)),
)


class _FakeLookup(RootLookupInterface):
    def __init__(self):
        self.fail = False

    def fetch_by_host(self, name):
        if self.fail:
            raise ConnectionError("database unavailable")
        return list(GALLS) if name == "Quercus alba" else []

    def fetch_by_genus(self, name):
        if self.fail:
            raise ConnectionError("database unavailable")
        return list(GALLS) if name == "Quercus" else []


@pytest.fixture
def lookup(monkeypatch):
    fake = _FakeLookup()
    monkeypatch.setattr(search_service, "_lookup_factory", lambda: fake)
    search_service.reset_sessions()
    yield fake
    search_service.reset_sessions()


@pytest.fixture
def app(lookup):
    app = Flask(__name__)
    app.config["TESTING"] = True
    app.secret_key = "test-secret-key"

    from web.blueprints.search import search_bp

    app.register_blueprint(search_bp)
    return app


@pytest.fixture
def client(app):
    with app.test_client() as client:
        yield client


def _displayed_ids(response) -> list[int]:
    return [g["id"] for g in response.get_json()["state"]["galls"]]


class TestRootSearch:
    def test_host_search_loads_all_candidates(self, client):
        response = client.post("/api/search/root", json={"host": "Quercus alba"})

        assert response.status_code == 200
        data = response.get_json()
        assert data["status"] == "success"
        assert data["state"]["phase"] == "loaded"
        assert data["state"]["root"] == {"kind": "host", "name": "Quercus alba"}
        assert data["state"]["query"] == {}
        assert _displayed_ids(response) == [1, 2, 3]

    def test_description_is_summarized(self, client):
        response = client.post("/api/search/root", json={"genus": "Quercus"})
        first = response.get_json()["state"]["galls"][0]
        assert first["description"] == "d" * 400 + "..."
        assert first["hosts"] == ["Quercus alba"]
        assert first["species_id"] == 11

    def test_both_host_and_genus_is_rejected(self, client):
        response = client.post(
            "/api/search/root", json={"host": "Quercus alba", "genus": "Quercus"}
        )
        assert response.status_code == 400
        assert response.get_json()["status"] == "error"

    def test_neither_host_nor_genus_is_rejected(self, client):
        response = client.post("/api/search/root", json={"host": ""})
        assert response.status_code == 400

    def test_missing_body_is_rejected(self, client):
        response = client.post("/api/search/root", data="not json")
        assert response.status_code == 400

    def test_lookup_failure_keeps_previous_state(self, client, lookup):
        client.post("/api/search/root", json={"host": "Quercus alba"})
        client.post("/api/search/facet", json={"field": "color", "value": "green"})

        lookup.fail = True
        response = client.post("/api/search/root", json={"genus": "Quercus"})
        assert response.status_code == 502

        state = client.get("/api/search/state").get_json()["state"]
        assert state["phase"] == "filtered"
        assert [g["id"] for g in state["galls"]] == [1, 3]


class TestFacetEdits:
    def test_scenario_narrows_and_never_restores(self, client):
        client.post("/api/search/root", json={"host": "Quercus alba"})

        response = client.post("/api/search/facet", json={"field": "color", "value": "green"})
        assert _displayed_ids(response) == [1, 3]

        response = client.post(
            "/api/search/facet", json={"field": "locations", "value": ["leaf"]}
        )
        assert _displayed_ids(response) == [3]

        response = client.post("/api/search/facet", json={"field": "color", "value": ""})
        assert _displayed_ids(response) == [3]
        assert response.get_json()["state"]["query"] == {"color": "", "locations": ["leaf"]}

    def test_multi_select_on_single_facet_keeps_first(self, client):
        client.post("/api/search/root", json={"host": "Quercus alba"})
        response = client.post(
            "/api/search/facet", json={"field": "color", "value": ["brown", "green"]}
        )
        assert _displayed_ids(response) == [2]
        assert response.get_json()["state"]["query"]["color"] == "brown"

    def test_new_root_resets_filters(self, client):
        client.post("/api/search/root", json={"host": "Quercus alba"})
        client.post("/api/search/facet", json={"field": "color", "value": "brown"})

        response = client.post("/api/search/root", json={"host": "Quercus alba"})
        assert _displayed_ids(response) == [1, 2, 3]
        assert response.get_json()["state"]["query"] == {}

    def test_invalid_value_type_is_rejected(self, client):
        response = client.post("/api/search/facet", json={"field": "color", "value": 5})
        assert response.status_code == 400

    def test_missing_field_is_rejected(self, client):
        response = client.post("/api/search/facet", json={"value": "green"})
        assert response.status_code == 400

    def test_edit_before_root_is_ignored(self, client):
        response = client.post("/api/search/facet", json={"field": "color", "value": "green"})
        assert response.status_code == 200
        state = response.get_json()["state"]
        assert state["phase"] == "empty"
        assert state["galls"] == []

    def test_sessions_are_isolated(self, app, client):
        client.post("/api/search/root", json={"host": "Quercus alba"})
        client.post("/api/search/facet", json={"field": "color", "value": "brown"})

        with app.test_client() as other:
            state = other.get("/api/search/state").get_json()["state"]
            assert state["phase"] == "empty"


class TestOptions:
    def test_facets_endpoint_lists_registry(self, client):
        response = client.get("/api/search/facets")
        assert response.status_code == 200
        facets = response.get_json()["facets"]
        names = [f["name"] for f in facets]
        assert names == [
            "locations",
            "detachable",
            "textures",
            "alignment",
            "walls",
            "cells",
            "shape",
            "color",
        ]
        by_name = {f["name"]: f for f in facets}
        assert by_name["locations"]["cardinality"] == "multi"
        assert by_name["color"]["cardinality"] == "single"

    def test_options_endpoint(self, client):
        with patch("web.services.search_service.catalog_core") as mock_catalog:
            mock_catalog.get_root_options.return_value = {
                "hosts": ["Quercus alba"],
                "genera": ["Quercus"],
            }
            mock_catalog.get_filter_options.return_value = {"color": ["green"]}

            response = client.get("/api/search/options")

        assert response.status_code == 200
        data = response.get_json()
        assert data["roots"]["genera"] == ["Quercus"]
        assert data["facets"]["color"] == ["green"]


def test_session_registry_evicts_oldest(monkeypatch, lookup):
    monkeypatch.setattr(
        "web.services.search_service.settings_core.get_max_search_sessions", lambda: 2
    )
    first = search_service.get_session("a")
    search_service.get_session("b")
    search_service.get_session("c")

    assert search_service.session_count() == 2
    assert search_service.get_session("a") is not first
