"""GallSearch web layer: Flask interface, blueprints, and services."""
