"""GallSearch utilities: database access and runtime settings."""
