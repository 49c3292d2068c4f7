"""Bundled static assets for the dashboard."""
