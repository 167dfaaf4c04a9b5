"""Command line interface for mapbox-speech."""
