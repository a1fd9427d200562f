"""Command line interface for env-at-startup."""
