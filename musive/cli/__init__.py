"""Command-line trigger surface."""
