"""Runtime settings and constants."""
