"""Notifications and telemetry support."""
