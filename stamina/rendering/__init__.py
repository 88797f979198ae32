"""Pygame presentation of the stamina meter."""
