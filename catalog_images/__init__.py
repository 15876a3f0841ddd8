"""Perfume catalog image resolution."""
