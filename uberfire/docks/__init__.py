"""Dock model and registry."""
