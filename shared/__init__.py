"""Shared infrastructure."""
