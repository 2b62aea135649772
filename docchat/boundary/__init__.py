"""Boundary adapters: local database and AI provider."""
