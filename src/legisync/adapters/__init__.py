"""Adapters binding the sync engine to concrete services."""
