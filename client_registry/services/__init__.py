"""Integrations with backing services."""
