"""Tests for :mod:`client_registry`."""
