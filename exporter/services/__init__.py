"""Exporter services."""
