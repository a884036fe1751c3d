"""Shared helpers: age labels, selection parsing, configuration, logging."""
