"""Core infrastructure: settings, logging, the SQLite store and date helpers."""
