"""Shared helpers: commands, logging, files, downloads, services and the database client."""
