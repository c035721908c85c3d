"""Utilities: battle event log and logging setup."""
