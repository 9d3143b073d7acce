"""Shared logging and diagnostics for the tool panel runtime."""
