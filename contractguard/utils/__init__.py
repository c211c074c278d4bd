"""Logging, request context, dependency wiring and input rules."""
