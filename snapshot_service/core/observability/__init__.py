"""Structured logging and alerting."""
