"""Shared utilities: validation rules, message catalog, telemetry, and helpers.

Used by domain, application, and infrastructure. No business logic.
"""
