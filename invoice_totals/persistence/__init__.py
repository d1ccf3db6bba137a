"""Payloads exchanged with the hosted backend."""
