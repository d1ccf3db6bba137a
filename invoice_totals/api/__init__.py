"""REST API exposing the totals calculator."""
