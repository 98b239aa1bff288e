"""Upstream access, parsing, aggregation and the read-side repository."""
