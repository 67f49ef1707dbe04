"""HTTP API for the quote router."""
