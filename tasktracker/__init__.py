"""Personal task tracking API."""
