"""Core price history, return calculation and the snapshot job."""
