"""Service layer for piefolio."""
