"""Web API for piefolio."""
