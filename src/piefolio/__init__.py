"""piefolio - portfolio pie performance snapshots and landing page data."""

__version__ = "1.0.0"
