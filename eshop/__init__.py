"""Order search service for a small e-commerce schema."""

__version__ = "0.1.0"
