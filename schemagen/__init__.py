"""schemagen - Go table models generated from a PostgreSQL catalog."""

__version__ = "0.1.0"
