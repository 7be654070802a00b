"""Core domain: transaction store, connection finder, exceptions and units."""
