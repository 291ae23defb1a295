"""Seed scripts, one module per seeded table."""
