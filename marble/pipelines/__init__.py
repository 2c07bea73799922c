"""Pipelines that turn uploaded documents into catalog rows.

Each step is callable on its own so the CLI can rasterize a PDF without
touching the database.
"""
