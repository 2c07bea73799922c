"""Marble catalog backend: DB models, upload storage, PDF import, REST API.

Serves the public site (products, news, references, team, contact) and the
admin panel that edits them.
"""
