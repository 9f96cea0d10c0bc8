"""Ingestion layer.

Readers turn the raw dataset files into record models.  Every reader failure
surfaces as :class:`~zipstats.exceptions.DatasetLoadError`.
"""
