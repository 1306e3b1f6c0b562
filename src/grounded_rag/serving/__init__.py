"""
Serving — FastAPI application for ingestion and question answering.

This module exposes both pipelines over HTTP so they can run as a
standalone container.
"""
