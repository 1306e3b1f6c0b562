"""
Ingestion — page extraction, chunking, and embedding into the vector index.

This module is responsible for the batch pipeline that converts source
documents (PDF, Markdown, plain text) into embedded chunks stored in a
vector index.  It shares no in-memory state with the query side.
"""
