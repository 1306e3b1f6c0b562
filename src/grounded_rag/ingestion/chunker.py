"""Text chunking strategies."""

from __future__ import annotations

from grounded_rag.ingestion.models import Chunk


def chunk_text(text: str, max_chunk_size: int = 1000) -> list[str]:
    """Split *text* into word-aligned chunks of at most *max_chunk_size* chars.

    Words (whitespace-separated) are packed greedily into a buffer joined
    by single spaces.  When the next word would push the buffer past
    *max_chunk_size*, the buffer is emitted and a new one starts with that
    word.  Boundaries follow character counts only, not sentences or
    paragraphs.  A word longer than *max_chunk_size* is never cut: it
    becomes its own oversized chunk.

    Returns
    -------
    list[str]
        The chunks in input order; empty when *text* has no words.
    """
    if max_chunk_size < 1:
        raise ValueError(f"max_chunk_size must be >= 1, got {max_chunk_size}")

    chunks: list[str] = []
    buffer = ""
    for word in text.split():
        if buffer and len(buffer) + 1 + len(word) > max_chunk_size:
            chunks.append(buffer)
            buffer = word
        elif buffer:
            buffer = f"{buffer} {word}"
        else:
            buffer = word

    if buffer:
        chunks.append(buffer)
    return chunks


def chunk_page(
    text: str,
    *,
    source_id: str,
    page_number: int,
    max_chunk_size: int = 1000,
) -> list[Chunk]:
    """Chunk one page of *source_id* into :class:`Chunk` values."""
    return [
        Chunk(text=piece, source_id=source_id, page_number=page_number, index=i)
        for i, piece in enumerate(chunk_text(text, max_chunk_size))
    ]
