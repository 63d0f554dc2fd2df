"""
Book recommendation engine.

Responsibilities:
- Rank catalog books by cosine similarity of their stored embeddings.
- Fetch related books from Open Library when local data is not enough.
- Deduplicate, exclude and reshuffle external candidates per request.
- Return structured recommendations ready for API serialisation.
"""
