"""
Embeddings layer for book similarity.

Responsibilities:
- Load a lightweight sentence-transformer model.
- Generate summary, tags and embedding for a catalog book and upsert them.
- Fall back to a deterministic vector when the model is disabled or fails.
- Precompute metadata for the whole catalog (offline).
"""
