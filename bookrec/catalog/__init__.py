"""
Catalog access package for the book recommendation service.

Responsibilities:
- Load the local book catalog and its AI metadata (summary, tags, embedding).
- Normalize stored rows into ``Item`` / ``EmbeddingMeta`` records once, at the
  store boundary.
- Create-or-replace embedding metadata produced by the generation pipeline.
"""
