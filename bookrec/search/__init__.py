"""
External candidate search.

Responsibilities:
- Query the Open Library full-text search API.
- Normalize provider documents into ``Candidate`` records at the fetch boundary.
- Degrade to an empty, flagged result on any network or parse failure.
"""
