"""
LLM integration layer.

Responsibilities:
- Manage Groq API configuration and credentials.
- Build prompts from a catalog book's title, author and notes.
- Call Groq LLM to write a short summary and a handful of tags.
- Graceful fallback when the LLM is unavailable or returns invalid output.
"""
