"""Book recommendation service: embedding similarity plus Open Library fallback."""
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root before any config dataclass reads the environment
load_dotenv(Path(__file__).resolve().parent.parent / ".env")
