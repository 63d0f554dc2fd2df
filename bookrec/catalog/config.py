from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

_DEFAULT_DATA_DIR = Path(__file__).resolve().parent.parent / "data"


@dataclass(frozen=True)
class CatalogConfig:
    """
    Location of the local catalog files.

    ``books.csv`` holds ``id,title,author,notes`` rows; ``book_ai.jsonl`` holds
    one embedding metadata record per line.
    """

    data_dir: Path = Path(os.getenv("BOOKREC_DATA_DIR", str(_DEFAULT_DATA_DIR)))
    items_filename: str = "books.csv"
    embeddings_filename: str = "book_ai.jsonl"

    @property
    def items_path(self) -> Path:
        return self.data_dir / self.items_filename

    @property
    def embeddings_path(self) -> Path:
        return self.data_dir / self.embeddings_filename


DEFAULT_CATALOG_CONFIG = CatalogConfig()
