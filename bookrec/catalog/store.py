from __future__ import annotations

import logging
import threading
from pathlib import Path
from typing import Any, Iterable, Protocol

import pandas as pd

from .config import DEFAULT_CATALOG_CONFIG, CatalogConfig
from .models import EmbeddingMeta, Item

logger = logging.getLogger(__name__)

ITEM_COLUMNS = ["id", "title", "author", "notes"]


class ItemStore(Protocol):
    def get(self, item_id: str) -> Item | None: ...

    def get_many(self, item_ids: list[str]) -> list[Item]: ...

    def list_items(self) -> list[Item]: ...

    def list_all_titles(self) -> list[str]: ...

    def get_embedding_meta(self, item_id: str) -> EmbeddingMeta | None: ...

    def list_embedding_metas(self, exclude_id: str | None = None) -> list[EmbeddingMeta]: ...

    def upsert_embedding_meta(self, record: EmbeddingMeta) -> None: ...


def _clean(value: Any) -> str | None:
    if value is None or pd.isna(value):
        return None
    text = str(value).strip()
    return text or None


def _items_frame(rows: Iterable[dict[str, Any]] | pd.DataFrame) -> pd.DataFrame:
    df = rows.copy() if isinstance(rows, pd.DataFrame) else pd.DataFrame(list(rows))
    for col in ITEM_COLUMNS:
        if col not in df.columns:
            df[col] = None
    df = df[ITEM_COLUMNS]
    df["id"] = df["id"].astype(str)
    df = df.drop_duplicates(subset="id", keep="first")
    return df.set_index("id", drop=False)


class DataFrameItemStore:
    """
    Item store backed by an in-memory pandas DataFrame.

    Embedding metadata is kept in a dict keyed by item id. When
    ``embeddings_path`` is set, every upsert rewrites that JSON-lines file.
    """

    def __init__(
        self,
        items: Iterable[dict[str, Any]] | pd.DataFrame = (),
        metas: Iterable[EmbeddingMeta] = (),
        embeddings_path: Path | None = None,
    ) -> None:
        self._items = _items_frame(items)
        self._metas: dict[str, EmbeddingMeta] = {m.item_id: m for m in metas}
        self._embeddings_path = embeddings_path
        self._write_lock = threading.Lock()

    @classmethod
    def from_config(cls, config: CatalogConfig = DEFAULT_CATALOG_CONFIG) -> DataFrameItemStore:
        if config.items_path.is_file():
            items = pd.read_csv(config.items_path, dtype=str, keep_default_na=False)
        else:
            logger.warning("Catalog file %s not found, starting with an empty catalog", config.items_path)
            items = pd.DataFrame(columns=ITEM_COLUMNS)

        metas: list[EmbeddingMeta] = []
        path = config.embeddings_path
        if path.is_file() and path.stat().st_size > 0:
            frame = pd.read_json(path, lines=True, dtype={"item_id": str}, convert_dates=False)
            for record in frame.to_dict(orient="records"):
                metas.append(EmbeddingMeta(**{k: v for k, v in record.items() if _present(v)}))

        logger.info("Loaded %d catalog items and %d embedding records", len(items), len(metas))
        return cls(items, metas, embeddings_path=path)

    def _to_item(self, row: pd.Series) -> Item:
        return Item(
            id=str(row["id"]),
            title=_clean(row["title"]) or "",
            author=_clean(row["author"]),
            notes=_clean(row["notes"]),
        )

    def get(self, item_id: str) -> Item | None:
        if item_id not in self._items.index:
            return None
        return self._to_item(self._items.loc[item_id])

    def get_many(self, item_ids: list[str]) -> list[Item]:
        return [self._to_item(self._items.loc[i]) for i in item_ids if i in self._items.index]

    def list_items(self) -> list[Item]:
        return [self._to_item(row) for _, row in self._items.iterrows()]

    def list_all_titles(self) -> list[str]:
        return [t for t in (_clean(v) for v in self._items["title"]) if t]

    def get_embedding_meta(self, item_id: str) -> EmbeddingMeta | None:
        return self._metas.get(item_id)

    def list_embedding_metas(self, exclude_id: str | None = None) -> list[EmbeddingMeta]:
        return [m for m in self._metas.values() if m.item_id != exclude_id]

    def upsert_embedding_meta(self, record: EmbeddingMeta) -> None:
        with self._write_lock:
            self._metas[record.item_id] = record
            if self._embeddings_path is not None:
                self._persist(self._embeddings_path)

    def _persist(self, path: Path) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        rows = [m.model_dump(mode="json") for m in self._metas.values()]
        pd.DataFrame(rows).to_json(path, orient="records", lines=True)


def _present(value: Any) -> bool:
    if isinstance(value, (list, tuple)):
        return True
    return value is not None and not pd.isna(value)


_store: DataFrameItemStore | None = None


def get_store() -> DataFrameItemStore:
    """Return the process-wide item store, loading it on first call."""
    global _store
    if _store is None:
        _store = DataFrameItemStore.from_config()
    return _store
