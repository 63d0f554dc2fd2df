from pathlib import Path

import pandas as pd

from bookrec.catalog.config import CatalogConfig
from bookrec.catalog.models import EmbeddingMeta
from bookrec.catalog.store import DataFrameItemStore


def _write_catalog(tmp_path: Path) -> CatalogConfig:
    cfg = CatalogConfig(data_dir=tmp_path)
    pd.DataFrame(
        [
            {"id": "1", "title": "Dune", "author": "Frank Herbert", "notes": "Spice"},
            {"id": "2", "title": "Emma", "author": "", "notes": ""},
            {"id": "1", "title": "Duplicate row", "author": "", "notes": ""},
        ]
    ).to_csv(cfg.items_path, index=False)
    return cfg


def test_from_config_loads_items(tmp_path: Path):
    store = DataFrameItemStore.from_config(_write_catalog(tmp_path))

    dune = store.get("1")
    assert dune.title == "Dune"
    assert dune.author == "Frank Herbert"
    emma = store.get("2")
    assert emma.author is None
    assert emma.notes is None
    assert store.get("3") is None
    assert store.list_all_titles() == ["Dune", "Emma"]
    assert [i.id for i in store.get_many(["2", "missing", "1"])] == ["2", "1"]


def test_missing_files_give_empty_store(tmp_path: Path):
    store = DataFrameItemStore.from_config(CatalogConfig(data_dir=tmp_path / "nothing"))
    assert store.list_items() == []
    assert store.list_all_titles() == []
    assert store.list_embedding_metas() == []


def test_upsert_replaces_and_persists(tmp_path: Path):
    cfg = _write_catalog(tmp_path)
    store = DataFrameItemStore.from_config(cfg)

    store.upsert_embedding_meta(EmbeddingMeta(item_id="1", summary="old", tags=["a"], embedding=[1.0, 0.0]))
    store.upsert_embedding_meta(EmbeddingMeta(item_id="1", summary="new", tags=["b"], embedding=[0.0, 1.0]))
    store.upsert_embedding_meta(EmbeddingMeta(item_id="2", summary="emma", tags=[], embedding=[0.5]))

    assert store.get_embedding_meta("1").summary == "new"
    assert [m.item_id for m in store.list_embedding_metas(exclude_id="1")] == ["2"]

    reloaded = DataFrameItemStore.from_config(cfg)
    meta = reloaded.get_embedding_meta("1")
    assert meta.summary == "new"
    assert meta.tags == ["b"]
    assert meta.embedding == [0.0, 1.0]
    assert len(reloaded.list_embedding_metas()) == 2
