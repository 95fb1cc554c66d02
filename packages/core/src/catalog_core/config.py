"""Runtime configuration for the catalog repositories."""

from __future__ import annotations

import os
from dataclasses import dataclass, fields
from typing import Any

_ENV_PREFIX = "CATALOG_"


@dataclass(frozen=True)
class CatalogConfig:
    """Configuration shared by the catalog repositories.

    Attributes:
        database: Document database name.
        products_collection: Collection (container) holding products.
        partition_key_field: Document field the collection is partitioned by.
        fallback_partition_key: Key used for entities that carry none.
            ``None`` (the default) keeps such writes partition-less: they are
            keyed by id alone and reported as degraded.
        mongo_url: Connection string for the document store.
        server_selection_timeout_ms: Driver server selection timeout.
        connect_timeout_ms: Driver connect timeout.
        stream_batch_size: Rows/documents per round-trip when streaming.
    """

    database: str = "catalog"
    products_collection: str = "products"
    partition_key_field: str = "partition_key"
    fallback_partition_key: str | None = None
    mongo_url: str = "mongodb://localhost:27017"
    server_selection_timeout_ms: int = 5000
    connect_timeout_ms: int = 10000
    stream_batch_size: int = 100

    @classmethod
    def from_env(cls, environ: dict[str, str] | None = None) -> CatalogConfig:
        """Build a config from ``CATALOG_*`` environment variables.

        ``CATALOG_STREAM_BATCH_SIZE=50`` sets ``stream_batch_size`` and so on.
        Unset variables keep their defaults; an empty
        ``CATALOG_FALLBACK_PARTITION_KEY`` means "no fallback".
        """
        env = os.environ if environ is None else environ
        values: dict[str, Any] = {}
        for f in fields(cls):
            raw = env.get(_ENV_PREFIX + f.name.upper())
            if raw is None:
                continue
            if f.type in ("int", int):
                values[f.name] = int(raw)
            elif f.name == "fallback_partition_key":
                values[f.name] = raw.strip() or None
            else:
                values[f.name] = raw
        return cls(**values)
