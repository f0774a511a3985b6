"""Daily history source registry."""

from __future__ import annotations

from dailysma.sources.base import BaseHistorySource

# Lazy registry: actual classes imported on demand so pandas is only
# pulled in when the Parquet source is used.
SOURCE_CLASSES: dict[str, str] = {
    "mock": "dailysma.sources.mock.MockHistorySource",
    "parquet": "dailysma.sources.parquet.ParquetHistorySource",
}


def create_source(name: str, **kwargs) -> BaseHistorySource:
    """Instantiate a source by name, forwarding kwargs to its constructor."""
    import importlib

    dotted = SOURCE_CLASSES[name.strip().lower()]
    module_path, cls_name = dotted.rsplit(".", 1)
    module = importlib.import_module(module_path)
    cls = getattr(module, cls_name)
    return cls(**kwargs)


__all__ = ["BaseHistorySource", "SOURCE_CLASSES", "create_source"]
