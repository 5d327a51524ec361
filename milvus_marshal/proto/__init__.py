from . import common, milvus, schema

__all__ = ["common", "milvus", "schema"]
