"""LakePath: case-tolerant path resolution and listing for Azure Data Lake Gen2."""

__version__ = "0.1.0"
