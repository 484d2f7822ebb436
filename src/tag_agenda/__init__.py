"""In-memory agenda with a tag query engine."""

__version__ = "0.1.0"
