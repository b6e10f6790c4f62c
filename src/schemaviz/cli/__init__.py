"""Command-line interface for SchemaViz."""
