"""Command-line interface for smsledger."""
