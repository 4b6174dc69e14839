"""smsledger CLI commands."""
