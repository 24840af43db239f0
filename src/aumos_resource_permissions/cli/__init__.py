"""Command-line interface for aumos-resource-permissions."""
