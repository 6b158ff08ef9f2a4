"""Command line interface for the resource server."""
