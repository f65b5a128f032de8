"""Command line host for the indentation-bar renderer."""
