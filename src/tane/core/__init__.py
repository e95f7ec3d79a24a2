"""Tane core: configuration shared by the generator engine and the CLI."""
