"""Tane command-line interface."""
