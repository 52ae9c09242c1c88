"""Presentation layer: web dashboard and command line."""
