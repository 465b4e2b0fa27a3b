"""Typer application: run, start, validate, preview, doctor."""
