"""CLI `dojo-admin` (typer + rich)."""
