"""Plotting helpers for the dashboard and the CLI `stats --plot` command."""
