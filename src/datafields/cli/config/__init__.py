"""CLI ``config`` domain commands."""
