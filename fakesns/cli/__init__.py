"""fakesns CLI: Typer application with Rich output."""
