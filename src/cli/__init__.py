"""CLI (Typer + Rich) sobre el cliente Gamma."""
