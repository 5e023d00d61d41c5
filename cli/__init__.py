"""CLI package — click commands and rich presentation helpers."""
