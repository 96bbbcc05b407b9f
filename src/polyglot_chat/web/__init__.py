"""Browser chat shell."""
