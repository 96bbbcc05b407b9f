"""HTTP API for Polyglot Chat."""
