"""Polyglot Chat: a conversational translation front end for Gemini.

Users type text (or attach an image / plain-text file), pick a target
language, and receive a structured translation: a primary rendering, three
tone variants, alternative phrasings, and a cultural note.  All linguistic
work is done by the remote model; this package owns the session handle,
request construction, and reply normalisation around that call.

Version Management
------------------
``__version__`` is read from the installed package metadata at import time.
The single source of truth is the ``version`` field in ``pyproject.toml``.
``api/server.py`` and ``api/routes/health.py`` import ``__version__`` from
here.
"""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version

# ---------------------------------------------------------------------------
# Package version: read from pyproject.toml via importlib.metadata.
#
# If the package is imported without being installed (running straight from
# a source checkout), fall back to the version below so the application can
# still start.
# ---------------------------------------------------------------------------
try:
    __version__: str = version("polyglot-chat")
except PackageNotFoundError:
    __version__ = "0.1.0"
