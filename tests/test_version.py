"""Tests for dynamic version management.

Verifies that ``polyglot_chat.__version__`` is resolved from the installed
package metadata (``pyproject.toml``) and that every place the version is
surfaced agrees: the package attribute, the FastAPI OpenAPI schema, and
the root ``/`` endpoint.
"""

from __future__ import annotations

import re
from typing import Any

import pytest

import polyglot_chat

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

# Matches semver-ish strings: major.minor.patch with optional pre-release
# suffix (e.g. "0.1.0", "1.0.0-rc.1").
_SEMVER_RE = re.compile(
    r"^\d+\.\d+\.\d+"  # major.minor.patch
    r"(-[A-Za-z0-9]+(\.[A-Za-z0-9]+)*)?$"  # optional pre-release
)


# ---------------------------------------------------------------------------
# Unit tests (no server or HTTP required)
# ---------------------------------------------------------------------------


@pytest.mark.unit
class TestVersionAttribute:
    """Verify the ``polyglot_chat.__version__`` package attribute."""

    def test_version_is_a_string(self) -> None:
        """__version__ must be a non-empty string."""
        assert isinstance(polyglot_chat.__version__, str)
        assert len(polyglot_chat.__version__) > 0

    def test_version_matches_semver(self) -> None:
        """__version__ must look like a valid semantic version."""
        assert _SEMVER_RE.match(polyglot_chat.__version__), (
            f"__version__ {polyglot_chat.__version__!r} does not match "
            f"expected semver pattern (major.minor.patch[-prerelease])"
        )


# ---------------------------------------------------------------------------
# Integration tests (require the FastAPI app)
# ---------------------------------------------------------------------------


@pytest.mark.unit
class TestVersionInApp:
    """Verify version consistency across the FastAPI app surfaces."""

    def test_openapi_version_matches_package(self) -> None:
        """The OpenAPI schema version must match __version__."""
        from polyglot_chat.api.server import app

        assert app.version == polyglot_chat.__version__

    def test_root_endpoint_version_matches_package(self) -> None:
        """The root ``/`` endpoint must report the same version.

        Uses the HTTPX async client over ASGI and checks the ``version``
        field in the JSON response body.
        """
        import asyncio

        from httpx import ASGITransport, AsyncClient

        from polyglot_chat.api.server import app

        async def _fetch_root() -> dict[str, Any]:
            transport = ASGITransport(app=app)
            async with AsyncClient(transport=transport, base_url="http://test") as client:
                resp = await client.get("/")
                resp.raise_for_status()
                result: dict[str, Any] = resp.json()
                return result

        data = asyncio.run(_fetch_root())
        assert data["version"] == polyglot_chat.__version__
