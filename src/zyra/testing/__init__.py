"""Test utilities for zyra applications.

    from zyra.testing import TestClient
"""

from zyra.testing.client import TestClient, TestResponse

__all__ = ["TestClient", "TestResponse"]
