from __future__ import annotations

import pytest
from django.test import Client

from fuelsaver.services.reference import ReferenceTables


@pytest.fixture
def api_client() -> Client:
    return Client()


@pytest.fixture
def reference_tables() -> ReferenceTables:
    return ReferenceTables.from_seed()
