import os
import sys
from pathlib import Path

import pytest

# Ensure project root is importable during pytest collection
ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

# Settings are read at import time, so pin them before app modules load
os.environ.setdefault('BLOBSTORE_OID_STRATEGY', 'random')
os.environ.setdefault('BLOBSTORE_LOG_LEVEL', 'info')

from fastapi.testclient import TestClient  # noqa: E402

from apps.blobs.services import ObjectTable  # noqa: E402
from config.settings import Settings  # noqa: E402
from main import create_app  # noqa: E402


@pytest.fixture
def table():
    return ObjectTable()


@pytest.fixture
def app():
    return create_app(Settings(oid_strategy='random'))


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def sha_client():
    with TestClient(create_app(Settings(oid_strategy='sha256'))) as test_client:
        yield test_client
