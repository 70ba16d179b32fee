import os

# in-memory DB for the whole test session; must be set before menuchat.db is imported
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SUMMARY_LOCALE"] = "ms_MY"
os.environ["PUBLIC_BASE_URL"] = "http://testserver"

import pytest
from fastapi.testclient import TestClient

from menuchat.db import Base, engine
from menuchat.main import app

SAMPLE_MENU = """MENU DAILY by Est Dolce
Order before 10am today, delivery available
SET NASI
\"\"\"\"\"\"\"\"\"
1. Nasi Lemak RM 8.50
2. Nasi Goreng RM7
MINUMAN
=========
3. Teh O Ais (RM 2)
4. Kopi Order Special RM3.5
"""


@pytest.fixture
def client():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    with TestClient(app) as c:
        yield c


@pytest.fixture
def sample_menu():
    return SAMPLE_MENU
