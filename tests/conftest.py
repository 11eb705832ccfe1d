from datetime import date, datetime

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.database import build_engine, get_db, init_db
from app.main import app
from app.models import Barangay, Citizen, Lgu, Province, Region, Staff, StaffAssignment

PROVINCES = [
    ("P01", "Abra", "R01"),
    ("P02", "Benguet", "R01"),
    ("P03", "Cagayan", "R02"),
    ("P04", "Davao del Sur", "R11"),
]
LGUS = [
    ("L01", "Bangued", "P01"),
    ("L02", "Dolores", "P01"),
    ("L03", "La Trinidad", "P02"),
]
BARANGAYS = [
    ("B01", "Zone 1", "P01", "L01"),
    ("B02", "Poblacion", "P01", "L02"),
    ("B03", "Betag", "P02", "L03"),
]


@pytest.fixture
def engine():
    engine = build_engine("sqlite://", poolclass=StaticPool)
    init_db(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db_session(engine):
    session = sessionmaker(autocommit=False, autoflush=False, bind=engine)()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def seeded_db(db_session):
    """Geography reference data and one staff member per access pattern."""
    db_session.add_all([
        Region(code="R01", name="Ilocos Region"),
        Region(code="R02", name="Cagayan Valley"),
        Region(code="R11", name="Davao Region"),
    ])
    db_session.add_all([Province(code=c, name=n, region_code=r) for c, n, r in PROVINCES])
    db_session.add_all([Lgu(code=c, name=n, province_code=p) for c, n, p in LGUS])
    db_session.add_all([
        Barangay(code=c, name=n, province_code=p, lgu_code=l) for c, n, p, l in BARANGAYS
    ])

    db_session.add(Staff(id="admin-1", username="admin", first_name="Ana", last_name="Reyes",
                         position="Administrator"))
    pdo = Staff(id="pdo-1", username="pdo", first_name="Ben", last_name="Cruz", position="PDO")
    pdo.assignments.append(StaffAssignment(province_code="P01"))
    lgu = Staff(id="lgu-1", username="lgu", first_name="Cora", last_name="Santos", position="LGU")
    lgu.assignments.append(StaffAssignment(province_code="P01", lgu_code="L01"))
    db_session.add_all([pdo, lgu])
    db_session.add(Staff(id="pdo-none", username="pdo2", first_name="Dan", last_name="Lim",
                         position="PDO"))
    db_session.add(Staff(id="inactive-1", username="gone", first_name="Eve", last_name="Tan",
                         position="Administrator", status="Inactive"))
    db_session.commit()
    return db_session


@pytest.fixture
def add_citizen(seeded_db):
    """Factory inserting a citizen row with sensible defaults."""
    def _add(**overrides):
        values = {
            "last_name": "Dela Cruz",
            "first_name": "Juan",
            "birth_date": date(1944, 6, 15),
            "sex": "Male",
            "province_code": "P01",
            "lgu_code": "L01",
            "barangay_code": "B01",
            "status": "Encoded",
        }
        values.update(overrides)
        citizen = Citizen(**values)
        seeded_db.add(citizen)
        seeded_db.commit()
        seeded_db.refresh(citizen)
        return citizen
    return _add


@pytest.fixture
def client(seeded_db):
    def override_get_db():
        yield seeded_db

    app.dependency_overrides[get_db] = override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


def record(birth_date, status="Encoded", sex="Male", province_code="P01", lgu_code="L01",
           barangay_code="B01", created_at=None, payment_date=None, id=None):
    """Plain dict in the shape the aggregation engine consumes."""
    return {
        "id": id,
        "created_at": created_at or datetime(2024, 3, 1, 9, 0),
        "birth_date": birth_date,
        "sex": sex,
        "status": status,
        "province_code": province_code,
        "lgu_code": lgu_code,
        "barangay_code": barangay_code,
        "payment_date": payment_date,
    }
