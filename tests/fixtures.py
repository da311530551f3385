from datetime import date, datetime

from sqlalchemy.pool import StaticPool
from sqlmodel import create_engine

from asset_tracker.auth.session import AccountSession
from asset_tracker.core.database import create_db_and_tables
from asset_tracker.core.init_db import init_db
from asset_tracker.models import (
    Account,
    EmployeeCreate,
    HardwareAssetCreate,
    SoftwareAssetCreate,
)

IT_DEPARTMENT_ID = 5
HR_DEPARTMENT_ID = 2
HOLDER_ID = 1
LINK_TIME = datetime(2024, 12, 1, 9, 30)


def make_engine(seed: bool = True):
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    create_db_and_tables(engine)
    if seed:
        init_db(engine)
    return engine


def fixed_clock():
    return LINK_TIME


def admin_session() -> AccountSession:
    return AccountSession(Account(id=999, email="admin@assettracker.com", password_hash="x", is_admin=True))


def employee_data(department_id=IT_DEPARTMENT_ID, **overrides) -> EmployeeCreate:
    data = {
        "first_name": "John",
        "last_name": "Doe",
        "email": "john.doe@email.com",
        "department_id": department_id,
    }
    data.update(overrides)
    return EmployeeCreate(**data)


def hardware_data(employee_id, **overrides) -> HardwareAssetCreate:
    data = {
        "name": "Laptop",
        "model": "Latitude 7400",
        "manufacturer": "Dell",
        "type": "x64",
        "ip_address": "192.168.0.1",
        "purchase_date": date(2020, 1, 1),
        "notes": "Test notes",
        "employee_id": employee_id,
    }
    data.update(overrides)
    return HardwareAssetCreate(**data)


def windows_10(**overrides) -> SoftwareAssetCreate:
    data = {"name": "Windows 10", "version": "22H2", "manufacturer": "Microsoft"}
    data.update(overrides)
    return SoftwareAssetCreate(**data)
