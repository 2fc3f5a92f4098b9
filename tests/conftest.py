from __future__ import annotations

from datetime import date

import pytest
from fastapi.testclient import TestClient

from hospital_dashboard import tables
from hospital_dashboard.config import Settings
from hospital_dashboard.db_core import Database
from hospital_dashboard.main import create_app


def seed(engine) -> None:
    with engine.begin() as conn:
        conn.execute(
            tables.Department.insert(),
            [
                {"id": 1, "code": "01", "name": "内科", "display_order": 2},
                {"id": 2, "code": "02", "name": "外科", "display_order": 3},
                {"id": 3, "code": "03", "name": "小児科", "display_order": 4},
                {"id": 4, "code": "99", "name": "救急科", "display_order": 1},
            ],
        )
        conn.execute(
            tables.Ward.insert(),
            [
                {"id": 1, "code": "W1", "name": "東病棟", "capacity": 40, "display_order": 1},
                {"id": 2, "code": "W2", "name": "西病棟", "capacity": 30, "display_order": 2},
                {"id": 3, "code": "W3", "name": "南病棟", "capacity": 0, "display_order": 3},
            ],
        )
        conn.execute(
            tables.OutpatientRecord.insert(),
            [
                {"date": date(2023, 12, 31), "department_id": 1,
                 "new_patients_count": 5, "returning_patients_count": 5},
                {"date": date(2024, 1, 1), "department_id": 1,
                 "new_patients_count": 30, "returning_patients_count": 100},
                {"date": date(2024, 1, 1), "department_id": 2,
                 "new_patients_count": 20, "returning_patients_count": 50},
                {"date": date(2024, 1, 2), "department_id": 1,
                 "new_patients_count": 40, "returning_patients_count": 110},
                {"date": date(2024, 1, 2), "department_id": 2,
                 "new_patients_count": 20, "returning_patients_count": 50},
            ],
        )
        conn.execute(
            tables.InpatientRecord.insert(),
            [
                {"date": date(2024, 1, 1), "ward_id": 1, "department_id": 1,
                 "current_patient_count": 35, "new_admission_count": 5, "discharge_count": 3,
                 "transfer_out_count": 1, "transfer_in_count": 2},
                {"date": date(2024, 1, 1), "ward_id": 2, "department_id": 2,
                 "current_patient_count": 20, "new_admission_count": 2, "discharge_count": 1,
                 "transfer_out_count": 0, "transfer_in_count": 1},
                {"date": date(2024, 1, 2), "ward_id": 1, "department_id": 1,
                 "current_patient_count": 37, "new_admission_count": 4, "discharge_count": 2,
                 "transfer_out_count": 0, "transfer_in_count": 0},
            ],
        )
        conn.execute(
            tables.Permission.insert(),
            [
                {"job_type_code": "ADMIN", "job_type_name": "管理者", "level": 99},
                {"job_type_code": "MGR", "job_type_name": "経営企画", "level": 90},
                {"job_type_code": "DOC", "job_type_name": "医師", "level": 10},
            ],
        )
        conn.execute(
            tables.Staff.insert(),
            [
                {"id": "admin001", "name": "管理 太郎", "job_type_code": "ADMIN"},
                {"id": "manager001", "name": "経営 花子", "job_type_code": "MGR"},
                {"id": "doctor001", "name": "医師 一郎", "job_type_code": "DOC"},
            ],
        )
        conn.execute(
            tables.Doctor.insert(),
            [
                {"code": "D001", "name": "佐藤", "department_code": "01", "display_order": 1},
                {"code": "D002", "name": "鈴木", "department_code": "01", "display_order": 2},
                {"code": "D004", "name": "田中", "department_code": "01", "display_order": 3},
                {"code": "D003", "name": "高橋", "department_code": "02", "display_order": 1},
            ],
        )
        conn.execute(
            tables.Sales.insert(),
            [
                {"doctor_code": "D001", "year_month": "2023-01",
                 "outpatient_sales": 1000000, "inpatient_sales": 2000000},
                {"doctor_code": "D001", "year_month": "2024-01",
                 "outpatient_sales": 1200000, "inpatient_sales": 2100000},
                {"doctor_code": "D001", "year_month": "2024-02",
                 "outpatient_sales": 1100000, "inpatient_sales": 1900000},
                {"doctor_code": "D002", "year_month": "2024-01",
                 "outpatient_sales": 500000.5, "inpatient_sales": 700000.25},
                {"doctor_code": "D003", "year_month": "2024-01",
                 "outpatient_sales": 800000, "inpatient_sales": 0},
            ],
        )


@pytest.fixture()
def settings(tmp_path) -> Settings:
    return Settings(database_url=f"sqlite:///{tmp_path / 'hospital.db'}")


@pytest.fixture()
def database(settings):
    db = Database(settings)
    tables.metadata.create_all(db.get_pool())
    seed(db.get_pool())
    yield db
    db.close_pool()


class RecordingDatabase(Database):
    """Database that remembers every statement and its bind parameters."""

    def __init__(self, settings):
        super().__init__(settings)
        self.calls = []

    def execute(self, sql, params=None, query_name="query"):
        self.calls.append((sql, dict(params or {})))
        return super().execute(sql, params, query_name)


@pytest.fixture()
def recording(settings, database):
    db = RecordingDatabase(settings)
    yield db
    db.close_pool()


@pytest.fixture()
def client(settings, database):
    app = create_app(settings, database)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture()
def secured_client(settings, database):
    secured = Settings(database_url=settings.database_url, enforce_access_levels=True)
    app = create_app(secured, database)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture()
def gql():
    def _run(test_client, query, variables=None, headers=None):
        response = test_client.post(
            "/graphql",
            json={"query": query, "variables": variables or {}},
            headers=headers or {},
        )
        return response.json()

    return _run
