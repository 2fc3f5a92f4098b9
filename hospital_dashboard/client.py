"""HTTP client for the reporting API, playing the dashboard frontend's role.

Handles the staff-ID handshake, level gating of restricted views, the date and
month windows the dashboard pages default to, and the year-over-year sales
comparison built from two independent fetches.
"""

import logging
from datetime import date, timedelta
from typing import Any, Dict, List, Optional, Tuple

import requests

from hospital_dashboard import alignment
from hospital_dashboard.auth import has_permission, require_level
from hospital_dashboard.exceptions import ReportingError

logger = logging.getLogger(__name__)

SALES_REQUIRED_LEVEL = 90

VERIFY_STAFF = """
query VerifyStaff($staffId: String!) {
  verifyStaff(staffId: $staffId) {
    id name jobTypeCode
    permission { jobTypeCode jobTypeName level }
  }
}
"""

GET_DEPARTMENTS = "query GetDepartments { departments { id code name displayOrder } }"

GET_WARDS = "query GetWards { wards { id code name capacity displayOrder } }"

GET_OUTPATIENT_SUMMARY = """
query GetOutpatientSummary($startDate: String, $endDate: String) {
  outpatientSummary(startDate: $startDate, endDate: $endDate) {
    date totalNew totalReturning totalPatients
  }
}
"""

GET_OUTPATIENT_BY_DEPARTMENT = """
query GetOutpatientByDepartment($startDate: String, $endDate: String) {
  outpatientByDepartment(startDate: $startDate, endDate: $endDate) {
    department { id code name } totalNew totalReturning totalPatients
  }
}
"""

GET_INPATIENT_SUMMARY = """
query GetInpatientSummary($startDate: String, $endDate: String) {
  inpatientSummary(startDate: $startDate, endDate: $endDate) {
    date totalCurrent totalNewAdmission totalDischarge totalTransferOut totalTransferIn
  }
}
"""

GET_INPATIENT_BY_WARD = """
query GetInpatientByWard($startDate: String, $endDate: String) {
  inpatientByWard(startDate: $startDate, endDate: $endDate) {
    ward { id code name capacity } totalCurrent totalNewAdmission totalDischarge
  }
}
"""

GET_DOCTORS_BY_DEPARTMENT = """
query GetDoctorsByDepartment($departmentCode: String!) {
  doctorsByDepartment(departmentCode: $departmentCode) { code name departmentCode displayOrder }
}
"""

GET_SALES_SUMMARY = """
query GetSalesSummary($startMonth: String, $endMonth: String) {
  salesSummary(startMonth: $startMonth, endMonth: $endMonth) {
    yearMonth totalOutpatientSales totalInpatientSales totalSales
  }
}
"""

GET_SALES_BY_DOCTOR = """
query GetSalesByDoctor($doctorCode: String!, $startMonth: String, $endMonth: String) {
  salesByDoctor(doctorCode: $doctorCode, startMonth: $startMonth, endMonth: $endMonth) {
    doctorCode yearMonth outpatientSales inpatientSales totalSales
  }
}
"""

GET_SALES_BY_DEPARTMENT = """
query GetSalesByDepartment($departmentCode: String!, $startMonth: String, $endMonth: String) {
  salesByDepartment(departmentCode: $departmentCode, startMonth: $startMonth, endMonth: $endMonth) {
    yearMonth totalOutpatientSales totalInpatientSales totalSales
  }
}
"""

GET_SALES_BY_DOCTORS_IN_DEPARTMENT = """
query GetSalesByDoctorsInDepartment($departmentCode: String!, $startMonth: String, $endMonth: String) {
  salesByDoctorsInDepartment(departmentCode: $departmentCode, startMonth: $startMonth, endMonth: $endMonth) {
    doctor { code name }
    sales { yearMonth outpatientSales inpatientSales totalSales }
  }
}
"""


class GraphQLError(ReportingError):
    def __init__(self, errors: List[Dict[str, Any]]):
        super().__init__("; ".join(e.get("message", "unknown error") for e in errors))
        self.errors = errors


def quick_date_range(days: int, today: Optional[date] = None) -> Tuple[str, str]:
    """The dashboard's "last N days" preset as (startDate, endDate)."""
    today = today or date.today()
    start = today - timedelta(days=days)
    return start.strftime("%Y-%m-%d"), today.strftime("%Y-%m-%d")


def _as_summary(rows: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """Rename a doctor's Sales rows to the SalesSummary keys so every view charts alike."""
    return [
        {
            "yearMonth": r["yearMonth"],
            "totalOutpatientSales": r["outpatientSales"],
            "totalInpatientSales": r["inpatientSales"],
            "totalSales": r["totalSales"],
        }
        for r in rows
    ]


class DashboardClient:
    def __init__(
        self,
        url: str = "http://localhost:4000/graphql",
        staff_id: Optional[str] = None,
        session=None,
        timeout: float = 10,
    ) -> None:
        self.url = url
        self.staff_id = staff_id
        self.staff: Optional[Dict[str, Any]] = None
        self.session = session or requests.Session()
        self.timeout = timeout

    def execute(self, query: str, variables: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        headers = {"Content-Type": "application/json"}
        if self.staff_id:
            headers["X-Staff-Id"] = self.staff_id
        response = self.session.post(
            self.url,
            json={"query": query, "variables": variables or {}},
            headers=headers,
            timeout=self.timeout,
        )
        response.raise_for_status()
        payload = response.json()
        if payload.get("errors"):
            raise GraphQLError(payload["errors"])
        return payload["data"]

    # -- authentication handshake -------------------------------------------------

    def authenticate(self, staff_id: str) -> Optional[Dict[str, Any]]:
        """Verify ``staff_id``; a None result means the caller stays unauthenticated."""
        staff = self.execute(VERIFY_STAFF, {"staffId": staff_id})["verifyStaff"]
        if staff is None:
            logger.warning("Staff id was not recognised; continuing unauthenticated")
            self.staff_id = None
            self.staff = None
            return None
        self.staff_id = staff_id
        self.staff = staff
        return staff

    def logout(self) -> None:
        self.staff_id = None
        self.staff = None

    def has_permission(self, required_level: int) -> bool:
        return has_permission(self.staff, required_level)

    def require_level(self, required_level: int) -> Dict[str, Any]:
        return require_level(self.staff, required_level)

    # -- queries -------------------------------------------------------------------

    def departments(self) -> List[Dict[str, Any]]:
        return self.execute(GET_DEPARTMENTS)["departments"]

    def wards(self) -> List[Dict[str, Any]]:
        return self.execute(GET_WARDS)["wards"]

    def outpatient_summary(self, start_date=None, end_date=None) -> List[Dict[str, Any]]:
        variables = {"startDate": start_date, "endDate": end_date}
        return self.execute(GET_OUTPATIENT_SUMMARY, variables)["outpatientSummary"]

    def outpatient_by_department(self, start_date=None, end_date=None) -> List[Dict[str, Any]]:
        variables = {"startDate": start_date, "endDate": end_date}
        return self.execute(GET_OUTPATIENT_BY_DEPARTMENT, variables)["outpatientByDepartment"]

    def inpatient_summary(self, start_date=None, end_date=None) -> List[Dict[str, Any]]:
        variables = {"startDate": start_date, "endDate": end_date}
        return self.execute(GET_INPATIENT_SUMMARY, variables)["inpatientSummary"]

    def inpatient_by_ward(self, start_date=None, end_date=None) -> List[Dict[str, Any]]:
        variables = {"startDate": start_date, "endDate": end_date}
        return self.execute(GET_INPATIENT_BY_WARD, variables)["inpatientByWard"]

    def doctors_by_department(self, department_code: str) -> List[Dict[str, Any]]:
        variables = {"departmentCode": department_code}
        return self.execute(GET_DOCTORS_BY_DEPARTMENT, variables)["doctorsByDepartment"]

    def sales_summary(self, start_month=None, end_month=None) -> List[Dict[str, Any]]:
        variables = {"startMonth": start_month, "endMonth": end_month}
        return self.execute(GET_SALES_SUMMARY, variables)["salesSummary"]

    def sales_by_doctor(self, doctor_code: str, start_month=None, end_month=None) -> List[Dict[str, Any]]:
        variables = {"doctorCode": doctor_code, "startMonth": start_month, "endMonth": end_month}
        return self.execute(GET_SALES_BY_DOCTOR, variables)["salesByDoctor"]

    def sales_by_department(self, department_code: str, start_month=None, end_month=None) -> List[Dict[str, Any]]:
        variables = {"departmentCode": department_code, "startMonth": start_month, "endMonth": end_month}
        return self.execute(GET_SALES_BY_DEPARTMENT, variables)["salesByDepartment"]

    def sales_breakdown(self, department_code: str, start_month: str, end_month: str) -> List[Dict[str, Any]]:
        """Per-doctor series of one department, zero-filled onto every month of the window."""
        variables = {"departmentCode": department_code, "startMonth": start_month, "endMonth": end_month}
        rows = self.execute(GET_SALES_BY_DOCTORS_IN_DEPARTMENT, variables)["salesByDoctorsInDepartment"]
        months = alignment.months_between(start_month, end_month)
        return [
            {"doctor": row["doctor"], "sales": alignment.align_series_to_months(row["sales"], months)}
            for row in rows
        ]

    # -- sales view ----------------------------------------------------------------

    def _monthly_sales(self, start_month, end_month, department_code=None, doctor_code=None):
        if doctor_code:
            return _as_summary(self.sales_by_doctor(doctor_code, start_month, end_month))
        if department_code:
            return self.sales_by_department(department_code, start_month, end_month)
        return self.sales_summary(start_month, end_month)

    def sales_comparison(
        self,
        department_code: Optional[str] = None,
        doctor_code: Optional[str] = None,
        today: Optional[date] = None,
        required_level: int = SALES_REQUIRED_LEVEL,
    ) -> List[Dict[str, Any]]:
        """Last twelve months of sales aligned with the same months a year earlier.

        The narrowest selection wins: doctor, then department, then hospital-wide.
        """
        self.require_level(required_level)
        start_month, end_month = alignment.last_twelve_months(today)
        prev_start, prev_end = alignment.previous_year_window(start_month, end_month)

        current = self._monthly_sales(start_month, end_month, department_code, doctor_code)
        previous = self._monthly_sales(prev_start, prev_end, department_code, doctor_code)
        return alignment.align_year_over_year(current, previous)
