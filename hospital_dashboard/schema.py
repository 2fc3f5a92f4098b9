"""GraphQL schema and field dispatch.

Field and argument names are written in snake_case and exposed in camelCase by
strawberry, e.g. ``total_new`` is served as ``totalNew``. Each field hands its
arguments to one accessor, run in the threadpool so sibling fields in a query
proceed concurrently.
"""

from typing import Any, Callable, Dict, List, Optional

import strawberry
from starlette.concurrency import run_in_threadpool
from strawberry.types import Info

from hospital_dashboard import auth, inpatient, master_data, outpatient, sales
from hospital_dashboard.filters import check_month, require_code


@strawberry.type
class Department:
    id: int
    code: str
    name: str
    display_order: int
    created_at: str


@strawberry.type
class Ward:
    id: int
    code: str
    name: str
    capacity: int
    display_order: int
    created_at: str


@strawberry.type
class OutpatientRecord:
    id: int
    date: str
    department: Department
    new_patients_count: int
    returning_patients_count: int
    total_count: int
    created_at: str


@strawberry.type
class InpatientRecord:
    id: int
    date: str
    ward: Ward
    department: Department
    current_patient_count: int
    new_admission_count: int
    discharge_count: int
    transfer_out_count: int
    transfer_in_count: int
    created_at: str


@strawberry.type
class OutpatientSummary:
    date: str
    total_new: int
    total_returning: int
    total_patients: int


@strawberry.type
class InpatientSummary:
    date: str
    total_current: int
    total_new_admission: int
    total_discharge: int
    total_transfer_out: int
    total_transfer_in: int


@strawberry.type
class OutpatientByDepartment:
    department: Department
    total_new: int
    total_returning: int
    total_patients: int


@strawberry.type
class InpatientByWard:
    ward: Ward
    total_current: int
    total_new_admission: int
    total_discharge: int


@strawberry.type
class Permission:
    job_type_code: str
    job_type_name: str
    level: int


@strawberry.type
class Staff:
    id: str
    name: str
    job_type_code: str
    permission: Permission
    created_at: str


@strawberry.type
class Doctor:
    code: str
    name: str
    department_code: str
    display_order: int
    department: Department
    created_at: str


@strawberry.type
class Sales:
    doctor_code: str
    year_month: str
    outpatient_sales: float
    inpatient_sales: float
    total_sales: float
    updated_at: str


@strawberry.type
class SalesSummary:
    year_month: str
    total_outpatient_sales: float
    total_inpatient_sales: float
    total_sales: float


@strawberry.type
class DoctorSales:
    doctor: Doctor
    sales: List[Sales]


def _department(row: Dict[str, Any]) -> Department:
    return Department(**row)


def _ward(row: Dict[str, Any]) -> Ward:
    return Ward(**row)


def _with_department(cls, row: Dict[str, Any]):
    return cls(**{**row, "department": _department(row["department"])})


def _with_ward(cls, row: Dict[str, Any]):
    return cls(**{**row, "ward": _ward(row["ward"])})


def _doctor(row: Dict[str, Any]) -> Doctor:
    return _with_department(Doctor, row)


def _inpatient_record(row: Dict[str, Any]) -> InpatientRecord:
    return InpatientRecord(
        **{**row, "ward": _ward(row["ward"]), "department": _department(row["department"])}
    )


def _staff(row: Dict[str, Any]) -> Staff:
    return Staff(**{**row, "permission": Permission(**row["permission"])})


def _doctor_sales(row: Dict[str, Any]) -> DoctorSales:
    return DoctorSales(
        doctor=_doctor(row["doctor"]),
        sales=[Sales(**s) for s in row["sales"]],
    )


async def _call(info: Info, accessor: Callable[..., Any], *args: Any) -> Any:
    return await run_in_threadpool(accessor, info.context["database"], *args)


_UNRESOLVED = object()


async def _require_sales_access(
    info: Info, start_month: Optional[str], end_month: Optional[str], **codes: str
) -> None:
    """Gate sales fields on the caller's permission level when enforcement is on.

    Arguments are checked first so a malformed request is rejected without a
    staff lookup.
    """
    for name, value in codes.items():
        require_code(value, name)
    check_month(start_month, "startMonth")
    check_month(end_month, "endMonth")

    settings = info.context["settings"]
    if not settings.enforce_access_levels:
        return

    staff = info.context.get("staff", _UNRESOLVED)
    if staff is _UNRESOLVED:
        staff_id = info.context.get("staff_id")
        staff = await _call(info, auth.verify_staff, staff_id) if staff_id else None
        info.context["staff"] = staff
    auth.require_level(staff, settings.sales_required_level)


@strawberry.type
class Query:
    @strawberry.field
    async def departments(self, info: Info) -> List[Department]:
        rows = await _call(info, master_data.list_departments)
        return [_department(r) for r in rows]

    @strawberry.field
    async def wards(self, info: Info) -> List[Ward]:
        rows = await _call(info, master_data.list_wards)
        return [_ward(r) for r in rows]

    @strawberry.field
    async def outpatient_records(
        self,
        info: Info,
        start_date: Optional[str] = None,
        end_date: Optional[str] = None,
        department_id: Optional[int] = None,
    ) -> List[OutpatientRecord]:
        rows = await _call(info, outpatient.outpatient_records, start_date, end_date, department_id)
        return [_with_department(OutpatientRecord, r) for r in rows]

    @strawberry.field
    async def outpatient_summary(
        self, info: Info, start_date: Optional[str] = None, end_date: Optional[str] = None
    ) -> List[OutpatientSummary]:
        rows = await _call(info, outpatient.outpatient_summary, start_date, end_date)
        return [OutpatientSummary(**r) for r in rows]

    @strawberry.field
    async def outpatient_by_department(
        self, info: Info, start_date: Optional[str] = None, end_date: Optional[str] = None
    ) -> List[OutpatientByDepartment]:
        rows = await _call(info, outpatient.outpatient_by_department, start_date, end_date)
        return [_with_department(OutpatientByDepartment, r) for r in rows]

    @strawberry.field
    async def inpatient_records(
        self,
        info: Info,
        start_date: Optional[str] = None,
        end_date: Optional[str] = None,
        ward_id: Optional[int] = None,
        department_id: Optional[int] = None,
    ) -> List[InpatientRecord]:
        rows = await _call(
            info, inpatient.inpatient_records, start_date, end_date, ward_id, department_id
        )
        return [_inpatient_record(r) for r in rows]

    @strawberry.field
    async def inpatient_summary(
        self, info: Info, start_date: Optional[str] = None, end_date: Optional[str] = None
    ) -> List[InpatientSummary]:
        rows = await _call(info, inpatient.inpatient_summary, start_date, end_date)
        return [InpatientSummary(**r) for r in rows]

    @strawberry.field
    async def inpatient_by_ward(
        self, info: Info, start_date: Optional[str] = None, end_date: Optional[str] = None
    ) -> List[InpatientByWard]:
        rows = await _call(info, inpatient.inpatient_by_ward, start_date, end_date)
        return [_with_ward(InpatientByWard, r) for r in rows]

    @strawberry.field
    async def verify_staff(self, info: Info, staff_id: str) -> Optional[Staff]:
        row = await _call(info, auth.verify_staff, staff_id)
        return _staff(row) if row else None

    @strawberry.field
    async def doctors(self, info: Info) -> List[Doctor]:
        rows = await _call(info, sales.list_doctors)
        return [_doctor(r) for r in rows]

    @strawberry.field
    async def doctors_by_department(self, info: Info, department_code: str) -> List[Doctor]:
        rows = await _call(info, sales.doctors_by_department, department_code)
        return [_doctor(r) for r in rows]

    @strawberry.field
    async def sales_summary(
        self, info: Info, start_month: Optional[str] = None, end_month: Optional[str] = None
    ) -> List[SalesSummary]:
        await _require_sales_access(info, start_month, end_month)
        rows = await _call(info, sales.sales_summary, start_month, end_month)
        return [SalesSummary(**r) for r in rows]

    @strawberry.field
    async def sales_by_doctor(
        self,
        info: Info,
        doctor_code: str,
        start_month: Optional[str] = None,
        end_month: Optional[str] = None,
    ) -> List[Sales]:
        await _require_sales_access(info, start_month, end_month, doctorCode=doctor_code)
        rows = await _call(info, sales.sales_by_doctor, doctor_code, start_month, end_month)
        return [Sales(**r) for r in rows]

    @strawberry.field
    async def sales_by_department(
        self,
        info: Info,
        department_code: str,
        start_month: Optional[str] = None,
        end_month: Optional[str] = None,
    ) -> List[SalesSummary]:
        await _require_sales_access(info, start_month, end_month, departmentCode=department_code)
        rows = await _call(info, sales.sales_by_department, department_code, start_month, end_month)
        return [SalesSummary(**r) for r in rows]

    @strawberry.field
    async def sales_by_doctors_in_department(
        self,
        info: Info,
        department_code: str,
        start_month: Optional[str] = None,
        end_month: Optional[str] = None,
    ) -> List[DoctorSales]:
        await _require_sales_access(info, start_month, end_month, departmentCode=department_code)
        rows = await _call(
            info, sales.sales_by_doctors_in_department, department_code, start_month, end_month
        )
        return [_doctor_sales(r) for r in rows]


schema = strawberry.Schema(query=Query)
