import sqlalchemy

metadata = sqlalchemy.MetaData()

Department = sqlalchemy.Table(
    "departments",
    metadata,
    sqlalchemy.Column("id", sqlalchemy.Integer, primary_key=True),
    sqlalchemy.Column("code", sqlalchemy.String(10), nullable=False, unique=True),
    sqlalchemy.Column("name", sqlalchemy.String(100), nullable=False),
    sqlalchemy.Column("display_order", sqlalchemy.Integer, nullable=False, server_default="0"),
    sqlalchemy.Column("created_at", sqlalchemy.DateTime, server_default=sqlalchemy.func.now()),
)

Ward = sqlalchemy.Table(
    "wards",
    metadata,
    sqlalchemy.Column("id", sqlalchemy.Integer, primary_key=True),
    sqlalchemy.Column("code", sqlalchemy.String(10), nullable=False, unique=True),
    sqlalchemy.Column("name", sqlalchemy.String(100), nullable=False),
    sqlalchemy.Column("capacity", sqlalchemy.Integer, nullable=False, server_default="0"),
    sqlalchemy.Column("display_order", sqlalchemy.Integer, nullable=False, server_default="0"),
    sqlalchemy.Column("created_at", sqlalchemy.DateTime, server_default=sqlalchemy.func.now()),
)

OutpatientRecord = sqlalchemy.Table(
    "outpatient_records",
    metadata,
    sqlalchemy.Column("id", sqlalchemy.Integer, primary_key=True),
    sqlalchemy.Column("date", sqlalchemy.Date, nullable=False, index=True),
    sqlalchemy.Column("department_id", sqlalchemy.Integer, sqlalchemy.ForeignKey("departments.id"), nullable=False),
    sqlalchemy.Column("new_patients_count", sqlalchemy.Integer, nullable=False, server_default="0"),
    sqlalchemy.Column("returning_patients_count", sqlalchemy.Integer, nullable=False, server_default="0"),
    sqlalchemy.Column("created_at", sqlalchemy.DateTime, server_default=sqlalchemy.func.now()),
)

InpatientRecord = sqlalchemy.Table(
    "inpatient_records",
    metadata,
    sqlalchemy.Column("id", sqlalchemy.Integer, primary_key=True),
    sqlalchemy.Column("date", sqlalchemy.Date, nullable=False, index=True),
    sqlalchemy.Column("ward_id", sqlalchemy.Integer, sqlalchemy.ForeignKey("wards.id"), nullable=False),
    sqlalchemy.Column("department_id", sqlalchemy.Integer, sqlalchemy.ForeignKey("departments.id"), nullable=False),
    sqlalchemy.Column("current_patient_count", sqlalchemy.Integer, nullable=False, server_default="0"),
    sqlalchemy.Column("new_admission_count", sqlalchemy.Integer, nullable=False, server_default="0"),
    sqlalchemy.Column("discharge_count", sqlalchemy.Integer, nullable=False, server_default="0"),
    sqlalchemy.Column("transfer_out_count", sqlalchemy.Integer, nullable=False, server_default="0"),
    sqlalchemy.Column("transfer_in_count", sqlalchemy.Integer, nullable=False, server_default="0"),
    sqlalchemy.Column("created_at", sqlalchemy.DateTime, server_default=sqlalchemy.func.now()),
)

Permission = sqlalchemy.Table(
    "permissions",
    metadata,
    sqlalchemy.Column("job_type_code", sqlalchemy.String(10), primary_key=True),
    sqlalchemy.Column("job_type_name", sqlalchemy.String(50), nullable=False),
    sqlalchemy.Column("level", sqlalchemy.Integer, nullable=False),
)

Staff = sqlalchemy.Table(
    "staff",
    metadata,
    sqlalchemy.Column("id", sqlalchemy.String(50), primary_key=True),
    sqlalchemy.Column("name", sqlalchemy.String(100), nullable=False),
    sqlalchemy.Column(
        "job_type_code", sqlalchemy.String(10), sqlalchemy.ForeignKey("permissions.job_type_code"), nullable=False
    ),
    sqlalchemy.Column("created_at", sqlalchemy.DateTime, server_default=sqlalchemy.func.now()),
)

Doctor = sqlalchemy.Table(
    "doctors",
    metadata,
    sqlalchemy.Column("code", sqlalchemy.String(20), primary_key=True),
    sqlalchemy.Column("name", sqlalchemy.String(100), nullable=False),
    sqlalchemy.Column(
        "department_code", sqlalchemy.String(10), sqlalchemy.ForeignKey("departments.code"), nullable=False
    ),
    sqlalchemy.Column("display_order", sqlalchemy.Integer, nullable=False, server_default="0"),
    sqlalchemy.Column("created_at", sqlalchemy.DateTime, server_default=sqlalchemy.func.now()),
)

Sales = sqlalchemy.Table(
    "sales",
    metadata,
    sqlalchemy.Column("doctor_code", sqlalchemy.String(20), sqlalchemy.ForeignKey("doctors.code"), primary_key=True),
    sqlalchemy.Column("year_month", sqlalchemy.String(7), primary_key=True),
    sqlalchemy.Column("outpatient_sales", sqlalchemy.Numeric(15, 2), nullable=False, server_default="0"),
    sqlalchemy.Column("inpatient_sales", sqlalchemy.Numeric(15, 2), nullable=False, server_default="0"),
    sqlalchemy.Column("updated_at", sqlalchemy.DateTime, server_default=sqlalchemy.func.now()),
)
