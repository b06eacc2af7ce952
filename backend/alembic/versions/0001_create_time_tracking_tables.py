"""create employees and time records

Revision ID: 0001
Revises: None
Create Date: 2024-05-05
"""

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = "0001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "employees",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(length=200), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("start_date", sa.Date(), nullable=False),
        sa.Column("end_date", sa.Date(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=True),
        sa.Column("updated_at", sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_employees_id"), "employees", ["id"], unique=False)
    op.create_index(op.f("ix_employees_email"), "employees", ["email"], unique=True)

    op.create_table(
        "time_records",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("employee_id", sa.Integer(), nullable=False),
        sa.Column("year", sa.Integer(), nullable=False),
        sa.Column("month", sa.Integer(), nullable=False),
        sa.Column("day", sa.Integer(), nullable=False),
        sa.Column("hours", sa.Numeric(precision=4, scale=2), nullable=False, server_default="0"),
        sa.Column("created_at", sa.DateTime(), nullable=True),
        sa.Column("updated_at", sa.DateTime(), nullable=True),
        sa.ForeignKeyConstraint(["employee_id"], ["employees.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint(
            "employee_id", "year", "month", "day", name="uq_time_records_employee_day"
        ),
        sa.CheckConstraint("month >= 0 AND month <= 11", name="ck_time_records_month"),
        sa.CheckConstraint("day >= 1 AND day <= 31", name="ck_time_records_day"),
        sa.CheckConstraint("hours >= 0 AND hours <= 12", name="ck_time_records_hours"),
    )
    op.create_index(op.f("ix_time_records_id"), "time_records", ["id"], unique=False)
    op.create_index(
        op.f("ix_time_records_employee_id"), "time_records", ["employee_id"], unique=False
    )


def downgrade() -> None:
    op.drop_index(op.f("ix_time_records_employee_id"), table_name="time_records")
    op.drop_index(op.f("ix_time_records_id"), table_name="time_records")
    op.drop_table("time_records")
    op.drop_index(op.f("ix_employees_email"), table_name="employees")
    op.drop_index(op.f("ix_employees_id"), table_name="employees")
    op.drop_table("employees")
