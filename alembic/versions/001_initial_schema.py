"""Initial schema - roles, permission catalog, office calendars.

Revision ID: 001
Revises:
Create Date: 2026-10-18

"""

from collections.abc import Sequence

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "001"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    op.create_table(
        "permission",
        sa.Column("id", sa.String(100), primary_key=True),
        sa.Column("module", sa.String(100), nullable=False),
        sa.Column("resource", sa.String(255), nullable=False),
        sa.Column("action", sa.String(100), nullable=False),
        sa.Column("risk_level", sa.String(10), nullable=False, server_default="low"),
        sa.Column("description", sa.Text(), nullable=True),
        sa.CheckConstraint("risk_level IN ('low', 'medium', 'high')", name="ck_permission_risk_level"),
    )

    # No foreign key on parent_role_id; unresolved parents are reported, not rejected.
    op.create_table(
        "role",
        sa.Column("id", sa.String(64), primary_key=True),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("level", sa.Integer(), nullable=False),
        sa.Column("parent_role_id", sa.String(64), nullable=True),
        sa.Column("inheritance_enabled", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("is_system", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("user_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("department", sa.String(100), nullable=True),
        sa.CheckConstraint("user_count >= 0", name="ck_role_user_count"),
    )
    op.create_index("ix_role_parent_role_id", "role", ["parent_role_id"])

    op.create_table(
        "role_permission",
        sa.Column("role_id", sa.String(64), sa.ForeignKey("role.id", ondelete="CASCADE"), primary_key=True),
        sa.Column("permission_id", sa.String(100), primary_key=True),
    )

    op.create_table(
        "office",
        sa.Column("id", sa.String(64), primary_key=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("timezone", sa.String(64), nullable=False),
        sa.Column("extend_deadlines_on_weekends", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("extend_deadlines_on_holidays", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("max_extension_days", sa.Integer(), nullable=False, server_default="3"),
        sa.Column("fallback_offices", sa.ARRAY(sa.String(64)), nullable=False, server_default="{}"),
        sa.CheckConstraint("max_extension_days >= 0", name="ck_office_max_extension_days"),
    )

    op.create_table(
        "office_business_day",
        sa.Column("office_id", sa.String(64), sa.ForeignKey("office.id", ondelete="CASCADE"), primary_key=True),
        sa.Column("weekday", sa.SmallInteger(), primary_key=True),
        sa.Column("is_working_day", sa.Boolean(), nullable=False),
        sa.Column("start_time", sa.String(5), nullable=False),
        sa.Column("end_time", sa.String(5), nullable=False),
        sa.Column("lunch_start", sa.String(5), nullable=True),
        sa.Column("lunch_end", sa.String(5), nullable=True),
        sa.CheckConstraint("weekday BETWEEN 0 AND 6", name="ck_office_business_day_weekday"),
    )

    op.create_table(
        "office_holiday",
        sa.Column("office_id", sa.String(64), sa.ForeignKey("office.id", ondelete="CASCADE"), primary_key=True),
        sa.Column("id", sa.String(64), primary_key=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("date", sa.Date(), nullable=False),
        sa.Column("is_recurring", sa.Boolean(), nullable=False, server_default=sa.false()),
    )

    op.execute("""
        INSERT INTO permission (id, module, resource, action, risk_level, description) VALUES
        ('fin_view', 'Finance', 'Financial Reports', 'View', 'low', 'View financial reports and statements'),
        ('fin_edit', 'Finance', 'Financial Records', 'Edit', 'high', 'Edit financial records and transactions'),
        ('fin_approve', 'Finance', 'Transactions', 'Approve', 'high', 'Approve financial transactions above threshold'),
        ('hr_view', 'HR', 'Employee Records', 'View', 'medium', 'View employee basic information'),
        ('hr_edit', 'HR', 'Employee Records', 'Edit', 'medium', 'Edit employee information and records'),
        ('hr_salary', 'HR', 'Salary Information', 'View', 'high', 'Access salary and compensation data'),
        ('sal_view', 'Sales', 'Leads', 'View', 'low', 'View sales leads and opportunities'),
        ('sal_edit', 'Sales', 'Opportunities', 'Edit', 'low', 'Edit sales opportunities and pipeline'),
        ('sal_contract', 'Sales', 'Contracts', 'Sign', 'high', 'Sign and approve sales contracts'),
        ('sys_users', 'System', 'User Management', 'Manage', 'high', 'Create, edit, and deactivate users'),
        ('sys_roles', 'System', 'Role Management', 'Manage', 'high', 'Create and modify user roles'),
        ('sys_audit', 'System', 'Audit Logs', 'View', 'medium', 'Access system audit logs and reports')
    """)


def downgrade() -> None:
    op.drop_table("office_holiday")
    op.drop_table("office_business_day")
    op.drop_table("office")
    op.drop_table("role_permission")
    op.drop_index("ix_role_parent_role_id", table_name="role")
    op.drop_table("role")
    op.drop_table("permission")
