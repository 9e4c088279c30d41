"""initial_schema

Create the schema of the IntraLink collaboration core:
- Users (tenant-scoped, one role each)
- Projects (led by a user, optional team size cap)
- Mentor profiles, weekly availability and session feedback
- Collaboration requests (connections, project joins, mentorship sessions)

Revision ID: 3c41d0e9a7b2
Revises:
Create Date: 2026-10-18 09:12:44.318210

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = "3c41d0e9a7b2"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


ENUM_TYPES = {
    "user_role": ("learner", "instructor", "mentor", "administrator"),
    "project_status": ("open", "in_progress", "completed"),
    "request_kind": ("connection", "project_join", "mentorship_session"),
    "request_status": ("pending", "accepted", "rejected"),
}


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.Column(
            "updated_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
    ]


def upgrade() -> None:
    """Upgrade schema."""
    op.execute('CREATE EXTENSION IF NOT EXISTS "uuid-ossp"')

    # Create ENUM types (idempotent)
    for name, values in ENUM_TYPES.items():
        labels = ", ".join(f"'{value}'" for value in values)
        op.execute(f"""
            DO $$ BEGIN
                CREATE TYPE {name} AS ENUM ({labels});
            EXCEPTION
                WHEN duplicate_object THEN null;
            END $$;
        """)

    # ========================================================================
    # USERS table
    # ========================================================================
    op.create_table(
        "users",
        sa.Column(
            "id",
            sa.UUID(),
            server_default=sa.text("uuid_generate_v4()"),
            nullable=False,
        ),
        sa.Column(
            "role",
            postgresql.ENUM(*ENUM_TYPES["user_role"], name="user_role", create_type=False),
            nullable=False,
        ),
        sa.Column("tenant_id", sa.UUID(), nullable=True),
        sa.Column("display_name", sa.String(255), nullable=True),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("avatar_url", sa.Text(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint(
            "role = 'administrator' OR tenant_id IS NOT NULL",
            name="users_tenant_required",
        ),
    )
    op.create_index("idx_users_tenant_id", "users", ["tenant_id"])

    # ========================================================================
    # PROJECTS table
    # ========================================================================
    op.create_table(
        "projects",
        sa.Column(
            "id",
            sa.UUID(),
            server_default=sa.text("uuid_generate_v4()"),
            nullable=False,
        ),
        sa.Column("tenant_id", sa.UUID(), nullable=False),
        sa.Column("lead_id", sa.UUID(), nullable=False),
        sa.Column("title", sa.String(300), nullable=False),
        sa.Column("description", sa.Text(), nullable=False, server_default=""),
        sa.Column(
            "status",
            postgresql.ENUM(
                *ENUM_TYPES["project_status"], name="project_status", create_type=False
            ),
            nullable=False,
            server_default="open",
        ),
        sa.Column(
            "required_skills",
            postgresql.ARRAY(sa.Text()),
            nullable=False,
            server_default="{}",
        ),
        sa.Column("max_team_size", sa.Integer(), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(["lead_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint(
            "max_team_size IS NULL OR max_team_size >= 1",
            name="max_team_size_positive",
        ),
    )
    op.create_index("idx_projects_lead_id", "projects", ["lead_id"])
    op.create_index("idx_projects_tenant_id", "projects", ["tenant_id"])

    # ========================================================================
    # MENTOR tables
    # ========================================================================
    op.create_table(
        "mentor_profiles",
        sa.Column("user_id", sa.UUID(), nullable=False),
        sa.Column(
            "expertise", postgresql.ARRAY(sa.Text()), nullable=False, server_default="{}"
        ),
        sa.Column("bio", sa.Text(), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default="true"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("user_id"),
    )

    op.create_table(
        "mentor_availability",
        sa.Column("mentor_id", sa.UUID(), nullable=False),
        sa.Column("day_of_week", sa.SmallInteger(), nullable=False),  # 0 = Sunday
        sa.Column(
            "time_labels",
            postgresql.ARRAY(sa.Text()),
            nullable=False,
            server_default="{}",
        ),
        sa.ForeignKeyConstraint(["mentor_id"], ["users.id"], ondelete="CASCADE"),
        sa.UniqueConstraint(
            "mentor_id", "day_of_week", name="uq_mentor_availability_day"
        ),
        sa.CheckConstraint("day_of_week BETWEEN 0 AND 6", name="day_of_week_range"),
    )

    op.create_table(
        "session_feedback",
        sa.Column(
            "id",
            sa.UUID(),
            server_default=sa.text("uuid_generate_v4()"),
            nullable=False,
        ),
        sa.Column("mentor_id", sa.UUID(), nullable=False),
        sa.Column("learner_id", sa.UUID(), nullable=False),
        sa.Column("rating", sa.SmallInteger(), nullable=False),
        sa.Column("comment", sa.Text(), nullable=True),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.ForeignKeyConstraint(["mentor_id"], ["users.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["learner_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint("rating BETWEEN 1 AND 5", name="rating_range"),
    )
    op.create_index(
        "idx_session_feedback_mentor_id", "session_feedback", ["mentor_id"]
    )

    # ========================================================================
    # COLLABORATION_REQUESTS table
    # ========================================================================
    op.create_table(
        "collaboration_requests",
        sa.Column(
            "id",
            sa.UUID(),
            server_default=sa.text("uuid_generate_v4()"),
            nullable=False,
        ),
        sa.Column(
            "kind",
            postgresql.ENUM(
                *ENUM_TYPES["request_kind"], name="request_kind", create_type=False
            ),
            nullable=False,
        ),
        sa.Column("requester_id", sa.UUID(), nullable=False),
        sa.Column("target_id", sa.UUID(), nullable=False),
        sa.Column("tenant_id", sa.UUID(), nullable=True),
        sa.Column(
            "status",
            postgresql.ENUM(
                *ENUM_TYPES["request_status"], name="request_status", create_type=False
            ),
            nullable=False,
            server_default="pending",
        ),
        sa.Column(
            "payload",
            postgresql.JSONB(),
            nullable=False,
            server_default=sa.text("'{}'::jsonb"),
        ),
        sa.Column("slot_day", sa.SmallInteger(), nullable=True),
        sa.Column("slot_time", sa.String(11), nullable=True),
        *_timestamps(),
        sa.Column("responded_at", sa.TIMESTAMP(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(["requester_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint(
            "kind <> 'mentorship_session' OR "
            "(slot_day IS NOT NULL AND slot_time IS NOT NULL)",
            name="mentorship_slot_required",
        ),
    )
    op.create_index(
        "idx_requests_requester", "collaboration_requests", ["requester_id"]
    )
    op.create_index(
        "idx_requests_target_kind_status",
        "collaboration_requests",
        ["target_id", "kind", "status"],
    )

    # One pending request per (requester, target, kind)
    op.create_index(
        "uq_collaboration_requests_pending",
        "collaboration_requests",
        ["requester_id", "target_id", "kind"],
        unique=True,
        postgresql_where=sa.text("status = 'pending'"),
    )

    # One pending or accepted session per mentor slot
    op.create_index(
        "uq_collaboration_requests_slot",
        "collaboration_requests",
        ["target_id", "slot_day", "slot_time"],
        unique=True,
        postgresql_where=sa.text(
            "kind = 'mentorship_session' AND status IN ('pending', 'accepted')"
        ),
    )

    # ========================================================================
    # TRIGGERS
    # ========================================================================
    op.execute("""
        CREATE OR REPLACE FUNCTION update_updated_at_column()
        RETURNS TRIGGER AS $$
        BEGIN
            NEW.updated_at = NOW();
            RETURN NEW;
        END;
        $$ LANGUAGE plpgsql
    """)

    for table in ("users", "projects", "collaboration_requests"):
        op.execute(f"""
            CREATE TRIGGER update_{table}_updated_at
            BEFORE UPDATE ON {table}
            FOR EACH ROW EXECUTE FUNCTION update_updated_at_column()
        """)


def downgrade() -> None:
    """Downgrade schema."""
    for table in ("collaboration_requests", "projects", "users"):
        op.execute(f"DROP TRIGGER IF EXISTS update_{table}_updated_at ON {table}")
    op.execute("DROP FUNCTION IF EXISTS update_updated_at_column()")

    # Drop tables (in reverse order of dependencies)
    op.drop_table("collaboration_requests")
    op.drop_table("session_feedback")
    op.drop_table("mentor_availability")
    op.drop_table("mentor_profiles")
    op.drop_table("projects")
    op.drop_table("users")

    # Drop ENUM types
    for name in reversed(list(ENUM_TYPES)):
        op.execute(f"DROP TYPE IF EXISTS {name}")
