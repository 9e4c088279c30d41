"""SQLAlchemy table definitions for IntraLink.

These tables match the schema created by the Alembic migrations. Users,
projects and the mentor tables are owned by other features; the
collaboration core reads them, writes collaboration_requests and keeps
projects.member_count in step with accepted join requests.
"""

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    ForeignKey,
    Index,
    Integer,
    MetaData,
    SmallInteger,
    String,
    Table,
    Text,
    UniqueConstraint,
    and_,
    func,
)
from sqlalchemy.dialects import postgresql
from sqlalchemy.dialects.postgresql import ARRAY, JSONB, TIMESTAMP, UUID

from intralink.domain.repository.request import (
    CONNECTION_PAIR_CONSTRAINT,
    PENDING_REQUEST_CONSTRAINT,
    SESSION_SLOT_CONSTRAINT,
)

metadata = MetaData()

# ============================================================================
# USERS TABLE
# ============================================================================
users_table = Table(
    "users",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column(
        "role",
        postgresql.ENUM(
            "learner",
            "instructor",
            "mentor",
            "administrator",
            name="user_role",
            create_type=False,
        ),
        nullable=False,
    ),
    Column("tenant_id", UUID, nullable=True),  # NULL only for administrators
    Column("display_name", String(255), nullable=True),
    Column("email", String(255), nullable=False),
    Column("avatar_url", Text, nullable=True),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    CheckConstraint(
        "role = 'administrator' OR tenant_id IS NOT NULL", name="users_tenant_required"
    ),
)

Index("idx_users_tenant_id", users_table.c.tenant_id)

# ============================================================================
# PROJECTS TABLE
# ============================================================================
projects_table = Table(
    "projects",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("tenant_id", UUID, nullable=False),
    Column("lead_id", UUID, ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
    Column("title", String(300), nullable=False),
    Column("description", Text, nullable=False, server_default=""),
    Column(
        "status",
        postgresql.ENUM(
            "open", "in_progress", "completed", name="project_status", create_type=False
        ),
        nullable=False,
        server_default="open",
    ),
    Column("required_skills", ARRAY(Text), nullable=False, server_default="{}"),
    Column("max_team_size", Integer, nullable=True),
    Column("member_count", Integer, nullable=False, server_default="0"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    CheckConstraint(
        "max_team_size IS NULL OR max_team_size >= 1", name="max_team_size_positive"
    ),
    # The lead holds one seat
    CheckConstraint(
        "max_team_size IS NULL OR member_count < max_team_size",
        name="member_count_within_team_size",
    ),
)

Index("idx_projects_lead_id", projects_table.c.lead_id)
Index("idx_projects_tenant_id", projects_table.c.tenant_id)

# ============================================================================
# MENTOR TABLES
# ============================================================================
mentor_profiles_table = Table(
    "mentor_profiles",
    metadata,
    Column(
        "user_id", UUID, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True
    ),
    Column("expertise", ARRAY(Text), nullable=False, server_default="{}"),
    Column("bio", Text, nullable=True),
    Column("is_active", Boolean, nullable=False, server_default="true"),
)

mentor_availability_table = Table(
    "mentor_availability",
    metadata,
    Column(
        "mentor_id", UUID, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    ),
    Column("day_of_week", SmallInteger, nullable=False),  # 0 = Sunday
    Column("time_labels", ARRAY(Text), nullable=False, server_default="{}"),
    UniqueConstraint("mentor_id", "day_of_week", name="uq_mentor_availability_day"),
    CheckConstraint("day_of_week BETWEEN 0 AND 6", name="day_of_week_range"),
)

session_feedback_table = Table(
    "session_feedback",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column(
        "mentor_id", UUID, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    ),
    Column(
        "learner_id", UUID, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    ),
    Column("rating", SmallInteger, nullable=False),
    Column("comment", Text, nullable=True),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    CheckConstraint("rating BETWEEN 1 AND 5", name="rating_range"),
)

Index("idx_session_feedback_mentor_id", session_feedback_table.c.mentor_id)

# ============================================================================
# COLLABORATION REQUESTS TABLE
# ============================================================================
collaboration_requests_table = Table(
    "collaboration_requests",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column(
        "kind",
        postgresql.ENUM(
            "connection",
            "project_join",
            "mentorship_session",
            name="request_kind",
            create_type=False,
        ),
        nullable=False,
    ),
    Column(
        "requester_id",
        UUID,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("target_id", UUID, nullable=False),  # user, project or mentor
    Column("tenant_id", UUID, nullable=True),
    Column(
        "status",
        postgresql.ENUM(
            "pending", "accepted", "rejected", name="request_status", create_type=False
        ),
        nullable=False,
        server_default="pending",
    ),
    Column("payload", JSONB, nullable=False, server_default="{}"),
    # Denormalized from the payload so the slot index can see them
    Column("slot_day", SmallInteger, nullable=True),
    Column("slot_time", String(11), nullable=True),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column("responded_at", TIMESTAMP(timezone=True), nullable=True),
    CheckConstraint(
        "kind <> 'mentorship_session' OR (slot_day IS NOT NULL AND slot_time IS NOT NULL)",
        name="mentorship_slot_required",
    ),
)

Index("idx_requests_requester", collaboration_requests_table.c.requester_id)
Index(
    "idx_requests_target_kind_status",
    collaboration_requests_table.c.target_id,
    collaboration_requests_table.c.kind,
    collaboration_requests_table.c.status,
)

# One pending request per (requester, target, kind)
Index(
    PENDING_REQUEST_CONSTRAINT,
    collaboration_requests_table.c.requester_id,
    collaboration_requests_table.c.target_id,
    collaboration_requests_table.c.kind,
    unique=True,
    postgresql_where=collaboration_requests_table.c.status == "pending",
)

# One pending or accepted session per mentor slot
Index(
    SESSION_SLOT_CONSTRAINT,
    collaboration_requests_table.c.target_id,
    collaboration_requests_table.c.slot_day,
    collaboration_requests_table.c.slot_time,
    unique=True,
    postgresql_where=and_(
        collaboration_requests_table.c.kind == "mentorship_session",
        collaboration_requests_table.c.status.in_(["pending", "accepted"]),
    ),
)

# One pending or accepted connection per unordered pair of users
Index(
    CONNECTION_PAIR_CONSTRAINT,
    func.least(
        collaboration_requests_table.c.requester_id,
        collaboration_requests_table.c.target_id,
    ),
    func.greatest(
        collaboration_requests_table.c.requester_id,
        collaboration_requests_table.c.target_id,
    ),
    unique=True,
    postgresql_where=and_(
        collaboration_requests_table.c.kind == "connection",
        collaboration_requests_table.c.status.in_(["pending", "accepted"]),
    ),
)
