"""connection_pair_and_team_seats

- One pending or accepted connection per unordered pair of users
- projects.member_count, taken with a conditional update on approval

Revision ID: 8f2a6c1d4e90
Revises: 3c41d0e9a7b2
Create Date: 2026-10-18 15:40:02.917443

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "8f2a6c1d4e90"
down_revision: Union[str, Sequence[str], None] = "3c41d0e9a7b2"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.execute("""
        CREATE UNIQUE INDEX uq_collaboration_requests_connection_pair
        ON collaboration_requests (
            LEAST(requester_id, target_id), GREATEST(requester_id, target_id)
        )
        WHERE kind = 'connection' AND status IN ('pending', 'accepted')
    """)

    op.add_column(
        "projects",
        sa.Column("member_count", sa.Integer(), nullable=False, server_default="0"),
    )
    op.execute("""
        UPDATE projects p
        SET member_count = (
            SELECT COUNT(*) FROM collaboration_requests r
            WHERE r.target_id = p.id
              AND r.kind = 'project_join'
              AND r.status = 'accepted'
        )
    """)
    # The lead holds one seat
    op.create_check_constraint(
        "member_count_within_team_size",
        "projects",
        "max_team_size IS NULL OR member_count < max_team_size",
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_constraint("member_count_within_team_size", "projects", type_="check")
    op.drop_column("projects", "member_count")
    op.drop_index(
        "uq_collaboration_requests_connection_pair",
        table_name="collaboration_requests",
    )
