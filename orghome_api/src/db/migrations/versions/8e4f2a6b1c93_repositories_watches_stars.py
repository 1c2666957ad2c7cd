"""Repositories with watch and star relationships.

Adds:
- repositories (indexed for the org home sort orders)
- watches
- stars
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "8e4f2a6b1c93"
down_revision: Union[str, None] = "3c1d9e7a5b20"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list:
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    ]


def upgrade() -> None:
    op.create_table(
        "repositories",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("owner_id", sa.Uuid(), nullable=False),
        sa.Column("name", sa.Text(), nullable=False),
        sa.Column("lower_name", sa.Text(), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("primary_language", sa.Text(), nullable=True),
        sa.Column("is_private", sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.Column("is_fork", sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.Column("is_mirror", sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.Column("num_stars", sa.Integer(), server_default="0", nullable=False),
        sa.Column("num_forks", sa.Integer(), server_default="0", nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(["owner_id"], ["organizations.id"], ondelete="CASCADE"),
        sa.UniqueConstraint("owner_id", "lower_name", name="uq_repositories_owner_lower_name"),
    )
    op.create_index("ix_repositories_owner_id", "repositories", ["owner_id"])
    # One index per sortable column, scoped to the owner
    for col in ("updated_at", "created_at", "num_stars", "num_forks"):
        op.create_index(f"ix_repositories_owner_{col}", "repositories", ["owner_id", col])

    op.create_table(
        "watches",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("user_id", sa.Uuid(), nullable=False),
        sa.Column("repo_id", sa.Uuid(), nullable=False),
        sa.Column("mode", sa.Integer(), server_default="1", nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["repo_id"], ["repositories.id"], ondelete="CASCADE"),
        sa.UniqueConstraint("user_id", "repo_id", name="uq_watches_user_repo"),
    )
    op.create_index("ix_watches_user_id", "watches", ["user_id"])
    op.create_index("ix_watches_repo_id", "watches", ["repo_id"])

    op.create_table(
        "stars",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("user_id", sa.Uuid(), nullable=False),
        sa.Column("repo_id", sa.Uuid(), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["repo_id"], ["repositories.id"], ondelete="CASCADE"),
        sa.UniqueConstraint("user_id", "repo_id", name="uq_stars_user_repo"),
    )
    op.create_index("ix_stars_user_id", "stars", ["user_id"])
    op.create_index("ix_stars_repo_id", "stars", ["repo_id"])


def downgrade() -> None:
    op.drop_table("stars")
    op.drop_table("watches")
    for col in ("updated_at", "created_at", "num_stars", "num_forks"):
        op.drop_index(f"ix_repositories_owner_{col}", table_name="repositories")
    op.drop_table("repositories")
