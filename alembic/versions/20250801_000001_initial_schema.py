"""Initial pool schema: teams, users, games, picks."""

from __future__ import annotations

from alembic import op

from survivor_pool.db import Base

# revision identifiers, used by Alembic.
revision = "20250801_000001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    """Create the schema from SQLAlchemy metadata."""
    bind = op.get_bind()
    Base.metadata.create_all(bind=bind)


def downgrade() -> None:
    bind = op.get_bind()
    Base.metadata.drop_all(bind=bind)
