"""Initial league schema baseline."""

from __future__ import annotations

from alembic import op

from flagleague.db import games, league, statistics, users  # noqa: F401
from flagleague.db.base import Base

# revision identifiers, used by Alembic.
revision = "20261019_000001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    """Create tournaments, divisions, teams, players, games, statistics and users."""
    bind = op.get_bind()
    Base.metadata.create_all(bind=bind)


def downgrade() -> None:
    bind = op.get_bind()
    Base.metadata.drop_all(bind=bind)
