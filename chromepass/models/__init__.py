"""
Model package.

IMPORTANT (Alembic / SQLModel):
- Alembic autogenerate and `SQLModel.metadata.create_all()` rely on
  `SQLModel.metadata`, which is populated only when the table models are
  imported.
- `chromepass/alembic/env.py` and `chromepass.db.engine.init_db` import this
  package, so it must import all SQLModel `table=True` models to register them.
"""

# Import table models so SQLModel registers them in metadata.
from chromepass.credential.models import (  # noqa: F401
    Credential,
    CredentialTeam,
    CredentialUser,
)
from chromepass.project.models import Project, ProjectTeam, ProjectUser  # noqa: F401
from chromepass.team.models import Team, TeamMember  # noqa: F401
from chromepass.user.models import User  # noqa: F401

__all__ = [
    "Credential",
    "CredentialTeam",
    "CredentialUser",
    "Project",
    "ProjectTeam",
    "ProjectUser",
    "Team",
    "TeamMember",
    "User",
]
