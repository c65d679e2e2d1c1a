"""Data access for projects and their grants."""

from collections.abc import Iterable

from sqlalchemy import func
from sqlmodel import Session, col, select

from chromepass.access.grants import PROJECT_GRANTS, GrantRepository
from chromepass.credential.models import Credential
from chromepass.project.models import Project


class ProjectRepository:
    def __init__(self, session: Session):
        self.session = session
        self.grants = GrantRepository(session, PROJECT_GRANTS)

    def get(self, project_id: int) -> Project | None:
        return self.session.get(Project, project_id)

    def get_active(self, project_id: int) -> Project | None:
        project = self.get(project_id)
        if project is None or not project.is_active:
            return None
        return project

    def list_active(self, ids: Iterable[int] | None = None) -> list[Project]:
        """Active projects ordered by name, optionally restricted to ``ids``."""
        statement = select(Project).where(Project.is_active)
        if ids is not None:
            id_list = list(ids)
            if not id_list:
                return []
            statement = statement.where(col(Project.id).in_(id_list))
        return list(self.session.exec(statement.order_by(col(Project.name))))

    def active_names(self, exclude_id: int | None = None) -> list[str]:
        statement = select(Project.name).where(Project.is_active)
        if exclude_id is not None:
            statement = statement.where(Project.id != exclude_id)
        return list(self.session.exec(statement))

    def add(self, project: Project) -> Project:
        self.session.add(project)
        return project

    def credential_counts(self, project_ids: Iterable[int]) -> dict[int, int]:
        """Number of active credentials per project."""
        ids = list(project_ids)
        if not ids:
            return {}
        rows = self.session.exec(
            select(Credential.project_id, func.count())
            .where(col(Credential.project_id).in_(ids), Credential.is_active)
            .group_by(col(Credential.project_id))
        )
        return dict(rows.all())
