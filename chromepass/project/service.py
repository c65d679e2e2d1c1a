"""Project management and project access grants."""

import logging
from typing import Annotated

from fastapi import Depends
from sqlmodel import Session

from chromepass.access.exceptions import NotOwnerError
from chromepass.access.policy import ensure_can_modify
from chromepass.access.resolver import AccessResolver
from chromepass.access.service import GrantService
from chromepass.core.deps import SessionDep
from chromepass.core.exceptions import DuplicateNameError
from chromepass.core.names import find_duplicate
from chromepass.project.exceptions import ProjectNotFoundError
from chromepass.project.models import Project
from chromepass.project.repository import ProjectRepository
from chromepass.project.schemas import ProjectCreate, ProjectRead, ProjectUpdate
from chromepass.user.models import User
from chromepass.user.schemas import UserSummary

logger = logging.getLogger(__name__)


class ProjectService:
    def __init__(self, session: Session):
        self.session = session
        self.projects = ProjectRepository(session)
        self.resolver = AccessResolver(session)
        self.grants = GrantService(session, self.projects.grants, "project")

    def get(self, project_id: int) -> Project:
        project = self.projects.get_active(project_id)
        if project is None:
            raise ProjectNotFoundError()
        return project

    def get_visible(self, actor: User, project_id: int) -> Project:
        project = self.get(project_id)
        if actor.is_admin or project.id in self.resolver.accessible_project_ids(actor.id):  # type: ignore[arg-type]
            return project
        raise NotOwnerError("Not authorized to view this project")

    def to_reads(self, projects: list[Project]) -> list[ProjectRead]:
        counts = self.projects.credential_counts(p.id for p in projects)  # type: ignore[misc]
        reads = []
        for project in projects:
            creator = (
                self.session.get(User, project.created_by_id)
                if project.created_by_id is not None
                else None
            )
            reads.append(
                ProjectRead(
                    id=project.id,  # type: ignore[arg-type]
                    name=project.name,
                    description=project.description,
                    is_active=project.is_active,
                    created_by_id=project.created_by_id,
                    created_by=UserSummary.model_validate(creator) if creator else None,
                    created_at=project.created_at,
                    updated_at=project.updated_at,
                    credentials_count=counts.get(project.id, 0),  # type: ignore[arg-type]
                    user_count=len(self.resolver.project_assignees(project.id)),  # type: ignore[arg-type]
                )
            )
        return reads

    def to_read(self, project: Project) -> ProjectRead:
        return self.to_reads([project])[0]

    def list_projects(self, actor: User, *, all_projects: bool = False) -> list[Project]:
        """Projects visible to ``actor``; every active project when an admin
        asks for all of them."""
        if all_projects and actor.is_admin:
            return self.projects.list_active()
        return self.resolver.visible_projects(actor.id)  # type: ignore[arg-type]

    def _ensure_unique_name(self, name: str, exclude_id: int | None = None) -> None:
        duplicate = find_duplicate(
            name, self.projects.active_names(exclude_id=exclude_id)
        )
        if duplicate is not None:
            raise DuplicateNameError("project", duplicate)

    def create(self, actor: User, data: ProjectCreate) -> Project:
        self._ensure_unique_name(data.name)
        project = self.projects.add(
            Project(name=data.name, description=data.description, created_by_id=actor.id)
        )
        self.session.commit()
        self.session.refresh(project)
        logger.info(
            "Project %s created",
            project.id,
            extra={"project_id": project.id, "actor_id": actor.id},
        )
        return project

    def update(self, actor: User, project: Project, data: ProjectUpdate) -> Project:
        ensure_can_modify(actor, project, "update", "project")
        update_data = data.model_dump(exclude_unset=True)
        if update_data.get("name") and update_data["name"] != project.name:
            self._ensure_unique_name(update_data["name"], exclude_id=project.id)
        for key, value in update_data.items():
            if key in ("name", "is_active") and value is None:
                continue
            setattr(project, key, value)
        self.session.add(project)
        self.session.commit()
        self.session.refresh(project)
        return project

    def delete(self, actor: User, project: Project) -> None:
        ensure_can_modify(actor, project, "delete", "project")
        project.is_active = False
        self.session.add(project)
        self.session.commit()
        logger.info(
            "Project %s deleted",
            project.id,
            extra={"project_id": project.id, "actor_id": actor.id},
        )


def get_project_service(session: SessionDep) -> ProjectService:
    return ProjectService(session)


ProjectServiceDep = Annotated[ProjectService, Depends(get_project_service)]
