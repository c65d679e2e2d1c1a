"""Credential management, lookup by page url and usage tracking."""

import logging
from typing import Annotated

from fastapi import Depends
from sqlmodel import Session

from chromepass.access.exceptions import NotOwnerError
from chromepass.access.policy import ensure_can_modify
from chromepass.access.resolver import AccessResolver
from chromepass.access.service import GrantService
from chromepass.core.deps import SessionDep
from chromepass.core.mixins import utc_now
from chromepass.credential.exceptions import CredentialNotFoundError
from chromepass.credential.models import Credential
from chromepass.credential.repository import CredentialRepository
from chromepass.credential.schemas import (
    CredentialCreate,
    CredentialRead,
    CredentialUpdate,
)
from chromepass.project.exceptions import ProjectNotFoundError
from chromepass.project.models import Project
from chromepass.project.repository import ProjectRepository
from chromepass.user.models import User
from chromepass.user.schemas import UserSummary

logger = logging.getLogger(__name__)

_GRANT_FIELDS = {"user_ids", "team_ids"}


class CredentialService:
    def __init__(self, session: Session):
        self.session = session
        self.credentials = CredentialRepository(session)
        self.projects = ProjectRepository(session)
        self.resolver = AccessResolver(session)
        self.grants = GrantService(session, self.credentials.grants, "credential")

    def get(self, credential_id: int) -> Credential:
        credential = self.credentials.get_active(credential_id)
        if credential is None:
            raise CredentialNotFoundError()
        return credential

    def get_accessible(self, actor: User, credential_id: int, action: str = "view") -> Credential:
        """Return the credential when ``actor`` may read it.

        Admins may read any credential since they may change any of them.
        """
        credential = self.get(credential_id)
        if actor.is_admin or self.resolver.can_access_credential(actor.id, credential):  # type: ignore[arg-type]
            return credential
        raise NotOwnerError(f"Not authorized to {action} this credential")

    def to_read(self, credential: Credential) -> CredentialRead:
        creator = (
            self.session.get(User, credential.created_by_id)
            if credential.created_by_id is not None
            else None
        )
        project = (
            self.session.get(Project, credential.project_id)
            if credential.project_id is not None
            else None
        )
        return CredentialRead(
            id=credential.id,  # type: ignore[arg-type]
            label=credential.label,
            url=credential.url,
            url_pattern=credential.url_pattern,
            username=credential.username,
            password=credential.password,
            description=credential.description,
            project_id=credential.project_id,
            project_name=project.name if project else None,
            is_active=credential.is_active,
            created_by_id=credential.created_by_id,
            created_by=UserSummary.model_validate(creator) if creator else None,
            last_used=credential.last_used,
            use_count=credential.use_count,
            created_at=credential.created_at,
            updated_at=credential.updated_at,
        )

    def list_credentials(
        self,
        actor: User,
        *,
        project_id: int | None = None,
        search: str | None = None,
        all_credentials: bool = False,
    ) -> list[Credential]:
        """Credentials visible to ``actor``, newest first.

        Admins asking for all credentials get every active one.
        """
        if all_credentials and actor.is_admin:
            return self.credentials.list_active(project_id=project_id, search=search)
        return self.resolver.visible_credentials(
            actor.id, project_id=project_id, search=search  # type: ignore[arg-type]
        )

    def for_url(self, actor: User, url: str) -> list[Credential]:
        return self.resolver.credentials_for_url(actor.id, url)  # type: ignore[arg-type]

    def projects_in_use(self, actor: User) -> list[Project]:
        """Active projects that group the credentials visible to ``actor``."""
        project_ids = {
            credential.project_id
            for credential in self.resolver.visible_credentials(actor.id)  # type: ignore[arg-type]
            if credential.project_id is not None
        }
        return self.projects.list_active(ids=project_ids)

    def _ensure_project(self, project_id: int | None) -> None:
        if project_id is not None and self.projects.get_active(project_id) is None:
            raise ProjectNotFoundError()

    def create(self, actor: User, data: CredentialCreate) -> Credential:
        self._ensure_project(data.project_id)
        credential = self.credentials.add(
            Credential(
                **data.model_dump(exclude=_GRANT_FIELDS),
                created_by_id=actor.id,
            )
        )
        try:
            self.session.flush()
            self.grants.replace(
                credential.id,  # type: ignore[arg-type]
                user_ids=data.user_ids,
                team_ids=data.team_ids,
            )
            self.session.commit()
        except Exception:
            self.session.rollback()
            raise
        self.session.refresh(credential)
        logger.info(
            "Credential %s created",
            credential.id,
            extra={"credential_id": credential.id, "actor_id": actor.id},
        )
        return credential

    def update(
        self, actor: User, credential: Credential, data: CredentialUpdate
    ) -> Credential:
        ensure_can_modify(actor, credential, "update", "credential")
        update_data = data.model_dump(exclude_unset=True, exclude=_GRANT_FIELDS)
        if "project_id" in update_data:
            self._ensure_project(update_data["project_id"])

        for key, value in update_data.items():
            if value is None and key in ("label", "url", "username", "password"):
                continue
            setattr(credential, key, value)
        self.session.add(credential)

        try:
            self.grants.replace(
                credential.id,  # type: ignore[arg-type]
                user_ids=data.user_ids,
                team_ids=data.team_ids,
            )
            self.session.commit()
        except Exception:
            self.session.rollback()
            raise
        self.session.refresh(credential)
        return credential

    def delete(self, actor: User, credential: Credential) -> None:
        ensure_can_modify(actor, credential, "delete", "credential")
        credential.is_active = False
        self.session.add(credential)
        self.session.commit()
        logger.info(
            "Credential %s deleted",
            credential.id,
            extra={"credential_id": credential.id, "actor_id": actor.id},
        )

    def record_use(self, actor: User, credential_id: int) -> Credential:
        credential = self.get_accessible(actor, credential_id, action="use")
        credential.last_used = utc_now()
        credential.use_count += 1
        self.session.add(credential)
        self.session.commit()
        self.session.refresh(credential)
        return credential


def get_credential_service(session: SessionDep) -> CredentialService:
    return CredentialService(session)


CredentialServiceDep = Annotated[CredentialService, Depends(get_credential_service)]
