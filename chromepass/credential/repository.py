"""Data access for credentials and their grants."""

from collections.abc import Iterable

from sqlalchemy import func, or_
from sqlmodel import Session, col, select

from chromepass.access.grants import CREDENTIAL_GRANTS, GrantRepository
from chromepass.credential.models import Credential


class CredentialRepository:
    def __init__(self, session: Session):
        self.session = session
        self.grants = GrantRepository(session, CREDENTIAL_GRANTS)

    def get(self, credential_id: int) -> Credential | None:
        return self.session.get(Credential, credential_id)

    def get_active(self, credential_id: int) -> Credential | None:
        credential = self.get(credential_id)
        if credential is None or not credential.is_active:
            return None
        return credential

    def list_active(
        self,
        *,
        ids: Iterable[int] | None = None,
        project_id: int | None = None,
        search: str | None = None,
    ) -> list[Credential]:
        """Active credentials, newest first.

        ``ids`` restricts the result to the given credentials (an empty
        iterable yields nothing). ``search`` matches label, url, username
        and description case-insensitively.
        """
        statement = select(Credential).where(Credential.is_active)
        if ids is not None:
            id_list = list(ids)
            if not id_list:
                return []
            statement = statement.where(col(Credential.id).in_(id_list))
        if project_id is not None:
            statement = statement.where(Credential.project_id == project_id)
        if search:
            pattern = f"%{search.lower()}%"
            statement = statement.where(
                or_(
                    func.lower(Credential.label).like(pattern),
                    func.lower(Credential.url).like(pattern),
                    func.lower(Credential.username).like(pattern),
                    func.lower(func.coalesce(Credential.description, "")).like(pattern),
                )
            )
        statement = statement.order_by(
            col(Credential.created_at).desc(), col(Credential.id).desc()
        )
        return list(self.session.exec(statement))

    def add(self, credential: Credential) -> Credential:
        self.session.add(credential)
        return credential
