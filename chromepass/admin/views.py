from sqladmin import ModelView

from chromepass.credential.models import Credential
from chromepass.project.models import Project
from chromepass.team.models import Team
from chromepass.user.models import User


class UserAdmin(ModelView, model=User):
    name = "User"
    name_plural = "Users"

    column_list = [
        User.id,
        User.email,
        User.first_name,
        User.last_name,
        User.role,
        User.state,
        User.email_verified,
        User.last_login,
        User.created_at,
    ]
    column_searchable_list = [User.email, User.first_name, User.last_name]
    column_sortable_list = [User.id, User.email, User.state, User.created_at]
    # Password hashes and verification tokens never leave the API.
    column_details_exclude_list = [User.password_hash, User.email_verification_token]
    form_excluded_columns = [User.password_hash, User.email_verification_token]
    can_create = False
    can_delete = False


class TeamAdmin(ModelView, model=Team):
    name = "Team"
    name_plural = "Teams"

    column_list = [Team.id, Team.name, Team.is_active, Team.created_by_id, Team.created_at]
    column_searchable_list = [Team.name]
    column_sortable_list = [Team.id, Team.name, Team.created_at]
    can_delete = False


class ProjectAdmin(ModelView, model=Project):
    name = "Project"
    name_plural = "Projects"

    column_list = [
        Project.id,
        Project.name,
        Project.is_active,
        Project.created_by_id,
        Project.created_at,
    ]
    column_searchable_list = [Project.name]
    column_sortable_list = [Project.id, Project.name, Project.created_at]
    can_delete = False


class CredentialAdmin(ModelView, model=Credential):
    name = "Credential"
    name_plural = "Credentials"

    column_list = [
        Credential.id,
        Credential.label,
        Credential.url,
        Credential.username,
        Credential.project_id,
        Credential.is_active,
        Credential.use_count,
        Credential.last_used,
    ]
    column_searchable_list = [Credential.label, Credential.url, Credential.username]
    column_sortable_list = [Credential.id, Credential.label, Credential.last_used]
    column_details_exclude_list = [Credential.password]
    form_excluded_columns = [Credential.password]
    can_create = False
    can_delete = False


ADMIN_VIEWS = (UserAdmin, TeamAdmin, ProjectAdmin, CredentialAdmin)
