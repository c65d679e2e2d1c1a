"""create_chromepass_tables

Revision ID: 3f1c2a9d7b10
Revises:
Create Date: 2026-10-17 20:55:12.402118

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
import sqlmodel


# revision identifiers, used by Alembic.
revision: str = '3f1c2a9d7b10'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            'created_at',
            sa.DateTime(),
            server_default=sa.text('CURRENT_TIMESTAMP'),
            nullable=False,
        ),
        sa.Column(
            'updated_at',
            sa.DateTime(),
            server_default=sa.text('CURRENT_TIMESTAMP'),
            nullable=False,
        ),
    ]


def _owned_resource(name: str, *columns: sa.Column) -> None:
    """Create a soft-deletable table that records its creator."""
    op.create_table(
        name,
        sa.Column('id', sa.Integer(), nullable=False),
        *columns,
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.Column('created_by_id', sa.Integer(), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(['created_by_id'], ['cp_users.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f(f'ix_{name}_is_active'), name, ['is_active'])
    op.create_index(op.f(f'ix_{name}_created_by_id'), name, ['created_by_id'])


def _join_table(name: str, left: tuple[str, str], right: tuple[str, str]) -> None:
    """Create a grant/membership table linking two tables by id."""
    left_column, left_table = left
    right_column, right_table = right
    op.create_table(
        name,
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column(left_column, sa.Integer(), nullable=False),
        sa.Column(right_column, sa.Integer(), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint([left_column], [f'{left_table}.id']),
        sa.ForeignKeyConstraint([right_column], [f'{right_table}.id']),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint(left_column, right_column),
    )
    op.create_index(op.f(f'ix_{name}_{left_column}'), name, [left_column])
    op.create_index(op.f(f'ix_{name}_{right_column}'), name, [right_column])


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        'cp_users',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('email', sqlmodel.sql.sqltypes.AutoString(length=255), nullable=False),
        sa.Column('password_hash', sqlmodel.sql.sqltypes.AutoString(length=255), nullable=False),
        sa.Column('first_name', sqlmodel.sql.sqltypes.AutoString(length=100), nullable=False),
        sa.Column('last_name', sqlmodel.sql.sqltypes.AutoString(length=100), nullable=False),
        sa.Column('email_verified', sa.Boolean(), nullable=False),
        sa.Column(
            'email_verification_token',
            sqlmodel.sql.sqltypes.AutoString(length=64),
            nullable=True,
        ),
        sa.Column('role', sa.Integer(), nullable=False),
        sa.Column('state', sa.Integer(), nullable=False),
        sa.Column('last_login', sa.DateTime(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_cp_users_email'), 'cp_users', ['email'], unique=True)
    op.create_index(
        op.f('ix_cp_users_email_verification_token'),
        'cp_users',
        ['email_verification_token'],
    )
    op.create_index(op.f('ix_cp_users_state'), 'cp_users', ['state'])

    _owned_resource(
        'cp_groups',
        sa.Column('name', sqlmodel.sql.sqltypes.AutoString(length=100), nullable=False),
        sa.Column('description', sqlmodel.sql.sqltypes.AutoString(), nullable=True),
    )
    op.create_index(op.f('ix_cp_groups_name'), 'cp_groups', ['name'])

    _owned_resource(
        'cp_projects',
        sa.Column('name', sqlmodel.sql.sqltypes.AutoString(length=100), nullable=False),
        sa.Column('description', sqlmodel.sql.sqltypes.AutoString(), nullable=True),
    )
    op.create_index(op.f('ix_cp_projects_name'), 'cp_projects', ['name'])

    _owned_resource(
        'cp_credentials',
        sa.Column('label', sqlmodel.sql.sqltypes.AutoString(length=255), nullable=False),
        sa.Column('url', sqlmodel.sql.sqltypes.AutoString(length=2048), nullable=False),
        sa.Column('url_pattern', sqlmodel.sql.sqltypes.AutoString(length=2048), nullable=True),
        sa.Column('username', sqlmodel.sql.sqltypes.AutoString(length=255), nullable=False),
        sa.Column('password', sqlmodel.sql.sqltypes.AutoString(length=1024), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('project_id', sa.Integer(), nullable=True),
        sa.Column('last_used', sa.DateTime(), nullable=True),
        sa.Column('use_count', sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(['project_id'], ['cp_projects.id']),
    )
    op.create_index(op.f('ix_cp_credentials_url'), 'cp_credentials', ['url'])
    op.create_index(op.f('ix_cp_credentials_project_id'), 'cp_credentials', ['project_id'])

    _join_table('cp_user_groups', ('user_id', 'cp_users'), ('group_id', 'cp_groups'))
    _join_table('cp_project_users', ('project_id', 'cp_projects'), ('user_id', 'cp_users'))
    _join_table('cp_project_groups', ('project_id', 'cp_projects'), ('group_id', 'cp_groups'))
    _join_table(
        'cp_credential_users', ('credential_id', 'cp_credentials'), ('user_id', 'cp_users')
    )
    _join_table(
        'cp_credential_groups', ('credential_id', 'cp_credentials'), ('group_id', 'cp_groups')
    )


def downgrade() -> None:
    """Downgrade schema."""
    for name in (
        'cp_credential_groups',
        'cp_credential_users',
        'cp_project_groups',
        'cp_project_users',
        'cp_user_groups',
        'cp_credentials',
        'cp_projects',
        'cp_groups',
        'cp_users',
    ):
        op.drop_table(name)
