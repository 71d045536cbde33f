"""initial schema: users, social media connections, page links, leads

Revision ID: 001
Revises: 
Create Date: 2026-10-19 09:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '001'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

social_media_type = sa.Enum('facebook', 'instagram', 'whatsapp', name='socialmediatype')
lead_status = sa.Enum('new', 'contacted', 'qualified', 'converted', 'lost', name='leadstatus')
lead_source = sa.Enum('facebook_lead_ad', 'messenger', 'manual', name='leadsource')


def _timestamps():
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    ]


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        'users',
        sa.Column('id', sa.String(), nullable=False),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('username', sa.String(100), nullable=False),
        sa.Column('first_name', sa.String(100), nullable=True),
        sa.Column('last_name', sa.String(100), nullable=True),
        sa.Column('company', sa.String(255), nullable=True),
        sa.Column('is_email_verified', sa.Boolean(), nullable=True),
        sa.Column('email_verified_at', sa.DateTime(), nullable=True),
        sa.Column('is_deleted', sa.Boolean(), nullable=False, server_default=sa.false()),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_users_id'), 'users', ['id'], unique=False)
    op.create_index(op.f('ix_users_email'), 'users', ['email'], unique=True)
    op.create_index(op.f('ix_users_username'), 'users', ['username'], unique=True)

    op.create_table(
        'social_media_connections',
        sa.Column('id', sa.String(), nullable=False),
        sa.Column('user_id', sa.String(), nullable=False),
        sa.Column('social_media', social_media_type, nullable=False),
        sa.Column('user_access_token', sa.Text(), nullable=True),
        sa.Column('profile_id', sa.String(255), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('user_id', 'social_media', name='uq_user_social_media'),
    )
    op.create_index(op.f('ix_social_media_connections_id'), 'social_media_connections', ['id'], unique=False)
    op.create_index(
        op.f('ix_social_media_connections_user_id'), 'social_media_connections', ['user_id'], unique=False
    )

    op.create_table(
        'page_links',
        sa.Column('id', sa.String(), nullable=False),
        sa.Column('page_id', sa.String(100), nullable=False),
        sa.Column('page_access_token', sa.Text(), nullable=False),
        sa.Column('page_name', sa.String(255), nullable=True),
        sa.Column('page_token_expires_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('connection_id', sa.String(), nullable=False),
        sa.Column('user_id', sa.String(), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(['connection_id'], ['social_media_connections.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_page_links_id'), 'page_links', ['id'], unique=False)
    op.create_index(op.f('ix_page_links_page_id'), 'page_links', ['page_id'], unique=True)
    op.create_index(op.f('ix_page_links_connection_id'), 'page_links', ['connection_id'], unique=False)
    op.create_index(op.f('ix_page_links_user_id'), 'page_links', ['user_id'], unique=False)

    op.create_table(
        'leads',
        sa.Column('id', sa.String(), nullable=False),
        sa.Column('user_id', sa.String(), nullable=False),
        sa.Column('source', lead_source, nullable=False),
        sa.Column('external_id', sa.String(255), nullable=True),
        sa.Column('lead_text', sa.Text(), nullable=False),
        sa.Column('status', lead_status, nullable=False),
        sa.Column('contact_name', sa.String(255), nullable=False),
        sa.Column('contact_email', sa.String(255), nullable=False),
        sa.Column('contact_phone', sa.String(50), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('source', 'external_id', name='uq_lead_source_external_id'),
    )
    op.create_index(op.f('ix_leads_id'), 'leads', ['id'], unique=False)
    op.create_index('ix_leads_user_id_created_at', 'leads', ['user_id', 'created_at'], unique=False)


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index('ix_leads_user_id_created_at', table_name='leads')
    op.drop_index(op.f('ix_leads_id'), table_name='leads')
    op.drop_table('leads')
    op.drop_index(op.f('ix_page_links_user_id'), table_name='page_links')
    op.drop_index(op.f('ix_page_links_connection_id'), table_name='page_links')
    op.drop_index(op.f('ix_page_links_page_id'), table_name='page_links')
    op.drop_index(op.f('ix_page_links_id'), table_name='page_links')
    op.drop_table('page_links')
    op.drop_index(op.f('ix_social_media_connections_user_id'), table_name='social_media_connections')
    op.drop_index(op.f('ix_social_media_connections_id'), table_name='social_media_connections')
    op.drop_table('social_media_connections')
    op.drop_index(op.f('ix_users_username'), table_name='users')
    op.drop_index(op.f('ix_users_email'), table_name='users')
    op.drop_index(op.f('ix_users_id'), table_name='users')
    op.drop_table('users')
    lead_source.drop(op.get_bind(), checkfirst=True)
    lead_status.drop(op.get_bind(), checkfirst=True)
    social_media_type.drop(op.get_bind(), checkfirst=True)
