"""Create family registry tables

Revision ID: a3f9c2d41b7e
Revises: 
Create Date: 2026-10-19 11:02:14.512380

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = 'a3f9c2d41b7e'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    # Tables may already exist from db.create_all() - this migration documents them
    conn = op.get_bind()
    inspector = sa.inspect(conn)
    existing = inspector.get_table_names()

    if 'families' not in existing:
        op.create_table('families',
            sa.Column('id', sa.Integer(), nullable=False),
            sa.Column('family_head', sa.String(length=150), nullable=True),
            sa.Column('gender', sa.String(length=20), nullable=True),
            sa.Column('dob', sa.DateTime(), nullable=False),
            sa.Column('phone', sa.String(length=30), nullable=True),
            sa.Column('email', sa.String(length=120), nullable=False),
            sa.Column('city', sa.String(length=100), nullable=True),
            sa.Column('locality', sa.String(length=100), nullable=True),
            sa.Column('occupation', sa.String(length=100), nullable=True),
            sa.Column('gotra', sa.String(length=100), nullable=True),
            sa.Column('native_place', sa.String(length=100), nullable=True),
            sa.Column('blood_group', sa.String(length=10), nullable=True),
            sa.Column('address', sa.Text(), nullable=True),
            sa.Column('profile_image', sa.String(length=255), nullable=False),
            sa.Column('status', sa.String(length=20), nullable=False),
            sa.Column('created_at', sa.DateTime(), nullable=False),
            sa.Column('updated_at', sa.DateTime(), nullable=False),
            sa.PrimaryKeyConstraint('id')
        )
        op.create_index(op.f('ix_families_email'), 'families', ['email'], unique=False)
        op.create_index(op.f('ix_families_status'), 'families', ['status'], unique=False)

    if 'family_members' not in existing:
        op.create_table('family_members',
            sa.Column('id', sa.Integer(), nullable=False),
            sa.Column('family_id', sa.Integer(), nullable=False),
            sa.Column('position', sa.Integer(), nullable=False),
            sa.Column('name', sa.String(length=150), nullable=True),
            sa.Column('relation', sa.String(length=50), nullable=True),
            sa.Column('age', sa.Integer(), nullable=True),
            sa.Column('marital_status', sa.String(length=30), nullable=True),
            sa.Column('blood_group', sa.String(length=10), nullable=True),
            sa.Column('qualification', sa.String(length=100), nullable=True),
            sa.Column('occupation', sa.String(length=100), nullable=True),
            sa.ForeignKeyConstraint(['family_id'], ['families.id'], ),
            sa.PrimaryKeyConstraint('id')
        )
        op.create_index(op.f('ix_family_members_family_id'), 'family_members', ['family_id'], unique=False)


def downgrade():
    op.drop_index(op.f('ix_family_members_family_id'), table_name='family_members')
    op.drop_table('family_members')
    op.drop_index(op.f('ix_families_status'), table_name='families')
    op.drop_index(op.f('ix_families_email'), table_name='families')
    op.drop_table('families')
