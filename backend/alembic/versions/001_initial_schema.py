"""Initial FarmHub schema

Revision ID: 001
Create Date: 2026-10-19 00:00:00.000000

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '001_initial_schema'
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    # Farm table
    op.create_table(
        'farm',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(200), nullable=False),
        sa.Column('size', sa.Float(), nullable=False),
        sa.Column('unit', sa.String(20), nullable=False),
        sa.Column('location', sa.String(255), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_farm_id', 'farm', ['id'])
    op.create_index('ix_farm_name', 'farm', ['name'])

    # Crop table
    op.create_table(
        'crop',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('farm_id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(100), nullable=False),
        sa.Column('variety', sa.String(100), nullable=False),
        sa.Column('planting_date', sa.Date(), nullable=False),
        sa.Column('expected_harvest', sa.Date(), nullable=False),
        sa.Column('status', sa.String(20), nullable=False),
        sa.Column('area', sa.Float(), nullable=False),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.ForeignKeyConstraint(['farm_id'], ['farm.id']),
        sa.CheckConstraint('expected_harvest > planting_date', name='ck_crop_harvest_after_planting'),
        sa.CheckConstraint('area > 0', name='ck_crop_area_positive'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_crop_id', 'crop', ['id'])
    op.create_index('ix_crop_farm_id', 'crop', ['farm_id'])

    # Project table
    op.create_table(
        'project',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('title', sa.String(200), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('status', sa.String(20), nullable=False),
        sa.Column('priority', sa.String(10), nullable=False),
        sa.Column('start_date', sa.Date(), nullable=True),
        sa.Column('end_date', sa.Date(), nullable=True),
        sa.Column('owner', sa.String(100), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_project_id', 'project', ['id'])
    op.create_index('ix_project_status', 'project', ['status'])
    op.create_index('ix_project_updated_at', 'project', ['updated_at'])

    # Task table (belongs to a project, a farm, or both)
    op.create_table(
        'task',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('title', sa.String(200), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('project_id', sa.Integer(), nullable=True),
        sa.Column('farm_id', sa.Integer(), nullable=True),
        sa.Column('completed', sa.Boolean(), nullable=False),
        sa.Column('status', sa.String(20), nullable=False),
        sa.Column('due_date', sa.Date(), nullable=True),
        sa.Column('priority', sa.String(10), nullable=False),
        sa.Column('category', sa.String(50), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(['project_id'], ['project.id']),
        sa.ForeignKeyConstraint(['farm_id'], ['farm.id']),
        sa.CheckConstraint('project_id IS NOT NULL OR farm_id IS NOT NULL', name='ck_task_has_parent'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_task_id', 'task', ['id'])
    op.create_index('ix_task_project_id', 'task', ['project_id'])
    op.create_index('ix_task_farm_id', 'task', ['farm_id'])

    # Transaction table
    op.create_table(
        'farm_transaction',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('farm_id', sa.Integer(), nullable=False),
        sa.Column('type', sa.String(10), nullable=False),
        sa.Column('category', sa.String(50), nullable=False),
        sa.Column('amount', sa.Numeric(12, 2), nullable=False),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.ForeignKeyConstraint(['farm_id'], ['farm.id']),
        sa.CheckConstraint("type IN ('income', 'expense')", name='ck_transaction_type'),
        sa.CheckConstraint('amount > 0', name='ck_transaction_amount_positive'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_farm_transaction_id', 'farm_transaction', ['id'])
    op.create_index('ix_farm_transaction_farm_id', 'farm_transaction', ['farm_id'])
    op.create_index('ix_farm_transaction_date', 'farm_transaction', ['date'])

    # Comment table
    op.create_table(
        'comment',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('task_id', sa.Integer(), nullable=False),
        sa.Column('text', sa.Text(), nullable=False),
        sa.Column('timestamp', sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(['task_id'], ['task.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_comment_id', 'comment', ['id'])
    op.create_index('ix_comment_task_id', 'comment', ['task_id'])
    op.create_index('ix_comment_timestamp', 'comment', ['timestamp'])

    # Audit log
    op.create_table(
        'audit_log',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('timestamp', sa.DateTime(timezone=True), nullable=False),
        sa.Column('entity_type', sa.String(30), nullable=False),
        sa.Column('entity_id', sa.Integer(), nullable=False),
        sa.Column('action', sa.String(10), nullable=False),
        sa.Column('diff_json', sa.JSON(), nullable=False),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_audit_log_id', 'audit_log', ['id'])
    op.create_index('ix_audit_log_timestamp', 'audit_log', ['timestamp'])
    op.create_index('ix_audit_log_entity_type', 'audit_log', ['entity_type'])
    op.create_index('ix_audit_log_entity_id', 'audit_log', ['entity_id'])


def downgrade() -> None:
    op.drop_table('audit_log')
    op.drop_table('comment')
    op.drop_table('farm_transaction')
    op.drop_table('task')
    op.drop_table('project')
    op.drop_table('crop')
    op.drop_table('farm')
