"""create tasks and task_dependencies tables

Revision ID: 3a1c5e7b9d20
Revises:
Create Date: 2026-10-18
"""

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = "3a1c5e7b9d20"
down_revision = None
branch_labels = None
depends_on = None

_STATUS = sa.Enum("TODO", "IN_PROGRESS", "IN_REVIEW", "DONE", "CANCELLED", name="taskstatus")
_PRIORITY = sa.Enum("LOW", "NORMAL", "MEDIUM", "HIGH", "URGENT", name="taskpriority")
_DEP_TYPE = sa.Enum("BLOCKS", "RELATED", name="dependencytype")


def upgrade() -> None:
    op.create_table(
        "tasks",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("project_id", sa.String(), nullable=False),
        sa.Column("title", sa.String(), nullable=False),
        sa.Column("description", sa.String(), nullable=True),
        sa.Column("status", _STATUS, nullable=False),
        sa.Column("priority", _PRIORITY, nullable=False),
        sa.Column("start_date", sa.Date(), nullable=True),
        sa.Column("due_date", sa.Date(), nullable=True),
        sa.Column("estimated_hours", sa.Float(), nullable=True),
        sa.Column("progress", sa.Float(), nullable=True),
        sa.Column("assignee_id", sa.Integer(), nullable=True),
        sa.Column("assignee_name", sa.String(), nullable=True),
    )
    op.create_index("idx_tasks_project_id", "tasks", ["project_id"])

    op.create_table(
        "task_dependencies",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column(
            "task_id",
            sa.Integer(),
            sa.ForeignKey("tasks.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("depends_on_task_id", sa.Integer(), nullable=False),
        sa.Column("type", _DEP_TYPE, nullable=False),
    )
    op.create_index("idx_dep_task", "task_dependencies", ["task_id"])
    op.create_index("idx_dep_depends_on", "task_dependencies", ["depends_on_task_id"])


def downgrade() -> None:
    op.drop_index("idx_dep_depends_on", table_name="task_dependencies")
    op.drop_index("idx_dep_task", table_name="task_dependencies")
    op.drop_table("task_dependencies")
    op.drop_index("idx_tasks_project_id", table_name="tasks")
    op.drop_table("tasks")
