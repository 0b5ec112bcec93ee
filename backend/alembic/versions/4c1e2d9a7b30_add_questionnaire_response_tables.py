"""add questionnaire and response type tables

Revision ID: 4c1e2d9a7b30
Revises:
Create Date: 2026-10-19 09:00:00.000000

"""

from typing import Sequence, Union

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "4c1e2d9a7b30"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _answer_table(name: str, response_type: sa.types.TypeEngine, *extra: sa.Column) -> None:
    op.create_table(
        name,
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("response_id", sa.Integer(), nullable=False),
        sa.Column("question_id", sa.Integer(), nullable=False),
        *extra,
        sa.Column("response", response_type, nullable=True),
        sa.ForeignKeyConstraint(["response_id"], ["questionnaire_response.id"]),
        sa.ForeignKeyConstraint(["question_id"], ["questionnaire_question.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(f"ix_{name}_response_question", name, ["response_id", "question_id"], unique=False)


def upgrade() -> None:
    op.create_table(
        "user",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("username", sa.String(length=100), nullable=False),
        sa.Column("firstname", sa.String(length=100), nullable=False),
        sa.Column("lastname", sa.String(length=100), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_user_username", "user", ["username"], unique=True)

    op.create_table(
        "groups_members",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("groupid", sa.Integer(), nullable=False),
        sa.Column("userid", sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(["userid"], ["user.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_groups_members_groupid_userid", "groups_members", ["groupid", "userid"], unique=False)

    op.create_table(
        "questionnaire",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("created_at", sa.DateTime(), server_default=sa.text("now()"), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_table(
        "questionnaire_question",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("questionnaire_id", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(length=30), nullable=True),
        sa.Column("type", sa.String(length=30), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("position", sa.Integer(), nullable=False),
        sa.Column("required", sa.Boolean(), nullable=False),
        sa.ForeignKeyConstraint(["questionnaire_id"], ["questionnaire.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "ix_questionnaire_question_questionnaire_id", "questionnaire_question", ["questionnaire_id"], unique=False
    )

    op.create_table(
        "questionnaire_response",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("questionnaireid", sa.Integer(), nullable=False),
        sa.Column("userid", sa.Integer(), nullable=True),
        sa.Column("submitted", sa.Integer(), nullable=False),
        sa.Column("complete", sa.String(length=1), nullable=False),
        sa.Column("grade", sa.Float(), nullable=False),
        sa.ForeignKeyConstraint(["questionnaireid"], ["questionnaire.id"]),
        sa.ForeignKeyConstraint(["userid"], ["user.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "ix_questionnaire_response_questionnaireid", "questionnaire_response", ["questionnaireid"], unique=False
    )
    op.create_index("ix_questionnaire_response_userid", "questionnaire_response", ["userid"], unique=False)

    _answer_table("questionnaire_response_date", sa.String(length=10))
    _answer_table("questionnaire_response_text", sa.Text())
    _answer_table(
        "questionnaire_response_other",
        sa.Text(),
        sa.Column("choice_id", sa.Integer(), nullable=False),
    )


def downgrade() -> None:
    for name in (
        "questionnaire_response_other",
        "questionnaire_response_text",
        "questionnaire_response_date",
    ):
        op.drop_index(f"ix_{name}_response_question", table_name=name)
        op.drop_table(name)

    op.drop_index("ix_questionnaire_response_userid", table_name="questionnaire_response")
    op.drop_index("ix_questionnaire_response_questionnaireid", table_name="questionnaire_response")
    op.drop_table("questionnaire_response")
    op.drop_index("ix_questionnaire_question_questionnaire_id", table_name="questionnaire_question")
    op.drop_table("questionnaire_question")
    op.drop_table("questionnaire")
    op.drop_index("ix_groups_members_groupid_userid", table_name="groups_members")
    op.drop_table("groups_members")
    op.drop_index("ix_user_username", table_name="user")
    op.drop_table("user")
