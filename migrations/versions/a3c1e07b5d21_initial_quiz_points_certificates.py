# Initial schema: users, question bank, weekly quizzes, attempts, points ledger,
# certificates and attendance

"""initial quiz, points and certificate tables"""

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision = "a3c1e07b5d21"
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        "users",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("email", sa.String(length=100), nullable=True),
        sa.Column("role", sa.String(length=20), nullable=False),
        sa.Column("photo_url", sa.Text(), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        sa.Column(
            "created_at", sa.DateTime(), server_default=sa.func.now(), nullable=False
        ),
        sa.Column("last_login", sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_users_email"), "users", ["email"], unique=True)

    op.create_table(
        "question_categories",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        op.f("ix_question_categories_id"), "question_categories", ["id"], unique=False
    )

    op.create_table(
        "question_types",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("category_id", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.ForeignKeyConstraint(["category_id"], ["question_categories.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_question_types_id"), "question_types", ["id"], unique=False)
    op.create_index(
        op.f("ix_question_types_category_id"),
        "question_types",
        ["category_id"],
        unique=False,
    )

    op.create_table(
        "question_bank",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("type_id", sa.Integer(), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("options", sa.JSON(), nullable=False),
        sa.Column("correct_answer", sa.String(length=255), nullable=False),
        sa.Column("explanation", sa.Text(), nullable=True),
        sa.ForeignKeyConstraint(["type_id"], ["question_types.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_question_bank_id"), "question_bank", ["id"], unique=False)
    op.create_index(
        op.f("ix_question_bank_type_id"), "question_bank", ["type_id"], unique=False
    )

    op.create_table(
        "weekly_quizzes",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("category_id", sa.Integer(), nullable=True),
        sa.Column("start_date", sa.DateTime(), nullable=False),
        sa.Column("end_date", sa.DateTime(), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        sa.Column("config", sa.Text(), nullable=True),
        sa.ForeignKeyConstraint(["category_id"], ["question_categories.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_weekly_quizzes_id"), "weekly_quizzes", ["id"], unique=False)
    op.create_index(
        op.f("ix_weekly_quizzes_category_id"),
        "weekly_quizzes",
        ["category_id"],
        unique=False,
    )

    op.create_table(
        "quiz_question_order",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("quiz_id", sa.Integer(), nullable=False),
        sa.Column("question_id", sa.Integer(), nullable=False),
        sa.Column("order", sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(["quiz_id"], ["weekly_quizzes.id"]),
        sa.ForeignKeyConstraint(["question_id"], ["question_bank.id"]),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("quiz_id", "question_id", name="uq_quiz_question_order"),
    )
    op.create_index(
        op.f("ix_quiz_question_order_id"), "quiz_question_order", ["id"], unique=False
    )
    op.create_index(
        op.f("ix_quiz_question_order_quiz_id"),
        "quiz_question_order",
        ["quiz_id"],
        unique=False,
    )

    op.create_table(
        "quiz_attempts",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("user_id", sa.String(length=36), nullable=False),
        sa.Column("quiz_id", sa.Integer(), nullable=False),
        sa.Column("score", sa.Integer(), nullable=False),
        sa.Column("answers", sa.Text(), nullable=False),
        sa.Column("started_at", sa.DateTime(), nullable=False),
        sa.Column("finished_at", sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"]),
        sa.ForeignKeyConstraint(["quiz_id"], ["weekly_quizzes.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_quiz_attempts_id"), "quiz_attempts", ["id"], unique=False)
    op.create_index(
        op.f("ix_quiz_attempts_user_id"), "quiz_attempts", ["user_id"], unique=False
    )
    op.create_index(
        op.f("ix_quiz_attempts_quiz_id"), "quiz_attempts", ["quiz_id"], unique=False
    )

    op.create_table(
        "gamification_logs",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("user_id", sa.String(length=36), nullable=False),
        sa.Column("action_type", sa.String(length=50), nullable=False),
        sa.Column("action_id", sa.String(length=100), nullable=True),
        sa.Column("points", sa.Integer(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        op.f("ix_gamification_logs_id"), "gamification_logs", ["id"], unique=False
    )
    op.create_index(
        op.f("ix_gamification_logs_user_id"),
        "gamification_logs",
        ["user_id"],
        unique=False,
    )
    op.create_index(
        op.f("ix_gamification_logs_action_type"),
        "gamification_logs",
        ["action_type"],
        unique=False,
    )
    op.create_index(
        op.f("ix_gamification_logs_created_at"),
        "gamification_logs",
        ["created_at"],
        unique=False,
    )

    op.create_table(
        "gamification_profile",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("user_id", sa.String(length=36), nullable=False),
        sa.Column("total_points", sa.Integer(), nullable=False),
        sa.Column("level", sa.Integer(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        op.f("ix_gamification_profile_id"), "gamification_profile", ["id"], unique=False
    )
    op.create_index(
        op.f("ix_gamification_profile_user_id"),
        "gamification_profile",
        ["user_id"],
        unique=True,
    )
    op.create_index(
        op.f("ix_gamification_profile_total_points"),
        "gamification_profile",
        ["total_points"],
        unique=False,
    )

    op.create_table(
        "certificates",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("user_id", sa.String(length=36), nullable=False),
        sa.Column("quiz_id", sa.Integer(), nullable=False),
        sa.Column("certificate_code", sa.String(length=50), nullable=False),
        sa.Column("file_url", sa.Text(), nullable=False),
        sa.Column("issued_at", sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"]),
        sa.ForeignKeyConstraint(["quiz_id"], ["weekly_quizzes.id"]),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("certificate_code"),
        sa.UniqueConstraint("user_id", "quiz_id", name="uq_certificates_user_quiz"),
    )
    op.create_index(op.f("ix_certificates_id"), "certificates", ["id"], unique=False)
    op.create_index(
        op.f("ix_certificates_user_id"), "certificates", ["user_id"], unique=False
    )
    op.create_index(
        op.f("ix_certificates_quiz_id"), "certificates", ["quiz_id"], unique=False
    )

    op.create_table(
        "attendance_sessions",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        op.f("ix_attendance_sessions_id"), "attendance_sessions", ["id"], unique=False
    )

    op.create_table(
        "attendance_records",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("user_id", sa.String(length=36), nullable=False),
        sa.Column("attendance_session_id", sa.Integer(), nullable=False),
        sa.Column("check_in_time", sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"]),
        sa.ForeignKeyConstraint(["attendance_session_id"], ["attendance_sessions.id"]),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint(
            "user_id", "attendance_session_id", name="uq_attendance_user_session"
        ),
    )
    op.create_index(
        op.f("ix_attendance_records_id"), "attendance_records", ["id"], unique=False
    )
    op.create_index(
        op.f("ix_attendance_records_user_id"),
        "attendance_records",
        ["user_id"],
        unique=False,
    )
    op.create_index(
        op.f("ix_attendance_records_attendance_session_id"),
        "attendance_records",
        ["attendance_session_id"],
        unique=False,
    )


def downgrade():
    op.drop_table("attendance_records")
    op.drop_table("attendance_sessions")
    op.drop_table("certificates")
    op.drop_table("gamification_profile")
    op.drop_table("gamification_logs")
    op.drop_table("quiz_attempts")
    op.drop_table("quiz_question_order")
    op.drop_table("weekly_quizzes")
    op.drop_table("question_bank")
    op.drop_table("question_types")
    op.drop_table("question_categories")
    op.drop_table("users")
