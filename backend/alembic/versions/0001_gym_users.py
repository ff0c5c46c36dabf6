from alembic import op
import sqlalchemy as sa

revision = "0001_gym_users"
down_revision = None
branch_labels = None
depends_on = None

def upgrade():
    op.create_table(
        "gym_users",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("user_name", sa.String(length=64), nullable=False),
        sa.Column("created_at", sa.DateTime(), server_default=sa.text("now()"), nullable=True),
        sa.Column("role", sa.String(length=16), nullable=False, server_default="user"),
    )
    # on_conflict_do_nothing in services/users.py relies on this index
    op.create_index("ix_gym_users_user_name", "gym_users", ["user_name"], unique=True)

def downgrade():
    op.drop_index("ix_gym_users_user_name", table_name="gym_users")
    op.drop_table("gym_users")
