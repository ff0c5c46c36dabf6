from sqlalchemy import select
from sqlalchemy.orm import Session
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert

from gym_auth.models.user import User

DEFAULT_ROLE = "user"

_UPSERT_INSERTS = {
    "postgresql": pg_insert,
    "sqlite": sqlite_insert,
}


def get_user_by_username(s: Session, username: str) -> User | None:
    return s.execute(select(User).where(User.username == username)).scalar_one_or_none()


def create_user(s: Session, username: str) -> int:
    user = User(username=username, role=DEFAULT_ROLE)
    s.add(user)
    s.commit()
    s.refresh(user)
    return user.id


def _insert_for(s: Session):
    dialect = s.get_bind().dialect.name
    try:
        return _UPSERT_INSERTS[dialect]
    except KeyError:
        raise NotImplementedError(f"no conflict-safe insert for dialect {dialect!r}") from None


# single statement insert, so racing logins on a new username share one row
def get_or_create_user(s: Session, username: str) -> tuple[User, bool]:
    insert = _insert_for(s)
    stmt = (
        insert(User)
        .values(username=username, role=DEFAULT_ROLE)
        .on_conflict_do_nothing(index_elements=["user_name"])
        .returning(User.id)
    )
    new_id = s.execute(stmt).scalar_one_or_none()
    s.commit()

    user = get_user_by_username(s, username)
    if user is None:
        # row vanished between insert and select
        raise LookupError(f"user {username!r} missing after insert")
    return user, new_id is not None
