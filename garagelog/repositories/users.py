"""User repository."""

from datetime import UTC, datetime

from sqlalchemy.exc import SQLAlchemyError

from garagelog.errors import NotFound
from garagelog.models.enums import SortKey
from garagelog.models.user import User
from garagelog.repositories.base import Repository
from garagelog.repositories.statements import assemble, eq


class UserRepository(Repository[User]):
    model = User
    table = "users"
    alias = "u"
    entity_name = "user"
    search_columns = ("u.username", "u.description")
    updatable_columns = frozenset({"username", "email", "description"})
    name_column = "username"
    # A user "owns" their own row
    owner_column = "id"

    def find_by_username(self, username: str) -> User | None:
        try:
            return self.db.query(User).filter(User.username == username).first()
        except SQLAlchemyError as e:
            raise self._storage_failure(f"get user {username}", e) from e

    def get_by_username(self, username: str) -> User:
        """Fetch a user by username or raise NotFound."""
        user = self.find_by_username(username)
        if user is None:
            raise NotFound(f"User {username} not found")
        return user

    def set_password(self, username: str, password_hash: str | None) -> int:
        """Store a new password hash; None clears it (passwordless user)."""
        statement = assemble(
            "UPDATE users SET password_hash = :password_hash, updated_at = :updated_at",
            predicates=["username = :username"],
        )
        params = {
            "password_hash": password_hash,
            "updated_at": datetime.now(UTC),
            "username": username,
        }
        return self.execute_write(statement, params, action="updated")

    def delete_by_username(self, username: str) -> int:
        """Delete a user by username. Owned vehicles and jobs are left in place."""
        statement = assemble("DELETE FROM users", predicates=["username = :username"])
        return self.execute_write(statement, {"username": username}, action="deleted")

    def count_admins(self) -> int:
        return len(self.list(is_admin=True))

    def list(
        self,
        is_admin: bool | None = None,
        vehicle_id: int | None = None,
        job_id: int | None = None,
        search: str | None = None,
        sort: SortKey | None = None,
    ) -> list[User]:
        """List users, optionally those owning a given vehicle or job."""
        joins = []
        predicates = []
        if is_admin is not None:
            predicates.append(eq("u.is_admin", is_admin))
        if vehicle_id is not None:
            joins.append("JOIN vehicles AS v ON u.id = v.user_id")
            predicates.append(eq("v.id", vehicle_id))
        if job_id is not None:
            joins.append("JOIN jobs AS j ON u.id = j.user_id")
            predicates.append(eq("j.id", job_id))
        return self.select(joins, predicates, search, sort)
