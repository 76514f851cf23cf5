"""In-memory stand-in for the parts of the Supabase client the service uses."""

from __future__ import annotations

import copy
from types import SimpleNamespace
from typing import Any, Dict, List, Optional
from uuid import uuid4


class FakeQuery:
    def __init__(self, db: "FakeSupabase", table: str) -> None:
        self.db = db
        self.table = table
        self.op = "select"
        self.payload: Any = None
        self.filters: List[tuple] = []
        self.order_by: Optional[tuple] = None
        self.single = False

    def select(self, *_columns: str) -> "FakeQuery":
        self.op = "select"
        return self

    def insert(self, payload: Dict[str, Any]) -> "FakeQuery":
        self.op = "insert"
        self.payload = payload
        return self

    def update(self, payload: Dict[str, Any]) -> "FakeQuery":
        self.op = "update"
        self.payload = payload
        return self

    def delete(self) -> "FakeQuery":
        self.op = "delete"
        return self

    def eq(self, column: str, value: Any) -> "FakeQuery":
        self.filters.append((column, value))
        return self

    def order(self, column: str, desc: bool = False) -> "FakeQuery":
        self.order_by = (column, desc)
        return self

    def maybe_single(self) -> "FakeQuery":
        self.single = True
        return self

    def _matches(self, row: Dict[str, Any]) -> bool:
        return all(row.get(column) == value for column, value in self.filters)

    def execute(self) -> SimpleNamespace:
        self.db.calls.append((self.table, self.op))
        failure = self.db.failures.get((self.table, self.op))
        if failure is not None:
            raise failure

        rows = self.db.tables.setdefault(self.table, [])
        if self.op == "insert":
            row = copy.deepcopy(self.payload)
            row.setdefault("id", str(uuid4()))
            rows.append(row)
            return SimpleNamespace(data=[copy.deepcopy(row)])

        matched = [row for row in rows if self._matches(row)]
        if self.op == "update":
            for row in matched:
                row.update(copy.deepcopy(self.payload))
            return SimpleNamespace(data=copy.deepcopy(matched))
        if self.op == "delete":
            self.db.tables[self.table] = [row for row in rows if not self._matches(row)]
            return SimpleNamespace(data=copy.deepcopy(matched))

        if self.order_by:
            column, desc = self.order_by
            matched = sorted(matched, key=lambda r: str(r.get(column)), reverse=desc)
        if self.single:
            return SimpleNamespace(data=copy.deepcopy(matched[0]) if matched else None)
        return SimpleNamespace(data=copy.deepcopy(matched))


class FakeAdminAuth:
    def __init__(self, auth: "FakeAuth") -> None:
        self.auth = auth
        self.deleted: List[str] = []
        self.signed_out: List[str] = []

    def create_user(self, attributes: Dict[str, Any]) -> SimpleNamespace:
        email = attributes["email"]
        if any(u.email == email for u in self.auth.users.values()):
            raise Exception("A user with this email address has already been registered")
        user = SimpleNamespace(
            id=str(uuid4()),
            email=email,
            role="authenticated",
            user_metadata=attributes.get("user_metadata") or {},
            app_metadata={},
        )
        self.auth.users[user.id] = user
        self.auth.passwords[email] = attributes["password"]
        return SimpleNamespace(user=user)

    def delete_user(self, user_id: str) -> None:
        self.deleted.append(user_id)
        user = self.auth.users.pop(user_id)
        self.auth.passwords.pop(user.email, None)

    def sign_out(self, jwt: str) -> None:
        self.signed_out.append(jwt)
        self.auth.tokens.pop(jwt, None)


class FakeAuth:
    def __init__(self) -> None:
        self.users: Dict[str, SimpleNamespace] = {}
        self.passwords: Dict[str, str] = {}
        self.tokens: Dict[str, str] = {}
        self.reset_requests: List[str] = []
        self.admin = FakeAdminAuth(self)

    def issue_token(self, user_id: str) -> str:
        token = f"token-{uuid4()}"
        self.tokens[token] = user_id
        return token

    def get_user(self, jwt: Optional[str] = None) -> SimpleNamespace:
        user_id = self.tokens.get(jwt)
        if user_id is None:
            raise Exception("invalid JWT: unable to parse or verify signature")
        return SimpleNamespace(user=self.users[user_id])

    def sign_in_with_password(self, credentials: Dict[str, str]) -> SimpleNamespace:
        email = credentials["email"]
        if self.passwords.get(email) != credentials["password"]:
            raise Exception("Invalid login credentials")
        user = next(u for u in self.users.values() if u.email == email)
        session = SimpleNamespace(access_token=self.issue_token(user.id), expires_in=3600)
        return SimpleNamespace(user=user, session=session)

    def reset_password_for_email(self, email: str, options: Optional[dict] = None) -> None:
        self.reset_requests.append(email)


class FakeSupabase:
    def __init__(self) -> None:
        self.tables: Dict[str, List[Dict[str, Any]]] = {}
        self.calls: List[tuple] = []
        self.failures: Dict[tuple, Exception] = {}
        self.auth = FakeAuth()

    def table(self, name: str) -> FakeQuery:
        return FakeQuery(self, name)

    def rows(self, name: str) -> List[Dict[str, Any]]:
        return self.tables.get(name, [])

    def writes(self, name: str) -> List[tuple]:
        return [c for c in self.calls if c[0] == name and c[1] != "select"]

    def create_member(self, email: str, password: str = "secret1") -> SimpleNamespace:
        """Create an identity and return it with a valid bearer token."""
        user = self.auth.admin.create_user({"email": email, "password": password}).user
        return SimpleNamespace(id=user.id, email=email, token=self.auth.issue_token(user.id))


def auth_header(member: SimpleNamespace) -> Dict[str, str]:
    return {"Authorization": f"Bearer {member.token}"}
