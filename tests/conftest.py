"""
Test configuration and in-memory stand-ins for the Supabase client.
"""
import asyncio
import itertools
import os
import time

import jwt
import pytest
from postgrest.exceptions import APIError
from supabase import AuthError

os.environ.setdefault("SUPABASE_URL", "http://supabase.test")
os.environ.setdefault("SUPABASE_KEY", "test-anon-key")
os.environ.setdefault("PROFILE_LOOKUP_TIMEOUT", "5")

TOKEN_SECRET = "test-jwt-secret"


def make_token(user_id, expires_in=3600):
    return jwt.encode(
        {"sub": user_id, "exp": int(time.time()) + expires_in},
        TOKEN_SECRET,
        algorithm="HS256",
    )


class FakeAuthError(AuthError):
    def __init__(self, message):
        Exception.__init__(self, message)
        self.message = message
        self.name = "AuthApiError"
        self.status = 400
        self.code = "invalid_credentials"


# -------- Data API --------
class FakeResponse:
    def __init__(self, data, count=None):
        self.data = data
        self.count = count


class FakeQuery:
    def __init__(self, db, table):
        self.db = db
        self.table = table
        self.op = "select"
        self.payload = None
        self.filters = []
        self.orders = []
        self.limit_to = None
        self.want_single = False
        self.want_count = False

    def select(self, columns="*", count=None):
        self.want_count = count is not None
        return self

    def insert(self, payload):
        self.op = "insert"
        self.payload = payload
        return self

    def upsert(self, payload, on_conflict=""):
        self.op = "upsert"
        self.payload = payload
        self.conflict_column = on_conflict or "id"
        return self

    def update(self, payload):
        self.op = "update"
        self.payload = payload
        return self

    def delete(self):
        self.op = "delete"
        return self

    def eq(self, column, value):
        self.filters.append((column, value))
        return self

    def order(self, column, desc=False):
        self.orders.append((column, desc))
        return self

    def limit(self, size):
        self.limit_to = size
        return self

    def single(self):
        self.want_single = True
        return self

    def _matches(self, row):
        return all(row.get(column) == value for column, value in self.filters)

    async def execute(self):
        self.db.calls.append((self.table, self.op, list(self.filters)))

        delay = self.db.delays.get(self.table)
        if delay:
            await asyncio.sleep(delay)

        error = self.db.errors.get((self.table, self.op))
        if error is not None:
            raise error

        rows = self.db.tables.setdefault(self.table, [])

        if self.op == "upsert":
            column = self.conflict_column
            existing = next((row for row in rows if row.get(column) == self.payload.get(column)), None)
            if existing is None:
                existing = dict(self.payload)
                existing.setdefault("id", next(self.db.ids))
                rows.append(existing)
            else:
                existing.update(self.payload)
            return FakeResponse([dict(existing)])

        if self.op == "insert":
            row = dict(self.payload)
            row.setdefault("id", next(self.db.ids))
            rows.append(row)
            return FakeResponse([dict(row)])

        matched = [row for row in rows if self._matches(row)]

        if self.op == "update":
            for row in matched:
                row.update(self.payload)
            return FakeResponse([dict(row) for row in matched])

        if self.op == "delete":
            self.db.tables[self.table] = [row for row in rows if not self._matches(row)]
            return FakeResponse([dict(row) for row in matched])

        result = [dict(row) for row in matched]
        for column, desc in reversed(self.orders):
            result.sort(key=lambda row: str(row.get(column) or ""), reverse=desc)
        if self.limit_to is not None:
            result = result[:self.limit_to]

        if self.want_single:
            if len(result) != 1:
                raise APIError({
                    "code": "PGRST116",
                    "message": "JSON object requested, multiple (or no) rows returned",
                    "details": f"The result contains {len(result)} rows",
                    "hint": None,
                })
            return FakeResponse(result[0])

        return FakeResponse(result, count=len(result) if self.want_count else None)


class FakeDatabase:
    def __init__(self):
        self.tables = {}
        self.errors = {}
        self.delays = {}
        self.calls = []
        self.accounts = {}
        self.ids = itertools.count(100)


# -------- Auth API --------
class FakeUser:
    def __init__(self, user_id, email):
        self.id = user_id
        self.email = email


class FakeSession:
    def __init__(self, user):
        self.user = user
        self.access_token = make_token(user.id)


class FakeSubscription:
    def __init__(self, auth, subscription_id):
        self.auth = auth
        self.id = subscription_id

    def unsubscribe(self):
        self.auth.listeners.pop(self.id, None)


class FakeAuth:
    def __init__(self, db):
        self.db = db
        self.session = None
        self.listeners = {}
        self.failures = {}
        self.confirm_email = False
        self._ids = itertools.count(1)

    def _fail(self, operation):
        message = self.failures.get(operation)
        if message:
            raise FakeAuthError(message)

    def _emit(self, event, session):
        for callback in list(self.listeners.values()):
            callback(event, session)

    def on_auth_state_change(self, callback):
        subscription_id = next(self._ids)
        self.listeners[subscription_id] = callback
        return FakeSubscription(self, subscription_id)

    async def get_session(self):
        self._fail("get_session")
        return self.session

    async def sign_in_with_password(self, credentials):
        self._fail("sign_in")
        email = credentials["email"]
        if self.db.accounts.get(email) != credentials["password"]:
            raise FakeAuthError("Invalid login credentials")
        self.session = FakeSession(FakeUser(f"uid-{email}", email))
        self._emit("SIGNED_IN", self.session)
        return self.session

    async def sign_up(self, credentials):
        self._fail("sign_up")
        email = credentials["email"]
        if email in self.db.accounts:
            raise FakeAuthError("User already registered")
        self.db.accounts[email] = credentials["password"]
        if self.confirm_email:
            return None
        self.session = FakeSession(FakeUser(f"uid-{email}", email))
        self._emit("SIGNED_IN", self.session)
        return self.session

    async def sign_out(self):
        self._fail("sign_out")
        self.session = None
        self._emit("SIGNED_OUT", None)


class FakeClient:
    def __init__(self, db):
        self.db = db
        self.auth = FakeAuth(db)

    def table(self, name):
        return FakeQuery(self.db, name)


# -------- Fixtures --------
@pytest.fixture
def db():
    return FakeDatabase()


@pytest.fixture
def client(db):
    return FakeClient(db)


@pytest.fixture
def make_client(db):
    """New client (own auth state) over the shared fake database"""
    return lambda: FakeClient(db)


@pytest.fixture
def fake_session():
    return lambda email: FakeSession(FakeUser(f"uid-{email}", email))


@pytest.fixture
def staff_row():
    return {
        "id": 7,
        "first_name": "Emily",
        "last_name": "Smith",
        "email": "emily@brighterfuture.org",
        "phone": "555-0101",
        "role": "teacher",
        "department": "First Steps",
        "status": "active",
        "picture_url": None,
        "permissions": ["students", "attendance", "calendar"],
    }


@pytest.fixture
def access_token():
    return make_token
