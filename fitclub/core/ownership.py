"""
Authenticated, owner-checked access to rows of a single Supabase table.

Every operation on an existing row goes through ``load_owned``:

    fetch by id  -> 404 if missing
    owner check  -> 403 if ``row[owner_field] != caller.id``

A mismatch is 403, never 404. Queries run with the service-role key and
bypass row level security, so nothing else enforces ownership.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Type, TypeVar

from fastapi import HTTPException, status
from pydantic import BaseModel, ValidationError
from supabase import Client

from fitclub.core.auth_gateway import CallerIdentity
from fitclub.core.errors import format_validation_errors

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class OwnedResourceService:
    table: str = ""
    owner_field: str = "user_id"
    resource_name: str = "Resource"

    def __init__(self, supabase: Client):
        self.supabase = supabase

    def _failure(self, action: str, exc: Exception) -> HTTPException:
        logger.exception("Failed to %s %s: %s", action, self.resource_name.lower(), exc)
        return HTTPException(status_code=500, detail=str(exc) or f"Failed to {action} {self.resource_name.lower()}")

    def fetch(self, record_id: str) -> Dict[str, Any]:
        """Get a row by id, 404 when it does not exist"""
        try:
            result = self.supabase.table(self.table)\
                .select("*")\
                .eq("id", record_id)\
                .maybe_single()\
                .execute()
        except Exception as e:
            # 22P02: id is not a valid uuid. 204: older postgrest raises on an empty maybe_single
            if getattr(e, "code", None) in ("22P02", "204"):
                result = None
            else:
                raise self._failure("fetch", e)
        if not result or not result.data:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail=f"{self.resource_name} not found"
            )
        return result.data

    def check_owner(self, record: Dict[str, Any], caller: CallerIdentity) -> Dict[str, Any]:
        if record.get(self.owner_field) != caller.id:
            logger.warning(
                "Caller %s denied access to %s %s",
                caller.id, self.resource_name.lower(), record.get("id")
            )
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Forbidden")
        return record

    def load_owned(self, record_id: str, caller: CallerIdentity) -> Dict[str, Any]:
        return self.check_owner(self.fetch(record_id), caller)

    def parse_changes(self, schema: Type[ModelT], data: Any) -> ModelT:
        """Validate an update body. Runs after load_owned so 404 and 403 win over 400."""
        try:
            return schema.model_validate(data)
        except ValidationError as e:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=format_validation_errors(e.errors())
            )

    def list_owned(self, caller: CallerIdentity, order_by: str = "created_at") -> List[Dict[str, Any]]:
        """All rows owned by the caller, newest first. The filter never comes from client input."""
        try:
            result = self.supabase.table(self.table)\
                .select("*")\
                .eq(self.owner_field, caller.id)\
                .order(order_by, desc=True)\
                .execute()
            return result.data or []
        except Exception as e:
            raise self._failure("list", e)

    def insert(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        try:
            result = self.supabase.table(self.table).insert(payload).execute()
        except Exception as e:
            raise self._failure("create", e)
        if not result.data:
            raise HTTPException(status_code=500, detail=f"Failed to create {self.resource_name.lower()}")
        return result.data[0]

    def update_fields(self, record_id: str, fields: Dict[str, Any]) -> Dict[str, Any]:
        """Partial update; only the given columns change"""
        try:
            result = self.supabase.table(self.table)\
                .update(fields)\
                .eq("id", record_id)\
                .execute()
        except Exception as e:
            raise self._failure("update", e)
        if not result.data:
            # Row vanished between the ownership check and the write
            raise HTTPException(status_code=404, detail=f"{self.resource_name} not found")
        return result.data[0]

    def remove(self, record_id: str) -> None:
        try:
            self.supabase.table(self.table)\
                .delete()\
                .eq("id", record_id)\
                .execute()
        except Exception as e:
            raise self._failure("delete", e)
