import logging
from datetime import datetime, timezone

from app.schemas.program import ClassCreate, ClassGroup, ClassUpdate, Program, Teacher
from app.utils.errors import error_message

logger = logging.getLogger(__name__)


class ClassList:
    """Classes with their program/teacher assignments."""

    def __init__(self, client):
        self.client = client
        self.items = []
        self.error = None

    async def refresh(self):
        try:
            response = await self.client.table("classes").select("*").order("name").execute()
            self.items = [ClassGroup.model_validate(row) for row in response.data or []]
            self.error = None
        except Exception as e:
            logger.error(f"Failed to fetch classes: {error_message(e)}")
            self.error = error_message(e) or "Failed to fetch classes"
        return self.items

    # -------- Add class --------
    async def add(self, data: ClassCreate):
        try:
            response = await self.client.table("classes").insert(data.model_dump()).execute()
            created = ClassGroup.model_validate(response.data[0])
        except Exception as e:
            logger.error(f"Failed to add class: {error_message(e)}")
            return {"success": False, "error": error_message(e) or "Failed to add class"}

        await self.refresh()
        return {"success": True, "data": created}

    # -------- Update class --------
    async def update(self, class_id: str, updates: ClassUpdate):
        payload = updates.model_dump(exclude_unset=True)
        payload["updated_at"] = datetime.now(timezone.utc).isoformat()
        try:
            response = await self.client.table("classes").update(payload).eq("id", class_id).execute()
            if not response.data:
                return {"success": False, "error": "Class not found"}
            updated = ClassGroup.model_validate(response.data[0])
        except Exception as e:
            logger.error(f"Failed to update class {class_id}: {error_message(e)}")
            return {"success": False, "error": error_message(e) or "Failed to update class"}

        await self.refresh()
        return {"success": True, "data": updated}

    # -------- Delete class --------
    async def delete(self, class_id: str):
        try:
            response = await self.client.table("classes").delete().eq("id", class_id).execute()
            if not response.data:
                return {"success": False, "error": "Class not found"}
        except Exception as e:
            logger.error(f"Failed to delete class {class_id}: {error_message(e)}")
            return {"success": False, "error": error_message(e) or "Failed to delete class"}

        await self.refresh()
        return {"success": True}

    def by_program(self, program_id: int):
        return [c for c in self.items if c.program_id == program_id]


class TeacherList:
    """Users with the teacher role, for class assignment."""

    def __init__(self, client):
        self.client = client
        self.items = []
        self.error = None

    async def refresh(self):
        try:
            response = await self.client \
                .table("users") \
                .select("id, first_name, last_name") \
                .eq("role", "teacher") \
                .order("first_name") \
                .execute()
            self.items = [Teacher.model_validate(row) for row in response.data or []]
            self.error = None
        except Exception as e:
            logger.error(f"Failed to fetch teachers: {error_message(e)}")
            self.error = error_message(e) or "Failed to fetch teachers"
        return self.items


async def fetch_programs(client):
    response = await client.table("programs").select("*").order("name").execute()
    return [Program.model_validate(row) for row in response.data or []]
