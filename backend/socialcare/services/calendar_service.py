from datetime import datetime, timedelta, timezone
from typing import Optional
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from socialcare import policy
from socialcare.auth import Principal
from socialcare.kanban import build_board, column_counts
from socialcare.models.case import Case
from socialcare.models.meeting import Meeting
from socialcare.models.task import Task


def as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """SQLite hands back naive datetimes; everything stored is UTC."""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class CalendarService:
    async def visible_tasks(
        self,
        principal: Principal,
        db: AsyncSession,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
    ) -> list[Task]:
        query = select(Task)
        scope = policy.task_list_scope(principal)
        if scope is not None:
            query = query.where(Task.created_by == scope)
        if start is not None:
            query = query.where(Task.due_date >= start)
        if end is not None:
            query = query.where(Task.due_date < end)
        result = await db.execute(query.order_by(Task.due_date, Task.id))
        return list(result.scalars().all())

    async def own_meetings(
        self,
        principal: Principal,
        db: AsyncSession,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
    ) -> list[Meeting]:
        query = select(Meeting).where(Meeting.created_by == policy.meeting_list_scope(principal))
        if start is not None:
            query = query.where(Meeting.scheduled_at >= start)
        if end is not None:
            query = query.where(Meeting.scheduled_at < end)
        result = await db.execute(query.order_by(Meeting.scheduled_at, Meeting.id))
        return list(result.scalars().all())

    async def events(
        self,
        principal: Principal,
        db: AsyncSession,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
    ) -> list[dict]:
        """Tasks (on their due date) and meetings (for their duration), ordered by start."""
        events = []
        for task in await self.visible_tasks(principal, db, start, end):
            due = as_utc(task.due_date)
            events.append({
                "id": task.id,
                "type": "task",
                "title": task.title,
                "start": due,
                "end": due,
                "status": task.status,
                "case_id": task.case_id,
                "case_name": task.case_name,
                "priority": task.priority,
            })
        for meeting in await self.own_meetings(principal, db, start, end):
            begins = as_utc(meeting.scheduled_at)
            events.append({
                "id": meeting.id,
                "type": "meeting",
                "title": meeting.title,
                "start": begins,
                "end": begins + timedelta(minutes=meeting.duration or 0),
                "status": meeting.status,
                "case_id": meeting.case_id,
                "case_name": meeting.case_name,
                "meeting_type": meeting.meeting_type,
                "location": meeting.location,
            })
        events.sort(key=lambda e: (e["start"], e["type"], e["id"]))
        return events

    async def summary(self, principal: Principal, db: AsyncSession) -> dict:
        now = datetime.now(timezone.utc)

        result = await db.execute(select(Case))
        visible_cases = [c for c in result.scalars().all() if policy.can_view_case(principal, c)]
        archived = sum(1 for c in visible_cases if c.archived)

        tasks = await self.visible_tasks(principal, db)
        by_status = column_counts(build_board({"id": t.id, "status": t.status} for t in tasks))
        overdue = sum(
            1 for t in tasks
            if t.status != "Complete" and as_utc(t.due_date) < now
        )

        meetings = await self.own_meetings(principal, db, start=now)
        upcoming = sum(1 for m in meetings if m.status in ("Scheduled", "Rescheduled"))

        return {
            "active_cases": len(visible_cases) - archived,
            "archived_cases": archived,
            "total_tasks": len(tasks),
            "pending_tasks": len(tasks) - by_status["Complete"],
            "blocked_tasks": by_status["Blocked"],
            "overdue_tasks": overdue,
            "tasks_by_status": by_status,
            "upcoming_meetings": upcoming,
        }


calendar_service = CalendarService()
