"""
Access rules for cases, tasks, meetings and comments.

Every predicate is pure: it looks only at the principal and the already
loaded record. Routers turn a ``False`` into ``NotFoundError`` so callers
cannot tell a forbidden record from a missing one.

Managers bypass ownership and assignment checks for cases and tasks.
Meetings have no manager bypass and are always scoped to their creator.
"""

from typing import Optional
from socialcare.auth import Principal


def _is_creator(principal: Principal, record) -> bool:
    return record.created_by == principal.id


def is_assigned(principal: Principal, case) -> bool:
    return principal.full_name in (case.assigned_social_workers or [])


# Cases

def can_view_case(principal: Principal, case) -> bool:
    if principal.is_manager:
        return True
    return _is_creator(principal, case) or is_assigned(principal, case)


def can_edit_case(principal: Principal, case) -> bool:
    return can_view_case(principal, case)


def can_archive_case(principal: Principal, case) -> bool:
    return can_edit_case(principal, case)


def can_delete_case(principal: Principal, case) -> bool:
    return principal.is_manager or _is_creator(principal, case)


def can_upload_attachment(principal: Principal, case) -> bool:
    return can_edit_case(principal, case)


def can_delete_attachment(principal: Principal, case) -> bool:
    return can_delete_case(principal, case)


# Tasks

def can_view_task(principal: Principal, task) -> bool:
    return principal.is_manager or _is_creator(principal, task)


def can_modify_task(principal: Principal, task) -> bool:
    return principal.is_manager or _is_creator(principal, task)


def task_list_scope(principal: Principal) -> Optional[int]:
    """Returns None for managers (unrestricted), the creator id otherwise."""
    if principal.is_manager:
        return None
    return principal.id


# Meetings

def can_modify_meeting(principal: Principal, meeting) -> bool:
    return _is_creator(principal, meeting)


def meeting_list_scope(principal: Principal) -> int:
    return principal.id


# Comments

def can_comment_on_case(principal: Principal, case) -> bool:
    return can_view_case(principal, case)


def can_comment_on_task(principal: Principal, task) -> bool:
    return can_view_task(principal, task)


def can_delete_comment(principal: Principal, comment) -> bool:
    return comment.user_id == principal.id
