"""
Approval workflow service.

Items (risk assessments, system registrations, documents, training modules)
are submitted for approval, assigned to reviewers automatically or by an
admin, and decided by the assignee. Every step is written to the approval
history and announced through in-app notifications. A final decision is
propagated to the record the item refers to.
"""

from __future__ import annotations

import uuid
from datetime import timedelta
from typing import Any, Dict, List, Optional, Tuple

from compliance_ai.core.database.base import utc_now
from compliance_ai.core.database.entities import (
    ApprovalAssignment,
    ApprovalHistory,
    ApprovalItem,
    ApprovalNotification,
    ApprovalSettings,
    User,
)
from compliance_ai.core.database.repositories import SqlRepoBundle
from compliance_ai.core.database.repositories.base import QueryBuilder, total_pages
from compliance_ai.core.errors import AuthorizationError, ResourceNotFoundError, ValidationError
from compliance_ai.core.logging_config import get_logger
from compliance_ai.core.models.domain import (
    ApprovalPriority,
    ApprovalStatus,
    ModuleType,
    NotificationType,
    UserRole,
)
from compliance_ai.core.models.io.approvals import (
    ApprovalAssign,
    ApprovalItemCreate,
    ApprovalSettingsUpdate,
    ApprovalStatusUpdate,
)

logger = get_logger(__name__)

# Reviewer role per module type when no default assignees are configured.
MODULE_REVIEWER_ROLES: Dict[str, str] = {
    ModuleType.risk_assessment.value: UserRole.compliance_officer.value,
    ModuleType.system_registration.value: UserRole.admin.value,
    ModuleType.document.value: UserRole.legal.value,
    ModuleType.training.value: UserRole.admin.value,
}

# Roles allowed to assign reviewers and to decide items they are not assigned to.
WORKFLOW_MANAGER_ROLES = (UserRole.admin.value, UserRole.compliance_officer.value)

REMINDER_WINDOW = timedelta(hours=48)
DEADLINE_WINDOW = timedelta(days=2)
RECENT_WINDOW = timedelta(days=30)

SYSTEM_ACTOR = "system"
SYSTEM_ACTOR_NAME = "System"


def generate_workflow_id(module_type: str) -> str:
    """``WF-<first three letters of the module type>-<8 hex>``."""
    return f"WF-{module_type[:3].upper()}-{uuid.uuid4().hex[:8]}"


def display_name_of(user: User) -> str:
    return user.display_name or user.username or user.email


def is_workflow_manager(user: User) -> bool:
    return (user.role or "").lower() in WORKFLOW_MANAGER_ROLES


class ApprovalWorkflowService:
    """Approval workflow operations on top of the SQL repositories."""

    def __init__(self, repos: SqlRepoBundle):
        self.repos = repos

    # ------------------------------------------------------------------
    # Notifications
    # ------------------------------------------------------------------

    async def _language_for(self, user_id: str) -> str:
        settings = await self.repos.approval_settings.get_by_user(user_id)
        return settings.language if settings else "en"

    async def _notify(
        self,
        item: ApprovalItem,
        user_ids: List[str],
        type: NotificationType,
        title: str,
        message: str,
        *,
        priority: Optional[str] = None,
        related_action: Optional[str] = None,
    ) -> int:
        sent = 0
        for user_id in dict.fromkeys(uid for uid in user_ids if uid):
            await self.repos.notifications.create(
                ApprovalNotification(
                    workflow_id=item.workflow_id,
                    user_id=user_id,
                    title=title,
                    message=message,
                    type=type.value,
                    priority=priority or item.priority,
                    related_action=related_action,
                    language=await self._language_for(user_id),
                )
            )
            sent += 1
        return sent

    async def _record_history(
        self,
        item: ApprovalItem,
        action_type: str,
        *,
        action_by: str,
        action_by_name: Optional[str],
        previous_status: Optional[str],
        new_status: Optional[str],
        details: Optional[str] = None,
        comments: Optional[str] = None,
    ) -> ApprovalHistory:
        return await self.repos.approval_history.create(
            ApprovalHistory(
                workflow_id=item.workflow_id,
                action_type=action_type,
                action_by=action_by,
                action_by_name=action_by_name,
                previous_status=previous_status,
                new_status=new_status,
                details=details,
                comments=comments,
            )
        )

    # ------------------------------------------------------------------
    # Submission and assignment
    # ------------------------------------------------------------------

    async def _admin_settings(self) -> Optional[ApprovalSettings]:
        admins = await self.repos.users.list_by_role(UserRole.admin.value, limit=1)
        if not admins:
            return None
        return await self.repos.approval_settings.get_by_user(admins[0].uid)

    async def appropriate_assignees(self, module_type: str) -> List[str]:
        """Candidate reviewers for an item of ``module_type``.

        The admin's default assignees win when configured. Otherwise up to two
        users holding the reviewer role of the module type are returned, with
        admins as the fallback.
        """
        admin_settings = await self._admin_settings()
        if admin_settings and admin_settings.default_assignees:
            return list(admin_settings.default_assignees)

        role = MODULE_REVIEWER_ROLES.get(module_type, UserRole.compliance_officer.value)
        users = await self.repos.users.list_by_role(role, limit=2)
        if not users and role != UserRole.admin.value:
            users = await self.repos.users.list_by_role(UserRole.admin.value, limit=2)
        return [user.uid for user in users]

    async def auto_assign(self, item: ApprovalItem) -> bool:
        """Assign the first candidate reviewer to ``item``.

        Returns:
            True when an assignment was created
        """
        admin_settings = await self._admin_settings()
        if admin_settings is not None and not admin_settings.auto_assign_enabled:
            logger.info(f"Auto-assignment disabled; {item.workflow_id} awaits manual assignment")
            return False

        assignees = await self.appropriate_assignees(item.module_type)
        if not assignees:
            logger.info(f"No reviewer found for {item.workflow_id}")
            return False

        assignee = assignees[0]
        await self.repos.approval_assignments.create(
            ApprovalAssignment(
                workflow_id=item.workflow_id,
                assigned_to=assignee,
                assigned_by=SYSTEM_ACTOR,
                due_date=item.due_date,
                is_auto_assigned=True,
                status=ApprovalStatus.pending.value,
                priority=item.priority,
            )
        )
        previous_status = item.status
        await self.repos.approval_items.update_fields(item, {"status": ApprovalStatus.in_review.value})
        await self._record_history(
            item,
            "assigned",
            action_by=SYSTEM_ACTOR,
            action_by_name=SYSTEM_ACTOR_NAME,
            previous_status=previous_status,
            new_status=ApprovalStatus.in_review.value,
            details=f"Auto-assigned to {assignee}",
        )
        await self._notify(
            item,
            [assignee],
            NotificationType.assignment,
            "New Approval Assignment",
            f"You have been assigned to review: {item.name}",
            related_action="assigned",
        )
        logger.info(f"Auto-assigned {item.workflow_id} to {assignee}")
        return True

    async def create(self, data: ApprovalItemCreate, user: User) -> Tuple[ApprovalItem, bool]:
        """Submit an item for approval.

        Returns:
            The stored item and whether a reviewer was auto-assigned
        """
        item = await self.repos.approval_items.create(
            ApprovalItem(
                workflow_id=generate_workflow_id(data.module_type.value),
                module_type=data.module_type.value,
                module_id=data.module_id,
                name=data.name,
                description=data.description,
                submitted_by=user.uid,
                submitter_name=display_name_of(user),
                department=data.department or user.department,
                due_date=data.due_date,
                status=ApprovalStatus.pending.value,
                priority=data.priority.value,
                details=data.details,
                language=data.language.value,
            )
        )
        await self._record_history(
            item,
            "submitted",
            action_by=user.uid,
            action_by_name=display_name_of(user),
            previous_status=None,
            new_status=ApprovalStatus.pending.value,
            details=f"{item.module_type} {item.module_id} submitted for approval",
        )

        is_auto_assigned = await self.auto_assign(item)

        admins = await self.repos.users.list_by_role(UserRole.admin.value)
        await self._notify(
            item,
            [admin.uid for admin in admins],
            NotificationType.status_change,
            "New Approval Item Submitted",
            f"A new {item.module_type} has been submitted for approval: {item.name}",
            related_action="submitted",
        )
        await self.repos.activities.log(
            "approval_submitted",
            f"{item.name} submitted for approval ({item.workflow_id})",
            user_id=user.uid,
            details={"workflow_id": item.workflow_id, "module_type": item.module_type},
        )
        return item, is_auto_assigned

    async def assign(self, workflow_id: str, data: ApprovalAssign, user: User) -> ApprovalAssignment:
        """Assign a reviewer. Only admins and compliance officers may assign."""
        if not is_workflow_manager(user):
            raise AuthorizationError("You don't have permission to assign approval workflows")

        item = await self.get_item(workflow_id)
        assignee = await self.repos.users.get_by_uid(data.assigned_to)
        if assignee is None:
            raise ResourceNotFoundError("User", data.assigned_to)

        assignment = await self.repos.approval_assignments.create(
            ApprovalAssignment(
                workflow_id=item.workflow_id,
                assigned_to=assignee.uid,
                assigned_by=user.uid,
                due_date=data.due_date or item.due_date,
                is_auto_assigned=False,
                status=ApprovalStatus.pending.value,
                priority=item.priority,
                comments=data.comments,
            )
        )

        previous_status = item.status
        if item.status == ApprovalStatus.pending.value:
            await self.repos.approval_items.update_fields(item, {"status": ApprovalStatus.in_review.value})
        await self._record_history(
            item,
            "assigned",
            action_by=user.uid,
            action_by_name=display_name_of(user),
            previous_status=previous_status,
            new_status=item.status,
            details=f"Assigned to {assignee.uid}",
            comments=data.comments,
        )
        await self._notify(
            item,
            [assignee.uid],
            NotificationType.assignment,
            "New Approval Assignment",
            f"You have been assigned to review: {item.name}",
            related_action="assigned",
        )
        return assignment

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    async def get_item(self, workflow_id: str) -> ApprovalItem:
        item = await self.repos.approval_items.get_by_workflow_id(workflow_id)
        if item is None:
            raise ResourceNotFoundError("Approval workflow", workflow_id)
        return item

    async def get(self, workflow_id: str) -> Dict[str, Any]:
        item = await self.get_item(workflow_id)
        return {
            "item": item,
            "assignments": await self.repos.approval_assignments.list_by_workflow(workflow_id),
            "history": await self.repos.approval_history.list_by_workflow(workflow_id),
        }

    async def list(
        self,
        *,
        page: int = 1,
        limit: int = 10,
        status: Optional[str] = None,
        module_type: Optional[str] = None,
        priority: Optional[str] = None,
        search: Optional[str] = None,
        sort_by: str = "submitted_date",
        sort_order: str = "desc",
    ) -> Dict[str, Any]:
        page = max(page, 1)
        limit = max(limit, 1)
        items, total = await self.repos.approval_items.search(
            filters={"status": status, "module_type": module_type, "priority": priority},
            search=search,
            sort_by=sort_by,
            sort_order=sort_order,
            limit=limit,
            offset=QueryBuilder.page_to_offset(page, limit),
        )
        return {
            "items": items,
            "pagination": {
                "page": page,
                "limit": limit,
                "total_items": total,
                "total_pages": total_pages(total, limit),
            },
        }

    # ------------------------------------------------------------------
    # Decisions
    # ------------------------------------------------------------------

    async def update_status(self, workflow_id: str, data: ApprovalStatusUpdate, user: User) -> ApprovalItem:
        """Change the status of an item.

        Only the current assignee, an admin or a compliance officer may decide.
        A final status completes the open assignment, is propagated to the
        underlying record and is announced to the submitter.
        """
        item = await self.get_item(workflow_id)
        open_assignments = [
            a
            for a in await self.repos.approval_assignments.list_by_workflow(workflow_id)
            if a.status in (ApprovalStatus.pending.value, ApprovalStatus.in_review.value)
        ]
        own_assignment = next((a for a in open_assignments if a.assigned_to == user.uid), None)
        if own_assignment is None and not is_workflow_manager(user):
            raise AuthorizationError("You are not authorized to update this approval workflow")

        new_status = data.status
        previous_status = item.status
        await self.repos.approval_items.update_fields(item, {"status": new_status.value})
        await self._record_history(
            item,
            new_status.value if new_status.is_final else "status_changed",
            action_by=user.uid,
            action_by_name=display_name_of(user),
            previous_status=previous_status,
            new_status=new_status.value,
            comments=data.comments,
        )

        if new_status.is_final:
            assignment = own_assignment or (open_assignments[0] if open_assignments else None)
            if assignment is not None:
                await self.repos.approval_assignments.update_fields(
                    assignment,
                    {"status": "completed", "completed_date": utc_now(), "comments": data.comments},
                )
            if new_status in (ApprovalStatus.approved, ApprovalStatus.rejected):
                await self.propagate_decision(item, new_status)
            await self._notify(
                item,
                [item.submitted_by],
                NotificationType.completion,
                "Approval Process Completed",
                f"The approval process for {item.name} has been completed with status: {new_status.value}",
                related_action=new_status.value,
            )
        else:
            await self._notify(
                item,
                [item.submitted_by],
                NotificationType.status_change,
                "Approval Status Update",
                f"The status of {item.name} has been updated to {new_status.value}",
                related_action="status_changed",
            )
        logger.info(f"{workflow_id}: {previous_status} -> {new_status.value} by {user.uid}")
        return item

    async def propagate_decision(self, item: ApprovalItem, status: ApprovalStatus) -> bool:
        """Write an approve/reject decision to the record the item refers to.

        Returns:
            False when the referenced record does not exist
        """
        approved = status == ApprovalStatus.approved
        if item.module_type == ModuleType.risk_assessment.value:
            record = await self.repos.risk_assessments.get_by_assessment_id(item.module_id)
            repo: Any = self.repos.risk_assessments
            new_value = "approved" if approved else "rejected"
        elif item.module_type == ModuleType.system_registration.value:
            record = await self.repos.systems.get_by_system_id(item.module_id)
            repo = self.repos.systems
            new_value = "active" if approved else "inactive"
        elif item.module_type == ModuleType.document.value:
            record = await self.repos.documents.get_by_id(int(item.module_id)) if item.module_id.isdigit() else None
            repo = self.repos.documents
            new_value = "final" if approved else "rejected"
        elif item.module_type == ModuleType.training.value:
            record = await self.repos.training_modules.get_by_module_id(item.module_id)
            repo = self.repos.training_modules
            new_value = "active" if approved else "inactive"
        else:
            logger.warning(f"Unknown module type {item.module_type} on {item.workflow_id}")
            return False

        if record is None:
            logger.warning(f"{item.module_type} {item.module_id} referenced by {item.workflow_id} not found")
            return False
        await repo.update_fields(record, {"status": new_value})
        return True

    # ------------------------------------------------------------------
    # Reminders and notifications
    # ------------------------------------------------------------------

    async def schedule_reminders(self) -> int:
        """Remind reviewers of pending assignments due within 48 hours.

        Returns:
            Number of reminders sent
        """
        now = utc_now()
        sent = 0
        for assignment in await self.repos.approval_assignments.list_pending_due_before(now + REMINDER_WINDOW):
            if assignment.due_date is None or assignment.due_date <= now:
                continue
            item = await self.repos.approval_items.get_by_workflow_id(assignment.workflow_id)
            if item is None:
                continue
            sent += await self._notify(
                item,
                [assignment.assigned_to],
                NotificationType.reminder,
                "Approval Reminder",
                f"Reminder: You have an approval task due for {item.name}",
                priority=ApprovalPriority.high.value,
                related_action="reminder",
            )
        logger.info(f"Sent {sent} approval reminder(s)")
        return sent

    async def list_notifications(
        self, user: User, *, page: int = 1, limit: int = 10, unread_only: bool = False
    ) -> Dict[str, Any]:
        page = max(page, 1)
        limit = max(limit, 1)
        items, total = await self.repos.notifications.list_for_user(
            user.uid, unread_only=unread_only, limit=limit, offset=QueryBuilder.page_to_offset(page, limit)
        )
        return {
            "items": items,
            "pagination": {
                "page": page,
                "limit": limit,
                "total_items": total,
                "total_pages": total_pages(total, limit),
            },
        }

    async def mark_notifications_read(self, user: User, notification_ids: List[int]) -> int:
        if not notification_ids:
            raise ValidationError("Invalid notification IDs")
        return await self.repos.notifications.mark_read(user.uid, notification_ids)

    async def unread_count(self, user: User) -> int:
        return await self.repos.notifications.count_unread(user.uid)

    # ------------------------------------------------------------------
    # Settings
    # ------------------------------------------------------------------

    async def get_settings(self, user: User) -> ApprovalSettings:
        """Return the user's settings, creating the defaults on first access."""
        settings = await self.repos.approval_settings.get_by_user(user.uid)
        if settings is None:
            settings = await self.repos.approval_settings.create(ApprovalSettings(user_id=user.uid))
        return settings

    async def update_settings(self, user: User, data: ApprovalSettingsUpdate) -> ApprovalSettings:
        settings = await self.get_settings(user)
        values = data.model_dump(exclude_unset=True, mode="json")
        return await self.repos.approval_settings.update_fields(settings, values)

    # ------------------------------------------------------------------
    # Statistics
    # ------------------------------------------------------------------

    async def statistics(self) -> Dict[str, Any]:
        now = utc_now()
        items = self.repos.approval_items

        durations: List[float] = []
        for entry in await self.repos.approval_history.list_by_new_status(ApprovalStatus.approved.value):
            item = await items.get_by_workflow_id(entry.workflow_id)
            if item is not None:
                durations.append((entry.action_date - item.submitted_date).total_seconds() / 3600)

        return {
            "by_status": await items.count_by("status"),
            "by_module_type": await items.count_by("module_type"),
            "by_priority": await items.count_by("priority"),
            "recent_submissions": await items.count_submitted_since(now - RECENT_WINDOW),
            "upcoming_deadlines": await self.repos.approval_assignments.count_open_due_between(
                now, now + DEADLINE_WINDOW
            ),
            "average_approval_hours": round(sum(durations) / len(durations), 1) if durations else 0.0,
        }
