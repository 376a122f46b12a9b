"""MCP tools for activity operations: the recent-activity timeline and task creation."""

from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

from salesforce_mcp.adapters import OperationResult, SalesforceAdapter
from salesforce_mcp.registry import OperationDescriptor

DEFAULT_ACTIVITY_LIMIT = 10
TASK_PRIORITIES = ("High", "Normal", "Low")
DEFAULT_TASK_PRIORITY = "Normal"
NEW_TASK_STATUS = "Not Started"

RECENT_ACTIVITIES_SCHEMA = {
    "type": "object",
    "required": ["recordId"],
    "properties": {
        "recordId": {
            "type": "string",
            "description": "The Salesforce Record ID (Account, Contact, or Opportunity)",
        },
        "limit": {
            "type": "integer",
            "description": f"Maximum number of activities to return (default: {DEFAULT_ACTIVITY_LIMIT})",
            "default": DEFAULT_ACTIVITY_LIMIT,
            "minimum": 1,
        },
    },
}

CREATE_TASK_SCHEMA = {
    "type": "object",
    "required": ["subject"],
    "properties": {
        "subject": {"type": "string", "description": "Task subject/title"},
        "description": {"type": "string", "description": "Task description"},
        "whoId": {
            "type": "string",
            "description": "Contact or Lead ID this task is related to",
        },
        "whatId": {
            "type": "string",
            "description": "Account, Opportunity, or other record ID this task is related to",
        },
        "dueDate": {"type": "string", "description": "Due date in YYYY-MM-DD format"},
        "priority": {
            "type": "string",
            "enum": list(TASK_PRIORITIES),
            "description": "Task priority (High, Normal, Low)",
        },
    },
}


@dataclass(frozen=True)
class RecentActivitiesRequest:
    record_id: str
    limit: int = DEFAULT_ACTIVITY_LIMIT

    @classmethod
    def from_arguments(cls, arguments: Mapping[str, Any]) -> "RecentActivitiesRequest":
        return cls(
            record_id=arguments["recordId"],
            limit=arguments.get("limit", DEFAULT_ACTIVITY_LIMIT),
        )


@dataclass(frozen=True)
class CreateTaskRequest:
    subject: str
    description: Optional[str] = None
    who_id: Optional[str] = None
    what_id: Optional[str] = None
    due_date: Optional[str] = None
    priority: Optional[str] = None

    @classmethod
    def from_arguments(cls, arguments: Mapping[str, Any]) -> "CreateTaskRequest":
        return cls(
            subject=arguments["subject"],
            description=arguments.get("description"),
            who_id=arguments.get("whoId"),
            what_id=arguments.get("whatId"),
            due_date=arguments.get("dueDate"),
            priority=arguments.get("priority"),
        )

    def to_fields(self) -> Dict[str, Any]:
        """Task sObject body; new tasks always start as "Not Started"."""
        body = {
            "Subject": self.subject,
            "Description": self.description,
            "WhoId": self.who_id,
            "WhatId": self.what_id,
            "ActivityDate": self.due_date,
            "Priority": self.priority or DEFAULT_TASK_PRIORITY,
            "Status": NEW_TASK_STATUS,
        }
        return {key: value for key, value in body.items() if value is not None}


async def get_recent_activities(
    adapter: SalesforceAdapter, request: RecentActivitiesRequest
) -> OperationResult:
    return await adapter.get_recent_activities(request.record_id, request.limit)


async def create_task(adapter: SalesforceAdapter, request: CreateTaskRequest) -> OperationResult:
    return await adapter.create_task(request.to_fields(), request.subject)


RECENT_ACTIVITIES_OPERATION = OperationDescriptor(
    name="get_recent_activities",
    description="Get recent activities (tasks, events, calls) for an account or contact",
    input_schema=RECENT_ACTIVITIES_SCHEMA,
    parse_request=RecentActivitiesRequest.from_arguments,
    handler=get_recent_activities,
)

CREATE_TASK_OPERATION = OperationDescriptor(
    name="create_task",
    description="Create a new task in Salesforce",
    input_schema=CREATE_TASK_SCHEMA,
    parse_request=CreateTaskRequest.from_arguments,
    handler=create_task,
)
