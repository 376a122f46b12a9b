"""MCP tools for single-record operations.

Detail lookups, in-place updates and creates for accounts, contacts and
opportunities. Create requests map camelCase tool arguments onto Salesforce
field names and drop every optional field the caller omitted.
"""

from dataclasses import dataclass, field, fields
from typing import Any, Dict, List, Mapping, Optional

from salesforce_mcp.adapters import OperationResult, SalesforceAdapter
from salesforce_mcp.registry import OperationDescriptor


def _id_schema(param: str, description: str) -> Dict[str, Any]:
    return {
        "type": "object",
        "required": [param],
        "properties": {param: {"type": "string", "description": description}},
    }


def _update_schema(param: str, kind: str, update_fields: Dict[str, str]) -> Dict[str, Any]:
    return {
        "type": "object",
        "required": [param, "updates"],
        "properties": {
            param: {"type": "string", "description": f"The Salesforce {kind} ID"},
            "updates": {
                "type": "object",
                "description": f"Fields to update on the {kind.lower()}",
                "properties": {
                    name: {"type": json_type} for name, json_type in update_fields.items()
                },
            },
        },
    }


# ============================================================================
# Typed requests
# ============================================================================


@dataclass(frozen=True)
class RecordRequest:
    record_id: str


@dataclass(frozen=True)
class UpdateRequest:
    record_id: str
    updates: Dict[str, Any] = field(default_factory=dict)


def _record_parser(param: str):
    def parse(arguments: Mapping[str, Any]) -> RecordRequest:
        return RecordRequest(record_id=arguments[param])
    return parse


def _update_parser(param: str):
    def parse(arguments: Mapping[str, Any]) -> UpdateRequest:
        return UpdateRequest(record_id=arguments[param], updates=dict(arguments["updates"]))
    return parse


class CreateRequest:
    """
    Mixin for create requests.

    Each dataclass field declares its Salesforce field name and wire argument
    name in ``metadata``; ``to_fields()`` builds the sObject body.
    """

    def to_fields(self) -> Dict[str, Any]:
        body = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if value is not None:
                body[f.metadata["sf"]] = value
        return body

    @classmethod
    def from_arguments(cls, arguments: Mapping[str, Any]):
        return cls(**{
            f.name: arguments[f.metadata["arg"]]
            for f in fields(cls)
            if arguments.get(f.metadata["arg"]) is not None
        })


def _sf(sf_name: str, arg: str, default: Any = None):
    return field(default=default, metadata={"sf": sf_name, "arg": arg})


@dataclass(frozen=True)
class CreateAccountRequest(CreateRequest):
    name: str = _sf("Name", "name")
    industry: Optional[str] = _sf("Industry", "industry")
    phone: Optional[str] = _sf("Phone", "phone")
    website: Optional[str] = _sf("Website", "website")
    billing_street: Optional[str] = _sf("BillingStreet", "billingStreet")
    billing_city: Optional[str] = _sf("BillingCity", "billingCity")
    billing_state: Optional[str] = _sf("BillingState", "billingState")
    billing_postal_code: Optional[str] = _sf("BillingPostalCode", "billingPostalCode")
    billing_country: Optional[str] = _sf("BillingCountry", "billingCountry")
    description: Optional[str] = _sf("Description", "description")
    number_of_employees: Optional[float] = _sf("NumberOfEmployees", "numberOfEmployees")
    annual_revenue: Optional[float] = _sf("AnnualRevenue", "annualRevenue")
    type: Optional[str] = _sf("Type", "type")


@dataclass(frozen=True)
class CreateContactRequest(CreateRequest):
    last_name: str = _sf("LastName", "lastName")
    first_name: Optional[str] = _sf("FirstName", "firstName")
    email: Optional[str] = _sf("Email", "email")
    phone: Optional[str] = _sf("Phone", "phone")
    title: Optional[str] = _sf("Title", "title")
    department: Optional[str] = _sf("Department", "department")
    account_id: Optional[str] = _sf("AccountId", "accountId")
    mailing_street: Optional[str] = _sf("MailingStreet", "mailingStreet")
    mailing_city: Optional[str] = _sf("MailingCity", "mailingCity")
    mailing_state: Optional[str] = _sf("MailingState", "mailingState")
    mailing_postal_code: Optional[str] = _sf("MailingPostalCode", "mailingPostalCode")
    mailing_country: Optional[str] = _sf("MailingCountry", "mailingCountry")
    description: Optional[str] = _sf("Description", "description")

    @property
    def display_name(self) -> str:
        return " ".join(part for part in (self.first_name, self.last_name) if part)


@dataclass(frozen=True)
class CreateOpportunityRequest(CreateRequest):
    name: str = _sf("Name", "name")
    account_id: str = _sf("AccountId", "accountId")
    stage_name: str = _sf("StageName", "stageName")
    close_date: str = _sf("CloseDate", "closeDate")
    amount: Optional[float] = _sf("Amount", "amount")
    probability: Optional[float] = _sf("Probability", "probability")
    type: Optional[str] = _sf("Type", "type")
    description: Optional[str] = _sf("Description", "description")
    lead_source: Optional[str] = _sf("LeadSource", "leadSource")
    next_step: Optional[str] = _sf("NextStep", "nextStep")


# ============================================================================
# Handlers
# ============================================================================


async def get_account_details(adapter: SalesforceAdapter, request: RecordRequest) -> OperationResult:
    return await adapter.get_account_details(request.record_id)


async def get_contact_details(adapter: SalesforceAdapter, request: RecordRequest) -> OperationResult:
    return await adapter.get_contact_details(request.record_id)


async def get_opportunity_details(
    adapter: SalesforceAdapter, request: RecordRequest
) -> OperationResult:
    return await adapter.get_opportunity_details(request.record_id)


async def update_account(adapter: SalesforceAdapter, request: UpdateRequest) -> OperationResult:
    return await adapter.update_account(request.record_id, request.updates)


async def update_contact(adapter: SalesforceAdapter, request: UpdateRequest) -> OperationResult:
    return await adapter.update_contact(request.record_id, request.updates)


async def update_opportunity(adapter: SalesforceAdapter, request: UpdateRequest) -> OperationResult:
    return await adapter.update_opportunity(request.record_id, request.updates)


async def create_account(
    adapter: SalesforceAdapter, request: CreateAccountRequest
) -> OperationResult:
    return await adapter.create_account(request.to_fields(), request.name)


async def create_contact(
    adapter: SalesforceAdapter, request: CreateContactRequest
) -> OperationResult:
    return await adapter.create_contact(request.to_fields(), request.display_name)


async def create_opportunity(
    adapter: SalesforceAdapter, request: CreateOpportunityRequest
) -> OperationResult:
    return await adapter.create_opportunity(request.to_fields(), request.name)


# ============================================================================
# Schemas and descriptors
# ============================================================================

CREATE_ACCOUNT_SCHEMA = {
    "type": "object",
    "required": ["name"],
    "properties": {
        "name": {"type": "string", "description": "Account name (required)"},
        "industry": {"type": "string", "description": "Account industry"},
        "phone": {"type": "string", "description": "Account phone number"},
        "website": {"type": "string", "description": "Account website URL"},
        "billingStreet": {"type": "string", "description": "Billing street address"},
        "billingCity": {"type": "string", "description": "Billing city"},
        "billingState": {"type": "string", "description": "Billing state/province"},
        "billingPostalCode": {"type": "string", "description": "Billing postal code"},
        "billingCountry": {"type": "string", "description": "Billing country"},
        "description": {"type": "string", "description": "Account description"},
        "numberOfEmployees": {"type": "number", "description": "Number of employees"},
        "annualRevenue": {"type": "number", "description": "Annual revenue"},
        "type": {
            "type": "string",
            "description": "Account type (e.g., Customer, Partner, Prospect)",
        },
    },
}

CREATE_CONTACT_SCHEMA = {
    "type": "object",
    "required": ["lastName"],
    "properties": {
        "firstName": {"type": "string", "description": "Contact first name"},
        "lastName": {"type": "string", "description": "Contact last name (required)"},
        "email": {"type": "string", "description": "Contact email address"},
        "phone": {"type": "string", "description": "Contact phone number"},
        "title": {"type": "string", "description": "Contact job title"},
        "department": {"type": "string", "description": "Contact department"},
        "accountId": {"type": "string", "description": "Associated account ID"},
        "mailingStreet": {"type": "string", "description": "Mailing street address"},
        "mailingCity": {"type": "string", "description": "Mailing city"},
        "mailingState": {"type": "string", "description": "Mailing state/province"},
        "mailingPostalCode": {"type": "string", "description": "Mailing postal code"},
        "mailingCountry": {"type": "string", "description": "Mailing country"},
        "description": {"type": "string", "description": "Contact description"},
    },
}

CREATE_OPPORTUNITY_SCHEMA = {
    "type": "object",
    "required": ["name", "accountId", "stageName", "closeDate"],
    "properties": {
        "name": {"type": "string", "description": "Opportunity name (required)"},
        "accountId": {"type": "string", "description": "Associated account ID (required)"},
        "stageName": {"type": "string", "description": "Opportunity stage (required)"},
        "closeDate": {
            "type": "string",
            "description": "Close date in YYYY-MM-DD format (required)",
        },
        "amount": {"type": "number", "description": "Opportunity amount"},
        "probability": {"type": "number", "description": "Probability percentage (0-100)"},
        "type": {
            "type": "string",
            "description": "Opportunity type (e.g., New Business, Existing Business)",
        },
        "description": {"type": "string", "description": "Opportunity description"},
        "leadSource": {"type": "string", "description": "Lead source"},
        "nextStep": {"type": "string", "description": "Next step in the sales process"},
    },
}


def detail_operations() -> List[OperationDescriptor]:
    return [
        OperationDescriptor(
            name="get_account_details",
            description="Get detailed information about a specific Salesforce account",
            input_schema=_id_schema("accountId", "The Salesforce Account ID"),
            parse_request=_record_parser("accountId"),
            handler=get_account_details,
        ),
        OperationDescriptor(
            name="get_contact_details",
            description="Get detailed information about a specific Salesforce contact",
            input_schema=_id_schema("contactId", "The Salesforce Contact ID"),
            parse_request=_record_parser("contactId"),
            handler=get_contact_details,
        ),
        OperationDescriptor(
            name="get_opportunity_details",
            description="Get detailed information about a specific Salesforce opportunity",
            input_schema=_id_schema("opportunityId", "The Salesforce Opportunity ID"),
            parse_request=_record_parser("opportunityId"),
            handler=get_opportunity_details,
        ),
    ]


def update_operations() -> List[OperationDescriptor]:
    return [
        OperationDescriptor(
            name="update_account",
            description="Update a Salesforce account with new information",
            input_schema=_update_schema("accountId", "Account", {
                "Name": "string",
                "Industry": "string",
                "Phone": "string",
                "Website": "string",
                "Description": "string",
            }),
            parse_request=_update_parser("accountId"),
            handler=update_account,
        ),
        OperationDescriptor(
            name="update_contact",
            description="Update a Salesforce contact with new information",
            input_schema=_update_schema("contactId", "Contact", {
                "FirstName": "string",
                "LastName": "string",
                "Email": "string",
                "Phone": "string",
                "Title": "string",
                "Department": "string",
            }),
            parse_request=_update_parser("contactId"),
            handler=update_contact,
        ),
        OperationDescriptor(
            name="update_opportunity",
            description="Update a Salesforce opportunity with new information",
            input_schema=_update_schema("opportunityId", "Opportunity", {
                "Name": "string",
                "StageName": "string",
                "Amount": "number",
                "CloseDate": "string",
                "Description": "string",
                "Probability": "number",
            }),
            parse_request=_update_parser("opportunityId"),
            handler=update_opportunity,
        ),
    ]


def create_operations() -> List[OperationDescriptor]:
    return [
        OperationDescriptor(
            name="create_account",
            description="Create a new Salesforce account",
            input_schema=CREATE_ACCOUNT_SCHEMA,
            parse_request=CreateAccountRequest.from_arguments,
            handler=create_account,
        ),
        OperationDescriptor(
            name="create_contact",
            description="Create a new Salesforce contact",
            input_schema=CREATE_CONTACT_SCHEMA,
            parse_request=CreateContactRequest.from_arguments,
            handler=create_contact,
        ),
        OperationDescriptor(
            name="create_opportunity",
            description="Create a new Salesforce opportunity",
            input_schema=CREATE_OPPORTUNITY_SCHEMA,
            parse_request=CreateOpportunityRequest.from_arguments,
            handler=create_opportunity,
        ),
    ]
