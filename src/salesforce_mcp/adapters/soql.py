"""
SOQL and SOSL query construction.

Every caller-supplied value is escaped for the target literal syntax before it
is substituted into a query template: quoted string literals for equality,
LIKE patterns with wildcards neutralized, SOSL search terms with reserved
characters escaped, and limits forced to positive integers.
"""

from typing import Iterable, Sequence

ACCOUNT_SEARCH_FIELDS = (
    "Id", "Name", "Industry", "Phone", "Website", "BillingCity", "BillingState",
    "BillingCountry", "Type", "Description", "NumberOfEmployees", "AnnualRevenue",
    "CreatedDate",
)
CONTACT_SEARCH_FIELDS = (
    "Id", "FirstName", "LastName", "Email", "Phone", "Title", "Department",
    "AccountId", "Account.Name", "MailingCity", "MailingState", "MailingCountry",
    "CreatedDate",
)
OPPORTUNITY_SEARCH_FIELDS = (
    "Id", "Name", "StageName", "Amount", "CloseDate", "Probability", "AccountId",
    "Account.Name", "Type", "Description", "ForecastCategoryName", "CreatedDate",
)
LEAD_SEARCH_FIELDS = (
    "Id", "FirstName", "LastName", "Email", "Phone", "Title", "Company", "Status",
    "LeadSource", "City", "State", "Country", "Industry", "CreatedDate",
)

ACCOUNT_DETAIL_FIELDS = (
    "Id", "Name", "Industry", "Phone", "Website", "BillingStreet", "BillingCity",
    "BillingState", "BillingPostalCode", "BillingCountry", "Type", "Description",
    "NumberOfEmployees", "AnnualRevenue", "CreatedDate", "LastModifiedDate",
    "OwnerId", "Owner.Name",
)
CONTACT_DETAIL_FIELDS = (
    "Id", "FirstName", "LastName", "Email", "Phone", "Title", "Department",
    "AccountId", "Account.Name", "MailingStreet", "MailingCity", "MailingState",
    "MailingPostalCode", "MailingCountry", "CreatedDate", "LastModifiedDate",
    "OwnerId", "Owner.Name", "Description",
)
OPPORTUNITY_DETAIL_FIELDS = (
    "Id", "Name", "StageName", "Amount", "CloseDate", "Probability", "AccountId",
    "Account.Name", "Type", "Description", "ForecastCategoryName", "CreatedDate",
    "LastModifiedDate", "OwnerId", "Owner.Name", "LeadSource", "NextStep",
)

TASK_ACTIVITY_FIELDS = (
    "Id", "Subject", "Description", "Status", "Priority", "ActivityDate", "WhoId",
    "WhatId", "Who.Name", "What.Name", "CreatedDate", "Type",
)
EVENT_ACTIVITY_FIELDS = (
    "Id", "Subject", "Description", "StartDateTime", "EndDateTime", "WhoId",
    "WhatId", "Who.Name", "What.Name", "CreatedDate", "Type",
)

GLOBAL_SEARCH_RETURNING = (
    "Account(Id, Name, Industry, Phone)",
    "Contact(Id, FirstName, LastName, Email, Phone, Account.Name)",
    "Opportunity(Id, Name, StageName, Amount, CloseDate, Account.Name)",
    "Lead(Id, FirstName, LastName, Email, Company, Status)",
)

_SOQL_ESCAPES = {
    "\\": "\\\\",
    "'": "\\'",
    '"': '\\"',
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
    "\b": "\\b",
    "\f": "\\f",
}
_LIKE_ESCAPES = {"%": "\\%", "_": "\\_"}
_SOSL_RESERVED = set('?&|!{}[]()^~*:\\"\'+-')


def escape_soql(value: str) -> str:
    """Escape a value for use inside a single-quoted SOQL string literal."""
    return "".join(_SOQL_ESCAPES.get(ch, ch) for ch in str(value))


def escape_like(value: str) -> str:
    """Escape a value for a LIKE pattern; ``%`` and ``_`` match literally."""
    return "".join(_LIKE_ESCAPES.get(ch, ch) for ch in escape_soql(value))


def escape_sosl(value: str) -> str:
    """Escape SOSL reserved characters in a FIND search term."""
    return "".join(f"\\{ch}" if ch in _SOSL_RESERVED else ch for ch in str(value))


def quote(value: str) -> str:
    return f"'{escape_soql(value)}'"


def soql_limit(limit: int) -> int:
    if isinstance(limit, bool) or not isinstance(limit, int) or limit < 1:
        raise ValueError(f"limit must be a positive integer, got {limit!r}")
    return limit


def _select(fields: Sequence[str], sobject: str) -> str:
    return f"SELECT {', '.join(fields)} FROM {sobject}"


def _like_any(fields: Iterable[str], term: str) -> str:
    pattern = f"'%{escape_like(term)}%'"
    return " OR ".join(f"{field} LIKE {pattern}" for field in fields)


def build_search_query(
    sobject: str,
    fields: Sequence[str],
    match_fields: Sequence[str],
    term: str,
    order_by: str,
    limit: int,
) -> str:
    """Build a ``SELECT ... WHERE a LIKE '%t%' OR ... ORDER BY ... LIMIT n`` query."""
    return (
        f"{_select(fields, sobject)} "
        f"WHERE {_like_any(match_fields, term)} "
        f"ORDER BY {order_by} "
        f"LIMIT {soql_limit(limit)}"
    )


def search_accounts_query(term: str, limit: int) -> str:
    return build_search_query(
        "Account", ACCOUNT_SEARCH_FIELDS,
        ("Name", "Industry", "BillingCity", "Type"),
        term, "Name", limit,
    )


def search_contacts_query(term: str, limit: int) -> str:
    return build_search_query(
        "Contact", CONTACT_SEARCH_FIELDS,
        ("FirstName", "LastName", "Email", "Title", "Department", "Account.Name"),
        term, "LastName, FirstName", limit,
    )


def search_opportunities_query(term: str, limit: int) -> str:
    return build_search_query(
        "Opportunity", OPPORTUNITY_SEARCH_FIELDS,
        ("Name", "StageName", "Account.Name", "Type"),
        term, "CloseDate DESC", limit,
    )


def search_leads_query(term: str, limit: int) -> str:
    return build_search_query(
        "Lead", LEAD_SEARCH_FIELDS,
        ("FirstName", "LastName", "Email", "Company", "Title", "Industry"),
        term, "CreatedDate DESC", limit,
    )


def record_by_id_query(sobject: str, fields: Sequence[str], record_id: str) -> str:
    return f"{_select(fields, sobject)} WHERE Id = {quote(record_id)}"


def activities_query(sobject: str, fields: Sequence[str], record_id: str, limit: int) -> str:
    """Activities whose WhatId or WhoId points at the record, newest first."""
    record = quote(record_id)
    return (
        f"{_select(fields, sobject)} "
        f"WHERE WhatId = {record} OR WhoId = {record} "
        f"ORDER BY CreatedDate DESC "
        f"LIMIT {soql_limit(limit)}"
    )


def global_search_query(term: str, limit: int) -> str:
    return (
        f"FIND {{{escape_sosl(term)}}} IN ALL FIELDS "
        f"RETURNING {', '.join(GLOBAL_SEARCH_RETURNING)} "
        f"LIMIT {soql_limit(limit)}"
    )
