"""Tests for typed request construction in the tool modules."""

import pytest

from salesforce_mcp.tools import (
    CreateAccountRequest,
    CreateContactRequest,
    CreateOpportunityRequest,
    CreateTaskRequest,
    GlobalSearchRequest,
    RecentActivitiesRequest,
    SearchRequest,
)


def test_search_request_from_arguments():
    request = SearchRequest.from_arguments({"query": "Acme", "limit": 4})
    assert request == SearchRequest(query="Acme", limit=4)


def test_global_search_request_default_limit():
    assert GlobalSearchRequest.from_arguments({"query": "Acme"}).limit == 20


def test_recent_activities_request():
    request = RecentActivitiesRequest.from_arguments({"recordId": "001A"})
    assert request.record_id == "001A"
    assert request.limit == 10


def test_requests_are_frozen():
    request = SearchRequest(query="Acme")
    with pytest.raises(AttributeError):
        request.query = "Other"


class TestCreateTaskRequest:

    def test_defaults(self):
        fields = CreateTaskRequest.from_arguments({"subject": "Follow up"}).to_fields()
        assert fields == {"Subject": "Follow up", "Priority": "Normal", "Status": "Not Started"}

    def test_due_date_maps_to_activity_date(self):
        fields = CreateTaskRequest(subject="Call", due_date="2025-01-02").to_fields()
        assert fields["ActivityDate"] == "2025-01-02"


class TestCreateRecordRequests:

    def test_account_drops_omitted_fields(self):
        request = CreateAccountRequest.from_arguments({
            "name": "Initech",
            "billingPostalCode": "78701",
            "industry": None,
        })
        assert request.to_fields() == {"Name": "Initech", "BillingPostalCode": "78701"}

    def test_contact_display_name(self):
        assert CreateContactRequest(last_name="Hopper").display_name == "Hopper"
        assert CreateContactRequest(
            first_name="Grace", last_name="Hopper"
        ).display_name == "Grace Hopper"

    def test_opportunity_fields(self):
        request = CreateOpportunityRequest.from_arguments({
            "name": "Renewal",
            "accountId": "001A",
            "stageName": "Prospecting",
            "closeDate": "2025-01-31",
            "nextStep": "Send quote",
            "probability": 40,
        })
        assert request.to_fields() == {
            "Name": "Renewal",
            "AccountId": "001A",
            "StageName": "Prospecting",
            "CloseDate": "2025-01-31",
            "Probability": 40,
            "NextStep": "Send quote",
        }
