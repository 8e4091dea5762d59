"""
Tests for the typed FogBugz operations.
"""

from urllib.parse import parse_qs

import pytest

from fbcli.fogbugz_api import FogBugzClient
from fbcli.fogbugz_api.client import SEARCH_COLUMNS, TICKET_COLUMNS
from fbcli.fogbugz_api.errors import (
    ApiError,
    InvalidArgumentError,
    UnauthenticatedError,
    UnexpectedShapeError,
)

ENDPOINT = "https://example.fogbugz.com/api.asp"


class TestOpenTicket:
    def test_builds_query_and_returns_id(self, client, respond, last_query):
        respond('<response><case ixBug="42" operations="edit,assign,resolve"/></response>')
        assert client.open_ticket("T", "D", {"priority": "3"}) == 42
        assert "cmd=new&sTitle=T&sEvent=D&ixPriority=3" in last_query()
        assert last_query().startswith("token=tok123&")

    def test_translates_all_friendly_options(self, client, respond, last_query):
        respond('<response><case ixBug="7"/></response>')
        client.open_ticket("Title", "Body", {"area": 1, "category": 2, "owner": 3, "project": 4, "sTags": "x y"})
        assert last_query().endswith("ixArea=1&ixCategory=2&ixPersonAssignedTo=3&ixProject=4&sTags=x+y")

    @pytest.mark.parametrize("title, description", [("", "D"), ("T", ""), (None, "D")])
    def test_requires_title_and_description(self, client, http, title, description):
        with pytest.raises(InvalidArgumentError):
            client.open_ticket(title, description)
        http.get.assert_not_called()

    def test_error_instead_of_case(self, client, respond):
        respond('<response><error code="10">Case title required</error></response>')
        with pytest.raises(ApiError, match="Case title required"):
            client.open_ticket("T", "D")
        assert client.last_error == "Case title required"

    def test_missing_case(self, client, respond):
        respond("<response/>")
        with pytest.raises(UnexpectedShapeError):
            client.open_ticket("T", "D")

    def test_requires_login(self, http):
        c = FogBugzClient(ENDPOINT, http=http)
        with pytest.raises(UnauthenticatedError):
            c.open_ticket("T", "D")
        http.get.assert_not_called()


class TestCaseVerbs:
    def test_update(self, client, respond, last_query):
        respond('<response><case ixBug="12"/></response>')
        assert client.update_ticket("12", "More info", {"owner": 9}) == 12
        assert "cmd=edit&ixBug=12&sEvent=More+info&ixPersonAssignedTo=9" in last_query()

    def test_update_requires_content(self, client, http):
        with pytest.raises(InvalidArgumentError):
            client.update_ticket(12, "")
        http.get.assert_not_called()

    def test_reopen_reads_child_element(self, client, respond, last_query):
        respond("<response><case><ixBug>15</ixBug></case></response>")
        assert client.reopen_ticket(15, {"priority": 2}) == 15
        assert last_query().endswith("cmd=reopen&ixBug=15&ixPriority=2")

    def test_resolve(self, client, respond, last_query):
        respond('<response><case ixBug="15"/></response>')
        assert client.resolve_ticket(15) == 15
        assert last_query().endswith("cmd=resolve&ixBug=15")

    def test_close(self, client, respond, last_query):
        respond('<response><case ixBug="15"/></response>')
        assert client.close_ticket(15) == 15
        assert last_query().endswith("cmd=close&ixBug=15")

    @pytest.mark.parametrize("verb", ["reopen_ticket", "resolve_ticket", "close_ticket", "get_ticket"])
    @pytest.mark.parametrize("bad_id", [None, 0, -1, ""])
    def test_invalid_case_id(self, client, http, verb, bad_id):
        with pytest.raises(InvalidArgumentError):
            getattr(client, verb)(bad_id)
        http.get.assert_not_called()


class TestGetTicket:
    BODY = """<response><cases count="1">
      <case ixBug="20" operations="edit">
        <fOpen>true</fOpen>
        <ixStatus>1</ixStatus>
        <ixPersonAssignedTo>3</ixPersonAssignedTo>
        <sPersonAssignedTo><![CDATA[Jane Doe]]></sPersonAssignedTo>
        <events>
          <event ixBugEvent="101" ixBug="20">
            <evtDescription><![CDATA[Opened by Jane Doe]]></evtDescription>
            <sVerb>Opened</sVerb>
            <sPerson>Jane Doe</sPerson>
            <dt>2024-01-02T03:04:05Z</dt>
            <s>It is broken</s>
          </event>
        </events>
      </case>
    </cases></response>"""

    def test_decodes_case_and_events(self, client, respond, last_query):
        respond(self.BODY)
        case = client.get_ticket(20)
        assert case.ix_bug == 20
        assert case.is_open is True
        assert case.ix_status == 1
        assert case.ix_person_assigned_to == 3
        assert case.person_assigned_to == "Jane Doe"
        assert len(case.events) == 1
        event = case.events[0]
        assert event.ix_bug_event == 101
        assert event.verb == "Opened"
        assert event.text == "It is broken"
        assert event.date == "2024-01-02T03:04:05Z"

        params = parse_qs(last_query())
        assert params["cmd"] == ["search"]
        assert params["q"] == ["20"]
        assert params["cols"] == [TICKET_COLUMNS]

    def test_case_not_found(self, client, respond):
        respond('<response><cases count="0"/></response>')
        with pytest.raises(UnexpectedShapeError):
            client.get_ticket(20)


def test_get_ticket_status(client, respond, last_query):
    respond("""<response><status>
        <ixStatus>2</ixStatus><ixCategory>1</ixCategory><sStatus>Resolved (Fixed)</sStatus>
        <fWorkDone>true</fWorkDone><fResolved>true</fResolved><fDuplicate>false</fDuplicate>
        <fDeleted>false</fDeleted><iOrder>0</iOrder>
    </status></response>""")
    status = client.get_ticket_status("2")
    assert status.ix_status == 2
    assert status.name == "Resolved (Fixed)"
    assert status.ix_category == 1
    assert status.is_resolved is True
    assert status.is_duplicate is False
    assert status.order == 0
    assert last_query().endswith("cmd=viewStatus&ixStatus=2")


class TestListings:
    def test_areas(self, client, respond, last_query):
        respond("""<response><areas>
            <area ixArea="1"><sArea>UI</sArea></area>
            <area ixArea="2"><sArea>Backend</sArea></area>
        </areas></response>""")
        assert client.get_all_areas(5) == {1: "UI", 2: "Backend"}
        assert last_query().endswith("cmd=listAreas&ixProject=5")

    def test_areas_child_elements(self, client, respond):
        respond("<response><areas><area><ixArea>8</ixArea><sArea><![CDATA[Docs]]></sArea></area></areas></response>")
        assert client.get_all_areas(5) == {8: "Docs"}

    def test_areas_require_project(self, client, http):
        with pytest.raises(InvalidArgumentError):
            client.get_all_areas(None)
        http.get.assert_not_called()

    def test_categories(self, client, respond):
        respond("""<response><categories>
            <category><ixCategory>1</ixCategory><sCategory>Bug</sCategory></category>
            <category><ixCategory>2</ixCategory><sCategory>Feature</sCategory></category>
        </categories></response>""")
        assert client.get_all_categories() == {1: "Bug", 2: "Feature"}

    def test_empty_listing(self, client, respond):
        respond("<response><categories/></response>")
        assert client.get_all_categories() == {}

    def test_absent_listing_without_error(self, client, respond):
        respond("<response/>")
        assert client.get_all_categories() == {}

    def test_listing_with_error(self, client, respond):
        respond('<response><error code="3">Not logged in</error></response>')
        with pytest.raises(ApiError) as exc_info:
            client.get_all_categories()
        assert exc_info.value.code == 3

    def test_filters(self, client, respond):
        respond("""<response><filters>
            <filter type="builtin" sFilter="ez349">My Cases</filter>
            <filter type="saved" sFilter="304" status="current">Cases I should have closed</filter>
        </filters></response>""")
        filters = client.get_all_filters()
        assert [f.s_filter for f in filters] == ["ez349", "304"]
        assert filters[0].name == "My Cases"
        assert filters[0].filter_type == "builtin"
        assert filters[1].is_current is True

    def test_people_default_flags(self, client, respond, last_query):
        respond("""<response><people>
            <person><ixPerson>2</ixPerson><sFullName>Jane Doe</sFullName><sEmail>jane@example.com</sEmail></person>
        </people></response>""")
        people = client.get_all_fogbugz_users()
        assert people[2].full_name == "Jane Doe"
        assert people[2].email == "jane@example.com"
        assert last_query().endswith("cmd=listPeople&fIncludeNormal=1")

    def test_people_all_flags(self, client, respond, last_query):
        respond("<response><people/></response>")
        assert client.get_all_fogbugz_users(False, True, True) == {}
        assert last_query().endswith("cmd=listPeople&fIncludeVirtual=1&fIncludeCommunity=1")

    def test_priorities(self, client, respond):
        respond("""<response><priorities>
            <priority><ixPriority>1</ixPriority><sPriority>Must Fix</sPriority><fDefault>false</fDefault></priority>
            <priority><ixPriority>3</ixPriority><sPriority>Fix If Time</sPriority><fDefault>true</fDefault></priority>
        </priorities></response>""")
        priorities = client.get_all_priorities()
        assert priorities[1].name == "Must Fix"
        assert priorities[1].is_default is False
        assert priorities[3].is_default is True

    def test_priorities_raw(self, client, respond):
        respond("<response><priorities/></response>")
        tree = client.get_all_priorities(raw=True)
        assert tree.tag == "response"
        assert tree.find("priorities") is not None

    def test_projects(self, client, respond):
        respond("""<response><projects>
            <project><ixProject>4</ixProject><sProject>Website</sProject><ixPersonOwner>2</ixPersonOwner></project>
        </projects></response>""")
        projects = client.get_project_list()
        assert projects[4].name == "Website"
        assert projects[4].ix_person_owner == 2

    def test_projects_raw(self, client, respond):
        respond("<response><projects/></response>")
        assert client.get_project_list(raw=True).find("projects") is not None

    def test_listing_requires_login(self, http):
        c = FogBugzClient(ENDPOINT, http=http)
        with pytest.raises(UnauthenticatedError):
            c.get_project_list()
        http.get.assert_not_called()


class TestSearch:
    BODY = """<response><cases count="2">
        <case ixBug="1"><fOpen>true</fOpen><sTitle>First</sTitle><ixStatus>1</ixStatus></case>
        <case ixBug="2"><fOpen>false</fOpen><sTitle>Second</sTitle><ixStatus>2</ixStatus></case>
    </cases></response>"""

    def test_search_with_query(self, client, respond, last_query):
        respond(self.BODY)
        cases = client.search("login & crash")
        assert [(c.ix_bug, c.title, c.is_open) for c in cases] == [(1, "First", True), (2, "Second", False)]
        params = parse_qs(last_query())
        assert params["q"] == ["login & crash"]
        assert params["cols"] == [SEARCH_COLUMNS]

    def test_search_without_query(self, client, respond, last_query):
        respond("<response><cases/></response>")
        assert client.search() == []
        assert "q=" not in last_query()

    def test_set_filter(self, client, respond, last_query):
        respond("<response/>")
        tree = client.set_filter("304")
        assert tree.tag == "response"
        assert last_query().endswith("cmd=setCurrentFilter&sFilter=304")
