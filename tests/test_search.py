from datetime import date

from tests.conftest import ticket_payload


async def test_list_without_filters_returns_all(store):
    assert len(await store.list_tickets()) == 2


async def test_list_text_search_is_case_insensitive(store):
    results = await store.list_tickets({"search": "LOGIN"})
    assert [t.id for t in results] == ["1"]


async def test_list_does_not_match_message(store):
    results = await store.list_tickets({"search": "invoice"})
    assert results == []


async def test_search_matches_message(store):
    results = await store.search_tickets({"search": "invoice"})
    assert [t.id for t in results] == ["2"]


async def test_search_without_criteria_is_empty(store):
    assert await store.search_tickets() == []
    assert await store.search_tickets({"search": "   "}) == []


async def test_search_by_date_filed(store):
    results = await store.search_tickets({"date_filed": date(2024, 1, 16)})
    assert [t.id for t in results] == ["2"]


async def test_filters_combine(admin_store):
    await admin_store.create_ticket(ticket_payload(priority="urgent", department_id="2"))

    results = await admin_store.list_tickets({"department_id": "2", "priority": "urgent"})
    assert [t.subject for t in results] == ["Printer jammed"]

    results = await admin_store.list_tickets({"status": "in-progress"})
    assert [t.id for t in results] == ["2"]


async def test_visible_only_scopes_to_department(store):
    await store.login("john@company.com", "password")

    results = await store.list_tickets(visible_only=True)
    assert [t.id for t in results] == ["1"]
    assert await store.search_tickets({"search": "invoice"}, visible_only=True) == []
