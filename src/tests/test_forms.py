import pytest

from exceptions import MutationError
from pages.forms import EntityForm
from storage.drafts import DraftStore, draft_key
from storage.kv import MemoryStore


@pytest.fixture
def drafts():
    return DraftStore(MemoryStore(), draft_key("location"))


def _created(make_response):
    def handler(method, url, json=None, **kw):
        if method == "POST":
            return make_response(status=201, body={"id": 8, "name": next(iter(json.values()))})
        return make_response(body=[{"id": 1, "name": "Depot"}])

    return handler


def test_draft_survives_a_new_form(client_for, make_response, drafts):
    client, _ = client_for("location", _created(make_response))
    EntityForm(client, drafts).set_field("name", "Half-typed")
    restored = EntityForm(client, drafts).restore()
    assert restored == {"name": "Half-typed"}


def test_submit_creates_and_clears_draft(client_for, make_response, drafts):
    client, transport = client_for("location", _created(make_response))
    form = EntityForm(client, drafts)
    form.set_field("name", "  Annex  ")
    assert form.submit() == {"id": "8", "name": "Annex"}
    assert transport.calls[-1][2]["json"] == {"Name": "Annex"}
    assert drafts.load() == {}


def test_submit_with_id_updates(client_for, make_response, drafts):
    client, transport = client_for("location", lambda method, url, **kw: make_response(status=204))
    form = EntityForm(client, drafts)
    form.set_field("name", "Renamed")
    assert form.submit("4") is None
    method, url, kwargs = transport.calls[-1]
    assert method == "PUT" and url.endswith("/location/4")


@pytest.mark.parametrize("value", ["", "A", "x" * 101])
def test_length_validation(client_for, make_response, value):
    client, transport = client_for("location", _created(make_response))
    form = EntityForm(client)
    form.set_field("name", value)
    assert form.validate()
    with pytest.raises(ValueError):
        form.submit()
    assert transport.calls == []


def test_duplicate_blocks_submit(client_for, make_response, drafts):
    client, _ = client_for("location", _created(make_response))
    form = EntityForm(client, drafts)
    form.set_field("name", "depot")
    assert form.check_duplicate() == {"id": "1", "name": "Depot"}
    assert form.validate() == ['A location named "Depot" already exists.']
    form.set_field("name", "Depot West")
    assert form.validate() == []


def test_duplicate_check_excludes_record_being_edited(client_for, make_response):
    client, _ = client_for("location", _created(make_response))
    form = EntityForm(client)
    form.set_field("name", "Depot")
    assert form.check_duplicate(exclude_id="1") is None


def test_rejected_create_keeps_draft(client_for, make_response, drafts):
    client, _ = client_for(
        "supplier", lambda method, url, **kw: make_response(status=400, body={"message": "Email required"})
    )
    form = EntityForm(client, drafts, unique_field=None)
    form.set_field("name", "Acme")
    with pytest.raises(MutationError, match="Email required"):
        form.submit()
    assert drafts.load() == {"name": "Acme"}


def test_reset(client_for, make_response, drafts):
    client, _ = client_for("location", _created(make_response))
    form = EntityForm(client, drafts)
    form.set_field("name", "Yard")
    form.reset()
    assert form.fields == {}
    assert drafts.load() == {}
