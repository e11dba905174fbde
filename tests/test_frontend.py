"""Tests for the terminal frontend: loaders, actions, views and commands."""

from unittest.mock import Mock

import pytest

from event_manager_client import EventManagerAPI
from event_manager_frontend import (
    ActionData,
    EventManagerFrontend,
    Redirect,
    RouteError,
    delete_event_action,
    event_detail_loader,
    event_form_action,
    events_loader,
    render_error_page,
    render_event_form,
    render_events_list,
)

EVENT = {
    "id": "e1",
    "title": "Meetup",
    "description": "Talk",
    "date": "2024-05-01",
    "image": "http://x/y.png",
}

SERVER_ERROR = {"status_code": 500, "message": "Something went wrong.", "errors": {}}
VALIDATION_ERROR = {
    "status_code": 422,
    "message": "Adding the event failed due to validation errors.",
    "errors": {"title": "Invalid title.", "date": "Invalid date."},
}


@pytest.fixture
def api():
    return Mock(spec=EventManagerAPI)


def test_events_loader_returns_events(api):
    api.list_events.return_value = ([EVENT], None)
    assert events_loader(api) == [EVENT]


def test_events_loader_raises_route_error(api):
    api.list_events.return_value = ([], SERVER_ERROR)
    with pytest.raises(RouteError) as excinfo:
        events_loader(api)
    assert excinfo.value.status == 500
    assert excinfo.value.message == "Could not fetch events."


def test_event_detail_loader_raises_route_error(api):
    api.get_event.return_value = (None, SERVER_ERROR)
    with pytest.raises(RouteError, match="Could not fetch details for selected event."):
        event_detail_loader(api, "e1")


def test_form_action_post_redirects_to_list(api):
    api.create_event.return_value = (EVENT, None)
    form = {k: v for k, v in EVENT.items() if k != "id"}

    result = event_form_action(api, "post", form)

    assert result == Redirect("/events")
    api.create_event.assert_called_once_with(form)


def test_form_action_patch_updates_event(api):
    api.update_event.return_value = (EVENT, None)

    result = event_form_action(api, "PATCH", EVENT, event_id="e1")

    assert isinstance(result, Redirect)
    api.update_event.assert_called_once()
    assert api.update_event.call_args.args[0] == "e1"


def test_form_action_returns_validation_errors(api):
    api.create_event.return_value = (None, VALIDATION_ERROR)

    result = event_form_action(api, "POST", {"title": ""})

    assert result == ActionData(
        message="Adding the event failed due to validation errors.",
        errors={"title": "Invalid title.", "date": "Invalid date."},
    )


def test_form_action_other_failure_raises(api):
    api.update_event.return_value = (None, SERVER_ERROR)
    with pytest.raises(RouteError, match="Could not save event."):
        event_form_action(api, "PATCH", EVENT, event_id="e1")


def test_form_action_patch_requires_id(api):
    with pytest.raises(ValueError):
        event_form_action(api, "PATCH", EVENT)


def test_delete_action_asks_for_confirmation(api):
    confirm = Mock(return_value=False)

    assert delete_event_action(api, "e1", confirm) is None

    confirm.assert_called_once_with("Are you sure?")
    api.delete_event.assert_not_called()


def test_delete_action_confirmed(api):
    api.delete_event.return_value = (True, None)
    assert delete_event_action(api, "e1", lambda _: True) == Redirect("/events")
    api.delete_event.assert_called_once_with("e1")


def test_delete_action_failure(api):
    api.delete_event.return_value = (False, SERVER_ERROR)
    with pytest.raises(RouteError, match="Could not delete event."):
        delete_event_action(api, "e1", lambda _: True)


def test_render_events_list():
    text = render_events_list([EVENT])
    assert "[e1] Meetup (2024-05-01)" in text
    assert "no events" in render_events_list([])


def test_render_event_form_prefills_and_shows_errors():
    text = render_event_form(EVENT, ActionData("Failed.", {"title": "Invalid title."}))
    assert "Failed." in text
    assert "- Invalid title." in text
    assert "Title: Meetup" in text
    assert "Image: http://x/y.png" in text


@pytest.mark.parametrize(
    "status, expected",
    [
        (500, "An error occurred\nCould not fetch events."),
        (404, "Not found\nCould not find resource or page."),
        (None, "An error occurred\nSomething went wrong!"),
    ],
)
def test_render_error_page(status, expected):
    assert render_error_page(RouteError("Could not fetch events.", status=status)) == expected


def _frontend(api, answers):
    outputs = []
    answers = iter(answers)
    frontend = EventManagerFrontend(
        api, input_func=lambda prompt: next(answers), output=outputs.append
    )
    return frontend, outputs


def test_list_command(api):
    api.list_events.return_value = ([EVENT], None)
    frontend, outputs = _frontend(api, [])

    assert frontend.run(["list"]) == 0
    assert "Meetup" in outputs[-1]


def test_show_command_renders_event_above_list(api):
    other = {**EVENT, "id": "e2", "title": "Workshop"}
    api.get_event.return_value = (EVENT, None)
    api.list_events.return_value = ([EVENT, other], None)
    frontend, outputs = _frontend(api, [])

    assert frontend.run(["show", "e1"]) == 0

    assert len(outputs) == 2
    assert "Meetup" in outputs[0]
    assert "[e2] Workshop" in outputs[1]


def test_show_command_error_page(api):
    api.get_event.return_value = (None, SERVER_ERROR)
    frontend, outputs = _frontend(api, [])

    assert frontend.run(["show", "e1"]) == 1
    assert outputs[-1] == "An error occurred\nCould not fetch details for selected event."


def test_unknown_page_renders_not_found(api):
    frontend, outputs = _frontend(api, [])
    with pytest.raises(RouteError) as excinfo:
        frontend.navigate("/nowhere")
    assert excinfo.value.status == 404


def test_new_command_retries_after_validation_error(api):
    api.create_event.side_effect = [(None, VALIDATION_ERROR), (EVENT, None)]
    api.list_events.return_value = ([EVENT], None)
    answers = [
        "", "http://x/y.png", "bad", "Talk",  # first attempt: blank title, bad date
        "y",                                  # submit again
        "Meetup", "", "2024-05-01", "",       # second attempt keeps image and description
    ]
    frontend, outputs = _frontend(api, answers)

    assert frontend.run(["new"]) == 0

    assert sum("- Invalid title." in out for out in outputs) == 1
    assert len(outputs) == 3
    second_form = api.create_event.call_args_list[1].args[0]
    assert second_form == {
        "title": "Meetup",
        "image": "http://x/y.png",
        "date": "2024-05-01",
        "description": "Talk",
    }
    assert "[e1] Meetup" in outputs[-1]


def test_new_command_gives_up_after_validation_error(api):
    api.create_event.return_value = (None, VALIDATION_ERROR)
    frontend, outputs = _frontend(api, ["", "", "", "", "n"])

    assert frontend.run(["new"]) == 0
    api.create_event.assert_called_once()
    api.list_events.assert_not_called()


def test_edit_command_prefills_from_loaded_event(api):
    api.get_event.return_value = (EVENT, None)
    api.update_event.return_value = (EVENT, None)
    api.list_events.return_value = ([EVENT], None)
    frontend, outputs = _frontend(api, ["Renamed", "", "", ""])

    assert frontend.run(["edit", "e1"]) == 0

    event_id, form = api.update_event.call_args.args
    assert event_id == "e1"
    assert form == {
        "title": "Renamed",
        "image": "http://x/y.png",
        "date": "2024-05-01",
        "description": "Talk",
    }
    assert "Title: Meetup" in outputs[0]


def test_delete_command_declined(api):
    frontend, outputs = _frontend(api, ["n"])

    assert frontend.run(["delete", "e1"]) == 0
    api.delete_event.assert_not_called()
    assert outputs == []


def test_delete_command_confirmed(api):
    api.delete_event.return_value = (True, None)
    api.list_events.return_value = ([], None)
    frontend, outputs = _frontend(api, ["yes"])

    assert frontend.run(["delete", "e1"]) == 0
    api.delete_event.assert_called_once_with("e1")
    assert "no events" in outputs[-1]
