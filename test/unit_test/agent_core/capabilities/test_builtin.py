from __future__ import annotations

import pytest
from pydantic import ValidationError

from superai.agent_core.capabilities.builtin import (
    API_FETCH,
    FILE_READ,
    FILE_WRITE,
    TERMINAL_RUN,
    WEB_SEARCH,
    WORKFLOW_RUN,
    ApiFetchInput,
    WebSearchInput,
)


@pytest.mark.parametrize(
    "descriptor,required",
    [
        (FILE_READ, ["path"]),
        (FILE_WRITE, ["path", "content"]),
        (TERMINAL_RUN, ["command"]),
        (API_FETCH, ["url"]),
        (WORKFLOW_RUN, ["workflow_id"]),
        (WEB_SEARCH, ["query"]),
    ],
)
def test_required_arguments_are_the_fields_without_defaults(descriptor, required) -> None:
    assert descriptor.required_arguments() == required


def test_required_arguments_are_a_subset_of_properties() -> None:
    schema = FILE_WRITE.parameters_json_schema()
    assert set(FILE_WRITE.required_arguments()) <= set(schema["properties"])


def test_to_dict_exposes_name_description_and_parameters() -> None:
    data = API_FETCH.to_dict()

    assert data["name"] == "api_fetch"
    assert data["description"] == API_FETCH.description
    assert data["parameters"]["properties"]["method"]["default"] == "GET"


def test_descriptor_is_immutable() -> None:
    with pytest.raises(ValidationError):
        FILE_READ.name = "other"  # type: ignore[misc]


def test_api_fetch_input_rejects_unknown_method() -> None:
    with pytest.raises(ValidationError):
        ApiFetchInput(url="https://mock.api/x", method="TRACE")


def test_web_search_input_bounds_max_results() -> None:
    assert WebSearchInput(query="q").max_results == 5
    with pytest.raises(ValidationError):
        WebSearchInput(query="q", max_results=0)
