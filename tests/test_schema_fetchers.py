import pytest
import requests

from helpers import make_response

from mediagen.clients.fal import FalClient
from mediagen.clients.replicate import ReplicateClient
from mediagen.errors import ProviderError, RateLimitError, TransportError
from mediagen.schema.fetchers import fetch_fal_schema, fetch_replicate_schema, find_request_schema

REPLICATE_MODEL_URL = "https://api.replicate.com/v1/models/black-forest-labs/flux-schnell"
FAL_SEARCH_URL = "https://api.fal.ai/v1/models"

REPLICATE_MODEL = {
    "latest_version": {
        "id": "v1",
        "openapi_schema": {
            "components": {
                "schemas": {
                    "Input": {
                        "type": "object",
                        "required": ["prompt"],
                        "properties": {
                            "prompt": {"type": "string"},
                            "seed": {"type": "integer"},
                            "output_format": {"allOf": [{"$ref": "#/components/schemas/output_format"}]},
                            "aspect_ratio": {"allOf": [{"$ref": "#/components/schemas/aspect_ratio"}]},
                        },
                    },
                    "aspect_ratio": {"type": "string", "enum": ["1:1", "16:9"], "default": "1:1"},
                    "output_format": {"type": "string", "enum": ["webp", "png"]},
                },
            },
        },
    },
}

FAL_OPENAPI = {
    "paths": {
        "/fal-ai/flux/dev/requests/{request_id}": {
            "get": {"responses": {}},
        },
        "/fal-ai/flux/dev": {
            "post": {
                "requestBody": {
                    "content": {
                        "application/json": {"schema": {"$ref": "#/components/schemas/FluxDevInput"}},
                    },
                },
            },
        },
    },
    "components": {
        "schemas": {
            "FluxDevInput": {
                "properties": {
                    "prompt": {"type": "string"},
                    "image_size": {"allOf": [{"$ref": "#/components/schemas/ImageSize"}]},
                    "num_inference_steps": {"type": "integer", "minimum": 1, "maximum": 50},
                    "enable_safety_checker": {"type": "boolean"},
                },
                "required": ["prompt"],
            },
            "ImageSize": {"type": "string", "enum": ["square", "landscape_4_3"]},
        },
    },
}


def test_replicate_schema(session):
    session.add("GET", REPLICATE_MODEL_URL, make_response(json_body=REPLICATE_MODEL))
    schema = fetch_replicate_schema(ReplicateClient("r8_key", session=session), "black-forest-labs/flux-schnell")

    assert [p.name for p in schema.parameters] == ["seed", "aspect_ratio"]
    assert schema.parameters[1].enum == ["1:1", "16:9"]
    assert [i.name for i in schema.inputs] == ["prompt"]
    assert schema.inputs[0].required is True
    assert session.calls[0].headers["Authorization"] == "Bearer r8_key"


def test_replicate_missing_schema_is_empty(session):
    session.add("GET", REPLICATE_MODEL_URL, make_response(json_body={"latest_version": None}))
    schema = fetch_replicate_schema(ReplicateClient("key", session=session), "black-forest-labs/flux-schnell")
    assert schema.parameters == [] and schema.inputs == []


def test_replicate_http_error_raises(session):
    session.add("GET", REPLICATE_MODEL_URL, make_response(404, json_body={"detail": "Not found"}))
    with pytest.raises(ProviderError, match="Replicate API error: 404"):
        fetch_replicate_schema(ReplicateClient("key", session=session), "black-forest-labs/flux-schnell")


def test_replicate_rate_limit(session):
    session.add("GET", REPLICATE_MODEL_URL, make_response(429))
    with pytest.raises(RateLimitError):
        fetch_replicate_schema(ReplicateClient("key", session=session), "black-forest-labs/flux-schnell")


def test_replicate_network_failure_is_transport_error(session):
    session.add("GET", REPLICATE_MODEL_URL, requests.ConnectionError("boom"))
    with pytest.raises(TransportError):
        fetch_replicate_schema(ReplicateClient("key", session=session), "black-forest-labs/flux-schnell")


def test_find_request_schema_resolves_ref():
    schema = find_request_schema(FAL_OPENAPI)
    assert schema is FAL_OPENAPI["components"]["schemas"]["FluxDevInput"]


def test_find_request_schema_inline_properties():
    doc = {"paths": {"/x": {"post": {"requestBody": {"content": {
        "application/json": {"schema": {"properties": {"prompt": {}}}},
    }}}}}}
    assert find_request_schema(doc) == {"properties": {"prompt": {}}}


def test_find_request_schema_none():
    assert find_request_schema({"paths": {"/x": {"get": {}}}}) is None


def test_fal_schema(session):
    session.add("GET", FAL_SEARCH_URL, make_response(json_body={"models": [{"openapi": FAL_OPENAPI}]}))
    schema = fetch_fal_schema(FalClient("fal_key", session=session), "fal-ai/flux/dev")

    assert [p.name for p in schema.parameters] == ["num_inference_steps"]
    assert [i.name for i in schema.inputs] == ["prompt", "image_size"]
    assert schema.parameters[0].maximum == 50

    call = session.calls[0]
    assert call.params == {"endpoint_id": "fal-ai/flux/dev", "expand": "openapi-3.0"}
    assert call.headers["Authorization"] == "Key fal_key"


def test_fal_without_key_sends_no_auth(session):
    session.add("GET", FAL_SEARCH_URL, make_response(json_body={"models": []}))
    fetch_fal_schema(FalClient(None, session=session), "fal-ai/flux/dev")
    assert "Authorization" not in session.calls[0].headers


@pytest.mark.parametrize("response", [
    make_response(500, content=b"oops"),
    make_response(json_body={"models": []}),
    make_response(json_body={"models": [{"openapi": {"paths": {}}}]}),
    make_response(content=b"not json"),
])
def test_fal_unusable_documents_are_empty(session, response):
    session.add("GET", FAL_SEARCH_URL, response)
    schema = fetch_fal_schema(FalClient(None, session=session), "fal-ai/flux/dev")
    assert schema.parameters == [] and schema.inputs == []
