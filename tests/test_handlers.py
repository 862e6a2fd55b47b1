import base64
import importlib
import json
import logging
from types import SimpleNamespace

import pytest

from helpers import FakeClock, make_response

import mediagen.handlers
from mediagen.errors import ModelRefusalError, RateLimitError
from mediagen.handlers import generate, models
from mediagen.handlers.http import get_headers, json_response, parse_body
from mediagen.models.generation import MediaOutput
from mediagen.schema.store import SchemaStore
from mediagen.services.schema import SchemaService

FAL_SEARCH_URL = "https://api.fal.ai/v1/models"


def body_of(response):
    return json.loads(response["body"])


class StubGenerationService:
    def __init__(self, output=None, error=None):
        self.output = output
        self.error = error
        self.calls = []

    def generate(self, request, headers, request_id=""):
        self.calls.append(SimpleNamespace(request=request, headers=headers))
        if self.error:
            raise self.error
        return self.output


# http helpers

def test_headers_are_lower_cased():
    assert get_headers({"headers": {"X-Fal-Key": "k", "X-Empty": None}}) == {"x-fal-key": "k"}
    assert get_headers({}) == {}


def test_parse_base64_body():
    event = {"body": base64.b64encode(b'{"prompt": "x"}').decode(), "isBase64Encoded": True}
    assert parse_body(event) == {"prompt": "x"}


def test_content_length_counts_bytes():
    response = json_response(200, {"prompt": "café"})
    assert response["headers"]["Content-Length"] == str(len(response["body"].encode("utf-8")))
    assert response["headers"]["Content-Type"] == "application/json"


# GET /models/{modelId}

@pytest.fixture
def schema_service(session):
    return SchemaService(SchemaStore(clock=FakeClock()), session=session)


def test_model_schema(session, schema_service):
    session.add("GET", FAL_SEARCH_URL, make_response(json_body={"models": [{"openapi": {"paths": {"/m": {"post": {
        "requestBody": {"content": {"application/json": {"schema": {
            "properties": {
                "prompt": {"type": "string", "description": "Text prompt"},
                "seed": {"type": "integer"},
            },
            "required": ["prompt"],
        }}}},
    }}}}}]}))
    event = {
        "pathParameters": {"modelId": "fal-ai%2Fflux%2Fdev"},
        "queryStringParameters": {"provider": "fal"},
        "headers": {"X-Fal-Key": "fk"},
    }

    response = models.handler(event, None, service=schema_service)

    assert response["statusCode"] == 200
    assert body_of(response) == {
        "success": True,
        "parameters": [{"name": "seed", "type": "integer", "required": False}],
        "inputs": [{"name": "prompt", "type": "text", "required": True, "label": "Prompt",
                    "description": "Text prompt"}],
        "cached": False,
    }
    assert session.calls[0].params["endpoint_id"] == "fal-ai/flux/dev"

    assert body_of(models.handler(event, None, service=schema_service))["cached"] is True


def test_model_id_from_path(session, schema_service):
    session.add("GET", FAL_SEARCH_URL, make_response(json_body={"models": []}))
    event = {"path": "/models/fal-ai/flux/dev", "queryStringParameters": {"provider": "fal"}}

    response = models.handler(event, None, service=schema_service)

    assert response["statusCode"] == 200
    assert session.calls[0].params["endpoint_id"] == "fal-ai/flux/dev"


@pytest.mark.parametrize("event, status", [
    ({"pathParameters": {"modelId": "owner/model"}}, 400),
    ({"pathParameters": {"modelId": "owner/model"}, "queryStringParameters": {"provider": "midjourney"}}, 400),
    ({"pathParameters": {"modelId": "owner/model"}, "queryStringParameters": {"provider": "replicate"}}, 401),
    ({"queryStringParameters": {"provider": "fal"}}, 400),
])
def test_model_schema_errors(schema_service, event, status):
    response = models.handler(event, None, service=schema_service)
    assert response["statusCode"] == status
    assert body_of(response)["success"] is False


def test_replicate_upstream_error(session, schema_service):
    session.add("GET", "https://api.replicate.com/v1/models/owner/model", make_response(500))
    event = {
        "pathParameters": {"modelId": "owner/model"},
        "queryStringParameters": {"provider": "replicate"},
        "headers": {"X-Replicate-Key": "r8"},
    }

    response = models.handler(event, None, service=schema_service)

    assert response["statusCode"] == 500
    assert body_of(response)["error"] == "Replicate API error: 500"


def test_union_typed_schema_is_served(session, schema_service):
    session.add("GET", "https://api.replicate.com/v1/models/owner/model", make_response(json_body={
        "latest_version": {"openapi_schema": {"components": {"schemas": {"Input": {"properties": {
            "seed": {"type": ["integer", "null"]},
        }}}}}},
    }))
    event = {
        "pathParameters": {"modelId": "owner/model"},
        "queryStringParameters": {"provider": "replicate"},
        "headers": {"X-Replicate-Key": "r8"},
    }

    response = models.handler(event, None, service=schema_service)

    assert response["statusCode"] == 200
    assert body_of(response)["parameters"] == [{"name": "seed", "type": "string", "required": False}]


# POST /generate

def test_generate_image():
    service = StubGenerationService(MediaOutput(type="image", data="data:image/png;base64,AAAA"))
    event = {
        "body": json.dumps({
            "prompt": "a fox",
            "selectedModel": {"provider": "fal", "modelId": "fal-ai/flux/dev", "displayName": "FLUX"},
        }),
        "headers": {"X-Fal-API-Key": "fk"},
    }

    response = generate.handler(event, None, service=service)

    assert response["statusCode"] == 200
    assert body_of(response) == {"success": True, "image": "data:image/png;base64,AAAA", "contentType": "image"}
    assert response["headers"]["Content-Length"] == str(len(response["body"].encode("utf-8")))
    call = service.calls[0]
    assert call.request.provider == "fal"
    assert call.headers == {"x-fal-api-key": "fk"}


def test_generate_video_url():
    url = "https://cdn.example.com/v.mp4"
    service = StubGenerationService(MediaOutput(type="video", data=url, url=url))
    response = generate.handler({"body": '{"prompt": "x"}'}, None, service=service)
    assert body_of(response) == {"success": True, "videoUrl": url, "contentType": "video"}


def test_generate_invalid_json():
    response = generate.handler({"body": "{not json"}, None, service=StubGenerationService())
    assert response["statusCode"] == 400
    assert body_of(response)["error"].startswith("Invalid JSON body")


@pytest.mark.parametrize("body, message", [
    ({}, "Prompt or image input is required"),
    ({"prompt": "x", "selectedModel": "fal"}, "selectedModel must be an object"),
    ({"prompt": "x", "parameters": [1, 2]}, "parameters must be an object"),
    ({"prompt": "x", "dynamicInputs": ["image_url"]}, "dynamicInputs must be an object"),
    ({"prompt": "x", "images": "data:image/png;base64,AAAA"}, "images must be a list"),
    ({"prompt": "x", "images": [1]}, "images must be a list of strings"),
    ({"prompt": ["x"]}, "prompt must be a string"),
    ({"prompt": "x", "selectedModel": {"provider": "fal", "modelId": 7}},
     "selectedModel.modelId and selectedModel.displayName must be strings"),
    ({"prompt": "x", "selectedModel": {"provider": "midjourney", "modelId": "v6"}},
     "Unknown provider: midjourney. Use one of: fal, gemini, replicate"),
])
def test_generate_validation_error(body, message):
    response = generate.handler({"body": json.dumps(body)}, None)
    assert response["statusCode"] == 400
    assert body_of(response) == {"success": False, "error": message}


@pytest.mark.parametrize("error, status, message", [
    (RateLimitError("FLUX: Rate limit exceeded. Try again in a moment."), 429,
     "FLUX: Rate limit exceeded. Try again in a moment."),
    (ModelRefusalError("Model returned text instead of image: no"), 500,
     "Model returned text instead of image: no"),
    (RuntimeError("upstream said 429 Too Many Requests"), 429,
     "Rate limit reached. Please wait and try again."),
    (RuntimeError("kaboom"), 500, "kaboom"),
])
def test_generate_errors(error, status, message):
    response = generate.handler({"body": '{"prompt": "x"}'}, None, service=StubGenerationService(error=error))
    assert response["statusCode"] == status
    assert body_of(response) == {"success": False, "error": message}


# logging setup

def test_logging_is_configured_on_first_invocation_only(monkeypatch):
    calls = []
    monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: calls.append(kwargs))
    package_logger = logging.getLogger("mediagen")
    monkeypatch.setattr(package_logger, "level", package_logger.level)

    importlib.reload(mediagen.handlers)
    importlib.reload(generate)
    importlib.reload(models)
    assert calls == []

    service = StubGenerationService(MediaOutput(type="image", data="data:image/png;base64,AAAA"))
    generate.handler({"body": '{"prompt": "x"}'}, None, service=service)
    generate.handler({"body": '{"prompt": "x"}'}, None, service=service)
    assert len(calls) == 1
    assert calls[0]["level"] == mediagen.handlers.LOG_LEVEL
