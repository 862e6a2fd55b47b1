"""Schema lookup service - cached parameter/input discovery per model."""

import logging

import requests

from ..clients.fal import FalClient
from ..clients.replicate import ReplicateClient
from ..errors import MissingCredentialError, TransportError, ValidationError
from ..models.schema import ExtractedSchema
from ..schema.fetchers import fetch_fal_schema, fetch_replicate_schema
from ..schema.store import SchemaStore

logger = logging.getLogger(__name__)

SCHEMA_PROVIDERS = ("replicate", "fal")


class SchemaService:
    """Resolve a model's parameters and inputs, served from the SchemaStore within its TTL."""

    def __init__(self, store: SchemaStore, session: requests.Session | None = None):
        self.store = store
        self.session = session

    def lookup(
        self,
        provider: str | None,
        model_id: str,
        headers: dict[str, str],
        request_id: str = "",
    ) -> tuple[ExtractedSchema, bool]:
        """
        Get the extracted schema for a model.

        Args:
            provider: "replicate" or "fal"
            model_id: Decoded model id (e.g. "owner/name" or "fal-ai/flux/dev")
            headers: Lower-cased request headers carrying credentials
            request_id: Log tag

        Returns:
            (schema, cached)

        Raises:
            ValidationError: unknown provider
            MissingCredentialError: Replicate key missing
            ProviderError / RateLimitError: Replicate answered non-2xx
        """
        if provider not in SCHEMA_PROVIDERS:
            raise ValidationError("Invalid or missing provider. Use ?provider=replicate or ?provider=fal")

        key = (provider, model_id)
        entry = self.store.lookup(key)
        if entry:
            logger.info(
                f"[ModelSchema:{request_id}] Cache hit, returning {len(entry.parameters)} parameters, "
                f"{len(entry.inputs)} inputs"
            )
            return ExtractedSchema(parameters=entry.parameters, inputs=entry.inputs), True

        try:
            schema = self._fetch(provider, model_id, headers)
        except TransportError as e:
            # Not cached: the next lookup retries the fetch
            logger.warning(f"[ModelSchema:{request_id}] Schema fetch failed, returning empty schema: {e}")
            return ExtractedSchema(), False

        self.store.store(key, schema)
        logger.info(
            f"[ModelSchema:{request_id}] Returning {len(schema.parameters)} parameters, "
            f"{len(schema.inputs)} inputs"
        )
        return schema, False

    def _fetch(self, provider: str, model_id: str, headers: dict[str, str]) -> ExtractedSchema:
        if provider == "replicate":
            api_key = headers.get("x-replicate-key")
            if not api_key:
                raise MissingCredentialError("Replicate API key required. Include X-Replicate-Key header.")
            return fetch_replicate_schema(ReplicateClient(api_key, session=self.session), model_id)

        return fetch_fal_schema(FalClient(headers.get("x-fal-key"), session=self.session), model_id)
