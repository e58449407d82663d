"""
Response parser: JSON extraction from noisy LLM output.

LLMs often wrap the requested JSON object in commentary ("Here you go: {...}
thanks") or code fences. The parser cuts out the outermost ``{...}`` span
on a best-effort basis, decodes it and cleans every string field.
"""

import json
import structlog
from pydantic import ValidationError as PydanticValidationError

from job_tracker.llm.text_utils import clean_text
from job_tracker.models.application_models import JobDetailsPayload
from job_tracker.monitoring.metrics import response_parse_failures_total
from .exceptions import JSONParseError, SchemaValidationError

logger = structlog.get_logger(__name__)


def extract_json(text: str) -> str:
    """
    Return the span from the first ``{`` to the last ``}`` of ``text``.

    When either brace is missing, or the last ``}`` does not come after the
    first ``{``, the whole text is returned unchanged and left for the
    decoder to reject.

    Examples:
        >>> extract_json('Sure: {"a": 1} done')
        '{"a": 1}'
        >>> extract_json('no json here')
        'no json here'
    """
    start = text.find("{")
    if start == -1:
        return text

    end = text.rfind("}")
    if end == -1 or end <= start:
        return text

    return text[start:end + 1]


class ResponseParser:
    """
    Decode the detail-extraction answer into a JobDetailsPayload.

    Raises JSONParseError on undecodable text and SchemaValidationError
    when a field has the wrong type.
    """

    def parse(self, content: str) -> JobDetailsPayload:
        """
        Parse LLM response content.

        Args:
            content: Raw response text, possibly surrounding a JSON object

        Returns:
            JobDetailsPayload with cleaned string fields

        Raises:
            JSONParseError: If no JSON object can be decoded
            SchemaValidationError: If a field is not a string
        """
        candidate = extract_json(content)

        try:
            parsed = json.loads(candidate)
        except json.JSONDecodeError as e:
            response_parse_failures_total.labels(error_type="json_decode_error").inc()
            raise JSONParseError(
                f"Failed to parse LLM response as JSON: {e.msg}",
                raw_content=content,
                parse_error=f"{e.msg} at line {e.lineno} col {e.colno}"
            ) from e

        if not isinstance(parsed, dict):
            response_parse_failures_total.labels(error_type="not_json_object").inc()
            raise JSONParseError(
                f"LLM response is not a JSON object (got {type(parsed).__name__})",
                raw_content=content,
                parse_error=f"Expected dict, got {type(parsed).__name__}"
            )

        try:
            payload = JobDetailsPayload.model_validate(parsed)
        except PydanticValidationError as e:
            response_parse_failures_total.labels(error_type="schema_error").inc()
            raise SchemaValidationError(
                "LLM response fields have unexpected types",
                validation_errors=[err["msg"] for err in e.errors()],
                raw_content=content,
            ) from e

        cleaned = JobDetailsPayload(
            company=clean_text(payload.company),
            position=clean_text(payload.position),
            status=clean_text(payload.status),
            location=clean_text(payload.location),
            description=clean_text(payload.description),
        )
        logger.debug("Parsed job details", company=cleaned.company, status=cleaned.status)
        return cleaned
