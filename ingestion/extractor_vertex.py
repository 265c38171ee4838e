from __future__ import annotations
import json
import time
from typing import Callable, List, Optional, Sequence

from pydantic import ValidationError
from core.config import config
from core.logger import get_logger
from models.schema import ExtractedTransaction, ExtractionResponse, FileData

# Gemini on Vertex AI
from google import genai
from google.genai import types

log = get_logger("extractor_vertex")

# Configuration constants
EMPTY_RESPONSE = '{"transactions": []}'

SYSTEM_INSTRUCTIONS = """
You are a professional financial data extraction specialist.
You will be provided with one or more files (images or PDFs) representing pages of a bank statement.

CRITICAL TASK:
1. Analyze ALL provided parts as a single continuous financial document.
2. Extract EVERY single transaction into a unified chronological list.
3. Reconcile transactions: if a table is split across two pages/images, merge the rows without duplication.

EXTRACTION RULES:
- Date Format: YYYY-MM-DD. (Assume the statement year if only month/day is provided.)
- Amount: MUST be a number. Positive for deposits/credits. Negative for withdrawals/debits.
- Category: Intelligent auto-detection (e.g., "Dining", "Groceries", "Utilities", "Salary", "Shopping").
- Description: Keep the original merchant or transaction text.
- Notes: Extract any secondary info like location or specific reference IDs.

SKIP:
- Summary tables (Opening/Closing balance).
- Page headers/footers.
- Marketing text or interest rate disclosures.
"""

PROMPT_TEMPLATE = (
    "I have uploaded {count} document parts. "
    "Please extract the complete transaction history from across all these pages."
)

RESPONSE_SCHEMA = types.Schema(
    type=types.Type.OBJECT,
    properties={
        "transactions": types.Schema(
            type=types.Type.ARRAY,
            items=types.Schema(
                type=types.Type.OBJECT,
                properties={
                    "date": types.Schema(type=types.Type.STRING),
                    "description": types.Schema(type=types.Type.STRING),
                    "amount": types.Schema(type=types.Type.NUMBER),
                    "category": types.Schema(type=types.Type.STRING),
                    "notes": types.Schema(type=types.Type.STRING),
                },
                required=["date", "description", "amount", "category"],
            ),
        )
    },
)


class ExtractionResponseError(ValueError):
    """Model output could not be turned into a list of transactions."""


def _init_client(project_id: Optional[str], location: str) -> genai.Client:
    """
    Create a Gen AI client bound to Vertex AI.

    Raises:
        Exception: If client initialization fails (e.g. missing credentials)
    """
    log.debug(f"Initializing Vertex AI client: project={project_id} location={location}")

    try:
        client = genai.Client(vertexai=True, project=project_id, location=location)
        log.info(f"Vertex AI client initialized: project={project_id} location={location}")
        return client

    except Exception as e:
        log.error(
            f"Failed to initialize Vertex AI client: project={project_id} location={location} "
            f"error={type(e).__name__}: {e}"
        )
        raise


def build_contents(files: Sequence[FileData]) -> list:
    """One inline data part per document, followed by the text prompt."""
    parts: list = [types.Part.from_bytes(data=f.content, mime_type=f.mime_type) for f in files]
    parts.append(PROMPT_TEMPLATE.format(count=len(files)))
    return parts


def build_generation_config() -> types.GenerateContentConfig:
    return types.GenerateContentConfig(
        system_instruction=SYSTEM_INSTRUCTIONS,
        temperature=config.extraction_temperature,
        max_output_tokens=config.max_output_tokens,
        response_mime_type="application/json",
        response_schema=RESPONSE_SCHEMA,
    )


def _invoke_llm(client: genai.Client, model_name: str, files: Sequence[FileData]) -> str:
    """
    Send the documents to the model in a single request.

    No retry: a failed call surfaces straight to the caller.
    """
    total_bytes = sum(f.size_bytes for f in files)
    log.debug(f"Invoking Vertex AI LLM: model={model_name} parts={len(files)} bytes={total_bytes}")

    start_time = time.time()
    resp = client.models.generate_content(
        model=model_name,
        contents=build_contents(files),
        config=build_generation_config(),
    )
    elapsed = time.time() - start_time

    response_text = (resp.text or "").strip()
    log.info(
        f"LLM generation successful: response_length={len(response_text)} chars "
        f"elapsed={elapsed:.2f}s"
    )
    log.debug(f"LLM response preview: {response_text[:200]}...")
    return response_text


def _unwrap_json_fence(payload: str) -> str:
    """
    Remove markdown code fences and language tags from JSON response.

    LLMs sometimes wrap JSON in markdown code blocks like:
    ```json
    {...}
    ```
    """
    p = payload.strip()

    if p.startswith("```"):
        log.debug("Removing markdown code fences from LLM response")
        lines = p.splitlines()
        if lines and lines[0].startswith("```"):
            lines = lines[1:]
        if lines and lines[-1].startswith("```"):
            lines = lines[:-1]

        p = "\n".join(lines).strip()

        if p.lower().startswith("json"):
            p = p[4:].strip()

    return p


def _salvage_truncated_json(payload: str) -> Optional[str]:
    """
    Attempt to salvage truncated JSON by cutting the transactions array back to
    its last complete record.

    Handles both the `{"transactions": [...]}` envelope and a bare list of
    records. Useful when the response is cut off by the output token limit.
    Tracks brace/bracket nesting while respecting string boundaries.

    Returns:
        Valid JSON string if salvageable, None otherwise
    """
    s = payload
    starts = [i for i in (s.find("{"), s.find("[")) if i != -1]
    if not starts:
        log.debug("No opening brace or bracket found, cannot salvage")
        return None
    start = min(starts)

    # Records close at depth 1 in a bare list, depth 2 inside the envelope
    if s[start] == "[":
        record_depth, closer = 1, "]"
    else:
        record_depth, closer = 2, "]}"

    depth = 0
    last_record_end = -1
    in_string = False
    escape = False

    for i, ch in enumerate(s[start:], start):
        if in_string:
            if escape:
                escape = False
            elif ch == "\\":
                escape = True
            elif ch == '"':
                in_string = False
            continue

        if ch == '"':
            in_string = True
        elif ch in "{[":
            depth += 1
        elif ch in "}]":
            depth -= 1
            if depth == 0:
                # Whole document balanced, nothing to salvage beyond it
                candidate = s[start:i + 1]
                return candidate if _is_json(candidate) else None
            if ch == "}" and depth == record_depth:
                last_record_end = i

    if last_record_end == -1:
        return None

    candidate = s[start:last_record_end + 1] + closer
    if _is_json(candidate):
        log.info(f"Salvaged truncated JSON: length={len(candidate)} chars")
        return candidate
    return None


def _is_json(candidate: str) -> bool:
    try:
        json.loads(candidate)
        return True
    except json.JSONDecodeError:
        return False


def parse_extraction_response(payload: Optional[str]) -> List[ExtractedTransaction]:
    """
    Clean, parse, and validate model output into extracted transactions.

    An empty response is treated as a statement with no transactions.

    Raises:
        ExtractionResponseError: If the JSON is malformed beyond salvage or
            does not match the transaction schema
    """
    cleaned = _unwrap_json_fence(payload or "") or EMPTY_RESPONSE

    try:
        data = json.loads(cleaned)
    except json.JSONDecodeError as e:
        log.warning(f"JSON decode error at position {e.pos}: {e.msg} | payload_preview={cleaned[:200]}...")
        salvaged = _salvage_truncated_json(cleaned)
        if not salvaged:
            raise ExtractionResponseError(f"Model returned malformed JSON: {e.msg}") from e
        data = json.loads(salvaged)

    # Some responses come back as a bare list of records
    if isinstance(data, list):
        data = {"transactions": data}
    elif isinstance(data, dict) and "transactions" not in data:
        log.error(f"Model output has no transactions key: keys={sorted(data)}")
        raise ExtractionResponseError("Model output is missing the transactions list")

    try:
        parsed = ExtractionResponse.model_validate(data)
    except ValidationError as e:
        log.error(f"Pydantic validation failed: {len(e.errors())} errors | errors={e.json()}")
        raise ExtractionResponseError(f"Model output did not match the transaction schema ({len(e.errors())} errors)") from e

    return parsed.transactions


def extract_transactions(
    files: Sequence[FileData],
    *,
    gcp_project: Optional[str] = None,
    gcp_location: Optional[str] = None,
    vertex_model: Optional[str] = None,
) -> List[ExtractedTransaction]:
    """
    Extract the transactions of one statement made of one or more document parts.

    Args:
        files: Document parts (PDFs or images) of a single statement
        gcp_project: GCP project ID for Vertex AI
        gcp_location: GCP region (e.g., 'us-central1')
        vertex_model: Vertex AI model name

    Returns:
        Extracted transactions in the order the model returned them

    Raises:
        ExtractionResponseError: If model output cannot be parsed
        Exception: Any transport or model error, unchanged
    """
    gcp_project = gcp_project or config.gcp_project_id
    gcp_location = gcp_location or config.gcp_location
    vertex_model = vertex_model or config.vertex_model
    names = ", ".join(f.name for f in files)

    start_time = time.time()
    log.info(f"Starting transaction extraction: files=[{names}] model={vertex_model}")

    try:
        client = _init_client(gcp_project, gcp_location)
        raw = _invoke_llm(client, vertex_model, files)
        records = parse_extraction_response(raw)
    except Exception as e:
        elapsed = time.time() - start_time
        log.error(
            f"Transaction extraction failed: files=[{names}] "
            f"error={type(e).__name__}: {e} elapsed={elapsed:.2f}s"
        )
        raise

    elapsed = time.time() - start_time
    log.info(f"Transaction extraction complete: files=[{names}] transactions={len(records)} elapsed={elapsed:.2f}s")
    return records


def make_extractor(
    gcp_project: Optional[str] = None,
    gcp_location: Optional[str] = None,
    vertex_model: Optional[str] = None,
) -> Callable[[FileData], List[ExtractedTransaction]]:
    """Bind Vertex settings into the one-document callable the batch orchestrator expects."""
    def _extract(file: FileData) -> List[ExtractedTransaction]:
        return extract_transactions(
            [file],
            gcp_project=gcp_project,
            gcp_location=gcp_location,
            vertex_model=vertex_model,
        )
    return _extract
