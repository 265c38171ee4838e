#!/usr/bin/env python3
"""
Test parsing of Gemini extraction output into transactions.

Covers fenced JSON, truncated responses and schema errors without calling Vertex AI.
"""
from __future__ import annotations
import json
from pathlib import Path
import sys

# Add project root to path
ROOT_DIR = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT_DIR))

import pytest

from ingestion.extractor_vertex import (
    ExtractionResponseError,
    _salvage_truncated_json,
    _unwrap_json_fence,
    build_contents,
    build_generation_config,
    make_extractor,
    parse_extraction_response,
)
from models.schema import UNCATEGORIZED, FileData

SAMPLE = {
    "transactions": [
        {"date": "2024-01-02", "description": " PAYROLL ACME ", "amount": 2500, "category": "Salary"},
        {"date": "2024-01-03", "description": "Blue Bottle", "amount": -6.75, "category": "Dining", "notes": "SF"},
        {"date": "2024-01-04", "description": "Transfer", "amount": -100, "category": ""},
    ]
}


def test_plain_json():
    records = parse_extraction_response(json.dumps(SAMPLE))

    assert [r.amount for r in records] == [2500, -6.75, -100]
    assert records[0].description == "PAYROLL ACME"
    assert records[0].notes == ""
    assert records[1].notes == "SF"
    assert records[2].category == UNCATEGORIZED


def test_fenced_json():
    payload = "```json\n" + json.dumps(SAMPLE) + "\n```"
    assert _unwrap_json_fence(payload) == json.dumps(SAMPLE)
    assert len(parse_extraction_response(payload)) == 3


@pytest.mark.parametrize("payload", [None, "", "   "])
def test_empty_response_means_no_transactions(payload):
    assert parse_extraction_response(payload) == []


def test_bare_list_is_accepted():
    records = parse_extraction_response(json.dumps(SAMPLE["transactions"]))
    assert len(records) == 3


def test_truncated_response_keeps_complete_records():
    full = json.dumps(SAMPLE)
    truncated = full[: full.rfind('"description": "Transfer"')]

    salvaged = _salvage_truncated_json(truncated)
    assert salvaged is not None
    assert len(json.loads(salvaged)["transactions"]) == 2

    records = parse_extraction_response(truncated)
    assert [r.description for r in records] == ["PAYROLL ACME", "Blue Bottle"]


def test_truncated_bare_list_keeps_complete_records():
    full = json.dumps(SAMPLE["transactions"][:2])
    truncated = full[: full.rfind('"description": "Blue Bottle"')]

    salvaged = _salvage_truncated_json(truncated)
    assert salvaged is not None
    assert len(json.loads(salvaged)) == 1

    records = parse_extraction_response(truncated)
    assert [r.description for r in records] == ["PAYROLL ACME"]


def test_object_without_transactions_key_raises():
    with pytest.raises(ExtractionResponseError):
        parse_extraction_response(json.dumps(SAMPLE["transactions"][0]))


def test_unsalvageable_response_raises():
    with pytest.raises(ExtractionResponseError):
        parse_extraction_response('{"transactions": [{"date": "2024')


def test_schema_mismatch_raises():
    bad = {"transactions": [{"date": "2024-01-01", "description": "x", "amount": "not-a-number"}]}
    with pytest.raises(ExtractionResponseError):
        parse_extraction_response(json.dumps(bad))


def test_make_extractor_sends_one_document(monkeypatch):
    seen = {}

    def fake_extract(files, **kwargs):
        seen["files"] = [f.name for f in files]
        seen["kwargs"] = kwargs
        return []

    monkeypatch.setattr("ingestion.extractor_vertex.extract_transactions", fake_extract)
    extract = make_extractor(gcp_project="proj", gcp_location="europe-west4", vertex_model="gemini-x")
    doc = FileData(name="jan.pdf", mime_type="application/pdf", content=b"%PDF", size_bytes=4)

    assert extract(doc) == []
    assert seen["files"] == ["jan.pdf"]
    assert seen["kwargs"] == {"gcp_project": "proj", "gcp_location": "europe-west4", "vertex_model": "gemini-x"}


def test_request_carries_each_document_and_prompt():
    docs = [
        FileData(name="p1.png", mime_type="image/png", content=b"\x89PNG", size_bytes=4),
        FileData(name="p2.pdf", mime_type="application/pdf", content=b"%PDF", size_bytes=4),
    ]
    contents = build_contents(docs)

    assert len(contents) == 3
    assert contents[0].inline_data.mime_type == "image/png"
    assert contents[1].inline_data.data == b"%PDF"
    assert "2 document parts" in contents[2]

    generation = build_generation_config()
    assert generation.response_mime_type == "application/json"
    assert "transactions" in generation.response_schema.properties


if __name__ == "__main__":
    sys.exit(pytest.main([__file__, "-v"]))
