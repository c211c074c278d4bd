"""
Shared pytest fixtures for ContractGuard tests.

Provides model response mocks, sample contracts and analyses, a minimal PDF
builder, and a TestClient wired to fake settings.
"""

import json
from typing import List

import pytest
from unittest.mock import MagicMock
from fastapi.testclient import TestClient

from contractguard.config import Settings
from contractguard.main import app
from contractguard.services.api_resilience import model_breaker
from contractguard.services.lead_store import InMemoryLeadStore
from contractguard.utils.dependencies import get_lead_store, get_settings


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "integration: marks tests as integration tests")
    config.addinivalue_line("markers", "unit: marks tests as unit tests")


@pytest.fixture(autouse=True)
def reset_model_breaker():
    """Keep breaker failures from leaking between tests."""
    model_breaker.close()
    yield
    model_breaker.close()


def make_model_response(text):
    """Gemini-like response whose first candidate carries ``text``."""
    part = MagicMock()
    part.text = text

    candidate = MagicMock()
    candidate.content.parts = [part]

    response = MagicMock()
    response.candidates = [candidate]
    return response


def make_empty_model_response():
    response = MagicMock()
    response.candidates = []
    return response


def make_model(response=None, side_effect=None):
    """Stand-in for ``genai.GenerativeModel`` with a canned generate_content."""
    model = MagicMock()
    model.generate_content = MagicMock(return_value=response, side_effect=side_effect)
    return model


def build_pdf(pages: List[List[str]]) -> bytes:
    """
    Build a minimal PDF with one Helvetica text line per entry.

    Args:
        pages: For each page, the lines of text drawn top to bottom
    """
    objects = {
        1: b"<< /Type /Catalog /Pages 2 0 R >>",
        3: b"<< /Type /Font /Subtype /Type1 /BaseFont /Helvetica >>",
    }
    page_ids = []
    next_id = 4

    for lines in pages:
        page_id, content_id = next_id, next_id + 1
        next_id += 2

        commands = ["BT", "/F1 12 Tf"]
        y = 720
        for line in lines:
            commands.append(f"1 0 0 1 72 {y} Tm ({line}) Tj")
            y -= 24
        commands.append("ET")
        stream = "\n".join(commands).encode("latin-1")

        objects[content_id] = (
            b"<< /Length " + str(len(stream)).encode() + b" >>\nstream\n"
            + stream + b"\nendstream"
        )
        objects[page_id] = (
            "<< /Type /Page /Parent 2 0 R /MediaBox [0 0 612 792] "
            "/Resources << /Font << /F1 3 0 R >> >> "
            f"/Contents {content_id} 0 R >>"
        ).encode()
        page_ids.append(page_id)

    kids = " ".join(f"{page_id} 0 R" for page_id in page_ids)
    objects[2] = f"<< /Type /Pages /Kids [{kids}] /Count {len(page_ids)} >>".encode()

    out = bytearray(b"%PDF-1.4\n")
    offsets = {}
    for obj_id in range(1, next_id):
        offsets[obj_id] = len(out)
        out += f"{obj_id} 0 obj\n".encode() + objects[obj_id] + b"\nendobj\n"

    xref_position = len(out)
    out += f"xref\n0 {next_id}\n".encode()
    out += b"0000000000 65535 f \n"
    for obj_id in range(1, next_id):
        out += f"{offsets[obj_id]:010d} 00000 n \n".encode()
    out += (
        f"trailer\n<< /Size {next_id} /Root 1 0 R >>\n"
        f"startxref\n{xref_position}\n%%EOF\n"
    ).encode()
    return bytes(out)


@pytest.fixture
def sample_contract_text():
    """Sample creator agreement for testing."""
    return """
BRAND PARTNERSHIP AGREEMENT

This Agreement is made between Glow Cosmetics LLC ("Brand") and Jamie Rivera
("Creator") effective March 1, 2025.

1. DELIVERABLES
Creator shall produce three (3) Instagram Reels and two (2) TikTok videos
featuring Brand products during the Term.

2. COMPENSATION
Brand shall pay Creator $4,500 within ninety (90) days of final deliverable
approval.

3. EXCLUSIVITY
Creator shall not promote any cosmetics or skincare brand for twelve (12)
months following the Term.

4. USAGE RIGHTS
Brand receives a perpetual, worldwide, royalty-free license to use, edit and
repurpose all Content in any media now known or later developed.

5. TERMINATION
Brand may terminate this Agreement at any time without cause. Creator may
terminate only upon material breach by Brand.
"""


@pytest.fixture
def sample_analysis_payload():
    """Analysis JSON as the model is asked to return it."""
    return {
        "summary": "A brand deal for five short videos paid 90 days after approval.",
        "redFlags": [
            {
                "issue": "Perpetual usage rights",
                "severity": "high",
                "explanation": "The brand can use your content forever without paying more."
            },
            {
                "issue": "12-month exclusivity",
                "severity": "medium",
                "explanation": "You cannot work with any beauty brand for a year."
            },
            {
                "issue": "Net-90 payment",
                "severity": "low",
                "explanation": "Payment arrives three months after approval."
            }
        ],
        "negotiableTerms": [
            {
                "term": "Usage rights",
                "suggestion": "Limit the license to 6 months of organic use."
            }
        ],
        "questionsToAsk": [
            "Can usage be limited to 6 months?",
            "Can exclusivity cover direct competitors only?",
            "Can payment be Net-30?"
        ]
    }


@pytest.fixture
def sample_analysis_json(sample_analysis_payload):
    return json.dumps(sample_analysis_payload)


@pytest.fixture
def test_settings():
    return Settings(google_api_key="test-key", _env_file=None)


@pytest.fixture
def lead_store():
    return InMemoryLeadStore()


@pytest.fixture
def client(test_settings, lead_store):
    """TestClient with a fake credential and an in-memory lead store."""
    app.dependency_overrides[get_settings] = lambda: test_settings
    app.dependency_overrides[get_lead_store] = lambda: lead_store
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def model_response():
    """Factory for Gemini-like responses: ``model_response(text)``."""
    return make_model_response


@pytest.fixture
def empty_model_response():
    return make_empty_model_response()


@pytest.fixture
def fake_model():
    """Factory for GenerativeModel stand-ins: ``fake_model(response, side_effect)``."""
    return make_model


@pytest.fixture
def pdf_builder():
    """Factory for minimal text PDFs: ``pdf_builder([["page 1 line"], ...])``."""
    return build_pdf
