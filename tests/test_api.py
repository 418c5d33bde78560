"""Route tests with the model client replaced by a stand-in."""

import pytest
from fastapi.testclient import TestClient

from conftest import COMPARISON_TEXT, DESIGN_TEXT, FLOW_TEXT, make_client, make_response
from designlens.errors import AnalyzerConfigError
from designlens.main import app, get_analyzer
from designlens.services.llm import DesignAnalyzer

IMAGE = "data:image/png;base64,iVBORw0KGgo="


@pytest.fixture
def use_responses():
    """Install an analyzer whose client replays the given responses."""

    def install(*outcomes):
        client = make_client(*outcomes)
        analyzer = DesignAnalyzer(client=client, max_retries=1)
        app.dependency_overrides[get_analyzer] = lambda: analyzer
        return client

    yield install
    app.dependency_overrides.clear()


@pytest.fixture
def api() -> TestClient:
    return TestClient(app)


def test_analyze_returns_camel_case_record(api: TestClient, use_responses) -> None:
    use_responses(make_response(DESIGN_TEXT))
    response = api.post("/api/analyze", json={"image": IMAGE})

    assert response.status_code == 200
    analysis = response.json()["analysis"]
    assert analysis["accessibility"] == ["Good labels"]
    assert analysis["colorContrast"] == ["Poor contrast"]
    assert analysis["designPrinciples"] == ["OK"]


def test_analyze_requires_image(api: TestClient, use_responses) -> None:
    use_responses()
    response = api.post("/api/analyze", json={})
    assert response.status_code == 400
    assert response.json()["detail"] == "No image provided"


@pytest.mark.parametrize("content", [None, ""])
def test_no_content_maps_to_bad_gateway(api: TestClient, use_responses, content) -> None:
    use_responses(make_response(content))
    response = api.post("/api/analyze", json={"image": IMAGE})
    assert response.status_code == 502
    assert response.json()["detail"] == "No content in response"


def test_model_failure_maps_to_server_error(api: TestClient, use_responses) -> None:
    use_responses(RuntimeError("upstream exploded"))
    response = api.post("/api/analyze", json={"image": IMAGE})
    assert response.status_code == 500
    assert response.json()["detail"] == "upstream exploded"


def test_missing_api_key(api: TestClient) -> None:
    def broken():
        raise AnalyzerConfigError("GROQ_API_KEY is not configured")

    app.dependency_overrides[get_analyzer] = broken
    try:
        response = api.post("/api/analyze", json={"image": IMAGE})
    finally:
        app.dependency_overrides.clear()
    assert response.status_code == 500
    assert response.json()["detail"] == "API key is not configured"


def test_compare(api: TestClient, use_responses) -> None:
    use_responses(make_response(COMPARISON_TEXT))
    response = api.post("/api/compare", json={"yourDesign": IMAGE, "competitorDesign": IMAGE})

    assert response.status_code == 200
    analysis = response.json()["analysis"]
    assert analysis["strengthsWeaknesses"]["yourDesign"]["strengths"] == ["Clear pricing"]
    designer = analysis["abTestSuggestions"]["designer"][0]
    assert designer["name"] == "CTA Color"
    assert designer["metrics"] == ["CTR"]
    assert analysis["recommendations"]["implementation"][0]["phase"] == "Phase 1"


def test_compare_requires_both_designs(api: TestClient, use_responses) -> None:
    use_responses()
    response = api.post("/api/compare", json={"yourDesign": IMAGE})
    assert response.status_code == 400


def test_flow_text_mode(api: TestClient, use_responses) -> None:
    client = use_responses(make_response(FLOW_TEXT))
    response = api.post("/api/analyze-flow", json={"mode": "text", "flowDescription": "Open app, sign up"})

    assert response.status_code == 200
    analysis = response.json()["analysis"]
    assert analysis["competitorInsights"] is None
    assert analysis["currentFlow"][0]["improvements"] == ["Pricing table is hard to scan"]
    assert "Open app, sign up" in client.chat.completions.calls[0]["messages"][0]["content"]


def test_flow_image_mode(api: TestClient, use_responses) -> None:
    use_responses(make_response(FLOW_TEXT))
    response = api.post("/api/analyze-flow", json={"mode": "image", "image": IMAGE})

    assert response.status_code == 200
    assert response.json()["analysis"]["competitorInsights"] == ["Competitors offer social login"]


@pytest.mark.parametrize(
    "payload",
    [{}, {"mode": "text"}, {"mode": "image", "flowDescription": "x"}, {"mode": "text", "flowDescription": "  "}],
)
def test_flow_rejects_invalid_requests(api: TestClient, use_responses, payload: dict) -> None:
    use_responses()
    response = api.post("/api/analyze-flow", json=payload)
    assert response.status_code == 400


def test_analyze_upload(api: TestClient, use_responses) -> None:
    client = use_responses(make_response(DESIGN_TEXT))
    response = api.post("/api/analyze/upload", files={"file": ("shot.png", b"\x89PNG", "image/png")})

    assert response.status_code == 200
    image_part = client.chat.completions.calls[0]["messages"][0]["content"][1]
    assert image_part["image_url"]["url"].startswith("data:image/png;base64,")


def test_analyze_upload_rejects_non_images(api: TestClient, use_responses) -> None:
    use_responses()
    response = api.post("/api/analyze/upload", files={"file": ("notes.txt", b"hello", "text/plain")})
    assert response.status_code == 400


def test_compare_upload(api: TestClient, use_responses) -> None:
    use_responses(make_response(COMPARISON_TEXT))
    response = api.post(
        "/api/compare/upload",
        files={
            "your_design": ("mine.png", b"\x89PNG", "image/png"),
            "competitor_design": ("theirs.jpg", b"\xff\xd8", "image/jpeg"),
        },
    )
    assert response.status_code == 200
    assert response.json()["analysis"]["designComparison"][0] == "Your layout is denser"


def test_flow_upload_text_document(api: TestClient, use_responses) -> None:
    client = use_responses(make_response(FLOW_TEXT))
    response = api.post(
        "/api/analyze-flow/upload",
        files={"file": ("flow.txt", b"1. Open app\n2. Sign up", "text/plain")},
    )

    assert response.status_code == 200
    assert response.json()["analysis"]["competitorInsights"] is None
    assert "2. Sign up" in client.chat.completions.calls[0]["messages"][0]["content"]


def test_flow_upload_image(api: TestClient, use_responses) -> None:
    use_responses(make_response(FLOW_TEXT))
    response = api.post("/api/analyze-flow/upload", files={"file": ("flow.png", b"\x89PNG", "image/png")})
    assert response.status_code == 200
    assert response.json()["analysis"]["competitorInsights"] == ["Competitors offer social login"]


def test_health(api: TestClient) -> None:
    response = api.get("/health")
    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "ok"
    assert body["llm_provider"] == "groq"
    assert isinstance(body["has_api_key"], bool)
