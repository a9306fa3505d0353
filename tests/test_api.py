from pathlib import Path

from fastapi.testclient import TestClient

from postnotes.api import create_app
from postnotes.ingestion.orchestrator import BuildResult


def test_health(test_client: TestClient) -> None:
    response = test_client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "healthy", "notes": 3, "failures": 0}


def test_content_map(test_client: TestClient) -> None:
    response = test_client.get("/api/map")

    assert response.status_code == 200
    data = response.json()
    assert set(data) == {"web-basics.html", "rust-notes.html", "reading-list.html"}
    assert data["reading-list.html"]["tags"] == ["learning"]


def test_navigation(test_client: TestClient) -> None:
    response = test_client.get("/api/navigation")

    assert response.status_code == 200
    root = response.json()["root"]
    assert root["tag"] == "#"
    assert [child["tag"] for child in root["child_tags"]] == ["learning", "projects"]


def test_get_note(test_client: TestClient) -> None:
    response = test_client.get("/api/notes/web-basics.html")

    assert response.status_code == 200
    data = response.json()
    assert data["link"] == "web-basics.html"
    assert data["properties"]["title"] == "Web Basics"
    assert data["html_content"] == "<p>Web Basics</p>"


def test_get_missing_note(test_client: TestClient) -> None:
    response = test_client.get("/api/notes/nope.html")

    assert response.status_code == 404
    assert response.json() == {"detail": "Note not found"}


def test_search(test_client: TestClient) -> None:
    response = test_client.get("/api/search", params={"q": "basics"})
    assert response.status_code == 200
    assert list(response.json()) == ["web-basics.html"]

    response = test_client.get("/api/search", params={"tag": "projects"})
    assert list(response.json()) == ["rust-notes.html", "web-basics.html"]

    response = test_client.get("/api/search")
    assert len(response.json()) == 3


def test_serves_built_pages(build_result: BuildResult, tmp_path: Path) -> None:
    (tmp_path / "index.html").write_text("<h1>Home</h1>", encoding="utf-8")
    (tmp_path / "web-basics.html").write_text("<p>page</p>", encoding="utf-8")
    client = TestClient(create_app(result=build_result, output_dir=tmp_path))

    assert client.get("/web-basics.html").text == "<p>page</p>"
    assert client.get("/").text == "<h1>Home</h1>"
    assert client.get("/api/map").status_code == 200
