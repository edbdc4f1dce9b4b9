"""Tests for notes, tags and preview endpoints."""


class TestHealthEndpoints:
    """Test health and root endpoints."""

    def test_root(self, api_client):
        """Test the welcome message."""
        response = api_client.get("/")

        assert response.status_code == 200
        assert response.json()["message"] == "Welcome to Ocean Notes"

    def test_health(self, api_client):
        """Test health reports a hydrated, persistent store."""
        response = api_client.get("/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["hydrated"] is True
        assert data["persistent"] is True


class TestNotesEndpoints:
    """Test notes endpoints."""

    def test_list_seeded_notes(self, api_client):
        """Test a fresh store lists the three seed notes by recency."""
        response = api_client.get("/notes")

        assert response.status_code == 200
        data = response.json()
        assert data["total"] == 3
        assert [n["title"] for n in data["notes"]] == [
            "Welcome to Ocean Notes",
            "Ocean Professional style checklist",
            "Markdown quick tips",
        ]
        assert data["selectedId"] == data["notes"][0]["id"]

    def test_note_fields_use_camel_case(self, api_client):
        """Test notes are serialized with their storage field names."""
        note = api_client.get("/notes").json()["notes"][0]

        assert set(note) == {"id", "title", "body", "tags", "createdAt", "updatedAt"}

    def test_create_note(self, api_client):
        """Test creating a note returns it and selects it."""
        response = api_client.post("/notes")

        assert response.status_code == 201
        note = response.json()
        assert note["title"] == "Untitled note"
        assert note["body"] == ""
        assert note["tags"] == []
        assert note["createdAt"] == note["updatedAt"]

        selected = api_client.get("/notes/selected").json()
        assert selected["id"] == note["id"]

    def test_get_note(self, api_client):
        """Test retrieving a note by ID."""
        note_id = api_client.post("/notes").json()["id"]

        response = api_client.get(f"/notes/{note_id}")

        assert response.status_code == 200
        assert response.json()["id"] == note_id

    def test_get_unknown_note(self, api_client):
        """Test retrieving an unknown note returns 404."""
        response = api_client.get("/notes/nope")

        assert response.status_code == 404
        assert response.json()["detail"] == "Note not found"

    def test_update_note_normalizes_tags(self, api_client):
        """Test PATCH applies a partial update with normalized tags."""
        note_id = api_client.post("/notes").json()["id"]

        response = api_client.patch(
            f"/notes/{note_id}", json={"tags": ["Work", "work ", "IDEAS", "ideas"]}
        )

        assert response.status_code == 200
        note = response.json()
        assert note["tags"] == ["ideas", "work"]
        assert note["title"] == "Untitled note"

    def test_update_title_and_body(self, api_client):
        """Test PATCH can change title and body together."""
        note_id = api_client.post("/notes").json()["id"]

        note = api_client.patch(
            f"/notes/{note_id}", json={"title": "Plan", "body": "- step"}
        ).json()

        assert note["title"] == "Plan"
        assert note["body"] == "- step"

    def test_update_unknown_note(self, api_client):
        """Test PATCH on an unknown note returns 404."""
        response = api_client.patch("/notes/nope", json={"title": "x"})

        assert response.status_code == 404

    def test_update_invalid_payload(self, api_client):
        """Test PATCH validates the payload."""
        note_id = api_client.post("/notes").json()["id"]

        response = api_client.patch(f"/notes/{note_id}", json={"tags": "not-a-list"})

        assert response.status_code == 422

    def test_delete_note(self, api_client):
        """Test deleting a note removes it and reselects the first note."""
        note_id = api_client.post("/notes").json()["id"]

        response = api_client.delete(f"/notes/{note_id}")

        assert response.status_code == 204
        assert api_client.get(f"/notes/{note_id}").status_code == 404
        data = api_client.get("/notes").json()
        assert data["total"] == 3
        assert data["selectedId"] is not None

    def test_delete_unknown_note(self, api_client):
        """Test deleting an unknown note is not an error."""
        response = api_client.delete("/notes/nope")

        assert response.status_code == 204
        assert api_client.get("/notes").json()["total"] == 3

    def test_select_note(self, api_client):
        """Test selecting a note changes the selection."""
        last = api_client.get("/notes").json()["notes"][-1]

        response = api_client.post(f"/notes/{last['id']}/select")

        assert response.status_code == 204
        assert api_client.get("/notes/selected").json()["id"] == last["id"]

    def test_no_selection(self, api_client):
        """Test the selected endpoint returns 404 once every note is gone."""
        for note in api_client.get("/notes").json()["notes"]:
            api_client.delete(f"/notes/{note['id']}")

        assert api_client.get("/notes/selected").status_code == 404

    def test_search_and_tag_filter(self, api_client):
        """Test list filters by text and by tag."""
        by_text = api_client.get("/notes", params={"q": "checklist"}).json()
        by_tag = api_client.get("/notes", params={"tag": "Tips"}).json()

        assert [n["title"] for n in by_text["notes"]] == ["Ocean Professional style checklist"]
        assert [n["title"] for n in by_tag["notes"]] == ["Markdown quick tips"]


class TestTagsAndPreview:
    """Test tag listing and markdown preview endpoints."""

    def test_list_tags(self, api_client):
        """Test every tag in use is listed once, sorted."""
        response = api_client.get("/tags")

        assert response.status_code == 200
        assert response.json()["tags"] == [
            "design",
            "getting-started",
            "markdown",
            "ocean",
            "tips",
            "welcome",
        ]

    def test_preview_note(self, api_client):
        """Test a note's body is rendered to HTML."""
        note_id = api_client.post("/notes").json()["id"]
        api_client.patch(f"/notes/{note_id}", json={"body": "# Hi\n<script>x</script>"})

        response = api_client.get(f"/notes/{note_id}/preview")

        assert response.status_code == 200
        data = response.json()
        assert data["id"] == note_id
        assert data["html"] == "<h1>Hi</h1><p>&lt;script&gt;x&lt;/script&gt;</p>"

    def test_preview_unknown_note(self, api_client):
        """Test previewing an unknown note returns 404."""
        assert api_client.get("/notes/nope/preview").status_code == 404

    def test_preview_markdown(self, api_client, sample_markdown):
        """Test arbitrary markdown can be rendered."""
        response = api_client.post("/preview", json={"markdown": sample_markdown})

        assert response.status_code == 200
        html = response.json()["html"]
        assert html.startswith("<h1>Title</h1><ul><li>a</li><li>b</li></ul>")
        assert "<strong>bold</strong>" in html
