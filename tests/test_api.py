from conftest import make_workbook, student_row

XLSX = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


def upload(client, path, content, filename="students.xlsx"):
    return client.post(path, files={"file": (filename, content, XLSX)})


def sheet_row(student_id, **overrides):
    return list(student_row(student_id, **overrides).values())


class TestStudentEndpoints:
    """Test student listing and editing routes."""

    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"
        assert "X-Request-ID" in response.headers

    def test_list_students(self, client, stored_students):
        response = client.get("/api/v1/students")

        assert response.status_code == 200
        assert [s["student_id"] for s in response.json()] == ["A123", "B456"]

    def test_update_student(self, client, stored_students):
        target = stored_students[0]

        response = client.put(
            f"/api/v1/students/{target.id}",
            json=student_row("A777", student_name="Renamed"),
        )

        assert response.status_code == 200
        assert response.json()["student_id"] == "A777"
        assert response.json()["student_name"] == "Renamed"

    def test_update_with_violations(self, client, stored_students):
        response = client.put(
            f"/api/v1/students/{stored_students[0].id}",
            json=student_row("A 1", phone="1"),
        )

        assert response.status_code == 422
        body = response.json()
        assert body["success"] is False
        assert body["error"]["code"] == "VALIDATION_ERROR"
        assert set(body["error"]["details"]["field_errors"]) == {"student_id", "phone"}

    def test_update_to_duplicate_student_id(self, client, stored_students):
        response = client.put(
            f"/api/v1/students/{stored_students[0].id}",
            json=student_row("B456"),
        )

        assert response.status_code == 409
        assert response.json()["error"]["code"] == "DUPLICATE_KEY"

    def test_update_missing_student(self, client):
        response = client.put("/api/v1/students/999", json=student_row())

        assert response.status_code == 404
        assert response.json()["error"]["code"] == "NOT_FOUND"

    def test_delete_student(self, client, stored_students):
        response = client.delete(f"/api/v1/students/{stored_students[1].id}")

        assert response.status_code == 200
        assert response.json() == {"message": "Student deleted successfully"}
        assert len(client.get("/api/v1/students").json()) == 1

    def test_delete_missing_student(self, client):
        assert client.delete("/api/v1/students/999").status_code == 404

    def test_validate_endpoint(self, client):
        response = client.post("/api/v1/students/validate", json=student_row(email="nope"))

        assert response.status_code == 200
        body = response.json()
        assert body["valid"] is False
        assert body["errors"] == ["Invalid email: nope."]

    def test_template_download(self, client):
        response = client.get("/api/v1/students/template")

        assert response.status_code == 200
        assert response.headers["content-type"] == XLSX
        assert response.content[:2] == b"PK"


class TestUploadEndpoints:
    """Test roster upload routes."""

    def test_upload_imports_students(self, client):
        content = make_workbook([sheet_row("A1"), sheet_row("A2", class_name="B")])

        response = upload(client, "/api/v1/uploads/students", content)

        assert response.status_code == 200
        assert response.json()["status"] == "success"
        assert response.json()["imported_rows"] == 2
        assert [s["student_id"] for s in client.get("/api/v1/students").json()] == ["A1", "A2"]

    def test_upload_with_invalid_rows_is_rejected(self, client):
        content = make_workbook([sheet_row("A1"), sheet_row("A#2"), sheet_row("A3")])

        response = upload(client, "/api/v1/uploads/students", content)

        assert response.status_code == 400
        body = response.json()
        assert body["status"] == "validation_failed"
        assert [r["position"] for r in body["rejections"]] == [2]
        assert client.get("/api/v1/students").json() == []

    def test_upload_duplicate_ids(self, client, stored_students):
        content = make_workbook([sheet_row("A123")])

        response = upload(client, "/api/v1/uploads/students", content)

        assert response.status_code == 409
        assert response.json()["error"]["message"] == (
            "Duplicate Student ID found. Please ensure all Student IDs are unique."
        )

    def test_upload_empty_workbook(self, client):
        response = upload(client, "/api/v1/uploads/students", make_workbook([]))

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "NOTHING_TO_IMPORT"

    def test_upload_malformed_file(self, client):
        response = upload(client, "/api/v1/uploads/students", b"garbage")

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "MALFORMED_SPREADSHEET"

    def test_upload_wrong_extension(self, client):
        response = upload(client, "/api/v1/uploads/students", b"a,b", filename="students.csv")

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "UPLOAD_FAILED"

    def test_preview(self, client):
        content = make_workbook([sheet_row("A1"), sheet_row("A2", phone="12")])

        response = upload(client, "/api/v1/uploads/students/preview", content)

        assert response.status_code == 200
        body = response.json()
        assert body["accepted_rows"] == 1
        assert body["rejections"][0]["errors"] == [
            "Invalid phone number: 12. Must be a 9-digit number."
        ]
        assert body["summary"] == [{"grade_name": "10", "class_name": "A", "count": 1}]
        assert client.get("/api/v1/students").json() == []
