BASE_URL = "/api/forms"


def test_form_editor_flow(client):
    """
    Same calls the editor makes:

    1. Create a form
    2. Add a text field and a select field
    3. Add an option to the select field
    4. Reorder, then read the form back
    """

    # ---------- 1. Create form ----------
    r = client.post(BASE_URL, json={"name": "Contact"})
    assert r.status_code == 201
    form = r.json()
    form_id = form["id"]
    assert form["fields"] == []
    assert form["isPublished"] is False
    assert "description" not in form

    # ---------- 2. Add fields ----------
    r = client.post(f"{BASE_URL}/{form_id}/fields", json={"type": "text", "label": "Name"})
    assert r.status_code == 200
    name = r.json()["fields"][0]
    assert name == {"id": name["id"], "type": "text", "label": "Name", "required": False}

    r = client.post(f"{BASE_URL}/{form_id}/fields", json={"type": "select", "label": "Color"})
    color = r.json()["fields"][1]
    assert color["options"] == []

    # ---------- 3. Add option ----------
    r = client.post(f"{BASE_URL}/{form_id}/fields/{color['id']}/options", json={"label": "Light Red"})
    assert r.status_code == 200
    assert r.json()["fields"][1]["options"] == [{"label": "Light Red", "value": "light_red"}]

    # ---------- 4. Reorder and read back ----------
    r = client.put(f"{BASE_URL}/{form_id}/fields/order", json={"fieldIds": [color["id"], name["id"]]})
    assert r.status_code == 200
    assert [field["label"] for field in r.json()["fields"]] == ["Color", "Name"]

    r = client.get(f"{BASE_URL}/{form_id}")
    assert r.status_code == 200
    assert [field["id"] for field in r.json()["fields"]] == [color["id"], name["id"]]


def test_field_update_and_delete(client):
    form_id = client.post(BASE_URL, json={"name": "F"}).json()["id"]
    r = client.post(f"{BASE_URL}/{form_id}/fields", json={"type": "multiSelect"})
    field_id = r.json()["fields"][0]["id"]
    client.post(f"{BASE_URL}/{form_id}/fields/{field_id}/options", json={"label": "A"})

    r = client.patch(f"{BASE_URL}/{form_id}/fields/{field_id}", json={"type": "email", "required": True})
    assert r.status_code == 200
    field = r.json()["fields"][0]
    assert field["type"] == "email"
    assert field["required"] is True
    assert "options" not in field

    r = client.delete(f"{BASE_URL}/{form_id}/fields/{field_id}")
    assert r.status_code == 200
    assert r.json()["fields"] == []

    r = client.delete(f"{BASE_URL}/{form_id}/fields/{field_id}")
    assert r.status_code == 200


def test_sub_field_options(client):
    form_id = client.post(BASE_URL, json={"name": "Plant"}).json()["id"]
    r = client.post(f"{BASE_URL}/{form_id}/fields", json={"type": "naturalGasInput", "label": "Gas"})
    field = r.json()["fields"][0]
    assert set(field["subFieldOptions"]) == {"units", "types", "stages", "uses"}

    r = client.post(f"{BASE_URL}/{form_id}/fields/{field['id']}/sub-options/units", json={"label": "GJ"})
    assert r.json()["fields"][0]["subFieldOptions"]["units"][-1] == {"label": "GJ", "value": "gj"}

    r = client.delete(f"{BASE_URL}/{form_id}/fields/{field['id']}/sub-options/units/0")
    assert [o["value"] for o in r.json()["fields"][0]["subFieldOptions"]["units"]] == ["mj_kg_product", "m3", "gj"]

    r = client.post(f"{BASE_URL}/{form_id}/fields/{field['id']}/sub-options/colors", json={"label": "Red"})
    assert r.status_code == 422


def test_errors_map_to_status_codes(client, store):
    r = client.get(f"{BASE_URL}/missing")
    assert r.status_code == 404

    r = client.post(f"{BASE_URL}/missing/fields", json={"type": "text"})
    assert r.status_code == 404

    form_id = client.post(BASE_URL, json={"name": "F"}).json()["id"]
    r = client.post(f"{BASE_URL}/{form_id}/fields", json={"type": "slider"})
    assert r.status_code == 422

    r = client.patch(f"{BASE_URL}/{form_id}/fields/missing", json={"label": "x"})
    assert r.status_code == 404

    store.fail_writes = True
    r = client.post(f"{BASE_URL}/{form_id}/fields", json={"type": "text"})
    assert r.status_code == 503
    store.fail_writes = False


def test_form_metadata_and_delete(client):
    form_id = client.post(BASE_URL, json={"name": "Draft", "description": "First try"}).json()["id"]

    r = client.patch(f"{BASE_URL}/{form_id}", json={"name": "Survey", "isPublished": True})
    assert r.status_code == 200
    assert r.json()["name"] == "Survey"
    assert r.json()["description"] == "First try"
    assert r.json()["isPublished"] is True

    assert [form["id"] for form in client.get(BASE_URL).json()] == [form_id]

    r = client.delete(f"{BASE_URL}/{form_id}")
    assert r.json() == {"status": "ok", "formId": form_id}
    assert client.delete(f"{BASE_URL}/{form_id}").status_code == 404


def test_patch_with_null_name_is_rejected(client):
    form_id = client.post(BASE_URL, json={"name": "Draft"}).json()["id"]

    r = client.patch(f"{BASE_URL}/{form_id}", json={"name": None})
    assert r.status_code == 422

    r = client.get(BASE_URL)
    assert r.status_code == 200
    assert [form["name"] for form in r.json()] == ["Draft"]


def test_custom_field_templates(client):
    r = client.post("/api/custom-fields", json={"name": "Gas block", "fields": [{"type": "naturalGasInput"}]})
    assert r.status_code == 201
    template = r.json()
    assert "isPublished" not in template

    r = client.post(f"/api/custom-fields/{template['id']}/fields", json={"type": "number", "label": "Amount"})
    assert [field["label"] for field in r.json()["fields"]] == ["New naturalGasInput field", "Amount"]

    assert client.get(f"{BASE_URL}/{template['id']}").status_code == 404
    assert client.get(f"/api/custom-fields/{template['id']}").status_code == 200

    r = client.patch(f"/api/custom-fields/{template['id']}", json={"description": "Reusable"})
    assert r.json()["description"] == "Reusable"

    assert client.delete(f"/api/custom-fields/{template['id']}").status_code == 200
    assert client.get("/api/custom-fields").json() == []


def test_submissions(client):
    form_id = client.post(BASE_URL, json={"name": "Feedback"}).json()["id"]

    r = client.post(f"{BASE_URL}/{form_id}/submit", json={"data": {"rating": 5}})
    assert r.status_code == 201
    data = r.json()
    assert data["formId"] == form_id
    assert data["data"] == {"rating": 5}

    r = client.get(f"{BASE_URL}/{form_id}/submissions")
    assert [item["id"] for item in r.json()] == [data["id"]]

    r = client.post(f"{BASE_URL}/missing/submit", json={"data": {}})
    assert r.status_code == 404


def test_field_types_and_health(client):
    r = client.get("/api/field-types")
    assert r.status_code == 200
    assert "naturalGasInput" in [entry["type"] for entry in r.json()]

    assert client.get("/health").json() == {"status": "ok"}
