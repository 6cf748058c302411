"""HTTP tests for the v1 API."""

# pylint: disable=redefined-outer-name

API = "/api/v1"


def _create_pm(client, location_id, **overrides):
    payload = {"title": "Filter change", "recurrence": "monthly", "nextDue": "2025-01-15"}
    payload.update(overrides)
    return client.post(f"{API}/locations/{location_id}/preventative-maintenances", json=payload)


# ============================================================================
# Basics
# ============================================================================


class TestHealthAndLocations:
    def test_health(self, client):
        response = client.get(f"{API}/health")
        assert response.status_code == 200
        assert response.json()["status"] == "ok"
        assert "X-Request-ID" in response.headers

    def test_locations_listed(self, client):
        response = client.get(f"{API}/locations")
        assert response.status_code == 200
        assert [loc["name"] for loc in response.json()] == ["Enterprise", "Bristol"]

    def test_unknown_location_is_404(self, client):
        response = client.get(f"{API}/locations/999/assets")
        assert response.status_code == 404
        assert response.json()["error"]["code"] == "LOCATION_NOT_FOUND"


# ============================================================================
# Assets and calibration
# ============================================================================


class TestAssets:
    def test_create_and_fetch_asset(self, client, bristol):
        response = client.post(
            f"{API}/locations/{bristol.id}/assets",
            json={"aid": "SC-1", "calDue": "2025-03-01", "calFreq": "every 6 months"},
        )
        assert response.status_code == 201
        body = response.json()
        assert body["calibrationAnchor"] == "2025-03-01"
        assert body["calibrationRule"] == "every-6-months"
        assert body["lastCalibration"] is None

        fetched = client.get(f"{API}/assets/{body['id']}").json()
        assert fetched["aid"] == "SC-1"

    def test_invalid_cal_due_is_422(self, client, bristol):
        response = client.post(f"{API}/locations/{bristol.id}/assets", json={"calDue": "2025-02-30"})
        assert response.status_code == 422

    def test_log_calibration(self, client, bristol, make_asset):
        asset = make_asset(bristol, cal_due="2025-03-01", cal_freq="Annual")

        response = client.post(
            f"{API}/assets/{asset.id}/calibration-history",
            json={"dueDate": "2025-03-01", "completedAt": "2025-03-02", "notes": "ok"},
        )

        assert response.status_code == 201
        body = response.json()
        assert body["asset"]["calDue"] == "2026-03-01"
        assert body["asset"]["lastCalibration"] == "2025-03-02"
        history = client.get(f"{API}/assets/{asset.id}/calibration-history").json()
        assert [(row["dueDate"], row["completedAt"]) for row in history] == [("2025-03-01", "2025-03-02")]

    def test_unknown_asset(self, client):
        assert client.get(f"{API}/assets/999").status_code == 404

    def test_list_assets_across_locations(self, client, enterprise, bristol, make_asset):
        make_asset(enterprise, aid="EN-1")
        make_asset(bristol, aid="BR-1")

        response = client.get(f"{API}/assets")

        assert response.status_code == 200
        assert [asset["aid"] for asset in response.json()] == ["EN-1", "BR-1"]

    def test_patch_sets_calibration_schedule(self, client, bristol):
        asset_id = client.post(f"{API}/locations/{bristol.id}/assets", json={"aid": "SC-2"}).json()["id"]

        response = client.patch(
            f"{API}/assets/{asset_id}",
            json={"calDue": "2025-06-01", "calFreq": "annual"},
        )

        assert response.status_code == 200
        body = response.json()
        assert body["aid"] == "SC-2"
        assert body["calibrationAnchor"] == "2025-06-01"
        assert body["calibrationRule"] == "yearly"

        report = client.get(
            f"{API}/reports/pm-compliance",
            params={"start": "2025-06-01", "end": "2025-06-30", "sourceType": "calibration"},
        ).json()
        assert [(row["assetId"], row["dueDate"]) for row in report["rows"]] == [(asset_id, "2025-06-01")]

    def test_patch_keeps_existing_anchor(self, client, bristol, make_asset):
        asset = make_asset(bristol, aid="SC-3", cal_due="2025-03-01", cal_freq="Annual")

        body = client.patch(f"{API}/assets/{asset.id}", json={"calDue": "2025-09-01", "notes": "moved"}).json()

        assert body["calDue"] == "2025-09-01"
        assert body["calibrationAnchor"] == "2025-03-01"
        assert body["calFreq"] == "Annual"
        assert body["notes"] == "moved"

    def test_patch_validation_and_unknown_asset(self, client, bristol, make_asset):
        asset = make_asset(bristol)

        assert client.patch(f"{API}/assets/{asset.id}", json={"calDue": "2025-13-01"}).status_code == 422
        assert client.patch(f"{API}/assets/999", json={"notes": "x"}).status_code == 404

    def test_delete_asset_unassigns_pms(self, client, enterprise, make_asset, make_pm):
        asset = make_asset(enterprise, aid="AH-1", cal_due="2025-03-01", cal_freq="Annual")
        make_pm(enterprise, asset=asset)
        client.post(f"{API}/assets/{asset.id}/calibration-history", json={"dueDate": "2025-03-01"})

        assert client.delete(f"{API}/assets/{asset.id}").status_code == 204

        assert client.get(f"{API}/assets/{asset.id}").status_code == 404
        assert client.get(f"{API}/assets/{asset.id}/calibration-history").status_code == 404
        pms = client.get(f"{API}/locations/{enterprise.id}/preventative-maintenances").json()
        assert [(pm["assetId"], pm["assetLabel"]) for pm in pms] == [(None, "Unassigned Asset")]
        assert client.delete(f"{API}/assets/{asset.id}").status_code == 404


# ============================================================================
# Preventative maintenance
# ============================================================================


class TestPreventativeMaintenance:
    def test_create_sets_anchor(self, client, enterprise):
        response = _create_pm(client, enterprise.id)

        assert response.status_code == 201
        body = response.json()
        assert body["scheduleAnchor"] == "2025-01-15"
        assert body["nextDue"] == "2025-01-15"
        assert body["assetLabel"] == "Unassigned Asset"

    def test_title_is_optional(self, client, enterprise):
        response = client.post(
            f"{API}/locations/{enterprise.id}/preventative-maintenances",
            json={"recurrence": "weekly", "nextDue": "2025-01-15"},
        )
        assert response.status_code == 201
        assert response.json()["title"] is None

    def test_recurrence_must_be_canonical(self, client, enterprise):
        assert _create_pm(client, enterprise.id, recurrence="Annual").status_code == 422
        assert _create_pm(client, enterprise.id, recurrence="yearly").status_code == 201

    def test_asset_must_belong_to_location(self, client, enterprise, bristol, make_asset):
        asset = make_asset(bristol, aid="B-1")

        response = _create_pm(client, enterprise.id, assetId=asset.id)

        assert response.status_code == 404
        assert response.json()["error"]["code"] == "ASSET_NOT_FOUND"

    def test_log_completion_and_relog(self, client, enterprise):
        pm_id = _create_pm(client, enterprise.id).json()["id"]
        url = f"{API}/preventative-maintenances/{pm_id}/completion-history"

        first = client.post(url, json={"dueDate": "2025-01-15", "completedAt": "2025-01-14", "notes": "a"})
        second = client.post(url, json={"dueDate": "2025-01-15", "completedAt": "2025-01-20"})

        assert first.status_code == 201
        assert second.status_code == 201
        pm = second.json()["preventativeMaintenance"]
        assert pm["nextDue"] == "2025-02-15"
        assert pm["lastCompleted"] == "2025-01-20"

        history = client.get(url).json()
        assert len(history) == 1
        assert history[0]["completedAt"] == "2025-01-20"
        assert history[0]["notes"] == "a"

        listed = client.get(f"{API}/locations/{enterprise.id}/preventative-maintenances").json()
        assert listed[0]["lastCompleted"] == "2025-01-20"

    def test_invalid_due_date_is_400(self, client, enterprise):
        pm_id = _create_pm(client, enterprise.id).json()["id"]

        response = client.post(
            f"{API}/preventative-maintenances/{pm_id}/completion-history",
            json={"dueDate": "2025-02-30"},
        )

        assert response.status_code == 400
        error = response.json()["error"]
        assert error["code"] == "INVALID_DATE"
        assert error["message"] == "Invalid due date"

    def test_delete_removes_pm_and_history(self, client, enterprise):
        pm_id = _create_pm(client, enterprise.id).json()["id"]
        client.post(
            f"{API}/preventative-maintenances/{pm_id}/completion-history",
            json={"dueDate": "2025-01-15"},
        )

        assert client.delete(f"{API}/preventative-maintenances/{pm_id}").status_code == 204
        assert client.get(f"{API}/preventative-maintenances/{pm_id}/completion-history").status_code == 404
        assert client.delete(f"{API}/preventative-maintenances/{pm_id}").status_code == 404


# ============================================================================
# Reports and calendar
# ============================================================================


class TestReports:
    def test_report_shape_and_camel_case(self, client, enterprise, bristol, make_asset):
        pm_id = _create_pm(client, enterprise.id, nextDue="2025-03-10").json()["id"]
        make_asset(bristol, aid="SC-1", cal_due="2025-03-20", cal_freq="yearly")
        client.post(
            f"{API}/preventative-maintenances/{pm_id}/completion-history",
            json={"dueDate": "2025-03-10", "completedAt": "2025-03-09"},
        )

        response = client.get(f"{API}/reports/pm-compliance", params={"start": "2025-03-01", "end": "2025-03-31"})

        assert response.status_code == 200
        body = response.json()
        assert body["range"] == {"start": "2025-03-01", "end": "2025-03-31", "locationId": None}
        assert set(body["summary"]) == {"total", "completedOnTime", "completedLate", "missed", "scheduled"}
        assert body["summary"]["total"] == 2
        assert body["summary"]["completedOnTime"] == 1
        assert [row["sourceType"] for row in body["rows"]] == ["pm", "calibration"]
        assert body["rows"][0]["status"] == "completed-on-time"
        assert body["rows"][0]["happened"] is True
        assert body["rows"][1]["assetLabel"] == "SC-1"

    def test_source_type_and_location_filters(self, client, enterprise, bristol, make_asset):
        _create_pm(client, enterprise.id, nextDue="2025-03-10")
        make_asset(bristol, aid="SC-1", cal_due="2025-03-20", cal_freq="yearly")
        params = {"start": "2025-03-01", "end": "2025-03-31"}

        calibration_only = client.get(f"{API}/reports/pm-compliance", params={**params, "sourceType": "calibration"})
        enterprise_only = client.get(f"{API}/reports/pm-compliance", params={**params, "locationId": enterprise.id})

        assert [row["sourceType"] for row in calibration_only.json()["rows"]] == ["calibration"]
        assert [row["locationName"] for row in enterprise_only.json()["rows"]] == ["Enterprise"]
        assert enterprise_only.json()["range"]["locationId"] == enterprise.id

    def test_bad_window_is_400(self, client):
        response = client.get(f"{API}/reports/pm-compliance", params={"start": "2025-06-30", "end": "2025-06-01"})
        assert response.status_code == 400
        assert response.json()["error"]["code"] == "INVALID_DATE_RANGE"

        response = client.get(f"{API}/reports/pm-compliance", params={"start": "2025-6-1"})
        assert response.status_code == 400

    def test_calendar_feed(self, client, enterprise):
        _create_pm(client, enterprise.id, title="Boiler", recurrence="weekly", nextDue="2025-03-03")
        params = {"start": "2025-03-01", "end": "2025-03-31"}

        first = client.get(f"{API}/calendar/feed", params=params).json()
        second = client.get(f"{API}/calendar/feed", params=params).json()

        assert [event["date"] for event in first["events"]] == [
            "2025-03-03",
            "2025-03-10",
            "2025-03-17",
            "2025-03-24",
            "2025-03-31",
        ]
        assert [e["uid"] for e in first["events"]] == [e["uid"] for e in second["events"]]
        assert first["events"][0]["summary"] == "PM: Boiler (Unassigned Asset)"
        assert first["events"][0]["location"] == "Enterprise"
