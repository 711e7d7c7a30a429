import pytest

PANELS = [
    {
        "codigoParada": "P-100",
        "fechaInstalacion": "2024-01-01",
        "fechaDesinstalacion": "2024-01-10",
        "fechaReinstalacion": "2024-01-20",
        "importeMensual": 30,
        "cliente": "Metro Bus",
        "municipioMarquesina": "Valencia",
        "status": "installed",
    },
    {
        "codigoParada": "P-200",
        "fechaInstalacion": "2019-03-01",
        "tipoPiv": "LED",
    },
    {
        "codigoParada": "P-300",
        "fechaInstalacion": None,
    },
]


@pytest.mark.asyncio
@pytest.mark.integration
async def test_health(client):
    resp = await client.get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}

    resp = await client.get("/ready")
    assert resp.json()["status"] == "ready"


@pytest.mark.asyncio
@pytest.mark.integration
async def test_monthly_roster(client):
    resp = await client.post("/api/v1/billing/monthly", json={"year": 2024, "month": 1, "panels": PANELS})
    assert resp.status_code == 200
    data = resp.json()

    assert data["currency"] == "EUR"
    rows = {r["panel_id"]: r for r in data["rows"]}
    assert set(rows) == {"P-100", "P-200"}
    assert rows["P-100"]["billed_days"] == 22
    assert rows["P-100"]["amount"] == 22.0
    assert rows["P-100"]["client"] == "Metro Bus"
    assert rows["P-200"]["billed_days"] == 30
    assert rows["P-200"]["amount"] == 37.7
    assert data["total_billed_days"] == 52
    assert data["total_amount"] == pytest.approx(59.7)


@pytest.mark.asyncio
@pytest.mark.integration
async def test_panel_detail_includes_ledger(client):
    resp = await client.post("/api/v1/billing/panels/P-100", json={"year": 2024, "month": 1, "panels": PANELS})
    assert resp.status_code == 200
    data = resp.json()

    assert data["summary"]["billed_days"] == 22
    assert data["summary"]["total_days_in_month"] == 30
    ledger = data["ledger"]
    assert len(ledger) == 31
    assert ledger[0]["date"] == "2024-01-01"
    assert ledger[10]["is_billable"] is False
    assert ledger[10]["status"] == "removed"
    assert ledger[19]["is_billable"] is True


@pytest.mark.asyncio
@pytest.mark.integration
async def test_unknown_panel_is_404(client):
    resp = await client.post("/api/v1/billing/panels/NOPE", json={"year": 2024, "month": 1, "panels": PANELS})
    assert resp.status_code == 404


@pytest.mark.asyncio
@pytest.mark.integration
@pytest.mark.parametrize("body", [{"year": 2024, "month": 13}, {"year": 24, "month": 1}])
async def test_invalid_period_rejected(client, body):
    resp = await client.post("/api/v1/billing/monthly", json={**body, "panels": []})
    assert resp.status_code == 422


@pytest.mark.asyncio
@pytest.mark.integration
async def test_status_recompute(client):
    payload = {
        "panels": [
            {"codigoParada": "P-2", "fechaInstalacion": "2024-01-01"},
            {"codigoParada": "P-1", "fechaInstalacion": "2024-09-01"},
        ],
        "events": [
            {"panelId": "P-2", "tipo": "DESINSTALACION", "fecha": "2024-05-01"},
        ],
    }
    resp = await client.post("/api/v1/panels/status", json=payload)
    assert resp.status_code == 200
    assert resp.json() == [
        {"panel_id": "P-1", "status": "pending_installation", "last_status_update": "2024-09-01"},
        {"panel_id": "P-2", "status": "removed", "last_status_update": "2024-05-01"},
    ]
