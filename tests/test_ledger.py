from conftest import run


def test_empty_ledger(client):
    response = client.get("/api/company-ledger")

    assert response.status_code == 200
    assert response.json() == {"success": True, "ledger": {"balance": 0, "transactions": []}}


def test_transactions_newest_first(client, ledger_store):
    run(ledger_store.add_ledger_transaction(amount=100, purpose="Grant", type="credited"))
    run(ledger_store.add_ledger_transaction(amount=30.333, purpose="Taxi", type="debited", remarks="cab"))

    ledger = client.get("/api/company-ledger").json()["ledger"]

    assert ledger["balance"] == 69.67
    assert [t["purpose"] for t in ledger["transactions"]] == ["Taxi", "Grant"]
    assert ledger["transactions"][0]["balanceAfter"] == 69.67
    assert ledger["transactions"][0]["remarks"] == "cab"
    assert ledger["transactions"][0]["id"].startswith("txn-")


def test_corrupt_ledger_is_generic_500(client, tmp_path):
    (tmp_path / "company-ledger.json").write_text("{not json")

    response = client.get("/api/company-ledger")

    assert response.status_code == 500
    assert response.json() == {"success": False, "error": "Failed to fetch company ledger"}
