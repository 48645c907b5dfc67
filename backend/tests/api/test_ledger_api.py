"""Tests for the ledger REST API."""

import pytest


class TestMaterialsAPI:

    def test_list_materials(self, client):
        response = client.get("/api/materials")
        assert response.status_code == 200
        materials = response.json()
        assert [m["material_id"] for m in materials] == [5, 6, 7, 8]
        assert sorted(materials[1]["unit_names"]) == ["метры", "штуки"]

    def test_create_and_add_unit(self, client):
        response = client.post(
            "/api/materials",
            json={"material_name": "Грунтовка", "class_code": "LKM", "group_code": "GRUNT"},
        )
        assert response.status_code == 201
        material_id = response.json()["material_id"]
        assert material_id == 9

        response = client.post(f"/api/materials/{material_id}/units", json={"unit_name": "литры"})
        assert response.status_code == 201
        assert response.json() == {"material_id": 9, "unit_name": "литры"}

        response = client.get(f"/api/materials/{material_id}")
        assert response.json()["unit_names"] == ["литры"]

    def test_duplicate_unit_conflict(self, client):
        response = client.post("/api/materials/5/units", json={"unit_name": "литры"})
        assert response.status_code == 409
        assert response.json()["status"] == "error"

    def test_unit_for_missing_material(self, client):
        response = client.post("/api/materials/99/units", json={"unit_name": "штуки"})
        assert response.status_code == 404

    def test_rename_unit_updates_receipts(self, client):
        response = client.put(
            "/api/materials/5/units/литры", json={"new_unit_name": "литр"}
        )
        assert response.status_code == 200
        assert response.json()["unit_name"] == "литр"

        receipt = client.get("/api/receipts/4").json()
        assert receipt["unit_of_measure_code"] == "литр"

    def test_delete_material_with_receipts_blocked(self, client):
        response = client.delete("/api/materials/5")
        assert response.status_code == 409
        assert client.get("/api/materials/5").status_code == 200

    def test_patch_null_clears_code(self, client):
        response = client.patch("/api/materials/5", json={"class_code": None})
        assert response.status_code == 200
        data = response.json()
        assert data["class_code"] is None
        assert data["group_code"] == "KRASK"
        assert client.get("/api/materials/5").json()["class_code"] is None

    def test_patch_null_name_rejected(self, client):
        response = client.patch("/api/materials/5", json={"material_name": None})
        assert response.status_code == 422

    def test_delete_unused_material(self, client):
        response = client.delete("/api/materials/6")
        assert response.status_code == 200
        assert client.get("/api/materials/6").status_code == 404


class TestSuppliersAPI:

    def test_create_supplier(self, client):
        response = client.post(
            "/api/suppliers",
            json={"name": "ООО Новый", "tax_id": "1650001001", "bank_address_city": "Казань"},
        )
        assert response.status_code == 201
        data = response.json()
        assert data["supplier_id"] == 4
        assert data["bank_address_city"] == "Казань"

    def test_duplicate_tax_id(self, client):
        response = client.post("/api/suppliers", json={"name": "Дубль", "tax_id": "7701001001"})
        assert response.status_code == 409

    def test_update_and_delete(self, client):
        response = client.patch("/api/suppliers/3", json={"bank_address_city": "Казань"})
        assert response.status_code == 200
        assert response.json()["bank_address_city"] == "Казань"

        response = client.delete("/api/suppliers/3")
        assert response.status_code == 409

    def test_missing_supplier(self, client):
        assert client.get("/api/suppliers/42").status_code == 404


class TestReceiptsAPI:

    def test_record_receipt(self, client, sample_receipt):
        response = client.post("/api/receipts", json=sample_receipt)
        assert response.status_code == 201
        data = response.json()
        assert data["order_number"] == 7
        assert float(data["quantity"]) == pytest.approx(12.5)

    def test_unregistered_unit(self, client, sample_receipt):
        sample_receipt["unit_of_measure_code"] = "тонны"
        response = client.post("/api/receipts", json=sample_receipt)
        assert response.status_code == 404

    def test_non_positive_quantity(self, client, sample_receipt):
        sample_receipt["quantity"] = "0"
        response = client.post("/api/receipts", json=sample_receipt)
        assert response.status_code == 422
        assert response.json()["status"] == "error"

    def test_list_by_period_and_delete(self, client):
        response = client.get("/api/receipts", params={"start": "2025-11-02", "end": "2025-11-30"})
        assert [r["order_number"] for r in response.json()] == [5, 6]

        assert client.delete("/api/receipts/6").status_code == 200
        assert client.get("/api/receipts/6").status_code == 404


class TestReportsAPI:

    def test_supplier_by_tax(self, client):
        response = client.get("/api/suppliers/by-tax/5002002002")
        assert response.json() == {"name": 'АО "МеталлСнаб"'}
        assert client.get("/api/suppliers/by-tax/0000000000").status_code == 404

    def test_total_spent(self, client):
        response = client.get(
            "/api/finance/total-spent", params={"start": "2025-11-01", "end": "2025-11-30"}
        )
        assert response.json()["total_amount"] == pytest.approx(801990.0)

    def test_stock_value(self, client):
        rows = client.get("/api/inventory/stock-value").json()
        assert rows[0]["material_name"] == "Арматура строительная d12"
        assert rows[0]["total_value"] == pytest.approx(412500.0)

    def test_supplier_share(self, client):
        response = client.get("/api/analytics/supplier-share/2/ARM")
        assert response.json()["supplier_share"] == pytest.approx(1.0)
        response = client.get("/api/analytics/supplier-share/2/BRUS")
        assert response.json()["supplier_share"] is None

    def test_monthly_load(self, client):
        rows = client.get("/api/inventory/monthly-load/2025").json()
        assert rows == [{"month": 11, "monthly_value": pytest.approx(801990.0)}]

    def test_order_bank_info(self, client):
        response = client.get("/api/orders/5/bank-info")
        assert response.status_code == 200
        assert response.json() == {"bank_address_city": None, "total_amount": pytest.approx(412500.0)}

    def test_health(self, client):
        assert client.get("/health").json() == {"status": "ok"}
