"""Tests for SupplierRepository."""

import pytest

from ledger.core.exceptions import (
    ConstraintViolation,
    NotFound,
    ReferentialBlock,
    UniquenessViolation,
)
from ledger.repositories.supplier_repository import SupplierRepository


class TestCreateSupplier:

    @pytest.mark.asyncio
    async def test_create_with_addresses(self, test_session):
        repo = SupplierRepository(test_session)
        supplier = await repo.create(
            name='ООО "СтройМастер"',
            tax_id="7701001001",
            bank_account_number="40702810100000001001",
            legal_address_city="Москва",
            legal_address_street="ул. Ленина, д. 10",
            bank_address_city="Москва",
        )

        assert supplier.supplier_id == 1
        assert supplier.legal_address_city == "Москва"
        assert supplier.bank_address_zip is None

    @pytest.mark.asyncio
    async def test_duplicate_tax_id(self, test_session):
        repo = SupplierRepository(test_session)
        await repo.create(name="A", tax_id="7701001001", bank_account_number="1")

        with pytest.raises(UniquenessViolation) as exc_info:
            await repo.create(name="B", tax_id="7701001001", bank_account_number="2")

        assert exc_info.value.constraint == "suppliers_tax_id_key"
        assert len(await repo.list_all()) == 1

    @pytest.mark.asyncio
    async def test_duplicate_bank_account(self, test_session):
        repo = SupplierRepository(test_session)
        await repo.create(name="A", tax_id="1", bank_account_number="40702810100000001001")

        with pytest.raises(UniquenessViolation) as exc_info:
            await repo.create(name="B", tax_id="2", bank_account_number="40702810100000001001")

        assert exc_info.value.constraint == "suppliers_bank_account_number_key"

    @pytest.mark.asyncio
    async def test_missing_identifiers_do_not_collide(self, test_session):
        repo = SupplierRepository(test_session)
        await repo.create(name="A")
        await repo.create(name="B", tax_id="", bank_account_number="  ")

        suppliers = await repo.list_all()
        assert len(suppliers) == 2
        assert suppliers[1].tax_id is None

    @pytest.mark.asyncio
    async def test_blank_name_rejected(self, test_session):
        with pytest.raises(ConstraintViolation):
            await SupplierRepository(test_session).create(name="")

    @pytest.mark.asyncio
    async def test_unknown_field_rejected(self, test_session):
        with pytest.raises(ConstraintViolation):
            await SupplierRepository(test_session).create(name="A", phone="123")


class TestReadUpdateDelete:

    @pytest.mark.asyncio
    async def test_get_by_tax_id(self, seeded_session):
        repo = SupplierRepository(seeded_session)
        supplier = await repo.get_by_tax_id("5002002002")

        assert supplier.supplier_id == 2
        assert await repo.get_by_tax_id("0000000000") is None

    @pytest.mark.asyncio
    async def test_update(self, seeded_session):
        repo = SupplierRepository(seeded_session)
        supplier = await repo.update(3, bank_address_city="Казань", legal_address_zip="420000")

        assert supplier.bank_address_city == "Казань"
        assert supplier.legal_address_zip == "420000"
        assert supplier.name == "ИП Иванов А.В."

    @pytest.mark.asyncio
    async def test_update_keeps_own_identifiers(self, seeded_session):
        repo = SupplierRepository(seeded_session)
        supplier = await repo.update(1, tax_id="7701001001")
        assert supplier.tax_id == "7701001001"

    @pytest.mark.asyncio
    async def test_update_to_taken_tax_id(self, seeded_session):
        repo = SupplierRepository(seeded_session)
        with pytest.raises(UniquenessViolation):
            await repo.update(1, tax_id="5002002002")

        supplier = await repo.get(1)
        assert supplier.tax_id == "7701001001"

    @pytest.mark.asyncio
    async def test_update_missing(self, test_session):
        with pytest.raises(NotFound):
            await SupplierRepository(test_session).update(7, name="X")

    @pytest.mark.asyncio
    async def test_delete_unreferenced(self, test_session):
        repo = SupplierRepository(test_session)
        supplier = await repo.create(name="A")

        await repo.delete(supplier.supplier_id)
        assert await repo.get(supplier.supplier_id) is None

    @pytest.mark.asyncio
    async def test_delete_referenced_blocked(self, seeded_session):
        repo = SupplierRepository(seeded_session)
        with pytest.raises(ReferentialBlock):
            await repo.delete(1)

        assert await repo.get(1) is not None

    @pytest.mark.asyncio
    async def test_next_id_after_seed(self, seeded_session):
        supplier = await SupplierRepository(seeded_session).create(name="ООО Новый")
        assert supplier.supplier_id == 4
