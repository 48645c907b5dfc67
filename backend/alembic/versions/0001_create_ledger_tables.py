"""create_ledger_tables

Revision ID: 0001
Revises:
Create Date: 2025-11-01 00:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '0001'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema - Create catalog, units, suppliers and receipt tables."""

    conn = op.get_bind()
    inspector = sa.inspect(conn)

    def table_exists(name):
        return inspector.has_table(name)

    if not table_exists('material_catalog'):
        op.create_table(
            'material_catalog',
            sa.Column('material_id', sa.Integer(), autoincrement=True, nullable=False),
            sa.Column('class_code', sa.String(length=50), nullable=True),
            sa.Column('group_code', sa.String(length=50), nullable=True),
            sa.Column('material_name', sa.String(length=255), nullable=False),
            sa.PrimaryKeyConstraint('material_id', name='material_catalog_pkey'),
            sqlite_autoincrement=True,
        )

    if not table_exists('units_of_measure'):
        op.create_table(
            'units_of_measure',
            sa.Column('material_id', sa.Integer(), nullable=False),
            sa.Column('unit_name', sa.String(length=50), nullable=False),
            sa.ForeignKeyConstraint(
                ['material_id'], ['material_catalog.material_id'],
                name='units_of_measure_material_id_fkey',
                ondelete='CASCADE',
            ),
            sa.PrimaryKeyConstraint('material_id', 'unit_name', name='units_of_measure_pkey'),
        )

    if not table_exists('suppliers'):
        op.create_table(
            'suppliers',
            sa.Column('supplier_id', sa.Integer(), autoincrement=True, nullable=False),
            sa.Column('name', sa.String(length=255), nullable=False),
            sa.Column('tax_id', sa.String(length=12), nullable=True),
            sa.Column('legal_address_zip', sa.String(length=10), nullable=True),
            sa.Column('legal_address_city', sa.String(length=100), nullable=True),
            sa.Column('legal_address_street', sa.String(length=100), nullable=True),
            sa.Column('legal_address_house', sa.String(length=20), nullable=True),
            sa.Column('bank_address_zip', sa.String(length=10), nullable=True),
            sa.Column('bank_address_city', sa.String(length=100), nullable=True),
            sa.Column('bank_address_street', sa.String(length=100), nullable=True),
            sa.Column('bank_address_house', sa.String(length=20), nullable=True),
            sa.Column('bank_account_number', sa.String(length=50), nullable=True),
            sa.PrimaryKeyConstraint('supplier_id', name='suppliers_pkey'),
            sa.UniqueConstraint('tax_id', name='suppliers_tax_id_key'),
            sa.UniqueConstraint('bank_account_number', name='suppliers_bank_account_number_key'),
            sqlite_autoincrement=True,
        )

    if not table_exists('storage_units'):
        op.create_table(
            'storage_units',
            sa.Column('order_number', sa.Integer(), autoincrement=True, nullable=False),
            sa.Column('date', sa.Date(), nullable=False),
            sa.Column('supplier_id', sa.Integer(), nullable=True),
            sa.Column('balance_sheet_account', sa.String(length=50), nullable=True),
            sa.Column('document_code', sa.String(length=50), nullable=True),
            sa.Column('document_number', sa.String(length=50), nullable=True),
            sa.Column('material_id', sa.Integer(), nullable=True),
            sa.Column('material_account', sa.String(length=50), nullable=True),
            sa.Column('unit_of_measure_code', sa.String(length=50), nullable=False),
            sa.Column('quantity', sa.Numeric(precision=10, scale=3), nullable=False),
            sa.Column('unit_price', sa.Numeric(precision=10, scale=2), nullable=False),
            sa.CheckConstraint('quantity > 0', name='storage_units_quantity_check'),
            sa.CheckConstraint('unit_price >= 0', name='storage_units_unit_price_check'),
            sa.ForeignKeyConstraint(
                ['supplier_id'], ['suppliers.supplier_id'],
                name='storage_units_supplier_id_fkey',
                ondelete='RESTRICT',
            ),
            sa.ForeignKeyConstraint(
                ['material_id'], ['material_catalog.material_id'],
                name='storage_units_material_id_fkey',
                ondelete='RESTRICT',
            ),
            sa.ForeignKeyConstraint(
                ['material_id', 'unit_of_measure_code'],
                ['units_of_measure.material_id', 'units_of_measure.unit_name'],
                name='storage_units_material_id_unit_of_measure_code_fkey',
                onupdate='CASCADE',
                ondelete='RESTRICT',
            ),
            sa.PrimaryKeyConstraint('order_number', name='storage_units_pkey'),
            sqlite_autoincrement=True,
        )


def downgrade() -> None:
    """Downgrade schema - Drop the ledger tables."""

    # Drop tables in reverse order due to foreign keys
    op.drop_table('storage_units')
    op.drop_table('suppliers')
    op.drop_table('units_of_measure')
    op.drop_table('material_catalog')
