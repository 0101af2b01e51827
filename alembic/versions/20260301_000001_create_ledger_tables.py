"""Create landlord ledger tables

Revision ID: 20260301_000001
Revises: None
Create Date: 2026-03-01

Creates properties, tenants, tenancies (with the tenant link table),
rent payments, property expenses, serviced-accommodation bookings and
property manager payment terms.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '20260301_000001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _landlord_and_timestamps():
    return [
        sa.Column('landlord_id', sa.String(length=36), nullable=False),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
    ]


def upgrade() -> None:
    """Create the ledger tables."""
    op.create_table(
        'properties',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('address_line_1', sa.String(length=255), nullable=True),
        sa.Column('address_line_2', sa.String(length=255), nullable=True),
        sa.Column('city', sa.String(length=100), nullable=True),
        sa.Column('postcode', sa.String(length=20), nullable=True),
        sa.Column('property_category', sa.String(length=20), nullable=False, server_default='btr'),
        sa.Column('property_type', sa.String(length=50), nullable=True),
        sa.Column('status', sa.String(length=20), nullable=False, server_default='active'),
        sa.Column('bedrooms', sa.Integer(), nullable=True),
        sa.Column('bathrooms', sa.Integer(), nullable=True),
        sa.Column('is_hmo', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('hmo_license_number', sa.String(length=100), nullable=True),
        sa.Column('hmo_license_expiry', sa.Date(), nullable=True),
        sa.Column('currency', sa.String(length=3), nullable=False, server_default='GBP'),
        sa.Column('is_managed', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('management_fee_percent', sa.Numeric(precision=5, scale=2), nullable=False, server_default='0'),
        sa.Column('fixed_cleaning_fee', sa.Numeric(precision=10, scale=2), nullable=False, server_default='0'),
        sa.Column('property_manager_name', sa.String(length=255), nullable=True),
        sa.Column('purchase_price', sa.Numeric(precision=14, scale=2), nullable=True),
        sa.Column('current_value', sa.Numeric(precision=14, scale=2), nullable=True),
        sa.Column('monthly_mortgage', sa.Numeric(precision=12, scale=2), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('deleted_at', sa.DateTime(), nullable=True),
        *_landlord_and_timestamps(),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_properties_landlord_id', 'properties', ['landlord_id'])
    op.create_index('ix_properties_deleted_at', 'properties', ['deleted_at'])

    op.create_table(
        'tenants',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('first_name', sa.String(length=100), nullable=False),
        sa.Column('last_name', sa.String(length=100), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=True),
        sa.Column('phone', sa.String(length=50), nullable=True),
        sa.Column('phone_secondary', sa.String(length=50), nullable=True),
        sa.Column('date_of_birth', sa.Date(), nullable=True),
        sa.Column('emergency_contact_name', sa.String(length=200), nullable=True),
        sa.Column('emergency_contact_phone', sa.String(length=50), nullable=True),
        sa.Column('emergency_contact_relationship', sa.String(length=100), nullable=True),
        sa.Column('employment_status', sa.String(length=100), nullable=True),
        sa.Column('employer_name', sa.String(length=255), nullable=True),
        sa.Column('annual_income', sa.Numeric(precision=12, scale=2), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('deleted_at', sa.DateTime(), nullable=True),
        *_landlord_and_timestamps(),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_tenants_landlord_id', 'tenants', ['landlord_id'])
    op.create_index('ix_tenants_deleted_at', 'tenants', ['deleted_at'])

    op.create_table(
        'tenancies',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('property_id', sa.Integer(), nullable=False),
        sa.Column('tenancy_type', sa.String(length=50), nullable=True),
        sa.Column('status', sa.String(length=20), nullable=False, server_default='pending'),
        sa.Column('start_date', sa.Date(), nullable=False),
        sa.Column('end_date', sa.Date(), nullable=True),
        sa.Column('is_periodic', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('rent_amount', sa.Numeric(precision=12, scale=2), nullable=False),
        sa.Column('rent_frequency', sa.String(length=20), nullable=False, server_default='monthly'),
        sa.Column('rent_due_day', sa.Integer(), nullable=False, server_default='1'),
        sa.Column('deposit_amount', sa.Numeric(precision=12, scale=2), nullable=True),
        sa.Column('room_number', sa.String(length=20), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('notice_given_date', sa.Date(), nullable=True),
        sa.Column('notice_expiry_date', sa.Date(), nullable=True),
        sa.Column('deleted_at', sa.DateTime(), nullable=True),
        *_landlord_and_timestamps(),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['property_id'], ['properties.id'], name='fk_tenancies_property_id'),
        sa.CheckConstraint('rent_due_day BETWEEN 1 AND 31', name='ck_tenancies_rent_due_day'),
    )
    op.create_index('ix_tenancies_landlord_id', 'tenancies', ['landlord_id'])
    op.create_index('ix_tenancies_property_id', 'tenancies', ['property_id'])
    op.create_index('ix_tenancies_status', 'tenancies', ['status'])
    op.create_index('ix_tenancies_deleted_at', 'tenancies', ['deleted_at'])

    op.create_table(
        'tenancy_tenants',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('tenancy_id', sa.Integer(), nullable=False),
        sa.Column('tenant_id', sa.Integer(), nullable=False),
        sa.Column('is_primary', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(
            ['tenancy_id'], ['tenancies.id'], name='fk_tenancy_tenants_tenancy_id', ondelete='CASCADE'
        ),
        sa.ForeignKeyConstraint(
            ['tenant_id'], ['tenants.id'], name='fk_tenancy_tenants_tenant_id', ondelete='CASCADE'
        ),
    )
    op.create_index('ix_tenancy_tenants_tenancy_id', 'tenancy_tenants', ['tenancy_id'])
    op.create_index('ix_tenancy_tenants_tenant_id', 'tenancy_tenants', ['tenant_id'])

    op.create_table(
        'rent_payments',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('tenancy_id', sa.Integer(), nullable=False),
        sa.Column('property_id', sa.Integer(), nullable=False),
        sa.Column('billing_period', sa.Date(), nullable=False),
        sa.Column('due_date', sa.Date(), nullable=False),
        sa.Column('amount_due', sa.Numeric(precision=12, scale=2), nullable=False),
        sa.Column('amount_paid', sa.Numeric(precision=12, scale=2), nullable=False, server_default='0'),
        sa.Column('status', sa.String(length=20), nullable=False, server_default='pending'),
        sa.Column('paid_date', sa.Date(), nullable=True),
        sa.Column('payment_method', sa.String(length=50), nullable=True),
        sa.Column('payment_reference', sa.String(length=255), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        *_landlord_and_timestamps(),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(
            ['tenancy_id'], ['tenancies.id'], name='fk_rent_payments_tenancy_id', ondelete='CASCADE'
        ),
        sa.ForeignKeyConstraint(['property_id'], ['properties.id'], name='fk_rent_payments_property_id'),
        # One obligation per tenancy per billing month
        sa.UniqueConstraint('tenancy_id', 'billing_period', name='uq_rent_payments_tenancy_period'),
    )
    op.create_index('ix_rent_payments_landlord_id', 'rent_payments', ['landlord_id'])
    op.create_index('ix_rent_payments_tenancy_id', 'rent_payments', ['tenancy_id'])
    op.create_index('ix_rent_payments_property_id', 'rent_payments', ['property_id'])
    op.create_index('ix_rent_payments_billing_period', 'rent_payments', ['billing_period'])
    op.create_index('ix_rent_payments_due_date', 'rent_payments', ['due_date'])
    op.create_index('ix_rent_payments_status', 'rent_payments', ['status'])

    op.create_table(
        'property_expenses',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('property_id', sa.Integer(), nullable=False),
        sa.Column('category', sa.String(length=50), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('amount', sa.Numeric(precision=12, scale=2), nullable=False),
        sa.Column('frequency', sa.String(length=20), nullable=False, server_default='one-off'),
        sa.Column('expense_date', sa.Date(), nullable=False),
        sa.Column('end_date', sa.Date(), nullable=True),
        sa.Column('receipt_url', sa.String(length=500), nullable=True),
        sa.Column('is_tax_deductible', sa.Boolean(), nullable=False, server_default=sa.true()),
        *_landlord_and_timestamps(),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(
            ['property_id'], ['properties.id'], name='fk_property_expenses_property_id', ondelete='CASCADE'
        ),
    )
    op.create_index('ix_property_expenses_landlord_id', 'property_expenses', ['landlord_id'])
    op.create_index('ix_property_expenses_property_id', 'property_expenses', ['property_id'])
    op.create_index('ix_property_expenses_category', 'property_expenses', ['category'])
    op.create_index('ix_property_expenses_expense_date', 'property_expenses', ['expense_date'])

    op.create_table(
        'sa_bookings',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('property_id', sa.Integer(), nullable=False),
        sa.Column('reservation_id', sa.String(length=100), nullable=True),
        sa.Column('platform', sa.String(length=50), nullable=False, server_default='airbnb'),
        sa.Column('guest_name', sa.String(length=255), nullable=True),
        sa.Column('guest_email', sa.String(length=255), nullable=True),
        sa.Column('guest_phone', sa.String(length=50), nullable=True),
        sa.Column('booking_date', sa.Date(), nullable=True),
        sa.Column('check_in', sa.Date(), nullable=False),
        sa.Column('check_out', sa.Date(), nullable=False),
        sa.Column('status', sa.String(length=20), nullable=False, server_default='confirmed'),
        sa.Column('currency', sa.String(length=3), nullable=False, server_default='GBP'),
        sa.Column('nightly_rate', sa.Numeric(precision=10, scale=2), nullable=True),
        sa.Column('total_nights', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('gross_booking_value', sa.Numeric(precision=12, scale=2), nullable=False, server_default='0'),
        sa.Column('platform_fee', sa.Numeric(precision=12, scale=2), nullable=False, server_default='0'),
        sa.Column('net_revenue', sa.Numeric(precision=12, scale=2), nullable=False, server_default='0'),
        sa.Column('payment_status', sa.String(length=20), nullable=False, server_default='pending'),
        sa.Column('received_date', sa.Date(), nullable=True),
        sa.Column('cleaning_fee', sa.Numeric(precision=10, scale=2), nullable=False, server_default='0'),
        sa.Column('pm_fee_amount', sa.Numeric(precision=12, scale=2), nullable=False, server_default='0'),
        sa.Column('total_pm_deduction', sa.Numeric(precision=12, scale=2), nullable=False, server_default='0'),
        sa.Column('pm_payment_status', sa.String(length=20), nullable=False, server_default='pending'),
        sa.Column('pm_paid_date', sa.Date(), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        *_landlord_and_timestamps(),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(
            ['property_id'], ['properties.id'], name='fk_sa_bookings_property_id', ondelete='CASCADE'
        ),
    )
    op.create_index('ix_sa_bookings_landlord_id', 'sa_bookings', ['landlord_id'])
    op.create_index('ix_sa_bookings_property_id', 'sa_bookings', ['property_id'])
    op.create_index('ix_sa_bookings_check_in', 'sa_bookings', ['check_in'])

    op.create_table(
        'pm_payment_terms',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('property_id', sa.Integer(), nullable=False),
        sa.Column('description', sa.String(length=255), nullable=False),
        sa.Column('timing', sa.String(length=100), nullable=False),
        sa.Column('currency', sa.String(length=3), nullable=True),
        sa.Column('percentage', sa.Numeric(precision=5, scale=2), nullable=True),
        sa.Column('cleaning_fee', sa.Numeric(precision=10, scale=2), nullable=True),
        *_landlord_and_timestamps(),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(
            ['property_id'], ['properties.id'], name='fk_pm_payment_terms_property_id', ondelete='CASCADE'
        ),
    )
    op.create_index('ix_pm_payment_terms_landlord_id', 'pm_payment_terms', ['landlord_id'])
    op.create_index('ix_pm_payment_terms_property_id', 'pm_payment_terms', ['property_id'], unique=True)


def downgrade() -> None:
    """Drop the ledger tables."""
    op.drop_table('pm_payment_terms')
    op.drop_table('sa_bookings')
    op.drop_table('property_expenses')
    op.drop_table('rent_payments')
    op.drop_table('tenancy_tenants')
    op.drop_table('tenancies')
    op.drop_table('tenants')
    op.drop_table('properties')
