"""
Pharmacies — Service Tests

@file pharmacies/tests/test_services.py
"""

from decimal import Decimal

import pytest

from core.exceptions import DuplicateResourceError
from pharmacies.services import PharmacyService
from tests.factories import InvoiceFactory, PharmacyFactory

pytestmark = pytest.mark.django_db


class TestPharmacyService:
    def test_create(self):
        pharmacy = PharmacyService.create_pharmacy(
            name='Main Street Pharmacy', registration_number='REG-1', payment_terms=15,
        )
        assert pharmacy.payment_terms == 15
        assert pharmacy.credit_limit == 0

    def test_registration_number_is_unique(self):
        PharmacyFactory(registration_number='REG-DUP')
        with pytest.raises(DuplicateResourceError):
            PharmacyService.create_pharmacy(name='Copy', registration_number='REG-DUP')

    def test_deleted_pharmacy_frees_registration_number(self):
        old = PharmacyFactory(registration_number='REG-OLD')
        PharmacyService.delete_pharmacy(pharmacy=old)
        new = PharmacyService.create_pharmacy(name='Reopened', registration_number='REG-OLD')
        assert new.pk != old.pk

    def test_update_keeps_own_registration_number(self):
        pharmacy = PharmacyFactory(registration_number='REG-SELF')
        updated = PharmacyService.update_pharmacy(
            pharmacy_id=pharmacy.pk, registration_number='REG-SELF', name='Renamed',
        )
        assert updated.name == 'Renamed'

    def test_update_to_taken_number(self):
        PharmacyFactory(registration_number='REG-A')
        other = PharmacyFactory(registration_number='REG-B')
        with pytest.raises(DuplicateResourceError):
            PharmacyService.update_pharmacy(pharmacy_id=other.pk, registration_number='REG-A')

    def test_outstanding_balance(self):
        pharmacy = PharmacyFactory()
        InvoiceFactory(pharmacy=pharmacy, status='issued', total_amount=Decimal('100.00'))
        InvoiceFactory(
            pharmacy=pharmacy, status='partial',
            total_amount=Decimal('50.00'), paid_amount=Decimal('20.00'),
        )
        InvoiceFactory(pharmacy=pharmacy, status='cancelled', total_amount=Decimal('999.00'))
        InvoiceFactory(pharmacy=pharmacy, status='draft', total_amount=Decimal('999.00'))
        InvoiceFactory(pharmacy=pharmacy, status='issued', total_amount=Decimal('999.00'), is_deleted=True)

        assert PharmacyService.outstanding_balance(pharmacy) == Decimal('130.00')

    def test_snapshot(self):
        pharmacy = PharmacyFactory(name='Harbor Pharmacy', credit_limit=Decimal('500.00'))
        snapshot = PharmacyService.snapshot(pharmacy)
        assert snapshot['name'] == 'Harbor Pharmacy'
        assert snapshot['credit_limit'] == '500.00'
