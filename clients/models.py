"""
Clients — Models

A client receives assigned stock: either a patient (identified by a
patient ID) or a hospital department (identified by a department ID).

@file clients/models.py
"""

from django.db import models
from django.utils.translation import gettext_lazy as _

from core.models import RegulatedModel


class Client(RegulatedModel):

    class TypeChoices(models.TextChoices):
        PATIENT = 'patient', _('Patient')
        DEPARTMENT = 'department', _('Department')

    name = models.CharField(_('name'), max_length=255, db_index=True)
    client_type = models.CharField(
        _('type'), max_length=12,
        choices=TypeChoices.choices, db_index=True,
    )
    contact_person = models.CharField(_('contact person'), max_length=255, blank=True)
    contact_number = models.CharField(_('contact number'), max_length=30, blank=True)
    email = models.EmailField(_('email'), blank=True)
    patient_id = models.CharField(_('patient ID'), max_length=50, blank=True)
    department_id = models.CharField(_('department ID'), max_length=50, blank=True)

    class Meta:
        verbose_name = _('client')
        verbose_name_plural = _('clients')
        ordering = ['name']

    def __str__(self):
        return f'{self.name} ({self.get_client_type_display()})'

    @property
    def identifier(self) -> str:
        if self.client_type == self.TypeChoices.PATIENT:
            return self.patient_id
        return self.department_id

    def save(self, *args, **kwargs):
        # Only the identifier matching the type is kept.
        if self.client_type == self.TypeChoices.PATIENT:
            self.department_id = ''
        elif self.client_type == self.TypeChoices.DEPARTMENT:
            self.patient_id = ''
        super().save(*args, **kwargs)
