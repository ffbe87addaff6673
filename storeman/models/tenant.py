"""
Tenant and Member models — identity boundary and role records.
"""

from django.conf import settings
from django.db import models
from django.utils.translation import gettext_lazy as _

from storeman.models.enums import Role


class Tenant(models.Model):
    """
    Isolated customer account.

    Every other Storeman entity carries a tenant reference, directly or
    through its owner. Services never read or write across tenants.
    """

    name = models.CharField(max_length=150, verbose_name=_('Nome'))

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _('Tenant')
        verbose_name_plural = _('Tenants')
        ordering = ['name']

    def __str__(self) -> str:
        return self.name


class Member(models.Model):
    """User membership in a tenant, with a role."""

    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='storeman_member',
        verbose_name=_('Usuário'),
    )
    tenant = models.ForeignKey(
        Tenant,
        on_delete=models.CASCADE,
        related_name='members',
        verbose_name=_('Tenant'),
    )
    role = models.CharField(
        max_length=20,
        choices=Role.choices,
        default=Role.STAFF,
        verbose_name=_('Papel'),
    )

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        verbose_name = _('Membro')
        verbose_name_plural = _('Membros')
        indexes = [
            models.Index(fields=['tenant', 'role'], name='storeman_member_tenant_role'),
        ]

    @property
    def can_manage(self) -> bool:
        """May create/mutate catalog, suppliers and purchase orders?"""
        return self.role in (Role.OWNER, Role.MANAGER)

    def __str__(self) -> str:
        return f"{self.user} @ {self.tenant} ({self.get_role_display()})"
