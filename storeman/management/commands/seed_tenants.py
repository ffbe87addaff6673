"""
Management command to create demo tenants and their members.

Usage:
    python manage.py seed_tenants
    python manage.py seed_tenants --password secret

Idempotent: existing tenants and users are reused.
"""

from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand
from django.db import transaction

from storeman.models import Member, Role, Tenant

DEMO_TENANTS = [
    {
        'name': 'Alpha Store',
        'members': [
            ('owner@alpha.com', Role.OWNER),
            ('manager@alpha.com', Role.MANAGER),
            ('staff@alpha.com', Role.STAFF),
        ],
    },
    {
        'name': 'Beta Mart',
        'members': [
            ('owner@beta.com', Role.OWNER),
            ('staff@beta.com', Role.STAFF),
        ],
    },
]


class Command(BaseCommand):
    """Seed demo tenants command."""

    help = 'Cria tenants de demonstração com proprietário, gerente e equipe'

    def add_arguments(self, parser):
        parser.add_argument(
            '--password',
            default='password123',
            help='Senha dos usuários criados'
        )

    @transaction.atomic
    def handle(self, *args, **options):
        User = get_user_model()

        for demo in DEMO_TENANTS:
            tenant, created = Tenant.objects.get_or_create(name=demo['name'])
            if created:
                self.stdout.write(self.style.SUCCESS(f'Tenant criado: {tenant.name}'))
            else:
                self.stdout.write(self.style.WARNING(f'Tenant já existe: {tenant.name}'))

            for email, role in demo['members']:
                user = User.objects.filter(username=email).first()
                if user is None:
                    user = User.objects.create_user(
                        username=email,
                        email=email,
                        password=options['password'],
                    )
                Member.objects.update_or_create(
                    user=user,
                    defaults={'tenant': tenant, 'role': role},
                )

        self.stdout.write(self.style.SUCCESS('Seed concluído'))
