"""
Management command to list low-stock variants of a tenant.

Usage:
    python manage.py low_stock_report --tenant 1
    python manage.py low_stock_report --tenant 1 --json
"""

import json
from dataclasses import asdict

from django.core.management.base import BaseCommand, CommandError

from storeman import inventory
from storeman.models import Tenant


class Command(BaseCommand):
    """Low-stock report command."""

    help = 'Lista variantes com estoque efetivo abaixo do mínimo'

    def add_arguments(self, parser):
        parser.add_argument(
            '--tenant',
            type=int,
            required=True,
            help='ID do tenant'
        )
        parser.add_argument(
            '--json',
            action='store_true',
            help='Saída em JSON'
        )

    def handle(self, *args, **options):
        tenant_id = options['tenant']
        if not Tenant.objects.filter(pk=tenant_id).exists():
            raise CommandError(f'Tenant {tenant_id} não encontrado')

        entries = inventory.low_stock(tenant_id)

        if options['json']:
            self.stdout.write(json.dumps([asdict(e) for e in entries]))
            return

        for e in entries:
            self.stdout.write(
                f'{e.sku} ({e.product_name}): estoque {e.current_stock} '
                f'+ a receber {e.incoming_qty} = {e.effective_stock} <= {e.threshold}'
            )

        if entries:
            self.stdout.write(
                self.style.WARNING(f'{len(entries)} variante(s) com estoque baixo')
            )
        else:
            self.stdout.write(self.style.SUCCESS('Nenhuma variante com estoque baixo'))
