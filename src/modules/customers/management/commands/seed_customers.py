from __future__ import annotations

from django.core.management.base import BaseCommand

from modules.customers.constants import CustomerType
from modules.customers.dtos import CustomerRequestDTO
from modules.customers.exceptions import CustomerAlreadyExists
from modules.customers.publishers import get_event_publisher
from modules.customers.repositories.django_repository import CustomerDjangoRepository
from modules.customers.services import CustomerService
from modules.customers.validators import CustomerValidator

SEED_CUSTOMERS = [
    {
        "customer_type": CustomerType.PERSONAL,
        "document_type": "DNI",
        "document_number": "45879632",
        "names": "Ana Lucia",
        "last_name": "Quispe",
        "mother_last_name": "Mamani",
        "phone_number": "987654321",
        "email": "ana.quispe@example.com",
        "address": "Av. Arequipa 1234, Lima",
    },
    {
        "customer_type": CustomerType.BUSINESS,
        "document_type": "RUC",
        "document_number": "20512345678",
        "names": "Carlos",
        "last_name": "Rojas",
        "mother_last_name": "Salazar",
        "business_name": "Inversiones Rojas SAC",
        "phone_number": "014567890",
        "email": "contacto@inversionesrojas.pe",
    },
    {
        "customer_type": CustomerType.PERSONAL,
        "document_type": "FOREIGNERS_CARD",
        "document_number": "CE0012345678",
        "names": "Mariana",
        "last_name": "Gomes",
        "mother_last_name": "Silva",
        "phone_number": "912345678",
    },
    {
        "customer_type": CustomerType.VIP,
        "document_type": "PASSPORT",
        "document_number": "PA1234567890123",
        "names": "John",
        "last_name": "Carter",
        "mother_last_name": "Hayes",
        "phone_number": "998877665",
        "email": "john.carter@example.com",
        "has_credit_card": True,
    },
]


class Command(BaseCommand):
    help = "Seed the database with demo customers (one per document type)."

    def handle(self, *args, **options):
        repository = CustomerDjangoRepository()
        service = CustomerService(
            repository=repository,
            validator=CustomerValidator(repository),
            publisher=get_event_publisher(),
        )

        created = skipped = 0
        for data in SEED_CUSTOMERS:
            try:
                service.create_customer(CustomerRequestDTO(**data))
            except CustomerAlreadyExists:
                skipped += 1
                continue
            created += 1

        self.stdout.write(
            self.style.SUCCESS(f"Seed completed: created={created}, skipped={skipped}")
        )
