import uuid6
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Customer",
            fields=[
                (
                    "id",
                    models.UUIDField(
                        default=uuid6.uuid7,
                        editable=False,
                        primary_key=True,
                        serialize=False,
                    ),
                ),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("active", models.BooleanField(db_index=True, default=True)),
                (
                    "customer_type",
                    models.CharField(
                        choices=[
                            ("PERSONAL", "Personal"),
                            ("BUSINESS", "Business"),
                            ("VIP", "VIP"),
                            ("PYME", "PYME"),
                        ],
                        max_length=16,
                    ),
                ),
                (
                    "document_type",
                    models.CharField(
                        choices=[
                            ("DNI", "DNI"),
                            ("RUC", "RUC"),
                            ("FOREIGNERS_CARD", "FOREIGNERS_CARD"),
                            ("PASSPORT", "PASSPORT"),
                        ],
                        max_length=16,
                    ),
                ),
                ("document_number", models.CharField(max_length=15, unique=True)),
                ("names", models.CharField(max_length=255)),
                ("last_name", models.CharField(max_length=255)),
                (
                    "mother_last_name",
                    models.CharField(blank=True, default="", max_length=255),
                ),
                (
                    "business_name",
                    models.CharField(blank=True, default="", max_length=255),
                ),
                ("birthdate", models.DateField(blank=True, default=None, null=True)),
                ("phone_number", models.CharField(max_length=20)),
                ("email", models.EmailField(blank=True, default="", max_length=254)),
                ("address", models.TextField(blank=True, default="")),
                ("has_credit_card", models.BooleanField(default=False)),
            ],
            options={
                "db_table": "customers",
                "ordering": ["-created_at"],
                "indexes": [
                    models.Index(fields=["-created_at"], name="customers_created_idx"),
                    models.Index(fields=["customer_type"], name="customers_type_idx"),
                ],
            },
        ),
    ]
