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
                    models.BigAutoField(
                        auto_created=True, primary_key=True, serialize=False, verbose_name="ID"
                    ),
                ),
                (
                    "name",
                    models.CharField(
                        help_text="Customer name printed in the Bill To block", max_length=255
                    ),
                ),
                (
                    "mobile",
                    models.CharField(
                        help_text="Mobile number, used to look the customer up at the counter",
                        max_length=20,
                        unique=True,
                    ),
                ),
                (
                    "address",
                    models.TextField(
                        blank=True, default="", help_text="Postal address printed on receipts"
                    ),
                ),
                (
                    "created_at",
                    models.DateTimeField(
                        auto_now_add=True,
                        help_text="When the customer was registered; drives new-customer analytics",
                    ),
                ),
                (
                    "updated_at",
                    models.DateTimeField(
                        auto_now=True, help_text="When the customer was last updated"
                    ),
                ),
            ],
            options={
                "verbose_name": "Customer",
                "verbose_name_plural": "Customers",
                "db_table": "customers",
                "ordering": ["name"],
                "indexes": [models.Index(fields=["created_at"], name="cust_created_idx")],
            },
        ),
    ]
