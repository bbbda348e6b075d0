# Generated manually for the expenses app

import datetime
import uuid
from decimal import Decimal
import django.core.validators
import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
        ('rooms', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='Expense',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('title', models.CharField(max_length=200)),
                ('amount', models.DecimalField(decimal_places=2, max_digits=10, validators=[django.core.validators.MinValueValidator(Decimal('0.01'))])),
                ('category', models.CharField(choices=[('general', 'General'), ('groceries', 'Groceries'), ('rent', 'Rent'), ('utilities', 'Utilities'), ('internet', 'Internet'), ('entertainment', 'Entertainment'), ('household', 'Household'), ('other', 'Other')], default='general', max_length=20)),
                ('date', models.DateField(default=datetime.date.today)),
                ('receipt', models.URLField(blank=True)),
                ('settled', models.BooleanField(default=False)),
                ('settled_at', models.DateTimeField(blank=True, null=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('created_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='expenses_created', to=settings.AUTH_USER_MODEL)),
                ('paid_by', models.ForeignKey(null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='expenses_paid', to='rooms.roommate')),
                ('room', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='expenses', to='rooms.room')),
            ],
            options={
                'db_table': 'expenses',
                'ordering': ['-date', '-created_at'],
                'indexes': [
                    models.Index(fields=['room', 'settled'], name='expenses_room_settled_idx'),
                    models.Index(fields=['room', 'date'], name='expenses_room_date_idx'),
                ],
            },
        ),
        migrations.CreateModel(
            name='ExpenseShare',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('expense', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='shares', to='expenses.expense')),
                ('roommate', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='expense_shares', to='rooms.roommate')),
            ],
            options={
                'db_table': 'expense_shares',
                'unique_together': {('expense', 'roommate')},
            },
        ),
    ]
