from decimal import Decimal

from django.conf import settings
import django.core.validators
from django.db import migrations, models
import django.db.models.deletion
import django.utils.timezone


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='Event',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(max_length=255, validators=[django.core.validators.MinLengthValidator(3)])),
                ('event_date', models.DateField(default=django.utils.timezone.localdate)),
                ('event_type', models.CharField(choices=[('CEV_502', 'CEV – 502'), ('FPP_501', 'FPP – 501')], default='CEV_502', max_length=20)),
                ('event_category', models.CharField(choices=[('SHOW', 'Show'), ('CORPORATE', 'Corporate'), ('FAIR', 'Fair / Exhibition'), ('SPORTS', 'Sports'), ('PRIVATE', 'Private party'), ('OTHER', 'Other')], default='OTHER', max_length=20)),
                ('reservation_status', models.CharField(choices=[('NO_RESERVATION', 'No reservation'), ('PRE_RESERVATION', 'Pre-reservation'), ('IN_PROGRESS', 'Reservation in progress'), ('CONFIRMED', 'Reservation confirmed')], default='NO_RESERVATION', max_length=20)),
                ('has_contract', models.BooleanField(default=False)),
                ('estimated_audience', models.PositiveIntegerField(blank=True, null=True)),
                ('observations', models.TextField(blank=True)),
                ('color_override', models.CharField(blank=True, max_length=7, validators=[django.core.validators.RegexValidator('^#[0-9A-Fa-f]{6}$', 'Use a #RRGGBB color.')])),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('version', models.PositiveIntegerField(default=1)),
                ('created_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='events_created', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'ordering': ['event_date', 'name'],
                'indexes': [models.Index(fields=['event_date'], name='event_date_idx')],
            },
        ),
        migrations.CreateModel(
            name='ContractInstallment',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('installment_number', models.PositiveIntegerField()),
                ('amount', models.DecimalField(decimal_places=2, max_digits=12, validators=[django.core.validators.MinValueValidator(Decimal('0.00'))])),
                ('due_date', models.DateField()),
                ('payment_status', models.CharField(choices=[('PAID', 'Paid'), ('UNPAID', 'Unpaid')], default='UNPAID', max_length=10)),
                ('paid_at', models.DateField(blank=True, null=True)),
                ('notes', models.CharField(blank=True, max_length=255)),
                ('event', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='installments', to='events.event')),
            ],
            options={
                'ordering': ['event_id', 'installment_number'],
            },
        ),
        migrations.AddConstraint(
            model_name='contractinstallment',
            constraint=models.UniqueConstraint(fields=('event', 'installment_number'), name='unique_installment_number_per_event'),
        ),
    ]
