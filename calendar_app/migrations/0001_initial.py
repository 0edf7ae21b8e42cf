from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='Holiday',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(max_length=120)),
                ('date', models.DateField()),
                ('is_national', models.BooleanField(default=True)),
                ('year', models.PositiveIntegerField(db_index=True, editable=False)),
            ],
            options={
                'ordering': ['date', 'name'],
            },
        ),
        migrations.AddConstraint(
            model_name='holiday',
            constraint=models.UniqueConstraint(fields=('date', 'name'), name='unique_holiday_per_date'),
        ),
    ]
