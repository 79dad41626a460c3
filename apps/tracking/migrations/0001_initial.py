# Initial migration for the Point model

from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
    ]

    operations = [
        migrations.CreateModel(
            name='Point',
            fields=[
                ('id', models.BigAutoField(primary_key=True, serialize=False)),
                ('lat', models.CharField(max_length=255)),
                ('lon', models.CharField(max_length=255)),
                ('alt', models.CharField(default='0', max_length=255)),
                ('speed', models.CharField(default='0', max_length=255)),
                ('bearing', models.CharField(default='0', help_text='Opaque direction text', max_length=255)),
                ('hdop', models.CharField(default='0', help_text='Horizontal Dilution of Precision', max_length=255)),
                ('time', models.CharField(default='0', max_length=255)),
                ('user', models.CharField(default='0', max_length=255)),
                ('session', models.CharField(default='0', max_length=255)),
            ],
            options={
                'db_table': 'tracking_point',
                'ordering': ['id'],
            },
        ),
        migrations.AddIndex(
            model_name='point',
            index=models.Index(fields=['user'], name='tracking_point_user_idx'),
        ),
        migrations.AddIndex(
            model_name='point',
            index=models.Index(fields=['session'], name='tracking_point_session_idx'),
        ),
        migrations.AddIndex(
            model_name='point',
            index=models.Index(fields=['user', 'session'], name='tracking_point_scope_idx'),
        ),
    ]
