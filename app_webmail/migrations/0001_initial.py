from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
    ]

    operations = [
        migrations.CreateModel(
            name='SendLog',
            fields=[
                ('id', models.BigAutoField(primary_key=True, serialize=False)),
                ('username', models.CharField(db_index=True, max_length=255)),
                ('recipients', models.TextField(default='')),
                ('subject', models.CharField(default='', max_length=255)),
                ('message_id', models.CharField(default='', max_length=255)),
                ('ct', models.BigIntegerField(db_index=True, default=0)),
            ],
            options={
                'db_table': 'webmail_send_log',
            },
        ),
        migrations.CreateModel(
            name='VmailMailbox',
            fields=[
                ('username', models.CharField(max_length=255, primary_key=True, serialize=False)),
                ('password', models.CharField(max_length=255)),
                ('name', models.CharField(default='', max_length=255)),
                ('domain', models.CharField(db_index=True, max_length=255)),
                ('quota', models.BigIntegerField(default=0)),
                ('storagebasedirectory', models.CharField(default='', max_length=255)),
                ('storagenode', models.CharField(default='', max_length=255)),
                ('maildir', models.CharField(default='', max_length=255)),
                ('active', models.BooleanField(default=True)),
                ('enablesmtp', models.BooleanField(default=True)),
                ('enableimap', models.BooleanField(default=True)),
                ('created', models.DateTimeField(null=True)),
            ],
            options={
                'db_table': 'mailbox',
                'managed': False,
            },
        ),
    ]
