# Generated manually - Initial migration for frota app

from decimal import Decimal
from django.conf import settings
from django.db import migrations, models
import django.core.validators
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
        ('accounts', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='ConfiguracaoManutencao',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('tipo', models.CharField(choices=[('TROCA_OLEO', 'Troca de Óleo'), ('REVISAO', 'Revisão'), ('PNEUS_NIVEL', 'Calibragem Pneus'), ('PNEUS_TROCA', 'Troca de Pneus')], max_length=15, unique=True, verbose_name='Tipo de Manutenção')),
                ('intervalo_km', models.PositiveIntegerField(validators=[django.core.validators.MinValueValidator(1)], verbose_name='Intervalo (km)')),
                ('created_at', models.DateTimeField(auto_now_add=True, verbose_name='Data de Criação')),
                ('updated_at', models.DateTimeField(auto_now=True, verbose_name='Data de Atualização')),
            ],
            options={
                'verbose_name': 'Configuração de Manutenção',
                'verbose_name_plural': 'Configurações de Manutenção',
                'ordering': ['tipo'],
            },
        ),
        migrations.CreateModel(
            name='DespesaVeiculo',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('data', models.DateField(verbose_name='Data')),
                ('tipo', models.CharField(choices=[('COMBUSTIVEL', 'Combustível'), ('TROCA_OLEO', 'Troca de Óleo'), ('REVISAO', 'Revisão'), ('PNEUS_NIVEL', 'Calibragem Pneus'), ('PNEUS_TROCA', 'Troca de Pneus')], max_length=15, verbose_name='Tipo')),
                ('valor', models.DecimalField(decimal_places=2, max_digits=12, validators=[django.core.validators.MinValueValidator(Decimal('0.00'))], verbose_name='Valor')),
                ('km', models.PositiveIntegerField(help_text='Deve ser maior ou igual ao último km registrado pelo vendedor', verbose_name='Quilometragem')),
                ('comprovante', models.CharField(blank=True, max_length=500, verbose_name='Comprovante (URL)')),
                ('validado_por_ia', models.BooleanField(default=False, verbose_name='Validado por IA')),
                ('valor_extraido', models.DecimalField(blank=True, decimal_places=2, max_digits=12, null=True, verbose_name='Valor Extraído')),
                ('nome_extraido', models.CharField(blank=True, max_length=255, verbose_name='Nome Extraído')),
                ('status', models.CharField(choices=[('PENDENTE', 'Pendente'), ('APROVADA', 'Aprovada'), ('REPROVADA', 'Reprovada')], db_index=True, default='PENDENTE', max_length=10, verbose_name='Status')),
                ('data_aprovacao', models.DateTimeField(blank=True, null=True, verbose_name='Data da Avaliação')),
                ('motivo_reprovacao', models.TextField(blank=True, verbose_name='Motivo da Reprovação')),
                ('created_at', models.DateTimeField(auto_now_add=True, verbose_name='Data de Criação')),
                ('updated_at', models.DateTimeField(auto_now=True, verbose_name='Data de Atualização')),
                ('aprovado_por', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='despesas_veiculo_avaliadas', to=settings.AUTH_USER_MODEL, verbose_name='Avaliado por')),
                ('vendedor', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='despesas_veiculo', to='accounts.vendedor', verbose_name='Vendedor')),
            ],
            options={
                'verbose_name': 'Despesa de Veículo',
                'verbose_name_plural': 'Despesas de Veículo',
                'ordering': ['-data', '-created_at'],
                'indexes': [
                    models.Index(fields=['vendedor', 'km'], name='despesa_vendedor_km_idx'),
                    models.Index(fields=['vendedor', 'data'], name='despesa_vendedor_data_idx'),
                ],
            },
        ),
    ]
