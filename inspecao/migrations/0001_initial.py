# Generated manually - Initial migration for inspecao app

from django.conf import settings
from django.db import migrations, models
import django.db.models.deletion
import django.utils.timezone


COMPONENTES = [
    ('ESTEIRA', 'Esteira'),
    ('SAPATA', 'Sapata'),
    ('ROLETE_INFERIOR', 'Rolete Inferior'),
    ('ROLETE_SUPERIOR', 'Rolete Superior'),
    ('RODA_GUIA', 'Roda Guia'),
    ('RODA_MOTRIZ', 'Roda Motriz'),
]

STATUS_DESGASTE = [
    ('DENTRO_PARAMETROS', 'Dentro dos parâmetros'),
    ('VERIFICAR', 'Verificar'),
    ('FORA_PARAMETROS', 'Fora dos parâmetros'),
]


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
        ('accounts', '0001_initial'),
        ('comercial', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='VisitaTecnica',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('numero', models.CharField(blank=True, help_text='DD/MM/AAAA-NNNN, atribuído quando o primeiro laudo é criado', max_length=20, null=True, unique=True, verbose_name='Número')),
                ('data_visita', models.DateField(blank=True, db_index=True, null=True, verbose_name='Data da Visita')),
                ('equipamentos', models.JSONField(default=list, help_text='Lista com a descrição dos equipamentos a inspecionar', verbose_name='Equipamentos')),
                ('observacao', models.TextField(blank=True, verbose_name='Observação')),
                ('status', models.CharField(choices=[('PENDENTE', 'Pendente'), ('CONFIRMADA', 'Confirmada'), ('REALIZADA', 'Realizada'), ('CANCELADA', 'Cancelada')], db_index=True, default='PENDENTE', max_length=20, verbose_name='Status')),
                ('motivo_cancelamento', models.TextField(blank=True, verbose_name='Motivo do Cancelamento')),
                ('created_at', models.DateTimeField(auto_now_add=True, verbose_name='Data de Criação')),
                ('updated_at', models.DateTimeField(auto_now=True, verbose_name='Data de Atualização')),
                ('cliente', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='visitas_tecnicas', to='comercial.cliente', verbose_name='Cliente')),
                ('inspetor', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='visitas_inspecao', to=settings.AUTH_USER_MODEL, verbose_name='Inspetor')),
                ('vendedor', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='visitas_tecnicas', to='accounts.vendedor', verbose_name='Vendedor Solicitante')),
            ],
            options={
                'verbose_name': 'Visita Técnica',
                'verbose_name_plural': 'Visitas Técnicas',
                'ordering': ['data_visita', 'created_at'],
                'indexes': [models.Index(fields=['status', 'data_visita'], name='visita_status_data_idx')],
            },
        ),
        migrations.CreateModel(
            name='LaudoInspecao',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('equipamento', models.CharField(max_length=255, verbose_name='Equipamento')),
                ('numero_serie', models.CharField(max_length=100, verbose_name='Número de Série')),
                ('frota', models.CharField(blank=True, max_length=100, verbose_name='Frota')),
                ('horimetro_total', models.PositiveIntegerField(blank=True, null=True, verbose_name='Horímetro Total')),
                ('horimetro_esteira', models.PositiveIntegerField(blank=True, null=True, verbose_name='Horímetro da Esteira')),
                ('condicao_solo', models.CharField(blank=True, choices=[('BAIXO_IMPACTO', 'Baixo Impacto'), ('MEDIO_IMPACTO', 'Médio Impacto'), ('ALTO_IMPACTO', 'Alto Impacto')], max_length=20, verbose_name='Condição do Solo')),
                ('data_inspecao', models.DateField(default=django.utils.timezone.localdate, verbose_name='Data da Inspeção')),
                ('sumario', models.TextField(blank=True, verbose_name='Sumário Técnico')),
                ('status', models.CharField(choices=[('RASCUNHO', 'Rascunho'), ('ENVIADO', 'Enviado')], db_index=True, default='RASCUNHO', max_length=10, verbose_name='Status')),
                ('data_envio', models.DateTimeField(blank=True, null=True, verbose_name='Data de Envio')),
                ('created_at', models.DateTimeField(auto_now_add=True, verbose_name='Data de Criação')),
                ('updated_at', models.DateTimeField(auto_now=True, verbose_name='Data de Atualização')),
                ('inspetor', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='laudos_inspecao', to=settings.AUTH_USER_MODEL, verbose_name='Inspetor')),
                ('visita', models.OneToOneField(on_delete=django.db.models.deletion.CASCADE, related_name='laudo', to='inspecao.visitatecnica', verbose_name='Visita Técnica')),
            ],
            options={
                'verbose_name': 'Laudo de Inspeção',
                'verbose_name_plural': 'Laudos de Inspeção',
                'ordering': ['-data_inspecao', '-created_at'],
            },
        ),
        migrations.CreateModel(
            name='ComponenteInspecao',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('tipo', models.CharField(choices=COMPONENTES, max_length=20, verbose_name='Componente')),
                ('dimensao_std', models.DecimalField(blank=True, decimal_places=2, max_digits=10, null=True, verbose_name='Dimensão Std')),
                ('limite_reparo', models.DecimalField(blank=True, decimal_places=2, max_digits=10, null=True, verbose_name='Limite de Reparo')),
                ('medicao_le', models.DecimalField(blank=True, decimal_places=2, max_digits=10, null=True, verbose_name='Medição LE')),
                ('medicao_ld', models.DecimalField(blank=True, decimal_places=2, max_digits=10, null=True, verbose_name='Medição LD')),
                ('desgaste_le', models.DecimalField(blank=True, decimal_places=2, max_digits=8, null=True, verbose_name='Desgaste LE (%)')),
                ('desgaste_ld', models.DecimalField(blank=True, decimal_places=2, max_digits=8, null=True, verbose_name='Desgaste LD (%)')),
                ('status_le', models.CharField(blank=True, choices=STATUS_DESGASTE, max_length=20, verbose_name='Status LE')),
                ('status_ld', models.CharField(blank=True, choices=STATUS_DESGASTE, max_length=20, verbose_name='Status LD')),
                ('observacao', models.TextField(blank=True, verbose_name='Observação')),
                ('ordem', models.PositiveSmallIntegerField(default=0, verbose_name='Ordem')),
                ('laudo', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='componentes', to='inspecao.laudoinspecao', verbose_name='Laudo')),
            ],
            options={
                'verbose_name': 'Componente Inspecionado',
                'verbose_name_plural': 'Componentes Inspecionados',
                'ordering': ['laudo', 'ordem'],
            },
        ),
        migrations.CreateModel(
            name='FotoComponente',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('tipo', models.CharField(choices=COMPONENTES, max_length=20, verbose_name='Componente')),
                ('lado', models.CharField(choices=[('LE', 'Lado Esquerdo'), ('LD', 'Lado Direito'), ('AMBOS', 'Ambos')], default='AMBOS', max_length=5, verbose_name='Lado')),
                ('url', models.URLField(max_length=500, verbose_name='URL')),
                ('legenda', models.CharField(blank=True, max_length=255, verbose_name='Legenda')),
                ('ordem', models.PositiveSmallIntegerField(default=0, verbose_name='Ordem')),
                ('laudo', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='fotos', to='inspecao.laudoinspecao', verbose_name='Laudo')),
            ],
            options={
                'verbose_name': 'Foto de Componente',
                'verbose_name_plural': 'Fotos de Componentes',
                'ordering': ['laudo', 'ordem'],
            },
        ),
    ]
