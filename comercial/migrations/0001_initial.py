# Generated manually - Initial migration for comercial app

from decimal import Decimal
from django.conf import settings
from django.db import migrations, models
import django.core.validators
import django.db.models.deletion


CATEGORIAS = [('RODANTE', 'Material Rodante'), ('PECA', 'Peças'), ('CILINDRO', 'Cilindros')]


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
        ('accounts', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='Cliente',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('nome', models.CharField(max_length=255, validators=[django.core.validators.MinLengthValidator(2)], verbose_name='Nome')),
                ('razao_social', models.CharField(blank=True, max_length=255, verbose_name='Razão Social')),
                ('cnpj', models.CharField(blank=True, db_index=True, max_length=20, verbose_name='CNPJ')),
                ('inscricao_estadual', models.CharField(blank=True, max_length=30, verbose_name='Inscrição Estadual')),
                ('telefone', models.CharField(blank=True, max_length=30, verbose_name='Telefone')),
                ('email', models.EmailField(blank=True, max_length=254, verbose_name='E-mail')),
                ('contato_principal', models.CharField(blank=True, max_length=255, verbose_name='Contato Principal')),
                ('endereco', models.CharField(blank=True, max_length=255, verbose_name='Endereço')),
                ('cidade', models.CharField(blank=True, max_length=100, verbose_name='Cidade')),
                ('estado', models.CharField(blank=True, max_length=2, verbose_name='UF')),
                ('cep', models.CharField(blank=True, max_length=10, verbose_name='CEP')),
                ('ativo', models.BooleanField(default=True, help_text='Clientes excluídos ficam inativos (exclusão lógica)', verbose_name='Ativo')),
                ('created_at', models.DateTimeField(auto_now_add=True, verbose_name='Data de Criação')),
                ('updated_at', models.DateTimeField(auto_now=True, verbose_name='Data de Atualização')),
                ('vendedor', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='clientes', to='accounts.vendedor', verbose_name='Vendedor Responsável')),
            ],
            options={
                'verbose_name': 'Cliente',
                'verbose_name_plural': 'Clientes',
                'ordering': ['nome'],
                'indexes': [models.Index(fields=['ativo', 'nome'], name='cliente_ativo_nome_idx')],
            },
        ),
        migrations.CreateModel(
            name='ClienteAnotacao',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('texto', models.TextField(verbose_name='Texto')),
                ('created_at', models.DateTimeField(auto_now_add=True, verbose_name='Data de Criação')),
                ('cliente', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='anotacoes', to='comercial.cliente', verbose_name='Cliente')),
                ('vendedor', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='anotacoes', to='accounts.vendedor', verbose_name='Vendedor')),
            ],
            options={
                'verbose_name': 'Anotação de Cliente',
                'verbose_name_plural': 'Anotações de Clientes',
                'ordering': ['-created_at'],
                'indexes': [models.Index(fields=['cliente', 'vendedor', 'created_at'], name='anotacao_cliente_vend_idx')],
            },
        ),
        migrations.CreateModel(
            name='Proposta',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('numero', models.CharField(help_text='Gerado automaticamente (PROP-000001)', max_length=20, unique=True, verbose_name='Número')),
                ('valor', models.DecimalField(decimal_places=2, max_digits=14, validators=[django.core.validators.MinValueValidator(Decimal('0.00'))], verbose_name='Valor')),
                ('custo_estimado', models.DecimalField(blank=True, decimal_places=2, max_digits=14, null=True, verbose_name='Custo Estimado')),
                ('margem', models.DecimalField(blank=True, decimal_places=2, help_text='(valor - custo estimado) / valor x 100', max_digits=7, null=True, verbose_name='Margem (%)')),
                ('categoria', models.CharField(choices=CATEGORIAS, default='RODANTE', max_length=10, verbose_name='Categoria')),
                ('status', models.CharField(choices=[('EM_ABERTO', 'Em Aberto'), ('AGUARDANDO_APROVACAO', 'Aguardando Aprovação'), ('APROVADA', 'Aprovada'), ('REPROVADA', 'Reprovada'), ('CANCELADA', 'Cancelada')], db_index=True, default='EM_ABERTO', max_length=25, verbose_name='Status')),
                ('data_validade', models.DateField(blank=True, null=True, verbose_name='Validade')),
                ('motivo_cancelamento', models.TextField(blank=True, verbose_name='Motivo do Cancelamento')),
                ('created_at', models.DateTimeField(auto_now_add=True, verbose_name='Data de Criação')),
                ('updated_at', models.DateTimeField(auto_now=True, verbose_name='Data de Atualização')),
                ('cliente', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='propostas', to='comercial.cliente', verbose_name='Cliente')),
                ('vendedor', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='propostas', to='accounts.vendedor', verbose_name='Vendedor')),
            ],
            options={
                'verbose_name': 'Proposta',
                'verbose_name_plural': 'Propostas',
                'ordering': ['-created_at'],
            },
        ),
        migrations.CreateModel(
            name='LiberacaoCusto',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('status', models.CharField(choices=[('EM_ANALISE', 'Em Análise'), ('APROVADO', 'Aprovado'), ('REPROVADO', 'Reprovado'), ('AGUARDANDO_AJUSTE', 'Aguardando Ajuste')], default='EM_ANALISE', max_length=20, verbose_name='Status')),
                ('custo_real', models.DecimalField(blank=True, decimal_places=2, max_digits=14, null=True, verbose_name='Custo Real')),
                ('observacoes', models.TextField(blank=True, verbose_name='Observações')),
                ('data_aprovacao', models.DateTimeField(blank=True, null=True, verbose_name='Data da Aprovação')),
                ('created_at', models.DateTimeField(auto_now_add=True, verbose_name='Data de Criação')),
                ('updated_at', models.DateTimeField(auto_now=True, verbose_name='Data de Atualização')),
                ('aprovado_por', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='liberacoes_custo', to=settings.AUTH_USER_MODEL, verbose_name='Aprovado por')),
                ('proposta', models.OneToOneField(on_delete=django.db.models.deletion.CASCADE, related_name='liberacao_custo', to='comercial.proposta', verbose_name='Proposta')),
            ],
            options={
                'verbose_name': 'Liberação de Custo',
                'verbose_name_plural': 'Liberações de Custo',
            },
        ),
        migrations.CreateModel(
            name='OrdemServico',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('numero', models.CharField(help_text='Gerado automaticamente (OS-000001)', max_length=20, unique=True, verbose_name='Número')),
                ('valor_total', models.DecimalField(decimal_places=2, max_digits=14, validators=[django.core.validators.MinValueValidator(Decimal('0.00'))], verbose_name='Valor Total')),
                ('status', models.CharField(choices=[('ABERTA', 'Aberta'), ('EM_PRODUCAO', 'Em Produção'), ('AGUARDANDO_PECAS', 'Aguardando Peças'), ('FINALIZADA', 'Finalizada'), ('FATURADA', 'Faturada'), ('CANCELADA', 'Cancelada')], db_index=True, default='ABERTA', max_length=20, verbose_name='Status')),
                ('data_previsao', models.DateField(blank=True, null=True, verbose_name='Previsão de Entrega')),
                ('data_fechamento', models.DateTimeField(blank=True, null=True, verbose_name='Data de Fechamento')),
                ('created_at', models.DateTimeField(auto_now_add=True, verbose_name='Data de Criação')),
                ('updated_at', models.DateTimeField(auto_now=True, verbose_name='Data de Atualização')),
                ('cliente', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='ordens_servico', to='comercial.cliente', verbose_name='Cliente')),
                ('proposta', models.OneToOneField(blank=True, help_text='Uma proposta gera no máximo uma OS', null=True, on_delete=django.db.models.deletion.PROTECT, related_name='ordem_servico', to='comercial.proposta', verbose_name='Proposta')),
            ],
            options={
                'verbose_name': 'Ordem de Serviço',
                'verbose_name_plural': 'Ordens de Serviço',
                'ordering': ['-created_at'],
            },
        ),
        migrations.CreateModel(
            name='Venda',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('data', models.DateField(verbose_name='Data')),
                ('valor', models.DecimalField(decimal_places=2, max_digits=14, verbose_name='Valor')),
                ('categoria', models.CharField(choices=CATEGORIAS, max_length=10, verbose_name='Categoria')),
                ('semana', models.PositiveSmallIntegerField(help_text='1 a 4 (dias 22 em diante contam como semana 4)', validators=[django.core.validators.MinValueValidator(1), django.core.validators.MaxValueValidator(4)], verbose_name='Semana do Mês')),
                ('created_at', models.DateTimeField(auto_now_add=True, verbose_name='Data de Criação')),
                ('ordem_servico', models.OneToOneField(blank=True, null=True, on_delete=django.db.models.deletion.PROTECT, related_name='venda', to='comercial.ordemservico', verbose_name='Ordem de Serviço')),
                ('vendedor', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='vendas', to='accounts.vendedor', verbose_name='Vendedor')),
            ],
            options={
                'verbose_name': 'Venda',
                'verbose_name_plural': 'Vendas',
                'ordering': ['-data'],
                'indexes': [models.Index(fields=['vendedor', 'data'], name='venda_vendedor_data_idx')],
            },
        ),
        migrations.CreateModel(
            name='MetaVenda',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('mes', models.PositiveSmallIntegerField(validators=[django.core.validators.MinValueValidator(1), django.core.validators.MaxValueValidator(12)], verbose_name='Mês')),
                ('ano', models.PositiveSmallIntegerField(verbose_name='Ano')),
                ('categoria', models.CharField(choices=CATEGORIAS, max_length=10, verbose_name='Categoria')),
                ('valor_meta', models.DecimalField(decimal_places=2, max_digits=14, verbose_name='Valor da Meta')),
                ('created_at', models.DateTimeField(auto_now_add=True, verbose_name='Data de Criação')),
                ('updated_at', models.DateTimeField(auto_now=True, verbose_name='Data de Atualização')),
                ('vendedor', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='metas', to='accounts.vendedor', verbose_name='Vendedor')),
            ],
            options={
                'verbose_name': 'Meta',
                'verbose_name_plural': 'Metas',
                'ordering': ['-ano', '-mes', 'categoria'],
                'constraints': [models.UniqueConstraint(fields=('vendedor', 'mes', 'ano', 'categoria'), name='meta_unica_vendedor_mes_categoria')],
            },
        ),
    ]
