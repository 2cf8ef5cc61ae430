"""Modelos e regras de notificação padrão.

Os textos usam a sintaxe de template do Django. Uma linha ativa em
``NotificationTemplate`` com a mesma chave substitui o padrão daqui.
"""

DEFAULT_TEMPLATES = [
    # Funil de pendências
    {
        "template_key": "pendency_stage_advanced",
        "name": "Estágio avançado",
        "category": "property",
        "subcategory": "stage_advance",
        "title_template": "Estágio Avançado - {{ sequence_number }}",
        "message_template": (
            "Propriedade avançada {% if overridden %}com override {% endif %}"
            "de {{ from_stage_name }} para {{ to_stage_name }}"
        ),
        "default_type": "success",
        "default_priority": 3,
        "auto_expire_days": 30,
    },
    {
        "template_key": "pendency_stage_blocked",
        "name": "Estágio bloqueado",
        "category": "property",
        "subcategory": "pendency",
        "title_template": "Estágio Bloqueado - {{ sequence_number }}",
        "message_template": "Estágio {{ stage_name }} bloqueado por {{ blocking_count }} pendência(s) crítica(s)",
        "default_type": "warning",
        "default_priority": 2,
    },
    {
        "template_key": "pendency_validation_failed",
        "name": "Validação de requisito falhou",
        "category": "property",
        "subcategory": "pendency",
        "title_template": "Validação Falhou - {{ sequence_number }}",
        "message_template": "Falha na validação: {{ requirement_name }}. {{ motivo }}",
        "default_type": "warning",
        "default_priority": 2,
    },
    {
        "template_key": "pendency_critical",
        "name": "Pendência crítica",
        "category": "property",
        "subcategory": "pendency",
        "title_template": "Pendência Crítica - {{ sequence_number }}",
        "message_template": "Requisito crítico pendente: {{ requirement_name }}",
        "default_type": "warning",
        "default_priority": 2,
        "auto_expire_days": 7,
    },
    {
        "template_key": "pendency_missing_document",
        "name": "Documento pendente",
        "category": "property",
        "subcategory": "pendency",
        "title_template": (
            "{% if obrigatorio %}Documento Obrigatório Pendente{% else %}Documento Recomendado Pendente{% endif %}"
            " - {{ sequence_number }}"
        ),
        "message_template": "Documento pendente: {{ document_type }}",
        "default_type": "warning",
        "default_priority": 2,
    },
    # Eventos tratados por NotificationRule
    {
        "template_key": "property_created",
        "name": "Novo imóvel cadastrado",
        "category": "property",
        "subcategory": "new_property",
        "title_template": "Novo imóvel cadastrado",
        "message_template": (
            "O imóvel {{ property_address }} foi cadastrado com sucesso no sistema. Código: {{ property_sequence }}"
        ),
        "default_type": "success",
        "default_priority": 3,
    },
    {
        "template_key": "client_created",
        "name": "Novo cliente cadastrado",
        "category": "crm",
        "subcategory": "new_client",
        "title_template": "Novo cliente: {{ client_name }}",
        "message_template": "O cliente {{ client_name }} foi cadastrado com sucesso no sistema.",
        "default_type": "info",
        "default_priority": 3,
    },
    {
        "template_key": "client_meeting_scheduled",
        "name": "Reunião agendada",
        "category": "crm",
        "subcategory": "meeting",
        "title_template": "Reunião agendada com {{ client_name }}",
        "message_template": (
            "Reunião agendada para {{ meeting_date|default:'data a definir' }} com {{ client_name }}. "
            "Local: {{ meeting_location|default:'a definir' }}"
        ),
        "default_type": "info",
        "default_priority": 2,
    },
    {
        "template_key": "client_call_logged",
        "name": "Ligação registrada",
        "category": "crm",
        "subcategory": "call",
        "title_template": "Ligação registrada para {{ client_name }}",
        "message_template": (
            "Ligação de {{ call_duration|default:0 }} minutos registrada para {{ client_name }}. "
            "Resultado: {{ call_result }}"
        ),
        "default_type": "info",
        "default_priority": 4,
    },
    {
        "template_key": "document_uploaded",
        "name": "Documento enviado",
        "category": "document",
        "subcategory": "document",
        "title_template": "Documento enviado: {{ document_name }}",
        "message_template": 'O documento "{{ document_name }}" foi enviado para o imóvel {{ property_address }}.',
        "default_type": "success",
        "default_priority": 3,
    },
]

DEFAULT_RULES = [
    {
        "rule_key": "property_created_rule",
        "name": "Notificar novo imóvel",
        "description": "Notifica o corretor quando um imóvel é cadastrado",
        "trigger_events": "property:created",
        "entity_types": "property",
        "template_key": "property_created",
    },
    {
        "rule_key": "client_created_rule",
        "name": "Notificar novo cliente",
        "description": "Notifica o corretor quando um cliente é cadastrado",
        "trigger_events": "client:created",
        "entity_types": "client",
        "template_key": "client_created",
    },
    {
        "rule_key": "client_meeting_rule",
        "name": "Notificar reunião agendada",
        "description": "Notifica quando uma nota do tipo reunião é criada",
        "trigger_events": "client_note:meeting_created",
        "entity_types": "client_note",
        "template_key": "client_meeting_scheduled",
    },
    {
        "rule_key": "client_call_rule",
        "name": "Notificar ligação registrada",
        "description": "Notifica quando uma ligação é registrada",
        "trigger_events": "client_note:call_logged",
        "entity_types": "client_note",
        "template_key": "client_call_logged",
        "throttle_minutes": 30,
    },
    {
        "rule_key": "document_uploaded_rule",
        "name": "Notificar documento enviado",
        "description": "Notifica quando um documento é anexado a um imóvel",
        "trigger_events": "document:uploaded",
        "entity_types": "document",
        "template_key": "document_uploaded",
    },
]

CATEGORIAS = [
    {
        "category": "property",
        "name": "Imóveis",
        "description": "Avanços de estágio, pendências e cadastro de imóveis",
        "subcategories": [
            {"key": "stage_advance", "name": "Avanço de estágios"},
            {"key": "pendency", "name": "Pendências"},
            {"key": "new_property", "name": "Novos imóveis"},
        ],
    },
    {
        "category": "document",
        "name": "Documentos",
        "description": "Documentos anexados aos imóveis",
        "subcategories": [
            {"key": "document", "name": "Documentos enviados"},
        ],
    },
    {
        "category": "crm",
        "name": "Clientes",
        "description": "Novos clientes, reuniões, ligações e lembretes",
        "subcategories": [
            {"key": "new_client", "name": "Novos clientes"},
            {"key": "meeting", "name": "Reuniões"},
            {"key": "call", "name": "Ligações"},
            {"key": "reminder", "name": "Lembretes"},
        ],
    },
    {
        "category": "contract",
        "name": "Contratos",
        "description": "Geração e assinatura de contratos",
        "subcategories": [],
    },
    {
        "category": "system",
        "name": "Sistema",
        "description": "Avisos gerais do sistema",
        "subcategories": [],
    },
]

TEMPLATES_POR_CHAVE = {template["template_key"]: template for template in DEFAULT_TEMPLATES}
