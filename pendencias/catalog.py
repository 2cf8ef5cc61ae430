"""Catálogo padrão de requisitos por estágio."""

from __future__ import annotations


def _campos(*nomes: str) -> list[dict]:
    return [{"type": "required_field", "field": nome} for nome in nomes]


def _documentos(*tipos: str) -> list[dict]:
    return [{"type": "document_uploaded", "document_type": tipo} for tipo in tipos]


def _custom(nome: str) -> list[dict]:
    return [{"type": "custom_function", "validator": nome}]


DEFAULT_STAGE_REQUIREMENTS: list[dict] = [
    # ======= ESTÁGIO 1: CAPTAÇÃO =======
    {
        "stage": 1,
        "requirement_key": "PROPERTY_BASIC_INFO",
        "requirement_name": "Informações Básicas do Imóvel",
        "description": "Dados essenciais: tipo, endereço, valor, área",
        "category": "data",
        "priority": "critical",
        "validation_rules": [
            *_campos("type", "street", "number", "neighborhood", "city", "state", "cep", "value"),
            {"type": "min_value", "field": "value", "value": 1000},
        ],
    },
    {
        "stage": 1,
        "requirement_key": "PROPERTY_OWNERS",
        "requirement_name": "Proprietários Cadastrados",
        "description": "Pelo menos um proprietário com dados completos",
        "category": "data",
        "priority": "critical",
        "validation_rules": _campos("owners"),
    },
    {
        "stage": 1,
        "requirement_key": "PROPERTY_REGISTRATION",
        "requirement_name": "Números de Registro",
        "description": "IPTU e inscrição municipal obrigatórios",
        "category": "data",
        "priority": "critical",
        "validation_rules": _campos("registration_number", "municipal_registration"),
    },
    # ======= ESTÁGIO 2: DUE DILIGENCE =======
    {
        "stage": 2,
        "requirement_key": "PROPERTY_DOCUMENTS",
        "requirement_name": "Documentos Básicos",
        "description": "Matrícula, IPTU, certidões básicas",
        "category": "document",
        "priority": "critical",
        "validation_rules": _documentos("MATRICULA", "IPTU", "CERTIDAO_NEGATIVA"),
    },
    {
        "stage": 2,
        "requirement_key": "LEGAL_VALIDATION",
        "requirement_name": "Validação Jurídica",
        "description": "Análise de documentos e situação legal",
        "category": "inspection",
        "priority": "critical",
    },
    {
        "stage": 2,
        "requirement_key": "TECHNICAL_EVALUATION",
        "requirement_name": "Avaliação Técnica",
        "description": "Vistoria técnica e avaliação de valor",
        "category": "inspection",
        "priority": "medium",
    },
    # ======= ESTÁGIO 3: MERCADO =======
    {
        "stage": 3,
        "requirement_key": "MARKET_PRICE",
        "requirement_name": "Precificação de Mercado",
        "description": "Valor de mercado definido e aprovado",
        "category": "inspection",
        "priority": "critical",
    },
    {
        "stage": 3,
        "requirement_key": "MARKETING_MATERIAL",
        "requirement_name": "Material de Marketing",
        "description": "Fotos, descrição e material promocional",
        "category": "document",
        "priority": "low",
    },
    {
        "stage": 3,
        "requirement_key": "LISTING_APPROVAL",
        "requirement_name": "Aprovação para Listagem",
        "description": "Autorização final para exposição no mercado",
        "category": "approval",
        "priority": "critical",
    },
    # ======= ESTÁGIO 4: PROPOSTAS =======
    {
        "stage": 4,
        "requirement_key": "PROPOSAL_ANALYSIS",
        "requirement_name": "Análise de Propostas",
        "description": "Avaliação e validação das propostas recebidas",
        "category": "inspection",
        "priority": "critical",
        "validation_rules": _custom("hasAcceptedProposal"),
    },
    {
        "stage": 4,
        "requirement_key": "BUYER_QUALIFICATION",
        "requirement_name": "Qualificação do Comprador",
        "description": "Verificação da capacidade financeira do comprador",
        "category": "inspection",
        "priority": "critical",
    },
    # ======= ESTÁGIO 5: CONTRATOS =======
    {
        "stage": 5,
        "requirement_key": "CONTRACT_DRAFT",
        "requirement_name": "Minuta de Contrato",
        "description": "Elaboração da minuta contratual",
        "category": "document",
        "priority": "critical",
        "validation_rules": _campos("contracts"),
    },
    {
        "stage": 5,
        "requirement_key": "PARTIES_APPROVAL",
        "requirement_name": "Aprovação das Partes",
        "description": "Acordo e assinatura de vendedor e comprador",
        "category": "approval",
        "priority": "critical",
        "validation_rules": _custom("hasSignedContract"),
    },
    # ======= ESTÁGIO 6: FINANCIAMENTO =======
    {
        "stage": 6,
        "requirement_key": "FINANCING_DOCS",
        "requirement_name": "Documentos para Financiamento",
        "description": "Documentação completa para análise bancária",
        "category": "document",
        "priority": "critical",
    },
    {
        "stage": 6,
        "requirement_key": "BANK_APPROVAL",
        "requirement_name": "Aprovação Bancária",
        "description": "Financiamento aprovado pela instituição financeira",
        "category": "approval",
        "priority": "critical",
    },
    # ======= ESTÁGIO 7: INSTRUMENTO =======
    {
        "stage": 7,
        "requirement_key": "DEED_PREPARATION",
        "requirement_name": "Preparação da Escritura",
        "description": "Elaboração da escritura pública",
        "category": "document",
        "priority": "critical",
    },
    {
        "stage": 7,
        "requirement_key": "FINAL_PAYMENT",
        "requirement_name": "Pagamento Final",
        "description": "Liquidação financeira da transação",
        "category": "payment",
        "priority": "critical",
    },
    # ======= ESTÁGIO 8: CONCLUÍDO =======
    {
        "stage": 8,
        "requirement_key": "REGISTRY_TRANSFER",
        "requirement_name": "Transferência de Registro",
        "description": "Registro da transferência no cartório",
        "category": "document",
        "priority": "critical",
    },
    {
        "stage": 8,
        "requirement_key": "TRANSACTION_CLOSURE",
        "requirement_name": "Fechamento da Transação",
        "description": "Finalização completa do processo",
        "category": "approval",
        "priority": "critical",
    },
]
