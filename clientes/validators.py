"""Validação de CPF (dígitos verificadores)."""

from django.core.exceptions import ValidationError

CPF_LENGTH = 11


def somente_digitos(valor: str | None) -> str:
    return "".join(filter(str.isdigit, valor or ""))


def cpf_valido(cpf: str | None) -> bool:
    cpf = somente_digitos(cpf)

    if len(cpf) != CPF_LENGTH or cpf == cpf[0] * CPF_LENGTH:
        return False

    soma = sum(int(cpf[i]) * (10 - i) for i in range(9))
    digito1 = (soma * 10) % 11
    if digito1 == 10:
        digito1 = 0

    soma = sum(int(cpf[i]) * (11 - i) for i in range(10))
    digito2 = (soma * 10) % 11
    if digito2 == 10:
        digito2 = 0

    return cpf[-2:] == f"{digito1}{digito2}"


def validate_cpf(value: str) -> None:
    """Validador de campo para ``Client.cpf``."""
    if not cpf_valido(value):
        raise ValidationError("CPF inválido", code="invalid_cpf")
