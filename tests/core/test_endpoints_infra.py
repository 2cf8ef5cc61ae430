"""Smoke dos endpoints de infraestrutura e do tratamento de erros de domínio."""

import pytest
from django.test import Client
from django.urls import reverse

from shared.exceptions import PendenciasBloqueantesError, RecursoNaoEncontradoError


def test_metrics_exporta_contadores():
    resp = Client().get(reverse("metrics"))
    assert resp.status_code == 200
    assert b"vh_cartorio_fallback_total" in resp.content


def test_payload_de_pendencias_bloqueantes():
    exc = PendenciasBloqueantesError([{"requirementKey": "A"}, {"requirementKey": "B"}], stage=3)
    assert exc.status_code == 409
    assert exc.payload()["blockingPendencies"] == [{"requirementKey": "A"}, {"requirementKey": "B"}]
    assert "2 pendência(s)" in exc.payload()["message"]
    assert RecursoNaoEncontradoError("x").payload() == {"message": "x", "code": "NOT_FOUND"}


@pytest.mark.django_db
def test_api_exige_autenticacao():
    resp = Client().get(reverse("imoveis:property-list"))
    assert resp.status_code in (401, 403)
