import logging

from django.db.models.signals import post_save
from django.dispatch import receiver

from imoveis.models import Property

from .services import PendencyService

logger = logging.getLogger(__name__)


@receiver(post_save, sender=Property)
def inicializar_requisitos_imovel(sender, instance, created, **kwargs):
    """Todo imóvel novo nasce com o checklist de requisitos pendentes."""
    if created and not kwargs.get("raw"):
        PendencyService.inicializar_requisitos(instance)
