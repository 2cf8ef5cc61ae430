from django.urls import path

from . import api

app_name = "pendencias"

urlpatterns = [
    path("properties/<int:property_id>/pendencies/", api.PropertyPendenciesView.as_view(), name="pendencies"),
    path(
        "properties/<int:property_id>/pendencies/summary/",
        api.PendencySummaryView.as_view(),
        name="pendencies-summary",
    ),
    path(
        "properties/<int:property_id>/pendencies/revalidate/",
        api.RevalidateView.as_view(),
        name="pendencies-revalidate",
    ),
    path("properties/<int:property_id>/advance-stage/", api.AdvanceStageView.as_view(), name="advance-stage"),
    path("properties/<int:property_id>/advancement-log/", api.AdvancementLogView.as_view(), name="advancement-log"),
    path("properties/<int:property_id>/requirements/", api.PropertyRequirementListView.as_view(), name="requirements"),
    path(
        "properties/<int:property_id>/requirements/<int:req_id>/",
        api.PropertyRequirementDetailView.as_view(),
        name="requirement-detail",
    ),
]
