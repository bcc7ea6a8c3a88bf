"""question_service URL Configuration

Questions and answers are served under /api/v1/ by a DRF router; trailing
slashes are optional. The OpenAPI schema lives at /api/v1/schema/ and the
Swagger UI at /swagger/.
"""

from django.urls import path, re_path, include
from drf_spectacular.views import SpectacularAPIView, SpectacularSwaggerView
from rest_framework import routers

from question_service.api.views import (
    QuestionViewSet,
    AnswerViewSet,
    healthcheck,
)

router = routers.DefaultRouter()
router.trailing_slash = "/?"
router.register(r"questions", QuestionViewSet, basename="questions")
router.register(r"answers", AnswerViewSet, basename="answers")

urlpatterns = [
    re_path(r"^healthcheck/?$", healthcheck, name="healthcheck"),
    path("api/v1/schema/", SpectacularAPIView.as_view(), name="schema"),
    path("swagger/", SpectacularSwaggerView.as_view(url_name="schema"), name="swagger-ui"),
    path("api/v1/", include(router.urls)),
]
