"""JSON:API media types and error documents."""

from rest_framework.parsers import JSONParser
from rest_framework.renderers import JSONRenderer
from rest_framework.response import Response

JSONAPI_MEDIA_TYPE = "application/vnd.api+json"


class VndApiJSONRenderer(JSONRenderer):
    media_type = JSONAPI_MEDIA_TYPE
    format = "vnd.api+json"
    charset = None  # JSON:API forbids charset parameter


class VndApiJSONParser(JSONParser):
    media_type = JSONAPI_MEDIA_TYPE


def error_response(status_code, detail):
    return Response(
        {"errors": [{"status": str(status_code), "detail": detail}]},
        status=status_code,
    )
