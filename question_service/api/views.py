import logging
import re

from django.views.decorators.csrf import csrf_exempt
from django.http import JsonResponse
from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.permissions import AllowAny
from rest_framework.parsers import JSONParser
from rest_framework.response import Response

from question_service.lib.db import get_session, ping_database
from question_service.lib.errors import (
    NotFoundError,
    QuestionReferenceError,
    StoreError,
)
from question_service.lib.repositories import SQLAlchemyRepository
from question_service.lib.services import QuestionAnswerService
from .jsonapi import VndApiJSONParser, error_response
from .serializers import AnswerSerializer, QuestionSerializer, TYPE_TO_SERIALIZER

logger = logging.getLogger(__name__)

_ID_RE = re.compile(r"^\d+$")
# Store ids are signed 64-bit integers
MAX_ID = 2**63 - 1

# OpenAPI building blocks; request and response bodies are JSON:API documents
_DOC = OpenApiTypes.OBJECT
_ID = OpenApiParameter("id", OpenApiTypes.INT, OpenApiParameter.PATH, description="Integer ID")
_REL = OpenApiParameter("rel", OpenApiTypes.STR, OpenApiParameter.PATH, description="Relationship name")
_INCLUDE = OpenApiParameter(
    "include",
    OpenApiTypes.STR,
    OpenApiParameter.QUERY,
    required=False,
    description="Comma-separated relationships to add under 'included'",
)


@csrf_exempt
def healthcheck(request):
    if request.method != "GET":
        return JsonResponse({"error": "method not allowed"}, status=405)
    if ping_database():
        return JsonResponse({"healthy": True, "database": "ok"})
    return JsonResponse({"healthy": False, "database": "unreachable"}, status=503)


class BaseSAViewSet(viewsets.ViewSet):
    permission_classes = [AllowAny]
    parser_classes = [VndApiJSONParser, JSONParser]
    serializer_class = None
    resource_name = "resource"

    def get_service(self):
        return QuestionAnswerService(
            SQLAlchemyRepository(get_session(), logger=logger), logger=logger
        )

    def get_serializer(self):
        return self.serializer_class()

    def _parse_id(self, pk, label=None):
        """Return ``pk`` as an int, or None when it is not an integer in ``0..MAX_ID``."""
        if pk is None or not _ID_RE.match(str(pk)) or int(pk) > MAX_ID:
            logger.warning(f"Invalid {label or self.resource_name} ID: {pk}")
            return None
        return int(pk)

    def _invalid_id(self, label=None):
        return error_response(
            status.HTTP_400_BAD_REQUEST, f"Invalid {label or self.resource_name} ID"
        )

    def _not_found(self, label=None):
        return error_response(
            status.HTTP_404_NOT_FOUND, f"{(label or self.resource_name).capitalize()} not found"
        )

    def _store_failure(self, action_desc, err):
        logger.error(f"Failed to {action_desc}: {err}")
        return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, str(err))

    def _parse_include(self, request):
        raw = request.query_params.get("include")
        if not raw:
            return []
        # de-duplicate while preserving order
        seen = set()
        out = []
        for p in (s.strip() for s in str(raw).split(",")):
            if p and p not in seen:
                seen.add(p)
                out.append(p)
        return out

    def _build_included(self, objs, include_rels):
        included = []
        seen = set()  # (type, id)
        ser = self.get_serializer()
        for rel in include_rels:
            if rel not in ser.relationships:
                continue
            for obj in objs:
                rel_type, items = ser.get_related(obj, rel)
                rel_ser = TYPE_TO_SERIALIZER[rel_type]()
                for item in items:
                    key = (rel_type, str(item.id))
                    if key in seen:
                        continue
                    seen.add(key)
                    included.append(rel_ser.to_resource(item))
        return included

    def _linkage(self, pk, rel, fetch):
        """Resource linkage for relationship ``rel`` of the object ``fetch`` loads."""
        obj_id = self._parse_id(pk)
        if obj_id is None:
            return self._invalid_id()
        ser = self.get_serializer()
        if rel not in ser.relationships:
            return error_response(status.HTTP_404_NOT_FOUND, "Relationship not found")
        try:
            obj = fetch(self.get_service(), obj_id)
        except NotFoundError as e:
            logger.warning(str(e))
            return self._not_found()
        except StoreError as e:
            return self._store_failure(f"get {self.resource_name} with ID {obj_id}", e)
        return Response({"data": ser.to_resource(obj)["relationships"][rel]["data"]})

    def _document(self, request, objs, many):
        ser = self.get_serializer()
        if many:
            payload = {"data": [ser.to_resource(o) for o in objs]}
        else:
            payload = {"data": ser.to_resource(objs[0])}
        include_rels = self._parse_include(request)
        if include_rels:
            payload["included"] = self._build_included(objs, include_rels)
        return payload


class QuestionViewSet(BaseSAViewSet):
    serializer_class = QuestionSerializer
    resource_name = "question"

    @extend_schema(summary="List questions", parameters=[_INCLUDE], responses={200: _DOC, 500: _DOC})
    def list(self, request):
        logger.info("Received request to get all questions")
        try:
            questions = self.get_service().get_all_questions()
        except StoreError as e:
            return self._store_failure("get all questions", e)
        logger.info("All questions retrieved successfully")
        return Response(self._document(request, questions, many=True))

    @extend_schema(summary="Create a question", request=_DOC, responses={201: _DOC, 400: _DOC, 500: _DOC})
    def create(self, request):
        logger.info("Received request to create question")
        try:
            question = self.get_serializer().build(request.data)
        except ValueError as e:
            logger.warning(f"Validation failed for question: {e}")
            return error_response(status.HTTP_400_BAD_REQUEST, str(e))
        try:
            question = self.get_service().create_question(question)
        except StoreError as e:
            return self._store_failure("create question", e)
        logger.info(f"Question created successfully with ID: {question.id}")
        return Response(
            self._document(request, [question], many=False),
            status=status.HTTP_201_CREATED,
        )

    @extend_schema(summary="Get a question", parameters=[_ID, _INCLUDE], responses={200: _DOC, 400: _DOC, 404: _DOC, 500: _DOC})
    def retrieve(self, request, pk=None):
        logger.info(f"Received request to get question with ID: {pk}")
        question_id = self._parse_id(pk)
        if question_id is None:
            return self._invalid_id()
        try:
            question = self.get_service().get_question(question_id)
        except NotFoundError as e:
            logger.warning(str(e))
            return self._not_found()
        except StoreError as e:
            return self._store_failure(f"get question with ID {question_id}", e)
        logger.info(f"Question with ID {question_id} retrieved successfully")
        return Response(self._document(request, [question], many=False))

    @extend_schema(summary="Delete a question and its answers", parameters=[_ID], responses={204: None, 400: _DOC, 500: _DOC})
    def destroy(self, request, pk=None):
        logger.info(f"Received request to delete question with ID: {pk}")
        question_id = self._parse_id(pk)
        if question_id is None:
            return self._invalid_id()
        try:
            self.get_service().delete_question(question_id)
        except StoreError as e:
            return self._store_failure(f"delete question with ID {question_id}", e)
        logger.info(f"Question with ID {question_id} deleted successfully")
        return Response(status=status.HTTP_204_NO_CONTENT)

    # GET/POST /questions/{id}/answers
    @extend_schema(methods=["GET"], summary="List answers to a question", parameters=[_ID], responses={200: _DOC, 400: _DOC, 404: _DOC, 500: _DOC})
    @extend_schema(methods=["POST"], summary="Answer a question", parameters=[_ID], request=_DOC, responses={201: _DOC, 400: _DOC, 404: _DOC, 500: _DOC})
    @action(detail=True, methods=["get", "post"], url_path="answers")
    def answers(self, request, pk=None):
        question_id = self._parse_id(pk)
        if question_id is None:
            return self._invalid_id()
        if request.method == "POST":
            return self._create_answer(request, question_id)

        logger.info(f"Received request to list answers for question ID: {question_id}")
        try:
            question = self.get_service().get_question(question_id)
        except NotFoundError as e:
            logger.warning(str(e))
            return self._not_found()
        except StoreError as e:
            return self._store_failure(f"list answers for question ID {question_id}", e)
        ser = AnswerSerializer()
        return Response({"data": [ser.to_resource(a) for a in question.answers]})

    def _create_answer(self, request, question_id):
        logger.info(f"Received request to create answer for question ID: {question_id}")
        ser = AnswerSerializer()
        try:
            answer = ser.build(request.data)
        except ValueError as e:
            logger.warning(f"Validation failed for answer: {e}")
            return error_response(status.HTTP_400_BAD_REQUEST, str(e))
        try:
            answer = self.get_service().create_answer(question_id, answer)
        except QuestionReferenceError as e:
            if e.is_missing:
                return self._not_found()
            return self._store_failure(f"create answer for question ID {question_id}", e.__cause__)
        except StoreError as e:
            return self._store_failure(f"create answer for question ID {question_id}", e)
        logger.info(f"Answer created successfully for question ID {question_id}")
        return Response({"data": ser.to_resource(answer)}, status=status.HTTP_201_CREATED)

    # JSON:API relationships linkage endpoint:
    # GET /questions/{id}/relationships/<rel-name>
    @extend_schema(summary="Question relationship linkage", parameters=[_ID, _REL], responses={200: _DOC, 400: _DOC, 404: _DOC})
    @action(detail=True, methods=["get"], url_path=r"relationships/(?P<rel>[^/]+)")
    def relationships(self, request, pk=None, rel=None):
        return self._linkage(pk, rel, lambda service, i: service.get_question(i))


class AnswerViewSet(BaseSAViewSet):
    serializer_class = AnswerSerializer
    resource_name = "answer"

    @extend_schema(summary="Get an answer", parameters=[_ID, _INCLUDE], responses={200: _DOC, 400: _DOC, 404: _DOC, 500: _DOC})
    def retrieve(self, request, pk=None):
        logger.info(f"Received request to get answer with ID: {pk}")
        answer_id = self._parse_id(pk)
        if answer_id is None:
            return self._invalid_id()
        try:
            answer = self.get_service().get_answer(answer_id)
        except NotFoundError as e:
            logger.warning(str(e))
            return self._not_found()
        except StoreError as e:
            return self._store_failure(f"get answer with ID {answer_id}", e)
        logger.info(f"Answer with ID {answer_id} retrieved successfully")
        return Response(self._document(request, [answer], many=False))

    @extend_schema(summary="Delete an answer", parameters=[_ID], responses={204: None, 400: _DOC, 500: _DOC})
    def destroy(self, request, pk=None):
        logger.info(f"Received request to delete answer with ID: {pk}")
        answer_id = self._parse_id(pk)
        if answer_id is None:
            return self._invalid_id()
        try:
            self.get_service().delete_answer(answer_id)
        except StoreError as e:
            return self._store_failure(f"delete answer with ID {answer_id}", e)
        logger.info(f"Answer with ID {answer_id} deleted successfully")
        return Response(status=status.HTTP_204_NO_CONTENT)

    # GET /answers/{id}/relationships/<rel-name>
    @extend_schema(summary="Answer relationship linkage", parameters=[_ID, _REL], responses={200: _DOC, 400: _DOC, 404: _DOC})
    @action(detail=True, methods=["get"], url_path=r"relationships/(?P<rel>[^/]+)")
    def relationships(self, request, pk=None, rel=None):
        return self._linkage(pk, rel, lambda service, i: service.get_answer(i))
