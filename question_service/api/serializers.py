import uuid
from datetime import date, datetime
from typing import Any, Dict, List

from question_service.lib.models import Answer, Question

TEXT_MIN_LENGTH = 3
TEXT_MAX_LENGTH = 500


def _to_primitive(val):
    if isinstance(val, (datetime, date)):
        return val.isoformat()
    if isinstance(val, uuid.UUID):
        return str(val)
    return val


def _pluralize_type(t: str) -> str:
    if t.endswith("s"):
        return t + "es"
    return t + "s"


def _resource_base_path(t: str) -> str:
    # Assumes the API is mounted at /api/v1/
    return f"/api/v1/{_pluralize_type(t)}"


def validate_text(value, field="text"):
    """Enforce the 3..500 character bound shared by questions and answers."""
    if value is None:
        raise ValueError(f"'{field}' is required")
    if not isinstance(value, str):
        raise ValueError(f"'{field}' must be a string")
    if not value.strip():
        raise ValueError(f"'{field}' must not be blank")
    if len(value) < TEXT_MIN_LENGTH:
        raise ValueError(f"'{field}' must be at least {TEXT_MIN_LENGTH} characters")
    if len(value) > TEXT_MAX_LENGTH:
        raise ValueError(f"'{field}' must be at most {TEXT_MAX_LENGTH} characters")
    return value


class BaseSASerializer:
    type: str
    model: Any
    attributes: List[str] = []
    # Attributes a client may send; everything else in the payload is ignored
    writable_attributes: List[str] = []
    relationships: Dict[str, Dict[str, Any]] = {}
    relationship_fks: Dict[str, str] = {}

    def accepted_types(self):
        return {self.type, _pluralize_type(self.type)}

    def to_resource(self, obj) -> Dict[str, Any]:
        res = {
            "type": _pluralize_type(self.type),
            "id": str(obj.id),
            "attributes": {k: _to_primitive(getattr(obj, k)) for k in self.attributes},
        }
        # JSON:API resource self link
        res["links"] = {"self": f"{_resource_base_path(self.type)}/{obj.id}"}
        if self.relationships:
            rel_out = {}
            for rel_name, cfg in self.relationships.items():
                rel_type = cfg["type"]
                uselist = cfg.get("uselist", True)
                links = {
                    "self": f"{_resource_base_path(self.type)}/{obj.id}/relationships/{rel_name}",
                }
                if uselist:
                    target = getattr(obj, cfg["attr"], None)
                    data = [
                        {"type": _pluralize_type(rel_type), "id": str(i.id)}
                        for i in (target or [])
                    ]
                    links["related"] = f"{_resource_base_path(self.type)}/{obj.id}/{rel_name}"
                else:
                    # Read the FK column so serializing never triggers a lazy load
                    target_id = getattr(obj, self.relationship_fks[rel_name], None)
                    data = (
                        {"type": _pluralize_type(rel_type), "id": str(target_id)}
                        if target_id is not None
                        else None
                    )
                    if target_id is not None:
                        links["related"] = f"{_resource_base_path(rel_type)}/{target_id}"
                rel_out[rel_name] = {"data": data, "links": links}
            res["relationships"] = rel_out
        return res

    def get_related(self, obj, rel_name):
        cfg = self.relationships.get(rel_name)
        if not cfg:
            return None, []
        target = getattr(obj, cfg["attr"], None)
        if target is None:
            return cfg["type"], []
        items = list(target) if cfg.get("uselist", True) else [target]
        return cfg["type"], items

    def parse_payload(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        """Extract writable attributes from a JSON:API document or plain JSON."""
        if not isinstance(payload, dict):
            raise ValueError("Request body must be a JSON object")
        if "data" in payload:
            data = payload["data"]
            if not isinstance(data, dict):
                raise ValueError("JSON:API 'data' must be an object")
            expected = self.accepted_types()
            if data.get("type") not in expected:
                exp_str = "', '".join(sorted(expected))
                raise ValueError(f"JSON:API type mismatch: expected one of '{exp_str}'")
            attrs_in = data.get("attributes", {}) or {}
            if not isinstance(attrs_in, dict):
                raise ValueError("JSON:API 'attributes' must be an object")
        else:
            attrs_in = payload

        out: Dict[str, Any] = {}
        for k in self.writable_attributes:
            if k in attrs_in:
                out[k] = attrs_in[k]
        self.validate(out)
        return out

    def validate(self, attrs: Dict[str, Any]) -> None:
        pass

    def build(self, payload: Dict[str, Any]):
        """Parse, validate and return an unsaved model instance."""
        return self.model(**self.parse_payload(payload))


class QuestionSerializer(BaseSASerializer):
    type = "question"
    model = Question
    attributes = ["text", "created_at"]
    writable_attributes = ["text"]
    relationships = {
        "answers": {"attr": "answers", "type": "answer", "uselist": True},
    }

    def validate(self, attrs):
        attrs["text"] = validate_text(attrs.get("text"))


class AnswerSerializer(BaseSASerializer):
    type = "answer"
    model = Answer
    attributes = ["user_id", "text", "created_at"]
    # user_id and question_id are assigned server-side and never read from input
    writable_attributes = ["text"]
    relationships = {
        "question": {"attr": "question", "type": "question", "uselist": False},
    }
    relationship_fks = {"question": "question_id"}

    def validate(self, attrs):
        attrs["text"] = validate_text(attrs.get("text"))


TYPE_TO_SERIALIZER = {
    "question": QuestionSerializer,
    "answer": AnswerSerializer,
}
