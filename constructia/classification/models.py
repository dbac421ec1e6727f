from dataclasses import dataclass, field

CATEGORIES = (
    "PRL",
    "APTITUD_MEDICA",
    "DNI",
    "ALTA_SS",
    "CONTRATO",
    "SEGURO_RC",
    "REA",
    "FORMACION_PRL",
    "EVAL_RIESGOS",
    "CERT_MAQUINARIA",
    "PLAN_SEGURIDAD",
    "OTROS",
)
FALLBACK_CATEGORY = "OTROS"

ENTITY_TYPES = ("empresa", "trabajador", "maquinaria", "obra")
FALLBACK_ENTITY_TYPE = "obra"


@dataclass(frozen=True)
class ExtractedFields:
    """Fields a construction compliance document may carry. Dates are YYYY-MM-DD."""

    id_number: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    company: str | None = None
    rea_number: str | None = None
    policy_number: str | None = None
    issue_date: str | None = None
    expiry_date: str | None = None
    prl_course_level: str | None = None
    machine_serial: str | None = None
    text_matches: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class ClassificationResult:
    """Output of the classification step. confidence is on a 0-100 scale."""

    category: str
    entity_type: str
    confidence: int
    fields: ExtractedFields = field(default_factory=ExtractedFields)
    field_confidence: dict[str, float] = field(default_factory=dict)
