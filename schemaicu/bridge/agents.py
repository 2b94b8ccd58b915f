"""Agent types, their endpoint paths, and accepted signature algorithms."""

from enum import Enum


class AgentType(str, Enum):
    CODE_GENERATOR = "code-generator"
    CODE_IMPROVER = "code-improver"
    SCHEMA_GENERATOR = "schema-generator"
    TERMINAL = "terminal"
    DIFF_IMPROVER = "diff-improver"
    BOX_DESIGNER = "box-designer"
    PROJECT_PLANNER = "project-planner"
    PROMPT_IMPROVER = "prompt-improver"
    TOOL_CHOICE = "tool-choice"
    GITHUB = "github"
    SUMMARY = "summary"
    EMAIL = "email"

    @classmethod
    def parse(cls, value: "str | AgentType") -> "AgentType | None":
        """Return the matching AgentType, or None for an unknown agent type string."""
        if isinstance(value, AgentType):
            return value
        try:
            return cls(value)
        except ValueError:
            return None


ENDPOINT_PATHS: dict[AgentType, str] = {
    AgentType.CODE_GENERATOR: "code/generate",
    AgentType.CODE_IMPROVER: "code/improve",
    AgentType.SCHEMA_GENERATOR: "schema/generate",
    AgentType.TERMINAL: "terminal",
    AgentType.DIFF_IMPROVER: "diff/improve",
    AgentType.BOX_DESIGNER: "box/design",
    AgentType.PROJECT_PLANNER: "project/plan",
    AgentType.PROMPT_IMPROVER: "prompt/improve",
    AgentType.TOOL_CHOICE: "tool/choice",
    AgentType.GITHUB: "github",
    AgentType.SUMMARY: "summary",
    AgentType.EMAIL: "email",
}

# Agents whose answers are expected to carry a code payload
CODE_AGENT_TYPES = frozenset(
    {AgentType.CODE_GENERATOR, AgentType.CODE_IMPROVER, AgentType.SCHEMA_GENERATOR}
)


def resolve_endpoint_path(agent_type: "str | AgentType") -> str:
    """Map an agent type to its API path. Unknown types are used as the path unchanged."""
    parsed = AgentType.parse(agent_type)
    if parsed is None:
        return str(agent_type)
    return ENDPOINT_PATHS[parsed]


class SignatureAlgorithm(str, Enum):
    ECDSA = "ecdsa"
    ML_DSA_65 = "ml-dsa-65"
    ML_DSA_87 = "ml-dsa-87"
    PQ = "pq"


POST_QUANTUM_ALGORITHMS = frozenset(
    {SignatureAlgorithm.ML_DSA_65, SignatureAlgorithm.ML_DSA_87, SignatureAlgorithm.PQ}
)


def normalize_signature_algorithm(
    algorithm: "str | SignatureAlgorithm | None",
) -> SignatureAlgorithm | None:
    """Validate a signature algorithm name (case-insensitive).

    ``None`` means "let the server pick", which is ECDSA.

    Raises:
        ValueError: If the algorithm is not one the API accepts
    """
    if algorithm is None:
        return None
    if isinstance(algorithm, SignatureAlgorithm):
        return algorithm
    try:
        return SignatureAlgorithm(algorithm.lower())
    except ValueError:
        valid = ", ".join(a.value for a in SignatureAlgorithm)
        raise ValueError(
            f"Invalid signature algorithm {algorithm!r}. Use one of: {valid}"
        ) from None


def resolve_signature_algorithm(algorithm: "str | SignatureAlgorithm | None") -> SignatureAlgorithm:
    """Resolve to the concrete algorithm the server will sign with (``pq`` means ML-DSA-87)."""
    normalized = normalize_signature_algorithm(algorithm)
    if normalized is None:
        return SignatureAlgorithm.ECDSA
    if normalized is SignatureAlgorithm.PQ:
        return SignatureAlgorithm.ML_DSA_87
    return normalized
