"""Hardcoded secret and credential rules."""

import re

from readyscan.models import Category, Rule, Severity

_REMEDIATION = (
    "Remove hardcoded {name} from source code. Use environment variables "
    "(process.env / os.environ) or a secrets manager (AWS Secrets Manager, HashiCorp Vault)."
)
_PERSONAS = ("dev", "security")


def _rule(name: str, pattern: str, severity: Severity, flags: int = 0) -> Rule:
    return Rule(
        name=name,
        pattern=re.compile(pattern, flags),
        severity=severity,
        category=Category.SECRETS,
        remediation=_REMEDIATION,
        personas=_PERSONAS,
    )


SECRET_RULES: tuple[Rule, ...] = (
    _rule("AWS Access Key", r"AKIA[0-9A-Z]{16}", Severity.CRITICAL),
    _rule(
        "AWS Secret Key",
        r"""aws[_\-\s]*secret[_\-\s]*access[_\-\s]*key\s*[=:]\s*['"]?[A-Za-z0-9/+=]{40}['"]?""",
        Severity.CRITICAL,
        re.IGNORECASE,
    ),
    _rule(
        "Generic API Key",
        r"""(?:api[_\-]?key|apikey)\s*[=:]\s*['"]([A-Za-z0-9\-_]{16,})['"]""",
        Severity.HIGH,
        re.IGNORECASE,
    ),
    _rule(
        "Private Key (RSA/SSH)",
        r"-----BEGIN (?:RSA |EC |OPENSSH |DSA )?PRIVATE KEY-----",
        Severity.CRITICAL,
    ),
    _rule("Google API Key", r"AIza[0-9A-Za-z\-_]{35}", Severity.CRITICAL),
    _rule("GitHub Token", r"ghp_[A-Za-z0-9]{36}", Severity.CRITICAL),
    _rule("GitHub OAuth", r"gho_[A-Za-z0-9]{36}", Severity.CRITICAL),
    _rule("Stripe Secret Key", r"sk_live_[A-Za-z0-9]{24,}", Severity.CRITICAL),
    _rule("Stripe Test Key", r"sk_test_[A-Za-z0-9]{24,}", Severity.MEDIUM),
    _rule(
        "JWT Secret",
        r"""jwt[_\-]?secret\s*[=:]\s*['"]([^'"]{8,})['"]""",
        Severity.HIGH,
        re.IGNORECASE,
    ),
    _rule(
        "Database Password",
        r"""(?:db|database|mysql|postgres|mongo)[_\-]?(?:pass(?:word)?|pwd)\s*[=:]\s*['"]([^'"]{4,})['"]""",
        Severity.CRITICAL,
        re.IGNORECASE,
    ),
    # Interpolated values like "${DB_PASS}" are references, not secrets.
    _rule(
        "Hardcoded Password",
        r"""(?:password|passwd|pwd)\s*[=:]\s*['"](?!.*\$\{)([^'"]{4,})['"]""",
        Severity.HIGH,
        re.IGNORECASE,
    ),
    _rule("OpenAI API Key", r"sk-[A-Za-z0-9]{48}", Severity.CRITICAL),
    _rule("Slack Token", r"xox[baprs]-[A-Za-z0-9\-]{10,}", Severity.HIGH),
    _rule("SendGrid API Key", r"SG\.[A-Za-z0-9\-_]{22}\.[A-Za-z0-9\-_]{43}", Severity.HIGH),
    _rule(
        "Twilio Auth Token",
        r"""(?:twilio|auth[_\-]?token)\s*[=:]\s*['"]([a-f0-9]{32})['"]""",
        Severity.HIGH,
        re.IGNORECASE,
    ),
    _rule(
        "Bearer Token Hardcoded",
        r"""Authorization\s*:\s*['"]?Bearer\s+[A-Za-z0-9\-_.~+/]+=*""",
        Severity.HIGH,
    ),
)

# Text-like files worth reading for credentials.
SECRET_EXTENSIONS = frozenset({
    ".js", ".ts", ".jsx", ".tsx", ".py", ".rb", ".go", ".java",
    ".php", ".cs", ".cpp", ".c", ".sh", ".bash", ".env", ".yaml",
    ".yml", ".json", ".toml", ".ini", ".conf", ".config", ".xml",
    ".properties", ".tf", ".tfvars",
})


def build_custom_rules(patterns: list[dict]) -> tuple[Rule, ...]:
    """Turn validated ``custom_secret_patterns`` config entries into rules."""
    rules = []
    for entry in patterns:
        rules.append(
            Rule(
                name=entry["name"],
                pattern=re.compile(entry["pattern"]),
                severity=Severity(entry.get("severity", "HIGH")),
                category=Category.SECRETS,
                remediation=entry.get("remediation", _REMEDIATION),
                personas=_PERSONAS,
            )
        )
    return tuple(rules)
