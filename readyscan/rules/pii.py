"""PII exposure and GDPR / SOC 2 compliance rules."""

import re

from readyscan.models import Category, PresenceRule, Rule, Severity

_PERSONAS = ("security", "compliance")


def _rule(
    name: str,
    pattern: str,
    severity: Severity,
    remediation: str,
    gdpr: bool,
    soc2: bool,
    flags: int = 0,
) -> Rule:
    return Rule(
        name=name,
        pattern=re.compile(pattern, flags),
        severity=severity,
        category=Category.PII,
        remediation=remediation,
        gdpr=gdpr,
        soc2=soc2,
        personas=_PERSONAS,
    )


PII_RULES: tuple[Rule, ...] = (
    _rule(
        "Email Address (Hardcoded)",
        r"""['"][a-zA-Z0-9._%+\-]+@[a-zA-Z0-9.\-]+\.[a-zA-Z]{2,}['"]""",
        Severity.MEDIUM,
        "Remove hardcoded email addresses. Use placeholder variables or environment-based config.",
        gdpr=True,
        soc2=True,
    ),
    _rule(
        "Social Security Number (SSN)",
        r"\b\d{3}-\d{2}-\d{4}\b",
        Severity.CRITICAL,
        "SSNs are highly sensitive PII. Remove immediately and ensure they are never stored in code or logs.",
        gdpr=True,
        soc2=True,
    ),
    # Shape only (Visa, Mastercard, Amex, Diners, Discover, JCB); no Luhn check.
    _rule(
        "Credit Card Number",
        r"\b(?:4[0-9]{12}(?:[0-9]{3})?|5[1-5][0-9]{14}|3[47][0-9]{13}|3(?:0[0-5]|[68][0-9])[0-9]{11}"
        r"|6(?:011|5[0-9]{2})[0-9]{12}|(?:2131|1800|35\d{3})\d{11})\b",
        Severity.CRITICAL,
        "Credit card numbers must never appear in source code. Remove immediately. "
        "Use tokenized payment providers (Stripe, Braintree).",
        gdpr=True,
        soc2=True,
    ),
    _rule(
        "Phone Number (Hardcoded)",
        r"\b(?:\+?1[-.\s]?)?\(?\d{3}\)?[-.\s]?\d{3}[-.\s]?\d{4}\b",
        Severity.LOW,
        "Avoid hardcoding phone numbers in source code. Use configuration files or environment variables.",
        gdpr=True,
        soc2=False,
    ),
    # Public addresses only: RFC 1918, loopback and the broadcast/any addresses are excluded.
    _rule(
        "IP Address (Hardcoded)",
        r"\b(?!10\.|192\.168\.|172\.(?:1[6-9]|2\d|3[01])\.|127\.|0\.0\.0\.0|255\.255\.255\.255)"
        r"(?:\d{1,3}\.){3}\d{1,3}\b",
        Severity.LOW,
        "Avoid hardcoding external IP addresses. Use DNS names or environment config.",
        gdpr=False,
        soc2=True,
    ),
    _rule(
        "Passport Number",
        r"""passport[_\-\s]*(?:no|number|num)\s*[=:]\s*['"]?[A-Z]{1,2}[0-9]{6,9}['"]?""",
        Severity.CRITICAL,
        "Passport numbers are sensitive government ID. Remove from code and ensure encrypted storage.",
        gdpr=True,
        soc2=False,
        flags=re.IGNORECASE,
    ),
    _rule(
        "Missing Data Encryption",
        r"http://(?!localhost|127\.0\.0\.1)",
        Severity.HIGH,
        "Using HTTP (not HTTPS) for external requests violates GDPR data security requirements "
        "(Article 32). Use HTTPS.",
        gdpr=True,
        soc2=True,
    ),
    _rule(
        "User Data Logged",
        r"(?:console\.(?:log|info|debug)|\bprint|logging\.(?:debug|info|warning)|logger\.(?:debug|info|warning))"
        r"\([^)]*(?:user|email|password|phone|address|ssn|dob)[^)]*\)",
        Severity.HIGH,
        "Logging PII data violates GDPR and SOC2. Remove PII from logs or use a redaction library.",
        gdpr=True,
        soc2=True,
        flags=re.IGNORECASE,
    ),
    _rule(
        "No Cookie Consent Check",
        r"^(?!.*consent).*(?:document\.cookie\s*=|\bres\.cookie\(|\.set_cookie\()",
        Severity.MEDIUM,
        "Setting cookies without consent check violates GDPR. Implement a cookie consent banner "
        "and only set non-essential cookies after consent.",
        gdpr=True,
        soc2=False,
        flags=re.IGNORECASE,
    ),
)

PII_PRESENCE_RULES: tuple[PresenceRule, ...] = (
    PresenceRule(
        name="Missing .env.example",
        severity=Severity.MEDIUM,
        category=Category.PII,
        remediation="Add a .env.example file documenting all required environment variables "
        "(without real values). This is required for SOC2 documentation.",
        file=".env.example",
        trigger=re.compile(r"process\.env\b|os\.environ\b|os\.getenv\(|\bgetenv\(|\bENV\["),
        trigger_files=(".env",),
        satisfied_by_files=(".env.example",),
        gdpr=True,
        soc2=True,
        personas=("dev", "compliance"),
    ),
    PresenceRule(
        name="Missing Privacy Policy",
        severity=Severity.MEDIUM,
        category=Category.PII,
        remediation="Ensure a Privacy Policy exists and is linked. Data collection must be "
        "disclosed under GDPR Article 13.",
        file="PRIVACY.md",
        trigger=re.compile(
            r"(?:collect|store|process|handle)\s+(?:user\s+)?(?:data|information|details)",
            re.IGNORECASE,
        ),
        satisfied_by=re.compile(r"privacy[\s_\-]*policy", re.IGNORECASE),
        satisfied_by_files=("PRIVACY.md", "PRIVACY_POLICY.md", "privacy-policy.md", "privacy.html"),
        snippet="No privacy policy found",
        gdpr=True,
        soc2=True,
        personas=("compliance",),
    ),
)

PII_EXTENSIONS = frozenset({
    ".js", ".ts", ".jsx", ".tsx", ".py", ".rb", ".go", ".java",
    ".php", ".cs", ".env", ".yaml", ".yml", ".json", ".html", ".txt",
})

# Docs can satisfy a presence check (a README linking the privacy policy) but
# are not scanned for PII and never trigger a check.
PRESENCE_DOC_EXTENSIONS = frozenset({".md", ".markdown", ".rst"})
