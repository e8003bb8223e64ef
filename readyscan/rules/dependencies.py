"""Dependency risk tables: hallucinated names, deprecated packages, risky calls."""

import re
from dataclasses import dataclass, field
from types import MappingProxyType

from readyscan.models import Category, Rule, Severity

NPM = "npm"
PYPI = "pypi"


@dataclass(frozen=True)
class DeprecatedPackage:
    severity: Severity
    reason: str


# Typosquats and names AI assistants tend to invent.
HALLUCINATED_PACKAGES = MappingProxyType({
    NPM: frozenset({
        "lodahs", "expres", "expresss", "reakt", "rectjs",
        "mongoos", "mongoosee", "reqwest", "requesst", "axioos",
        "cooors", "webpack-cli2", "react-dom2", "eslint2",
        "node-fetch2", "dotenvv", "momentjs", "momnet",
        "bode", "nod", "exprees", "node-express",
        "openai-node", "gpt-api", "chatgpt-client", "openai-chat",
        "ai-helper", "llm-utils", "gpt-utils", "ai-sdk-node",
        "nextjs-auth", "react-auth-kit2", "express-auth-middleware",
        "db-connector", "mongo-helper", "sql-builder",
        "crypto-utils", "encrypt-helper", "hash-utils",
    }),
    PYPI: frozenset({
        "reqeusts", "requets", "request-python",
        "djangoo", "flaskk", "numpyy", "pandass",
        "openai-python", "python-openai", "chatgpt-api", "gpt-client",
        "langchain-utils", "llm-helper", "ai-utils",
    }),
})

DEPRECATED_PACKAGES = MappingProxyType({
    NPM: MappingProxyType({
        "request": DeprecatedPackage(Severity.MEDIUM, "Deprecated since 2020. Use axios or node-fetch instead."),
        "node-uuid": DeprecatedPackage(Severity.LOW, "Replaced by the uuid package."),
        "crypto-js": DeprecatedPackage(Severity.MEDIUM, "Use Node.js built-in crypto module instead."),
        "md5": DeprecatedPackage(Severity.HIGH, "MD5 is cryptographically broken. Use bcrypt or argon2."),
        "sha1": DeprecatedPackage(Severity.HIGH, "SHA-1 is deprecated. Use SHA-256+ instead."),
        "gulp": DeprecatedPackage(Severity.LOW, "Consider modern alternatives like esbuild or Vite."),
        "bower": DeprecatedPackage(Severity.MEDIUM, "Bower is deprecated. Use npm/yarn instead."),
        "xmlhttprequest": DeprecatedPackage(Severity.LOW, "Use fetch or axios in modern code."),
        "colors": DeprecatedPackage(Severity.HIGH, "Maintainer published malicious version. Use chalk instead."),
        "event-stream": DeprecatedPackage(Severity.HIGH, "Previously compromised. Avoid or vet carefully."),
        "flatmap-stream": DeprecatedPackage(Severity.CRITICAL, "Known malicious package."),
        "left-pad": DeprecatedPackage(Severity.LOW, "Historic supply chain incident. Use string.padStart() instead."),
        "node-ipc": DeprecatedPackage(Severity.HIGH, "Contained malicious code in versions 10.1.1 and 10.1.2."),
        "ua-parser-js": DeprecatedPackage(Severity.CRITICAL, "Was compromised with cryptominer in v0.7.29, v0.8.0, v1.0.0."),
        "coa": DeprecatedPackage(Severity.CRITICAL, "Was compromised and published with malicious code."),
        "rc": DeprecatedPackage(Severity.HIGH, "Was compromised. Audit carefully."),
    }),
    PYPI: MappingProxyType({
        "pycrypto": DeprecatedPackage(Severity.HIGH, "Unmaintained with known vulnerabilities. Use pycryptodome or cryptography."),
        "sklearn": DeprecatedPackage(Severity.MEDIUM, "Deprecated alias package. Depend on scikit-learn instead."),
        "ctx": DeprecatedPackage(Severity.CRITICAL, "Hijacked in 2022 to exfiltrate environment variables."),
        "nose": DeprecatedPackage(Severity.LOW, "Unmaintained. Use pytest instead."),
    }),
})

UNPINNED_VERSIONS = frozenset({"*", "latest"})

RISKY_CODE_REMEDIATION = (
    "Avoid using {name} in production code. It may be exploitable for Remote Code Execution."
)


def _rule(name: str, pattern: str, severity: Severity) -> Rule:
    return Rule(
        name=name,
        pattern=re.compile(pattern),
        severity=severity,
        category=Category.DEPENDENCIES,
        remediation=RISKY_CODE_REMEDIATION,
        personas=("dev", "security"),
    )


RISKY_CODE_RULES: tuple[Rule, ...] = (
    _rule("Dynamic eval usage", r"\beval\(", Severity.HIGH),
    _rule("Dynamic Function constructor", r"new Function\(", Severity.HIGH),
    _rule("Shell exec usage", r"child_process\.exec\(", Severity.MEDIUM),
    _rule("child_process import", r"""require\(['"]child_process['"]\)""", Severity.LOW),
    _rule("Shell subprocess usage", r"subprocess\.\w+\(.*shell\s*=\s*True", Severity.MEDIUM),
    _rule("os.system usage", r"\bos\.system\(", Severity.MEDIUM),
)

RISKY_CODE_EXTENSIONS = frozenset({".js", ".ts", ".jsx", ".tsx", ".py"})


@dataclass(frozen=True)
class DependencyRegistry:
    """Everything the dependency detector checks, keyed by ecosystem."""

    hallucinated: MappingProxyType = field(default_factory=lambda: HALLUCINATED_PACKAGES)
    deprecated: MappingProxyType = field(default_factory=lambda: DEPRECATED_PACKAGES)
    risky_code: tuple[Rule, ...] = RISKY_CODE_RULES


DEPENDENCY_REGISTRY = DependencyRegistry()
