"""Built-in pattern registries, one per detector category."""

from readyscan.models import Category, Rule
from readyscan.rules.dependencies import DEPENDENCY_REGISTRY, DependencyRegistry
from readyscan.rules.pii import PII_PRESENCE_RULES, PII_RULES
from readyscan.rules.prompt_injection import INJECTION_RULES
from readyscan.rules.secrets import SECRET_RULES, build_custom_rules

LINE_RULES: dict[Category, tuple[Rule, ...]] = {
    Category.SECRETS: SECRET_RULES,
    Category.DEPENDENCIES: DEPENDENCY_REGISTRY.risky_code,
    Category.PII: PII_RULES,
    Category.PROMPT_INJECTION: INJECTION_RULES,
}

__all__ = [
    "DEPENDENCY_REGISTRY",
    "DependencyRegistry",
    "INJECTION_RULES",
    "LINE_RULES",
    "PII_PRESENCE_RULES",
    "PII_RULES",
    "SECRET_RULES",
    "build_custom_rules",
]
