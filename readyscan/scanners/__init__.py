"""Scanner registry for readyscan."""

from readyscan.scanners.base import BaseScanner
from readyscan.scanners.dependencies import DependencyScanner
from readyscan.scanners.pii import PIIScanner
from readyscan.scanners.prompt_injection import PromptInjectionScanner
from readyscan.scanners.secrets import SecretScanner

SCANNERS: dict[str, type[BaseScanner]] = {
    "secrets": SecretScanner,
    "dependencies": DependencyScanner,
    "pii": PIIScanner,
    "prompt-injection": PromptInjectionScanner,
}

__all__ = [
    "BaseScanner",
    "SecretScanner",
    "DependencyScanner",
    "PIIScanner",
    "PromptInjectionScanner",
    "SCANNERS",
]
