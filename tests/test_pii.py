"""Tests for the PII / compliance scanner."""

import pytest

from readyscan.models import Severity
from readyscan.scanners.pii import PIIScanner


def _names(result):
    return [i.name for i in result.issues]


class TestPIIPatterns:
    @pytest.mark.parametrize(
        "line, expected",
        [
            ('ADMIN = "jane.doe@example.com"', "Email Address (Hardcoded)"),
            ('ssn = "123-45-6789"', "Social Security Number (SSN)"),
            ("card = '4111111111111111'", "Credit Card Number"),
            ('support = "+1 415-555-0132"', "Phone Number (Hardcoded)"),
            ('HOST = "8.8.8.8"', "IP Address (Hardcoded)"),
            ('passport_number = "X12345678"', "Passport Number"),
            ('URL = "http://api.example.com/v1"', "Missing Data Encryption"),
            ("console.log('user email', user.email)", "User Data Logged"),
            ("document.cookie = 'tracking=1'", "No Cookie Consent Check"),
        ],
    )
    def test_detects(self, tmp_dir_with_files, line, expected):
        root = tmp_dir_with_files({"app.js": line + "\n"})
        result = PIIScanner().scan(str(root))
        assert expected in _names(result)

    @pytest.mark.parametrize(
        "line",
        [
            'HOST = "192.168.1.10"',
            'HOST = "10.0.0.5"',
            'HOST = "172.16.4.2"',
            'HOST = "127.0.0.1"',
        ],
    )
    def test_private_ips_are_ignored(self, tmp_dir_with_files, line):
        root = tmp_dir_with_files({"settings.py": line + "\n"})
        result = PIIScanner().scan(str(root))
        assert "IP Address (Hardcoded)" not in _names(result)

    def test_localhost_http_is_allowed(self, tmp_dir_with_files):
        root = tmp_dir_with_files({"dev.py": 'URL = "http://localhost:3000"\n'})
        result = PIIScanner().scan(str(root))
        assert "Missing Data Encryption" not in _names(result)

    def test_cookie_behind_consent_gate(self, tmp_dir_with_files):
        root = tmp_dir_with_files({
            "cookies.js": "if (hasConsent) { document.cookie = 'consent_ok=1'; }\n",
        })
        result = PIIScanner().scan(str(root))
        assert "No Cookie Consent Check" not in _names(result)

    def test_one_issue_per_line_and_rule(self, tmp_dir_with_files):
        root = tmp_dir_with_files({
            "team.py": 'TEAM = ["a@example.com", "b@example.com"]\n',
        })
        result = PIIScanner().scan(str(root))
        assert _names(result).count("Email Address (Hardcoded)") == 1

    def test_compliance_flags_and_counts(self, tmp_dir_with_files):
        root = tmp_dir_with_files({
            "app.py": 'HOST = "8.8.8.8"\nADMIN = "ops@example.com"\n',
        })
        result = PIIScanner().scan(str(root))
        ip = next(i for i in result.issues if i.name == "IP Address (Hardcoded)")
        assert ip.gdpr is False and ip.soc2 is True
        assert result.extras() == {"gdprIssues": 1, "soc2Issues": 2}

    def test_skips_unlisted_extensions(self, tmp_dir_with_files):
        root = tmp_dir_with_files({"README.md": "Contact: jane.doe@example.com 123-45-6789\n"})
        result = PIIScanner().scan(str(root))
        assert result.count == 0


class TestPresenceChecks:
    def test_env_usage_without_example_file(self, tmp_dir_with_files):
        root = tmp_dir_with_files({
            "app.py": 'import os\nKEY = os.environ["API_KEY"]\nDEBUG = os.getenv("DEBUG")\n',
        })
        result = PIIScanner().scan(str(root))
        missing = [i for i in result.issues if i.name == "Missing .env.example"]
        assert len(missing) == 1
        assert missing[0].line is None
        assert missing[0].file == ".env.example"
        assert missing[0].severity == Severity.MEDIUM
        assert missing[0].persona == ("dev", "compliance")

    def test_env_file_triggers_check(self, tmp_dir_with_files):
        root = tmp_dir_with_files({".env": "DEBUG=1\n", "main.go": "package main\n"})
        result = PIIScanner().scan(str(root))
        assert "Missing .env.example" in _names(result)

    def test_env_example_present(self, tmp_dir_with_files):
        root = tmp_dir_with_files({
            "server.js": "const port = process.env.PORT;\n",
            ".env.example": "PORT=\n",
        })
        result = PIIScanner().scan(str(root))
        assert "Missing .env.example" not in _names(result)

    def test_no_env_usage_no_check(self, tmp_dir_with_files):
        root = tmp_dir_with_files({"app.py": "print('hello')\n"})
        result = PIIScanner().scan(str(root))
        assert result.count == 0

    def test_privacy_policy_missing(self, tmp_dir_with_files):
        root = tmp_dir_with_files({
            "signup.py": "# We collect user data to personalise results\n",
            "billing.py": "# store information about invoices\n",
        })
        result = PIIScanner().scan(str(root))
        assert _names(result).count("Missing Privacy Policy") == 1

    def test_privacy_policy_mentioned(self, tmp_dir_with_files):
        root = tmp_dir_with_files({
            "signup.py": "# We collect user data as described in the privacy policy\n",
        })
        result = PIIScanner().scan(str(root))
        assert "Missing Privacy Policy" not in _names(result)

    def test_privacy_policy_file(self, tmp_dir_with_files):
        root = tmp_dir_with_files({
            "signup.py": "# We collect user data\n",
            "PRIVACY.md": "# Privacy\n",
        })
        result = PIIScanner().scan(str(root))
        assert "Missing Privacy Policy" not in _names(result)

    def test_privacy_policy_linked_from_readme(self, tmp_dir_with_files):
        root = tmp_dir_with_files({
            "signup.py": "# We collect user data\n",
            "README.md": "See our [Privacy Policy](https://example.com/privacy).\n",
        })
        result = PIIScanner().scan(str(root))
        assert "Missing Privacy Policy" not in _names(result)

    def test_docs_do_not_trigger_checks(self, tmp_dir_with_files):
        root = tmp_dir_with_files({
            "README.md": "We collect user data. Configure it with process.env.API_URL.\n",
        })
        result = PIIScanner().scan(str(root))
        assert result.count == 0

    def test_empty_tree(self, tmp_path):
        result = PIIScanner().scan(str(tmp_path))
        assert result.count == 0
