import os
import unittest
from unittest.mock import patch

from backend.config import Settings, load_settings

REQUIRED_ENV = {
    "GEMINI_API_KEY": "key",
    "DATABASE_URL": "postgresql+psycopg://app@db/contact",
    "ADMIN_PASSWORD": "s3cret",
}


class LoadSettingsTests(unittest.TestCase):
    def test_reads_environment(self):
        with patch.dict(os.environ, REQUIRED_ENV, clear=True):
            settings = load_settings(env_file=None)
        self.assertEqual(settings.gemini_api_key, "key")
        self.assertEqual(settings.database_url, REQUIRED_ENV["DATABASE_URL"])
        self.assertEqual(settings.admin_password, "s3cret")

    def test_defaults(self):
        with patch.dict(os.environ, REQUIRED_ENV, clear=True):
            settings = load_settings(env_file=None)
        self.assertEqual(settings.port, 3000)
        self.assertEqual(settings.host, "0.0.0.0")
        self.assertEqual(settings.gemini_model, "gemini-1.5-pro")
        self.assertEqual(settings.api_prefix, "/api")
        self.assertGreater(settings.ai_timeout_seconds, 0)

    def test_overrides(self):
        env = dict(REQUIRED_ENV, PORT="8080", GEMINI_MODEL="gemini-2.5-flash")
        with patch.dict(os.environ, env, clear=True):
            settings = load_settings(env_file=None)
        self.assertEqual(settings.port, 8080)
        self.assertEqual(settings.gemini_model, "gemini-2.5-flash")

    def test_all_missing_exits(self):
        with patch.dict(os.environ, {}, clear=True):
            with self.assertLogs("backend.config", level="CRITICAL") as logs:
                with self.assertRaises(SystemExit) as ctx:
                    load_settings(env_file=None)
        self.assertEqual(ctx.exception.code, 1)
        output = "\n".join(logs.output)
        for name in REQUIRED_ENV:
            self.assertIn(name, output)

    def test_each_missing_or_empty_value_exits(self):
        for name in REQUIRED_ENV:
            for value in (None, ""):
                with self.subTest(name=name, value=value):
                    env = dict(REQUIRED_ENV)
                    if value is None:
                        del env[name]
                    else:
                        env[name] = value
                    with patch.dict(os.environ, env, clear=True):
                        with self.assertLogs("backend.config", level="CRITICAL") as logs:
                            with self.assertRaises(SystemExit) as ctx:
                                load_settings(env_file=None)
                    self.assertEqual(ctx.exception.code, 1)
                    output = "\n".join(logs.output)
                    self.assertIn(name, output)
                    for other in set(REQUIRED_ENV) - {name}:
                        self.assertNotIn(other, output)

    def test_settings_accepts_explicit_values(self):
        settings = Settings(
            _env_file=None,
            gemini_api_key="k",
            database_url="sqlite://",
            admin_password="p",
        )
        self.assertEqual(settings.admin_password, "p")


if __name__ == "__main__":
    unittest.main()
